"""Application settings loaded from environment variables via pydantic-settings."""

from enum import StrEnum
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class LogFormat(StrEnum):
	json = "json"
	console = "console"


class Settings(BaseSettings):
	"""Central configuration — all values sourced from env vars or .env file."""

	model_config = SettingsConfigDict(
		env_file=".env",
		env_file_encoding="utf-8",
		case_sensitive=False,
	)

	# ── Server ──────────────────────────────────────────────────────────────
	host: str = "0.0.0.0"
	port: int = 3001
	cors_allow_origins: list[str] = ["*"]

	# ── Store ───────────────────────────────────────────────────────────────
	seed_sample_data: bool = True
	strict_validation: bool = False

	# ── Observability ───────────────────────────────────────────────────────
	log_level: str = "info"
	log_format: LogFormat = LogFormat.json


@lru_cache
def get_settings() -> Settings:
	"""Singleton settings instance (cached after first call)."""
	return Settings()
