"""Shared pytest fixtures — fresh stores, settings and an async test client."""

from __future__ import annotations

from collections.abc import AsyncGenerator
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient

from varietytracker.config import Settings
from varietytracker.main import create_app
from varietytracker.services.variety_store import VarietyStore


def lettuce() -> dict[str, Any]:
	return {
		"cropName": "Lettuce",
		"varietyName": "Butterhead",
		"expectedYield": 85,
		"estimatedHarvestDate": "2024-04-30",
		"healthRating": 4,
	}


def tomato() -> dict[str, Any]:
	return {
		"cropName": "Tomato",
		"varietyName": "Cherry",
		"expectedYield": 92,
		"estimatedHarvestDate": "2024-05-29",
		"healthRating": 5,
	}


def spinach() -> dict[str, Any]:
	return {
		"cropName": "Spinach",
		"varietyName": "Bloomsdale",
		"expectedYield": 78,
		"estimatedHarvestDate": "2024-04-24",
		"healthRating": 3,
	}


@pytest.fixture
def store() -> VarietyStore:
	"""An empty store, rebuilt for every test."""
	return VarietyStore()


@pytest.fixture
def seeded_store(store: VarietyStore) -> VarietyStore:
	"""Store holding the Lettuce and Tomato records."""
	store.seed([lettuce(), tomato()])
	return store


@pytest.fixture
def settings() -> Settings:
	return Settings(seed_sample_data=False, strict_validation=False, log_format="console")


@pytest.fixture
def strict_settings() -> Settings:
	return Settings(seed_sample_data=False, strict_validation=True, log_format="console")


async def _client_for(app: Any) -> AsyncGenerator[AsyncClient, None]:
	transport = ASGITransport(app=app)
	async with AsyncClient(transport=transport, base_url="http://test") as test_client:
		yield test_client


@pytest.fixture
async def client(seeded_store: VarietyStore, settings: Settings) -> AsyncGenerator[AsyncClient, None]:
	"""HTTPX async client bound to an app that owns ``seeded_store``."""
	async for test_client in _client_for(create_app(store=seeded_store, settings=settings)):
		yield test_client


@pytest.fixture
async def strict_client(store: VarietyStore, strict_settings: Settings) -> AsyncGenerator[AsyncClient, None]:
	"""Client against an empty store with body validation switched on."""
	async for test_client in _client_for(create_app(store=store, settings=strict_settings)):
		yield test_client
