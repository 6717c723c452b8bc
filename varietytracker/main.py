"""FastAPI application entrypoint — app factory, lifespan, routers, middleware."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from varietytracker.config import Settings, get_settings
from varietytracker.middleware.logging import RequestLoggingMiddleware, configure_structured_logging
from varietytracker.models.variety import SAMPLE_VARIETIES
from varietytracker.routes import varieties
from varietytracker.services.variety_store import VarietyStore

logger = structlog.get_logger("varietytracker")

VERSION = "0.1.0"


async def _http_error_handler(_request: Request, exc: StarletteHTTPException) -> JSONResponse:
	return JSONResponse(
		status_code=exc.status_code,
		content={"message": exc.detail},
		headers=getattr(exc, "headers", None),
	)


async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
	logger.exception("unhandled_error", path=request.url.path, error=str(exc))
	return JSONResponse(status_code=500, content={"message": "Internal server error"})


def create_app(store: VarietyStore | None = None, settings: Settings | None = None) -> FastAPI:
	"""Build an application bound to its own store.

	Passing a store lets callers (tests, embedding code) own the collection;
	otherwise a fresh empty one is created and seeded on startup when
	``seed_sample_data`` is enabled.
	"""
	settings = settings or get_settings()
	store = store if store is not None else VarietyStore()

	@asynccontextmanager
	async def lifespan(app: FastAPI) -> AsyncIterator[None]:
		"""Startup: configure logging, seed sample varieties into an empty store."""
		configure_structured_logging(settings)
		if settings.seed_sample_data and len(store) == 0:
			store.seed(SAMPLE_VARIETIES)
		logger.info(
			"variety tracker starting",
			port=settings.port,
			varieties=len(store),
			strict_validation=settings.strict_validation,
		)
		yield
		logger.info("variety tracker shutting down")

	app = FastAPI(
		title="Crop Variety Tracker API",
		description="In-memory crop variety records with filtering, sorting and pagination.",
		version=VERSION,
		lifespan=lifespan,
		docs_url="/docs",
		redoc_url="/redoc",
	)
	app.state.store = store
	app.state.settings = settings

	# ── Middleware ──────────────────────────────────────────────────────────
	app.add_middleware(RequestLoggingMiddleware)
	app.add_middleware(
		CORSMiddleware,
		allow_origins=settings.cors_allow_origins,
		allow_credentials=True,
		allow_methods=["*"],
		allow_headers=["*"],
	)

	# ── Error rendering ─────────────────────────────────────────────────────
	app.add_exception_handler(StarletteHTTPException, _http_error_handler)
	app.add_exception_handler(Exception, _unhandled_error_handler)

	# ── Health check ────────────────────────────────────────────────────────
	@app.get("/health", tags=["system"])
	async def health_check() -> dict[str, str]:
		"""Basic health check — verifies the API process is alive."""
		return {
			"status": "ok",
			"service": "varietytracker",
			"version": VERSION,
		}

	# ── Router registration ─────────────────────────────────────────────────
	app.include_router(varieties.router, prefix="/api")
	return app


app = create_app()


def run() -> None:
	"""Console entrypoint: serve the module-level app on the configured port."""
	settings = get_settings()
	configure_structured_logging(settings)
	uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)
