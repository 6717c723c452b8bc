"""Structured logging for the variety service.

Every request is tagged with a request id. Requests that address a single
variety also carry its ``variety_id`` and the route name, so access lines
line up with the store's ``variety_created`` / ``variety_updated`` /
``variety_deleted`` events.
"""

from __future__ import annotations

import logging
import time
import uuid
from typing import Any

import structlog
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from varietytracker.config import LogFormat, Settings, get_settings

REQUEST_ID_HEADER = "x-request-id"


def _renderer(log_format: LogFormat) -> Any:
	if log_format == LogFormat.json:
		return structlog.processors.JSONRenderer()
	return structlog.dev.ConsoleRenderer()


def configure_structured_logging(settings: Settings | None = None) -> None:
	"""Route stdlib and structlog output through one renderer; no-op once configured."""
	if structlog.is_configured():
		return

	settings = settings or get_settings()
	log_level = getattr(logging, settings.log_level.upper(), logging.INFO)
	logging.basicConfig(
		level=log_level,
		format="%(message)s" if settings.log_format == LogFormat.json else logging.BASIC_FORMAT,
	)

	structlog.configure(
		processors=[
			structlog.contextvars.merge_contextvars,
			structlog.processors.add_log_level,
			structlog.processors.TimeStamper(fmt="iso", utc=True),
			structlog.processors.format_exc_info,
			_renderer(settings.log_format),
		],
		wrapper_class=structlog.make_filtering_bound_logger(log_level),
		logger_factory=structlog.PrintLoggerFactory(),
		cache_logger_on_first_use=True,
	)


def bind_variety(request: Request, variety_id: str) -> None:
	"""Attach a variety id to the access line of a request whose path has none (create)."""
	request.state.variety_id = variety_id


def _request_fields(request: Request) -> dict[str, Any]:
	fields: dict[str, Any] = {"method": request.method, "path": request.url.path}

	route = request.scope.get("route")
	if route is not None:
		fields["route"] = getattr(route, "name", None)

	variety_id = request.path_params.get("variety_id") or getattr(request.state, "variety_id", None)
	if variety_id is not None:
		fields["variety_id"] = variety_id
	return fields


def _elapsed_ms(start: float) -> float:
	return round((time.perf_counter() - start) * 1000.0, 2)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
	"""One access line per request, keyed by request id and variety id."""

	async def dispatch(self, request: Request, call_next):  # type: ignore[override]
		request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
		request.state.request_id = request_id
		structlog.contextvars.clear_contextvars()
		structlog.contextvars.bind_contextvars(request_id=request_id)

		logger = structlog.get_logger("varietytracker.request")
		start = time.perf_counter()
		try:
			response = await call_next(request)
		except Exception as exc:
			logger.exception(
				"http_request_failed",
				**_request_fields(request),
				duration_ms=_elapsed_ms(start),
				error=str(exc),
			)
			raise

		response.headers[REQUEST_ID_HEADER] = request_id
		logger.info(
			"http_request",
			**_request_fields(request),
			status_code=response.status_code,
			duration_ms=_elapsed_ms(start),
		)
		return response
