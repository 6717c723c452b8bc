"""Variety CRUD and listing routes."""

from __future__ import annotations

from typing import Any

import structlog
from fastapi import APIRouter, Body, Depends, HTTPException, Query, Request, Response, status
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError

from varietytracker.config import Settings
from varietytracker.middleware.logging import bind_variety
from varietytracker.models.enums import SortOrder
from varietytracker.schemas.variety import VarietyPageRead, normalize_create, normalize_update
from varietytracker.services.query_engine import VarietyQuery, run_query
from varietytracker.services.variety_store import VarietyNotFoundError, VarietyStore

logger = structlog.get_logger("varietytracker.routes")

router = APIRouter(prefix="/varieties", tags=["varieties"])

NOT_FOUND_MESSAGE = "Variety not found"


def get_store(request: Request) -> VarietyStore:
	return request.app.state.store


def get_app_settings(request: Request) -> Settings:
	return request.app.state.settings


def _map_error(exc: Exception) -> Exception:
	if isinstance(exc, VarietyNotFoundError):
		return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND_MESSAGE)
	if isinstance(exc, ValidationError):
		return RequestValidationError(exc.errors(include_url=False, include_context=False))
	logger.error("variety_route_failed", error=str(exc), error_type=type(exc).__name__)
	return HTTPException(
		status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
		detail="Unexpected variety store failure",
	)


@router.get("")
async def list_varieties(store: VarietyStore = Depends(get_store)) -> list[dict[str, Any]]:
	return store.list()


@router.get("/query", response_model=VarietyPageRead)
async def query_varieties(
	search: str = Query(default=""),
	health_rating: int | None = Query(default=None, ge=0, le=5),
	min_yield: float = Query(default=0, allow_inf_nan=False),
	max_yield: float = Query(default=100, allow_inf_nan=False),
	sort_by: SortOrder = Query(default=SortOrder.harvest_asc),
	page: int = Query(default=1, ge=1),
	store: VarietyStore = Depends(get_store),
) -> VarietyPageRead:
	"""Filter, sort and paginate the collection the way the dashboard does."""
	if min_yield > max_yield:
		raise HTTPException(
			status_code=422,
			detail="min_yield must not exceed max_yield",
		)

	query = VarietyQuery(
		search=search,
		health_rating=health_rating,
		min_yield=min_yield,
		max_yield=max_yield,
		sort_by=sort_by,
		page=page,
	)
	result = run_query(store.list(), query)
	return VarietyPageRead(
		items=result.items,
		total=result.total,
		page=result.page,
		page_count=result.page_count,
	)


@router.get("/{variety_id}")
async def get_variety(variety_id: str, store: VarietyStore = Depends(get_store)) -> dict[str, Any]:
	try:
		return store.get(variety_id)
	except Exception as exc:
		raise _map_error(exc) from exc


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_variety(
	request: Request,
	payload: dict[str, Any] = Body(...),
	store: VarietyStore = Depends(get_store),
	settings: Settings = Depends(get_app_settings),
) -> dict[str, Any]:
	try:
		fields = normalize_create(payload) if settings.strict_validation else payload
		created = store.create(fields)
		bind_variety(request, created["id"])
		return created
	except Exception as exc:
		raise _map_error(exc) from exc


@router.api_route("/{variety_id}", methods=["PUT", "PATCH"])
async def update_variety(
	variety_id: str,
	payload: dict[str, Any] = Body(...),
	store: VarietyStore = Depends(get_store),
	settings: Settings = Depends(get_app_settings),
) -> dict[str, Any]:
	"""Merge the body into the stored record; PUT and PATCH behave the same."""
	try:
		fields = normalize_update(payload) if settings.strict_validation else payload
		return store.update(variety_id, fields)
	except Exception as exc:
		raise _map_error(exc) from exc


@router.delete("/{variety_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def delete_variety(variety_id: str, store: VarietyStore = Depends(get_store)) -> Response:
	try:
		store.delete(variety_id)
	except Exception as exc:
		raise _map_error(exc) from exc
	return Response(status_code=status.HTTP_204_NO_CONTENT)
