"""Pydantic request/response schemas for variety objects.

Bodies are only run through ``VarietyCreate`` / ``VarietyUpdate`` when strict
validation is switched on; by default the store keeps whatever JSON object the
client sent.
"""

from __future__ import annotations

from datetime import date
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from varietytracker.models.enums import SortOrder
from varietytracker.services.query_engine import PAGE_SIZE

# integer yields are kept as int
YieldPercent = Annotated[int, Field(ge=0, le=100)] | Annotated[float, Field(ge=0, le=100)]


class VarietyCreate(BaseModel):
	model_config = ConfigDict(extra="allow")

	cropName: str = Field(min_length=1)
	varietyName: str = Field(min_length=1)
	expectedYield: YieldPercent
	estimatedHarvestDate: date | None = None
	healthRating: int = Field(default=0, ge=0, le=5)
	sowingDate: date | None = None
	expectedHarvestDays: int | None = Field(default=None, ge=0)

	@model_validator(mode="after")
	def _harvest_date_or_schedule(self) -> VarietyCreate:
		if self.estimatedHarvestDate is None and (
			self.sowingDate is None or self.expectedHarvestDays is None
		):
			raise ValueError(
				"estimatedHarvestDate is required unless sowingDate and expectedHarvestDays are given"
			)
		return self


class VarietyUpdate(BaseModel):
	model_config = ConfigDict(extra="allow")

	cropName: str | None = Field(default=None, min_length=1)
	varietyName: str | None = Field(default=None, min_length=1)
	expectedYield: YieldPercent | None = None
	estimatedHarvestDate: date | None = None
	healthRating: int | None = Field(default=None, ge=0, le=5)
	sowingDate: date | None = None
	expectedHarvestDays: int | None = Field(default=None, ge=0)

	@field_validator(
		"cropName", "varietyName", "expectedYield", "estimatedHarvestDate", "healthRating", mode="before"
	)
	@classmethod
	def _required_fields_stay_set(cls, value: Any) -> Any:
		if value is None:
			raise ValueError("required field cannot be cleared")
		return value


class VarietyPageRead(BaseModel):
	items: list[dict[str, Any]]
	total: int
	page: int
	page_size: int = PAGE_SIZE
	page_count: int


def normalize_create(payload: dict[str, Any]) -> dict[str, Any]:
	"""Validate a create body and return it with dates rendered back to ISO text."""
	return VarietyCreate.model_validate(payload).model_dump(mode="json", exclude_none=True)


def normalize_update(payload: dict[str, Any]) -> dict[str, Any]:
	"""Validate an update body, keeping only the keys the client sent.

	Omitted fields must stay out of the result so the store still merges.
	"""
	return VarietyUpdate.model_validate(payload).model_dump(mode="json", exclude_unset=True)
