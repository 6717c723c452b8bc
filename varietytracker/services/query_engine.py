"""Filter → sort → paginate pipeline over a variety collection.

Everything here is a pure function of (records, query); nothing is cached
between calls, so the same query over the same records always yields the same
page.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import date
from typing import Any

from varietytracker.models.enums import SortOrder
from varietytracker.models.variety import (
	CROP_NAME,
	ESTIMATED_HARVEST_DATE,
	EXPECTED_YIELD,
	HEALTH_RATING,
	VARIETY_NAME,
	Variety,
)

PAGE_SIZE = 10


@dataclass(frozen=True)
class VarietyQuery:
	search: str = ""
	health_rating: int | None = None
	min_yield: float = 0
	max_yield: float = 100
	sort_by: SortOrder = SortOrder.harvest_asc
	page: int = 1


@dataclass(frozen=True)
class QueryResult:
	items: list[Variety] = field(default_factory=list)
	total: int = 0
	page: int = 1

	@property
	def page_count(self) -> int:
		return page_count(self.total)


def page_count(total: int) -> int:
	return math.ceil(total / PAGE_SIZE)


def matches(record: Variety, query: VarietyQuery) -> bool:
	"""True when the record satisfies the search, rating and yield predicates."""
	return (
		_matches_search(record, query.search)
		and _matches_health(record, query.health_rating)
		and _matches_yield(record, query.min_yield, query.max_yield)
	)


def filter_varieties(records: Iterable[Variety], query: VarietyQuery) -> list[Variety]:
	return [record for record in records if matches(record, query)]


def sort_varieties(records: Iterable[Variety], order: SortOrder) -> list[Variety]:
	"""Stable sort on the order's key; records lacking a usable key go last."""
	keyed: list[tuple[Any, Variety]] = []
	unkeyed: list[Variety] = []
	for record in records:
		key = _sort_key(record, order)
		if key is None:
			unkeyed.append(record)
		else:
			keyed.append((key, record))

	keyed.sort(key=lambda pair: pair[0], reverse=order.descending)
	return [record for _, record in keyed] + unkeyed


def paginate(records: Sequence[Variety], page: int) -> list[Variety]:
	if page < 1:
		return []
	start = (page - 1) * PAGE_SIZE
	return list(records[start : start + PAGE_SIZE])


def run_query(records: Iterable[Variety], query: VarietyQuery) -> QueryResult:
	filtered = filter_varieties(records, query)
	ordered = sort_varieties(filtered, query.sort_by)
	return QueryResult(
		items=paginate(ordered, query.page),
		total=len(ordered),
		page=query.page,
	)


def _text(value: Any) -> str:
	return value if isinstance(value, str) else ""


def _number(value: Any) -> float | None:
	if isinstance(value, bool) or not isinstance(value, int | float):
		return None
	if math.isnan(value):
		return None
	return float(value)


def _matches_search(record: Variety, search: str) -> bool:
	if not search:
		return True
	needle = search.lower()
	return needle in _text(record.get(CROP_NAME)).lower() or needle in _text(
		record.get(VARIETY_NAME)
	).lower()


def _matches_health(record: Variety, health_rating: int | None) -> bool:
	if health_rating is None:
		return True
	return _number(record.get(HEALTH_RATING)) == health_rating


def _matches_yield(record: Variety, min_yield: float, max_yield: float) -> bool:
	expected = _number(record.get(EXPECTED_YIELD))
	if expected is None:
		return False
	return min_yield <= expected <= max_yield


def _sort_key(record: Variety, order: SortOrder) -> Any:
	value = record.get(order.field)
	if order.field == EXPECTED_YIELD:
		return _number(value)
	if not isinstance(value, str):
		return None
	try:
		return date.fromisoformat(value[:10])
	except ValueError:
		return None
