"""Enum types shared by the query engine and the HTTP schemas.

Values match the sort keys the dashboard sends, so they round-trip through
query strings unchanged.
"""

from enum import StrEnum


class SortOrder(StrEnum):
    """Orderings available for a variety listing."""

    yield_asc = "yield-asc"
    yield_desc = "yield-desc"
    harvest_asc = "harvest-asc"
    harvest_desc = "harvest-desc"

    @property
    def descending(self) -> bool:
        return self in (SortOrder.yield_desc, SortOrder.harvest_desc)

    @property
    def field(self) -> str:
        if self in (SortOrder.yield_asc, SortOrder.yield_desc):
            return "expectedYield"
        return "estimatedHarvestDate"
