"""Variety record shape and the bundled sample collection.

Records are kept as plain JSON-compatible dicts: the store accepts bodies as
given, so a record may carry extra keys or odd-typed values.
"""

from __future__ import annotations

from typing import Any

Variety = dict[str, Any]

ID_FIELD = "id"
CROP_NAME = "cropName"
VARIETY_NAME = "varietyName"
EXPECTED_YIELD = "expectedYield"
ESTIMATED_HARVEST_DATE = "estimatedHarvestDate"
HEALTH_RATING = "healthRating"
SOWING_DATE = "sowingDate"
EXPECTED_HARVEST_DAYS = "expectedHarvestDays"

SAMPLE_VARIETIES: tuple[Variety, ...] = (
    {
        CROP_NAME: "Lettuce",
        VARIETY_NAME: "Butterhead",
        EXPECTED_YIELD: 85,
        SOWING_DATE: "2024-03-01",
        EXPECTED_HARVEST_DAYS: 60,
        ESTIMATED_HARVEST_DATE: "2024-04-30",
        HEALTH_RATING: 4,
    },
    {
        CROP_NAME: "Tomato",
        VARIETY_NAME: "Cherry",
        EXPECTED_YIELD: 92,
        SOWING_DATE: "2024-03-15",
        EXPECTED_HARVEST_DAYS: 75,
        ESTIMATED_HARVEST_DATE: "2024-05-29",
        HEALTH_RATING: 5,
    },
    {
        CROP_NAME: "Spinach",
        VARIETY_NAME: "Bloomsdale",
        EXPECTED_YIELD: 78,
        SOWING_DATE: "2024-03-10",
        EXPECTED_HARVEST_DAYS: 45,
        ESTIMATED_HARVEST_DATE: "2024-04-24",
        HEALTH_RATING: 3,
    },
)
