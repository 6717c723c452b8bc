"""In-memory variety store — the authoritative collection of variety records."""

from __future__ import annotations

import copy
import threading
import uuid
from collections.abc import Iterable, Mapping
from datetime import date, timedelta
from typing import Any

import structlog

from varietytracker.models.variety import (
	ESTIMATED_HARVEST_DATE,
	EXPECTED_HARVEST_DAYS,
	ID_FIELD,
	SOWING_DATE,
	Variety,
)

logger = structlog.get_logger("varietytracker.store")


class VarietyNotFoundError(LookupError):
	"""Raised when a variety id is not present in the store."""

	def __init__(self, variety_id: str):
		super().__init__("Variety not found")
		self.variety_id = variety_id


class VarietyStore:
	"""Owns the variety collection; every read and mutation passes through here.

	Each operation holds the store lock for its whole duration, so readers never
	see a partially merged record. Records handed out are deep copies.
	"""

	def __init__(self) -> None:
		self._records: dict[str, Variety] = {}
		self._issued_ids: set[str] = set()
		self._lock = threading.Lock()

	def __len__(self) -> int:
		with self._lock:
			return len(self._records)

	def __contains__(self, variety_id: object) -> bool:
		with self._lock:
			return variety_id in self._records

	def create(self, fields: Mapping[str, Any]) -> Variety:
		record = {key: value for key, value in fields.items() if key != ID_FIELD}
		self._derive_harvest_date(record)
		with self._lock:
			variety_id = self._new_id()
			stored = {ID_FIELD: variety_id, **copy.deepcopy(record)}
			self._records[variety_id] = stored
			result = copy.deepcopy(stored)
		logger.info("variety_created", variety_id=variety_id)
		return result

	def get(self, variety_id: str) -> Variety:
		with self._lock:
			return copy.deepcopy(self._require(variety_id))

	def list(self) -> list[Variety]:
		with self._lock:
			return [copy.deepcopy(record) for record in self._records.values()]

	def update(self, variety_id: str, fields: Mapping[str, Any]) -> Variety:
		changes = {key: copy.deepcopy(value) for key, value in fields.items() if key != ID_FIELD}
		with self._lock:
			record = self._require(variety_id)
			record.update(changes)
			result = copy.deepcopy(record)
		logger.info("variety_updated", variety_id=variety_id, fields=sorted(changes))
		return result

	def delete(self, variety_id: str) -> None:
		with self._lock:
			self._require(variety_id)
			del self._records[variety_id]
		logger.info("variety_deleted", variety_id=variety_id)

	def seed(self, records: Iterable[Mapping[str, Any]]) -> list[Variety]:
		return [self.create(record) for record in records]

	def _require(self, variety_id: str) -> Variety:
		record = self._records.get(variety_id)
		if record is None:
			raise VarietyNotFoundError(variety_id)
		return record

	def _new_id(self) -> str:
		# ids of deleted records stay reserved
		while True:
			variety_id = str(uuid.uuid4())
			if variety_id not in self._issued_ids:
				self._issued_ids.add(variety_id)
				return variety_id

	@staticmethod
	def _derive_harvest_date(record: Variety) -> None:
		if record.get(ESTIMATED_HARVEST_DATE) is not None:
			return
		sowing = record.get(SOWING_DATE)
		days = record.get(EXPECTED_HARVEST_DAYS)
		if not isinstance(sowing, str) or isinstance(days, bool) or not isinstance(days, int):
			return
		try:
			sown = date.fromisoformat(sowing)
		except ValueError:
			return
		try:
			record[ESTIMATED_HARVEST_DATE] = (sown + timedelta(days=days)).isoformat()
		except OverflowError:
			return
