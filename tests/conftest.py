from __future__ import annotations

import pytest

from core.models import DailyRecord
from core.storage import MemoryStore


def make_record(record_id: str, day: str, notes: str = "", **numbers) -> DailyRecord:
    return DailyRecord(id=record_id, date=day, notes=notes, **numbers)


@pytest.fixture()
def sample_records() -> list[DailyRecord]:
    return [
        make_record("a", "2024-01-01", "aeroporto", odometer_start=152340.0, odometer_end=152410.0),
        make_record("b", "2024-01-15", "hotel Lisboa", revenue_total=120.5),
        make_record("c", "2024-02-01", "portagens", fuel_liters=18.0, fuel_cost=32.4),
    ]


@pytest.fixture()
def memory_store(sample_records) -> MemoryStore:
    store = MemoryStore()
    store.save(sample_records)
    return store
