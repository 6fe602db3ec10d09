from __future__ import annotations

import json
from dataclasses import replace

import pytest

from core.journal import DailyLog, filter_records, remove_record, sort_records, upsert_record
from core.models import FilterCriteria
from core.normalizer import normalize_record
from core.storage import MemoryStore


def _ids(records) -> list[str]:
    return [r.id for r in records]


def test_upsert_new_record_goes_first(sample_records) -> None:
    new = normalize_record({"date": "2024-03-01"})
    result = upsert_record(sample_records, new)
    assert _ids(result) == [new.id, "a", "b", "c"]
    assert _ids(sample_records) == ["a", "b", "c"]


def test_upsert_existing_replaces_only_that_record(sample_records) -> None:
    edited = normalize_record({"id": "b", "date": "2024-01-16", "notes": "corrigido"})
    result = upsert_record(sample_records, edited)
    assert len(result) == len(sample_records)
    assert _ids(result) == ["a", "b", "c"]
    assert result[1] == edited
    assert result[0] is sample_records[0]
    assert result[2] is sample_records[2]


def test_remove_record(sample_records) -> None:
    result = remove_record(sample_records, "b")
    assert _ids(result) == ["a", "c"]


def test_remove_unknown_id_is_noop(sample_records) -> None:
    assert remove_record(sample_records, "zzz") == sample_records


def test_sort_records_newest_first_and_stable(sample_records) -> None:
    twin = replace(sample_records[1], id="b2")
    result = sort_records(sample_records + [twin])
    assert _ids(result) == ["c", "b", "b2", "a"]


def test_filter_by_date_range_is_inclusive(sample_records) -> None:
    result = filter_records(sample_records, FilterCriteria(date_from="2024-01-10", date_to="2024-01-31"))
    assert _ids(result) == ["b"]
    result = filter_records(sample_records, FilterCriteria(date_from="2024-01-15", date_to="2024-02-01"))
    assert _ids(result) == ["b", "c"]


def test_empty_query_returns_everything_in_range(sample_records) -> None:
    assert _ids(filter_records(sample_records, FilterCriteria())) == ["a", "b", "c"]
    assert _ids(filter_records(sample_records, FilterCriteria(query="  ", date_from="2024-01-02"))) == ["b", "c"]


def test_query_matches_notes_case_insensitive(sample_records) -> None:
    assert _ids(filter_records(sample_records, FilterCriteria(query="HOTEL"))) == ["b"]
    assert _ids(filter_records(sample_records, FilterCriteria(query="2024-02"))) == ["c"]
    assert filter_records(sample_records, FilterCriteria(query="nada")) == []


def test_daily_log_loads_from_store(memory_store) -> None:
    log = DailyLog(memory_store)
    assert len(log) == 3
    assert log.get("b").revenue_total == 120.5
    assert log.get("zzz") is None


def test_daily_log_persists_every_change(memory_store) -> None:
    log = DailyLog(memory_store)
    created = log.upsert(normalize_record({"date": "2024-03-01", "notes": "novo"}))
    assert len(DailyLog(memory_store)) == 4

    log.upsert(normalize_record({"id": created.id, "date": "2024-03-02", "notes": "editado"}))
    reloaded = DailyLog(memory_store)
    assert len(reloaded) == 4
    assert reloaded.get(created.id).notes == "editado"
    assert reloaded.get("a").odometer_start == 152340

    assert log.delete("a") is True
    assert _ids(DailyLog(memory_store).records) == [created.id, "b", "c"]


def test_daily_log_delete_unknown_id_does_not_save(memory_store) -> None:
    log = DailyLog(memory_store)
    before = memory_store.blob
    assert log.delete("zzz") is False
    assert memory_store.blob == before
    assert len(log) == 3


def test_daily_log_keeps_memory_when_save_fails(sample_records) -> None:
    class BrokenStore(MemoryStore):
        def save(self, records) -> None:
            raise OSError("disk full")

    seeded = MemoryStore()
    seeded.save(sample_records)
    log = DailyLog(BrokenStore(seeded.blob))
    with pytest.raises(OSError):
        log.delete("a")
    assert _ids(log.records) == ["a", "b", "c"]


def test_visible_sorts_then_filters(memory_store) -> None:
    log = DailyLog(memory_store)
    assert _ids(log.visible()) == ["c", "b", "a"]
    assert _ids(log.visible(FilterCriteria(date_to="2024-01-31"))) == ["b", "a"]


def test_record_without_stored_id_can_be_edited_and_deleted() -> None:
    store = MemoryStore(json.dumps([{"date": "2024-01-01", "notes": "sem id"}]))
    shown_id = DailyLog(store).records[0].id
    assert DailyLog(store).records[0].id == shown_id

    log = DailyLog(store)
    log.upsert(normalize_record({"id": shown_id, "date": "2024-01-02", "notes": "corrigido"}))
    assert len(log) == 1
    assert len(DailyLog(store)) == 1
    assert DailyLog(store).get(shown_id).notes == "corrigido"

    assert DailyLog(store).delete(shown_id) is True
    assert DailyLog(store).records == []
