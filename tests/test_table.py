from __future__ import annotations

from config import FIELD_LABELS
from core.models import DailyRecord
from reports.table import build_records_df


def test_empty_list_gives_empty_frame_with_columns() -> None:
    df = build_records_df([])
    assert df.empty
    assert list(df.columns) == list(FIELD_LABELS.values())


def test_rows_are_formatted_and_indexed_by_id(sample_records) -> None:
    df = build_records_df(sample_records)
    assert list(df.index) == ["a", "b", "c"]

    row_a = df.loc["a"]
    assert row_a["DATA"] == "2024-01-01"
    assert row_a["KMS INÍCIO"] == "152\u00a0340"
    assert row_a["KMS TOTAL"] == "70"
    assert row_a["TOTAL DIÁRIO (€)"] == "—"
    assert row_a["OBSERVAÇÕES"] == "aeroporto"

    row_b = df.loc["b"]
    assert row_b["TOTAL DIÁRIO (€)"] == "120,50 €"
    assert row_b["KMS TOTAL"] == "—"

    row_c = df.loc["c"]
    assert row_c["ABAST. (L)"] == "18"
    assert row_c["ABAST. (€)"] == "32,40 €"


def test_distance_column_shows_manual_override_and_zero() -> None:
    manual = DailyRecord(id="m", date="2024-01-01", distance_total=50.0)
    reversed_ = DailyRecord(id="r", date="2024-01-01", odometer_start=200.0, odometer_end=100.0)
    df = build_records_df([manual, reversed_])
    assert df.loc["m", "KMS TOTAL"] == "50"
    assert df.loc["r", "KMS TOTAL"] == "0"


def test_zero_is_not_placeholder() -> None:
    record = DailyRecord(id="z", date="2024-01-01", revenue_total=0.0, transfer_count=0.0)
    df = build_records_df([record])
    assert df.loc["z", "TOTAL DIÁRIO (€)"] == "0,00 €"
    assert df.loc["z", "TRANSFERS"] == "0"
    assert df.loc["z", "OBSERVAÇÕES"] == "—"
