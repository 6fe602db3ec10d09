from __future__ import annotations

from datetime import date

from config import FORM_DATE_MIN
from core.form import date_input_bounds, record_to_draft, reset_table_selection, table_key, to_form_date
from core.models import DailyRecord


def test_old_record_date_fits_date_input() -> None:
    old = date(1995, 5, 1)
    low, high = date_input_bounds(old)
    assert low == old
    assert low <= old <= high


def test_recent_date_uses_default_bounds() -> None:
    low, high = date_input_bounds(date(2024, 1, 1))
    assert low == FORM_DATE_MIN
    assert high >= date(date.today().year + 1, 12, 31)


def test_future_date_fits_date_input() -> None:
    far = date(date.today().year + 20, 1, 1)
    assert date_input_bounds(far)[1] == far


def test_to_form_date() -> None:
    assert to_form_date("2024-02-29") == date(2024, 2, 29)
    assert to_form_date(date(2001, 1, 1)) == date(2001, 1, 1)
    assert to_form_date("ontem") == date.today()
    assert to_form_date(None) == date.today()


def test_record_to_draft_formats_for_the_form() -> None:
    record = DailyRecord(
        id="a", date="2024-01-01", odometer_start=152340.0, revenue_total=120.5, notes="aeroporto"
    )
    draft = record_to_draft(record)
    assert draft["date"] == "2024-01-01"
    assert draft["notes"] == "aeroporto"
    assert draft["odometer_start"] == "152\u00a0340"
    assert draft["revenue_total"] == "120,50 €"
    assert draft["odometer_end"] == ""
    assert draft["fuel_cost"] == ""


def test_reset_table_selection_changes_the_key() -> None:
    state = {}
    first = table_key(state)
    second = reset_table_selection(state)
    assert second != first
    assert table_key(state) == second
    assert state["table_gen"] == 1
    assert reset_table_selection(state) not in (first, second)
