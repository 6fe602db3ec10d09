"""
Helper dei form Streamlit che non dipendono da Streamlit:
valori iniziali per la modifica, limiti del date_input, chiave della tabella.

Lo stato passato alle funzioni è st.session_state (o un dict nei test).
"""

import logging
from datetime import date
from typing import MutableMapping, Tuple

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from config import EURO_FIELDS, NUMERIC_FIELDS, FORM_DATE_MIN
from core.models import DailyRecord
from core.numbers import format_euro_for_input, format_plain_number

logger = logging.getLogger("motorista.form")

TABLE_KEY = "tabela_registos"


def to_form_date(value) -> date:
    """'YYYY-MM-DD' → date; data non valida → oggi."""
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value))
    except ValueError:
        logger.warning("Data non valida nel registo: %r, uso oggi", value)
        return date.today()


def date_input_bounds(value: date) -> Tuple[date, date]:
    """
    min_value / max_value per st.date_input. Di default Streamlit accetta
    solo ±10 anni da oggi: un registo più vecchio farebbe esplodere il widget.
    """
    today = date.today()
    min_value = min(FORM_DATE_MIN, value)
    max_value = max(date(today.year + 1, 12, 31), value)
    return min_value, max_value


def record_to_draft(record: DailyRecord) -> dict:
    """Registo esistente → valori del form di modifica (€ già formattati)."""
    draft = {"date": record.date, "notes": record.notes}
    for field in NUMERIC_FIELDS:
        value = getattr(record, field)
        if field in EURO_FIELDS:
            draft[field] = format_euro_for_input(value)
        else:
            draft[field] = "" if value is None else format_plain_number(value)
    return draft


def table_key(state: MutableMapping) -> str:
    """Chiave corrente dello st.dataframe (cambia quando la selezione va azzerata)."""
    return f"{TABLE_KEY}_{state.get('table_gen', 0)}"


def reset_table_selection(state: MutableMapping) -> str:
    """
    La selezione della tabella è per posizione: dopo filtri o cancellazioni
    la stessa riga indicherebbe un altro registo. Nuova chiave = nessuna selezione.
    """
    state["table_gen"] = state.get("table_gen", 0) + 1
    return table_key(state)
