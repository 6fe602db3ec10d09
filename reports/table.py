"""
Tabella dei registos per Streamlit (st.dataframe).

Nessuna somma automatica: una riga per registo, valori già formattati
in pt-PT ("—" per i campi vuoti). L'indice del DataFrame è l'id.
"""

import pandas as pd
from typing import List

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from config import FIELD_LABELS, EURO_FIELDS, EMPTY_PLACEHOLDER
from core.models import DailyRecord
from core.numbers import format_for_display, PLAIN, CURRENCY


def _cell(record: DailyRecord, field: str) -> str:
    if field == "date":
        return record.date
    if field == "notes":
        return record.notes or EMPTY_PLACEHOLDER
    if field == "distance":
        # senza letture né override non c'è nulla da mostrare
        if record.distance_total is None and (record.odometer_start is None or record.odometer_end is None):
            return EMPTY_PLACEHOLDER
        return format_for_display(record.distance, PLAIN)
    kind = CURRENCY if field in EURO_FIELDS else PLAIN
    return format_for_display(getattr(record, field), kind)


def build_records_df(records: List[DailyRecord]) -> pd.DataFrame:
    """Una riga per registo, colonne = FIELD_LABELS nell'ordine di config."""
    columns = list(FIELD_LABELS.values())
    if not records:
        return pd.DataFrame(columns=columns)

    rows = []
    for r in records:
        rows.append({label: _cell(r, field) for field, label in FIELD_LABELS.items()})

    df = pd.DataFrame(rows, columns=columns, index=[r.id for r in records])
    df.index.name = "id"
    return df
