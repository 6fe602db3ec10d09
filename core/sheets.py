"""
Google Sheets come store alternativo al file JSON locale.

Un foglio per chiave (nome foglio = STORAGE_KEY), prima riga = intestazioni
del blob (id, date, odometerStart, ...), una riga per registo.

Autenticazione via Service Account (credenziali in Streamlit secrets):
  [gcp_service_account]  → json del service account
  [google_sheets]
  spreadsheet_id = "..."

Se i secrets mancano, app.py usa JsonFileStore.
"""

import logging
from typing import List

import gspread
import streamlit as st

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from config import STORAGE_KEY, STORAGE_FIELDS
from core.models import DailyRecord
from core.storage import RecordStore, record_to_dict, record_from_dict

logger = logging.getLogger("motorista.sheets")

SHEET_COLUMNS = list(STORAGE_FIELDS.values())


def sheets_configured() -> bool:
    """True se nei secrets ci sono credenziali e id del foglio."""
    try:
        _ = st.secrets["gcp_service_account"]
        _ = st.secrets["google_sheets"]["spreadsheet_id"]
        return True
    except Exception:
        return False


@st.cache_resource
def get_gspread_client():
    """Client gspread autenticato dal service account nei secrets."""
    creds_dict = dict(st.secrets["gcp_service_account"])
    return gspread.service_account_from_dict(creds_dict)


def open_worksheet(sheet_name: str = STORAGE_KEY):
    """Apre (o crea vuoto, con intestazioni) il foglio indicato."""
    gc = get_gspread_client()
    sh = gc.open_by_key(st.secrets["google_sheets"]["spreadsheet_id"])
    try:
        return sh.worksheet(sheet_name)
    except gspread.WorksheetNotFound:
        logger.info("Foglio %s non trovato, lo creo", sheet_name)
        ws = sh.add_worksheet(title=sheet_name, rows=1000, cols=len(SHEET_COLUMNS))
        ws.append_row(SHEET_COLUMNS)
        return ws


class SheetsStore(RecordStore):
    """
    Store su Google Sheets. Gli errori API vengono propagati: una lettura
    fallita non deve diventare una lista vuota che il salvataggio
    successivo scriverebbe sopra i dati veri.
    """

    def __init__(self, worksheet=None):
        self._worksheet = worksheet

    @property
    def worksheet(self):
        if self._worksheet is None:
            self._worksheet = open_worksheet()
        return self._worksheet

    def load(self) -> List[DailyRecord]:
        rows = self.worksheet.get_all_records(expected_headers=SHEET_COLUMNS)
        records = []
        for i, row in enumerate(rows):
            # righe completamente vuote lasciate da modifiche a mano
            if not any(str(v).strip() for v in row.values()):
                continue
            records.append(record_from_dict(row, i))
        return records

    def save(self, records: List[DailyRecord]) -> None:
        values = [SHEET_COLUMNS]
        for r in records:
            d = record_to_dict(r)
            values.append([d[c] for c in SHEET_COLUMNS])

        ws = self.worksheet
        # Prima si scrive tutto con una sola update, poi si puliscono le righe
        # avanzate: se la update fallisce il foglio resta com'era
        ws.update(range_name="A1", values=values, value_input_option="RAW")
        ws.batch_clear([f"A{len(values) + 1}:Z"])
        logger.info("Salvati %d registos su Google Sheets", len(records))
