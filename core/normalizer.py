"""
Normalizzazione input del form → DailyRecord canonico.

Nessun calcolo automatico e nessuna correzione: si salva quello che
l'utente ha scritto, con i campi numerici convertiti in float o None.
Stessa funzione per creazione (id nuovo) e modifica (id esistente).
"""

import uuid
from datetime import date
from typing import Mapping

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from config import NUMERIC_FIELDS
from core.models import DailyRecord
from core.numbers import parse_loose_number


def new_record_id() -> str:
    return uuid.uuid4().hex


def today_iso() -> str:
    """Data locale di oggi come 'YYYY-MM-DD'."""
    return date.today().isoformat()


def empty_draft() -> dict:
    """Valori iniziali del form 'Novo registo'."""
    draft = {name: "" for name in NUMERIC_FIELDS}
    draft.update({"id": "", "date": today_iso(), "notes": ""})
    return draft


def _normalize_date(value) -> str:
    if isinstance(value, date):
        return value.isoformat()
    s = "" if value is None else str(value).strip()
    return s or today_iso()


def normalize_record(raw: Mapping) -> DailyRecord:
    """
    Converte i valori grezzi del form in un DailyRecord.
    Chiavi mancanti = campo vuoto. Nessuna validazione incrociata
    (es. kms_fim < kms_inicio viene salvato così com'è).
    """
    record_id = str(raw.get("id") or "").strip() or new_record_id()
    numbers = {name: parse_loose_number(raw.get(name)) for name in NUMERIC_FIELDS}
    notes = raw.get("notes")

    return DailyRecord(
        id=record_id,
        date=_normalize_date(raw.get("date")),
        notes="" if notes is None else str(notes).strip(),
        **numbers,
    )
