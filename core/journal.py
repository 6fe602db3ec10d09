"""
Lista in memoria dei registos: inserimento/modifica, cancellazione,
ordinamento e filtri.

Le funzioni restituiscono sempre una lista nuova; DailyLog le usa e
risalva l'intera lista nello store ad ogni modifica.
"""

import logging
from typing import List, Optional

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from core.models import DailyRecord, FilterCriteria

logger = logging.getLogger("motorista.journal")


def upsert_record(records: List[DailyRecord], record: DailyRecord) -> List[DailyRecord]:
    """Sostituisce il record con lo stesso id; se nuovo lo mette in testa."""
    if any(r.id == record.id for r in records):
        return [record if r.id == record.id else r for r in records]
    return [record] + list(records)


def remove_record(records: List[DailyRecord], record_id: str) -> List[DailyRecord]:
    """Toglie il record con quell'id. Id sconosciuto → lista invariata."""
    return [r for r in records if r.id != record_id]


def sort_records(records: List[DailyRecord]) -> List[DailyRecord]:
    """Più recenti prima (confronto sulla stringa ISO, ordinamento stabile)."""
    return sorted(records, key=lambda r: str(r.date), reverse=True)


def filter_records(records: List[DailyRecord], criteria: FilterCriteria) -> List[DailyRecord]:
    """
    Filtro di sola lettura:
      - date_from / date_to inclusi (vuoti = nessun limite)
      - query cercata in "data + observações", senza maiuscole
    """
    q = (criteria.query or "").strip().lower()
    date_from = (criteria.date_from or "").strip()
    date_to = (criteria.date_to or "").strip()

    result = []
    for r in records:
        if date_from and str(r.date) < date_from:
            continue
        if date_to and str(r.date) > date_to:
            continue
        if q:
            hay = f"{r.date} {r.notes or ''}".lower()
            if q not in hay:
                continue
        result.append(r)
    return result


class DailyLog:
    """
    Collezione ordinata di DailyRecord collegata a uno store.
    Ogni modifica riscrive tutta la lista (un solo utente, nessun lock).
    """

    def __init__(self, store):
        self.store = store
        self.records: List[DailyRecord] = list(store.load())
        logger.info("Caricati %d registos", len(self.records))

    def __len__(self) -> int:
        return len(self.records)

    def get(self, record_id: str) -> Optional[DailyRecord]:
        for r in self.records:
            if r.id == record_id:
                return r
        return None

    def upsert(self, record: DailyRecord) -> DailyRecord:
        self._replace(upsert_record(self.records, record))
        return record

    def delete(self, record_id: str) -> bool:
        """True se il record c'era. Id sconosciuto: niente da salvare."""
        remaining = remove_record(self.records, record_id)
        if len(remaining) == len(self.records):
            logger.info("Cancellazione ignorata, id %s non trovato", record_id)
            return False
        self._replace(remaining)
        return True

    def visible(self, criteria: Optional[FilterCriteria] = None) -> List[DailyRecord]:
        """Lista per la tabella: ordinata per data e filtrata."""
        return filter_records(sort_records(self.records), criteria or FilterCriteria())

    def _replace(self, records: List[DailyRecord]) -> None:
        self.store.save(records)
        self.records = records
