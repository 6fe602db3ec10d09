"""
Modelli dati: DailyRecord (registo diário) e FilterCriteria (filtri lista).
"""

from dataclasses import dataclass
from typing import Optional

from core.numbers import derive_distance_total


@dataclass
class DailyRecord:
    """Un giorno di lavoro del motorista. Più record per la stessa data sono ammessi."""
    id: str                                     # identificativo opaco, mai modificato
    date: str                                   # "YYYY-MM-DD"
    odometer_start: Optional[float] = None      # km inizio giornata
    odometer_end: Optional[float] = None        # km fine giornata
    distance_total: Optional[float] = None      # km totali inseriti a mano (vince sul calcolo)
    revenue_total: Optional[float] = None       # incasso del giorno €
    fuel_liters: Optional[float] = None         # rifornimento litri
    fuel_cost: Optional[float] = None           # rifornimento €
    transfer_count: Optional[float] = None      # numero transfer
    card_payments_total: Optional[float] = None  # incassi multibanco €
    notes: str = ""

    @property
    def distance(self) -> float:
        """Km del giorno: override manuale oppure kms_fim - kms_inicio."""
        return derive_distance_total(self.odometer_start, self.odometer_end, self.distance_total)


@dataclass
class FilterCriteria:
    """Filtri della lista. Stringhe vuote = filtro disattivo."""
    query: str = ""
    date_from: str = ""     # incluso
    date_to: str = ""       # incluso
