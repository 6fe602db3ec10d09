"""
Numeri "alla portoghese": parsing tollerante dell'input utente e
formattazione pt-PT per tabella e form.

Input accettati da parse_loose_number:
  "10", "10,5", "10,50", "10€", "10 €", "1.234,56", "152 340"
Se ci sono sia "." che "," → "." migliaia, "," decimale.
Se c'è solo "," → decimale.

Il valore "vuoto" è None: mai 0, mai NaN, mai una stringa.
"""

import math
import re
from typing import Optional

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from config import CURRENCY_SYMBOL, DECIMAL_SEP, THOUSANDS_SEP, EMPTY_PLACEHOLDER

PLAIN = "plain"          # km, litri, transfer
CURRENCY = "currency"    # importi in €

_NOT_NUMERIC = re.compile(r"[^0-9,.\-]")
_EURO_SUFFIX = re.compile(r"\s*" + re.escape(CURRENCY_SYMBOL) + r"\s*$")


def parse_loose_number(raw) -> Optional[float]:
    """Converte l'input dell'utente in float, oppure None se vuoto/illeggibile."""
    if raw is None:
        return None
    if isinstance(raw, (int, float)) and not isinstance(raw, bool):
        try:
            x = float(raw)
        except OverflowError:
            # int JSON enorme (es. 10**400)
            return None
        return x if math.isfinite(x) else None

    s = str(raw).strip()
    # tiene solo cifre, virgola, punto, meno (via €, spazi, unità)
    s = _NOT_NUMERIC.sub("", s)
    if not s:
        return None

    if "," in s and "." in s:
        s = s.replace(".", "").replace(",", ".", 1)
    else:
        s = s.replace(",", ".", 1)

    try:
        x = float(s)
    except ValueError:
        return None
    return x if math.isfinite(x) else None


def _group(x: float, decimals: int) -> str:
    """'1234.5' → '1 234,50' con separatori pt-PT (segno incluso)."""
    rounded = round(x, decimals)
    body = f"{abs(rounded):,.{decimals}f}"
    int_part, _, frac = body.partition(".")
    int_part = int_part.replace(",", THOUSANDS_SEP)
    sign = "-" if rounded < 0 else ""
    return sign + int_part + (DECIMAL_SEP + frac if frac else "")


def format_euro_number(x: float) -> str:
    """Importo con 2 decimali fissi, senza simbolo."""
    return _group(x, 2)


def format_plain_number(x: float) -> str:
    """Km / litri / transfer: fino a 3 decimali, zeri finali tolti."""
    text = _group(x, 3)
    if DECIMAL_SEP in text:
        text = text.rstrip("0").rstrip(DECIMAL_SEP)
    return text


def format_for_display(value, kind: str = PLAIN) -> str:
    """
    Testo per la tabella. Vuoto → "—", zero → "0" / "0,00 €".
    Accetta anche stringhe (vengono prima ripassate da parse_loose_number).
    """
    if kind not in (PLAIN, CURRENCY):
        raise ValueError(f"Tipo di formattazione sconosciuto: {kind!r}")
    x = parse_loose_number(value)
    if x is None:
        return EMPTY_PLACEHOLDER
    if kind == CURRENCY:
        return f"{format_euro_number(x)} {CURRENCY_SYMBOL}"
    return format_plain_number(x)


def format_euro_for_input(value) -> str:
    """Valore da mettere nel campo € del form: '120,50 €' oppure ''."""
    x = parse_loose_number(value)
    if x is None:
        return ""
    return f"{format_euro_number(x)} {CURRENCY_SYMBOL}"


def strip_euro_suffix(value) -> str:
    """Toglie il ' €' finale mentre l'utente modifica il campo."""
    return _EURO_SUFFIX.sub("", "" if value is None else str(value))


def derive_distance_total(
    odometer_start: Optional[float],
    odometer_end: Optional[float],
    distance_total: Optional[float],
) -> float:
    """
    Km del giorno.
      1. km totali manuali > 0 → vincono sempre
      2. altrimenti kms_fim - kms_inicio se entrambi presenti e fim >= inicio
      3. altrimenti 0 (anche con letture invertite, nessun km negativo)
    """
    def finite(v) -> bool:
        return isinstance(v, (int, float)) and not isinstance(v, bool) and math.isfinite(v)

    if finite(distance_total) and distance_total > 0:
        return distance_total
    if finite(odometer_start) and finite(odometer_end) and odometer_end >= odometer_start:
        return odometer_end - odometer_start
    return 0
