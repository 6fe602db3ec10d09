"""
Salvataggio dei registos come un unico blob JSON sotto una chiave.

Formato del blob (lista ordinata):
  [{"id": "...", "date": "2024-01-15", "odometerStart": 152340,
    "odometerEnd": "", ..., "notes": "aeroporto"}, ...]
Campi numerici: numero JSON oppure "" (vuoto).

Lettura tollerante:
  - blob assente / JSON rotto / non-lista → lista vuota
  - elementi non-oggetto → saltati
  - chiavi della vecchia app browser (kms_inicio, total_diario, ...) → convertite
"""

import hashlib
import json
import logging
import tempfile
from abc import ABC, abstractmethod
from dataclasses import asdict
from typing import List, Optional

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from config import STORAGE_KEY, STORAGE_FIELDS, NUMERIC_FIELDS, LEGACY_FIELD_MAP
from core.models import DailyRecord
from core.normalizer import normalize_record

logger = logging.getLogger("motorista.storage")

_STORED_TO_ATTR = {v: k for k, v in STORAGE_FIELDS.items()}


def record_to_dict(record: DailyRecord) -> dict:
    """DailyRecord → dict con le chiavi del blob (vuoto = "")."""
    out = {}
    for attr, value in asdict(record).items():
        if attr in NUMERIC_FIELDS and value is None:
            value = ""
        out[STORAGE_FIELDS[attr]] = value
    return out


def stable_record_id(position: int, item: dict) -> str:
    """
    Id per un elemento salvato senza id (vecchia app, JSON modificato a mano,
    riga Sheets con id vuoto). Dipende solo da posizione e contenuto, quindi
    ogni ricaricamento dello stesso blob dà lo stesso id.
    """
    content = json.dumps(item, sort_keys=True, ensure_ascii=False, default=str)
    return hashlib.sha1(f"{position}:{content}".encode("utf-8")).hexdigest()[:32]


def record_from_dict(item: dict, position: int = 0) -> DailyRecord:
    """dict del blob (chiavi nuove o della vecchia app) → DailyRecord normalizzato."""
    raw = {}
    for key, value in item.items():
        attr = _STORED_TO_ATTR.get(key) or LEGACY_FIELD_MAP.get(key)
        if attr and attr not in raw:
            raw[attr] = value
    if not str(raw.get("id") or "").strip():
        raw["id"] = stable_record_id(position, item)
    return normalize_record(raw)


def records_to_blob(records: List[DailyRecord]) -> str:
    return json.dumps([record_to_dict(r) for r in records], ensure_ascii=False)


def records_from_blob(text: Optional[str]) -> List[DailyRecord]:
    """Blob JSON → lista di record. Mai un'eccezione: nel dubbio, lista vuota."""
    if not text:
        return []
    try:
        parsed = json.loads(text)
    except (TypeError, ValueError) as e:
        logger.warning("Blob registos illeggibile, riparto da vuoto: %s", e)
        return []
    if not isinstance(parsed, list):
        logger.warning("Blob registos non è una lista (%s), riparto da vuoto", type(parsed).__name__)
        return []

    records = []
    for i, item in enumerate(parsed):
        if not isinstance(item, dict):
            logger.warning("Elemento %d del blob ignorato: %r", i, item)
            continue
        records.append(record_from_dict(item, i))
    return records


class RecordStore(ABC):
    """Porta di persistenza: carica e salva l'intera lista."""

    @abstractmethod
    def load(self) -> List[DailyRecord]:
        ...

    @abstractmethod
    def save(self, records: List[DailyRecord]) -> None:
        ...


class MemoryStore(RecordStore):
    """Store in memoria (anteprima senza salvataggio, test)."""

    def __init__(self, blob: Optional[str] = None):
        self.blob = blob

    def load(self) -> List[DailyRecord]:
        return records_from_blob(self.blob)

    def save(self, records: List[DailyRecord]) -> None:
        self.blob = records_to_blob(records)


class JsonFileStore(RecordStore):
    """
    File JSON chiave → blob, come il localStorage del browser.
    Le altre chiavi presenti nel file vengono conservate.
    """

    def __init__(self, path: str, key: str = STORAGE_KEY):
        self.path = path
        self.key = key

    def _read_all(self) -> dict:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning("File %s illeggibile: %s", self.path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("File %s non contiene un oggetto chiave→valore", self.path)
            return {}
        return data

    def load(self) -> List[DailyRecord]:
        return records_from_blob(self._read_all().get(self.key))

    def save(self, records: List[DailyRecord]) -> None:
        data = self._read_all()
        data[self.key] = records_to_blob(records)

        folder = os.path.dirname(os.path.abspath(self.path))
        os.makedirs(folder, exist_ok=True)
        # Scrittura su file temporaneo + rename: mai un file a metà
        fd, tmp_path = tempfile.mkstemp(dir=folder, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
            os.replace(tmp_path, self.path)
        except BaseException:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
            raise
        logger.debug("Salvati %d registos in %s", len(records), self.path)
