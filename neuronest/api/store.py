"""
neuronest/api/store.py

Persistence collaborator for the bot routes.

The routes only need to look up clients and properties and to save the
documents generated from bot results. `RecordStore` is that narrow
interface; `JsonFileStore` implements it on a single JSON file shaped as:

  {
    "properties":           [{"property_id": 1, "address_line_1": ..., ...}],
    "clients":              [{"client_id": 1, "full_name": ..., ...}],
    "case_studies":         [{"case_study_id": 1, ...}],
    "description_versions": [{"version_id": 1, ...}]
  }
"""

import json
import logging
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional, Protocol

logger = logging.getLogger(__name__)

DEFAULT_FEATURES = {"bedrooms": 3, "bathrooms": 2, "parking": 1}

COLLECTIONS = ("properties", "clients", "case_studies", "description_versions")


class RecordStore(Protocol):
    def find_property(self, property_id: Any) -> Optional[Dict[str, Any]]: ...

    def find_client(self, client_id: Any) -> Optional[Dict[str, Any]]: ...

    def save_case_study(self, doc: Dict[str, Any]) -> int: ...

    def save_description_version(self, doc: Dict[str, Any]) -> int: ...


def full_address(prop: Dict[str, Any]) -> str:
    return f"{prop.get('address_line_1', '')}, {prop.get('suburb', '')}, {prop.get('state', '')}"


def property_features(prop: Dict[str, Any]) -> Dict[str, Any]:
    """
    Decode a property's `property_features_json`.

    Falls back to a default 3 bed / 2 bath / 1 park feature set when the
    property has none.
    """
    raw = prop.get("property_features_json")
    if not raw:
        return dict(DEFAULT_FEATURES)
    if isinstance(raw, dict):
        return raw
    return json.loads(raw)


def _same_id(a: Any, b: Any) -> bool:
    # ids arrive from JSON bodies as either ints or numeric strings
    return str(a) == str(b)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class JsonFileStore:
    """
    RecordStore backed by one JSON file.

    Reads and writes are serialised with a lock; the file is rewritten in
    full on every save.
    """

    def __init__(self, path: Path):
        self.path = Path(path)
        self._lock = threading.Lock()

    def _load(self) -> Dict[str, list]:
        data: Dict[str, list] = {}
        if self.path.exists():
            try:
                data = json.loads(self.path.read_text(encoding="utf-8"))
            except json.JSONDecodeError as e:
                raise RuntimeError(f"Record store {self.path} is not valid JSON: {e}") from e
        for name in COLLECTIONS:
            data.setdefault(name, [])
        return data

    def _write(self, data: Dict[str, list]) -> None:
        self.path.write_text(json.dumps(data, indent=2), encoding="utf-8")

    def _find(self, collection: str, key: str, record_id: Any) -> Optional[Dict[str, Any]]:
        with self._lock:
            rows = self._load()[collection]
        return next((r for r in rows if _same_id(r.get(key), record_id)), None)

    def _insert(self, collection: str, key: str, doc: Dict[str, Any]) -> int:
        with self._lock:
            data = self._load()
            rows = data[collection]
            new_id = max((int(r.get(key, 0)) for r in rows), default=0) + 1
            row = dict(doc, **{key: new_id, "created_at": _now()})
            if collection == "description_versions" and row.get("is_current_version"):
                for r in rows:
                    if _same_id(r.get("property_id"), row.get("property_id")):
                        r["is_current_version"] = False
            rows.append(row)
            self._write(data)
        logger.info(f"Saved {collection} record {new_id} to {self.path}")
        return new_id

    def find_property(self, property_id: Any) -> Optional[Dict[str, Any]]:
        return self._find("properties", "property_id", property_id)

    def find_client(self, client_id: Any) -> Optional[Dict[str, Any]]:
        return self._find("clients", "client_id", client_id)

    def save_case_study(self, doc: Dict[str, Any]) -> int:
        return self._insert("case_studies", "case_study_id", doc)

    def save_description_version(self, doc: Dict[str, Any]) -> int:
        return self._insert("description_versions", "version_id", doc)

    def add_property(self, prop: Dict[str, Any]) -> int:
        """Insert a property record (used to seed the store)."""
        return self._insert("properties", "property_id", prop)

    def add_client(self, client: Dict[str, Any]) -> int:
        """Insert a client record (used to seed the store)."""
        return self._insert("clients", "client_id", client)
