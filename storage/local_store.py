# storage/local_store.py
"""Device-local project storage.

A local store holds one JSON-encoded array of project records under the
``localProjects`` key. Writes always replace the whole array.
"""
import json
import logging
from pathlib import Path
from typing import Protocol

from errors import LocalStoreError

logger = logging.getLogger(__name__)

LOCAL_PROJECTS_KEY = "localProjects"


class LocalStore(Protocol):
    def read(self) -> list[dict]: ...

    def write(self, records: list[dict]) -> None: ...

    def clear(self) -> None: ...


def decode_records(raw: str | None) -> list[dict]:
    if raw is None:
        return []
    try:
        data = json.loads(raw)
    except ValueError as e:
        raise LocalStoreError(f"malformed local project data: {e}") from e
    if not isinstance(data, list):
        raise LocalStoreError(f"local project data is a {type(data).__name__}, expected a list")
    return [item for item in data if isinstance(item, dict)]


class MemoryLocalStore:
    """In-memory store keeping the raw encoded text, like a browser would."""

    def __init__(self, records: list[dict] | None = None, raw: str | None = None):
        self.raw = raw
        if records is not None:
            self.raw = json.dumps(records)

    def read(self) -> list[dict]:
        return decode_records(self.raw)

    def write(self, records: list[dict]) -> None:
        self.raw = json.dumps(records, ensure_ascii=False)

    def clear(self) -> None:
        self.raw = None


class JsonFileLocalStore:
    """Key/value JSON file whose values are encoded strings."""

    def __init__(self, path: Path, key: str = LOCAL_PROJECTS_KEY):
        self.path = Path(path)
        self.key = key

    def _load_items(self) -> dict:
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        try:
            items = json.loads(text) if text.strip() else {}
        except ValueError as e:
            raise LocalStoreError(f"unreadable local store file {self.path}: {e}") from e
        if not isinstance(items, dict):
            raise LocalStoreError(f"local store file {self.path} is not a key/value object")
        return items

    def _save_items(self, items: dict):
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp.write_text(json.dumps(items, ensure_ascii=False, indent=2) + "\n", encoding="utf-8")
        tmp.replace(self.path)

    def get_item(self, key: str) -> str | None:
        value = self._load_items().get(key)
        return value if isinstance(value, str) or value is None else json.dumps(value)

    def read(self) -> list[dict]:
        return decode_records(self.get_item(self.key))

    def write(self, records: list[dict]) -> None:
        try:
            items = self._load_items()
        except LocalStoreError:
            logger.warning("local_store.reset path=%s", self.path)
            items = {}
        items[self.key] = json.dumps(records, ensure_ascii=False)
        self._save_items(items)

    def clear(self) -> None:
        try:
            items = self._load_items()
        except LocalStoreError:
            items = {}
        items.pop(self.key, None)
        self._save_items(items)
