"""
Key-value stores backing the points ledger.

JsonFileStore keeps every key in one JSON object on disk; MemoryStore is the
in-process equivalent used by tests and by servers started without a file.
"""

import json
import logging
import threading
from pathlib import Path
from typing import Dict, Optional

log = logging.getLogger(__name__)


class MemoryStore:
    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def clear(self) -> None:
        self._data.clear()


class JsonFileStore:
    """
    String key-value store persisted as a JSON object.

    The whole file is rewritten on every set(). A missing file reads as an
    empty store; an unreadable one is logged and treated as empty.
    """

    def __init__(self, path: Path):
        self.path = Path(path)
        self._lock = threading.Lock()

    def _load(self) -> Dict[str, str]:
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return {}
        except (OSError, ValueError):
            log.exception("Failed to read store %s", self.path)
            return {}
        if not isinstance(data, dict):
            log.warning("Ignoring non-object store contents in %s", self.path)
            return {}
        return data

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            value = self._load().get(key)
        return None if value is None else str(value)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            data = self._load()
            data[key] = value
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(data, indent=2), encoding="utf-8")

    def clear(self) -> None:
        with self._lock:
            if self.path.exists():
                self.path.unlink()
