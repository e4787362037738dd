"""Shared file handling for the JSON-file-backed repositories.

Each collection lives in one JSON array on disk.  Every read and every
read-modify-write runs under the collection's lock, so within one
process a conditional update can never interleave with another write.
"""

from __future__ import annotations

import json
import threading
import uuid
from contextlib import contextmanager
from pathlib import Path
from typing import Callable, Iterator


class JsonCollection:

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._lock = threading.RLock()
        self._ensure_file()

    # --- Record helpers -------------------------------------------------------

    @staticmethod
    def new_id() -> str:
        return uuid.uuid4().hex

    def find_raw(self, match: Callable[[dict], bool]) -> dict | None:
        with self._lock:
            for raw in self._load_raw():
                if match(raw):
                    return raw
        return None

    def all_raw(self) -> list[dict]:
        with self._lock:
            return self._load_raw()

    def upsert_raw(self, record: dict, key: str = "id") -> None:
        with self._lock:
            records = self._load_raw()
            for i, raw in enumerate(records):
                if raw[key] == record[key]:
                    records[i] = record
                    break
            else:
                records.append(record)
            self._persist_raw(records)

    @contextmanager
    def editing(self) -> Iterator[list[dict]]:
        """Hold the lock across load, in-place edit and persist.

        Nothing is written if the body raises.
        """
        with self._lock:
            records = self._load_raw()
            yield records
            self._persist_raw(records)

    def delete_raw(self, record_id: str) -> bool:
        with self._lock:
            records = self._load_raw()
            kept = [raw for raw in records if raw["id"] != record_id]
            if len(kept) == len(records):
                return False
            self._persist_raw(kept)
            return True

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> list[dict]:
        return json.loads(self._file_path.read_text(encoding="utf-8"))

    def _persist_raw(self, records: list[dict]) -> None:
        tmp = self._file_path.with_suffix(".tmp")
        tmp.write_text(json.dumps(records, indent=2) + "\n", encoding="utf-8")
        tmp.replace(self._file_path)

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")
