from __future__ import annotations

import contextlib
import json
import os
import tempfile
from pathlib import Path
from typing import Any, Mapping, Optional, Sequence

from ..common.ids import IdGenerator
from ..core.exceptions import StorageError
from .repository import DocumentRepository


class JsonDocumentFile:
    """One JSON document on disk, e.g. ``{"members": [], "projects": []}``.

    The whole document is rewritten on every mutation (no append log).
    """

    def __init__(self, path: str | Path, *, keys: Sequence[str]):
        self._path = Path(path)
        self._keys = tuple(keys)

    @property
    def path(self) -> Path:
        return self._path

    def _skeleton(self) -> dict:
        return {key: [] for key in self._keys}

    def read(self) -> dict:
        if not self._path.exists():
            self.write(self._skeleton())
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise StorageError(f"Cannot read {self._path}: {e}") from e
        if not isinstance(data, dict):
            raise StorageError(f"{self._path} does not hold a JSON object")
        for key in self._keys:
            if not isinstance(data.get(key), list):
                data[key] = []
        return data

    def write(self, data: dict) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        try:
            fd, tmp = tempfile.mkstemp(dir=self._path.parent, prefix=self._path.name, suffix=".tmp")
        except OSError as e:
            raise StorageError(f"Cannot write {self._path}: {e}") from e
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            os.replace(tmp, self._path)
        except BaseException as e:
            # a failed dump must not leave the temp file behind
            with contextlib.suppress(OSError):
                os.unlink(tmp)
            if isinstance(e, OSError):
                raise StorageError(f"Cannot write {self._path}: {e}") from e
            raise


class JsonFileDocumentRepository(DocumentRepository):
    def __init__(self, document: JsonDocumentFile, key: str, ids: IdGenerator):
        self._document = document
        self._key = key
        self._ids = ids

    def list_all(self) -> Sequence[dict]:
        return [dict(r) for r in self._document.read()[self._key]]

    def get_by_id(self, doc_id: str) -> Optional[dict]:
        for r in self._document.read()[self._key]:
            if r.get("id") == doc_id:
                return dict(r)
        return None

    def find_by(self, field: str, value: Any) -> Sequence[dict]:
        return [dict(r) for r in self._document.read()[self._key] if r.get(field) == value]

    def create(self, record: Mapping[str, Any]) -> dict:
        data = self._document.read()
        rows = data[self._key]
        taken = {r.get("id") for r in rows}
        doc_id = self._ids.next_id()
        while doc_id in taken:
            doc_id = self._ids.next_id()

        new_record = {**record, "id": doc_id}
        rows.append(new_record)
        self._document.write(data)
        return dict(new_record)

    def update(self, doc_id: str, fields: Mapping[str, Any]) -> Optional[dict]:
        data = self._document.read()
        rows = data[self._key]
        for idx, r in enumerate(rows):
            if r.get("id") == doc_id:
                rows[idx] = {**r, **fields, "id": doc_id}
                self._document.write(data)
                return dict(rows[idx])
        return None

    def replace_or_merge(self, doc_id: str, record: Mapping[str, Any], *, merge: bool = False) -> dict:
        data = self._document.read()
        rows = data[self._key]
        for idx, r in enumerate(rows):
            if r.get("id") == doc_id:
                base = r if merge else {}
                rows[idx] = {**base, **record, "id": doc_id}
                self._document.write(data)
                return dict(rows[idx])

        new_record = {**record, "id": doc_id}
        rows.append(new_record)
        self._document.write(data)
        return dict(new_record)

    def delete_by_id(self, doc_id: str) -> bool:
        data = self._document.read()
        rows = data[self._key]
        kept = [r for r in rows if r.get("id") != doc_id]
        if len(kept) == len(rows):
            return False
        data[self._key] = kept
        self._document.write(data)
        return True
