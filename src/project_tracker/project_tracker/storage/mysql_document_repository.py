from __future__ import annotations

import json
import re
from typing import Any, Mapping, Optional, Sequence

from mysql.connector import errorcode
from mysql.connector.errors import IntegrityError

from ..common.ids import IdGenerator
from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, load_json_body
from .repository import DocumentRepository

_FIELD_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

# Unique index on the generated username column (see database/schema.sql).
USERNAME_INDEX = "uq_documents_username"

MAX_ID_ATTEMPTS = 5


def _dump(record: Mapping[str, Any]) -> str:
    return json.dumps(dict(record), ensure_ascii=False)


class MySQLDocumentRepository(DocumentRepository):
    """One row per document in the shared ``documents`` table."""

    def __init__(self, conn_factory: DatabaseConnection, collection: str, ids: IdGenerator):
        self._conn_factory = conn_factory
        self._collection = collection
        self._ids = ids

    def _raise_conflict_if_username(self, err: IntegrityError) -> None:
        if err.errno == errorcode.ER_DUP_ENTRY and USERNAME_INDEX in str(err):
            raise ConflictError("Username already exists") from err

    def list_all(self) -> Sequence[dict]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT body FROM documents WHERE collection=%s ORDER BY seq",
                (self._collection,),
            )
            return [load_json_body(r["body"]) for r in fetchall(cur)]

    def get_by_id(self, doc_id: str) -> Optional[dict]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT body FROM documents WHERE collection=%s AND doc_id=%s",
                (self._collection, doc_id),
            )
            row = fetchone(cur)
            return load_json_body(row["body"]) if row else None

    def find_by(self, field: str, value: Any) -> Sequence[dict]:
        if not _FIELD_RE.match(field):
            raise ValueError(f"Invalid field name: {field!r}")
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT body FROM documents
                WHERE collection=%s AND JSON_EXTRACT(body, %s) = CAST(%s AS JSON)
                ORDER BY seq
                """,
                (self._collection, f"$.{field}", json.dumps(value)),
            )
            return [load_json_body(r["body"]) for r in fetchall(cur)]

    def create(self, record: Mapping[str, Any]) -> dict:
        for _ in range(MAX_ID_ATTEMPTS):
            doc_id = self._ids.next_id()
            new_record = {**record, "id": doc_id}
            try:
                with db_cursor(self._conn_factory) as (_, cur):
                    cur.execute(
                        "INSERT INTO documents(collection, doc_id, body) VALUES(%s,%s,%s)",
                        (self._collection, doc_id, _dump(new_record)),
                    )
                return new_record
            except IntegrityError as e:
                self._raise_conflict_if_username(e)
                if e.errno != errorcode.ER_DUP_ENTRY:
                    raise
                # id taken by another process; try the next one
        raise RuntimeError(f"Could not allocate a unique id in {self._collection}")

    def update(self, doc_id: str, fields: Mapping[str, Any]) -> Optional[dict]:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    "SELECT body FROM documents WHERE collection=%s AND doc_id=%s FOR UPDATE",
                    (self._collection, doc_id),
                )
                row = fetchone(cur)
                if not row:
                    return None
                merged = {**load_json_body(row["body"]), **fields, "id": doc_id}
                cur.execute(
                    "UPDATE documents SET body=%s WHERE collection=%s AND doc_id=%s",
                    (_dump(merged), self._collection, doc_id),
                )
                return merged
        except IntegrityError as e:
            self._raise_conflict_if_username(e)
            raise

    def replace_or_merge(self, doc_id: str, record: Mapping[str, Any], *, merge: bool = False) -> dict:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                base: dict = {}
                if merge:
                    cur.execute(
                        "SELECT body FROM documents WHERE collection=%s AND doc_id=%s FOR UPDATE",
                        (self._collection, doc_id),
                    )
                    row = fetchone(cur)
                    if row:
                        base = load_json_body(row["body"])
                stored = {**base, **record, "id": doc_id}
                cur.execute(
                    """
                    INSERT INTO documents(collection, doc_id, body) VALUES(%s,%s,%s)
                    ON DUPLICATE KEY UPDATE body=VALUES(body)
                    """,
                    (self._collection, doc_id, _dump(stored)),
                )
                return stored
        except IntegrityError as e:
            self._raise_conflict_if_username(e)
            raise

    def delete_by_id(self, doc_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "DELETE FROM documents WHERE collection=%s AND doc_id=%s",
                (self._collection, doc_id),
            )
            return cur.rowcount > 0
