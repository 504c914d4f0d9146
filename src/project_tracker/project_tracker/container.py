from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .common.ids import IdGenerator
from .core.constants import (
    COLLECTIONS,
    DB_FILE,
    MEMBERS_COLLECTION,
    PROJECTS_COLLECTION,
    USERS_COLLECTION,
    USERS_FILE,
)
from .dashboard.service import DashboardService
from .database.connection import DBConfig, DatabaseConnection
from .members.service import MemberService
from .projects.service import ProjectService
from .storage.json_file_repository import JsonDocumentFile, JsonFileDocumentRepository
from .storage.mysql_document_repository import MySQLDocumentRepository
from .storage.repository import DocumentRepository
from .users.repository import DocumentUserRepository
from .users.service import AuthService, UserService

STORAGE_BACKENDS = ("json", "mysql")


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    users_docs: DocumentRepository
    members_docs: DocumentRepository
    projects_docs: DocumentRepository
    users_repo: DocumentUserRepository

    auth_service: AuthService
    user_service: UserService
    member_service: MemberService
    project_service: ProjectService
    dashboard_service: DashboardService

    @property
    def collections(self) -> dict[str, DocumentRepository]:
        return {
            USERS_COLLECTION: self.users_docs,
            MEMBERS_COLLECTION: self.members_docs,
            PROJECTS_COLLECTION: self.projects_docs,
        }


def build_json_collections(data_dir: str | Path, ids: IdGenerator) -> dict[str, DocumentRepository]:
    """users.json holds the users; db.json is shared by members and projects."""
    data_dir = Path(data_dir)
    users_file = JsonDocumentFile(data_dir / USERS_FILE, keys=(USERS_COLLECTION,))
    db_file = JsonDocumentFile(data_dir / DB_FILE, keys=(MEMBERS_COLLECTION, PROJECTS_COLLECTION))
    return {
        USERS_COLLECTION: JsonFileDocumentRepository(users_file, USERS_COLLECTION, ids),
        MEMBERS_COLLECTION: JsonFileDocumentRepository(db_file, MEMBERS_COLLECTION, ids),
        PROJECTS_COLLECTION: JsonFileDocumentRepository(db_file, PROJECTS_COLLECTION, ids),
    }


def build_mysql_collections(conn: DatabaseConnection, ids: IdGenerator) -> dict[str, DocumentRepository]:
    return {
        name: MySQLDocumentRepository(conn, name, ids)
        for name in COLLECTIONS
    }


def build_container(*, storage_backend: str = "json", data_dir: str | Path = "data", db_config: Optional[dict] = None) -> Container:
    ids = IdGenerator()
    conn: Optional[DatabaseConnection] = None

    if storage_backend == "json":
        docs = build_json_collections(data_dir, ids)
    elif storage_backend == "mysql":
        conn = DatabaseConnection(DBConfig.from_dict(db_config or {}))
        docs = build_mysql_collections(conn, ids)
    else:
        raise ValueError(f"Unknown STORAGE_BACKEND {storage_backend!r}; expected one of {STORAGE_BACKENDS}")

    users_repo = DocumentUserRepository(docs[USERS_COLLECTION])

    return Container(
        conn=conn,
        users_docs=docs[USERS_COLLECTION],
        members_docs=docs[MEMBERS_COLLECTION],
        projects_docs=docs[PROJECTS_COLLECTION],
        users_repo=users_repo,
        auth_service=AuthService(users_repo),
        user_service=UserService(users_repo),
        member_service=MemberService(docs[MEMBERS_COLLECTION]),
        project_service=ProjectService(docs[PROJECTS_COLLECTION]),
        dashboard_service=DashboardService(users_repo, docs[PROJECTS_COLLECTION]),
    )
