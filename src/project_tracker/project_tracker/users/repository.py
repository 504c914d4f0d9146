from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, Sequence

from ..storage.repository import DocumentRepository
from .model import User


class UserRepository(Protocol):
    """Giao diện repository cho User.

    Lưu ý (DIP): tầng service phụ thuộc vào interface này, không phụ thuộc trực tiếp DB cụ thể.
    """

    def list_all(self) -> Sequence[User]:
        raise NotImplementedError

    def get_by_id(self, user_id: str) -> Optional[User]:
        raise NotImplementedError

    def get_by_username(self, username: str) -> Sequence[User]:
        raise NotImplementedError

    def create_user(self, fields: Mapping[str, Any]) -> User:
        raise NotImplementedError

    def update_user(self, user_id: str, fields: Mapping[str, Any]) -> Optional[User]:
        raise NotImplementedError

    def delete_by_id(self, user_id: str) -> bool:
        raise NotImplementedError


class DocumentUserRepository(UserRepository):
    """Maps the ``users`` document collection to ``User`` entities."""

    def __init__(self, documents: DocumentRepository):
        self._documents = documents

    def list_all(self) -> Sequence[User]:
        return [User.from_record(r) for r in self._documents.list_all()]

    def get_by_id(self, user_id: str) -> Optional[User]:
        record = self._documents.get_by_id(user_id)
        return User.from_record(record) if record else None

    def get_by_username(self, username: str) -> Sequence[User]:
        return [User.from_record(r) for r in self._documents.find_by("username", username)]

    def create_user(self, fields: Mapping[str, Any]) -> User:
        return User.from_record(self._documents.create(fields))

    def update_user(self, user_id: str, fields: Mapping[str, Any]) -> Optional[User]:
        record = self._documents.update(user_id, fields)
        return User.from_record(record) if record else None

    def delete_by_id(self, user_id: str) -> bool:
        return self._documents.delete_by_id(user_id)
