from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from ..common.validators import require_non_empty
from ..core.enums import DashboardView, Role
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from ..dashboard.views import hierarchy_level, view_for_role
from .model import User
from .repository import UserRepository

# Fields a client may send on create/update; anything else is ignored.
CORE_FIELDS = ("username", "password", "role", "name", "department")
OPTIONAL_FIELDS = ("teamLeaderId", "division")


@dataclass(frozen=True)
class SessionUser:
    """Identity the client keeps after login (never carries the password)."""

    user: dict
    level: int
    view: DashboardView

    @property
    def id(self) -> str:
        return self.user["id"]

    @property
    def role(self) -> str:
        return self.user["role"]

    def to_dict(self) -> dict:
        return {**self.user, "level": self.level, "view": self.view.value}


def _parse_role(value: Any) -> Role:
    role = Role.parse(value)
    if role is None:
        raise ValidationError("Invalid role")
    if role == Role.SUPER_ADMIN:
        raise ValidationError("Cannot assign the Super Admin role")
    return role


class AuthService:
    """Use case: authenticate user (login).

    Passwords are compared as stored (plaintext equality, case-sensitive).
    """

    def __init__(self, users: UserRepository):
        self._users = users

    def authenticate(self, username: Any, password: Any) -> SessionUser:
        if not isinstance(username, str) or not isinstance(password, str) or not username or not password:
            raise ValidationError("Username and password are required")

        for user in self._users.get_by_username(username):
            if user.username == username and user.password == password:
                return SessionUser(
                    user=user.to_public(),
                    level=hierarchy_level(user.role),
                    view=view_for_role(user.role),
                )

        raise AuthenticationError("Invalid username or password")


class UserService:
    """Use case: manage users (Super Admin screen).

    The username check before insert is a read-then-write pair: two concurrent
    creations with the same name can both pass it on the JSON backend. The
    MySQL backend closes that window with a unique index.
    """

    def __init__(self, users: UserRepository):
        self._users = users

    def list_public(self) -> list[dict]:
        return [u.to_public() for u in self._users.list_all()]

    def list_users(self) -> list[User]:
        return list(self._users.list_all())

    def _ensure_username_free(self, username: str, *, exclude_id: Optional[str] = None) -> None:
        for other in self._users.get_by_username(username):
            if other.id != exclude_id:
                raise ConflictError("Username already exists")

    def create_account(self, data: Mapping[str, Any]) -> User:
        department = require_non_empty(data.get("department"), "Department")
        username = require_non_empty(data.get("username"), "Username")
        password = require_non_empty(data.get("password"), "Password")
        name = str(data.get("name") or "").strip()
        role = _parse_role(data.get("role") or Role.TEAM_MEMBER.value)

        self._ensure_username_free(username)

        record = {
            "username": username,
            "password": password,
            "role": role.value,
            "name": name,
            "department": department,
        }
        for key in OPTIONAL_FIELDS:
            if data.get(key):
                record[key] = str(data[key])

        return self._users.create_user(record)

    def update_account(self, user_id: str, data: Mapping[str, Any]) -> User:
        user = self._users.get_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")
        if user.is_super_admin:
            raise AuthorizationError("Cannot edit Super Admin user")

        changes: dict = {}
        # Empty core values keep the stored ones (partial update).
        for key in CORE_FIELDS:
            value = data.get(key)
            if value in (None, ""):
                continue
            if not isinstance(value, str):
                raise ValidationError(f"{key} must be a string")
            changes[key] = value.strip() if key != "password" else value

        if "role" in changes:
            changes["role"] = _parse_role(changes["role"]).value
        if "username" in changes:
            self._ensure_username_free(changes["username"], exclude_id=user.id)

        for key in OPTIONAL_FIELDS:
            if key in data:
                changes[key] = str(data[key]) if data[key] else None

        updated = self._users.update_user(user.id, changes)
        if not updated:
            raise NotFoundError("User not found")
        return updated

    def delete_account(self, user_id: str) -> None:
        user = self._users.get_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")
        if user.is_super_admin:
            raise AuthorizationError("Cannot delete Super Admin user")

        if not self._users.delete_by_id(user.id):
            raise NotFoundError("User not found")
