from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from ..core.enums import Role


def _opt_str(value: Any) -> Optional[str]:
    if value in (None, ""):
        return None
    return str(value)


@dataclass(frozen=True)
class User:
    """Thực thể miền (domain): User.

    Lưu ý: Đây là đối tượng dữ liệu thuần (không chứa code truy cập DB).
    ``role`` keeps the stored string so that records with an unknown role
    still load; use ``role_enum`` for comparisons.
    """

    id: str
    username: str
    password: str
    role: str
    name: str
    department: str
    team_leader_id: Optional[str] = None
    division: Optional[str] = None

    @property
    def role_enum(self) -> Optional[Role]:
        return Role.parse(self.role)

    @property
    def is_super_admin(self) -> bool:
        return self.role_enum == Role.SUPER_ADMIN

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "User":
        return cls(
            id=str(record.get("id") or ""),
            username=str(record.get("username") or ""),
            password=str(record.get("password") or ""),
            role=str(record.get("role") or ""),
            name=str(record.get("name") or ""),
            department=str(record.get("department") or ""),
            team_leader_id=_opt_str(record.get("teamLeaderId")),
            division=_opt_str(record.get("division")),
        )

    def to_record(self) -> dict:
        out = {
            "id": self.id,
            "username": self.username,
            "password": self.password,
            "role": self.role,
            "name": self.name,
            "department": self.department,
        }
        if self.team_leader_id is not None:
            out["teamLeaderId"] = self.team_leader_id
        if self.division is not None:
            out["division"] = self.division
        return out

    def to_public(self) -> dict:
        out = self.to_record()
        out.pop("password")
        return out
