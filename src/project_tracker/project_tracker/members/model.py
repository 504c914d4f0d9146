from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

CORE_KEYS = ("id", "name", "role", "department")


@dataclass(frozen=True)
class Member:
    """Roster entry for the sidebar; free-form keys live in ``extra``."""

    id: str
    name: str
    role: str
    department: str
    extra: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Member":
        return cls(
            id=str(record.get("id") or ""),
            name=str(record.get("name") or ""),
            role=str(record.get("role") or ""),
            department=str(record.get("department") or ""),
            extra={k: v for k, v in record.items() if k not in CORE_KEYS},
        )

    def to_record(self) -> dict:
        return {
            **self.extra,
            "id": self.id,
            "name": self.name,
            "role": self.role,
            "department": self.department,
        }
