from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Optional

CORE_KEYS = (
    "id",
    "name",
    "type",
    "mainProjectId",
    "priority",
    "status",
    "startDate",
    "endDate",
    "commonPages",
    "uniquePages",
    "tasks",
    "teamMembers",
)


def _as_int(value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def _as_str_tuple(value: Any) -> tuple[str, ...]:
    if not isinstance(value, (list, tuple)):
        return ()
    return tuple(str(v) for v in value if v is not None)


@dataclass(frozen=True)
class Project:
    """Project as stored; loading never fails on partial or odd records.

    ``team_members`` holds weak user-id references that may point at users
    who no longer exist.
    """

    id: str
    name: str
    type: str
    priority: str
    status: str
    start_date: str = ""
    end_date: str = ""
    common_pages: int = 0
    unique_pages: int = 0
    tasks: tuple[str, ...] = ()
    team_members: tuple[str, ...] = ()
    main_project_id: Optional[str] = None
    extra: Mapping[str, Any] = field(default_factory=dict)

    def has_member(self, user_id: str) -> bool:
        return user_id in self.team_members

    def has_any_member(self, user_ids: Iterable[str]) -> bool:
        ids = set(user_ids)
        return any(m in ids for m in self.team_members)

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Project":
        main_id = record.get("mainProjectId")
        return cls(
            id=str(record.get("id") or ""),
            name=str(record.get("name") or ""),
            type=str(record.get("type") or ""),
            priority=str(record.get("priority") or ""),
            status=str(record.get("status") or ""),
            start_date=str(record.get("startDate") or ""),
            end_date=str(record.get("endDate") or ""),
            common_pages=_as_int(record.get("commonPages")),
            unique_pages=_as_int(record.get("uniquePages")),
            tasks=_as_str_tuple(record.get("tasks")),
            team_members=_as_str_tuple(record.get("teamMembers")),
            main_project_id=str(main_id) if main_id else None,
            extra={k: v for k, v in record.items() if k not in CORE_KEYS},
        )

    def to_record(self) -> dict:
        out = {
            **self.extra,
            "id": self.id,
            "name": self.name,
            "type": self.type,
            "priority": self.priority,
            "status": self.status,
            "startDate": self.start_date,
            "endDate": self.end_date,
            "commonPages": self.common_pages,
            "uniquePages": self.unique_pages,
            "tasks": list(self.tasks),
            "teamMembers": list(self.team_members),
        }
        if self.main_project_id:
            out["mainProjectId"] = self.main_project_id
        return out
