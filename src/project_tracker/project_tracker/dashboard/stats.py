"""Aggregation engine behind every role dashboard.

All functions are total: dangling member ids, projects without a
``teamMembers`` list, empty inputs and zero denominators produce zeros or the
worst health tier, never an exception.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, replace
from functools import cmp_to_key
from typing import Any, Callable, Iterable, Mapping, Optional, Sequence

from ..core.constants import (
    ATTENTION_COMPLETION_RATE,
    ATTENTION_ON_HOLD,
    EXCELLENT_LIVE_RATIO,
    FAIR_UAT_RATIO,
    GOOD_LIVE_RATIO,
    TRACKED_STATUSES,
    TREND_FLAT_PERCENT,
    TREND_UP_PERCENT,
)
from ..core.enums import HealthScore, ProjectStatus, Role, SortOrder, Trend
from ..projects.model import Project
from ..users.model import User


def completion_rate(done: int, total: int) -> float:
    """done / total, or 0 when there is nothing to complete."""
    if not total:
        return 0.0
    return done / total


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def percent(part: int, whole: int) -> int:
    """Integer percentage rounded half up; 0 when ``whole`` is 0."""
    return round_half_up(completion_rate(part, whole) * 100)


@dataclass(frozen=True)
class MemberStats:
    name: str
    project_count: int = 0
    ongoing: int = 0
    on_hold: int = 0
    done: int = 0
    uat: int = 0
    live: int = 0
    member_id: str = ""

    @property
    def completion_rate(self) -> float:
        return completion_rate(self.done, self.project_count)

    def __add__(self, other: "MemberStats") -> "MemberStats":
        return replace(
            self,
            project_count=self.project_count + other.project_count,
            ongoing=self.ongoing + other.ongoing,
            on_hold=self.on_hold + other.on_hold,
            done=self.done + other.done,
            uat=self.uat + other.uat,
            live=self.live + other.live,
        )

    def to_dict(self) -> dict:
        return {
            "id": self.member_id,
            "name": self.name,
            "projectCount": self.project_count,
            "ongoing": self.ongoing,
            "onHold": self.on_hold,
            "done": self.done,
            "uat": self.uat,
            "live": self.live,
        }


# MemberStats field holding each tracked status.
STATUS_FIELDS = {
    ProjectStatus.ONGOING: "ongoing",
    ProjectStatus.ON_HOLD: "on_hold",
    ProjectStatus.DONE: "done",
    ProjectStatus.UAT: "uat",
    ProjectStatus.LIVE: "live",
}


def count_projects(name: str, projects: Iterable[Project], *, member_id: str = "") -> MemberStats:
    """Bucket projects by tracked status; the rest only count towards the total."""
    projects = list(projects)
    buckets = {
        STATUS_FIELDS[status]: sum(1 for p in projects if p.status == status.value)
        for status in TRACKED_STATUSES
    }
    return MemberStats(name=name, member_id=member_id, project_count=len(projects), **buckets)


def project_status_summary(projects: Iterable[Project]) -> dict:
    """Organization-wide status counts; each project counts once however many members share it."""
    row = count_projects("", projects).to_dict()
    return {k: v for k, v in row.items() if k not in ("id", "name")}


def team_members(users: Iterable[User]) -> list[User]:
    return [u for u in users if u.role_enum == Role.TEAM_MEMBER]


def build_member_stats(users: Iterable[User], projects: Sequence[Project]) -> list[MemberStats]:
    """One row per Team Member, in user order."""
    return [
        count_projects(u.name, (p for p in projects if p.has_member(u.id)), member_id=u.id)
        for u in team_members(users)
    ]


def rollup(stats: Iterable[MemberStats], *, name: str = "Total") -> MemberStats:
    total = MemberStats(name=name)
    for s in stats:
        total = total + s
    return replace(total, name=name, member_id="")


def health_score(ongoing: int, uat: int, live: int) -> HealthScore:
    """Qualitative health from the live/UAT share of active work. First match wins."""
    total = ongoing + uat + live
    if total <= 0:
        return HealthScore.NEEDS_FOCUS

    live_ratio = live / total
    if live_ratio > EXCELLENT_LIVE_RATIO:
        return HealthScore.EXCELLENT
    if live_ratio > GOOD_LIVE_RATIO:
        return HealthScore.GOOD
    if uat / total > FAIR_UAT_RATIO:
        return HealthScore.FAIR
    return HealthScore.NEEDS_FOCUS


def trend_for(rate_percent: int) -> Trend:
    if rate_percent >= TREND_UP_PERCENT:
        return Trend.UP
    if rate_percent >= TREND_FLAT_PERCENT:
        return Trend.FLAT
    return Trend.DOWN


def needs_attention(stats: MemberStats) -> bool:
    return stats.on_hold > ATTENTION_ON_HOLD or stats.completion_rate < ATTENTION_COMPLETION_RATE


@dataclass(frozen=True)
class GroupStats:
    key: str
    members: tuple[User, ...]
    projects: MemberStats
    teams: int

    @property
    def health(self) -> HealthScore:
        return health_score(self.projects.ongoing, self.projects.uat, self.projects.live)

    @property
    def completion_rate(self) -> float:
        return self.projects.completion_rate

    def to_dict(self) -> dict:
        return {
            "key": self.key,
            "memberCount": len(self.members),
            "teams": self.teams,
            "projectCount": self.projects.project_count,
            "ongoing": self.projects.ongoing,
            "onHold": self.projects.on_hold,
            "done": self.projects.done,
            "uat": self.projects.uat,
            "live": self.projects.live,
            "completionRate": percent(self.projects.done, self.projects.project_count),
            "health": self.health.value,
        }


def _unique(values: Iterable[Any]) -> list[Any]:
    return list(dict.fromkeys(values))


def group_stats(
    groups: Iterable[str],
    users: Sequence[User],
    projects: Sequence[Project],
    *,
    role: Role,
    belongs: Callable[[User, str], bool],
    team_key: Callable[[User], Any],
) -> list[GroupStats]:
    """Rollup per group: users of ``role`` that belong to the group, and the
    projects whose ``teamMembers`` include any of them."""

    out: list[GroupStats] = []
    for key in groups:
        members = tuple(u for u in users if u.role_enum == role and belongs(u, key))
        ids = {m.id for m in members}
        group_projects = [p for p in projects if p.has_any_member(ids)]
        out.append(
            GroupStats(
                key=key,
                members=members,
                projects=count_projects(key, group_projects),
                teams=len(_unique(team_key(m) for m in members)),
            )
        )
    return out


def department_groups(users: Iterable[User]) -> list[str]:
    return _unique(u.department for u in team_members(users))


def team_count(users: Iterable[User]) -> int:
    """Distinct ``teamLeaderId`` values among Team Members; no leader counts as one team."""
    return len(_unique(u.team_leader_id for u in team_members(users)))


def department_stats(users: Sequence[User], projects: Sequence[Project]) -> list[GroupStats]:
    """Departments of Team Members; teams are distinct ``teamLeaderId`` values."""
    return group_stats(
        department_groups(users),
        users,
        projects,
        role=Role.TEAM_MEMBER,
        belongs=lambda u, dept: u.department == dept,
        team_key=lambda u: u.team_leader_id,
    )


def division_of(user: User) -> str:
    return user.division or user.department


def division_groups(users: Iterable[User]) -> list[str]:
    return _unique(division_of(u) for u in users if u.role_enum == Role.GROUP_HEAD)


def division_stats(users: Sequence[User], projects: Sequence[Project]) -> list[GroupStats]:
    """Divisions named by Group Heads; a division's units are its Team Leaders."""
    return group_stats(
        division_groups(users),
        users,
        projects,
        role=Role.TEAM_LEADER,
        belongs=lambda u, division: u.division == division or u.department == division,
        team_key=lambda u: u.id,
    )


@dataclass(frozen=True)
class TopPick:
    label: str = ""
    value: float = 0
    row: Optional[Any] = None


def top_by(rows: Iterable[Any], value: Callable[[Any], float], label: Callable[[Any], str]) -> TopPick:
    """Running best with strict ``>``: ties keep the earliest row, and an
    empty input (or all-zero values) yields the empty sentinel."""
    best = TopPick()
    for row in rows:
        v = value(row)
        if v > best.value:
            best = TopPick(label=label(row), value=v, row=row)
    return best


_CAMEL_RE = re.compile(r"(?<!^)(?=[A-Z])")


def _field_value(row: Any, field: str) -> Any:
    if isinstance(row, Mapping):
        return row.get(field)
    return getattr(row, _CAMEL_RE.sub("_", field).lower(), None)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def compare_values(a: Any, b: Any) -> int:
    """Strings by ordinal, numbers by difference, anything else compares equal."""
    if isinstance(a, str) and isinstance(b, str):
        return (a > b) - (a < b)
    if _is_number(a) and _is_number(b):
        return (a > b) - (a < b)
    return 0


def sort_rows(rows: Iterable[Any], field: str, order: SortOrder = SortOrder.ASC) -> list[Any]:
    """Stable sort of dict or dataclass rows by a camelCase field name."""
    sign = -1 if order == SortOrder.DESC else 1

    def cmp(x: Any, y: Any) -> int:
        return sign * compare_values(_field_value(x, field), _field_value(y, field))

    return sorted(rows, key=cmp_to_key(cmp))


@dataclass(frozen=True)
class SortState:
    field: str = "name"
    order: SortOrder = SortOrder.ASC

    def toggle(self, field: str) -> "SortState":
        """Same field flips the order; a new field starts ascending."""
        if field == self.field:
            flipped = SortOrder.DESC if self.order == SortOrder.ASC else SortOrder.ASC
            return SortState(field=field, order=flipped)
        return SortState(field=field, order=SortOrder.ASC)

    def apply(self, rows: Iterable[Any]) -> list[Any]:
        return sort_rows(rows, self.field, self.order)

    def to_dict(self) -> dict:
        return {"field": self.field, "order": self.order.value}
