from __future__ import annotations

from typing import Any, Callable, Optional, Sequence

from ..core.constants import DEPARTMENTS, HIERARCHY_LEVELS
from ..core.enums import DashboardView, ProjectStatus, ProjectType, Role, SortOrder
from ..core.exceptions import ValidationError
from ..projects.model import Project
from ..storage.repository import DocumentRepository
from ..users.model import User
from ..users.repository import UserRepository
from .stats import (
    GroupStats,
    MemberStats,
    SortState,
    build_member_stats,
    department_groups,
    department_stats,
    division_of,
    division_stats,
    needs_attention,
    percent,
    project_status_summary,
    rollup,
    round_half_up,
    team_count,
    top_by,
    trend_for,
)
from .views import view_for_role


def parse_sort(field: Optional[str], order: Optional[str], *, default_field: str = "name") -> SortState:
    """Build a SortState from query arguments; an unknown order is a 400."""
    if not order:
        return SortState(field=field or default_field)
    try:
        parsed = SortOrder(order.lower())
    except ValueError:
        raise ValidationError("sortOrder must be 'asc' or 'desc'")
    return SortState(field=field or default_field, order=parsed)


def _first_name(users: Sequence[User], role: Role, match: Callable[[User], bool]) -> Optional[str]:
    for u in users:
        if u.role_enum == role and match(u):
            return u.name
    return None


def _top(pick) -> dict:
    return {"label": pick.label, "value": pick.value}


class DashboardService:
    """Builds the JSON payload of each role dashboard.

    Every call reads both collections fresh; nothing is cached between
    requests.
    """

    def __init__(self, users: UserRepository, projects: DocumentRepository):
        self._users = users
        self._projects = projects

    def _load(self) -> tuple[list[User], list[Project]]:
        users = list(self._users.list_all())
        projects = [Project.from_record(r) for r in self._projects.list_all()]
        return users, projects

    def build(self, role: Any, sort: Optional[SortState] = None) -> dict:
        view = view_for_role(role)
        builders = {
            DashboardView.TEAM_MEMBER: self._team_member,
            DashboardView.TEAM_LEADER: self._team_leader,
            DashboardView.GROUP_TEAM_LEADER: self._group_team_leader,
            DashboardView.GROUP_HEAD: self._group_head,
            DashboardView.LEADER: self._leader,
            DashboardView.SUPER_ADMIN: self._super_admin,
        }
        users, projects = self._load()
        payload = builders[view](users, projects, sort or SortState())
        return {"view": view.value, **payload}

    @staticmethod
    def _member_table(stats: Sequence[MemberStats], sort: SortState) -> dict:
        return {
            "members": sort.apply([s.to_dict() for s in stats]),
            "totals": rollup(stats).to_dict(),
            "sort": sort.to_dict(),
        }

    def _team_member(self, users: Sequence[User], projects: Sequence[Project], sort: SortState) -> dict:
        rows = [p.to_record() for p in projects]
        return {
            "summary": {
                "mainProjects": sum(1 for p in projects if p.type == ProjectType.MAIN.value),
                "subProjects": sum(1 for p in projects if p.type == ProjectType.SUB.value),
                "ongoingProjects": sum(1 for p in projects if p.status == ProjectStatus.ONGOING.value),
                "totalProjects": len(projects),
            },
            "projects": sort.apply(rows),
            "assignees": [{"id": u.id, "name": u.name, "role": u.role} for u in users],
            "sort": sort.to_dict(),
        }

    def _team_leader(self, users: Sequence[User], projects: Sequence[Project], sort: SortState) -> dict:
        return self._member_table(build_member_stats(users, projects), sort)

    def _group_team_leader(self, users: Sequence[User], projects: Sequence[Project], sort: SortState) -> dict:
        stats = build_member_stats(users, projects)
        totals = rollup(stats)

        rows = []
        for s in stats:
            rate = percent(s.done, s.project_count)
            rows.append({**s.to_dict(), "completionRate": rate, "trend": trend_for(rate).value})

        top = top_by(stats, lambda s: s.completion_rate, lambda s: s.name)
        attention = [s for s in stats if needs_attention(s)]

        return {
            "members": sort.apply(rows),
            "totals": totals.to_dict(),
            "sort": sort.to_dict(),
            "topPerformer": {
                "name": top.label,
                "completionRate": round_half_up(top.value * 100),
                "done": top.row.done if top.row else 0,
                "projectCount": top.row.project_count if top.row else 0,
            },
            "department": {
                "memberCount": len(stats),
                "avgProjectsPerMember": round_half_up(totals.project_count / len(stats)) if stats else 0,
                "completionRate": percent(totals.done, totals.project_count),
            },
            "attention": {
                "members": [s.name for s in attention],
                "count": len(attention),
                "onHoldTotal": totals.on_hold,
            },
        }

    def _group_head(self, users: Sequence[User], projects: Sequence[Project], sort: SortState) -> dict:
        stats = build_member_stats(users, projects)
        departments = department_stats(users, projects)

        cards = []
        for group in departments:
            card = group.to_dict()
            card["department"] = card.pop("key")
            card["groupTeamLeader"] = _first_name(
                users, Role.GROUP_TEAM_LEADER, lambda u, dept=group.key: u.department == dept
            )
            cards.append(card)

        def best(field: str) -> dict:
            return _top(top_by(departments, lambda g: getattr(g.projects, field), lambda g: g.key))

        return {
            **self._member_table(stats, sort),
            "projectStatus": project_status_summary(projects),
            "counts": {"departments": len(department_groups(users)), "teams": team_count(users)},
            "departments": cards,
            "top": {"live": best("live"), "ongoing": best("ongoing"), "uat": best("uat")},
        }

    def _leader(self, users: Sequence[User], projects: Sequence[Project], sort: SortState) -> dict:
        stats = build_member_stats(users, projects)
        divisions = division_stats(users, projects)
        team_leaders = [u for u in users if u.role_enum == Role.TEAM_LEADER]
        done = sum(1 for p in projects if p.status == ProjectStatus.DONE.value)

        def departments_in(group: GroupStats) -> int:
            # each Team Leader of a division runs one department
            return len(group.members)

        cards = []
        for group in divisions:
            card = group.to_dict()
            card["division"] = card.pop("key")
            card["groupHead"] = _first_name(
                users, Role.GROUP_HEAD, lambda u, div=group.key: division_of(u) == div
            )
            card["departments"] = departments_in(group)
            card["scale"] = (
                f"{card['departments']} depts | {group.teams} teams | {group.projects.project_count} projects"
            )
            cards.append(card)

        return {
            **self._member_table(stats, sort),
            "projectStatus": project_status_summary(projects),
            "counts": {
                "divisions": len(divisions),
                "departments": len({u.department for u in team_leaders}),
                "teams": len(team_leaders),
                "projects": len(projects),
            },
            "successRate": percent(done, len(projects)),
            "divisions": cards,
            "top": {
                "completionRate": _top(
                    top_by(divisions, lambda g: percent(g.projects.done, g.projects.project_count), lambda g: g.key)
                ),
                "departments": _top(top_by(divisions, departments_in, lambda g: g.key)),
                "projects": _top(top_by(divisions, lambda g: g.projects.project_count, lambda g: g.key)),
            },
        }

    def _super_admin(self, users: Sequence[User], projects: Sequence[Project], sort: SortState) -> dict:
        return {
            "users": sort.apply([u.to_public() for u in users]),
            "departments": list(DEPARTMENTS),
            "roles": [r.value for r in HIERARCHY_LEVELS],
            "sort": sort.to_dict(),
        }
