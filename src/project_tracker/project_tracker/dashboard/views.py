from __future__ import annotations

from typing import Optional

from ..core.constants import HIERARCHY_LEVELS
from ..core.enums import DashboardView, Role

VIEW_BY_ROLE: dict[Role, DashboardView] = {
    Role.TEAM_MEMBER: DashboardView.TEAM_MEMBER,
    Role.TEAM_LEADER: DashboardView.TEAM_LEADER,
    Role.GROUP_TEAM_LEADER: DashboardView.GROUP_TEAM_LEADER,
    Role.GROUP_HEAD: DashboardView.GROUP_HEAD,
    Role.LEADER_OF_GROUP_HEAD: DashboardView.LEADER,
    Role.MANAGING_DIRECTOR: DashboardView.LEADER,
    Role.SUPER_ADMIN: DashboardView.SUPER_ADMIN,
}


def view_for_role(role) -> DashboardView:
    """Pick the dashboard for a role; unknown roles get the Team Member view."""
    parsed: Optional[Role] = role if isinstance(role, Role) else Role.parse(role)
    if parsed is None:
        return DashboardView.TEAM_MEMBER
    return VIEW_BY_ROLE[parsed]


def hierarchy_level(role) -> int:
    """Position in the six-tier hierarchy, -1 for Super Admin or unknown roles."""
    parsed = role if isinstance(role, Role) else Role.parse(role)
    if parsed in HIERARCHY_LEVELS:
        return HIERARCHY_LEVELS.index(parsed)
    return -1
