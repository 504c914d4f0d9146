from __future__ import annotations

from enum import Enum
from typing import Optional


class Role(str, Enum):
    """Vị trí trong cây tổ chức, dùng cho phân quyền và chọn dashboard."""

    TEAM_MEMBER = "Team Member"
    TEAM_LEADER = "Team Leader"
    GROUP_TEAM_LEADER = "Group Team Leader"
    GROUP_HEAD = "Group Head"
    LEADER_OF_GROUP_HEAD = "Leader of Group Head"
    MANAGING_DIRECTOR = "Managing Director"
    SUPER_ADMIN = "Super Admin"

    @classmethod
    def parse(cls, value) -> Optional["Role"]:
        try:
            return cls(value)
        except ValueError:
            return None


class ProjectType(str, Enum):
    MAIN = "main"
    SUB = "sub"


class Priority(str, Enum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class ProjectStatus(str, Enum):
    """Trạng thái dự án lưu trong kho dữ liệu."""

    ONGOING = "Ongoing"
    ON_HOLD = "On Hold"
    DONE = "DONE"
    CANCELLED = "Cancelled"
    IN_DEVELOPMENT = "In Development"
    UAT = "UAT"
    LIVE = "LIVE"
    RE_DEVELOPMENT = "Re Development"


class HealthScore(str, Enum):
    EXCELLENT = "Excellent"
    GOOD = "Good"
    FAIR = "Fair"
    NEEDS_FOCUS = "Needs Focus"


class DashboardView(str, Enum):
    """Các biến thể màn hình dashboard theo vai trò."""

    TEAM_MEMBER = "team_member"
    TEAM_LEADER = "team_leader"
    GROUP_TEAM_LEADER = "group_team_leader"
    GROUP_HEAD = "group_head"
    LEADER = "leader"
    SUPER_ADMIN = "super_admin"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


class Trend(str, Enum):
    UP = "up"
    FLAT = "flat"
    DOWN = "down"


class SessionState(str, Enum):
    ANONYMOUS = "anonymous"
    AUTHENTICATED = "authenticated"
