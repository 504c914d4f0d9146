"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from .enums import ProjectStatus, Role

API_PREFIX = "/api"

USERS_COLLECTION = "users"
MEMBERS_COLLECTION = "members"
PROJECTS_COLLECTION = "projects"
COLLECTIONS = (USERS_COLLECTION, MEMBERS_COLLECTION, PROJECTS_COLLECTION)

# Flat-file layout: one document for users, one shared by members and projects.
USERS_FILE = "users.json"
DB_FILE = "db.json"

HIERARCHY_LEVELS = (
    Role.TEAM_MEMBER,
    Role.TEAM_LEADER,
    Role.GROUP_TEAM_LEADER,
    Role.GROUP_HEAD,
    Role.LEADER_OF_GROUP_HEAD,
    Role.MANAGING_DIRECTOR,
)

# Statuses with their own column on the dashboards. Cancelled, In Development
# and Re Development only count towards projectCount.
TRACKED_STATUSES = (
    ProjectStatus.ONGOING,
    ProjectStatus.ON_HOLD,
    ProjectStatus.DONE,
    ProjectStatus.UAT,
    ProjectStatus.LIVE,
)

EXCELLENT_LIVE_RATIO = 0.5
GOOD_LIVE_RATIO = 0.3
FAIR_UAT_RATIO = 0.4

TREND_UP_PERCENT = 50
TREND_FLAT_PERCENT = 30
ATTENTION_ON_HOLD = 2
ATTENTION_COMPLETION_RATE = 0.3

DEPARTMENTS = (
    "Frontend Development",
    "Backend Development",
    "Mobile Development",
    "DevOps & Infrastructure",
    "Quality Assurance",
    "UI/UX Design",
    "Product Management",
    "Data Science",
)

# The sidebar falls back to this role when the roster is empty.
DEFAULT_ROSTER_ROLES = (Role.TEAM_LEADER,)
