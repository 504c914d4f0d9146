from __future__ import annotations

from typing import Any, Mapping

from ..common.validators import (
    optional_iso_date,
    require_choice,
    require_non_empty,
    require_non_negative_int,
    require_string_list,
)
from ..core.enums import Priority, ProjectStatus, ProjectType
from ..core.exceptions import NotFoundError
from ..storage.repository import DocumentRepository
from .model import Project

# Defaults of the project form.
DEFAULTS = {
    "type": ProjectType.MAIN.value,
    "priority": Priority.MEDIUM.value,
    "status": ProjectStatus.IN_DEVELOPMENT.value,
    "startDate": "",
    "endDate": "",
    "commonPages": 0,
    "uniquePages": 0,
    "tasks": [],
    "teamMembers": [],
}


def normalize_project(data: Mapping[str, Any]) -> dict:
    """Validate a full project payload (without id) and return the record to store.

    ``endDate`` is not compared with ``startDate``.
    """

    record = {**DEFAULTS, **{k: v for k, v in data.items() if k != "id"}}

    record["name"] = require_non_empty(record.get("name"), "Project name")
    project_type = require_choice(record.get("type"), ProjectType, "type")
    record["type"] = project_type.value
    record["priority"] = require_choice(record.get("priority"), Priority, "priority").value
    record["status"] = require_choice(record.get("status"), ProjectStatus, "status").value

    for key in ("startDate", "endDate"):
        optional_iso_date(record.get(key), key)
        record[key] = record.get(key) or ""

    record["commonPages"] = require_non_negative_int(record.get("commonPages"), "commonPages")
    record["uniquePages"] = require_non_negative_int(record.get("uniquePages"), "uniquePages")
    record["tasks"] = [t.strip() for t in require_string_list(record.get("tasks"), "tasks") if t.strip()]

    members = require_string_list(record.get("teamMembers"), "teamMembers")
    record["teamMembers"] = list(dict.fromkeys(members))

    if project_type == ProjectType.SUB:
        record["mainProjectId"] = require_non_empty(record.get("mainProjectId"), "Main project")
    else:
        record.pop("mainProjectId", None)

    return record


class ProjectService:
    def __init__(self, projects: DocumentRepository):
        self._projects = projects

    def list_projects(self) -> list[Project]:
        return [Project.from_record(r) for r in self._projects.list_all()]

    def create(self, data: Mapping[str, Any]) -> Project:
        return Project.from_record(self._projects.create(normalize_project(data)))

    def update(self, project_id: str, data: Mapping[str, Any]) -> Project:
        existing = self._projects.get_by_id(project_id)
        if existing is None:
            raise NotFoundError("Project not found")

        record = normalize_project({**existing, **data})
        if record["type"] == ProjectType.MAIN.value:
            # switching sub -> main drops the parent reference from storage too
            record["mainProjectId"] = None

        updated = self._projects.update(project_id, record)
        if updated is None:
            raise NotFoundError("Project not found")
        return Project.from_record(updated)

    def delete(self, project_id: str) -> None:
        if not self._projects.delete_by_id(project_id):
            raise NotFoundError("Project not found")
