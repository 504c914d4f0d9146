from __future__ import annotations

from typing import Any, Mapping

from ..core.constants import DEFAULT_ROSTER_ROLES
from ..core.exceptions import NotFoundError
from ..storage.repository import DocumentRepository
from .model import Member


class MemberService:
    def __init__(self, members: DocumentRepository):
        self._members = members

    def list_members(self) -> list[Member]:
        return [Member.from_record(r) for r in self._members.list_all()]

    def create(self, data: Mapping[str, Any]) -> Member:
        fields = {k: v for k, v in data.items() if k != "id"}
        return Member.from_record(self._members.create(fields))

    def update(self, member_id: str, data: Mapping[str, Any]) -> Member:
        fields = {k: v for k, v in data.items() if k != "id"}
        record = self._members.update(member_id, fields)
        if record is None:
            raise NotFoundError("Member not found")
        return Member.from_record(record)

    def delete(self, member_id: str) -> None:
        if not self._members.delete_by_id(member_id):
            raise NotFoundError("Member not found")

    def roster(self) -> list[dict]:
        """Roles shown in the sidebar role switcher, with the members holding each.

        Roles keep first-seen order; an empty roster still offers Team Leader.
        """

        members = self.list_members()
        if not members:
            return [{"role": r.value, "members": []} for r in DEFAULT_ROSTER_ROLES]

        by_role: dict[str, list[str]] = {}
        for m in members:
            by_role.setdefault(m.role, []).append(m.name)
        return [{"role": role, "members": names} for role, names in by_role.items()]
