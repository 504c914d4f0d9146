from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, Sequence


class DocumentRepository(Protocol):
    """Giao diện kho tài liệu cho một collection (users, projects, members).

    Lưu ý (DIP): tầng service phụ thuộc vào interface này, không phụ thuộc
    trực tiếp file JSON hay MySQL. Records are plain dicts keyed by ``id``.
    """

    def list_all(self) -> Sequence[dict]:
        raise NotImplementedError

    def get_by_id(self, doc_id: str) -> Optional[dict]:
        raise NotImplementedError

    def find_by(self, field: str, value: Any) -> Sequence[dict]:
        raise NotImplementedError

    def create(self, record: Mapping[str, Any]) -> dict:
        """Store ``record`` under a freshly generated id and return it."""
        raise NotImplementedError

    def update(self, doc_id: str, fields: Mapping[str, Any]) -> Optional[dict]:
        """Merge ``fields`` into the stored record; ``None`` when absent."""
        raise NotImplementedError

    def replace_or_merge(self, doc_id: str, record: Mapping[str, Any], *, merge: bool = False) -> dict:
        raise NotImplementedError

    def delete_by_id(self, doc_id: str) -> bool:
        raise NotImplementedError
