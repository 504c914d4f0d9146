from __future__ import annotations

from typing import Mapping

from .repository import DocumentRepository


def copy_collections(
    source: Mapping[str, DocumentRepository],
    target: Mapping[str, DocumentRepository],
) -> dict[str, int]:
    """Copy every record of each source collection into the matching target.

    Records keep their ids (``replace_or_merge``), so running the copy twice
    leaves the target unchanged. Records without an id are skipped. Returns
    the number of records written per collection.
    """

    copied: dict[str, int] = {}
    for name, src in source.items():
        dst = target[name]
        count = 0
        for record in src.list_all():
            doc_id = record.get("id")
            if doc_id in (None, ""):
                continue
            dst.replace_or_merge(str(doc_id), {**record, "id": str(doc_id)})
            count += 1
        copied[name] = count
    return copied
