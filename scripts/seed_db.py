from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.project_tracker.project_tracker.container import build_container
from src.project_tracker.project_tracker.core.constants import USERS_COLLECTION
from src.project_tracker.project_tracker.database.bootstrap import ensure_demo_users


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    backend = getattr(settings, "STORAGE_BACKEND", "json")
    container = build_container(
        storage_backend=backend,
        data_dir=getattr(settings, "DATA_DIR", "data"),
        db_config=dict(settings.DB_CONFIG),
    )

    added = ensure_demo_users(container.collections[USERS_COLLECTION])
    print(f"OK: Seeded demo users -> {backend} (added={added})")


if __name__ == "__main__":
    main()
