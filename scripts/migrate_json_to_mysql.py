"""Copy users.json / db.json into the MySQL documents table.

Usage: python scripts/migrate_json_to_mysql.py [DATA_DIR]

Records keep their ids; running it twice overwrites instead of duplicating.
"""

from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.project_tracker.project_tracker.common.ids import IdGenerator
from src.project_tracker.project_tracker.container import build_json_collections, build_mysql_collections
from src.project_tracker.project_tracker.database.bootstrap import apply_schema
from src.project_tracker.project_tracker.database.connection import DBConfig, DatabaseConnection
from src.project_tracker.project_tracker.storage.migration import copy_collections


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    data_dir = Path(sys.argv[1]) if len(sys.argv) > 1 else Path(getattr(settings, "DATA_DIR", "data"))
    conn = DatabaseConnection(DBConfig.from_dict(dict(settings.DB_CONFIG)))

    apply_schema(conn, schema_path=REPO_ROOT / "database" / "schema.sql")

    ids = IdGenerator()
    counts = copy_collections(build_json_collections(data_dir, ids), build_mysql_collections(conn, ids))
    summary = ", ".join(f"{name}={n}" for name, n in counts.items())
    print(f"OK: Migrated {data_dir} -> {conn.config.database} ({summary})")


if __name__ == "__main__":
    main()
