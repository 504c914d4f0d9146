from __future__ import annotations

import importlib
from pathlib import Path

from dotenv import load_dotenv
from flask import Flask, jsonify
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from config import get_settings_module

from .container import build_container
from .core.constants import API_PREFIX, USERS_COLLECTION
from .database.bootstrap import apply_schema, ensure_demo_users, list_tables
from .dashboard.controller import register as register_dashboard
from .members.controller import register as register_members
from .projects.controller import register as register_projects
from .users.controller import register as register_users

SETTING_NAMES = (
    "SECRET_KEY",
    "DEBUG",
    "STORAGE_BACKEND",
    "DATA_DIR",
    "DB_CONFIG",
    "AUTO_INIT_DB",
    "AUTO_SEED_DB",
    "CORS_ORIGINS",
)


def _load_settings(overrides: dict) -> tuple[str, dict]:
    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    values = {name: getattr(settings, name, None) for name in SETTING_NAMES}
    values.update(overrides)
    return settings_module, values


def create_app(**overrides) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module, settings = _load_settings(overrides)
    app.secret_key = settings["SECRET_KEY"]
    app.config["DEBUG"] = bool(settings["DEBUG"])
    app.config["STORAGE_BACKEND"] = settings["STORAGE_BACKEND"] or "json"

    origins = settings["CORS_ORIGINS"]
    CORS(app, resources={rf"{API_PREFIX}/*": {"origins": "*" if origins is None else origins}})

    db_config = dict(settings["DB_CONFIG"] or {})
    container = build_container(
        storage_backend=app.config["STORAGE_BACKEND"],
        data_dir=settings["DATA_DIR"] or "data",
        db_config=db_config,
    )
    app.extensions["project_tracker"] = container

    # In ra cấu hình đang dùng để dễ kiểm tra khi khởi động.
    if app.config["DEBUG"]:
        if container.conn is not None:
            target = f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')}"
        else:
            target = str(Path(settings["DATA_DIR"] or "data").resolve())
        print("[project-tracker] settings=", settings_module, " storage=", app.config["STORAGE_BACKEND"], " ->", target)

    if settings["AUTO_INIT_DB"] and container.conn is not None:
        schema_path = Path(__file__).resolve().parents[3] / "database" / "schema.sql"
        apply_schema(container.conn, schema_path=schema_path)
        if app.config["DEBUG"]:
            print(f"[project-tracker] schema ready (tables={len(list_tables(container.conn))})")
    if settings["AUTO_SEED_DB"]:
        added = ensure_demo_users(container.collections[USERS_COLLECTION])
        if app.config["DEBUG"]:
            print(f"[project-tracker] demo users ready (added={added})")

    @app.errorhandler(HTTPException)
    def http_error(e: HTTPException):
        return jsonify({"success": False, "message": e.description}), e.code

    register_users(app, container)
    register_members(app, container)
    register_projects(app, container)
    register_dashboard(app, container)

    return app
