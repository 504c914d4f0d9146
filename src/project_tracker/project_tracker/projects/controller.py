from __future__ import annotations

from flask import Flask, jsonify

from ..common.responses import domain_failure, read_json_object, server_failure
from ..container import Container
from ..core.constants import API_PREFIX
from ..core.exceptions import DomainError


def register(app: Flask, container: Container) -> None:
    @app.route(f"{API_PREFIX}/projects", methods=["GET"], endpoint="list_projects")
    def list_projects():
        try:
            return jsonify([p.to_record() for p in container.project_service.list_projects()])
        except Exception as e:
            return server_failure("Failed to fetch projects", e)

    @app.route(f"{API_PREFIX}/projects", methods=["POST"], endpoint="create_project")
    def create_project():
        try:
            project = container.project_service.create(read_json_object())
            return jsonify(project.to_record()), 201
        except DomainError as e:
            return domain_failure(e)
        except Exception as e:
            return server_failure("Failed to create project", e)

    @app.route(f"{API_PREFIX}/projects/<project_id>", methods=["PUT"], endpoint="update_project")
    def update_project(project_id: str):
        try:
            project = container.project_service.update(project_id, read_json_object())
            return jsonify(project.to_record())
        except DomainError as e:
            return domain_failure(e)
        except Exception as e:
            return server_failure("Failed to update project", e)

    @app.route(f"{API_PREFIX}/projects/<project_id>", methods=["DELETE"], endpoint="delete_project")
    def delete_project(project_id: str):
        try:
            container.project_service.delete(project_id)
            return "", 204
        except DomainError as e:
            return domain_failure(e)
        except Exception as e:
            return server_failure("Failed to delete project", e)
