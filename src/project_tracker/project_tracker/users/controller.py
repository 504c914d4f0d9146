from __future__ import annotations

from flask import Flask, jsonify

from ..common.responses import domain_failure, read_json_object, server_failure
from ..container import Container
from ..core.constants import API_PREFIX
from ..core.exceptions import DomainError


def register(app: Flask, container: Container) -> None:
    @app.route(f"{API_PREFIX}/auth/users", methods=["GET"], endpoint="list_users")
    def list_users():
        try:
            return jsonify(container.user_service.list_public())
        except Exception as e:
            return server_failure("Failed to fetch users", e)

    @app.route(f"{API_PREFIX}/auth/login", methods=["POST"], endpoint="login")
    def login():
        try:
            data = read_json_object()
            s_user = container.auth_service.authenticate(data.get("username"), data.get("password"))
            return jsonify({"success": True, "user": s_user.to_dict()})
        except DomainError as e:
            return domain_failure(e)
        except Exception as e:
            return server_failure("Login failed", e)

    @app.route(f"{API_PREFIX}/users", methods=["POST"], endpoint="create_user")
    def create_user():
        try:
            user = container.user_service.create_account(read_json_object())
            return jsonify({"success": True, "user": user.to_public()}), 201
        except DomainError as e:
            return domain_failure(e)
        except Exception as e:
            return server_failure("Failed to create user", e)

    @app.route(f"{API_PREFIX}/users/<user_id>", methods=["PUT"], endpoint="update_user")
    def update_user(user_id: str):
        try:
            user = container.user_service.update_account(user_id, read_json_object())
            return jsonify({"success": True, "user": user.to_public()})
        except DomainError as e:
            return domain_failure(e)
        except Exception as e:
            return server_failure("Failed to update user", e)

    @app.route(f"{API_PREFIX}/users/<user_id>", methods=["DELETE"], endpoint="delete_user")
    def delete_user(user_id: str):
        try:
            container.user_service.delete_account(user_id)
            return jsonify({"success": True, "message": "User deleted successfully"})
        except DomainError as e:
            return domain_failure(e)
        except Exception as e:
            return server_failure("Failed to delete user", e)
