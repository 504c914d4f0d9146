from __future__ import annotations

from flask import Flask, jsonify

from ..common.responses import domain_failure, read_json_object, server_failure
from ..container import Container
from ..core.constants import API_PREFIX
from ..core.exceptions import DomainError


def register(app: Flask, container: Container) -> None:
    @app.route(f"{API_PREFIX}/members", methods=["GET"], endpoint="list_members")
    def list_members():
        try:
            return jsonify([m.to_record() for m in container.member_service.list_members()])
        except Exception as e:
            return server_failure("Failed to fetch members", e)

    @app.route(f"{API_PREFIX}/members/roster", methods=["GET"], endpoint="member_roster")
    def member_roster():
        try:
            return jsonify(container.member_service.roster())
        except Exception as e:
            return server_failure("Failed to fetch member roster", e)

    @app.route(f"{API_PREFIX}/members", methods=["POST"], endpoint="create_member")
    def create_member():
        try:
            member = container.member_service.create(read_json_object())
            return jsonify(member.to_record()), 201
        except DomainError as e:
            return domain_failure(e)
        except Exception as e:
            return server_failure("Failed to create member", e)

    @app.route(f"{API_PREFIX}/members/<member_id>", methods=["PUT"], endpoint="update_member")
    def update_member(member_id: str):
        try:
            member = container.member_service.update(member_id, read_json_object())
            return jsonify(member.to_record())
        except DomainError as e:
            return domain_failure(e)
        except Exception as e:
            return server_failure("Failed to update member", e)

    @app.route(f"{API_PREFIX}/members/<member_id>", methods=["DELETE"], endpoint="delete_member")
    def delete_member(member_id: str):
        try:
            container.member_service.delete(member_id)
            return "", 204
        except DomainError as e:
            return domain_failure(e)
        except Exception as e:
            return server_failure("Failed to delete member", e)
