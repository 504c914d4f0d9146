from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.responses import domain_failure, server_failure
from ..container import Container
from ..core.constants import API_PREFIX
from ..core.exceptions import DomainError
from .service import parse_sort


def register(app: Flask, container: Container) -> None:
    @app.route(f"{API_PREFIX}/dashboard", methods=["GET"], endpoint="dashboard")
    def dashboard():
        try:
            sort = parse_sort(request.args.get("sortField"), request.args.get("sortOrder"))
            return jsonify(container.dashboard_service.build(request.args.get("role"), sort))
        except DomainError as e:
            return domain_failure(e)
        except Exception as e:
            return server_failure("Failed to build dashboard", e)
