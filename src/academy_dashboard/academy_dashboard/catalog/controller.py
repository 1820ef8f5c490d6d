from __future__ import annotations

from flask import Flask, request

from ..common.http import json_result
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/catalog", methods=["GET"], endpoint="api_catalog")
    def api_catalog():
        return json_result(container.catalog_service.list_subjects_and_levels())

    @app.route("/api/offerings", methods=["GET"], endpoint="api_offerings")
    def api_offerings():
        return json_result(container.catalog_service.list_offerings_with_pricing(), key="offerings")

    @app.route("/api/offerings/resolve", methods=["GET"], endpoint="api_offerings_resolve")
    def api_offerings_resolve():
        result = container.catalog_service.resolve_offering(
            request.args.get("subject_id"),
            request.args.get("level_id"),
        )
        return json_result(result, key="offering_id")
