from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import json_result
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/teachers", methods=["GET"], endpoint="api_teachers")
    def api_teachers():
        return json_result(container.directory_service.list_teachers(), key="teachers")

    @app.route("/api/students", methods=["GET"], endpoint="api_students")
    def api_students():
        return json_result(container.directory_service.list_students(), key="students")

    @app.route("/api/sessions/roster", methods=["GET"], endpoint="api_session_roster")
    def api_session_roster():
        """Teacher and active students for one subject/level, used to fill an attendance sheet."""

        subject_id = request.args.get("subject_id")
        level_id = request.args.get("level_id")

        teacher_result = container.directory_service.get_teacher_for_offering(subject_id, level_id)
        if not teacher_result.ok:
            return json_result(teacher_result)

        students_result = container.directory_service.get_students_for_offering(subject_id, level_id)
        if not students_result.ok:
            return json_result(students_result)

        return jsonify(
            {
                "success": True,
                "offering_id": teacher_result.data["offering_id"],
                "teacher": teacher_result.data["teacher"],
                "students": students_result.data["students"],
            }
        ), 200
