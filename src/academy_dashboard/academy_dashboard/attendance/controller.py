from __future__ import annotations

from flask import Flask, request

from ..common.http import json_body, json_result
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/attendance/sessions", methods=["POST"], endpoint="api_record_session")
    def api_record_session():
        data = json_body()
        result = container.attendance_service.record_session(
            offering_id=data.get("offering_id"),
            attendance_date=data.get("attendance_date"),
            teacher_id=data.get("teacher_id"),
            teacher_present=data.get("teacher_present"),
            replacement_teacher_id=data.get("replacement_teacher_id"),
            student_attendance=data.get("student_attendance") or [],
        )
        return json_result(result, status=201)

    @app.route("/api/attendance", methods=["GET"], endpoint="api_attendance_records")
    def api_attendance_records():
        return json_result(container.attendance_service.query_attendance(request.args.to_dict()))
