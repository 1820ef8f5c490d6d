from __future__ import annotations

from flask import Flask

from ..common.http import json_body, json_result
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/payments/alerts", methods=["GET"], endpoint="api_payment_alerts")
    def api_payment_alerts():
        return json_result(container.payment_service.compute_alerts())

    @app.route("/api/payments", methods=["POST"], endpoint="api_record_payment")
    def api_record_payment():
        data = json_body()
        result = container.payment_service.record_payment(
            student_id=data.get("student_id"),
            offering_id=data.get("offering_id"),
            amount=data.get("amount"),
            payment_date=data.get("payment_date"),
            month_paid_for=data.get("month_paid_for"),
        )
        return json_result(result, status=201)

    @app.route("/api/students/<int:student_id>/payments", methods=["GET"], endpoint="api_student_payments")
    def api_student_payments(student_id: int):
        return json_result(container.payment_service.list_student_payments(student_id), key="payments")
