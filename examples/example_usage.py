"""Example: use the service layer directly (no Flask).

Controllers are a thin layer; the business rules live in the services.
"""

import importlib

from config import get_settings_module

from src.academy_dashboard.academy_dashboard.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)
    result = container.payment_service.compute_alerts()
    if not result.ok:
        print("Error:", result.error)
        return
    for alert in result.data.alerts:
        print(f"{alert.student_name}: {alert.subject_name} {alert.level_name} "
              f"{alert.attendance_count}/{alert.expected_attendance} -> {alert.amount_due}")


if __name__ == "__main__":
    main()
