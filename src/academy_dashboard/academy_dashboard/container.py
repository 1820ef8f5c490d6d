from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .catalog.mysql_catalog_repository import MySQLCatalogRepository
from .catalog.repository import CatalogRepository
from .catalog.service import CatalogService
from .core.constants import BILLING_WEEKS_PER_MONTH
from .database.connection import DatabaseConnection
from .directory.mysql_directory_repository import MySQLDirectoryRepository
from .directory.repository import DirectoryRepository
from .directory.service import DirectoryService
from .payments.mysql_payment_repository import MySQLPaymentRepository
from .payments.repository import PaymentRepository
from .payments.service import PaymentService


@dataclass(frozen=True)
class Container:
    conn: Any

    catalog_repo: CatalogRepository
    directory_repo: DirectoryRepository
    attendance_repo: AttendanceRepository
    payments_repo: PaymentRepository

    catalog_service: CatalogService
    directory_service: DirectoryService
    attendance_service: AttendanceService
    payment_service: PaymentService


def wire(
    *,
    conn: Any,
    catalog_repo: CatalogRepository,
    directory_repo: DirectoryRepository,
    attendance_repo: AttendanceRepository,
    payments_repo: PaymentRepository,
    weeks_per_month: int = BILLING_WEEKS_PER_MONTH,
) -> Container:
    """Build services over the given repositories (MySQL in production, fakes in tests)."""

    catalog_service = CatalogService(catalog_repo)
    directory_service = DirectoryService(directory_repo, catalog_service)
    attendance_service = AttendanceService(attendance_repo, catalog_repo, directory_repo)
    payment_service = PaymentService(
        payments_repo,
        attendance_repo,
        catalog_repo,
        directory_repo,
        weeks_per_month=weeks_per_month,
    )

    return Container(
        conn=conn,
        catalog_repo=catalog_repo,
        directory_repo=directory_repo,
        attendance_repo=attendance_repo,
        payments_repo=payments_repo,
        catalog_service=catalog_service,
        directory_service=directory_service,
        attendance_service=attendance_service,
        payment_service=payment_service,
    )


def build_container(*, db_config: dict, weeks_per_month: int = BILLING_WEEKS_PER_MONTH) -> Container:
    conn = DatabaseConnection.from_dict(db_config)

    return wire(
        conn=conn,
        catalog_repo=MySQLCatalogRepository(conn),
        directory_repo=MySQLDirectoryRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        payments_repo=MySQLPaymentRepository(conn),
        weeks_per_month=weeks_per_month,
    )
