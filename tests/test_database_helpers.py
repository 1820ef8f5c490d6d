from __future__ import annotations

from datetime import date

import mysql.connector
import pytest

from src.academy_dashboard.academy_dashboard.attendance.mysql_attendance_repository import MySQLAttendanceRepository
from src.academy_dashboard.academy_dashboard.container import wire
from src.academy_dashboard.academy_dashboard.core.enums import ErrorKind
from src.academy_dashboard.academy_dashboard.core.exceptions import StoreError
from src.academy_dashboard.academy_dashboard.database.bootstrap import iter_sql_statements, strip_create_db_and_use
from src.academy_dashboard.academy_dashboard.database.mysql_base import db_cursor, where_clause


class FakeCursor:
    def __init__(self, fail: bool):
        self.fail = fail
        self.closed = False

    def execute(self, sql, params=()):
        if self.fail:
            raise mysql.connector.Error("Duplicate entry")

    def close(self):
        self.closed = True


class FakeConnection:
    def __init__(self, fail: bool, fail_rollback: bool = False):
        self.cur = FakeCursor(fail)
        self.fail_rollback = fail_rollback
        self.committed = False
        self.rolled_back = False
        self.closed = False

    def cursor(self, dictionary=True):
        return self.cur

    def commit(self):
        self.committed = True

    def rollback(self):
        if self.fail_rollback:
            raise mysql.connector.errors.OperationalError("MySQL Connection not available")
        self.rolled_back = True

    def close(self):
        self.closed = True


class FakeFactory:
    def __init__(self, *, fail_execute=False, fail_connect=False, fail_rollback=False):
        self.fail_connect = fail_connect
        self.conn = FakeConnection(fail_execute, fail_rollback)

    def connect(self):
        if self.fail_connect:
            raise mysql.connector.Error("Can't connect to MySQL server")
        return self.conn


def test_db_cursor_commits_on_success():
    factory = FakeFactory()
    with db_cursor(factory) as (_, cur):
        cur.execute("SELECT 1")

    assert factory.conn.committed
    assert factory.conn.closed
    assert factory.conn.cur.closed


def test_db_cursor_translates_driver_errors():
    factory = FakeFactory(fail_execute=True)

    with pytest.raises(StoreError, match="Duplicate entry"):
        with db_cursor(factory) as (_, cur):
            cur.execute("INSERT ...")

    assert factory.conn.rolled_back
    assert not factory.conn.committed
    assert factory.conn.closed


def test_db_cursor_still_raises_store_error_when_rollback_fails():
    factory = FakeFactory(fail_execute=True, fail_rollback=True)

    with pytest.raises(StoreError, match="Duplicate entry"):
        with db_cursor(factory) as (_, cur):
            cur.execute("INSERT ...")

    assert factory.conn.closed


def test_db_cursor_reports_unavailable_database():
    with pytest.raises(StoreError, match="Database unavailable"):
        with db_cursor(FakeFactory(fail_connect=True)):
            pass


def test_where_clause():
    assert where_clause([]) == ""
    assert where_clause(["a=%s", "b=%s"]) == "WHERE a=%s AND b=%s"


def test_sql_splitter_respects_quotes_and_comments():
    sql = """
    -- demo; not a statement
    CREATE DATABASE IF NOT EXISTS academy_db;
    USE academy_db;
    INSERT INTO subjects (name, description) VALUES ('Maths; Advanced', 'It''s fine');
    INSERT INTO levels (name) VALUES ("A;B")
    """

    statements = list(iter_sql_statements(strip_create_db_and_use(sql)))

    assert len(statements) == 2
    assert statements[0].startswith("INSERT INTO subjects")
    assert "'Maths; Advanced'" in statements[0]
    assert statements[1] == 'INSERT INTO levels (name) VALUES ("A;B")'


def test_lost_connection_is_a_tagged_failure_for_services(container, catalog_repo, directory_repo, fixed_now):
    catalog_repo.add_offering(10, sessions=1)
    directory_repo.add_teacher(1)
    directory_repo.add_student(100)
    directory_repo.enroll(1, student_id=100, offering_id=10)
    dead = MySQLAttendanceRepository(FakeFactory(fail_execute=True, fail_rollback=True))
    services = wire(
        conn=None,
        catalog_repo=catalog_repo,
        directory_repo=directory_repo,
        attendance_repo=dead,
        payments_repo=container.payments_repo,
    )

    recorded = services.attendance_service.record_session(
        offering_id=10, attendance_date=date(2024, 3, 1), teacher_id=1, teacher_present=True,
        student_attendance=[{"student_id": 100, "present": True}],
    )
    alerts = services.payment_service.compute_alerts(today=fixed_now.date())

    assert recorded.error_kind == ErrorKind.STORE
    assert alerts.ok
    assert alerts.data.alerts == []
    assert alerts.data.skipped_enrollment_ids == [1]
