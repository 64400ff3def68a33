from __future__ import annotations

import uuid
from datetime import datetime
from decimal import Decimal
from typing import Any, Optional, Sequence

import mysql.connector

from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, from_db_datetime, to_db_datetime
from ..settings.model import AppSettings
from ..settings.pin_hashing import verify_pin
from ..teachers.model import EDITABLE_FIELDS, STATUS_FIELDS, Teacher
from ..time_entries.model import UPDATABLE_FIELDS, TimeEntry

_TEACHER_COLUMNS = "id, name, hourly_rate, max_billable_hours, is_checked_in, current_check_in_time"
_ENTRY_COLUMNS = (
    "id, teacher_id, entry_date, check_in_time, check_out_time, hours_worked, billable_hours, pay"
)


def _row_to_teacher(r: dict) -> Teacher:
    return Teacher(
        id=r["id"],
        name=r["name"],
        hourly_rate=Decimal(r["hourly_rate"]),
        max_billable_hours=Decimal(r["max_billable_hours"]),
        is_checked_in=bool(r["is_checked_in"]),
        current_check_in_time=from_db_datetime(r.get("current_check_in_time")),
    )


def _row_to_entry(r: dict) -> TimeEntry:
    def _dec(value) -> Optional[Decimal]:
        return None if value is None else Decimal(value)

    return TimeEntry(
        id=r["id"],
        teacher_id=r["teacher_id"],
        date=r["entry_date"],
        check_in_time=from_db_datetime(r["check_in_time"]),
        check_out_time=from_db_datetime(r.get("check_out_time")),
        hours_worked=_dec(r.get("hours_worked")),
        billable_hours=_dec(r.get("billable_hours")),
        pay=_dec(r.get("pay")),
    )


def _db_value(value: Any) -> Any:
    if isinstance(value, datetime):
        return to_db_datetime(value)
    if isinstance(value, bool):
        return int(value)
    return value


class MySQLStorage:
    """Durable storage over the tables in database/schema.sql.

    The one-open-entry-per-teacher rule is backed by a unique index, so a racing
    second check-in fails with ConflictError instead of creating a duplicate.
    """

    backend_name = "mysql"

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @property
    def conn_factory(self) -> DatabaseConnection:
        return self._conn_factory

    # Teachers
    def list_teachers(self) -> Sequence[Teacher]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_TEACHER_COLUMNS} FROM teachers ORDER BY name ASC")
            return [_row_to_teacher(r) for r in fetchall(cur)]

    def get_teacher(self, teacher_id: str) -> Optional[Teacher]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_TEACHER_COLUMNS} FROM teachers WHERE id=%s", (teacher_id,))
            r = fetchone(cur)
            return _row_to_teacher(r) if r else None

    def create_teacher(self, *, name: str, hourly_rate: Decimal, max_billable_hours: Decimal) -> Teacher:
        teacher = Teacher(
            id=str(uuid.uuid4()),
            name=name,
            hourly_rate=hourly_rate,
            max_billable_hours=max_billable_hours,
        )
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO teachers(id, name, hourly_rate, max_billable_hours, is_checked_in, current_check_in_time)
                VALUES(%s,%s,%s,%s,0,NULL)
                """,
                (teacher.id, teacher.name, teacher.hourly_rate, teacher.max_billable_hours),
            )
        return teacher

    def update_teacher(self, teacher_id: str, **fields: Any) -> Optional[Teacher]:
        unknown = set(fields) - (EDITABLE_FIELDS | STATUS_FIELDS)
        if unknown:
            raise ValueError(f"Unknown fields: {', '.join(sorted(unknown))}")

        with db_cursor(self._conn_factory) as (_, cur):
            if fields:
                # column names come from the whitelist above, values are parameters
                assignments = ", ".join(f"{name}=%s" for name in fields)
                cur.execute(
                    f"UPDATE teachers SET {assignments} WHERE id=%s",
                    tuple(_db_value(v) for v in fields.values()) + (teacher_id,),
                )
            cur.execute(f"SELECT {_TEACHER_COLUMNS} FROM teachers WHERE id=%s", (teacher_id,))
            r = fetchone(cur)
            return _row_to_teacher(r) if r else None

    def delete_teacher(self, teacher_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM teachers WHERE id=%s", (teacher_id,))
            return cur.rowcount > 0

    # Time entries
    def list_time_entries(self) -> Sequence[TimeEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_ENTRY_COLUMNS} FROM time_entries ORDER BY check_in_time ASC")
            return [_row_to_entry(r) for r in fetchall(cur)]

    def list_time_entries_by_teacher(self, teacher_id: str) -> Sequence[TimeEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_ENTRY_COLUMNS} FROM time_entries WHERE teacher_id=%s ORDER BY check_in_time ASC",
                (teacher_id,),
            )
            return [_row_to_entry(r) for r in fetchall(cur)]

    def list_time_entries_by_date(self, date: str) -> Sequence[TimeEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_ENTRY_COLUMNS} FROM time_entries WHERE entry_date=%s ORDER BY check_in_time ASC",
                (date,),
            )
            return [_row_to_entry(r) for r in fetchall(cur)]

    def get_time_entry(self, entry_id: str) -> Optional[TimeEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_ENTRY_COLUMNS} FROM time_entries WHERE id=%s", (entry_id,))
            r = fetchone(cur)
            return _row_to_entry(r) if r else None

    def create_time_entry(self, *, teacher_id: str, date: str, check_in_time: datetime) -> TimeEntry:
        entry = TimeEntry(id=str(uuid.uuid4()), teacher_id=teacher_id, date=date, check_in_time=check_in_time)
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO time_entries(id, teacher_id, entry_date, check_in_time)
                    VALUES(%s,%s,%s,%s)
                    """,
                    (entry.id, teacher_id, date, to_db_datetime(check_in_time)),
                )
        except mysql.connector.IntegrityError as e:
            raise ConflictError("Teacher already has an open session") from e
        return entry

    def update_time_entry(self, entry_id: str, **fields: Any) -> Optional[TimeEntry]:
        unknown = set(fields) - UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Unknown fields: {', '.join(sorted(unknown))}")

        with db_cursor(self._conn_factory) as (_, cur):
            if fields:
                assignments = ", ".join(f"{name}=%s" for name in fields)
                cur.execute(
                    f"UPDATE time_entries SET {assignments} WHERE id=%s",
                    tuple(_db_value(v) for v in fields.values()) + (entry_id,),
                )
            cur.execute(f"SELECT {_ENTRY_COLUMNS} FROM time_entries WHERE id=%s", (entry_id,))
            r = fetchone(cur)
            return _row_to_entry(r) if r else None

    def delete_time_entries_by_teacher(self, teacher_id: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM time_entries WHERE teacher_id=%s", (teacher_id,))
            return int(cur.rowcount)

    # App settings
    def get_app_settings(self) -> Optional[AppSettings]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id, pin_hash FROM app_settings LIMIT 1")
            r = fetchone(cur)
            return AppSettings(id=r["id"], pin_hash=r["pin_hash"]) if r else None

    def create_app_settings(self, pin_hash: str) -> AppSettings:
        settings = AppSettings(id=str(uuid.uuid4()), pin_hash=pin_hash)
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    "INSERT INTO app_settings(id, pin_hash, singleton) VALUES(%s,%s,1)",
                    (settings.id, settings.pin_hash),
                )
        except mysql.connector.IntegrityError as e:
            raise ConflictError("PIN already set up") from e
        return settings

    def update_app_settings(self, pin_hash: str) -> Optional[AppSettings]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE app_settings SET pin_hash=%s", (pin_hash,))
            if cur.rowcount == 0:
                return None
        return self.get_app_settings()

    def validate_pin(self, candidate_pin: str) -> bool:
        settings = self.get_app_settings()
        if settings is None:
            return False
        return verify_pin(settings.pin_hash, candidate_pin)

    def delete_teacher_cascade(self, teacher_id: str) -> Optional[int]:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute("SELECT id FROM teachers WHERE id=%s FOR UPDATE", (teacher_id,))
                if fetchone(cur) is None:
                    return None
                cur.execute("DELETE FROM time_entries WHERE teacher_id=%s", (teacher_id,))
                removed = int(cur.rowcount)
                cur.execute("DELETE FROM teachers WHERE id=%s", (teacher_id,))
                return removed
        except mysql.connector.IntegrityError as e:
            raise ConflictError("Teacher has a session in progress") from e

    def reset_all_data(self) -> None:
        # one transaction: children first for the foreign key
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM time_entries")
            cur.execute("DELETE FROM teachers")
            cur.execute("DELETE FROM app_settings")
