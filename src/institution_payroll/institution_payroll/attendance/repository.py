from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..common.datetime_utils import as_date
from ..common.money import to_decimal
from ..core.constants import AUTO_OVERTIME_REASON
from ..core.enums import OvertimeStatus
from ..database.record_store import DateRange, RecordStore
from ..employees.model import Employee
from .model import AttendanceRecord, MissingOvertime, OvertimeRequest

OFFICER_ATTENDANCE = "officer_attendance"
STAFF_ATTENDANCE = "staff_attendance"
OVERTIME_REQUESTS = "overtime_requests"
CORRECTIONS = "attendance_corrections"


def _optional_decimal(value):
    return None if value is None else to_decimal(value)


class AttendanceRepository:
    """Officer and staff attendance live in separate tables with the same shape."""

    def __init__(self, store: RecordStore):
        self._store = store

    @staticmethod
    def _table_and_key(employee: Employee) -> tuple[str, dict]:
        if employee.is_officer:
            return OFFICER_ATTENDANCE, {"officer_id": employee.id}
        return STAFF_ATTENDANCE, {"user_id": employee.user_id}

    @staticmethod
    def _to_record(r: dict) -> AttendanceRecord:
        return AttendanceRecord(
            id=str(r["id"]) if r.get("id") is not None else None,
            day=as_date(r["date"]),
            check_in=r.get("check_in_time"),
            check_out=r.get("check_out_time"),
            total_hours_worked=_optional_decimal(r.get("total_hours_worked")),
            overtime_hours=_optional_decimal(r.get("overtime_hours")),
            is_late_login=bool(r.get("is_late_login")),
            late_minutes=int(r.get("late_minutes") or 0),
            is_manual_correction=bool(r.get("is_manual_correction")),
            status=r.get("status"),
        )

    def list_for_range(self, employee: Employee, start: date, end: date) -> Sequence[AttendanceRecord]:
        table, key = self._table_and_key(employee)
        rows = self._store.query(table, filters=key, window=DateRange("date", start, end), order_by="date")
        return [self._to_record(r) for r in rows]

    def get_for_date(self, employee: Employee, day: date) -> Optional[AttendanceRecord]:
        table, key = self._table_and_key(employee)
        rows = self._store.query(table, filters={**key, "date": day})
        return self._to_record(rows[0]) if rows else None

    def save_correction(self, employee: Employee, existing: Optional[AttendanceRecord], values: dict) -> None:
        """Overwrite the check-in/out columns of the day's row, or create it."""
        table, key = self._table_and_key(employee)
        if existing is not None and existing.id is not None:
            self._store.update(table, existing.id, values)
            return

        row = {**key, **values}
        if employee.is_officer:
            row["institution_id"] = employee.institution_id
        self._store.insert(table, [row])

    def delete_for_date(self, employee: Employee, day: date) -> int:
        table, key = self._table_and_key(employee)
        return self._store.delete(table, filters={**key, "date": day})

    def log_correction(
        self,
        *,
        attendance_id: Optional[str],
        employee: Employee,
        field_corrected: str,
        original_value: str,
        new_value: str,
        reason: str,
        corrected_by: str,
    ) -> None:
        self._store.insert(
            CORRECTIONS,
            [
                {
                    "attendance_id": attendance_id or "new",
                    "attendance_type": employee.employee_type.value,
                    "field_corrected": field_corrected,
                    "original_value": original_value,
                    "new_value": new_value,
                    "reason": reason,
                    "corrected_by": corrected_by,
                }
            ],
        )


class OvertimeRepository:
    def __init__(self, store: RecordStore):
        self._store = store

    @staticmethod
    def _to_request(r: dict) -> OvertimeRequest:
        return OvertimeRequest(
            id=str(r["id"]) if r.get("id") is not None else None,
            user_id=str(r["user_id"]),
            day=as_date(r["date"]),
            requested_hours=to_decimal(r.get("requested_hours")),
            status=OvertimeStatus(r.get("status") or OvertimeStatus.PENDING.value),
            reason=r.get("reason"),
        )

    def get(self, overtime_id: str) -> Optional[OvertimeRequest]:
        rows = self._store.query(OVERTIME_REQUESTS, filters={"id": overtime_id})
        return self._to_request(rows[0]) if rows else None

    def list_for_range(self, user_id: str, start: date, end: date) -> Sequence[OvertimeRequest]:
        rows = self._store.query(
            OVERTIME_REQUESTS,
            filters={"user_id": user_id},
            window=DateRange("date", start, end),
            order_by="date",
        )
        return [self._to_request(r) for r in rows]

    def create_pending(self, employee: Employee, missing: Sequence[MissingOvertime]) -> list[OvertimeRequest]:
        if not missing:
            return []
        stored = self._store.insert_unique(
            OVERTIME_REQUESTS,
            [
                {
                    "user_id": employee.user_id,
                    "user_type": employee.employee_type.value,
                    "officer_id": employee.id if employee.is_officer else None,
                    "institution_id": employee.institution_id,
                    "date": m.day,
                    "requested_hours": m.hours,
                    "reason": AUTO_OVERTIME_REASON,
                    "status": OvertimeStatus.PENDING.value,
                }
                for m in missing
            ],
            key=("user_id", "date"),
        )
        return [self._to_request(r) for r in stored]

    def decide(
        self,
        overtime_id: str,
        *,
        status: OvertimeStatus,
        decided_by: str,
        decided_at: datetime,
        rejection_reason: Optional[str] = None,
    ) -> None:
        patch = {"status": status.value, "approved_by": decided_by, "approved_at": decided_at}
        if rejection_reason is not None:
            patch["rejection_reason"] = rejection_reason
        self._store.update(OVERTIME_REQUESTS, overtime_id, patch)
