from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..common.datetime_utils import as_date, month_bounds
from ..core.constants import DEFAULT_MONTHLY_LEAVE_CREDIT
from ..core.enums import LeaveStatus
from ..database.record_store import DateRange, RecordStore, SpanOverlap
from .model import LeaveApplication, LeaveBalance

APPLICATIONS = "leave_applications"
BALANCES = "leave_balances"


class LeaveRepository:
    def __init__(self, store: RecordStore):
        self._store = store

    @staticmethod
    def _to_application(r: dict) -> LeaveApplication:
        return LeaveApplication(
            id=str(r["id"]),
            applicant_id=str(r["applicant_id"]),
            start_date=as_date(r["start_date"]),
            end_date=as_date(r["end_date"]),
            leave_type=r.get("leave_type") or "casual",
            paid_days=int(r.get("paid_days") or 0),
            lop_days=int(r.get("lop_days") or 0),
            status=LeaveStatus(r.get("status") or LeaveStatus.PENDING.value),
            total_days=int(r["total_days"]) if r.get("total_days") is not None else None,
            reason=r.get("reason"),
            approved_by=r.get("final_approved_by"),
            approved_at=r.get("final_approved_at"),
            applicant_type=r.get("applicant_type"),
            institution_id=str(r["institution_id"]) if r.get("institution_id") is not None else None,
        )

    @staticmethod
    def _to_balance(r: dict) -> LeaveBalance:
        return LeaveBalance(
            id=str(r["id"]) if r.get("id") is not None else None,
            user_id=str(r["user_id"]),
            year=int(r["year"]),
            month=int(r["month"]),
            monthly_credit=int(r.get("monthly_credit") or 0),
            carried_forward=int(r.get("carried_forward") or 0),
            casual_leave_used=int(r.get("casual_leave_used") or 0),
            sick_leave_used=int(r.get("sick_leave_used") or 0),
            balance_remaining=int(r.get("balance_remaining") or 0),
        )

    def get(self, application_id: str) -> Optional[LeaveApplication]:
        rows = self._store.query(APPLICATIONS, filters={"id": application_id})
        return self._to_application(rows[0]) if rows else None

    def list_approved_overlapping(self, *, applicant_id: str, start: date, end: date) -> Sequence[LeaveApplication]:
        rows = self._store.query(
            APPLICATIONS,
            filters={"applicant_id": applicant_id, "status": LeaveStatus.APPROVED.value},
            window=SpanOverlap("start_date", "end_date", start, end),
            order_by="start_date",
        )
        return [self._to_application(r) for r in rows]

    def used_paid_days_in_month(self, *, applicant_id: str, year: int, month: int) -> int:
        start, end = month_bounds(year, month)
        rows = self._store.query(
            APPLICATIONS,
            filters={"applicant_id": applicant_id, "status": LeaveStatus.APPROVED.value},
            window=DateRange("start_date", start, end),
        )
        # paid_days spans weekends; paid_working_days is what the monthly limit counts
        return sum(
            int(r["paid_working_days"] if r.get("paid_working_days") is not None else r.get("paid_days") or 0)
            for r in rows
        )

    def create(self, row: dict) -> LeaveApplication:
        inserted = self._store.insert(APPLICATIONS, [row])
        return self._to_application(inserted[0])

    def decide(
        self,
        application_id: str,
        *,
        status: LeaveStatus,
        decided_by: str,
        decided_at: datetime,
        rejection_reason: Optional[str] = None,
    ) -> None:
        patch = {"status": status.value, "final_approved_by": decided_by, "final_approved_at": decided_at}
        if rejection_reason is not None:
            patch["rejection_reason"] = rejection_reason
        self._store.update(APPLICATIONS, application_id, patch)

    def get_balance(self, *, user_id: str, year: int, month: int) -> Optional[LeaveBalance]:
        rows = self._store.query(BALANCES, filters={"user_id": user_id, "year": year, "month": month})
        return self._to_balance(rows[0]) if rows else None

    def initialize_balance(self, *, user_id: str, user_type: str, year: int, month: int) -> LeaveBalance:
        existing = self.get_balance(user_id=user_id, year=year, month=month)
        if existing:
            return existing
        inserted = self._store.insert(
            BALANCES,
            [
                {
                    "user_id": user_id,
                    "user_type": user_type,
                    "year": year,
                    "month": month,
                    "monthly_credit": DEFAULT_MONTHLY_LEAVE_CREDIT,
                    "carried_forward": 0,
                    "casual_leave_used": 0,
                    "sick_leave_used": 0,
                    "balance_remaining": DEFAULT_MONTHLY_LEAVE_CREDIT,
                }
            ],
        )
        return self._to_balance(inserted[0])

    def save_balance(self, balance: LeaveBalance) -> None:
        self._store.update(
            BALANCES,
            balance.id,
            {
                "casual_leave_used": balance.casual_leave_used,
                "sick_leave_used": balance.sick_leave_used,
                "balance_remaining": balance.balance_remaining,
            },
        )
