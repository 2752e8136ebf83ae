from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from .attendance.factory import DayRuleFactory
from .attendance.repository import AttendanceRepository, OvertimeRepository
from .attendance.service import AttendanceService
from .calendar_days.repository import CalendarRepository
from .calendar_days.service import CalendarService
from .core.constants import MAX_LEAVES_PER_MONTH
from .database.connection import DBConfig, DatabaseConnection
from .database.record_store import MySQLRecordStore, RecordStore
from .employees.repository import EmployeeRepository
from .employees.service import EmployeeService
from .invoice.model import GSTRates
from .invoice.repository import InvoiceRepository
from .invoice.service import InvoiceService
from .leave.repository import LeaveRepository
from .leave.service import LeaveService
from .payroll.calculator.standard_calculator import StandardPayrollCalculator
from .payroll.model import PayrollConfig
from .payroll.repository import SalaryRepository
from .payroll.service import PayrollService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]
    store: RecordStore

    employees_repo: EmployeeRepository
    calendar_repo: CalendarRepository
    leaves_repo: LeaveRepository
    attendance_repo: AttendanceRepository
    overtime_repo: OvertimeRepository
    salaries_repo: SalaryRepository
    invoices_repo: InvoiceRepository

    employee_service: EmployeeService
    calendar_service: CalendarService
    leave_service: LeaveService
    attendance_service: AttendanceService
    payroll_service: PayrollService
    invoice_service: InvoiceService


def build_container_from_store(
    store: RecordStore,
    *,
    payroll: Optional[Mapping[str, Any]] = None,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    defaults = PayrollConfig.from_dict(payroll or {})
    max_leaves = int((payroll or {}).get("max_leaves_per_month", MAX_LEAVES_PER_MONTH))

    employees_repo = EmployeeRepository(store)
    calendar_repo = CalendarRepository(store)
    leaves_repo = LeaveRepository(store)
    attendance_repo = AttendanceRepository(store)
    overtime_repo = OvertimeRepository(store)
    salaries_repo = SalaryRepository(store)
    invoices_repo = InvoiceRepository(store, default_rates=GSTRates.from_dict(payroll or {}))

    employee_service = EmployeeService(employees_repo)
    calendar_service = CalendarService(calendar_repo)
    leave_service = LeaveService(leaves_repo, calendar_service, max_leaves_per_month=max_leaves)
    attendance_service = AttendanceService(
        attendance_repo,
        overtime_repo,
        leaves_repo,
        calendar_service,
        leave_service,
        standard_work_hours=defaults.standard_work_hours,
        rule_factory=DayRuleFactory(),
    )
    payroll_service = PayrollService(
        salaries_repo,
        attendance_service,
        calculator=StandardPayrollCalculator(),
        defaults=defaults,
    )
    invoice_service = InvoiceService(invoices_repo)

    return Container(
        conn=conn,
        store=store,
        employees_repo=employees_repo,
        calendar_repo=calendar_repo,
        leaves_repo=leaves_repo,
        attendance_repo=attendance_repo,
        overtime_repo=overtime_repo,
        salaries_repo=salaries_repo,
        invoices_repo=invoices_repo,
        employee_service=employee_service,
        calendar_service=calendar_service,
        leave_service=leave_service,
        attendance_service=attendance_service,
        payroll_service=payroll_service,
        invoice_service=invoice_service,
    )


def build_container(*, db_config: dict, payroll: Optional[Mapping[str, Any]] = None) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
    return build_container_from_store(MySQLRecordStore(conn), payroll=payroll, conn=conn)
