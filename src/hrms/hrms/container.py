from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .allowances.mysql_allowance_repository import MySQLAllowanceRepository
from .allowances.service import AllowanceService
from .appraisals.mysql_appraisal_repository import MySQLAppraisalRepository
from .appraisals.service import AppraisalService
from .core.enums import AllowanceKind
from .ctc.service import CtcService
from .database.connection import DBConfig, DatabaseConnection
from .departments.mysql_department_repository import MySQLDepartmentRepository
from .departments.service import DepartmentService
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.service import EmployeeService
from .helpdesk.mysql_helpdesk_repository import MySQLHelpdeskRepository
from .helpdesk.service import HelpdeskService
from .holidays.mysql_holiday_repository import MySQLHolidayRepository
from .holidays.service import HolidayService
from .leaves.mysql_leave_repository import MySQLLeaveRepository
from .leaves.service import LeaveService
from .ltc.mysql_ltc_repository import MySQLLtcRepository
from .ltc.service import LtcService
from .messages.mysql_message_repository import MySQLMessageRepository
from .messages.service import MessageService
from .notifications.mysql_notification_repository import MySQLNotificationRepository
from .notifications.service import NotificationService
from .salaries.mysql_salary_repository import MySQLSalaryRepository
from .salaries.service import SalaryService
from .travel.mysql_travel_repository import MySQLTravelRepository
from .travel.service import TravelService
from .users.mysql_user_repository import MySQLUserRepository
from .users.service import AuthService, UserService


@dataclass(frozen=True)
class Container:
    """Services used by the controllers.

    ``conn`` is None when a container is assembled from in-memory repositories.
    """

    auth_service: AuthService
    user_service: UserService
    department_service: DepartmentService
    employee_service: EmployeeService
    leave_service: LeaveService
    salary_service: SalaryService
    allowance_service: AllowanceService
    fixed_allowance_service: AllowanceService
    ctc_service: CtcService
    appraisal_service: AppraisalService
    helpdesk_service: HelpdeskService
    message_service: MessageService
    notification_service: NotificationService
    holiday_service: HolidayService
    ltc_service: LtcService
    travel_service: TravelService
    conn: Optional[DatabaseConnection] = None


def build_services(
    *,
    users,
    departments,
    employees,
    leaves,
    salaries,
    allowances,
    fixed_allowances,
    appraisals,
    helpdesk,
    messages,
    notifications,
    holidays,
    ltc,
    travel,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Wire services over any set of repositories (MySQL or in-memory)."""

    return Container(
        auth_service=AuthService(users, employees),
        user_service=UserService(users, employees),
        department_service=DepartmentService(departments),
        employee_service=EmployeeService(employees, users, departments),
        leave_service=LeaveService(leaves, employees),
        salary_service=SalaryService(salaries, employees),
        allowance_service=AllowanceService(allowances, employees),
        fixed_allowance_service=AllowanceService(fixed_allowances, employees),
        ctc_service=CtcService(salaries, allowances, fixed_allowances, employees),
        appraisal_service=AppraisalService(appraisals, employees, departments),
        helpdesk_service=HelpdeskService(helpdesk, employees),
        message_service=MessageService(messages, employees),
        notification_service=NotificationService(notifications),
        holiday_service=HolidayService(holidays),
        ltc_service=LtcService(ltc, employees),
        travel_service=TravelService(travel, employees),
        conn=conn,
    )


def build_container(*, db_config: dict) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return build_services(
        users=MySQLUserRepository(conn),
        departments=MySQLDepartmentRepository(conn),
        employees=MySQLEmployeeRepository(conn),
        leaves=MySQLLeaveRepository(conn),
        salaries=MySQLSalaryRepository(conn),
        allowances=MySQLAllowanceRepository(conn, AllowanceKind.VARIABLE),
        fixed_allowances=MySQLAllowanceRepository(conn, AllowanceKind.FIXED),
        appraisals=MySQLAppraisalRepository(conn),
        helpdesk=MySQLHelpdeskRepository(conn),
        messages=MySQLMessageRepository(conn),
        notifications=MySQLNotificationRepository(conn),
        holidays=MySQLHolidayRepository(conn),
        ltc=MySQLLtcRepository(conn),
        travel=MySQLTravelRepository(conn),
        conn=conn,
    )
