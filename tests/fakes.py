"""In-memory repositories shared by the service and API tests."""

from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from typing import Optional

from werkzeug.security import generate_password_hash

from src.hrms.hrms.allowances.model import Allowance
from src.hrms.hrms.appraisals.model import Appraisal
from src.hrms.hrms.common.refs import EmployeeRef
from src.hrms.hrms.container import build_services
from src.hrms.hrms.core.enums import AllowanceKind, ApprovalStatus, Gender, MaritalStatus, Role
from src.hrms.hrms.departments.model import Department
from src.hrms.hrms.employees.model import Employee, LeaveBalance
from src.hrms.hrms.helpdesk.model import HelpTicket
from src.hrms.hrms.holidays.model import Holiday
from src.hrms.hrms.leaves.model import Leave
from src.hrms.hrms.ltc.model import LtcClaim
from src.hrms.hrms.messages.model import Message
from src.hrms.hrms.notifications.model import Notification
from src.hrms.hrms.salaries.model import Salary
from src.hrms.hrms.travel.model import TravelExpenditure, travel_total
from src.hrms.hrms.users.model import User

NOW = datetime(2025, 3, 1, 10, 0, 0)


class _Store:
    def __init__(self):
        self._next_id = 1
        self.rows: dict[int, object] = {}

    def next_id(self) -> int:
        rid = self._next_id
        self._next_id += 1
        return rid


class FakeUserRepo(_Store):
    def get_by_id(self, user_id):
        return self.rows.get(int(user_id))

    def get_by_email(self, email):
        return next((u for u in self.rows.values() if u.email == email), None)

    def list_all(self):
        return sorted(self.rows.values(), key=lambda u: u.name)

    def create_user(self, *, name, email, password_hash, role):
        uid = self.next_id()
        self.rows[uid] = User(user_id=uid, name=name, email=email, password_hash=password_hash, role=role)
        return uid

    def update_user(self, user_id, *, name=None, email=None, role=None):
        user = self.rows[int(user_id)]
        self.rows[int(user_id)] = replace(
            user,
            name=name if name is not None else user.name,
            email=email if email is not None else user.email,
            role=role if role is not None else user.role,
        )
        return True

    def update_password(self, user_id, *, password_hash):
        self.rows[int(user_id)] = replace(self.rows[int(user_id)], password_hash=password_hash)
        return True

    def delete_by_id(self, user_id):
        return self.rows.pop(int(user_id), None) is not None


class FakeDepartmentRepo(_Store):
    def list_all(self):
        return list(self.rows.values())

    def get_by_id(self, department_id):
        return self.rows.get(int(department_id))

    def get_by_code(self, department_code):
        return next((d for d in self.rows.values() if d.department_code == department_code), None)

    def create(self, *, department_code, department_name, description):
        did = self.next_id()
        self.rows[did] = Department(did, department_code, department_name, description)
        return did

    def update(self, department_id, *, department_code, department_name, description):
        self.rows[int(department_id)] = Department(int(department_id), department_code, department_name, description)
        return True

    def delete_by_id(self, department_id):
        return self.rows.pop(int(department_id), None) is not None


class FakeEmployeeRepo(_Store):
    def __init__(self, departments: Optional[FakeDepartmentRepo] = None):
        super().__init__()
        self._departments = departments

    def ref(self, employee_id) -> EmployeeRef:
        e = self.rows.get(int(employee_id))
        if not e:
            return EmployeeRef(employee_id=int(employee_id))
        return EmployeeRef(
            employee_id=e.employee_id,
            emp_no=e.emp_no,
            name=e.name,
            designation=e.designation,
            department_id=e.department_id,
            department_name=e.department_name,
            dol=e.dol,
        )

    def get_by_id(self, employee_id):
        return self.rows.get(int(employee_id))

    def get_by_user_id(self, user_id):
        return next((e for e in self.rows.values() if e.user_id == int(user_id)), None)

    def get_by_emp_no(self, emp_no):
        return next((e for e in self.rows.values() if e.emp_no == int(emp_no)), None)

    def get_many(self, employee_ids):
        return [self.rows[int(i)] for i in employee_ids if int(i) in self.rows]

    def list_all(self):
        return sorted(self.rows.values(), key=lambda e: e.emp_no)

    def create(self, *, user_id, fields, leave_balance):
        eid = self.next_id()
        dept = self._departments.get_by_id(fields["department_id"]) if self._departments else None
        self.rows[eid] = Employee(
            employee_id=eid,
            user_id=int(user_id),
            leave_balance=leave_balance,
            department_name=dept.department_name if dept else None,
            **fields,
        )
        return eid

    def update(self, employee_id, fields):
        self.rows[int(employee_id)] = replace(self.rows[int(employee_id)], **fields)
        return True

    def update_leave_balance(self, employee_id, balance):
        self.rows[int(employee_id)] = replace(self.rows[int(employee_id)], leave_balance=balance)
        return True

    def delete_by_id(self, employee_id):
        return self.rows.pop(int(employee_id), None) is not None


class FakeLeaveRepo(_Store):
    def __init__(self, employees: FakeEmployeeRepo):
        super().__init__()
        self._employees = employees

    def list_all(self):
        return sorted(self.rows.values(), key=lambda l: -l.leave_id)

    def get_by_id(self, leave_id):
        return self.rows.get(int(leave_id))

    def list_for_employee(self, employee_id):
        return [l for l in self.list_all() if l.employee_id == int(employee_id)]

    def list_for_approver(self, approver_employee_id):
        return [l for l in self.list_all() if int(approver_employee_id) in l.applied_to]

    def create(self, *, employee_id, request):
        lid = self.next_id()
        self.rows[lid] = Leave(
            leave_id=lid,
            employee_id=int(employee_id),
            status=ApprovalStatus.PENDING,
            employee=self._employees.ref(employee_id),
            created_at=NOW,
            **request.__dict__,
        )
        return lid

    def update(self, leave_id, *, request):
        self.rows[int(leave_id)] = replace(self.rows[int(leave_id)], **request.__dict__)
        return True

    def set_status(self, leave_id, *, status, approved_by=None, rejected_by=None):
        leave = self.rows[int(leave_id)]
        self.rows[int(leave_id)] = replace(
            leave,
            status=status,
            approved_by=approved_by or leave.approved_by,
            rejected_by=rejected_by or leave.rejected_by,
        )
        return True

    def set_status_with_balance(self, leave_id, *, employee_id, balance, status, approved_by=None, rejected_by=None):
        if int(leave_id) not in self.rows:
            raise KeyError(leave_id)
        self._employees.update_leave_balance(employee_id, balance)
        return self.set_status(leave_id, status=status, approved_by=approved_by, rejected_by=rejected_by)

    def set_ror(self, leave_id, *, ror):
        self.rows[int(leave_id)] = replace(self.rows[int(leave_id)], ror=ror)
        return True

    def delete_by_id(self, leave_id):
        return self.rows.pop(int(leave_id), None) is not None


class FakeSalaryRepo(_Store):
    def __init__(self, employees: FakeEmployeeRepo):
        super().__init__()
        self._employees = employees

    def _build(self, sid, draft):
        return Salary(salary_id=sid, employee=self._employees.ref(draft.employee_id), **draft.__dict__)

    def list_all(self):
        return list(self.rows.values())

    def list_for_employee(self, employee_id):
        return [s for s in self.rows.values() if s.employee_id == int(employee_id)]

    def get_by_id(self, salary_id):
        return self.rows.get(int(salary_id))

    def find_for_period(self, *, employee_id, payment_month, payment_year):
        return next(
            (
                s
                for s in self.rows.values()
                if s.employee_id == int(employee_id) and s.payment_month == payment_month and s.payment_year == payment_year
            ),
            None,
        )

    def create(self, draft):
        sid = self.next_id()
        self.rows[sid] = self._build(sid, draft)
        return sid

    def update(self, salary_id, draft):
        self.rows[int(salary_id)] = self._build(int(salary_id), draft)
        return True

    def delete_by_id(self, salary_id):
        return self.rows.pop(int(salary_id), None) is not None


class FakeAllowanceRepo(_Store):
    def __init__(self, employees: FakeEmployeeRepo, kind: AllowanceKind):
        super().__init__()
        self._employees = employees
        self.kind = kind

    def list_all(self):
        return list(self.rows.values())

    def list_for_employee(self, employee_id):
        return [a for a in self.rows.values() if a.employee_id == int(employee_id)]

    def get_by_id(self, allowance_id):
        return self.rows.get(int(allowance_id))

    def find_matching(self, draft):
        for a in self.rows.values():
            key = (a.employee_id, a.client, a.project_no, a.allowance_month, a.allowance_year, a.allowance_type)
            if key == draft.merge_key():
                return a
        return None

    def create(self, draft, *, status, added_by):
        aid = self.next_id()
        self.rows[aid] = Allowance(
            allowance_id=aid,
            kind=self.kind,
            status=status,
            added_by=added_by,
            employee=self._employees.ref(draft.employee_id),
            **draft.__dict__,
        )
        return aid

    def update(self, allowance_id, draft):
        self.rows[int(allowance_id)] = replace(self.rows[int(allowance_id)], **draft.__dict__)
        return True

    def add_amount(self, allowance_id, *, amount, status):
        a = self.rows[int(allowance_id)]
        self.rows[int(allowance_id)] = replace(a, allowance_amount=a.allowance_amount + amount, status=status)
        return True

    def set_status(self, allowance_id, *, status):
        self.rows[int(allowance_id)] = replace(self.rows[int(allowance_id)], status=status)
        return True

    def set_voucher(self, allowance_id, *, voucher_no):
        self.rows[int(allowance_id)] = replace(self.rows[int(allowance_id)], voucher_no=voucher_no)
        return True

    def delete_by_id(self, allowance_id):
        return self.rows.pop(int(allowance_id), None) is not None


class FakeAppraisalRepo(_Store):
    def list_all(self):
        return list(self.rows.values())

    def get_by_id(self, appraisal_id):
        return self.rows.get(int(appraisal_id))

    def list_for_employee(self, employee_id):
        return [a for a in self.rows.values() if a.employee_id == int(employee_id)]

    def list_for_supervisor(self, supervisor_employee_id):
        return [a for a in self.rows.values() if int(supervisor_employee_id) in a.supervisors]

    def create(self, draft):
        aid = self.next_id()
        self.rows[aid] = Appraisal(appraisal_id=aid, **draft.__dict__)
        return aid

    def update(self, appraisal_id, draft):
        self.rows[int(appraisal_id)] = Appraisal(appraisal_id=int(appraisal_id), **draft.__dict__)
        return True

    def delete_by_id(self, appraisal_id):
        return self.rows.pop(int(appraisal_id), None) is not None


class FakeHelpdeskRepo(_Store):
    def list_all(self):
        return sorted(self.rows.values(), key=lambda t: -t.ticket_id)

    def list_for_employee(self, employee_id):
        return [t for t in self.list_all() if t.employee_id == int(employee_id)]

    def get_by_id(self, ticket_id):
        return self.rows.get(int(ticket_id))

    def help_id_exists(self, help_id):
        return any(t.help_id == help_id for t in self.rows.values())

    def create(self, *, employee_id, help_id, query):
        tid = self.next_id()
        self.rows[tid] = HelpTicket(ticket_id=tid, employee_id=int(employee_id), help_id=help_id, raised_at=NOW, query=query)
        return tid

    def update_query(self, ticket_id, *, query):
        self.rows[int(ticket_id)] = replace(self.rows[int(ticket_id)], query=query)
        return True

    def set_resolved(self, ticket_id, *, resolved):
        self.rows[int(ticket_id)] = replace(self.rows[int(ticket_id)], resolved=resolved)
        return True

    def respond(self, ticket_id, *, response):
        self.rows[int(ticket_id)] = replace(self.rows[int(ticket_id)], response=response, resolved=True)
        return True

    def delete_by_id(self, ticket_id):
        return self.rows.pop(int(ticket_id), None) is not None


class FakeMessageRepo(_Store):
    def list_all(self):
        return list(self.rows.values())

    def list_for_employee(self, employee_id):
        return [m for m in self.rows.values() if m.employee_id == int(employee_id)]

    def get_by_id(self, message_id):
        return self.rows.get(int(message_id))

    def create(self, *, employee_id, department_id, subject, priority, message):
        mid = self.next_id()
        self.rows[mid] = Message(mid, int(employee_id), int(department_id), subject, priority, message)
        return mid

    def update(self, message_id, *, subject, priority, message):
        self.rows[int(message_id)] = replace(
            self.rows[int(message_id)], subject=subject, priority=priority, message=message
        )
        return True

    def set_reply(self, message_id, *, reply):
        self.rows[int(message_id)] = replace(self.rows[int(message_id)], reply=reply)
        return True

    def delete_by_id(self, message_id):
        return self.rows.pop(int(message_id), None) is not None


class FakeNotificationRepo(_Store):
    def list_all(self):
        return sorted(self.rows.values(), key=lambda n: -n.notification_id)

    def create(self, *, subject, message, priority):
        nid = self.next_id()
        self.rows[nid] = Notification(nid, subject, message, priority, NOW)
        return nid


class FakeHolidayRepo(_Store):
    def list_all(self):
        return sorted(self.rows.values(), key=lambda h: h.holiday_date)

    def get_by_id(self, holiday_id):
        return self.rows.get(int(holiday_id))

    def create(self, *, name, holiday_date, type, description, is_recurring):
        hid = self.next_id()
        self.rows[hid] = Holiday(hid, name, holiday_date, type, description, is_recurring)
        return hid

    def update(self, holiday_id, *, name, holiday_date, type, description, is_recurring):
        self.rows[int(holiday_id)] = Holiday(int(holiday_id), name, holiday_date, type, description, is_recurring)
        return True

    def delete_by_id(self, holiday_id):
        return self.rows.pop(int(holiday_id), None) is not None


class FakeLtcRepo(_Store):
    def list_all(self):
        return list(self.rows.values())

    def list_for_employee(self, employee_id):
        return [c for c in self.rows.values() if c.employee_id == int(employee_id)]

    def get_by_id(self, ltc_id):
        return self.rows.get(int(ltc_id))

    def create(self, draft):
        cid = self.next_id()
        self.rows[cid] = LtcClaim(ltc_id=cid, **draft.__dict__)
        return cid

    def update(self, ltc_id, draft):
        self.rows[int(ltc_id)] = replace(self.rows[int(ltc_id)], **draft.__dict__)
        return True

    def set_status(self, ltc_id, *, status, approved_by, remarks):
        self.rows[int(ltc_id)] = replace(self.rows[int(ltc_id)], status=status, approved_by=approved_by, remarks=remarks)
        return True

    def delete_by_id(self, ltc_id):
        return self.rows.pop(int(ltc_id), None) is not None


class FakeTravelRepo(_Store):
    """Derives total_amount on every save, like the MySQL repository."""

    def list_all(self):
        return list(self.rows.values())

    def list_for_employee(self, employee_id):
        return [t for t in self.rows.values() if t.employee_id == int(employee_id)]

    def get_by_id(self, travel_id):
        return self.rows.get(int(travel_id))

    def create(self, draft):
        tid = self.next_id()
        self.rows[tid] = TravelExpenditure(
            travel_id=tid, total_amount=travel_total(draft.expenses, draft.day_charges), **draft.__dict__
        )
        return tid

    def update(self, travel_id, draft):
        self.rows[int(travel_id)] = replace(
            self.rows[int(travel_id)], total_amount=travel_total(draft.expenses, draft.day_charges), **draft.__dict__
        )
        return True

    def set_status(self, travel_id, *, status, approved_by, approved_at, remarks):
        self.rows[int(travel_id)] = replace(
            self.rows[int(travel_id)], status=status, approved_by=approved_by, approved_at=approved_at, remarks=remarks
        )
        return True

    def set_voucher(self, travel_id, *, voucher_no):
        self.rows[int(travel_id)] = replace(self.rows[int(travel_id)], voucher_no=voucher_no)
        return True

    def delete_by_id(self, travel_id):
        return self.rows.pop(int(travel_id), None) is not None


class FakeRepos:
    """One in-memory repository per table."""

    def __init__(self):
        self.users = FakeUserRepo()
        self.departments = FakeDepartmentRepo()
        self.employees = FakeEmployeeRepo(self.departments)
        self.leaves = FakeLeaveRepo(self.employees)
        self.salaries = FakeSalaryRepo(self.employees)
        self.allowances = FakeAllowanceRepo(self.employees, AllowanceKind.VARIABLE)
        self.fixed_allowances = FakeAllowanceRepo(self.employees, AllowanceKind.FIXED)
        self.appraisals = FakeAppraisalRepo()
        self.helpdesk = FakeHelpdeskRepo()
        self.messages = FakeMessageRepo()
        self.notifications = FakeNotificationRepo()
        self.holidays = FakeHolidayRepo()
        self.ltc = FakeLtcRepo()
        self.travel = FakeTravelRepo()

    def container(self):
        return build_services(**self.__dict__)

    def add_department(self, code="ENG", name="Engineering") -> int:
        return self.departments.create(department_code=code, department_name=name, description=None)

    def add_employee(
        self,
        *,
        name="Asha Rao",
        email=None,
        emp_no=None,
        role=Role.EMPLOYEE,
        password="secret123",
        department_id=None,
        dol: Optional[date] = None,
        balance: Optional[LeaveBalance] = None,
    ) -> Employee:
        """Create a user and its employee record; returns the employee."""

        if department_id is None:
            dept = self.departments.get_by_code("ENG")
            department_id = dept.department_id if dept else self.add_department()
        email = email or f"{name.split()[0].lower()}@hrms.local"
        user_id = self.users.create_user(
            name=name, email=email, password_hash=generate_password_hash(password), role=role
        )
        fields = dict(
            emp_no=emp_no or 1000 + user_id,
            name=name,
            email=email,
            dob=date(1990, 1, 1),
            gender=Gender.FEMALE,
            marital_status=MaritalStatus.SINGLE,
            designation="Engineer",
            department_id=department_id,
            qualification="B.Tech",
            contact_no="9000000000",
            aadhar_no="123412341234",
            pan="ABCDE1234F",
            role=role,
            doj=date(2020, 6, 1),
            dol=dol,
        )
        employee_id = self.employees.create(user_id=user_id, fields=fields, leave_balance=balance or LeaveBalance())
        return self.employees.get_by_id(employee_id)
