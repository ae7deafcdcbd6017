from __future__ import annotations

from flask import Flask, request

from ..common.http import current_role, login_required, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.ctc_service

    @app.route("/api/ctc", methods=["GET"], endpoint="ctc_report")
    @login_required
    def ctc_report():
        report = service.build_report(
            current_role=current_role(),
            month=request.args.get("month"),
            year=request.args.get("year"),
            search=request.args.get("search"),
        )
        return ok(**report)

    @app.route("/api/ctc/<year>/<month>", methods=["GET"], endpoint="ctc_month_wise")
    @login_required
    def ctc_month_wise(year: str, month: str):
        return ok(**service.month_wise(current_role=current_role(), month=month, year=year))

    @app.route("/api/ctc/employee/<int:emp_no>", methods=["GET"], endpoint="ctc_employee_wise")
    @login_required
    def ctc_employee_wise(emp_no: int):
        return ok(**service.employee_wise(current_role=current_role(), emp_no=emp_no))
