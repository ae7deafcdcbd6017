"""HR / payroll management backend.

This package is organized by feature modules (employees, leaves, salaries,
allowances, ctc, ...) with a thin Flask controller layer on top of
service and repository layers.
"""
