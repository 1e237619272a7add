"""Payroll System package.

HR attendance and payroll backend organized by feature modules (employees,
attendance, payroll, bonus) with a thin Flask JSON controller layer on top of
service and repository layers. The payroll normalization rules live in
``payroll`` and are pure functions of their inputs.
"""
