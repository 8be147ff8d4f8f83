"""Payroll System package.

This package is organized by feature modules (employees, attendance, leaves,
payroll) with a thin Flask controller layer and service/repository layers.
The payroll engine itself (periods, aggregation, calculator) is pure Python.
"""
