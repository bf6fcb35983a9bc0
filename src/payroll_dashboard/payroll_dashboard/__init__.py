"""Payroll Dashboard package.

This package is organized by feature modules (attendance, payroll, payslips, ...)
with a thin Flask controller layer and service/repository layers underneath.
"""
