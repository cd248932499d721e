"""Shift Hours package.

This package is organized by feature modules (timecalc, payroll, periods,
analytics, ...) with a thin Flask controller layer over pure calculation
services.
"""
