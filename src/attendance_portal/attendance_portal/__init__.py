"""Attendance Portal package.

This package is organized by feature modules (users, students, attendance,
reports) with a thin Flask controller layer over service/repository layers.
"""
