"""Attendance Grid package.

Organized by feature modules (period, employees, attendance, board, upstream)
with a thin Flask controller layer over service/repository layers.
"""
