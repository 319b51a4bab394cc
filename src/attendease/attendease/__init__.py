"""AttendEase client package.

This package is organized by feature modules (users, attendance, leave)
with a thin Flask controller layer over service/repository layers that talk
to the remote attendance API.
"""
