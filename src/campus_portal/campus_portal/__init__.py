"""Campus Portal package.

This package is organized by feature modules (students, faculty, enrollments,
attendance, ...) with a thin Flask controller layer on top of service and
repository layers.
"""
