"""Project Tracker package.

This package is organized by feature modules (users, members, projects,
dashboard, ...) with a thin Flask controller layer on top of service and
repository layers.
"""
