"""Rollcall package.

Class attendance tracking organized by feature modules (sessions,
attendance, schedules, users, ...) with repository/service layers over a
document store and an identity service.
"""
