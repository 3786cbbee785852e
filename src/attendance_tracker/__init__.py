"""Attendance Tracker package.

Organized by feature module (sessions, absences, stats, geofence, ...)
with a thin Flask controller layer over service/repository layers.
"""
