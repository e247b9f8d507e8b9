"""
Shared API Dependencies
=======================

FastAPI dependencies resolving the per-application resources that the
lifespan handler stores on ``app.state``.
"""

from fastapi import Request

from helpdesk.core import Clock, utc_now
from helpdesk.infrastructure.database import Database


def get_database(request: Request) -> Database:
    """The application's Persistence Adapter."""
    database = getattr(request.app.state, "database", None)
    if database is None:
        raise RuntimeError("Database not initialized. Is the application lifespan running?")
    return database


def get_clock(request: Request) -> Clock:
    return getattr(request.app.state, "clock", utc_now)
