"""
Shared FastAPI dependencies.
"""

from __future__ import annotations

from fastapi import Request

from .db import Database
from .settings import Settings


def get_database(request: Request) -> Database:
    database = getattr(request.app.state, "database", None)
    if database is None:
        raise RuntimeError("Database is not initialized. The app lifespan must run first.")
    return database


def get_settings(request: Request) -> Settings:
    return request.app.state.settings
