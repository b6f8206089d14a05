# src/frog_backend/db/__init__.py
"""Engine, sessions and schema bootstrap for the post store and tip ledger."""

from .session import Base, SessionLocal, create_tables, get_db

__all__ = ["Base", "SessionLocal", "create_tables", "get_db"]
