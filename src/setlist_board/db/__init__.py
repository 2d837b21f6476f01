# src/setlist_board/db/__init__.py
"""Database configuration and utilities."""

from .session import SessionLocal, get_db, run_atomic

__all__ = ["get_db", "run_atomic", "SessionLocal"]
