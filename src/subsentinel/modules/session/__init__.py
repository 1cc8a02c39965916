"""Scan persistence backed by SQLite."""

from .manager import SessionManager

__all__ = ["SessionManager"]
