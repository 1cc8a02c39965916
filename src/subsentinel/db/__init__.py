"""Database layer for SubSentinel."""
