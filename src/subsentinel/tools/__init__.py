"""Tooling wrappers used by the reconnaissance modules."""
