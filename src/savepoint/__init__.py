"""Savepoint - commit and push your current work in one step."""

__version__ = "0.1.0"
