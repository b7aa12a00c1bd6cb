"""Utility modules for savepoint."""
