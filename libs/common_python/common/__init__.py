"""Shared helpers used by the service entrypoints (logging setup)."""
