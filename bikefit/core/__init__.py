"""Shared enums, constants and logging."""
