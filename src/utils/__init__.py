"""Shared utilities: configuration layers, schema validation, I/O and logging."""
