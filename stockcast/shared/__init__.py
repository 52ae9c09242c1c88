"""Shared infrastructure: configuration, exceptions and logging."""
