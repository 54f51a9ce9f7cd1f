"""Shared HTTP, deadline, error and logging helpers."""
