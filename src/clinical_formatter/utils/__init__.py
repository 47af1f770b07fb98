"""Utilities shared across formatters."""
