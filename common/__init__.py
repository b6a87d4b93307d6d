"""Shared helpers: error messages."""
