"""Shared helpers: parsing, datetime handling, distributed locks."""
