"""Scheduled sync and settlement jobs."""
