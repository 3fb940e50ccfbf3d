"""Frozen pydantic models for provider records, scores and stats."""
