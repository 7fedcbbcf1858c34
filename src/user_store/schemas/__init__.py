"""Pydantic models for user records and caller input."""
