"""Pydantic request and response schemas (HTTP layer only)."""
