"""Versioned API routers and their middleware."""
