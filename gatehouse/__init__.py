"""Gatehouse: authentication and session-security core for the event platform."""
