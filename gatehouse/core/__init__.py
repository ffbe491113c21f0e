"""Core layer: result types, errors, settings and the DI container."""
