"""Application layer: services that orchestrate the auth core."""
