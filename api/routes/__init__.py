"""API route handlers."""

from api.routes import catalog, commitments, health, merkle

__all__ = ["health", "catalog", "merkle", "commitments"]
