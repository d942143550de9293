"""API route modules."""
from examgate.routes import access, health, results

__all__ = ["access", "health", "results"]
