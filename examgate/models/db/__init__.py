"""Database models."""
from examgate.models.db.content_document import ContentDocument

__all__ = ["ContentDocument"]
