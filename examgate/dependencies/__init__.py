"""FastAPI dependencies."""
from examgate.dependencies.services import get_content_store, get_mail_service

__all__ = ["get_content_store", "get_mail_service"]
