"""Service dependencies for FastAPI."""
from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session as DbSession

from examgate.database import get_db
from examgate.services.content_store import ContentStore
from examgate.services.mail_service import MailService


def get_content_store(db: Annotated[DbSession, Depends(get_db)]) -> ContentStore:
    """Content store bound to the request's database session."""
    return ContentStore(db)


def get_mail_service() -> MailService:
    """Mail service configured from the environment."""
    return MailService.from_env()
