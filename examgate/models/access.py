"""Models for access-code gated operations."""
from enum import Enum

from pydantic import AliasChoices, BaseModel, Field

from examgate.models.questions import TestDefinition


class Role(str, Enum):
    """Role resolved from an access code."""

    STUDENT = "student"
    EDITOR = "editor"


class AccessAction(str, Enum):
    """Operations dispatched through the access endpoint."""

    VERIFY = "verify"
    LOAD_QUESTIONS = "load-questions"
    SAVE_QUESTIONS = "save-questions"


class AccessRequest(BaseModel):
    """Request to verify a code and optionally load or save content."""

    code: str | None = None
    action: AccessAction = AccessAction.VERIFY
    # Older clients send the payload under "questions"
    content: TestDefinition | None = Field(
        default=None, validation_alias=AliasChoices("content", "questions")
    )
