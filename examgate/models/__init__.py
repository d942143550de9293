"""Pydantic models."""
from examgate.models.access import AccessAction, AccessRequest, Role
from examgate.models.questions import (
    AnswerValue,
    EssayQuestion,
    MultipleAnswerQuestion,
    MultipleChoiceQuestion,
    Question,
    QuestionType,
    TestDefinition,
    TestSettings,
)
from examgate.models.results import DeliverRequest, SubmitRequest

__all__ = [
    "AccessAction",
    "AccessRequest",
    "AnswerValue",
    "DeliverRequest",
    "EssayQuestion",
    "MultipleAnswerQuestion",
    "MultipleChoiceQuestion",
    "Question",
    "QuestionType",
    "Role",
    "SubmitRequest",
    "TestDefinition",
    "TestSettings",
]
