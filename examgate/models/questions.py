"""Question and test definition models."""
from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field, model_validator


class QuestionType(str, Enum):
    """Discriminator values for question variants."""

    MULTIPLE_CHOICE = "multiple-choice"
    MULTIPLE_ANSWER = "multiple-answer"
    ESSAY = "essay"


def _check_distinct_options(question_id: int, options: list[str]) -> None:
    # Answers are matched by option text
    if len(set(options)) != len(options):
        raise ValueError(f"Duplicate option text in question {question_id}")


class QuestionBase(BaseModel):
    """Fields shared by every question variant."""

    id: int = Field(..., gt=0)
    prompt: str = ""
    imageUrl: str | None = None


class MultipleChoiceQuestion(QuestionBase):
    """Single correct option, graded by option text."""

    type: Literal["multiple-choice"] = QuestionType.MULTIPLE_CHOICE.value
    options: list[str] = Field(..., min_length=2)
    correctIndex: int
    randomizeOptions: bool = False

    @model_validator(mode="after")
    def _check_correct_index(self) -> "MultipleChoiceQuestion":
        _check_distinct_options(self.id, self.options)
        if not 0 <= self.correctIndex < len(self.options):
            raise ValueError(
                f"correctIndex {self.correctIndex} out of range for question {self.id}"
            )
        return self

    def correct_answers(self) -> list[str]:
        return [self.options[self.correctIndex]]


class MultipleAnswerQuestion(QuestionBase):
    """One or more correct options, graded as an exact set."""

    type: Literal["multiple-answer"] = QuestionType.MULTIPLE_ANSWER.value
    options: list[str] = Field(..., min_length=2)
    correctIndices: list[int] = Field(..., min_length=1)
    randomizeOptions: bool = False

    @model_validator(mode="after")
    def _check_correct_indices(self) -> "MultipleAnswerQuestion":
        _check_distinct_options(self.id, self.options)
        if len(set(self.correctIndices)) != len(self.correctIndices):
            raise ValueError(f"Duplicate correctIndices for question {self.id}")
        for index in self.correctIndices:
            if not 0 <= index < len(self.options):
                raise ValueError(
                    f"correctIndices entry {index} out of range for question {self.id}"
                )
        return self

    def correct_answers(self) -> list[str]:
        return [self.options[index] for index in sorted(self.correctIndices)]


class EssayQuestion(QuestionBase):
    """Free-text answer, never auto-graded."""

    type: Literal["essay"] = QuestionType.ESSAY.value


Question = Annotated[
    Union[MultipleChoiceQuestion, MultipleAnswerQuestion, EssayQuestion],
    Field(discriminator="type"),
]

ChoiceQuestion = Union[MultipleChoiceQuestion, MultipleAnswerQuestion]

AnswerValue = Union[str, list[str]]


class TestSettings(BaseModel):
    """Test-wide presentation settings."""

    randomizeQuestions: bool = False


class TestDefinition(BaseModel):
    """The single persisted test: settings plus questions in authored order."""

    settings: TestSettings = Field(default_factory=TestSettings)
    questions: list[Question] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def _wrap_legacy_array(cls, data: object) -> object:
        # Older documents hold a bare question array
        if isinstance(data, list):
            return {"settings": {}, "questions": data}
        return data

    @model_validator(mode="after")
    def _check_unique_ids(self) -> "TestDefinition":
        seen: set[int] = set()
        for question in self.questions:
            if question.id in seen:
                raise ValueError(f"Duplicate question id {question.id}")
            seen.add(question.id)
        return self

    def next_question_id(self) -> int:
        """Id for a newly added question."""
        return max((question.id for question in self.questions), default=0) + 1

    def find_question(self, question_id: int) -> QuestionBase | None:
        for question in self.questions:
            if question.id == question_id:
                return question
        return None

    def to_payload(self) -> dict[str, object]:
        """Serialize to the JSON shape exchanged with clients and the store."""
        return self.model_dump(mode="json", exclude_none=True)
