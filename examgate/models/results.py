"""Models for test submission and result delivery."""
from pydantic import AliasChoices, BaseModel, Field

from examgate.models.questions import AnswerValue


class SubmitRequest(BaseModel):
    """Student submission: the code, the student's name and answers by question id."""

    code: str | None = None
    firstName: str = ""
    lastName: str = ""
    answers: dict[int, AnswerValue] = Field(default_factory=dict)

    @property
    def student_name(self) -> str:
        return f"{self.firstName.strip()} {self.lastName.strip()}"


class DeliverRequest(BaseModel):
    """Already formatted report to hand to the mail transport."""

    subject: str = ""
    report: str = Field(default="", validation_alias=AliasChoices("report", "message"))
