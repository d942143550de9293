"""Grading of submitted answers against the authoritative test definition."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from examgate.models.questions import (
    AnswerValue,
    EssayQuestion,
    MultipleAnswerQuestion,
    MultipleChoiceQuestion,
    QuestionType,
    TestDefinition,
)
from examgate.utils import format_timestamp

NO_ANSWER = "(no answer)"

TYPE_LABELS = {
    QuestionType.MULTIPLE_CHOICE.value: "Multiple Choice",
    QuestionType.MULTIPLE_ANSWER.value: "Multiple Answer",
    QuestionType.ESSAY.value: "Essay",
}

_RULE = "═══════════════════════════════════"
_THIN_RULE = "───────────────────────────────────"


@dataclass
class QuestionResult:
    question_id: int
    question_type: str
    prompt: str
    submitted: AnswerValue | None
    correct: bool | None  # None for questions that are not auto-graded
    correct_answers: list[str] = field(default_factory=list)

    @property
    def gradable(self) -> bool:
        return self.correct is not None


@dataclass
class GradeReport:
    results: list[QuestionResult]

    @property
    def correct_count(self) -> int:
        return sum(1 for result in self.results if result.correct)

    @property
    def gradable_count(self) -> int:
        return sum(1 for result in self.results if result.gradable)

    @property
    def percent(self) -> float:
        if self.gradable_count == 0:
            return 0.0
        return self.correct_count / self.gradable_count * 100

    def score_payload(self) -> dict[str, object]:
        return {
            "correct": self.correct_count,
            "total": self.gradable_count,
            "percent": round(self.percent, 1),
        }


def _as_answer_list(submitted: AnswerValue | None) -> list[str] | None:
    if isinstance(submitted, str):
        return [submitted]
    if isinstance(submitted, list) and all(isinstance(item, str) for item in submitted):
        return submitted
    return None


def grade_multiple_choice(
    question: MultipleChoiceQuestion, submitted: AnswerValue | None
) -> bool:
    """Match by option text, since the student may have seen shuffled options."""
    if not isinstance(submitted, str):
        return False
    return submitted == question.options[question.correctIndex]


def grade_multiple_answer(
    question: MultipleAnswerQuestion, submitted: AnswerValue | None
) -> bool:
    """Exact set match, order-independent, duplicates rejected."""
    answers = _as_answer_list(submitted)
    if answers is None or len(set(answers)) != len(answers):
        return False
    return set(answers) == set(question.correct_answers())


def grade_question(question, submitted: AnswerValue | None) -> QuestionResult:
    if isinstance(question, MultipleChoiceQuestion):
        correct = grade_multiple_choice(question, submitted)
    elif isinstance(question, MultipleAnswerQuestion):
        correct = grade_multiple_answer(question, submitted)
    elif isinstance(question, EssayQuestion):
        return QuestionResult(
            question_id=question.id,
            question_type=question.type,
            prompt=question.prompt,
            submitted=submitted,
            correct=None,
        )
    else:
        raise TypeError(f"Unsupported question type: {type(question).__name__}")

    return QuestionResult(
        question_id=question.id,
        question_type=question.type,
        prompt=question.prompt,
        submitted=submitted,
        correct=correct,
        correct_answers=question.correct_answers(),
    )


def grade(answers: dict[int, AnswerValue], definition: TestDefinition) -> GradeReport:
    """Grade answers in canonical question order.

    ``definition`` must be the stored definition, never a client copy.
    """
    return GradeReport(
        results=[
            grade_question(question, answers.get(question.id))
            for question in definition.questions
        ]
    )


def _format_answer(submitted: AnswerValue | None) -> str:
    if submitted is None:
        return NO_ANSWER
    if isinstance(submitted, list):
        return "; ".join(submitted) if submitted else NO_ANSWER
    return submitted if submitted.strip() else NO_ANSWER


def _format_result(result: QuestionResult) -> list[str]:
    label = TYPE_LABELS.get(result.question_type, result.question_type)
    if not result.gradable:
        return [
            f"Q{result.question_id} [{label}]",
            f"  Prompt: {result.prompt}",
            f"  Answer: {_format_answer(result.submitted)}",
            "",
        ]

    verdict = "✓ CORRECT" if result.correct else "✗ INCORRECT"
    answer_label = "Correct Answer" if len(result.correct_answers) == 1 else "Correct Answers"
    return [
        f"Q{result.question_id} [{label}] {verdict}",
        f"  Prompt: {result.prompt}",
        f"  Selected: {_format_answer(result.submitted)}",
        f"  {answer_label}: {'; '.join(result.correct_answers)}",
        "",
    ]


def format_report(report: GradeReport, student_name: str, submitted_at: datetime) -> str:
    """Plain-text report mailed to the reviewer."""
    header = [
        _RULE,
        "       ASSESSMENT TEST RESULTS",
        _RULE,
        f"Student: {student_name}",
        f"Submitted: {format_timestamp(submitted_at)}",
        f"Auto-graded Score: {report.correct_count}/{report.gradable_count}"
        f" ({report.percent:.1f}%)",
        "",
        _THIN_RULE,
        "",
    ]
    lines: list[str] = []
    for result in report.results:
        lines.extend(_format_result(result))
    return "\n".join(header + lines)


def report_subject(student_name: str) -> str:
    return f"Assessment Test Results – {student_name}"
