from datetime import datetime, timezone

import pytest

from examgate.models import questions as qm
from examgate.services.grading_service import (
    NO_ANSWER,
    format_report,
    grade,
    grade_multiple_answer,
    grade_multiple_choice,
    report_subject,
)

MC = qm.MultipleChoiceQuestion(id=1, prompt="mc", options=["A", "B", "C"], correctIndex=1)
MA = qm.MultipleAnswerQuestion(id=2, prompt="ma", options=["X", "Y", "Z"], correctIndices=[0, 2])


@pytest.mark.parametrize(
    ("submitted", "expected"),
    [("B", True), ("A", False), (None, False), ("b", False), (["B"], False)],
)
def test_multiple_choice_matches_by_value(submitted, expected) -> None:
    assert grade_multiple_choice(MC, submitted) is expected


def test_multiple_choice_ignores_display_order() -> None:
    shuffled = MC.model_copy(update={"options": ["C", "B", "A"], "correctIndex": 1})
    assert grade_multiple_choice(shuffled, "B") is True


@pytest.mark.parametrize(
    ("submitted", "expected"),
    [
        (["X", "Z"], True),
        (["Z", "X"], True),
        (["X"], False),
        (["X", "Y", "Z"], False),
        ([], False),
        (None, False),
        (["X", "Z", "Z"], False),
        ("X", False),
    ],
)
def test_multiple_answer_requires_exact_set(submitted, expected) -> None:
    assert grade_multiple_answer(MA, submitted) is expected


def test_single_string_counts_as_one_element_set() -> None:
    question = qm.MultipleAnswerQuestion(id=3, options=["X", "Y"], correctIndices=[1])
    assert grade_multiple_answer(question, "Y") is True


def test_grade_excludes_essays_from_score(sample_definition) -> None:
    report = grade({1: "B", 2: ["X"], 4: "Because."}, sample_definition)

    assert [r.question_id for r in report.results] == [1, 2, 4]
    assert report.correct_count == 1
    assert report.gradable_count == 2
    assert report.percent == 50.0
    essay = report.results[2]
    assert essay.correct is None
    assert essay.submitted == "Because."
    assert report.score_payload() == {"correct": 1, "total": 2, "percent": 50.0}


def test_grade_with_no_answers(sample_definition) -> None:
    report = grade({}, sample_definition)
    assert report.correct_count == 0
    assert report.gradable_count == 2


def test_percent_is_zero_without_gradable_questions() -> None:
    definition = qm.TestDefinition(questions=[qm.EssayQuestion(id=1, prompt="e")])
    report = grade({1: "text"}, definition)
    assert report.gradable_count == 0
    assert report.percent == 0.0


def test_format_report(sample_definition) -> None:
    report = grade({1: "B", 2: ["Y"]}, sample_definition)
    text = format_report(
        report, "Ada Lovelace", datetime(2026, 3, 1, 9, 30, tzinfo=timezone.utc)
    )

    assert "Student: Ada Lovelace" in text
    assert "Submitted: 2026-03-01 09:30:00 UTC" in text
    assert "Auto-graded Score: 1/2 (50.0%)" in text
    assert "Q1 [Multiple Choice] ✓ CORRECT" in text
    assert "  Correct Answer: B" in text
    assert "Q2 [Multiple Answer] ✗ INCORRECT" in text
    assert "  Selected: Y" in text
    assert "  Correct Answers: X; Z" in text
    assert "Q4 [Essay]" in text
    assert f"  Answer: {NO_ANSWER}" in text


def test_report_subject() -> None:
    assert report_subject("Ada Lovelace") == "Assessment Test Results – Ada Lovelace"
