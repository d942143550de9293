"""Presentation-time randomization of questions and options."""
from __future__ import annotations

import random
from typing import Sequence, TypeVar

from examgate.models.questions import (
    EssayQuestion,
    MultipleAnswerQuestion,
    MultipleChoiceQuestion,
    TestDefinition,
)

T = TypeVar("T")


def fisher_yates(items: Sequence[T], rng: random.Random) -> list[T]:
    """Return a uniformly shuffled copy of ``items``."""
    result = list(items)
    for i in range(len(result) - 1, 0, -1):
        j = rng.randint(0, i)
        result[i], result[j] = result[j], result[i]
    return result


def shuffle_options(question, rng: random.Random):
    """Return a copy of the question with its options permuted.

    Correct indices follow the options they point at. Questions without
    ``randomizeOptions`` are returned unchanged.
    """
    if isinstance(question, EssayQuestion):
        return question
    if not question.randomizeOptions:
        return question

    # order[new_position] == old_position
    order = fisher_yates(range(len(question.options)), rng)
    new_position = {old: new for new, old in enumerate(order)}
    options = [question.options[old] for old in order]

    if isinstance(question, MultipleChoiceQuestion):
        return question.model_copy(
            update={
                "options": options,
                "correctIndex": new_position[question.correctIndex],
            }
        )
    if isinstance(question, MultipleAnswerQuestion):
        return question.model_copy(
            update={
                "options": options,
                "correctIndices": sorted(
                    new_position[index] for index in question.correctIndices
                ),
            }
        )
    raise TypeError(f"Unsupported question type: {type(question).__name__}")


def prepare_for_student(
    definition: TestDefinition, rng: random.Random | None = None
) -> TestDefinition:
    """Apply question and option randomization to a copy of the definition."""
    rng = rng or random.SystemRandom()
    copy = definition.model_copy(deep=True)
    questions = copy.questions
    if copy.settings.randomizeQuestions:
        questions = fisher_yates(questions, rng)
    copy.questions = [shuffle_options(question, rng) for question in questions]
    return copy
