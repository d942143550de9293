"""Built-in test used when nothing has been saved yet."""
from __future__ import annotations

from examgate.models.questions import (
    EssayQuestion,
    MultipleChoiceQuestion,
    TestDefinition,
    TestSettings,
)

DEFAULT_QUESTION_COUNT = 50

_SHORT_TEXT = [
    "Lorem ipsum dolor sit amet, consectetur adipiscing elit.",
    "Sed do eiusmod tempor incididunt ut labore et dolore magna aliqua.",
    "Ut enim ad minim veniam, quis nostrud exercitation ullamco laboris.",
    "Duis aute irure dolor in reprehenderit in voluptate velit esse cillum.",
    "Excepteur sint occaecat cupidatat non proident, sunt in culpa.",
    "Nulla facilisi morbi tempus iaculis urna id volutpat lacus.",
    "Viverra accumsan in nisl nisi scelerisque eu ultrices vitae.",
    "Amet consectetur adipiscing elit pellentesque habitant morbi tristique.",
    "Feugiat in ante metus dictum at tempor commodo ullamcorper.",
    "Egestas integer eget aliquet nibh praesent tristique magna sit.",
]

_LONG_TEXT = [
    "Lorem ipsum dolor sit amet, consectetur adipiscing elit. Sed do eiusmod tempor "
    "incididunt ut labore et dolore magna aliqua.",
    "Duis aute irure dolor in reprehenderit in voluptate velit esse cillum dolore eu "
    "fugiat nulla pariatur.",
    "Pellentesque habitant morbi tristique senectus et netus et malesuada fames ac "
    "turpis egestas.",
    "Viverra accumsan in nisl nisi scelerisque eu ultrices vitae auctor.",
    "Feugiat in ante metus dictum at tempor commodo ullamcorper a lacus.",
    "Nulla facilisi morbi tempus iaculis urna id volutpat lacus laoreet.",
    "Amet venenatis urna cursus eget nunc scelerisque viverra mauris in.",
    "Risus commodo viverra maecenas accumsan lacus vel facilisis volutpat est.",
    "Sapien et ligula ullamcorper malesuada proin libero nunc consequat interdum.",
    "Ornare arcu dui vivamus arcu felis bibendum ut tristique.",
]


def _pick(items: list[str], index: int) -> str:
    return items[index % len(items)]


def is_default_essay(question_id: int) -> bool:
    """Every third and fifth question of each block of five is an essay."""
    return question_id % 5 in (0, 3)


def build_default_test() -> TestDefinition:
    """Return a fresh copy of the built-in test."""
    questions = []
    for index in range(DEFAULT_QUESTION_COUNT):
        question_id = index + 1
        prompt = f"{question_id}. {_pick(_LONG_TEXT, index)}"
        if is_default_essay(question_id):
            questions.append(EssayQuestion(id=question_id, prompt=prompt))
            continue
        questions.append(
            MultipleChoiceQuestion(
                id=question_id,
                prompt=prompt,
                options=[_pick(_SHORT_TEXT, index + offset) for offset in range(4)],
                correctIndex=index % 4,
            )
        )
    return TestDefinition(settings=TestSettings(), questions=questions)
