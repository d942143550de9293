"""Client facade: verify with preload, load, save and submit."""
from __future__ import annotations

import asyncio
import logging
import random
from dataclasses import dataclass

from pydantic import ValidationError

from examgate.client.gateway import (
    DELIVER_OPERATION,
    SUBMIT_OPERATION,
    VERIFY_OPERATION,
    Gateway,
)
from examgate.client.retry import CONTENT_POLICY, VERIFY_POLICY, RetryPolicy, Sleep, invoke
from examgate.data.default_questions import build_default_test
from examgate.errors import InvalidRequest, MalformedResponse
from examgate.models.access import AccessAction, Role
from examgate.models.questions import AnswerValue, TestDefinition
from examgate.services.randomize import prepare_for_student

logger = logging.getLogger(__name__)


@dataclass
class VerifyResult:
    valid: bool
    role: Role | None = None
    content: TestDefinition | None = None


def _parse_content(raw: object) -> TestDefinition | None:
    if raw is None:
        return None
    try:
        return TestDefinition.model_validate(raw)
    except ValidationError as exc:
        raise MalformedResponse("Server returned unreadable test content") from exc


def _content_reply(payload: dict[str, object]) -> TestDefinition | None:
    return _parse_content(payload.get("content"))


def _verify_reply(payload: dict[str, object]) -> VerifyResult:
    if payload.get("valid") is not True:
        return VerifyResult(valid=False)
    try:
        role = Role(payload.get("role"))
    except ValueError as exc:
        raise MalformedResponse("Server returned an unknown role") from exc
    return VerifyResult(valid=True, role=role, content=_parse_content(payload.get("content")))


class ExamClient:
    """Holds the verified code and the test content for one client session."""

    def __init__(
        self,
        gateway: Gateway,
        content_policy: RetryPolicy = CONTENT_POLICY,
        verify_policy: RetryPolicy = VERIFY_POLICY,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self.gateway = gateway
        self.content_policy = content_policy
        self.verify_policy = verify_policy
        self._sleep = sleep
        self.code: str | None = None
        self.role: Role | None = None
        self._content: TestDefinition | None = None

    @property
    def has_content(self) -> bool:
        return self._content is not None

    def forget_content(self) -> None:
        """Drop cached content, as after a page refresh."""
        self._content = None

    def _require_code(self) -> str:
        if not self.code:
            raise InvalidRequest("Access code has not been verified")
        return self.code

    async def verify(self, code: str) -> VerifyResult:
        """Check a code; on success the current test arrives in the same reply."""
        result = await invoke(
            self.gateway,
            VERIFY_OPERATION,
            {"code": code.strip()},
            self.verify_policy,
            self._sleep,
            parse=_verify_reply,
        )
        if not result.valid:
            return result

        self.code = code.strip()
        self.role = result.role
        # Nothing saved yet means the built-in test
        self._content = result.content if result.content is not None else build_default_test()
        return result

    async def load_questions(self) -> TestDefinition:
        """Preloaded content if available, otherwise an explicit load."""
        if self._content is not None:
            return self._content.model_copy(deep=True)

        logger.info("No preloaded content, loading explicitly")
        content = await invoke(
            self.gateway,
            VERIFY_OPERATION,
            {"code": self._require_code(), "action": AccessAction.LOAD_QUESTIONS.value},
            self.content_policy,
            self._sleep,
            parse=_content_reply,
        )
        self._content = content if content is not None else build_default_test()
        return self._content.model_copy(deep=True)

    async def save_questions(self, definition: TestDefinition) -> None:
        """Save the full test definition. Editor code required."""
        await invoke(
            self.gateway,
            VERIFY_OPERATION,
            {
                "code": self._require_code(),
                "action": AccessAction.SAVE_QUESTIONS.value,
                "content": definition.to_payload(),
            },
            self.content_policy,
            self._sleep,
        )
        self._content = definition.model_copy(deep=True)

    async def student_view(self, rng: random.Random | None = None) -> TestDefinition:
        """Test content with question and option randomization applied."""
        return prepare_for_student(await self.load_questions(), rng)

    async def submit(
        self,
        answers: dict[int, AnswerValue],
        first_name: str,
        last_name: str,
    ) -> dict[str, object]:
        """Send answers for server-side grading and delivery; returns the score."""
        payload = await invoke(
            self.gateway,
            SUBMIT_OPERATION,
            {
                "code": self._require_code(),
                "firstName": first_name,
                "lastName": last_name,
                "answers": {str(key): value for key, value in answers.items()},
            },
            self.verify_policy,
            self._sleep,
        )
        score = payload.get("score")
        return score if isinstance(score, dict) else {}

    async def deliver(self, subject: str, report: str) -> None:
        await invoke(
            self.gateway,
            DELIVER_OPERATION,
            {"subject": subject, "report": report},
            self.verify_policy,
            self._sleep,
        )
