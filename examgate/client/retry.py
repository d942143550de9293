"""Bounded retry with a fixed delay between attempts."""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, TypeVar

from examgate.client.gateway import Execution, Gateway
from examgate.config import (
    CONTENT_MAX_ATTEMPTS,
    CONTENT_RETRY_DELAY_SECONDS,
    VERIFY_MAX_ATTEMPTS,
    VERIFY_RETRY_DELAY_SECONDS,
)
from examgate.errors import GatewayError, MalformedResponse, Unreachable, error_from_payload
from examgate.utils import json_load_object

logger = logging.getLogger(__name__)

Sleep = Callable[[float], Awaitable[None]]
T = TypeVar("T")


@dataclass(frozen=True)
class RetryPolicy:
    """How many attempts to make and how long to pause between them."""

    max_attempts: int
    delay_seconds: float

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.delay_seconds < 0:
            raise ValueError("delay_seconds must not be negative")


# Failures are dominated by a single cold start, so the delay is fixed
CONTENT_POLICY = RetryPolicy(CONTENT_MAX_ATTEMPTS, CONTENT_RETRY_DELAY_SECONDS)
VERIFY_POLICY = RetryPolicy(VERIFY_MAX_ATTEMPTS, VERIFY_RETRY_DELAY_SECONDS)


def parse_execution(execution: Execution) -> dict[str, object]:
    """Extract the JSON object body of a completed execution.

    Raises:
        GatewayError: the remote side reported a failed execution.
        MalformedResponse: the body is empty or not a JSON object.
    """
    if execution.failed:
        raise GatewayError(
            f"Remote execution failed (status {execution.status_code})"
        )
    payload = json_load_object(execution.response_body)
    if payload is None:
        raise MalformedResponse()
    return payload


async def invoke(
    gateway: Gateway,
    operation: str,
    body: dict[str, object],
    policy: RetryPolicy = CONTENT_POLICY,
    sleep: Sleep = asyncio.sleep,
    parse: Callable[[dict[str, object]], T] | None = None,
) -> T | dict[str, object]:
    """Call an operation, retrying transport and parse failures.

    An ``{ok: false}`` body is an application error and is raised at once,
    without using up attempts. When ``parse`` is given, its result is returned
    and a ``MalformedResponse`` it raises counts as a failed attempt.

    Raises:
        Unreachable: every attempt failed.
        ExamGateError: the server answered with an application error.
    """
    last_error: GatewayError | None = None
    for attempt in range(1, policy.max_attempts + 1):
        try:
            payload = parse_execution(await gateway.execute(operation, body))
            if payload.get("ok") is False:
                raise error_from_payload(payload)
            return parse(payload) if parse is not None else payload
        except GatewayError as exc:
            last_error = exc
            logger.warning(
                "%s attempt %d/%d failed: %s",
                operation,
                attempt,
                policy.max_attempts,
                exc,
            )
            if attempt < policy.max_attempts:
                await sleep(policy.delay_seconds)

    raise Unreachable(attempts=policy.max_attempts) from last_error
