"""Remote procedure gateway: named operations over HTTP."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol

import httpx

from examgate.config import GATEWAY_TIMEOUT_SECONDS
from examgate.errors import GatewayError
from examgate.utils import json_load_object

logger = logging.getLogger(__name__)

VERIFY_OPERATION = "verify-access-code"
SUBMIT_OPERATION = "submit-results"
DELIVER_OPERATION = "send-test-results"

OPERATION_ROUTES = {
    VERIFY_OPERATION: "/api/access",
    SUBMIT_OPERATION: "/api/results/submit",
    DELIVER_OPERATION: "/api/results/deliver",
}

# Statuses a proxy returns while the backend is booting or has timed out
FAILED_HTTP_STATUSES = frozenset({502, 503, 504})

STATUS_COMPLETED = "completed"
STATUS_FAILED = "failed"


def is_application_error(body: str) -> bool:
    """True for an ``{ok: false, code}`` body written by the service itself."""
    payload = json_load_object(body)
    return (
        payload is not None
        and payload.get("ok") is False
        and isinstance(payload.get("code"), str)
    )


@dataclass
class Execution:
    """Outcome of one remote call, before the body is interpreted."""

    status: str
    response_body: str = ""
    status_code: int | None = None

    @property
    def failed(self) -> bool:
        return self.status == STATUS_FAILED


class Gateway(Protocol):
    async def execute(self, operation: str, body: dict[str, object]) -> Execution:
        """Run one named operation. Raises GatewayError on transport failure."""
        ...


class HttpGateway:
    """Gateway that posts JSON bodies to the service over HTTP."""

    def __init__(
        self,
        base_url: str,
        timeout: float = GATEWAY_TIMEOUT_SECONDS,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._client = client or httpx.AsyncClient(base_url=self.base_url, timeout=timeout)

    async def execute(self, operation: str, body: dict[str, object]) -> Execution:
        path = OPERATION_ROUTES.get(operation)
        if path is None:
            raise ValueError(f"Unknown operation: {operation}")

        try:
            response = await self._client.post(path, json=body)
        except httpx.HTTPError as exc:
            raise GatewayError(f"{operation} request failed: {exc}") from exc

        status = STATUS_COMPLETED
        if response.status_code in FAILED_HTTP_STATUSES and not is_application_error(
            response.text
        ):
            status = STATUS_FAILED
        return Execution(
            status=status,
            response_body=response.text,
            status_code=response.status_code,
        )

    async def warm_up(self) -> bool:
        """Ping the service so a cold backend starts booting early."""
        try:
            response = await self._client.get("/api/health")
        except httpx.HTTPError as exc:
            logger.debug("Warm-up request failed: %s", exc)
            return False
        return response.status_code == 200

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "HttpGateway":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()
