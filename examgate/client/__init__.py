"""Retrying client for the access-gated test service."""
from examgate.client.gateway import Execution, Gateway, HttpGateway
from examgate.client.retry import CONTENT_POLICY, VERIFY_POLICY, RetryPolicy, invoke
from examgate.client.session import ExamClient, VerifyResult

__all__ = [
    "CONTENT_POLICY",
    "VERIFY_POLICY",
    "ExamClient",
    "Execution",
    "Gateway",
    "HttpGateway",
    "RetryPolicy",
    "VerifyResult",
    "invoke",
]
