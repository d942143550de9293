"""Test submission and result delivery endpoints."""
from typing import Annotated

from fastapi import APIRouter, Depends

from examgate.dependencies import get_content_store, get_mail_service
from examgate.models import DeliverRequest, SubmitRequest
from examgate.services.content_store import ContentStore
from examgate.services.function_service import deliver_result, submit_results
from examgate.services.mail_service import MailService

router = APIRouter(prefix="/api/results", tags=["results"])


@router.post("/submit")
def submit(
    payload: SubmitRequest,
    store: Annotated[ContentStore, Depends(get_content_store)],
    mail: Annotated[MailService, Depends(get_mail_service)],
) -> dict[str, object]:
    """Grade a submission against the stored test and email the report."""
    return submit_results(payload, store, mail)


@router.post("/deliver")
def deliver(
    payload: DeliverRequest,
    mail: Annotated[MailService, Depends(get_mail_service)],
) -> dict[str, object]:
    """Email an already formatted report."""
    return deliver_result(payload, mail)
