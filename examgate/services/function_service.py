"""Server-side operations: verify with preload, load, save, submit and deliver."""
import logging

from examgate.errors import InvalidRequest
from examgate.models.access import AccessAction, AccessRequest
from examgate.models.results import DeliverRequest, SubmitRequest
from examgate.services import access_service
from examgate.services.content_store import ContentStore
from examgate.services.grading_service import format_report, grade, report_subject
from examgate.services.mail_service import MailService
from examgate.utils import utc_now

logger = logging.getLogger(__name__)


def _content_payload(store: ContentStore) -> dict[str, object] | None:
    definition = store.load()
    return definition.to_payload() if definition is not None else None


def verify_code(request: AccessRequest, store: ContentStore) -> dict[str, object]:
    """Resolve the code and preload the current test in the same response."""
    role = access_service.resolve_configured_role(request.code)
    if role is None:
        return {"ok": True, "valid": False}
    # Single read; the caller's retry already covers transient failures
    return {
        "ok": True,
        "valid": True,
        "role": role.value,
        "content": _content_payload(store),
    }


def load_questions(request: AccessRequest, store: ContentStore) -> dict[str, object]:
    role = access_service.resolve_configured_role(request.code)
    access_service.authorize(role, AccessAction.LOAD_QUESTIONS)
    return {"ok": True, "content": _content_payload(store)}


def save_questions(request: AccessRequest, store: ContentStore) -> dict[str, object]:
    role = access_service.resolve_configured_role(request.code)
    access_service.authorize(role, AccessAction.SAVE_QUESTIONS)
    if request.content is None or not request.content.questions:
        raise InvalidRequest("No questions provided")
    store.save(request.content)
    return {"ok": True, "saved": True}


_ACCESS_HANDLERS = {
    AccessAction.VERIFY: verify_code,
    AccessAction.LOAD_QUESTIONS: load_questions,
    AccessAction.SAVE_QUESTIONS: save_questions,
}


def handle_access_request(
    request: AccessRequest, store: ContentStore
) -> dict[str, object]:
    """Dispatch an access request by its action."""
    return _ACCESS_HANDLERS[request.action](request, store)


def submit_results(
    request: SubmitRequest, store: ContentStore, mail: MailService
) -> dict[str, object]:
    """Grade a submission against the stored test and mail the report."""
    role = access_service.resolve_configured_role(request.code)
    access_service.authorize(role, AccessAction.VERIFY)

    if not request.firstName.strip() or not request.lastName.strip():
        raise InvalidRequest("First and last name are required")
    student_name = request.student_name

    definition = store.load_or_default()
    report = grade(request.answers, definition)
    body = format_report(report, student_name, utc_now())
    mail.deliver(report_subject(student_name), body)
    logger.info(
        "Delivered results for %s: %d/%d",
        student_name,
        report.correct_count,
        report.gradable_count,
    )
    return {"ok": True, "score": report.score_payload()}


def deliver_result(request: DeliverRequest, mail: MailService) -> dict[str, object]:
    if not request.subject.strip() or not request.report.strip():
        raise InvalidRequest("Missing subject or report")
    mail.deliver(request.subject, request.report)
    return {"ok": True}
