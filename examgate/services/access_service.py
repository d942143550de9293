"""Access code resolution and per-action authorization."""
import logging

from examgate.config import get_access_codes
from examgate.errors import ConfigurationError, InvalidRequest, Unauthorized
from examgate.models.access import AccessAction, Role

logger = logging.getLogger(__name__)

# Actions each role may perform
_ALLOWED_ACTIONS: dict[Role, frozenset[AccessAction]] = {
    Role.STUDENT: frozenset({AccessAction.VERIFY, AccessAction.LOAD_QUESTIONS}),
    Role.EDITOR: frozenset(AccessAction),
}


def normalize_code(code: str) -> str:
    """Codes compare case-insensitively, ignoring surrounding whitespace."""
    return code.strip().upper()


def resolve_role(
    code: str,
    student_code: str | None,
    editor_code: str | None = None,
) -> Role | None:
    """Resolve the role for a submitted code.

    The editor code is checked first so it wins if both secrets match.

    Returns:
        The matching role, or None if the code matches no secret.

    Raises:
        ConfigurationError: if the student code is not configured.
    """
    if not student_code or not student_code.strip():
        logger.error("ACCESS_CODE is not configured")
        raise ConfigurationError("ACCESS_CODE is not configured")

    submitted = normalize_code(code)
    if editor_code and editor_code.strip() and submitted == normalize_code(editor_code):
        return Role.EDITOR
    if submitted == normalize_code(student_code):
        return Role.STUDENT
    return None


def resolve_configured_role(code: str | None) -> Role | None:
    """Resolve a request code against the configured secrets."""
    if not isinstance(code, str) or not code.strip():
        raise InvalidRequest("No code provided")
    student_code, editor_code = get_access_codes()
    role = resolve_role(code, student_code, editor_code)
    logger.info("Access code check: %s", role.value if role else "invalid")
    return role


def can_perform(role: Role, action: AccessAction) -> bool:
    return action in _ALLOWED_ACTIONS[role]


def authorize(role: Role | None, action: AccessAction) -> Role:
    """Check that a resolved role may perform an action.

    Raises:
        Unauthorized: if the code was invalid or the role is insufficient.
    """
    if role is None:
        raise Unauthorized("Invalid access code")
    if not can_perform(role, action):
        raise Unauthorized(f"The {role.value} role may not perform {action.value}")
    return role
