import pytest

from examgate.errors import ConfigurationError, InvalidRequest, Unauthorized
from examgate.models.access import AccessAction, Role
from examgate.services import access_service


def test_resolve_role_matches_each_secret() -> None:
    assert access_service.resolve_role("EDIT2026", "TEST2026", "EDIT2026") == Role.EDITOR
    assert access_service.resolve_role("TEST2026", "TEST2026", "EDIT2026") == Role.STUDENT
    assert access_service.resolve_role("WRONG", "TEST2026", "EDIT2026") is None


def test_resolve_role_ignores_case_and_whitespace() -> None:
    assert access_service.resolve_role(" test2026 ", "TEST2026", "EDIT2026") == Role.STUDENT
    assert access_service.resolve_role("\tEdit2026\n", "TEST2026", " edit2026 ") == Role.EDITOR


def test_editor_code_wins_when_both_match() -> None:
    assert access_service.resolve_role("SAME", "same", "SAME") == Role.EDITOR


def test_resolve_role_without_editor_code() -> None:
    assert access_service.resolve_role("EDIT2026", "TEST2026", None) is None
    assert access_service.resolve_role("TEST2026", "TEST2026", "") == Role.STUDENT


def test_blank_editor_code_never_matches_blank_input() -> None:
    assert access_service.resolve_role("   ", "TEST2026", "   ") is None


@pytest.mark.parametrize("student_code", [None, "", "   "])
def test_missing_student_code_is_configuration_error(student_code) -> None:
    with pytest.raises(ConfigurationError) as excinfo:
        access_service.resolve_role("TEST2026", student_code, "EDIT2026")
    assert "ACCESS_CODE" not in excinfo.value.public_message


def test_resolve_configured_role_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    assert access_service.resolve_configured_role("test2026") == Role.STUDENT
    monkeypatch.delenv("ACCESS_CODE")
    with pytest.raises(ConfigurationError):
        access_service.resolve_configured_role("test2026")


@pytest.mark.parametrize("code", [None, "", "  "])
def test_resolve_configured_role_requires_code(code) -> None:
    with pytest.raises(InvalidRequest):
        access_service.resolve_configured_role(code)


def test_authorize_per_action() -> None:
    assert access_service.authorize(Role.STUDENT, AccessAction.VERIFY) == Role.STUDENT
    assert access_service.authorize(Role.STUDENT, AccessAction.LOAD_QUESTIONS) == Role.STUDENT
    assert access_service.authorize(Role.EDITOR, AccessAction.SAVE_QUESTIONS) == Role.EDITOR
    with pytest.raises(Unauthorized):
        access_service.authorize(Role.STUDENT, AccessAction.SAVE_QUESTIONS)
    with pytest.raises(Unauthorized):
        access_service.authorize(None, AccessAction.LOAD_QUESTIONS)
