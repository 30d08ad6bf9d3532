import pytest

from ideahub.roles import SUPPORTED_ROLES, Role, resolve_role, validate_role


@pytest.mark.unit
@pytest.mark.parametrize("role", SUPPORTED_ROLES)
def test_supported_role_is_accepted(role: str) -> None:
    validated = validate_role(role)
    assert validated == role


@pytest.mark.unit
def test_invalid_role_rejected_with_actionable_message() -> None:
    with pytest.raises(ValueError) as exc_info:
        validate_role("superuser")

    message = str(exc_info.value)
    assert "Unsupported role 'superuser'" in message
    assert "Supported roles:" in message


@pytest.mark.unit
@pytest.mark.parametrize(
    ("email", "expected"),
    [
        ("admin@company.test", Role.ADMIN),
        ("Team.ADMIN@company.test", Role.ADMIN),
        ("evaluator@company.test", Role.EVALUATOR),
        ("eval.team@company.test", Role.EVALUATOR),
        ("jane@company.test", Role.SUBMITTER),
        ("", Role.SUBMITTER),
        (None, Role.SUBMITTER),
    ],
)
def test_role_is_resolved_from_email(email: str | None, expected: Role) -> None:
    assert resolve_role(email) == expected


@pytest.mark.unit
def test_admin_marker_wins_over_evaluator_marker() -> None:
    assert resolve_role("evaluator-admin@company.test") == Role.ADMIN
