"""Domain model tests: esquemas del wire y validación en el borde."""

import pytest
from pydantic import ValidationError

from core.domain.models import (
    AuthToken,
    CreateUserResponse,
    Credentials,
    NormalizedError,
    PagedResult,
    RegistrationRequest,
    Role,
    UserRecord,
)


def test_credentials_require_valid_email():
    with pytest.raises(ValidationError):
        Credentials(email="not-an-email", password="x")


def test_credentials_require_password():
    with pytest.raises(ValidationError):
        Credentials(email="a@example.com", password="")


def test_registration_uses_roles_id_on_the_wire():
    request = RegistrationRequest(email="a@example.com", password="secret", role_id=3)
    assert request.model_dump(mode="json", by_alias=True) == {
        "email": "a@example.com",
        "password": "secret",
        "roles_id": 3,
    }


def test_registration_accepts_wire_name():
    request = RegistrationRequest.model_validate({"email": "a@example.com", "password": "p", "roles_id": 2})
    assert request.role_id == 2


def test_registration_role_must_be_positive():
    with pytest.raises(ValidationError):
        RegistrationRequest(email="a@example.com", password="secret", role_id=0)


def test_auth_token_serializes_backend_name():
    token = AuthToken.model_validate({"accessToken": "abc", "expires_in": 3600})
    assert token.model_dump(by_alias=True) == {"access_token": "abc"}


def test_create_user_response_requires_all_fields():
    with pytest.raises(ValidationError):
        CreateUserResponse.model_validate({"ok": True, "status": 201})


def test_user_record_keeps_unknown_fields():
    user = UserRecord.model_validate({"id": 1, "email": "a@example.com", "school": "Dojo Norte"})
    assert user.name is None
    assert user.model_extra == {"school": "Dojo Norte"}


def test_paged_result_items_and_navigation():
    result = PagedResult[UserRecord].model_validate(
        {
            "data": [{"id": 2, "email": "b@example.com"}],
            "totalRecords": 11,
            "currentPage": 1,
            "totalPages": 2,
            "pageSize": 10,
        }
    )
    assert result.items == result.data
    assert isinstance(result.items[0], UserRecord)
    assert result.has_next is True


@pytest.mark.parametrize("field", ["currentPage", "totalPages", "pageSize"])
def test_paged_result_rejects_zero_metadata(field):
    payload = {"data": [], "totalRecords": 0, "currentPage": 1, "totalPages": 1, "pageSize": 10}
    payload[field] = 0
    with pytest.raises(ValidationError):
        PagedResult[UserRecord].model_validate(payload)


@pytest.mark.parametrize(
    ("name", "expected"),
    [("admin", Role.ADMIN), ("Master", Role.MASTER), (" student ", Role.STUDENT)],
)
def test_role_from_name(name, expected):
    assert Role.from_name(name) is expected


def test_role_from_unknown_name():
    with pytest.raises(ValueError, match="expected one of"):
        Role.from_name("sensei")


def test_normalized_error_defaults():
    assert NormalizedError(message="boom").http_status is None
