from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import cast
from unittest.mock import MagicMock

import pytest
from flask import Flask

from authservice.application.use_cases.users.register_user import RegisterUserUseCase
from authservice.domain.users.entities import IssuedTokens, User
from authservice.domain.users.exceptions import (
    EmailAlreadyTakenError,
    InvalidAccessTokenError,
    InvalidCredentialsError,
)
from authservice.interfaces.http.controllers.auth_controller import AuthController
from authservice.shared.middleware.error_handler import configure_error_handling

CREATED = datetime(2024, 1, 7, 6, 50, 59, tzinfo=UTC)


def _user(**overrides) -> User:
    fields = dict(
        id=1,
        name="A",
        email="a@b.com",
        password_hash="hash",
        created_at=CREATED,
        updated_at=CREATED,
    )
    fields.update(overrides)
    return User(**fields)


@pytest.fixture()
def flask_app() -> Flask:
    app = Flask(__name__)
    configure_error_handling(app)
    return app


def _mount(flask_app: Flask, **use_cases) -> Flask:
    defaults = dict(
        register_use_case=MagicMock(),
        login_use_case=MagicMock(),
        refresh_use_case=MagicMock(),
        authenticate_use_case=MagicMock(),
    )
    defaults.update(use_cases)
    flask_app.register_blueprint(AuthController(**defaults).as_blueprint())
    return flask_app


def test_register_endpoint_returns_public_user(flask_app: Flask) -> None:
    register_called: dict[str, tuple[str, str, str]] = {}

    class StubRegister:
        def execute(self, name: str, email: str, password: str) -> User:
            register_called["args"] = (name, email, password)
            return _user(name=name, email=email)

    _mount(flask_app, register_use_case=cast(RegisterUserUseCase, StubRegister()))

    with flask_app.test_client() as client:
        response = client.post(
            "/api/auth/register",
            json={
                "email": "a@b.com",
                "password": "secret1",
                "password_confirmation": "secret1",
                "name": "A",
            },
        )

    assert response.status_code == 201
    assert register_called["args"] == ("A", "a@b.com", "secret1")
    assert response.get_json() == {
        "message": "User successfully registered",
        "user": {
            "id": 1,
            "name": "A",
            "email": "a@b.com",
            "created_at": "2024-01-07T06:50:59.000000Z",
            "updated_at": "2024-01-07T06:50:59.000000Z",
        },
    }


def test_register_mismatched_confirmation_never_reaches_use_case(flask_app: Flask) -> None:
    register = MagicMock()
    register.is_email_taken.return_value = False
    _mount(flask_app, register_use_case=register)

    with flask_app.test_client() as client:
        response = client.post(
            "/api/auth/register",
            json={
                "email": "a@b.com",
                "password": "secret1",
                "password_confirmation": "secret2",
                "name": "A",
            },
        )

    assert response.status_code == 422
    assert response.get_json() == {"password": ["The password field confirmation does not match."]}
    register.execute.assert_not_called()
    register.is_email_taken.assert_called_once_with("a@b.com")


def test_register_missing_fields_are_all_reported(flask_app: Flask) -> None:
    _mount(flask_app)

    with flask_app.test_client() as client:
        response = client.post("/api/auth/register", json={})

    assert response.status_code == 422
    payload = response.get_json()
    assert set(payload) == {"email", "password", "password_confirmation", "name"}
    assert payload["email"] == ["The email field is required."]
    assert payload["password_confirmation"] == ["The password confirmation field is required."]


def test_register_rejects_malformed_email_and_short_password(flask_app: Flask) -> None:
    _mount(flask_app)

    with flask_app.test_client() as client:
        response = client.post(
            "/api/auth/register",
            json={
                "email": "not-an-email",
                "password": "abc",
                "password_confirmation": "abc",
                "name": "A",
            },
        )

    assert response.status_code == 422
    payload = response.get_json()
    assert "email" in payload
    assert payload["password"] == ["The password field must be at least 6 characters."]


def test_register_reports_taken_email_with_other_field_errors(flask_app: Flask) -> None:
    register = MagicMock()
    register.is_email_taken.return_value = True
    _mount(flask_app, register_use_case=register)

    with flask_app.test_client() as client:
        response = client.post(
            "/api/auth/register",
            json={
                "email": " A@B.com ",
                "password": "secret1",
                "password_confirmation": "nope123",
                "name": "A",
            },
        )

    assert response.status_code == 422
    assert response.get_json() == {
        "password": ["The password field confirmation does not match."],
        "email": ["The email has already been taken."],
    }
    register.is_email_taken.assert_called_once_with("a@b.com")
    register.execute.assert_not_called()


def test_register_skips_uniqueness_for_malformed_email(flask_app: Flask) -> None:
    register = MagicMock()
    _mount(flask_app, register_use_case=register)

    with flask_app.test_client() as client:
        response = client.post(
            "/api/auth/register",
            json={
                "email": "not-an-email",
                "password": "secret1",
                "password_confirmation": "secret1",
                "name": "A",
            },
        )

    assert response.status_code == 422
    assert "taken" not in " ".join(response.get_json()["email"])
    register.is_email_taken.assert_not_called()


def test_register_blank_name_counts_as_missing(flask_app: Flask) -> None:
    register = MagicMock()
    register.is_email_taken.return_value = False
    _mount(flask_app, register_use_case=register)

    with flask_app.test_client() as client:
        response = client.post(
            "/api/auth/register",
            json={
                "email": "a@b.com",
                "password": "secret1",
                "password_confirmation": "secret1",
                "name": "   ",
            },
        )

    assert response.status_code == 422
    assert response.get_json() == {"name": ["The name field is required."]}
    register.execute.assert_not_called()


def test_register_normalizes_email_and_name(flask_app: Flask) -> None:
    register = MagicMock()
    register.execute.return_value = _user()
    _mount(flask_app, register_use_case=register)

    with flask_app.test_client() as client:
        response = client.post(
            "/api/auth/register",
            json={
                "email": "A@B.com",
                "password": "secret1",
                "password_confirmation": "secret1",
                "name": "  A  ",
            },
        )

    assert response.status_code == 201
    register.execute.assert_called_once_with("A", "a@b.com", "secret1")


def test_login_lowercases_email(flask_app: Flask) -> None:
    login = MagicMock()
    login.execute.return_value = IssuedTokens(
        access_token="access",
        refresh_token="refresh",
        expires_date=datetime(2024, 1, 7, 9, 27, 14, tzinfo=UTC),
    )
    _mount(flask_app, login_use_case=login)

    with flask_app.test_client() as client:
        response = client.post("/api/auth/login", json={"email": "A@B.com", "password": "secret1"})

    assert response.status_code == 200
    login.execute.assert_called_once_with("a@b.com", "secret1")


def test_login_rejects_oversized_password_before_hashing(flask_app: Flask) -> None:
    login = MagicMock()
    _mount(flask_app, login_use_case=login)

    with flask_app.test_client() as client:
        response = client.post(
            "/api/auth/login", json={"email": "a@b.com", "password": "x" * 129}
        )

    assert response.status_code == 422
    assert response.get_json() == {
        "password": ["The password field must not be greater than 128 characters."]
    }
    login.execute.assert_not_called()


def test_register_duplicate_email_maps_to_422(flask_app: Flask) -> None:
    register = MagicMock()
    register.execute.side_effect = EmailAlreadyTakenError()
    _mount(flask_app, register_use_case=register)

    with flask_app.test_client() as client:
        response = client.post(
            "/api/auth/register",
            json={
                "email": "a@b.com",
                "password": "secret1",
                "password_confirmation": "secret1",
                "name": "A",
            },
        )

    assert response.status_code == 422
    assert response.get_json() == {"email": ["The email has already been taken."]}


def test_login_success_shape(flask_app: Flask) -> None:
    login = MagicMock()
    login.execute.return_value = IssuedTokens(
        access_token="access",
        refresh_token="refresh",
        expires_date=datetime(2024, 1, 7, 9, 27, 14, 580415, tzinfo=UTC),
    )
    _mount(flask_app, login_use_case=login)

    with flask_app.test_client() as client:
        response = client.post("/api/auth/login", json={"email": "a@b.com", "password": "secret1"})

    assert response.status_code == 200
    assert response.get_json() == {
        "data": {
            "access_token": "access",
            "refresh_token": "refresh",
            "expires_date": "2024-01-07T09:27:14.580415Z",
            "token_type": "bearer",
        }
    }
    login.execute.assert_called_once_with("a@b.com", "secret1")


def test_login_invalid_payload_returns_422(flask_app: Flask) -> None:
    _mount(flask_app)

    with flask_app.test_client() as client:
        response = client.post("/api/auth/login", json={"email": "a"})

    assert response.status_code == 422
    payload = response.get_json()
    assert set(payload) == {"email", "password"}


def test_login_rejected_credentials_return_401(flask_app: Flask) -> None:
    login = MagicMock()
    login.execute.side_effect = InvalidCredentialsError()
    _mount(flask_app, login_use_case=login)

    with flask_app.test_client() as client:
        response = client.post("/api/auth/login", json={"email": "a@b.com", "password": "secret1"})

    assert response.status_code == 401
    assert response.get_json() == {"error": "Unauthorized"}
    assert response.headers["WWW-Authenticate"] == "Bearer"


def test_refresh_requires_token_field(flask_app: Flask) -> None:
    _mount(flask_app)

    with flask_app.test_client() as client:
        response = client.post("/api/auth/refresh", data="not json")

    assert response.status_code == 422
    assert response.get_json() == {"refresh_token": ["The refresh token field is required."]}


def test_me_requires_bearer(flask_app: Flask) -> None:
    authenticate = MagicMock()
    _mount(flask_app, authenticate_use_case=authenticate)

    with flask_app.test_client() as client:
        response = client.get("/api/auth/me")

    assert response.status_code == 401
    assert response.get_json() == {"error": "Unauthorized"}
    authenticate.execute.assert_not_called()


def test_me_rejects_invalid_bearer(flask_app: Flask) -> None:
    authenticate = MagicMock()
    authenticate.execute.side_effect = InvalidAccessTokenError()
    _mount(flask_app, authenticate_use_case=authenticate)

    with flask_app.test_client() as client:
        response = client.get("/api/auth/me", headers={"Authorization": "Bearer stale"})

    assert response.status_code == 401
    authenticate.execute.assert_called_once_with("stale")


def test_me_returns_current_user(flask_app: Flask) -> None:
    authenticate = MagicMock()
    authenticate.execute.return_value = _user(
        access_token="tok", expires_date=datetime.now(UTC) + timedelta(hours=1)
    )
    _mount(flask_app, authenticate_use_case=authenticate)

    with flask_app.test_client() as client:
        response = client.get("/api/auth/me", headers={"Authorization": "Bearer tok"})

    assert response.status_code == 200
    assert response.get_json()["user"]["email"] == "a@b.com"
    assert "password_hash" not in response.get_json()["user"]


def test_unexpected_errors_render_generic_500(flask_app: Flask) -> None:
    login = MagicMock()
    login.execute.side_effect = RuntimeError("database went away")
    _mount(flask_app, login_use_case=login)

    with flask_app.test_client() as client:
        response = client.post("/api/auth/login", json={"email": "a@b.com", "password": "secret1"})

    assert response.status_code == 500
    assert response.get_json() == {"error": "internal_error"}
