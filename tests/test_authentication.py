from datetime import datetime, timedelta, timezone

import pytest

from timely.features.authentication.services import AuthError, AuthService
from timely.security.tokens import JWTSettings, create_session_token

JWT = JWTSettings(secret="unit-secret", session_ttl=timedelta(hours=1))


@pytest.fixture
def auth():
    return AuthService(password="s3cret", jwt_settings=JWT)


def test_login_with_right_password_returns_valid_session(auth):
    token = auth.log_in("s3cret")
    auth.validate_session(token)
    assert auth.is_authenticated(token=token)


@pytest.mark.parametrize("password", ["", None, "S3CRET", "s3cret "])
def test_login_with_wrong_password_fails(auth, password):
    with pytest.raises(AuthError):
        auth.log_in(password)


@pytest.mark.parametrize("token", [None, "", "not-a-jwt"])
def test_missing_or_garbage_session_is_rejected(auth, token):
    with pytest.raises(AuthError):
        auth.validate_session(token)
    assert not auth.is_authenticated(token=token)


def test_session_signed_with_other_secret_is_rejected(auth):
    forged = create_session_token(settings=JWTSettings(secret="other", session_ttl=timedelta(hours=1)))
    with pytest.raises(AuthError):
        auth.validate_session(forged)


def test_expired_session_is_rejected():
    past = datetime.now(timezone.utc) - timedelta(days=2)
    auth = AuthService(password="s3cret", jwt_settings=JWT, now_fn=lambda: past)
    token = auth.log_in("s3cret")
    with pytest.raises(AuthError):
        auth.validate_session(token)


def test_password_parameter_authenticates_without_session(auth):
    assert auth.is_authenticated(password="s3cret")
    assert not auth.is_authenticated(password="wrong")
    assert auth.is_authenticated(token=auth.log_in("s3cret"), password="wrong")
