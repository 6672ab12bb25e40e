from dataclasses import replace
from datetime import datetime, timedelta, timezone

import jwt
import pytest

from neuronest.api.auth import authenticate, issue_token, require_bot_role
from neuronest.errors import AuthError, ForbiddenError


def test_round_trip_claims(settings, token):
    user = authenticate(f"Bearer {token}", settings)

    assert user.id == 7
    assert user.email == "agent@example.com"
    assert user.role == "AGENT"
    assert user.team_id == 2


def test_token_expires_after_ttl(settings, token):
    claims = jwt.decode(token, settings.jwt_secret, algorithms=["HS256"])
    expected = datetime.now(timezone.utc) + timedelta(hours=24)
    assert abs(claims["exp"] - expected.timestamp()) < 60


@pytest.mark.parametrize("header", [None, "", "Bearer", "Bearer ", "Token abc", "abc"])
def test_missing_token(settings, header):
    with pytest.raises(AuthError) as exc:
        authenticate(header, settings)
    assert exc.value.public_message == "No token provided"
    assert exc.value.status == 401


def test_wrong_secret(settings, token):
    other = replace(settings, jwt_secret="someone-else")
    with pytest.raises(AuthError) as exc:
        authenticate(f"Bearer {token}", other)
    assert exc.value.public_message == "Invalid token"


def test_expired_token(settings):
    token = issue_token({"id": 1, "email": "a@b.c", "role": "STAFF"}, replace(settings, token_ttl_hours=-1))
    with pytest.raises(AuthError):
        authenticate(f"Bearer {token}", settings)


def test_garbage_token(settings):
    with pytest.raises(AuthError):
        authenticate("Bearer not.a.jwt", settings)


def test_token_without_role_rejected(settings):
    token = jwt.encode({"id": 1, "email": "a@b.c"}, settings.jwt_secret, algorithm="HS256")
    with pytest.raises(AuthError):
        authenticate(f"Bearer {token}", settings)


def test_role_gate(settings, token):
    user = authenticate(f"Bearer {token}", settings)
    require_bot_role(user, settings)

    with pytest.raises(ForbiddenError) as exc:
        require_bot_role(user, replace(settings, bot_roles=("DIRECTOR",)))
    assert exc.value.status == 403
