"""
neuronest/api/auth.py

Bearer-token authentication for the bot routes.

Tokens are HS256 JWTs carrying {id, email, role, team_id} and an expiry.
The signing secret comes from Settings; there is no refresh or revocation.

Key functions:
  - issue_token(user: dict, settings: Settings) -> str
  - authenticate(authorization: Optional[str], settings: Settings) -> AuthenticatedUser
  - require_bot_role(user: AuthenticatedUser, settings: Settings) -> None
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt

from neuronest.config import Settings
from neuronest.errors import AuthError, ForbiddenError

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"


@dataclass(frozen=True)
class AuthenticatedUser:
    id: Any
    email: str
    role: str
    team_id: Optional[Any] = None


def issue_token(user: Dict[str, Any], settings: Settings) -> str:
    """
    Sign a bearer token for a staff member.

    Args:
        user: Mapping with `id`, `email`, `role` and optionally `team_id`.
    """
    payload = {
        "id": user["id"],
        "email": user["email"],
        "role": user["role"],
        "team_id": user.get("team_id"),
        "exp": datetime.now(timezone.utc) + timedelta(hours=settings.token_ttl_hours),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=ALGORITHM)


def authenticate(authorization: Optional[str], settings: Settings) -> AuthenticatedUser:
    """
    Verify an `Authorization: Bearer <token>` header value.

    Raises:
        AuthError: "No token provided" when the header or token is absent,
                   "Invalid token" when it fails verification.
    """
    parts = (authorization or "").split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise AuthError("No token provided")

    try:
        claims = jwt.decode(parts[1], settings.jwt_secret, algorithms=[ALGORITHM])
    except jwt.PyJWTError as e:
        logger.info(f"Rejected bearer token: {e}")
        raise AuthError("Invalid token") from e

    if "id" not in claims or "role" not in claims:
        logger.info("Rejected bearer token: missing id/role claims")
        raise AuthError("Invalid token")

    return AuthenticatedUser(
        id=claims["id"],
        email=claims.get("email", ""),
        role=str(claims["role"]).upper(),
        team_id=claims.get("team_id"),
    )


def require_bot_role(user: AuthenticatedUser, settings: Settings) -> None:
    """Raise ForbiddenError unless the user's role may call bots."""
    if user.role not in settings.bot_roles:
        logger.warning(f"User {user.id} with role {user.role} denied bot access")
        raise ForbiddenError(f"Role {user.role} is not allowed to use bots")
