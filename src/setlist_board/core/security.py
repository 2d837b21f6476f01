"""Bearer token helpers for the user directory collaborator.

Authentication itself lives outside this service. Upstream issues HS256 JWTs
whose ``sub`` claim is the internal user id; this module only mints (for tests
and tooling) and decodes them.
"""
from __future__ import annotations

from datetime import timedelta

from jose import JWTError, jwt

from setlist_board.core.settings import settings
from setlist_board.db.time import utcnow


def create_access_token(user_id: str, extra_claims: dict[str, str] | None = None) -> str:
    """Create a JWT access token naming ``user_id`` as its subject."""
    to_encode: dict[str, object] = {"sub": user_id}
    if extra_claims:
        to_encode.update(extra_claims)
    to_encode["exp"] = utcnow() + timedelta(minutes=settings.access_token_expire_minutes)
    encoded_jwt: str = jwt.encode(
        to_encode,
        settings.secret_key,
        algorithm=settings.jwt_algorithm,
    )
    return encoded_jwt


def decode_access_token(token: str) -> str | None:
    """Return the subject of a valid token, or None if it cannot be trusted."""
    try:
        payload = jwt.decode(
            token,
            settings.secret_key,
            algorithms=[settings.jwt_algorithm],
        )
    except JWTError:
        return None
    subject = payload.get("sub")
    if not isinstance(subject, str) or not subject:
        return None
    return subject
