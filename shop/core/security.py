"""
Security utilities: JWT verification and role claim extraction.
Tokens are issued elsewhere; this module only verifies them.
"""
from typing import Any, Iterable
import logging

from jose import jwt

from shop.core.config import settings

logger = logging.getLogger(__name__)

ROLE_CLAIMS = ("role", "roles")


# ---------------------------------------------------------------------------
# JWT helpers
# ---------------------------------------------------------------------------

def decode_token(token: str) -> dict[str, Any]:
    """
    Decode and verify a JWT signed with the shared secret.

    Issuer and audience are only checked when ``JWT_ISSUER`` /
    ``JWT_AUDIENCE`` are configured.

    Raises:
        jose.JWTError: if the token is invalid or expired.
    """
    logger.trace("Decoding JWT token")
    options = {
        "verify_iss": settings.JWT_ISSUER is not None,
        "verify_aud": settings.JWT_AUDIENCE is not None,
    }
    return jwt.decode(
        token,
        settings.SECRET_KEY,
        algorithms=[settings.ALGORITHM],
        issuer=settings.JWT_ISSUER,
        audience=settings.JWT_AUDIENCE,
        options=options,
    )


def extract_roles(claims: dict[str, Any]) -> frozenset[str]:
    """Collect role names from the ``role`` and ``roles`` claims.

    Each claim may hold a single string or a list of strings.
    """
    roles: set[str] = set()
    for claim in ROLE_CLAIMS:
        value = claims.get(claim)
        if value is None:
            continue
        if isinstance(value, str):
            roles.add(value)
        elif isinstance(value, Iterable):
            roles.update(str(item) for item in value)
    logger.trace("Extracted roles %s from token", sorted(roles))
    return frozenset(roles)
