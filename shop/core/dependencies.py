"""
FastAPI dependency injection helpers for the database handle, authentication
and authorisation.
"""
from typing import Iterator, Optional
import logging
import sqlite3

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError

from shop.core.security import decode_token, extract_roles
from shop.db.database import get_db
from shop.models.principal import Principal, UserRole

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


# ---------------------------------------------------------------------------
# DB dependency
# ---------------------------------------------------------------------------

def db_dependency(request: Request) -> Iterator[sqlite3.Connection]:
    """Yield a database connection for the duration of a request."""
    logger.trace("Creating database dependency connection")
    with get_db(request.app.state.database_url) as conn:
        yield conn


# ---------------------------------------------------------------------------
# Auth dependencies
# ---------------------------------------------------------------------------

def get_current_principal(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Principal:
    """
    Verify the Bearer token and return the caller's identity and roles.
    Raises HTTP 401 if the token is missing, malformed, invalid or expired.
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    if credentials is None:
        logger.warning("Request without bearer token")
        raise credentials_exception
    try:
        claims = decode_token(credentials.credentials)
    except JWTError:
        logger.warning("Rejected bearer token", exc_info=True)
        raise credentials_exception

    principal = Principal(subject=claims.get("sub"), roles=extract_roles(claims))
    logger.info("Authenticated subject=%s", principal.subject)
    return principal


# ---------------------------------------------------------------------------
# Role-based access control
# ---------------------------------------------------------------------------

def require_roles(*roles: UserRole):
    """
    Factory that returns a dependency which enforces that the caller holds
    one of the specified roles. Roles are not hierarchical.

    Usage::
        @router.put("/{id}", dependencies=[Depends(require_roles(UserRole.MANAGER))])
        def update(...):
            ...
    """
    def _check(principal: Principal = Depends(get_current_principal)) -> Principal:
        if not principal.has_any_role(*roles):
            logger.warning(
                "Subject=%s lacks required roles: %s",
                principal.subject,
                ", ".join(role.value for role in roles),
            )
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="You do not have permission to perform this action",
            )
        logger.info("Subject=%s authorized", principal.subject)
        return principal
    return _check


# Convenience shortcuts
require_employee = require_roles(UserRole.EMPLOYEE)
require_manager = require_roles(UserRole.MANAGER)
