"""
MedMall Back Office - Caller Identity
======================================

What:  Turns the request's bearer token into a Principal.
How:   Verifies a JWT (signature, expiry, optional issuer/audience) with PyJWT
       using the secret shared with the platform's auth service, then reads
       the identity claims. This API never issues tokens.
Who:   Used as a FastAPI dependency by the permission gate in permissions.py.

Expected claims:
    sub          user id (string UUID)
    name         display name (optional)
    roles        list of role names, e.g. ["Admin"]
    permissions  list of permission codes, e.g. ["refunds.view"]
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import jwt
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jwt.exceptions import ExpiredSignatureError, InvalidTokenError

from medmall.config import settings
from medmall.exceptions import AuthenticationError

logger = logging.getLogger(__name__)

# auto_error=False so a missing header flows into our own 401 body
bearer_scheme = HTTPBearer(auto_error=False)

# Clock skew tolerated between this service and the token issuer (seconds)
TOKEN_LEEWAY = 10


@dataclass
class Principal:
    """The authenticated caller of a request."""

    user_id: str
    name: Optional[str] = None
    roles: List[str] = field(default_factory=list)
    permissions: List[str] = field(default_factory=list)

    def has_role(self, role: str) -> bool:
        return role in self.roles

    def has_any_role(self, roles) -> bool:
        return any(role in self.roles for role in roles)

    def has_permission(self, permission: str) -> bool:
        return permission in self.permissions


def _as_list(value: Any) -> List[str]:
    # Issuers emit a bare string when a user has a single role
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    return [str(v) for v in value]


def decode_token(token: str) -> Principal:
    """
    Verify a JWT and build the Principal it describes.

    Raises:
        AuthenticationError: expired, malformed or wrongly signed token,
                             or a token without a subject.
    """
    options: Dict[str, Any] = {"require": ["sub", "exp"]}
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            audience=settings.jwt_audience,
            issuer=settings.jwt_issuer,
            leeway=TOKEN_LEEWAY,
            options=options,
        )
    except ExpiredSignatureError:
        logger.info("Rejected expired token")
        raise AuthenticationError(message="Token has expired")
    except InvalidTokenError as e:
        logger.info("Rejected invalid token: %s", e)
        raise AuthenticationError(message="Invalid token")

    return Principal(
        user_id=str(payload["sub"]),
        name=payload.get("name"),
        roles=_as_list(payload.get("roles")),
        permissions=_as_list(payload.get("permissions")),
    )


async def get_current_principal(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Principal:
    """
    FastAPI dependency: the authenticated Principal for this request.

    The principal is also stored on request.state so the access log can
    attribute the request.
    """
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise AuthenticationError()

    principal = decode_token(credentials.credentials)
    request.state.principal = principal
    return principal
