"""
Authentication (bearer token → Principal) and route-level authorization.
"""

from medmall.security.permissions import (
    ADMIN_ROLES,
    PermissionChecker,
    get_permission_checker,
    require_permission,
)
from medmall.security.principal import Principal, decode_token, get_current_principal

__all__ = [
    "ADMIN_ROLES",
    "PermissionChecker",
    "Principal",
    "decode_token",
    "get_current_principal",
    "get_permission_checker",
    "require_permission",
]
