"""
MedMall Back Office - Permission Gate
======================================

What:  Route-level authorization: a coarse role check followed by a
       fine-grained permission code check.
How:   `require_permission(code)` builds a FastAPI dependency that routes list
       in `dependencies=[...]`, so the check runs in the request pipeline
       before the handler body and never inside it.

    Request → get_current_principal (401) → role gate (403)
            → PermissionChecker.authorize(principal, code) (403) → handler

The checker is itself a dependency (`get_permission_checker`), so a
deployment can plug in a checker backed by the platform's role/permission
store, and tests can swap in a denying one through dependency_overrides.
"""

import logging
from typing import Callable, Tuple

from fastapi import Depends

from medmall.exceptions import PermissionDeniedError
from medmall.security.principal import Principal, get_current_principal

logger = logging.getLogger(__name__)

# Roles allowed through the coarse gate of every back-office endpoint
ADMIN_ROLES: Tuple[str, ...] = ("Admin", "SuperAdmin")


class PermissionChecker:
    """
    Default permission evaluation.

    Admin and SuperAdmin hold every permission; any other principal needs the
    code in its `permissions` claim.
    """

    async def authorize(self, principal: Principal, permission_code: str) -> bool:
        if principal.has_any_role(ADMIN_ROLES):
            return True
        return principal.has_permission(permission_code)


_default_checker = PermissionChecker()


def get_permission_checker() -> PermissionChecker:
    return _default_checker


def require_permission(permission_code: str) -> Callable:
    """
    Build a dependency that admits only admins allowed `permission_code`.

    Usage:
        @router.get("", dependencies=[Depends(require_permission("refunds.view"))])
    """

    async def dependency(
        principal: Principal = Depends(get_current_principal),
        checker: PermissionChecker = Depends(get_permission_checker),
    ) -> Principal:
        if not principal.has_any_role(ADMIN_ROLES):
            logger.warning(
                "Principal %s lacks an admin role for %s", principal.user_id, permission_code
            )
            raise PermissionDeniedError()

        if not await checker.authorize(principal, permission_code):
            logger.warning("Principal %s denied %s", principal.user_id, permission_code)
            raise PermissionDeniedError(permission=permission_code)

        return principal

    dependency.__name__ = f"require_{permission_code.replace('-', '_').replace('.', '_')}"
    return dependency
