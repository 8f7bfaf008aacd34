from __future__ import annotations

import logging

from fastapi import Depends

from app.models.user import User
from app.services.auth import get_current_user
from app.utils.base import AccessDenied, BaseEnum, UserType


logger = logging.getLogger(__name__)


class Capability(BaseEnum):
    VIEW_USERS = "view_users"
    MANAGE_USERS = "manage_users"
    VIEW_AUTH_LOGS = "view_auth_logs"


ROLE_CAPABILITIES: dict[str, frozenset[Capability]] = {
    UserType.SUPER_ADMIN.value: frozenset(Capability),
    UserType.ADMIN.value: frozenset(),
    UserType.CUSTOMER.value: frozenset(),
}


def is_allowed(user: User, capability: Capability) -> bool:
    """Evaluate whether the user's role grants the capability."""
    return capability in ROLE_CAPABILITIES.get(user.user_type, frozenset())


def require(capability: Capability):
    """Return a FastAPI dependency that lets only users holding `capability` through.

    Runs after the identity stage; a denied user gets the access-denied
    envelope and the route handler never executes.
    """

    def _dependency(current_user: User = Depends(get_current_user)) -> User:
        if not is_allowed(current_user, capability):
            logger.warning("User %s denied %s", current_user.id, capability.value)
            raise AccessDenied()
        return current_user

    return _dependency
