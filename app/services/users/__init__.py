"""Authentication flow and user administration.

Expected failures (unknown identifier, wrong password, inactive account,
duplicate user, missing user) come back as an unsuccessful `Outcome` rather
than an exception, so the route answers with a normal envelope.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from bson.objectid import ObjectId
from mongoengine import NotUniqueError, Q
from pydantic.networks import validate_email
from pydantic_core import PydanticCustomError

from app.validation.schemas import AddUserBody, UpdateUserBody, UserListQuery
from app.models.token import Token
from app.models.user import User
from app.services.auth import hash_password, issue_token, revoke_user_tokens, verify_password
from app.services.auth_log import RequesterInfo, add_auth_log
from app.utils.base import AuthLogType, UserStatus, ValidationFailure
from app.utils.config.env import Settings


logger = logging.getLogger(__name__)

INCORRECT_CREDENTIALS = "Email, Username or Password is Incorrect"
ACCOUNT_NOT_ACTIVE = "Your account is not active"
USER_EXISTS = "User already exist"
USER_NOT_FOUND = "User not found"


@dataclass
class Outcome:
    success: bool
    message: str
    data: Any = field(default_factory=dict)


def _normalized_email(identifier: str) -> str | None:
    # Same normalization EmailStr applies before an address is stored.
    if "@" not in identifier:
        return None
    try:
        return validate_email(identifier)[1]
    except PydanticCustomError:
        return None


def login(identifier: str, password: str, requester: RequesterInfo, settings: Settings) -> Outcome:
    """Verify credentials, issue a token and record the attempt."""
    query = Q(email=identifier) | Q(username=identifier)
    email = _normalized_email(identifier)
    if email and email != identifier:
        query |= Q(email=email)
    user: User | None = User.objects(query).first()
    if not user:
        add_auth_log(
            AuthLogType.INVALID_EMAIL, identifier, requester,
            success=False, message="User entered wrong email or username",
        )
        return Outcome(False, INCORRECT_CREDENTIALS)

    if not verify_password(password, user.password):
        add_auth_log(
            AuthLogType.WRONG_PASSWORD, identifier, requester,
            success=False, message="User entered wrong password", user=user,
        )
        return Outcome(False, INCORRECT_CREDENTIALS)

    if not user.is_active:
        add_auth_log(
            AuthLogType.LOGIN, identifier, requester,
            success=False, message="User is not active but entered correct password and email", user=user,
        )
        return Outcome(False, ACCOUNT_NOT_ACTIVE)

    token = issue_token(user, settings)
    add_auth_log(
        AuthLogType.LOGIN, identifier, requester,
        success=True, message="User logged in successfully", user=user,
    )
    data = {
        "id": str(user.id),
        "token": token.token,
        "full_name": user.full_name,
        "user_type": user.user_type,
    }
    return Outcome(True, "User LoggedIn successfully", data)


def logout(token: Token, requester: RequesterInfo) -> Outcome:
    """Invalidate the session by deleting its token row."""
    user: User = token.user
    token.delete()
    add_auth_log(
        AuthLogType.LOGOUT, user.username, requester,
        success=True, message="User logged out successfully", user=user,
    )
    return Outcome(True, "User logged out successfully")


def _find_existing(exclude: User | None = None, **identifiers: str | None) -> User | None:
    # Only compare identifiers that were supplied; a null match would hit every user without one.
    clauses = [Q(**{name: value}) for name, value in identifiers.items() if value]
    if not clauses:
        return None
    query = clauses[0]
    for clause in clauses[1:]:
        query |= clause
    queryset = User.objects(query)
    if exclude is not None:
        queryset = queryset(id__ne=exclude.id)
    return queryset.first()


def register_user(body: AddUserBody, status: UserStatus, settings: Settings) -> Outcome:
    """Create a user unless one already holds the email, username or mobile."""
    if _find_existing(email=body.email, username=body.username, mobile=body.mobile):
        return Outcome(False, USER_EXISTS)

    user = User(
        full_name=body.full_name,
        username=body.username,
        email=body.email,
        mobile=body.mobile,
        user_type=body.user_type.value,
        status=status.value,
        password=hash_password(body.password, rounds=settings.bcrypt_rounds),
    )
    try:
        user.save()
    except NotUniqueError:
        # Lost a race with a concurrent insert of the same identifiers.
        return Outcome(False, USER_EXISTS)
    logger.info("Created user %s (%s)", user.id, user.user_type)
    return Outcome(True, "User added successfully")


def list_users(query: UserListQuery) -> list[dict]:
    users = User.objects.order_by("-order_number").skip(query.skip).limit(query.per_page)
    return [user.to_output() for user in users]


def get_user(user_id: str) -> User | None:
    if not ObjectId.is_valid(user_id):
        raise ValidationFailure("Invalid user id")
    return User.objects(id=user_id).first()


def update_user(user_id: str, body: UpdateUserBody, settings: Settings) -> Outcome:
    user = get_user(user_id)
    if not user:
        return Outcome(False, USER_NOT_FOUND)

    changes = body.model_dump(exclude_unset=True)
    if _find_existing(
        exclude=user,
        email=changes.get("email"),
        username=changes.get("username"),
        mobile=changes.get("mobile"),
    ):
        return Outcome(False, USER_EXISTS)

    if "password" in changes:
        if changes["password"] is None:
            return Outcome(False, '"password" must not be empty')
        changes["password"] = hash_password(changes["password"], rounds=settings.bcrypt_rounds)
    if changes.get("user_type") is not None:
        changes["user_type"] = changes["user_type"].value
    for name in ("full_name", "username", "user_type"):
        if name in changes and changes[name] is None:
            del changes[name]

    for name, value in changes.items():
        setattr(user, name, value)
    try:
        user.save()
    except NotUniqueError:
        return Outcome(False, USER_EXISTS)
    return Outcome(True, "User updated successfully", user.to_output())


def update_user_status(user_id: str, status: UserStatus) -> Outcome:
    """Set the account status; leaving ACTIVE ends every session of the user."""
    user = get_user(user_id)
    if not user:
        return Outcome(False, USER_NOT_FOUND)

    user.status = status.value
    user.save()
    if status is not UserStatus.ACTIVE:
        revoked = revoke_user_tokens(user)
        logger.info("Revoked %s token(s) of user %s after status change to %s", revoked, user.id, status.value)
    return Outcome(True, "User status updated successfully", user.to_output())
