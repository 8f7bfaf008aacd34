from fastapi import APIRouter, Depends

from app.models.token import Token
from app.models.user import User
from app.services import users as user_service
from app.services.auth import get_current_token, get_current_user
from app.services.auth_log import RequesterInfo, get_requester_info, list_auth_logs
from app.services.policy import Capability, require
from app.utils.base import UserStatus
from app.utils.config import get_settings
from app.utils.config.env import Settings
from app.utils.response import send_response
from app.validation import body, query
from app.validation.schemas import (
    AddUserBody,
    AuthLogQuery,
    LoginBody,
    SignupBody,
    UpdateStatusBody,
    UpdateUserBody,
    UserListQuery,
)


router = APIRouter()


def _respond(outcome: user_service.Outcome):
    return send_response(outcome.data, outcome.message, outcome.success)


@router.post("/login")
def login(
    payload: LoginBody = Depends(body(LoginBody)),
    requester: RequesterInfo = Depends(get_requester_info),
    settings: Settings = Depends(get_settings),
):
    """PUBLIC: Exchange username/email and password for a bearer token."""
    return _respond(user_service.login(payload.username, payload.password, requester, settings))


@router.post("/signup")
def signup(
    payload: SignupBody = Depends(body(SignupBody)),
    settings: Settings = Depends(get_settings),
):
    """PUBLIC: Self-registration. The account waits for an administrator to activate it."""
    return _respond(user_service.register_user(payload, UserStatus.UNVERIFIED, settings))


@router.post("/add-user", dependencies=[Depends(require(Capability.MANAGE_USERS))])
def add_user(
    payload: AddUserBody = Depends(body(AddUserBody)),
    settings: Settings = Depends(get_settings),
):
    """SUPER_ADMIN: Create an active user of any type."""
    return _respond(user_service.register_user(payload, UserStatus.ACTIVE, settings))


@router.get("/users-list", dependencies=[Depends(require(Capability.VIEW_USERS))])
def users_list(params: UserListQuery = Depends(query(UserListQuery))):
    """SUPER_ADMIN: Page of users, newest first."""
    return send_response(user_service.list_users(params), "User list got successfully", True)


@router.get("/user-detail/{user_id}", dependencies=[Depends(require(Capability.VIEW_USERS))])
def user_detail(user_id: str):
    user = user_service.get_user(user_id)
    if not user:
        return send_response({}, user_service.USER_NOT_FOUND, False)
    return send_response(user.to_output(), "User detail got successfully", True)


@router.put("/update-user/{user_id}", dependencies=[Depends(require(Capability.MANAGE_USERS))])
def update_user(
    user_id: str,
    payload: UpdateUserBody = Depends(body(UpdateUserBody)),
    settings: Settings = Depends(get_settings),
):
    return _respond(user_service.update_user(user_id, payload, settings))


@router.put("/update-user-status/{user_id}", dependencies=[Depends(require(Capability.MANAGE_USERS))])
def update_user_status(user_id: str, payload: UpdateStatusBody = Depends(body(UpdateStatusBody))):
    return _respond(user_service.update_user_status(user_id, payload.status))


@router.get("/my-profile")
def my_profile(current_user: User = Depends(get_current_user)):
    return send_response(current_user.to_output(), "Profile got successfully", True)


@router.put("/logout")
def logout(
    token: Token = Depends(get_current_token),
    requester: RequesterInfo = Depends(get_requester_info),
):
    """PROTECTED: Delete the token used for this request."""
    return _respond(user_service.logout(token, requester))


@router.get("/auth-logs", dependencies=[Depends(require(Capability.VIEW_AUTH_LOGS))])
def auth_logs(params: AuthLogQuery = Depends(query(AuthLogQuery))):
    """SUPER_ADMIN: Audit trail of authentication attempts, newest first."""
    entries = list_auth_logs(params.per_page, params.skip, params.success)
    return send_response([entry.to_output() for entry in entries], "Auth logs got successfully", True)
