from __future__ import annotations

import logging
from dataclasses import dataclass

from fastapi import Depends, Request

from app.models.auth_log import AuthLog
from app.models.user import User
from app.utils.base import AuthLogType
from app.utils.config import get_settings
from app.utils.config.env import Settings


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RequesterInfo:
    """Who made the request, as far as the request metadata tells."""
    ip: str | None
    user_agent: str | None

    @property
    def browser_info(self) -> str:
        return f"ip: {self.ip or 'unknown'} | agent: {self.user_agent or 'unknown'}"


def get_requester_info(request: Request, settings: Settings = Depends(get_settings)) -> RequesterInfo:
    """FastAPI dependency describing the caller from headers and socket.

    X-Forwarded-For is only read when the connecting peer is a trusted proxy.
    """
    peer = request.client.host if request.client else None
    ip = peer
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded and peer in settings.trusted_proxies:
        ip = forwarded.split(",")[0].strip() or peer
    return RequesterInfo(ip=ip, user_agent=request.headers.get("user-agent"))


def add_auth_log(
    type: AuthLogType,
    identifier: str | None,
    requester: RequesterInfo,
    success: bool,
    message: str,
    user: User | None = None,
) -> AuthLog:
    """Append one audit record for an authentication event."""
    entry = AuthLog(
        type=type.value,
        user=user,
        username=identifier,
        email=identifier,
        device_ip=requester.ip,
        success=success,
        message=message,
        browser_info=requester.browser_info,
    )
    entry.save()
    log = logger.info if success else logger.warning
    log("Auth event %s success=%s ip=%s: %s", type.value, success, requester.ip, message)
    return entry


def list_auth_logs(per_page: int, skip: int, success: bool | None = None) -> list[AuthLog]:
    """Newest-first page of audit records, optionally filtered by outcome."""
    queryset = AuthLog.objects
    if success is not None:
        queryset = queryset(success=success)
    return list(queryset.order_by("-created_at", "-id").skip(skip).limit(per_page))
