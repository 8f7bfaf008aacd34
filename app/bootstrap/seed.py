from __future__ import annotations

import logging

from app.connections.mongo import init_mongo, close_mongo
from app.models.user import User
from app.services.auth import hash_password
from app.utils.base import UserStatus, UserType
from app.utils.config.env import Settings


logger = logging.getLogger(__name__)


def ensure_super_admin(settings: Settings) -> User | None:
    """Create the configured SUPER_ADMIN unless that username already exists."""
    if not settings.bootstrap_admin_password:
        logger.warning("BOOTSTRAP_ADMIN_PASSWORD is not set, skipping super admin creation")
        return None

    user = User.objects(username=settings.bootstrap_admin_username).first()
    if user:
        logger.info("Super admin %s already exists", user.username)
        return user

    user = User(
        full_name=settings.bootstrap_admin_full_name,
        username=settings.bootstrap_admin_username,
        email=settings.bootstrap_admin_email,
        password=hash_password(settings.bootstrap_admin_password, rounds=settings.bcrypt_rounds),
        user_type=UserType.SUPER_ADMIN.value,
        status=UserStatus.ACTIVE.value,
    )
    user.save()
    logger.info("Created super admin %s", user.username)
    return user


def seed() -> None:
    settings = Settings()
    init_mongo(settings)
    try:
        ensure_super_admin(settings)
    finally:
        close_mongo()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    seed()
