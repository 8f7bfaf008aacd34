from app.bootstrap.seed import ensure_super_admin
from app.models.user import User
from app.services.auth import verify_password
from app.utils.base import UserStatus, UserType


def test_creates_super_admin_once(settings):
    configured = settings.model_copy(update={
        "bootstrap_admin_username": "owner",
        "bootstrap_admin_password": "Owner-pass-1",
    })

    first = ensure_super_admin(configured)
    second = ensure_super_admin(configured)

    assert first.id == second.id
    assert User.objects.count() == 1
    assert first.user_type == UserType.SUPER_ADMIN.value
    assert first.status == UserStatus.ACTIVE.value
    assert verify_password("Owner-pass-1", first.password)


def test_skipped_without_password(settings):
    assert ensure_super_admin(settings.model_copy(update={"bootstrap_admin_password": None})) is None
    assert User.objects.count() == 0


def test_seeded_admin_can_log_in(client, settings):
    ensure_super_admin(settings.model_copy(update={
        "bootstrap_admin_username": "owner",
        "bootstrap_admin_password": "Owner-pass-1",
    }))

    resp = client.post("/api/users/login", json={"username": "owner", "password": "Owner-pass-1"})

    assert resp.json()["data"]["user_type"] == "SUPER_ADMIN"
