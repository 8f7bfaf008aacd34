from mongoengine import BooleanField, ReferenceField, StringField

from app.models.base import BaseDocument
from app.models.user import User
from app.utils.base import AuthLogType


class AuthLog(BaseDocument):
    """Audit record of one authentication event. Written once, never updated."""
    type = StringField(required=True, null=False, choices=AuthLogType.values())
    user = ReferenceField(document_type=User, required=False, null=True)
    username = StringField(required=False, null=True)
    email = StringField(required=False, null=True)
    device_ip = StringField(required=False, null=True)
    success = BooleanField(required=True, null=False, default=False)
    message = StringField(required=True, null=False)
    browser_info = StringField(required=False, null=True)

    meta = {
        "collection": "auth_logs",
        "indexes": [
            {"fields": ["-created_at"]},
            {"fields": ["user"]},
            {"fields": ["type"]},
        ],
    }
