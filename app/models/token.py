from mongoengine import CASCADE, DateTimeField, ReferenceField, StringField

from app.models.base import BaseDocument, as_utc, utcnow
from app.models.user import User


class Token(BaseDocument):
    """Issued bearer token.

    A token authenticates requests until `valid_till`, or until its row is
    deleted (logout, deactivation).
    """
    hidden_fields = ("token",)

    user = ReferenceField(document_type=User, required=True, null=False, reverse_delete_rule=CASCADE)
    token = StringField(required=True, null=False)
    valid_till = DateTimeField(required=True, null=False)

    meta = {
        "collection": "tokens",
        "indexes": [
            {"fields": ["token"], "unique": True},
            {"fields": ["user"]},
        ],
    }

    @property
    def is_expired(self) -> bool:
        return as_utc(self.valid_till) <= utcnow()
