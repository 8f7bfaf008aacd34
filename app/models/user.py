from mongoengine import EmailField, SequenceField, StringField
from app.models.base import BaseDocument
from app.utils.base import UserStatus, UserType


class User(BaseDocument):
    """User document.

    Fields:
    - full_name (str)
    - username (str, unique): Login identifier
    - email (str|None, unique when present): Alternate login identifier
    - mobile (str|None, unique when present): 10 digit number
    - password (str, hashed): Bcrypt-hashed password, never serialized
    - user_type (str): CUSTOMER/ADMIN/SUPER_ADMIN
    - status (str): ACTIVE/INACTIVE/UNVERIFIED
    - order_number (int): Creation sequence, listing sorts on it
    """
    hidden_fields = ("password",)

    full_name = StringField(required=True, null=False)
    username = StringField(required=True, null=False)
    email = EmailField(required=False, allow_utf8_user=True)
    mobile = StringField(required=False, regex=r"^[0-9]{10}$")
    password = StringField(required=True, null=False)
    user_type = StringField(required=True, null=False, choices=UserType.values())
    status = StringField(required=True, null=False, choices=UserStatus.values(), default=UserStatus.UNVERIFIED.value)
    order_number = SequenceField(collection_name="counters", sequence_name="user_order")

    meta = {
        "collection": "users",
        "indexes": [
            {"fields": ["username"], "unique": True},
            {"fields": ["email"], "unique": True, "sparse": True},
            {"fields": ["mobile"], "unique": True, "sparse": True},
            {"fields": ["-order_number"]},
        ],
    }

    @property
    def is_active(self) -> bool:
        return self.status == UserStatus.ACTIVE.value
