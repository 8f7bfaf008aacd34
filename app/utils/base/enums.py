from enum import Enum


class BaseEnum(Enum):
    @classmethod
    def choices(cls):
        return [(item.value, item.name) for item in cls]

    @classmethod
    def values(cls):
        return [item.value for item in cls]


class UserType(BaseEnum):
    CUSTOMER = "CUSTOMER"
    ADMIN = "ADMIN"
    SUPER_ADMIN = "SUPER_ADMIN"


class UserStatus(BaseEnum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    UNVERIFIED = "UNVERIFIED"


class AuthLogType(BaseEnum):
    LOGIN = "LOGIN"
    INVALID_EMAIL = "INVALID_EMAIL"
    WRONG_PASSWORD = "WRONG_PASSWORD"
    LOGOUT = "LOGOUT"
