from typing import ClassVar, Literal

from pydantic import EmailStr, Field, field_validator

from app.utils.base import UserStatus, UserType
from app.validation import RequestSchema


USERNAME_PATTERN = r"^[a-zA-Z0-9._-]{4,100}$"
MOBILE_PATTERN = r"^[6-9][0-9]{9}$"
MAX_PER_PAGE = 1000
# Keeps skip well inside the int64 range the store accepts.
MAX_PAGE_NUMBER = 1_000_000


class LoginBody(RequestSchema):
    username: str = Field(min_length=4, max_length=100)
    password: str = Field(min_length=8, max_length=70)


class _UserFields(RequestSchema):
    allowed_user_types: ClassVar[tuple[UserType, ...]] = tuple(UserType)

    messages: ClassVar[dict[str, str]] = {
        "full_name": "Please enter Full Name",
        "username": "Please enter Username of {full_name}",
        "email": "Please enter valid email of {full_name}",
        "mobile": "Please enter valid mobile number of {full_name}",
        "user_type": "Please tell User Type of {full_name}",
    }

    @field_validator("email", "mobile", mode="before", check_fields=False)
    @classmethod
    def _blank_as_missing(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("user_type", check_fields=False)
    @classmethod
    def _allowed_user_type(cls, value):
        if value is not None and value not in cls.allowed_user_types:
            raise ValueError("user type is not allowed")
        return value


class AddUserBody(_UserFields):
    full_name: str = Field(min_length=1)
    username: str = Field(pattern=USERNAME_PATTERN)
    password: str = Field(min_length=8, max_length=70)
    email: EmailStr | None = None
    mobile: str | None = Field(default=None, pattern=MOBILE_PATTERN)
    user_type: UserType


class SignupBody(AddUserBody):
    allowed_user_types: ClassVar[tuple[UserType, ...]] = (UserType.CUSTOMER,)


class UpdateUserBody(_UserFields):
    full_name: str | None = Field(default=None, min_length=1)
    username: str | None = Field(default=None, pattern=USERNAME_PATTERN)
    password: str | None = Field(default=None, min_length=8, max_length=70)
    email: EmailStr | None = None
    mobile: str | None = Field(default=None, pattern=MOBILE_PATTERN)
    user_type: UserType | None = None


class UpdateStatusBody(RequestSchema):
    status: UserStatus

    messages: ClassVar[dict[str, str]] = {
        "status": "Please select a valid status",
    }


class PageQuery(RequestSchema):
    per_page: int = Field(ge=1, le=MAX_PER_PAGE)
    page_number: int = Field(ge=1, le=MAX_PAGE_NUMBER)

    @property
    def skip(self) -> int:
        return self.per_page * (self.page_number - 1)


class UserListQuery(PageQuery):
    # Accepted but not applied to the query yet.
    search_term: str | None = None
    sort_field: str | None = None
    sort_order: Literal["ASC", "DESC", ""] | None = None


class AuthLogQuery(PageQuery):
    success: bool | None = None
