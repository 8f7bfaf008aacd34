"""
Unit tests for request validation and the role policy.
"""

import pytest

from app.models.user import User
from app.services.policy import Capability, is_allowed
from app.utils.base import UserType
from app.validation import Invalid, Valid, validate
from app.validation.schemas import AddUserBody, LoginBody, SignupBody, UserListQuery


class TestValidate:

    def test_valid_returns_parsed_model(self):
        result = validate(LoginBody, {"username": "jane.doe", "password": "Secret123!"})

        assert isinstance(result, Valid)
        assert result.value.username == "jane.doe"

    def test_invalid_reports_first_field(self):
        result = validate(LoginBody, {"username": "j", "password": "x"})

        assert isinstance(result, Invalid)
        assert result.field == "username"

    def test_custom_message_is_filled_from_input(self):
        result = validate(AddUserBody, {
            "full_name": "Ada Lovelace",
            "username": "ada lovelace",
            "password": "Secret123!",
            "user_type": "ADMIN",
        })

        assert result == Invalid("Please enter Username of Ada Lovelace", "username")

    def test_non_object_body(self):
        assert validate(LoginBody, ["jane.doe"]) == Invalid("Invalid request body")

    def test_signup_limited_to_customers(self):
        data = {"full_name": "Ada", "username": "ada.l", "password": "Secret123!", "user_type": "ADMIN"}

        assert isinstance(validate(AddUserBody, data), Valid)
        assert isinstance(validate(SignupBody, data), Invalid)

    def test_blank_email_is_absent(self):
        result = validate(SignupBody, {
            "full_name": "Ada", "username": "ada.l", "password": "Secret123!",
            "user_type": "CUSTOMER", "email": "  ",
        })

        assert isinstance(result, Valid)
        assert result.value.email is None

    def test_query_strings_are_coerced(self):
        result = validate(UserListQuery, {"per_page": "10", "page_number": "3"})

        assert isinstance(result, Valid)
        assert result.value.skip == 20


class TestPolicy:

    @pytest.mark.parametrize("capability", list(Capability))
    def test_super_admin_holds_everything(self, capability):
        assert is_allowed(User(user_type=UserType.SUPER_ADMIN.value), capability)

    @pytest.mark.parametrize("user_type", [UserType.ADMIN, UserType.CUSTOMER])
    @pytest.mark.parametrize("capability", list(Capability))
    def test_other_roles_hold_nothing(self, user_type, capability):
        assert not is_allowed(User(user_type=user_type.value), capability)
