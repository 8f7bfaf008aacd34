from app.utils.base.enums import AuthLogType, BaseEnum, UserStatus, UserType
from app.utils.base.exceptions import AccessDenied, AppError, Unauthorized, ValidationFailure
