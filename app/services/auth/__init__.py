import logging
from datetime import datetime, timedelta
from functools import lru_cache
from uuid import uuid4

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from passlib.context import CryptContext
from jose import jwt, JWTError

from app.models.base import utcnow
from app.models.token import Token
from app.models.user import User
from app.utils.base import Unauthorized
from app.utils.config import get_settings
from app.utils.config.env import Settings


logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")
# auto_error is off so a missing header goes through the same envelope as a bad token.
bearer_scheme = HTTPBearer(auto_error=False)


@lru_cache(maxsize=None)
def _hashing_context(rounds: int) -> CryptContext:
    return pwd_context.copy(bcrypt__rounds=rounds)


def verify_password(plain: str, hashed: str) -> bool:
    """Verify plaintext password against a bcrypt hash."""
    try:
        return pwd_context.verify(plain, hashed)
    except ValueError:
        # Stored value is not a bcrypt hash.
        logger.warning("Stored password is not a recognised hash")
        return False


def hash_password(plain: str, rounds: int = 12) -> str:
    """Hash a plaintext password using bcrypt with the given cost factor."""
    return _hashing_context(rounds).hash(plain)


def create_token(subject: str, expires_delta: timedelta, settings: Settings) -> tuple[str, datetime]:
    """Create a signed JWT for a user id. Returns the token and its expiry."""
    now = utcnow()
    expires_at = now + expires_delta
    payload = {
        "id": subject,
        "iat": int(now.timestamp()),
        "exp": int(expires_at.timestamp()),
        "jti": uuid4().hex,
    }
    return jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm), expires_at


def issue_token(user: User, settings: Settings) -> Token:
    """Mint a bearer token for the user and record it in the token table."""
    value, expires_at = create_token(
        subject=str(user.id),
        expires_delta=timedelta(days=settings.token_expires_days),
        settings=settings,
    )
    token = Token(user=user, token=value, valid_till=expires_at)
    token.save()
    return token


def revoke_user_tokens(user: User) -> int:
    """Delete every token issued to the user."""
    return Token.objects(user=user).delete()


def resolve_token(value: str | None, settings: Settings) -> Token:
    """Resolve a bearer token string to its live Token row.

    Rejects tokens with a bad signature or past their JWT expiry, tokens
    with no row in the token table (never issued or logged out), rows past
    `valid_till` and tokens whose user no longer exists.
    """
    if not value:
        raise Unauthorized()
    try:
        payload = jwt.decode(value, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError:
        raise Unauthorized()
    user_id = payload.get("id")
    if not user_id:
        raise Unauthorized()

    user: User | None = User.objects(id=user_id).first()
    if not user:
        raise Unauthorized()
    token: Token | None = Token.objects(token=value, user=user).first()
    if not token or token.is_expired:
        raise Unauthorized()
    return token


def get_current_token(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    settings: Settings = Depends(get_settings),
) -> Token:
    """Identity stage: the Token row behind the request's bearer credential."""
    return resolve_token(credentials.credentials if credentials else None, settings)


def get_current_user(token: Token = Depends(get_current_token)) -> User:
    """Auth dependency that validates the bearer token and returns its user."""
    return token.user
