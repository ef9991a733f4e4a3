import logging
from datetime import datetime, timezone
from typing import Optional

from jose import ExpiredSignatureError, JWTError, jwt
from passlib.context import CryptContext

from .config import Settings
from .errors import AuthError
from .schemas import CurrentUser

logger = logging.getLogger(__name__)


# PUBLIC_INTERFACE
def make_pwd_context(rounds: int = 10) -> CryptContext:
    """bcrypt context with a fixed cost factor; each hash gets a random salt."""
    return CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)


def verify_password(pwd_context: CryptContext, plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(pwd_context: CryptContext, password: str) -> str:
    return pwd_context.hash(password)


# PUBLIC_INTERFACE
def create_access_token(settings: Settings, user_id: int, username: str, now: Optional[datetime] = None) -> str:
    """Generates a signed JWT carrying the user's id and username."""
    issued = now or datetime.now(timezone.utc)
    to_encode = {
        "id": user_id,
        "username": username,
        "iat": issued,
        "exp": issued + settings.token_expire,
    }
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.algorithm)


# PUBLIC_INTERFACE
def decode_access_token(settings: Settings, token: str) -> CurrentUser:
    """
    Verify signature and expiry and return the identity the token asserts.

    Raises AuthError on any failure.
    """
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except ExpiredSignatureError:
        logger.warning("Rejected expired token")
        raise AuthError("Token expired")
    except JWTError:
        logger.warning("Rejected invalid token")
        raise AuthError("Invalid token")

    user_id = payload.get("id")
    username = payload.get("username")
    if not isinstance(user_id, int) or not isinstance(username, str):
        logger.warning("Rejected token with malformed claims")
        raise AuthError("Invalid token")
    return CurrentUser(id=user_id, username=username)
