import logging
import os
import re
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Optional, Tuple

from dotenv import load_dotenv

from tasks_database.db import DEFAULT_DATABASE_URL

logger = logging.getLogger(__name__)

DEV_SECRET_KEY = "temporary_dev_secret"
ALGORITHM = "HS256"

_DURATION_RE = re.compile(r"^\s*(\d+)\s*([smhdw]?)\s*$", re.IGNORECASE)
_UNIT_SECONDS = {"": 1, "s": 1, "m": 60, "h": 3600, "d": 86400, "w": 604800}


# PUBLIC_INTERFACE
def parse_duration(value: str) -> timedelta:
    """
    Parse a token lifetime such as ``3600``, ``30m``, ``12h`` or ``7d``.

    Raises ValueError for anything else, including zero.
    """
    match = _DURATION_RE.match(str(value))
    if not match:
        raise ValueError(f"Invalid duration: {value!r}")
    amount, unit = int(match.group(1)), match.group(2).lower()
    if amount <= 0:
        raise ValueError(f"Duration must be positive: {value!r}")
    return timedelta(seconds=amount * _UNIT_SECONDS[unit])


def _split_origins(raw: str) -> Tuple[str, ...]:
    return tuple(origin.strip() for origin in raw.split(",") if origin.strip())


@dataclass(frozen=True)
class Settings:
    database_url: str = DEFAULT_DATABASE_URL
    secret_key: str = DEV_SECRET_KEY
    algorithm: str = ALGORITHM
    token_expire: timedelta = timedelta(days=7)
    api_prefix: str = "/api"
    cors_origins: Tuple[str, ...] = field(default=("*",))
    bcrypt_rounds: int = 10
    log_level: str = "INFO"


# PUBLIC_INTERFACE
def get_settings(env: Optional[dict] = None) -> Settings:
    """
    Build Settings from the process environment (after loading a local .env).

    Pass ``env`` to read from an explicit mapping instead.
    """
    if env is None:
        load_dotenv()
        env = os.environ

    secret_key = env.get("JWT_SECRET") or DEV_SECRET_KEY
    if secret_key == DEV_SECRET_KEY:
        logger.warning("JWT_SECRET not set; using the development signing key")

    api_prefix = env.get("API_PREFIX", "/api").rstrip("/")
    if api_prefix and not api_prefix.startswith("/"):
        api_prefix = "/" + api_prefix

    return Settings(
        database_url=env.get("DATABASE_URL") or DEFAULT_DATABASE_URL,
        secret_key=secret_key,
        token_expire=parse_duration(env.get("JWT_EXPIRE", "7d")),
        api_prefix=api_prefix,
        cors_origins=_split_origins(env.get("CORS_ORIGINS", "*")) or ("*",),
        bcrypt_rounds=int(env.get("BCRYPT_ROUNDS", "10")),
        log_level=env.get("LOG_LEVEL", "INFO").upper(),
    )
