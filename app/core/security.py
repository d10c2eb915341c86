from datetime import datetime, timedelta, timezone
from typing import Optional, Any, Tuple
import uuid

from jose import JWTError, jwt
from passlib.context import CryptContext

from app.config import settings


# Password hashing context with multi-algorithm support
# - bcrypt is the default for new hashes
# - argon2 hashes are still verified (and flagged for rehash)
pwd_context = CryptContext(
    schemes=["bcrypt", "argon2"],
    default="bcrypt",
    deprecated=["argon2"],
    bcrypt__rounds=settings.BCRYPT_ROUNDS,
)


def get_password_hash(password: str) -> str:
    """Hash a password with the context's default scheme."""
    return pwd_context.hash(password)


def verify_and_check_needs_rehash(plain_password: str, hashed_password: str) -> Tuple[bool, bool]:
    """
    Verify password and check if the hash needs to be upgraded.

    Returns:
        Tuple of (is_valid, needs_rehash)
    """
    try:
        is_valid = pwd_context.verify(plain_password, hashed_password)
        if is_valid:
            return (True, pwd_context.needs_update(hashed_password))
        return (False, False)
    except (ValueError, TypeError):
        return (False, False)


def session_lifetime(remember_me: bool) -> timedelta:
    """Session length: one day normally, thirty days with remember-me."""
    days = settings.REMEMBER_ME_EXPIRE_DAYS if remember_me else settings.SESSION_EXPIRE_DAYS
    return timedelta(days=days)


def create_session_token(
    subject: str | int,
    expires_delta: Optional[timedelta] = None,
    additional_claims: Optional[dict[str, Any]] = None
) -> str:
    """
    Create a signed session token.

    Args:
        subject: The subject of the token (worker ID)
        expires_delta: Optional custom expiration time
        additional_claims: Identity claims (username, role, department)

    Returns:
        Encoded JWT string
    """
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or session_lifetime(False))

    to_encode = {
        "sub": str(subject),
        "exp": expire,
        "iat": now,
        "jti": str(uuid.uuid4()),
        "type": "session",
    }

    if additional_claims:
        to_encode.update(additional_claims)

    return jwt.encode(
        to_encode,
        settings.SECRET_KEY,
        algorithm=settings.ALGORITHM
    )


def decode_token(token: str) -> Optional[dict[str, Any]]:
    """
    Decode and validate a session token.

    Returns:
        Decoded token payload or None if invalid or expired
    """
    try:
        return jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM]
        )
    except JWTError:
        return None


def verify_session_token(token: str) -> Optional[dict[str, Any]]:
    """Return the claims of a valid session token, otherwise None."""
    payload = decode_token(token)
    if payload is None:
        return None

    if payload.get("type") != "session":
        return None

    if not payload.get("sub"):
        return None

    return payload
