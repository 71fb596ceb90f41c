"""Security Primitives — password hashing and JWT issue/verify.

Invariants:
    - Tokens are HS256 JWTs with claims: sub (user id), role, type, exp, iat
    - decode_token() raises AuthenticationError for any invalid token, never JWTError
    - Access and refresh tokens are not interchangeable (type claim checked)
"""

from datetime import datetime, timedelta, timezone

from jose import JWTError, ExpiredSignatureError, jwt
from passlib.context import CryptContext

from portfolio.config import Settings
from portfolio.core.domain_types import TokenType
from portfolio.core.errors import AuthenticationError

# pbkdf2_sha256 keeps the stack free of the native bcrypt wheel
pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def create_token(
    user_id: str, role: str, token_type: TokenType, settings: Settings,
) -> str:
    """Sign a token of the given type with the lifetime configured for it."""
    now = datetime.now(timezone.utc)
    if token_type == TokenType.ACCESS:
        lifetime = timedelta(minutes=settings.access_token_minutes)
    else:
        lifetime = timedelta(days=settings.refresh_token_days)
    claims = {
        "sub": user_id,
        "role": role,
        "type": token_type.value,
        "iat": int(now.timestamp()),
        "exp": int((now + lifetime).timestamp()),
    }
    return jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_token(
    token: str, expected_type: TokenType, settings: Settings,
) -> dict:
    """Verify signature, expiry and token type. Returns the claims."""
    try:
        claims = jwt.decode(
            token, settings.jwt_secret, algorithms=[settings.jwt_algorithm],
        )
    except ExpiredSignatureError:
        raise AuthenticationError("Token has expired")
    except JWTError:
        raise AuthenticationError("Invalid token")
    if claims.get("type") != expected_type.value:
        raise AuthenticationError("Invalid token type")
    if not claims.get("sub"):
        raise AuthenticationError("Invalid token")
    return claims
