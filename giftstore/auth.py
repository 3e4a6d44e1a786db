"""
Bearer token helpers (HS256 JWT)
"""
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import jwt

from giftstore.config import settings


def create_access_token(user_id: int, role: str = "user", expires_minutes: Optional[int] = None) -> str:
    """Mint a token whose `sub` claim is the user id"""
    minutes = settings.ACCESS_TOKEN_EXPIRE_MINUTES if expires_minutes is None else expires_minutes
    payload = {
        "sub": str(user_id),
        "role": role,
        "exp": datetime.now(timezone.utc) + timedelta(minutes=minutes),
    }
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> dict:
    """
    Decode and verify a token

    Raises:
        jose.ExpiredSignatureError: If the token has expired
        jose.JWTError: If the token is malformed or the signature is wrong
    """
    return jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
