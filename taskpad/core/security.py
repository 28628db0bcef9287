from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt

from taskpad.core.config import settings

ALGORITHM = "HS256"


def create_access_token(user_id: int, email: str) -> str:
    # token de session, valable JWT_EXPIRE_MIN minutes (7 jours par défaut)
    payload = {
        "user_id": user_id,
        "email": email,
        "exp": datetime.now(timezone.utc) + timedelta(minutes=settings.JWT_EXPIRE_MIN),
        "type": "access",
    }
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=ALGORITHM)


def verify_token(token: str) -> Optional[dict]:
    try:
        return jwt.decode(token, settings.JWT_SECRET, algorithms=[ALGORITHM])
    except JWTError:
        return None


def decode_token(token: str) -> Optional[int]:
    payload = verify_token(token)
    if payload is None or payload.get("type") != "access":
        return None
    return payload.get("user_id")
