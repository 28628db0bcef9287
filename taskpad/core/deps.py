from typing import Optional

from fastapi import Cookie, Depends, Header
from sqlalchemy.orm import Session

from taskpad.core import errors
from taskpad.core.config import settings
from taskpad.core.database import get_db
from taskpad.core.security import decode_token
from taskpad.models.user import User


def get_token(
    authorization: Optional[str] = Header(None),
    cookie_token: Optional[str] = Cookie(None, alias=settings.AUTH_COOKIE_NAME),
) -> str:
    # Header Bearer en priorité (clients hors navigateur), sinon le cookie
    if authorization and authorization.startswith("Bearer "):
        return authorization[len("Bearer "):]
    if cookie_token:
        return cookie_token
    raise errors.unauthorized("Missing token")


def get_current_user(
    db: Session = Depends(get_db),
    token: str = Depends(get_token),
) -> User:
    user_id = decode_token(token)
    if not user_id:
        raise errors.unauthorized("Invalid token")

    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise errors.not_found("User not found")

    return user
