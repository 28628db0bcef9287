import logging

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from taskpad.core import errors
from taskpad.core.config import settings
from taskpad.core.database import get_db
from taskpad.core.deps import get_current_user
from taskpad.core.security import create_access_token
from taskpad.models.user import User
from taskpad.schemas.user import UserCreate, LoginRequest, AuthResponse, MeResponse, MessageResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])


def _set_auth_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=settings.AUTH_COOKIE_NAME,
        value=token,
        max_age=settings.JWT_EXPIRE_MIN * 60,
        httponly=True,
        secure=settings.is_production,
        samesite="strict",
    )


@router.post("/register", response_model=AuthResponse)
def register(user_data: UserCreate, response: Response, db: Session = Depends(get_db)):
    """Créer un utilisateur et ouvrir sa session"""

    email = user_data.email.lower()
    existing_user = db.query(User).filter(User.email == email).first()
    if existing_user:
        raise errors.validation_error("Email already registered")

    new_user = User(email=email, name=user_data.name.strip())
    new_user.set_password(user_data.password)

    db.add(new_user)
    db.commit()
    db.refresh(new_user)
    logger.info("User %s registered", new_user.id)

    token = create_access_token(new_user.id, new_user.email)
    _set_auth_cookie(response, token)
    return {"user": new_user, "token": token, "message": "Registration successful"}


@router.post("/login", response_model=AuthResponse)
def login(credentials: LoginRequest, response: Response, db: Session = Depends(get_db)):
    """Se connecter : cookie HTTP-only + token dans la réponse"""

    user = db.query(User).filter(User.email == credentials.email.lower()).first()

    # même message dans les deux cas pour ne pas révéler les emails existants
    if not user or not user.verify_password(credentials.password):
        logger.warning("Failed login for %s", credentials.email)
        raise errors.authentication_error("Invalid email or password")

    token = create_access_token(user.id, user.email)
    _set_auth_cookie(response, token)
    return {"user": user, "token": token, "message": "Login successful"}


@router.post("/logout", response_model=MessageResponse)
def logout(response: Response):
    response.set_cookie(
        key=settings.AUTH_COOKIE_NAME,
        value="",
        max_age=0,
        httponly=True,
        secure=settings.is_production,
        samesite="strict",
    )
    return {"message": "Logout successful"}


@router.get("/me", response_model=MeResponse)
def me(current_user: User = Depends(get_current_user)):
    return {"user": current_user}
