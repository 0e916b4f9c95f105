"""Registration, login and the current-user endpoint."""

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from app.api import serializers
from app.api.deps import get_current_user_id
from app.api.schemas import LoginRequest, RegisterRequest
from app.core.database import get_session
from app.core.errors import EmailAlreadyRegistered, InvalidCredential, NotFound
from app.core.security import create_access_token, hash_password, verify_password
from app.models.user import User

router = APIRouter()
logger = logging.getLogger(__name__)


def _get_by_email(db: Session, email: str) -> User | None:
    return db.exec(select(User).where(User.email == email)).first()


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(body: RegisterRequest, db: Session = Depends(get_session)):
    email = body.email.strip().lower()
    if _get_by_email(db, email):
        raise EmailAlreadyRegistered()

    user = User(email=email, password_hash=hash_password(body.password), name=body.name)
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise EmailAlreadyRegistered()
    db.refresh(user)
    logger.info(f"Registered user {user.id}")

    return {"token": create_access_token(user.id), "user": serializers.user_summary(user)}  # type: ignore


@router.post("/login")
async def login(body: LoginRequest, db: Session = Depends(get_session)):
    user = _get_by_email(db, body.email.strip().lower())
    if not user or not verify_password(body.password, user.password_hash):
        raise InvalidCredential("Invalid credentials")

    return {"token": create_access_token(user.id), "user": serializers.user_summary(user)}  # type: ignore


@router.get("/me")
async def me(user_id: int = Depends(get_current_user_id), db: Session = Depends(get_session)):
    user = db.get(User, user_id)
    if not user:
        raise NotFound("User not found")
    return serializers.user_detail(user)
