# app/routers/auth.py
from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
import logging

from app.database import get_db
from app.models.user import User
from app.schemas.user import UserCreate, UserLogin, UserOut
from app.schemas.tokens import LoginResponse, RegisterResponse
from app.utils.auth import get_current_user
from app.utils.errors import AuthError, ValidationError
from app.utils.security import hash_password, verify_password, create_access_token

logger = logging.getLogger(__name__)

router = APIRouter()


class InvalidLogin(AuthError):
    default_message = "Invalid credentials"


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
def register(user: UserCreate, request: Request, db: Session = Depends(get_db)):
    existing_user = db.query(User).filter(User.email == user.email).first()
    if existing_user:
        raise ValidationError("Email already exists")

    new_user = User(
        username=user.username,
        email=user.email,
        password_hash=hash_password(user.password),
        role=user.role.value,
    )
    db.add(new_user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ValidationError("Email already exists")
    db.refresh(new_user)
    logger.info(f"Registered user {new_user.id} with role '{new_user.role}'")

    token = create_access_token(new_user, request.app.state.settings)
    return {
        "message": "User registered successfully",
        "token": token,
        "user": new_user,
    }


@router.post("/login", response_model=LoginResponse)
def login(credentials: UserLogin, request: Request, db: Session = Depends(get_db)):
    db_user = db.query(User).filter(User.email == credentials.email).first()
    if not db_user or not verify_password(credentials.password, db_user.password_hash):
        logger.info(f"Failed login for {credentials.email}")
        raise InvalidLogin()

    token = create_access_token(db_user, request.app.state.settings)
    return {"token": token, "user": db_user}


@router.get("/me", response_model=UserOut)
def get_current_user_info(current_user: User = Depends(get_current_user)):
    """Get current user information"""
    return current_user
