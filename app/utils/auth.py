# app/utils/auth.py
from typing import Iterable, Optional
import logging

from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
from sqlalchemy.orm import Session

from app.config.settings import Settings
from app.database import get_db
from app.models.user import Role, User
from app.utils.errors import InvalidCredential, MissingCredential, UnauthorizedRole, UnknownIdentity

logger = logging.getLogger(__name__)

# auto_error is off so a missing header surfaces as MissingCredential
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login", auto_error=False)


def decode_token(token: str, settings: Settings) -> dict:
    try:
        return jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except JWTError:
        raise InvalidCredential()


def authenticate(token: Optional[str], db: Session, settings: Settings) -> User:
    """Resolve a bearer token to the user it was issued for.

    The user row is re-read on every call so deleted accounts lose access
    even while their tokens are still within their expiry.
    """
    if not token:
        raise MissingCredential()

    payload = decode_token(token, settings)
    subject = payload.get("sub")
    try:
        user_id = int(subject)
    except (TypeError, ValueError):
        raise InvalidCredential()

    user = db.query(User).filter(User.id == user_id).first()
    if user is None:
        logger.warning(f"Token presented for missing user {user_id}")
        raise UnknownIdentity()
    return user


def authorize(role: str, allowed_roles: Iterable[Role]) -> bool:
    """True iff role is one of allowed_roles"""
    try:
        return Role(role) in set(allowed_roles)
    except ValueError:
        return False


def get_current_user(
    request: Request,
    token: Optional[str] = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> User:
    return authenticate(token, db, request.app.state.settings)


def require_roles(*roles: Role):
    """Dependency factory gating a route on a static role allowlist"""
    allowed = frozenset(Role(role) for role in roles)

    def role_checker(current_user: User = Depends(get_current_user)) -> User:
        if not authorize(current_user.role, allowed):
            logger.warning(f"User {current_user.id} with role '{current_user.role}' denied")
            raise UnauthorizedRole()
        return current_user

    return role_checker
