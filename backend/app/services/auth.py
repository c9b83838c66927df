"""
Session token handling and caller identity resolution.
"""
from datetime import datetime, timedelta
from typing import Optional
from uuid import UUID
import logging

from jose import JWTError, jwt
from sqlalchemy.orm import Session

from app.db.database import settings
from app.models import User
from app.services.errors import Unauthorized

logger = logging.getLogger(__name__)


def create_access_token(user_id, expires_minutes: Optional[int] = None) -> str:
    """Issue a session token whose `sub` claim is the user id."""
    minutes = expires_minutes or settings.access_token_expire_minutes
    payload = {
        "sub": str(user_id),
        "exp": datetime.utcnow() + timedelta(minutes=minutes),
    }
    return jwt.encode(payload, settings.secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token_subject(token: str) -> Optional[str]:
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None
    subject = payload.get("sub")
    return str(subject) if subject else None


def resolve_current_user(db: Session, token: Optional[str]) -> User:
    """Return the active user behind a session token or raise Unauthorized."""
    if not token:
        raise Unauthorized("Not authenticated")

    subject = decode_access_token_subject(token)
    if not subject:
        raise Unauthorized("Invalid session")

    try:
        user_id = UUID(subject)
    except ValueError:
        raise Unauthorized("Invalid session")

    user = db.query(User).filter(User.id == user_id, User.active.is_(True)).first()
    if not user:
        logger.warning("Session for unknown or inactive user %s", subject)
        raise Unauthorized("User not found or inactive")
    return user
