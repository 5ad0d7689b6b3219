# cuebook/auth.py

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from jose import jwt, JWTError
from passlib.context import CryptContext
from sqlmodel import Session, select

from cuebook.config import settings
from cuebook.db import get_session
from cuebook.errors import Unauthorized
from cuebook.models import AdminUser
from cuebook.schemas import TokenClaims

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")
# auto_error off so a missing header goes through the same Unauthorized path
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/login", auto_error=False)


def create_access_token(subject: str, expires_minutes: int = settings.access_token_expire_minutes) -> str:
    expire = datetime.now(timezone.utc) + timedelta(minutes=expires_minutes)
    to_encode = {"sub": subject, "exp": expire}
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.algorithm)


def verify_token(token: str) -> TokenClaims:
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except JWTError as exc:
        logger.debug("Token verification failed: %s", exc)
        raise Unauthorized("Invalid token")

    subject = payload.get("sub")
    exp = payload.get("exp")
    if not subject or exp is None:
        raise Unauthorized("Invalid token")
    return TokenClaims(subject=subject, expiry=datetime.fromtimestamp(exp, tz=timezone.utc))


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain: str, hashed: str) -> bool:
    return pwd_context.verify(plain, hashed)


def authenticate(session: Session, username: str, password: str) -> Optional[AdminUser]:
    user = session.exec(
        select(AdminUser).where(AdminUser.username == username)
    ).first()
    if user is None or not verify_password(password, user.password_hash):
        logger.warning("Failed admin login for %r", username)
        return None

    user.last_login_at = datetime.now(timezone.utc)
    session.add(user)
    session.commit()
    return user


def ensure_admin(session: Session, username: str, password: str) -> Optional[AdminUser]:
    """Create the configured admin user if it does not exist yet."""
    if not username or not password:
        return None
    existing = session.exec(
        select(AdminUser).where(AdminUser.username == username)
    ).first()
    if existing is not None:
        return existing

    user = AdminUser(username=username, password_hash=hash_password(password))
    session.add(user)
    session.commit()
    session.refresh(user)
    logger.info("Seeded admin user %r", username)
    return user


def get_current_admin(
    token: Optional[str] = Depends(oauth2_scheme),
    session: Session = Depends(get_session),
) -> AdminUser:
    if not token:
        raise Unauthorized("Missing bearer token")

    claims = verify_token(token)

    user = session.exec(
        select(AdminUser).where(AdminUser.username == claims.subject)
    ).first()
    if user is None:
        raise Unauthorized("User not found")

    return user
