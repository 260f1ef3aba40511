import logging
import threading
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from jose import jwt, JWTError, ExpiredSignatureError
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from config import (
    ALGORITHM,
    SECRET_KEY,
    ACCESS_TOKEN_EXPIRE_MINUTES,
    BCRYPT_ROUNDS,
    DATA_SOURCE,
)
from database.init import get_db
from database.data_source import DataSource, SqlDataSource, MemoryDataSource
from database.models.user_model import User
from utils.exceptions import Unauthenticated
from utils.permissions import require_role

logger = logging.getLogger(__name__)

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login", auto_error=False)
pwd_context = CryptContext(
    schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=BCRYPT_ROUNDS
)

_memory_source: Optional[MemoryDataSource] = None
_memory_lock = threading.Lock()


def hash_password(password):
    return pwd_context.hash(password)


def verify_password(plain_password, hashed_password):
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None):
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)


def token_for(user: User) -> str:
    return create_access_token({"sub": str(user.id), "role": user.role})


def decode_access_token(token: str) -> dict:
    try:
        return jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except ExpiredSignatureError:
        raise Unauthenticated("Token expired")
    except JWTError:
        raise Unauthenticated("Invalid token")


def get_memory_source() -> MemoryDataSource:
    """The process-wide fixture store, loaded on first use"""
    global _memory_source
    with _memory_lock:
        if _memory_source is None:
            from database.fixtures import load_fixtures

            _memory_source = MemoryDataSource()
            load_fixtures(_memory_source)
            logger.warning("Serving in-memory fixture data, nothing will be persisted")
        return _memory_source


def get_data_source(db: Session = Depends(get_db)) -> DataSource:
    if DATA_SOURCE == "memory":
        return get_memory_source()
    return SqlDataSource(db)


def current_identity(token: Optional[str], data_source: DataSource) -> User:
    """Resolve a bearer token to the user it was issued for"""
    if not token:
        raise Unauthenticated("Not authorized to access this route - no token provided")

    payload = decode_access_token(token)
    subject = payload.get("sub")
    if subject is None:
        raise Unauthenticated("Invalid token format")

    try:
        user_id = int(subject)
    except (TypeError, ValueError):
        raise Unauthenticated("Invalid token format")

    user = data_source.get_user(user_id)
    if user is None:
        raise Unauthenticated("User not found")
    return user


def get_current_user(
    token: Optional[str] = Depends(oauth2_scheme),
    data_source: DataSource = Depends(get_data_source),
) -> User:
    return current_identity(token, data_source)


def role_required(*roles: str):
    """Dependency factory letting only the given roles through"""

    def dependency(current_user: User = Depends(get_current_user)) -> User:
        require_role(current_user, roles)
        return current_user

    return dependency
