"""Auth service — JWT token management, password hashing, registration and login."""

from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Optional

import structlog
from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.exc import IntegrityError

from app.config import Settings
from app.core.exceptions import ConflictError
from app.domain.models.user import ROLE_ADMIN, ROLE_EMPLOYEE, User
from app.domain.repositories.user_repository import UserRepository
from app.domain.schemas.auth import UserCreate

logger = structlog.get_logger(__name__)


@lru_cache
def _pwd_context(rounds: int) -> CryptContext:
    return CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)


def hash_password(password: str, settings: Settings) -> str:
    return _pwd_context(settings.BCRYPT_ROUNDS).hash(password)


def verify_password(plain_password: str, hashed_password: str, settings: Settings) -> bool:
    return _pwd_context(settings.BCRYPT_ROUNDS).verify(plain_password, hashed_password)


def create_access_token(
    user: User, settings: Settings, expires_delta: Optional[timedelta] = None
) -> str:
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.JWT_EXPIRATION_MINUTES)
    )
    to_encode = {"sub": str(user.id), "role": user.role, "exp": expire}
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str, settings: Settings) -> Optional[dict]:
    try:
        return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    except JWTError:
        return None


def authenticate_user(repo: UserRepository, email: str, password: str, settings: Settings) -> Optional[User]:
    user = repo.get_by_email(email)
    if not user or not verify_password(password, user.password_hash, settings):
        return None
    return user


def create_user(
    repo: UserRepository,
    settings: Settings,
    name: str,
    email: str,
    password: str,
    role: str = ROLE_EMPLOYEE,
    avatar: Optional[str] = None,
) -> User:
    data = {
        "name": name.strip(),
        "email": email.strip().lower(),
        "password_hash": hash_password(password, settings),
        "role": role,
    }
    if avatar:
        data["avatar"] = avatar
    try:
        return repo.create(data)
    except IntegrityError as exc:
        raise ConflictError("Email already registered") from exc


def register_user(repo: UserRepository, body: UserCreate, settings: Settings) -> User:
    """Create an account. The very first account becomes the administrator."""
    if repo.get_by_email(body.email):
        raise ConflictError("Email already registered")

    role = ROLE_ADMIN if repo.count() == 0 else ROLE_EMPLOYEE
    user = create_user(
        repo,
        settings,
        name=body.name,
        email=body.email,
        password=body.password,
        role=role,
        avatar=body.avatar,
    )
    logger.info("User registered", user_id=user.id, role=user.role)
    return user


def ensure_default_admin(repo: UserRepository, settings: Settings) -> Optional[User]:
    """Create the configured bootstrap admin once; no-op when not configured."""
    if not settings.DEFAULT_ADMIN_EMAIL or not settings.DEFAULT_ADMIN_PASSWORD:
        return None
    if repo.get_by_email(settings.DEFAULT_ADMIN_EMAIL):
        return None
    admin = create_user(
        repo,
        settings,
        name="Admin",
        email=settings.DEFAULT_ADMIN_EMAIL,
        password=settings.DEFAULT_ADMIN_PASSWORD,
        role=ROLE_ADMIN,
    )
    logger.info("Default admin user created", email=admin.email)
    return admin
