"""Auth API routes — register, login, me."""

from fastapi import APIRouter, Depends, status

from app.config import Settings
from app.core.exceptions import AuthError
from app.application.services.auth_service import (
    authenticate_user,
    create_access_token,
    register_user,
)
from app.domain.models.user import User
from app.domain.repositories.user_repository import UserRepository
from app.domain.schemas.auth import LoginRequest, TokenResponse, UserCreate, UserRead
from app.interfaces.api.deps import get_current_user
from app.interfaces.deps import get_app_settings, get_user_repository

router = APIRouter(prefix="/api/auth", tags=["Auth"])


@router.post("/register", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def register(
    body: UserCreate,
    users: UserRepository = Depends(get_user_repository),
    settings: Settings = Depends(get_app_settings),
):
    user = register_user(users, body, settings)
    return UserRead.model_validate(user)


@router.post("/login", response_model=TokenResponse)
def login(
    body: LoginRequest,
    users: UserRepository = Depends(get_user_repository),
    settings: Settings = Depends(get_app_settings),
):
    user = authenticate_user(users, body.email, body.password, settings)
    if not user:
        raise AuthError("Incorrect email or password")

    return TokenResponse(
        token=create_access_token(user, settings),
        user=UserRead.model_validate(user),
    )


@router.get("/me", response_model=UserRead)
def get_me(user: User = Depends(get_current_user)):
    return UserRead.model_validate(user)
