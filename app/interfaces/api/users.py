"""Users API routes — directory, own profile, admin role management."""

from typing import List

from fastapi import APIRouter, Depends, status

from app.config import Settings
from app.application.services import user_service
from app.domain.models.user import User
from app.domain.repositories.user_repository import UserRepository
from app.domain.schemas.auth import PasswordChange, RoleUpdate, UserRead, UserUpdate
from app.interfaces.api.deps import get_current_user, require_admin
from app.interfaces.deps import get_app_settings, get_user_repository

router = APIRouter(prefix="/api/users", tags=["Users"])


@router.get("", response_model=List[UserRead])
def list_users(
    users: UserRepository = Depends(get_user_repository),
    user: User = Depends(get_current_user),
):
    return [UserRead.model_validate(u) for u in user_service.list_users(users)]


@router.put("/me", response_model=UserRead)
def update_me(
    body: UserUpdate,
    users: UserRepository = Depends(get_user_repository),
    user: User = Depends(get_current_user),
):
    return UserRead.model_validate(user_service.update_profile(users, user, body))


@router.put("/me/password", status_code=status.HTTP_204_NO_CONTENT)
def change_my_password(
    body: PasswordChange,
    users: UserRepository = Depends(get_user_repository),
    settings: Settings = Depends(get_app_settings),
    user: User = Depends(get_current_user),
):
    user_service.change_password(users, user, body, settings)


@router.put("/{user_id}/role", response_model=UserRead)
def set_user_role(
    user_id: int,
    body: RoleUpdate,
    users: UserRepository = Depends(get_user_repository),
    admin: User = Depends(require_admin),
):
    return UserRead.model_validate(user_service.set_role(users, admin, user_id, body))


@router.delete("/{user_id}")
def delete_user(
    user_id: int,
    users: UserRepository = Depends(get_user_repository),
    admin: User = Depends(require_admin),
):
    user_service.delete_user(users, admin, user_id)
    return {"success": True}
