"""User service — profile, password, role and account removal."""

from typing import List

import structlog
from sqlalchemy.exc import IntegrityError

from app.config import Settings
from app.core.exceptions import ConflictError, NotFoundError, ValidationError
from app.domain.models.user import User
from app.domain.repositories.user_repository import UserRepository
from app.domain.schemas.auth import PasswordChange, RoleUpdate, UserUpdate
from app.application.services.auth_service import hash_password, verify_password

logger = structlog.get_logger(__name__)


def list_users(repo: UserRepository) -> List[User]:
    return repo.list_all()


def get_user(repo: UserRepository, user_id: int) -> User:
    user = repo.get_by_id(user_id)
    if not user:
        raise NotFoundError("User not found", {"user_id": user_id})
    return user


def update_profile(repo: UserRepository, user: User, body: UserUpdate) -> User:
    changes = body.model_dump(exclude_unset=True, exclude_none=True)
    if "name" in changes:
        changes["name"] = changes["name"].strip()
    if "email" in changes:
        changes["email"] = changes["email"].strip().lower()
        owner = repo.get_by_email(changes["email"])
        if owner and owner.id != user.id:
            raise ConflictError("Email already registered")

    try:
        user = repo.update(user, changes)
    except IntegrityError as exc:
        raise ConflictError("Email already registered") from exc
    logger.info("Profile updated", user_id=user.id, fields=sorted(changes))
    return user


def change_password(repo: UserRepository, user: User, body: PasswordChange, settings: Settings) -> None:
    if not verify_password(body.current_password, user.password_hash, settings):
        raise ValidationError("Current password is incorrect")
    repo.update(user, {"password_hash": hash_password(body.new_password, settings)})
    logger.info("Password changed", user_id=user.id)


def set_role(repo: UserRepository, actor: User, user_id: int, body: RoleUpdate) -> User:
    if actor.id == user_id:
        raise ValidationError("You cannot change your own role")
    user = get_user(repo, user_id)
    user = repo.update(user, {"role": body.role})
    logger.info("Role changed", user_id=user.id, role=user.role, changed_by=actor.id)
    return user


def delete_user(repo: UserRepository, actor: User, user_id: int) -> None:
    """Remove an account.

    The user's entries and assignments go with it; projects they created
    stay in the catalog with created_by cleared.
    """
    if actor.id == user_id:
        raise ValidationError("You cannot delete your own account")
    get_user(repo, user_id)
    repo.delete_with_dependents(user_id)
