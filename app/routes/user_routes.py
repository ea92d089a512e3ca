import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from database.init import get_db
from database.models.user_model import User
from enums.user_role import UserRole
from schemas.user_schema import UserCreate, UserResponse, UserUpdate
from services.auth_service import (
    create_user,
    delete_user,
    get_active_users,
    get_all_users,
    get_user_or_raise,
    get_users_by_role,
    update_user,
)
from services.exceptions import ServiceError
from utils.permissions import require_permission

from responses.success import data_response, success_response
from responses.error import internal_server_error, service_error

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["Users"])


def _users(users):
    return [UserResponse.model_validate(user) for user in users]


@router.get("")
def list_users(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("users", "list")),
):
    try:
        return data_response(_users(get_all_users(db)))
    except Exception as e:
        logger.exception("Failed to list users")
        return internal_server_error(str(e))


@router.post("")
def create_user_route(
    payload: UserCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("users", "create")),
):
    """Admin creates an account with any role"""
    try:
        user = create_user(payload, db)
        return data_response(UserResponse.model_validate(user))
    except ServiceError as e:
        return service_error(e)
    except Exception as e:
        logger.exception("Failed to create user")
        return internal_server_error(f"Failed to create user: {str(e)}")


@router.get("/active")
def list_active_users(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("users", "read_active")),
):
    try:
        return data_response(_users(get_active_users(db)))
    except Exception as e:
        logger.exception("Failed to list active users")
        return internal_server_error(str(e))


@router.get("/role/{role}")
def list_users_by_role(
    role: UserRole,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("users", "read_by_role")),
):
    try:
        return data_response(_users(get_users_by_role(role, db)))
    except Exception as e:
        logger.exception("Failed to list users by role")
        return internal_server_error(str(e))


@router.get("/{user_id}")
def get_user(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("users", "read")),
):
    try:
        return data_response(UserResponse.model_validate(get_user_or_raise(user_id, db)))
    except ServiceError as e:
        return service_error(e)
    except Exception as e:
        logger.exception("Failed to fetch user")
        return internal_server_error(f"Failed to fetch user: {str(e)}")


@router.put("/{user_id}")
def update_user_route(
    user_id: int,
    payload: UserUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("users", "update")),
):
    try:
        user = update_user(user_id, payload, db)
        return data_response(UserResponse.model_validate(user))
    except ServiceError as e:
        return service_error(e)
    except Exception as e:
        logger.exception("Failed to update user")
        return internal_server_error(f"Failed to update user: {str(e)}")


@router.delete("/{user_id}")
def delete_user_route(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("users", "delete")),
):
    try:
        delete_user(user_id, db)
        return success_response(message=f"User with id {user_id} deleted successfully")
    except ServiceError as e:
        return service_error(e)
    except Exception as e:
        logger.exception("Failed to delete user")
        return internal_server_error(f"Failed to delete user: {str(e)}")
