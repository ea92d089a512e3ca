import logging
from datetime import datetime

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from config import APP_NAME
from database.init import get_db
from database.models.user_model import User
from schemas.auth_schema import LoginRequest, LoginResponse, RegisterResponse
from schemas.user_schema import UserCreate, UserResponse
from services.auth_service import authenticate_user, create_user
from services.exceptions import ServiceError
from utils.dependencies import create_access_token, get_current_user

from responses.success import data_response
from responses.error import internal_server_error, service_error

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Auth"])


def health_payload():
    return {
        "status": "UP",
        "service": APP_NAME,
        "timestamp": datetime.now().isoformat(),
    }


@router.post("/login")
def login(credentials: LoginRequest, db: Session = Depends(get_db)):
    try:
        user = authenticate_user(credentials.email, credentials.password, credentials.role, db)
        token = create_access_token(user)
        return data_response(
            LoginResponse(
                token=token,
                user_id=user.id,
                name=user.name,
                email=user.email,
                role=user.role,
            )
        )
    except ServiceError as e:
        logger.info("Login rejected for %s: %s", credentials.email, e.message)
        return service_error(e)
    except Exception as e:
        logger.exception("Login failed")
        return internal_server_error(f"Login failed: {str(e)}")


@router.post("/register")
def register(payload: UserCreate, db: Session = Depends(get_db)):
    try:
        user = create_user(payload, db)
        return data_response(
            RegisterResponse(message="User registered successfully!", user_id=user.id)
        )
    except ServiceError as e:
        return service_error(e)
    except Exception as e:
        logger.exception("Registration failed")
        return internal_server_error(f"Failed to register user: {str(e)}")


@router.get("/me")
def get_me(current_user: User = Depends(get_current_user)):
    """Profile of the authenticated caller"""
    return data_response(UserResponse.model_validate(current_user))


@router.get("/health")
def health():
    return data_response(health_payload())
