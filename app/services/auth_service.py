import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from database.models import User
from enums.user_role import UserRole
from schemas.user_schema import UserCreate, UserUpdate
from services.exceptions import ConflictError, InvalidRequestError, NotFoundError
from utils.dependencies import hash_password, verify_password

logger = logging.getLogger(__name__)


def create_user(payload: UserCreate, db: Session) -> User:
    if get_user_by_email(payload.email, db):
        raise ConflictError("Email is already taken!")

    user = User(
        name=payload.name,
        email=payload.email,
        phone=payload.phone,
        address=payload.address,
        role=payload.role,
        hashed_password=hash_password(payload.password),
        is_active=payload.is_active,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # Another request registered the same email between the check and the insert
        db.rollback()
        raise ConflictError("Email is already taken!")
    db.refresh(user)
    logger.info("Registered user_id=%s role=%s", user.id, user.role)
    return user


def authenticate_user(email: str, password: str, role: str, db: Session) -> User:
    """Check login credentials; the requested role must match the account's role."""
    try:
        requested_role = UserRole(role.strip().upper())
    except ValueError:
        raise InvalidRequestError(f"Invalid role: {role}")

    user = get_user_by_email(email, db)
    if user is None:
        raise InvalidRequestError(f"User not found with email: {email}")

    if user.role != requested_role:
        raise InvalidRequestError(
            f"Role mismatch. Expected: {requested_role.value}, but user has: {user.role.value}"
        )

    if not verify_password(password, user.hashed_password):
        raise InvalidRequestError("Invalid credentials: bad password")

    if not user.is_active:
        raise InvalidRequestError("Invalid credentials: account is disabled")

    return user


def get_user_by_email(email: str, db: Session) -> Optional[User]:
    return db.query(User).filter_by(email=email).first()


def get_user_by_id(user_id: int, db: Session) -> Optional[User]:
    return db.query(User).filter(User.id == user_id).first()


def get_user_or_raise(user_id: int, db: Session) -> User:
    user = get_user_by_id(user_id, db)
    if user is None:
        raise NotFoundError(f"No user found with id {user_id}")
    return user


def get_all_users(db: Session) -> List[User]:
    return db.query(User).order_by(User.id).all()


def get_users_by_role(role: UserRole, db: Session) -> List[User]:
    return db.query(User).filter(User.role == role).order_by(User.id).all()


def get_active_users(db: Session) -> List[User]:
    return db.query(User).filter(User.is_active.is_(True)).order_by(User.id).all()


def update_user(user_id: int, payload: UserUpdate, db: Session) -> User:
    user = get_user_or_raise(user_id, db)

    if payload.name:
        user.name = payload.name
    if payload.phone is not None:
        user.phone = payload.phone
    if payload.address is not None:
        user.address = payload.address
    if payload.password:
        user.hashed_password = hash_password(payload.password)

    db.commit()
    db.refresh(user)
    return user


def delete_user(user_id: int, db: Session) -> User:
    user = get_user_or_raise(user_id, db)
    db.delete(user)
    db.commit()
    logger.info("Deleted user_id=%s", user_id)
    return user
