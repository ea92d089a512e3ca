from pydantic import BaseModel, ConfigDict, EmailStr, Field
from typing import Annotated, Optional
from datetime import datetime

from enums.user_role import UserRole
from schemas.common import Address, Password, Phone

Name = Annotated[str, Field(min_length=1, max_length=100)]


class UserCreate(BaseModel):
    name: Name
    email: EmailStr
    password: Annotated[Password, Field(min_length=1)]
    phone: Optional[Phone] = None
    role: UserRole = UserRole.CUSTOMER
    address: Optional[Address] = None
    is_active: bool = True


class UserUpdate(BaseModel):
    name: Optional[Name] = None
    phone: Optional[Phone] = None
    address: Optional[Address] = None
    password: Optional[Password] = None


class UserResponse(BaseModel):
    id: int
    name: str
    email: str
    phone: Optional[str] = None
    role: UserRole
    address: Optional[str] = None
    is_active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class UserMinimumResponse(BaseModel):
    id: int
    name: str
    email: str

    model_config = ConfigDict(from_attributes=True)
