from pydantic import BaseModel, EmailStr

from enums.user_role import UserRole


class LoginRequest(BaseModel):
    email: EmailStr
    password: str
    role: str


class LoginResponse(BaseModel):
    token: str
    token_type: str = "bearer"
    user_id: int
    name: str
    email: str
    role: UserRole


class RegisterResponse(BaseModel):
    message: str
    user_id: int
