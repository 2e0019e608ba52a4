from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class UserLogin(BaseModel):
    """Схема для входа пользователя"""
    username: str = Field(..., min_length=1, max_length=100)
    password: str = Field(..., min_length=1, max_length=128)


class SessionUser(BaseModel):
    """Пользователь, сохраненный в сессии"""
    id: int
    username: str
    role: str


class LoginUser(BaseModel):
    username: str
    role: str


class LoginResponse(BaseModel):
    success: bool = True
    user: LoginUser


class AuthStatus(BaseModel):
    """Текущее состояние сессии"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    logged_in: bool
    user: Optional[SessionUser] = None


class PasswordChange(BaseModel):
    """Схема для смены пароля"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    old_password: str = Field(..., min_length=1, max_length=128)
    new_password: str = Field(..., min_length=8, max_length=128)

    @field_validator('new_password')
    @classmethod
    def validate_new_password(cls, v):
        if not v.strip():
            raise ValueError('Password cannot be blank')
        if not any(c.isalpha() for c in v):
            raise ValueError('Password must contain at least one letter')
        if not any(c.isdigit() for c in v):
            raise ValueError('Password must contain at least one digit')
        return v


class SuccessResponse(BaseModel):
    success: bool = True
