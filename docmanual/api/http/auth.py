from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from docmanual.core.auth import (
    clear_session_cookie, get_optional_user, require_admin, set_session_cookie
)
from docmanual.core.db import get_db
from docmanual.domains.identity.entities import User
from docmanual.domains.identity.schemas import (
    AuthStatus, LoginResponse, LoginUser, PasswordChange, SessionUser, SuccessResponse, UserLogin
)
from docmanual.domains.identity.services import IdentityService

router = APIRouter(prefix="/api", tags=["authentication"])


@router.post("/login", response_model=LoginResponse)
async def login(
    login_data: UserLogin,
    response: Response,
    db: AsyncSession = Depends(get_db)
):
    """Вход администратора"""
    identity_service = IdentityService(db)

    result = await identity_service.login_user(login_data)

    if not result:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid username or password"
        )

    user, token = result
    set_session_cookie(response, token)
    return LoginResponse(user=LoginUser(username=user.username, role=user.role))


@router.post("/logout", response_model=SuccessResponse)
async def logout(response: Response):
    """Выход пользователя"""
    clear_session_cookie(response)
    return SuccessResponse()


@router.get("/auth", response_model=AuthStatus, response_model_exclude_none=True)
async def auth_status(user: Optional[User] = Depends(get_optional_user)):
    """Текущее состояние входа"""
    if user is None:
        return AuthStatus(logged_in=False)
    return AuthStatus(logged_in=True, user=SessionUser(**user.to_session()))


@router.post("/admin/password", response_model=SuccessResponse)
async def change_password(
    password_data: PasswordChange,
    current_user: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    """Смена пароля текущего администратора"""
    identity_service = IdentityService(db)

    try:
        changed = await identity_service.change_password(
            current_user.id,
            password_data.old_password,
            password_data.new_password
        )
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )

    if not changed:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found"
        )

    return SuccessResponse()
