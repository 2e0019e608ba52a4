from typing import Optional

from fastapi import Depends, HTTPException, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from docmanual.core.config import settings
from docmanual.core.db import get_db
from docmanual.domains.identity.entities import User
from docmanual.domains.identity.services import IdentityService


def set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=settings.session_cookie_name,
        value=token,
        max_age=settings.session_max_age,
        httponly=True,
        samesite="lax",
        secure=settings.session_cookie_secure,
    )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(
        key=settings.session_cookie_name,
        httponly=True,
        samesite="lax",
        secure=settings.session_cookie_secure,
    )


async def get_optional_user(
    request: Request,
    db: AsyncSession = Depends(get_db)
) -> Optional[User]:
    """Пользователь текущей сессии или None"""
    token = request.cookies.get(settings.session_cookie_name)
    if not token:
        return None

    identity_service = IdentityService(db)
    return await identity_service.get_user_from_token(token)


async def require_auth(user: Optional[User] = Depends(get_optional_user)) -> User:
    """Зависимость: нужен вход в систему"""
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated"
        )
    return user


async def require_admin(user: User = Depends(require_auth)) -> User:
    """Зависимость: нужны права администратора"""
    if not user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin privileges required"
        )
    return user
