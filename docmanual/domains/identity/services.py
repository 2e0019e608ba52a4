import logging
from typing import Optional, Tuple
from sqlalchemy.ext.asyncio import AsyncSession

from docmanual.core.config import settings
from docmanual.core.security import create_session_token, verify_token
from docmanual.db.repositories.user_repository import UserRepository
from docmanual.domains.identity.entities import User
from docmanual.domains.identity.schemas import UserLogin

logger = logging.getLogger(__name__)


class IdentityService:
    """Сервис для аутентификации администраторов"""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.user_repository = UserRepository(session)

    async def authenticate_user(self, login_data: UserLogin) -> Optional[User]:
        """Проверка имени и пароля"""
        user = await self.user_repository.get_by_username(login_data.username)

        if not user or not user.authenticate(login_data.password):
            logger.warning("Failed login attempt for %r", login_data.username)
            return None

        return user

    async def login_user(self, login_data: UserLogin) -> Optional[Tuple[User, str]]:
        """Вход пользователя и создание токена сессии"""
        user = await self.authenticate_user(login_data)

        if not user:
            return None

        token = create_session_token(data={
            "sub": str(user.id),
            "username": user.username,
            "role": user.role
        })
        logger.info("User %r logged in", user.username)
        return user, token

    async def get_user_from_token(self, token: str) -> Optional[User]:
        """Получение пользователя из токена сессии"""
        payload = verify_token(token)
        if not payload:
            return None

        try:
            user_id = int(payload.get("sub"))
        except (TypeError, ValueError):
            return None

        return await self.user_repository.get_by_id(user_id)

    async def change_password(self, user_id: int, old_password: str, new_password: str) -> bool:
        """Смена пароля пользователя"""
        user = await self.user_repository.get_by_id(user_id)

        if not user:
            return False

        if not user.authenticate(old_password):
            raise ValueError("Current password is incorrect")

        user.change_password(new_password)
        await self.user_repository.update(user)
        logger.info("Password changed for %r", user.username)
        return True

    async def seed_admin(self) -> Optional[User]:
        """Администратор по умолчанию для пустой базы"""
        if await self.user_repository.count():
            return None

        admin = await self.user_repository.create(
            User.create_user(
                username=settings.default_admin_username,
                password=settings.default_admin_password
            )
        )
        logger.info("Created default admin account %r", admin.username)
        return admin
