from datetime import datetime, timezone
from typing import Optional

from docmanual.core.security import get_password_hash, verify_password

ADMIN_ROLE = "admin"


class User:
    """Сущность пользователя домена Identity"""

    def __init__(
        self,
        id: Optional[int],
        username: str,
        password_hash: str,
        role: str = ADMIN_ROLE,
        created_at: Optional[datetime] = None
    ):
        self.id = id
        self.username = username
        self.password_hash = password_hash
        self.role = role
        self.created_at = created_at or datetime.now(timezone.utc)

    @property
    def is_admin(self) -> bool:
        return self.role == ADMIN_ROLE

    def authenticate(self, password: str) -> bool:
        """Проверка пароля пользователя"""
        return verify_password(password, self.password_hash)

    def change_password(self, new_password: str) -> None:
        """Установка нового пароля"""
        self.password_hash = get_password_hash(new_password)

    def to_session(self) -> dict:
        """Данные пользователя, которые попадают в сессию"""
        return {"id": self.id, "username": self.username, "role": self.role}

    @classmethod
    def create_user(cls, username: str, password: str, role: str = ADMIN_ROLE) -> "User":
        """Создание нового пользователя с хешированием пароля"""
        return cls(
            id=None,
            username=username,
            password_hash=get_password_hash(password),
            role=role
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, User):
            return False
        return self.id == other.id

    def __repr__(self) -> str:
        return f"User(id={self.id}, username={self.username}, role={self.role})"
