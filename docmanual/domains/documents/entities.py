from datetime import datetime, timezone
from typing import Optional

DEFAULT_CATEGORY = "Uncategorized"
# Верхняя граница BIGINT
MAX_DOCUMENT_ID = 2 ** 63 - 1


def _now() -> datetime:
    return datetime.now(timezone.utc)


def next_document_id(last_id: int, now: Optional[datetime] = None) -> int:
    """ID документа: время создания в миллисекундах, строго больше последнего выданного"""
    timestamp_ms = int((now or _now()).timestamp() * 1000)
    return max(timestamp_ms, last_id + 1)


class Document:
    """Сущность документа домена Documents"""

    def __init__(
        self,
        id: int,
        title: str,
        content: str = "",
        category: str = DEFAULT_CATEGORY,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None
    ):
        self.id = id
        self.title = title
        self.content = content
        self.category = category
        self.created_at = created_at or _now()
        self.updated_at = updated_at

    def update(
        self,
        title: Optional[str] = None,
        content: Optional[str] = None,
        category: Optional[str] = None
    ) -> None:
        """Обновление переданных полей документа"""
        if title is not None:
            self.title = title
        if content is not None:
            self.content = content
        if category is not None:
            self.category = category
        self.updated_at = _now()

    def to_summary(self) -> dict:
        """Поля документа для списка, без содержимого"""
        return {
            "id": self.id,
            "title": self.title,
            "category": self.category,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }

    @classmethod
    def create_document(
        cls,
        document_id: int,
        title: str,
        content: str = "",
        category: Optional[str] = None
    ) -> "Document":
        """Создание нового документа"""
        now = _now()
        return cls(
            id=document_id,
            title=title,
            content=content,
            category=category or DEFAULT_CATEGORY,
            created_at=now,
            updated_at=now
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, Document):
            return False
        return self.id == other.id

    def __repr__(self) -> str:
        return f"Document(id={self.id}, title={self.title}, category={self.category})"
