from typing import Optional, List, TYPE_CHECKING
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, delete, func
from sqlalchemy.exc import IntegrityError

from docmanual.db.models.document import DocumentModel

if TYPE_CHECKING:
    from docmanual.domains.documents.entities import Document


class DocumentRepository:
    """Репозиторий для работы с документами"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, document: "Document") -> "Document":
        """Создание нового документа"""
        db_document = DocumentModel(
            id=document.id,
            title=document.title,
            content=document.content,
            category=document.category,
            created_at=document.created_at,
            updated_at=document.updated_at
        )

        self.session.add(db_document)
        try:
            await self.session.commit()
            await self.session.refresh(db_document)
            return self._to_domain(db_document)
        except IntegrityError:
            await self.session.rollback()
            raise ValueError(f"Document id {document.id} already exists")

    async def get_by_id(self, document_id: int) -> Optional["Document"]:
        """Получение документа по ID"""
        result = await self.session.execute(
            select(DocumentModel).where(DocumentModel.id == document_id)
        )
        db_document = result.scalar_one_or_none()
        return self._to_domain(db_document) if db_document else None

    async def list(self, category: Optional[str] = None) -> List["Document"]:
        """Получение документов, свежие изменения первыми"""
        query = select(DocumentModel)

        if category:
            query = query.where(DocumentModel.category == category)

        result = await self.session.execute(
            query.order_by(
                func.coalesce(DocumentModel.updated_at, DocumentModel.created_at).desc(),
                DocumentModel.id.desc()
            )
        )
        db_documents = result.scalars().all()
        return [self._to_domain(doc) for doc in db_documents]

    async def update(self, document: "Document") -> "Document":
        """Обновление документа"""
        stmt = (
            update(DocumentModel)
            .where(DocumentModel.id == document.id)
            .values(
                title=document.title,
                content=document.content,
                category=document.category,
                updated_at=document.updated_at
            )
        )

        await self.session.execute(stmt)
        await self.session.commit()

        return await self.get_by_id(document.id)

    async def delete(self, document_id: int) -> bool:
        """Удаление документа"""
        stmt = delete(DocumentModel).where(DocumentModel.id == document_id)
        result = await self.session.execute(stmt)
        await self.session.commit()
        return result.rowcount > 0

    async def last_id(self) -> int:
        """Максимальный выданный ID (0 для пустой таблицы)"""
        result = await self.session.execute(select(func.max(DocumentModel.id)))
        return result.scalar() or 0

    async def categories(self) -> List[str]:
        """Уникальные категории в порядке первого появления"""
        result = await self.session.execute(
            select(DocumentModel.category).order_by(DocumentModel.id)
        )
        return list(dict.fromkeys(result.scalars().all()))

    async def count(self) -> int:
        """Подсчет количества документов"""
        result = await self.session.execute(select(func.count(DocumentModel.id)))
        return result.scalar()

    def _to_domain(self, db_document: DocumentModel) -> "Document":
        """Преобразование модели БД в доменную сущность"""
        from docmanual.domains.documents.entities import Document

        return Document(
            id=db_document.id,
            title=db_document.title,
            content=db_document.content,
            category=db_document.category,
            created_at=db_document.created_at,
            updated_at=db_document.updated_at
        )
