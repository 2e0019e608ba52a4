import logging
from typing import Optional, List
from sqlalchemy.ext.asyncio import AsyncSession

from docmanual.db.repositories.document_repository import DocumentRepository
from docmanual.domains.documents.entities import Document, next_document_id
from docmanual.domains.documents.schemas import DocumentCreate, DocumentUpdate
from docmanual.markdown import render_markdown

logger = logging.getLogger(__name__)

DEFAULT_DOCUMENTS = [
    {
        "title": "Welcome",
        "category": "Home",
        "content": (
            "# Welcome to the online manual\n\n"
            "This is your first document page.\n\n"
            "## Features\n\n"
            "- Browse documents on the public site\n"
            "- Edit documents in the admin area\n"
            "- Markdown formatting"
        ),
    },
    {
        "title": "User guide",
        "category": "Guide",
        "content": "# User guide\n\nThis document helps you get started with the system.",
    },
]


class DocumentService:
    """Сервис для работы с документами"""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.document_repository = DocumentRepository(session)

    async def create_document(self, document_data: DocumentCreate) -> Document:
        """Создание нового документа"""
        document_id = next_document_id(await self.document_repository.last_id())
        document = Document.create_document(
            document_id=document_id,
            title=document_data.title,
            content=document_data.content,
            category=document_data.category
        )

        created_document = await self.document_repository.create(document)
        logger.info("Created document %s (%r)", created_document.id, created_document.title)
        return created_document

    async def get_document(self, document_id: int) -> Optional[Document]:
        """Получение документа по ID"""
        return await self.document_repository.get_by_id(document_id)

    async def list_documents(self, category: Optional[str] = None) -> List[Document]:
        """Получение списка документов"""
        return await self.document_repository.list(category)

    async def update_document(self, document_id: int, update_data: DocumentUpdate) -> Optional[Document]:
        """Обновление документа"""
        document = await self.document_repository.get_by_id(document_id)

        if not document:
            return None

        document.update(
            title=update_data.title,
            content=update_data.content,
            category=update_data.category
        )

        updated_document = await self.document_repository.update(document)
        logger.info("Updated document %s", document_id)
        return updated_document

    async def delete_document(self, document_id: int) -> bool:
        """Удаление документа"""
        deleted = await self.document_repository.delete(document_id)
        if deleted:
            logger.info("Deleted document %s", document_id)
        return deleted

    async def list_categories(self) -> List[str]:
        """Получение всех категорий"""
        return await self.document_repository.categories()

    async def render_document(self, document_id: int) -> Optional[dict]:
        """Документ вместе с HTML для страницы просмотра"""
        document = await self.document_repository.get_by_id(document_id)

        if not document:
            return None

        rendered = document.to_summary()
        rendered["html"] = render_markdown(document.content)
        return rendered

    async def seed_defaults(self) -> int:
        """Начальные документы для пустой базы"""
        if await self.document_repository.count():
            return 0

        last_id = 0
        for data in DEFAULT_DOCUMENTS:
            last_id = next_document_id(last_id)
            await self.document_repository.create(
                Document(
                    id=last_id,
                    title=data["title"],
                    content=data["content"],
                    category=data["category"]
                )
            )

        logger.info("Seeded %d default documents", len(DEFAULT_DOCUMENTS))
        return len(DEFAULT_DOCUMENTS)
