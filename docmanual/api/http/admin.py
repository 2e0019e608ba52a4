import logging
from typing import Annotated, List

from fastapi import (
    APIRouter, BackgroundTasks, Depends, File, HTTPException, Path, UploadFile, status
)
from sqlalchemy.ext.asyncio import AsyncSession

from docmanual.core.auth import require_admin
from docmanual.core.db import get_db
from docmanual.domains.documents.schemas import DocumentCreate, DocumentResponse, DocumentUpdate
from docmanual.domains.documents.entities import MAX_DOCUMENT_ID
from docmanual.domains.documents.services import DocumentService
from docmanual.domains.identity.schemas import SuccessResponse
from docmanual.domains.media.services import ImageStore
from docmanual.services.git_sync import GitSync

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/admin",
    tags=["admin"],
    dependencies=[Depends(require_admin)]
)


def get_git_sync() -> GitSync:
    return GitSync.from_settings()


def get_image_store() -> ImageStore:
    return ImageStore.from_settings()


@router.post("/docs", response_model=DocumentResponse, status_code=status.HTTP_201_CREATED)
async def create_document(
    document_data: DocumentCreate,
    background_tasks: BackgroundTasks,
    git_sync: GitSync = Depends(get_git_sync),
    db: AsyncSession = Depends(get_db)
):
    """Создание нового документа"""
    document_service = DocumentService(db)

    try:
        document = await document_service.create_document(document_data)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )

    background_tasks.add_task(git_sync.commit, f"Add document: {document.title}")
    return document


@router.put("/docs/{document_id}", response_model=DocumentResponse)
async def update_document(
    document_id: Annotated[int, Path(ge=0, le=MAX_DOCUMENT_ID)],
    update_data: DocumentUpdate,
    background_tasks: BackgroundTasks,
    git_sync: GitSync = Depends(get_git_sync),
    db: AsyncSession = Depends(get_db)
):
    """Обновление документа"""
    document_service = DocumentService(db)

    document = await document_service.update_document(document_id, update_data)

    if not document:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Document not found"
        )

    background_tasks.add_task(git_sync.commit, f"Update document: {document.title}")
    return document


@router.delete("/docs/{document_id}", response_model=SuccessResponse)
async def delete_document(
    document_id: Annotated[int, Path(ge=0, le=MAX_DOCUMENT_ID)],
    background_tasks: BackgroundTasks,
    git_sync: GitSync = Depends(get_git_sync),
    db: AsyncSession = Depends(get_db)
):
    """Удаление документа"""
    document_service = DocumentService(db)

    if not await document_service.delete_document(document_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Document not found"
        )

    background_tasks.add_task(git_sync.commit, f"Delete document {document_id}")
    return SuccessResponse()


@router.get("/categories", response_model=List[str])
async def list_categories(db: AsyncSession = Depends(get_db)):
    """Получение всех категорий"""
    document_service = DocumentService(db)
    return await document_service.list_categories()


@router.post("/upload")
async def upload_image(
    image: UploadFile = File(...),
    image_store: ImageStore = Depends(get_image_store)
):
    """Загрузка картинки для вставки в документ"""
    # Не больше лимита плюс один байт
    data = await image.read(image_store.max_bytes + 1)

    try:
        url = image_store.save(image.filename, image.content_type, data)
    except ValueError as e:
        logger.warning("Rejected upload %r: %s", image.filename, e)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )

    return {"success": True, "url": url}
