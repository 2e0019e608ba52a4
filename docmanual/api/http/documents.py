from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Path, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from docmanual.core.db import get_db
from docmanual.domains.documents.schemas import (
    DocumentResponse, DocumentSummary, RenderedDocumentResponse
)
from docmanual.domains.documents.entities import MAX_DOCUMENT_ID
from docmanual.domains.documents.services import DocumentService

router = APIRouter(prefix="/api/docs", tags=["documents"])


@router.get("", response_model=List[DocumentSummary])
async def list_documents(
    category: Optional[str] = Query(None, max_length=100),
    db: AsyncSession = Depends(get_db)
):
    """Список документов для читателя, без содержимого"""
    document_service = DocumentService(db)
    documents = await document_service.list_documents(category)
    return [document.to_summary() for document in documents]


@router.get("/{document_id}", response_model=DocumentResponse)
async def get_document(
    document_id: int = Path(..., ge=0, le=MAX_DOCUMENT_ID),
    db: AsyncSession = Depends(get_db)
):
    """Получение документа по ID"""
    document_service = DocumentService(db)

    document = await document_service.get_document(document_id)

    if not document:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Document not found"
        )

    return document


@router.get("/{document_id}/rendered", response_model=RenderedDocumentResponse)
async def get_rendered_document(
    document_id: int = Path(..., ge=0, le=MAX_DOCUMENT_ID),
    db: AsyncSession = Depends(get_db)
):
    """Документ, преобразованный в HTML"""
    document_service = DocumentService(db)

    rendered = await document_service.render_document(document_id)

    if not rendered:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Document not found"
        )

    return rendered
