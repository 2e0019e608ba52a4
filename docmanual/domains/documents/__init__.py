from docmanual.domains.documents.entities import Document, DEFAULT_CATEGORY, next_document_id
from docmanual.domains.documents.schemas import (
    DocumentCreate, DocumentUpdate, DocumentSummary, DocumentResponse,
    RenderedDocumentResponse
)
from docmanual.domains.documents.services import DocumentService

__all__ = [
    "Document", "DEFAULT_CATEGORY", "next_document_id",
    "DocumentCreate", "DocumentUpdate", "DocumentSummary", "DocumentResponse",
    "RenderedDocumentResponse",
    "DocumentService"
]
