from docmanual.api.http.auth import router as auth_router
from docmanual.api.http.documents import router as documents_router
from docmanual.api.http.admin import router as admin_router

__all__ = [
    "auth_router",
    "documents_router",
    "admin_router",
]
