from docmanual.db.models.user import UserModel
from docmanual.db.models.document import DocumentModel

__all__ = [
    "UserModel",
    "DocumentModel",
]
