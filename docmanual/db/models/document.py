from sqlalchemy import Column, String, Text, BigInteger, DateTime

from docmanual.core.db import Base


class DocumentModel(Base):
    __tablename__ = "documents"

    # Идентификатор выдается из времени создания (мс), без автоинкремента
    id = Column(BigInteger, primary_key=True, autoincrement=False)
    title = Column(String(255), nullable=False)
    content = Column(Text, nullable=False, default="")
    category = Column(String(100), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=True)
