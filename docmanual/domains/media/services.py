import logging
import mimetypes
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from docmanual.core.config import settings

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = {".png", ".jpg", ".jpeg", ".gif", ".webp", ".bmp"}
# SVG может содержать скрипты и отдается с того же origin
BLOCKED_CONTENT_TYPES = {"image/svg+xml"}


class ImageStore:
    """Хранилище загруженных картинок в локальном каталоге"""

    def __init__(self, upload_dir: str, url_prefix: str, max_bytes: int):
        self.upload_dir = Path(upload_dir)
        self.url_prefix = url_prefix.rstrip("/")
        self.max_bytes = max_bytes

    @classmethod
    def from_settings(cls) -> "ImageStore":
        return cls(
            upload_dir=settings.upload_dir,
            url_prefix=settings.upload_url_prefix,
            max_bytes=settings.max_upload_bytes
        )

    def _extension(self, filename: Optional[str], content_type: Optional[str]) -> str:
        if not content_type or not content_type.startswith("image/"):
            raise ValueError("Only image files can be uploaded")
        if content_type in BLOCKED_CONTENT_TYPES:
            raise ValueError(f"Unsupported image type: {content_type}")

        ext = Path(filename).suffix.lower() if filename else ""
        if not ext:
            # Вставка из буфера обмена приходит без имени файла
            ext = mimetypes.guess_extension(content_type) or ""
            ext = ".jpg" if ext == ".jpe" else ext

        if ext not in ALLOWED_EXTENSIONS:
            raise ValueError(f"Unsupported image type: {ext or content_type}")
        return ext

    def save(self, filename: Optional[str], content_type: Optional[str], data: bytes) -> str:
        """Сохранение картинки, возвращает URL для вставки в документ"""
        ext = self._extension(filename, content_type)

        if not data:
            raise ValueError("Uploaded file is empty")
        if len(data) > self.max_bytes:
            raise ValueError(f"Image is larger than {self.max_bytes} bytes")

        timestamp_ms = int(datetime.now(timezone.utc).timestamp() * 1000)
        name = f"{timestamp_ms}-{uuid.uuid4().hex[:8]}{ext}"

        self.upload_dir.mkdir(parents=True, exist_ok=True)
        (self.upload_dir / name).write_bytes(data)

        logger.info("Stored upload %s (%d bytes)", name, len(data))
        return f"{self.url_prefix}/{name}"
