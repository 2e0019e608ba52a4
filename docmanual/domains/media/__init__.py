from docmanual.domains.media.services import ImageStore, ALLOWED_EXTENSIONS

__all__ = ["ImageStore", "ALLOWED_EXTENSIONS"]
