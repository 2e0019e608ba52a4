from docmanual.services.git_sync import GitSync

__all__ = ["GitSync"]
