from typing import List

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    database_url: str = "sqlite+aiosqlite:///./data/docmanual.db"
    database_echo: bool = False

    jwt_secret: str = "doc-manual-secret-key"
    jwt_algorithm: str = "HS256"

    # Сессия администратора хранится в cookie
    session_cookie_name: str = "docmanual_session"
    session_max_age: int = 24 * 60 * 60
    session_cookie_secure: bool = False

    bcrypt_rounds: int = 12
    default_admin_username: str = "admin"
    default_admin_password: str = "admin123"

    upload_dir: str = "./uploads"
    upload_url_prefix: str = "/uploads"
    max_upload_bytes: int = 5 * 1024 * 1024
    static_dir: str = "docmanual/static"

    # Автокоммит изменений в git-репозиторий
    git_autocommit: bool = False
    git_repo_dir: str = "."
    git_remote: str = "origin"
    git_branch: str = "main"
    git_paths: List[str] = ["data", "uploads"]
    git_push: bool = True

    host: str = "0.0.0.0"
    port: int = 3000

    log_level: str = "INFO"
    cors_origins: List[str] = ["*"]

    model_config = {"env_file": ".env", "extra": "ignore"}


settings = Settings()
