import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from fastapi.responses import FileResponse

from docmanual.api.http import admin_router, auth_router, documents_router
from docmanual.core.config import settings
from docmanual.core.db import SessionLocal, init_db
from docmanual.domains.documents.services import DocumentService
from docmanual.domains.identity.services import IdentityService

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


async def seed_defaults() -> None:
    """Администратор и стартовые документы для пустой базы"""
    async with SessionLocal() as session:
        await IdentityService(session).seed_admin()
        await DocumentService(session).seed_defaults()


@asynccontextmanager
async def lifespan(app: FastAPI):
    await init_db()
    await seed_defaults()
    logger.info("DocManual started (database: %s)", settings.database_url)
    yield


app = FastAPI(
    title="DocManual",
    description="Online document manual: public reader and admin editor",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Загруженные картинки отдаются как статика
os.makedirs(settings.upload_dir, exist_ok=True)
app.mount(settings.upload_url_prefix, StaticFiles(directory=settings.upload_dir), name="uploads")

if os.path.exists(settings.static_dir):
    app.mount("/static", StaticFiles(directory=settings.static_dir), name="static")

# Подключаем роутеры
app.include_router(auth_router)
app.include_router(documents_router)
app.include_router(admin_router)


@app.get("/")
async def root():
    """Главная страница или описание API"""
    index_path = os.path.join(settings.static_dir, "index.html")
    if os.path.exists(index_path):
        return FileResponse(index_path)
    return {
        "message": "DocManual API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/health"
    }


@app.get("/health")
async def health():
    return {"status": "ok"}
