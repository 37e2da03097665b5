import logging
import os
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from config import BASE_DIR, Settings
from database.connection import DatabaseState, create_database, bootstrap
from errors import register_exception_handlers
from models.reference import ReferenceData
from repositories.database import DatabasePostRepository, DatabaseCommentRepository
from repositories.memory import MemoryStore, MemoryPostRepository, MemoryCommentRepository, load_seed
from routers import router as api_router
from storage.uploads import UploadManager
from utils.logger import configure_logging

logger = logging.getLogger(__name__)

SEED_PATH = os.path.join(BASE_DIR, "fixtures", "seed_posts.json")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings.from_env()
    configure_logging(settings.log_level)

    db_state: Optional[DatabaseState] = None
    if settings.storage_backend == "database":
        # 공유 커넥션 풀 (프로세스당 1개)
        db_state = DatabaseState(create_database(settings.database_url))
        posts_repo = DatabasePostRepository(db_state)
        comments_repo = DatabaseCommentRepository(db_state)
    else:
        store = MemoryStore()
        if settings.memory_seed:
            load_seed(store, SEED_PATH)
        posts_repo = MemoryPostRepository(store)
        comments_repo = MemoryCommentRepository(store)

    uploads = UploadManager(
        settings.upload_dir,
        max_size=settings.max_upload_size,
        name_policy=settings.upload_name_policy,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        uploads.ensure_directory()
        if db_state is not None:
            await bootstrap(db_state, settings.database_url, strict=settings.strict_startup)
        logger.info(
            "Backend=%s, uploads=%s, policy=%s",
            settings.storage_backend, uploads.directory, settings.upload_name_policy,
        )
        yield
        if db_state is not None and db_state.database.is_connected:
            await db_state.database.disconnect()

    app = FastAPI(lifespan=lifespan)

    app.state.settings = settings
    app.state.db_state = db_state
    app.state.posts = posts_repo
    app.state.comments = comments_repo
    app.state.uploads = uploads
    app.state.reference = ReferenceData(
        settings.public_base_url,
        assets_dir=settings.assets_dir,
        embed=settings.embed_assets,
    )

    register_exception_handlers(app)
    app.include_router(api_router)

    # (선택) 라우트 디버그
    for r in app.router.routes:
        logger.debug("route %s %s", getattr(r, "name", None), getattr(r, "path", None))

    return app


app = create_app()
