"""FastAPI application entrypoint."""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI

from stackdialog.api.conversation import router as conversation_router
from stackdialog.api.health import router as health_router
from stackdialog.config import settings
from stackdialog.core.logging import get_logger, setup_logging
from stackdialog.core.storage import MemoryStorage, Storage
from stackdialog.db.database import SessionLocal, engine as db_engine
from stackdialog.db.models import Base
from stackdialog.db.storage import SqlStorage
from stackdialog.services.conversation_service import ConversationService
from stackdialog.services.sample_dialogs import UserProfileDialog

setup_logging(settings.LOG_LEVEL, sql_echo=settings.DEBUG)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup and shutdown events."""
    db_session = None

    if settings.STORAGE_BACKEND == "memory":
        storage: Storage = MemoryStorage()
        logger.info("Using in-memory storage.")
    else:
        # DB 테이블 생성
        logger.info("Creating database tables...")
        Base.metadata.create_all(bind=db_engine)
        logger.info("Database tables created.")
        db_session = SessionLocal()
        storage = SqlStorage(db_session)

    # ConversationService 초기화
    logger.info("Initializing ConversationService...")
    app.state.conversation_service = ConversationService(
        storage,
        UserProfileDialog(
            default_locale=settings.DEFAULT_LOCALE,
            max_token_distance=settings.MAX_TOKEN_DISTANCE,
        ),
        settings.DIALOG_STATE_PROPERTY,
    )
    logger.info("ConversationService initialized.")

    yield

    # 종료 시 정리
    logger.info("Shutting down...")
    if db_session is not None:
        db_session.close()


app = FastAPI(title="Stack Dialog", lifespan=lifespan)

app.include_router(health_router)
app.include_router(conversation_router)
