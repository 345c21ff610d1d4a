"""Shared test fixtures."""

from typing import Callable, Optional

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from stackdialog.api.conversation import router as conversation_router
from stackdialog.api.health import router as health_router
from stackdialog.core.activity import Activity
from stackdialog.core.dialogs import DialogContext, DialogSet, DialogTurnResult
from stackdialog.core.state import ConversationState
from stackdialog.core.storage import MemoryStorage, Storage
from stackdialog.core.turn_context import TurnContext
from stackdialog.db.database import get_db
from stackdialog.db.models import Base
from stackdialog.db.storage import SqlStorage
from stackdialog.services.conversation_service import ConversationService
from stackdialog.services.sample_dialogs import UserProfileDialog

STATE_KEY = "test/conversations/conversation"


class DialogHarness:
    """대화 1개를 여러 턴에 걸쳐 실행하는 테스트 도우미.

    턴마다 새 TurnContext를 만들고 Storage에서 상태를 다시 읽으므로
    모든 다중 턴 테스트가 직렬화 왕복을 거친다.
    """

    def __init__(self, storage: Optional[Storage] = None) -> None:
        self.storage = storage or MemoryStorage()
        self.conversation_state = ConversationState(self.storage)
        self.dialog_state = self.conversation_state.create_property("DialogState")
        self.dialogs = DialogSet(self.dialog_state)

    def turn(
        self,
        logic: Callable[[DialogContext], DialogTurnResult],
        text: Optional[str] = None,
        activity: Optional[Activity] = None,
    ) -> tuple[TurnContext, DialogTurnResult]:
        context = TurnContext(activity or Activity(text=text))
        self.conversation_state.load(context)
        dc = self.dialogs.create_context(context)
        result = logic(dc)
        self.conversation_state.save_changes(context)
        return context, result

    def stored_stack(self) -> list[dict]:
        items = self.storage.read([STATE_KEY])
        if STATE_KEY not in items:
            return []
        return items[STATE_KEY]["DialogState"]["dialogStack"]


@pytest.fixture()
def harness() -> DialogHarness:
    return DialogHarness()


@pytest.fixture()
def db_engine():
    """인메모리 SQLite (커넥션 1개 공유)"""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def db_session(db_engine) -> Session:
    """Raw database session for direct DB assertions."""
    session = sessionmaker(bind=db_engine, autocommit=False, autoflush=False)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def client(db_engine, db_session) -> TestClient:
    """FastAPI TestClient wired to an in-memory SQLite database."""
    test_session = sessionmaker(bind=db_engine, autocommit=False, autoflush=False)

    def _override_get_db():
        db = test_session()
        try:
            yield db
        finally:
            db.close()

    app = FastAPI()
    app.include_router(health_router)
    app.include_router(conversation_router)
    app.dependency_overrides[get_db] = _override_get_db
    app.state.conversation_service = ConversationService(
        SqlStorage(db_session), UserProfileDialog()
    )

    with TestClient(app) as tc:
        yield tc
