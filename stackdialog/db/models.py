"""SQLAlchemy declarative base for all ORM models."""

from datetime import datetime

from sqlalchemy import DateTime, Integer, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.types import JSON


class Base(DeclarativeBase):
    """Base class for all database models."""


class StateRecordModel(Base):
    """ORM model for persisted conversation state.

    key 1개 = 대화 1개 ({channel_id}/conversations/{conversation_id}).
    data는 ConversationState가 만든 JSON 객체 ({"DialogState": {"dialogStack": [...]}}).
    """

    __tablename__ = "state_records"

    key: Mapped[str] = mapped_column(String, primary_key=True)
    data: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    # 쓰기마다 1 증가
    etag: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
