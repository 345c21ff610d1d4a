"""API request/response schemas."""

from typing import Any, Optional

from pydantic import BaseModel, Field


# === Request Schemas ===


class ActivityRequest(BaseModel):
    """인바운드 메시지 1건"""

    text: Optional[str] = Field(None, description="사용자 발화")
    value: Any = Field(None, description="카드 버튼 등에서 온 구조화 값")
    channel_id: str = Field("test", min_length=1, description="채널 ID")
    locale: Optional[str] = Field(None, description="예: en-us")
    type: str = Field("message", description="Activity 타입")


# === Response Schemas ===


class ReplyInfo(BaseModel):
    """봇 응답 메시지"""

    text: Optional[str] = None
    speak: Optional[str] = None
    input_hint: Optional[str] = None
    suggested_actions: list[str] = []
    attachments: list[dict[str, Any]] = []


class TurnResponse(BaseModel):
    """턴 실행 결과"""

    conversation_id: str
    status: str = Field(..., description="empty | waiting | complete | cancelled")
    replies: list[ReplyInfo] = []
    result: Any = None


class ErrorResponse(BaseModel):
    """에러 응답"""

    error: str
    code: Optional[int] = None
