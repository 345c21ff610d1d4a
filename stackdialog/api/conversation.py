"""Conversation API endpoints."""

import dataclasses

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel

from stackdialog.api.schemas import ActivityRequest, ErrorResponse, ReplyInfo, TurnResponse
from stackdialog.core.activity import Activity
from stackdialog.core.dialogs import DialogError
from stackdialog.core.logging import get_logger
from stackdialog.services.conversation_service import ConversationService

logger = get_logger(__name__)

router = APIRouter(prefix="/conversations", tags=["conversations"])


def get_conversation_service(request: Request) -> ConversationService:
    """ConversationService 인스턴스 반환 (의존성 주입)"""
    service: ConversationService = request.app.state.conversation_service
    return service


def _build_reply_info(activity: Activity) -> ReplyInfo:
    """Activity를 ReplyInfo로 변환"""
    actions = []
    if activity.suggested_actions is not None:
        actions = [a.title or str(a.value) for a in activity.suggested_actions.actions]
    return ReplyInfo(
        text=activity.text,
        speak=activity.speak,
        input_hint=activity.input_hint,
        suggested_actions=actions,
        attachments=[a.model_dump() for a in activity.attachments],
    )


def _jsonable_result(result):
    """대화 결과값 (dataclass / pydantic 포함)을 응답용으로 변환"""
    if isinstance(result, BaseModel):
        return result.model_dump(mode="json")
    if dataclasses.is_dataclass(result) and not isinstance(result, type):
        return dataclasses.asdict(result)
    return result


@router.post(
    "/{conversation_id}/activities",
    response_model=TurnResponse,
    responses={500: {"model": ErrorResponse}},
)
def post_activity(
    conversation_id: str,
    request: ActivityRequest,
    service: ConversationService = Depends(get_conversation_service),
) -> TurnResponse:
    """메시지 1건 처리 → 봇 응답"""
    try:
        outcome = service.process_activity(
            conversation_id,
            text=request.text,
            value=request.value,
            channel_id=request.channel_id,
            locale=request.locale,
            activity_type=request.type,
        )
    except DialogError as e:
        logger.error("Dialog error in %s: [%d] %s", conversation_id, e.code, e)
        raise HTTPException(
            status_code=500,
            detail=ErrorResponse(error=str(e), code=e.code).model_dump(),
        )

    return TurnResponse(
        conversation_id=conversation_id,
        status=outcome.status.value,
        replies=[_build_reply_info(a) for a in outcome.replies],
        result=_jsonable_result(outcome.result),
    )


@router.delete("/{conversation_id}")
def delete_conversation(
    conversation_id: str,
    channel_id: str = "test",
    service: ConversationService = Depends(get_conversation_service),
) -> dict[str, str]:
    """대화 상태 삭제"""
    service.reset(conversation_id, channel_id)
    return {"status": "deleted", "conversation_id": conversation_id}
