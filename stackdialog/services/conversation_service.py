"""Conversation Service - 턴 루프를 Storage와 연결

1턴 = 인바운드 Activity 1개:
    TurnContext 생성 → DialogManager.on_turn (상태 로드 → 실행 → 저장) → 응답 수집
"""

from dataclasses import dataclass, field
from typing import Any, Optional

from stackdialog.core.activity import Activity, ActivityTypes, Channels, ConversationAccount
from stackdialog.core.dialogs import Dialog, DialogManager, DialogTurnStatus
from stackdialog.core.logging import get_logger
from stackdialog.core.state import ConversationState
from stackdialog.core.storage import Storage
from stackdialog.core.turn_context import TurnContext

logger = get_logger(__name__)


@dataclass
class TurnOutcome:
    """턴 1회 결과"""

    status: DialogTurnStatus
    replies: list[Activity] = field(default_factory=list)
    result: Any = None


class ConversationService:
    """대화별 턴 실행/초기화"""

    def __init__(
        self,
        storage: Storage,
        root_dialog: Dialog,
        state_property: str = "DialogState",
    ) -> None:
        self._conversation_state = ConversationState(storage)
        self._manager = DialogManager(
            self._conversation_state, root_dialog, state_property
        )

    def process_activity(
        self,
        conversation_id: str,
        text: Optional[str] = None,
        value: Any = None,
        channel_id: str = Channels.TEST,
        locale: Optional[str] = None,
        activity_type: str = ActivityTypes.MESSAGE.value,
    ) -> TurnOutcome:
        activity = Activity(
            type=activity_type,
            text=text,
            value=value,
            channel_id=channel_id,
            locale=locale,
            conversation=ConversationAccount(id=conversation_id),
        )
        context = TurnContext(activity)
        logger.info("Turn start: %s/%s", channel_id, conversation_id)

        turn_result = self._manager.on_turn(context)
        return TurnOutcome(
            status=turn_result.status,
            replies=list(context.sent_activities),
            result=turn_result.result,
        )

    def reset(self, conversation_id: str, channel_id: str = Channels.TEST) -> None:
        """대화 상태 삭제. 다음 턴은 루트 대화를 처음부터 시작한다."""
        activity = Activity(
            channel_id=channel_id,
            conversation=ConversationAccount(id=conversation_id),
        )
        self._conversation_state.delete(TurnContext(activity))
        logger.info("Conversation reset: %s/%s", channel_id, conversation_id)
