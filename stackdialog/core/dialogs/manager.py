"""DialogManager / run_dialog - 턴 단위 실행 진입점

한 턴의 흐름:
    1. ConversationState 로드
    2. DialogSet.create_context
    3. continue_dialog → 스택이 비어 있으면(EMPTY) 루트 대화 begin
    4. 상태 저장
"""

import logging
from typing import Optional

from stackdialog.core.dialogs.dialog import Dialog
from stackdialog.core.dialogs.dialog_set import DialogSet
from stackdialog.core.dialogs.errors import DialogError, ErrorKind
from stackdialog.core.dialogs.models import DialogTurnResult, DialogTurnStatus
from stackdialog.core.state import ConversationState, StatePropertyAccessor
from stackdialog.core.turn_context import TurnContext

logger = logging.getLogger(__name__)

DEFAULT_STATE_PROPERTY = "DialogState"


def run_dialog(
    dialog: Optional[Dialog],
    context: Optional[TurnContext],
    accessor: Optional[StatePropertyAccessor],
) -> DialogTurnResult:
    """대화 1개를 루트로 한 턴 실행. 상태 저장은 호출자 책임."""
    if dialog is None:
        raise DialogError(ErrorKind.MISSING_DIALOG)
    if context is None:
        raise DialogError(ErrorKind.MISSING_CONTEXT)
    if context.activity is None:
        raise DialogError(ErrorKind.MISSING_CONTEXT_ACTIVITY)
    if accessor is None:
        raise DialogError(ErrorKind.MISSING_ACCESSOR)

    dialog_set = DialogSet(accessor)
    dialog_set.add(dialog)

    dc = dialog_set.create_context(context)
    result = dc.continue_dialog()
    if result.status == DialogTurnStatus.EMPTY:
        result = dc.begin_dialog(dialog.id)
    return result


class DialogManager:
    """루트 대화 + 대화 상태를 묶어 턴을 실행한다"""

    def __init__(
        self,
        conversation_state: Optional[ConversationState] = None,
        root_dialog: Optional[Dialog] = None,
        state_property: str = DEFAULT_STATE_PROPERTY,
    ) -> None:
        self.conversation_state = conversation_state
        self.root_dialog = root_dialog
        self.state_property = state_property

    def on_turn(self, context: TurnContext) -> DialogTurnResult:
        if self.conversation_state is None:
            raise DialogError(ErrorKind.CONVERSATION_STATE_NOT_CONFIGURED)
        if self.root_dialog is None:
            raise DialogError(ErrorKind.ROOT_DIALOG_NOT_CONFIGURED)

        self.conversation_state.load(context)
        accessor = self.conversation_state.create_property(self.state_property)

        result = run_dialog(self.root_dialog, context, accessor)
        logger.info(
            "Turn finished: conversation=%s status=%s",
            context.activity.conversation.id,
            result.status.value,
        )

        # 예외가 나면 저장하지 않는다 (직전 턴 상태 유지)
        self.conversation_state.save_changes(context)
        return result
