"""ComponentDialog - 내부 스택을 가진 대화

내부 DialogSet의 스택은 바깥 프레임 1개의 state["dialogs"]에 저장된다.
바깥 호출자는 내부 중첩 깊이와 무관하게 프레임 1개만 본다.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from stackdialog.core.dialogs.dialog import Dialog, DialogContainer
from stackdialog.core.dialogs.dialog_context import DialogContext
from stackdialog.core.dialogs.dialog_set import DialogSet
from stackdialog.core.dialogs.models import (
    END_OF_TURN,
    DialogInstance,
    DialogReason,
    DialogState,
    DialogTurnResult,
    DialogTurnStatus,
)
from stackdialog.core.turn_context import TurnContext

logger = logging.getLogger(__name__)

PERSISTED_DIALOG_STATE = "dialogs"


def _inner_state(instance: DialogInstance) -> DialogState:
    """프레임에 저장된 내부 스택을 DialogState로 보정해 되돌려 놓는다"""
    state = DialogState.from_raw(instance.state.get(PERSISTED_DIALOG_STATE))
    instance.state[PERSISTED_DIALOG_STATE] = state
    return state


class ComponentDialog(DialogContainer):
    """재사용 가능한 대화 묶음.

    사용 패턴:
        class ProfileDialog(ComponentDialog):
            def __init__(self):
                super().__init__("profile")
                self.add_dialog(TextPrompt("name_prompt"))
                self.add_dialog(WaterfallDialog("main", [self.ask_name, self.done]))
                self.initial_dialog_id = "main"
    """

    def __init__(self, dialog_id: Optional[str] = None) -> None:
        super().__init__(dialog_id)
        self.dialogs = DialogSet()
        self.initial_dialog_id: Optional[str] = None

    def add_dialog(self, dialog: Dialog) -> "ComponentDialog":
        """내부 대화 등록. 처음 등록한 대화가 기본 시작 대화가 된다."""
        self.dialogs.add(dialog)
        if self.initial_dialog_id is None:
            self.initial_dialog_id = dialog.id
        return self

    def find_dialog(self, dialog_id: str) -> Optional[Dialog]:
        return self.dialogs.find(dialog_id)

    def create_child_context(self, dc: DialogContext) -> Optional[DialogContext]:
        instance = dc.active_dialog
        if instance is None:
            return None
        return DialogContext(self.dialogs, dc.context, _inner_state(instance), dc)

    # === 바깥 스택 인터페이스 ===

    def begin_dialog(self, dc: DialogContext, options: Any = None) -> DialogTurnResult:
        inner_dc = self.create_child_context(dc)
        turn_result = self.on_begin_dialog(inner_dc, options)

        if turn_result.status != DialogTurnStatus.WAITING:
            return self._finish(dc, turn_result)
        return END_OF_TURN

    def continue_dialog(self, dc: DialogContext) -> DialogTurnResult:
        inner_dc = self.create_child_context(dc)
        turn_result = self.on_continue_dialog(inner_dc)

        if turn_result.status != DialogTurnStatus.WAITING:
            return self._finish(dc, turn_result)
        return END_OF_TURN

    def resume_dialog(
        self, dc: DialogContext, reason: DialogReason, result: Any = None
    ) -> DialogTurnResult:
        # 내부 대화가 바깥 스택에 자식을 push한 경우에만 도달한다.
        # 내부 활성 대화에게 질문을 다시 표시하게 하고 대기.
        self.reprompt_dialog(dc.context, dc.active_dialog)
        return END_OF_TURN

    def reprompt_dialog(self, context: TurnContext, instance: DialogInstance) -> None:
        inner_dc = DialogContext(self.dialogs, context, _inner_state(instance))
        inner_dc.reprompt_dialog()
        self.on_reprompt_dialog(context, instance)

    def end_dialog(
        self, context: TurnContext, instance: DialogInstance, reason: DialogReason
    ) -> None:
        if reason == DialogReason.CANCEL_CALLED:
            inner_dc = DialogContext(self.dialogs, context, _inner_state(instance))
            inner_dc.cancel_all_dialogs()
        self.on_end_dialog(context, instance, reason)

    # === 서브클래스 확장 지점 ===

    def on_begin_dialog(self, inner_dc: DialogContext, options: Any) -> DialogTurnResult:
        return inner_dc.begin_dialog(self.initial_dialog_id, options)

    def on_continue_dialog(self, inner_dc: DialogContext) -> DialogTurnResult:
        return inner_dc.continue_dialog()

    def on_reprompt_dialog(self, context: TurnContext, instance: DialogInstance) -> None:
        pass

    def on_end_dialog(
        self, context: TurnContext, instance: DialogInstance, reason: DialogReason
    ) -> None:
        pass

    def end_component(self, outer_dc: DialogContext, result: Any) -> DialogTurnResult:
        return outer_dc.end_dialog(result)

    def _finish(self, dc: DialogContext, turn_result: DialogTurnResult) -> DialogTurnResult:
        active = dc.active_dialog
        if active is None or active.id != self.id:
            # cancel_parents 취소로 바깥 스택에서 이미 빠졌다. 남은 대화가 취소를 가로챘으면 대기.
            if dc.stack:
                return END_OF_TURN
            return DialogTurnResult(
                status=DialogTurnStatus.CANCELLED, result=turn_result.result
            )

        ended = self.end_component(dc, turn_result.result)
        # 바깥 스택까지 모두 끝났을 때만 취소를 그대로 알린다. 부모가 재개되어 대기 중이면 그 결과.
        if (
            turn_result.status == DialogTurnStatus.CANCELLED
            and ended.status == DialogTurnStatus.COMPLETE
        ):
            logger.debug("ComponentDialog %s: inner stack cancelled", self.id)
            return DialogTurnResult(
                status=DialogTurnStatus.CANCELLED, result=turn_result.result
            )
        logger.debug("ComponentDialog %s: inner stack ended (%s)", self.id, turn_result.status)
        return ended
