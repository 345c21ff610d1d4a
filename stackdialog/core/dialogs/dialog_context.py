"""DialogContext - 대화 스택 조작 프로토콜

한 턴 동안 DialogState 1개를 독점 소유한다. 스택 0번이 최상단.

불변식:
- begin_dialog는 프레임을 정확히 1개 push
- end_dialog는 정확히 1개 pop 후, 남은 최상단의 resume_dialog 호출.
  스택이 비면 COMPLETE
- continue_dialog/resume_dialog는 최상단 프레임만 받는다
- replace_dialog는 (완료 신호 없이) pop + push, 깊이 유지
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Optional, Sequence, Union

from stackdialog.core.activity import Activity
from stackdialog.core.choices.choice_factory import to_choices
from stackdialog.core.choices.models import ChoiceLike
from stackdialog.core.dialogs.dialog import Dialog, DialogContainer
from stackdialog.core.dialogs.errors import DialogError, ErrorKind
from stackdialog.core.dialogs.models import (
    DialogEvent,
    DialogEvents,
    DialogInstance,
    DialogReason,
    DialogState,
    DialogTurnResult,
    DialogTurnStatus,
)
from stackdialog.core.dialogs.prompts.options import PromptOptions
from stackdialog.core.turn_context import TurnContext

if TYPE_CHECKING:
    from stackdialog.core.dialogs.dialog_set import DialogSet

logger = logging.getLogger(__name__)


class DialogContext:
    """대화 스택 1개에 대한 턴 범위 뷰"""

    def __init__(
        self,
        dialogs: "DialogSet",
        context: TurnContext,
        state: DialogState,
        parent: Optional["DialogContext"] = None,
    ) -> None:
        self.dialogs = dialogs
        self.context = context
        self.state = state
        self.parent = parent

    @property
    def stack(self) -> list[DialogInstance]:
        return self.state.dialog_stack

    @property
    def active_dialog(self) -> Optional[DialogInstance]:
        return self.stack[0] if self.stack else None

    @property
    def child(self) -> Optional["DialogContext"]:
        """활성 대화가 컨테이너면 그 내부 스택의 컨텍스트"""
        instance = self.active_dialog
        if instance is None:
            return None
        dialog = self.find_dialog(instance.id)
        if isinstance(dialog, DialogContainer):
            return dialog.create_child_context(self)
        return None

    def find_dialog(self, dialog_id: str) -> Optional[Dialog]:
        """자기 세트에서 찾고, 없으면 부모 컨텍스트로 올라간다"""
        dialog = self.dialogs.find(dialog_id)
        if dialog is None and self.parent is not None:
            dialog = self.parent.find_dialog(dialog_id)
        return dialog

    def _require_dialog(self, dialog_id: str, operation: str) -> Dialog:
        dialog = self.find_dialog(dialog_id)
        if dialog is None:
            raise DialogError(
                ErrorKind.DIALOG_NOT_FOUND, operation=operation, dialog_id=dialog_id
            )
        return dialog

    # === 스택 조작 ===

    def begin_dialog(self, dialog_id: str, options: Any = None) -> DialogTurnResult:
        dialog = self._require_dialog(dialog_id, "begin_dialog")

        state: dict[str, Any] = {}
        if options is not None:
            state["options"] = options
        self.stack.insert(0, DialogInstance(id=dialog_id, state=state))
        logger.debug("push %s (depth=%d)", dialog_id, len(self.stack))

        return dialog.begin_dialog(self, options)

    def prompt(
        self,
        dialog_id: str,
        prompt_or_options: Union[str, Activity, PromptOptions, dict, None],
        choices: Optional[Sequence[ChoiceLike]] = None,
    ) -> DialogTurnResult:
        """프롬프트 대화 시작 헬퍼. 문자열/Activity는 PromptOptions.prompt가 된다."""
        if isinstance(prompt_or_options, (str, Activity)):
            options = PromptOptions(prompt=prompt_or_options)
        elif isinstance(prompt_or_options, PromptOptions):
            options = prompt_or_options.model_copy()
        elif isinstance(prompt_or_options, dict):
            options = PromptOptions.model_validate(prompt_or_options)
        else:
            options = PromptOptions()

        if choices is not None:
            options.choices = to_choices(choices)

        return self.begin_dialog(dialog_id, options)

    def continue_dialog(self) -> DialogTurnResult:
        instance = self.active_dialog
        if instance is None:
            return DialogTurnResult(status=DialogTurnStatus.EMPTY)

        dialog = self._require_dialog(instance.id, "continue_dialog")
        return dialog.continue_dialog(self)

    def end_dialog(self, result: Any = None) -> DialogTurnResult:
        self._end_active_dialog(DialogReason.END_CALLED)

        instance = self.active_dialog
        if instance is not None:
            dialog = self._require_dialog(instance.id, "end_dialog")
            return dialog.resume_dialog(self, DialogReason.END_CALLED, result)

        return DialogTurnResult(status=DialogTurnStatus.COMPLETE, result=result)

    def replace_dialog(self, dialog_id: str, options: Any = None) -> DialogTurnResult:
        self._require_dialog(dialog_id, "replace_dialog")
        self._end_active_dialog(DialogReason.REPLACE_CALLED)
        return self.begin_dialog(dialog_id, options)

    def cancel_all_dialogs(
        self,
        cancel_parents: bool = False,
        event_name: Optional[str] = None,
        event_value: Any = None,
    ) -> DialogTurnResult:
        """모든 프레임을 pop. cancel_parents면 부모 스택까지.

        부모 스택으로 올라간 뒤에는 각 스택의 활성 대화가 취소 이벤트를
        가로챌(handled) 수 있다.
        """
        if not self.stack and self.parent is None:
            return DialogTurnResult(status=DialogTurnStatus.EMPTY)

        event_name = event_name or DialogEvents.CANCEL_DIALOG
        notify = False
        dc: Optional[DialogContext] = self
        while dc is not None:
            if dc.stack:
                if notify and dc.emit_event(event_name, event_value, False, False):
                    break
                dc._end_active_dialog(DialogReason.CANCEL_CALLED)
            else:
                dc = dc.parent if cancel_parents else None
            notify = True

        logger.debug("cancel_all_dialogs (cancel_parents=%s)", cancel_parents)
        return DialogTurnResult(status=DialogTurnStatus.CANCELLED)

    def reprompt_dialog(self) -> None:
        instance = self.active_dialog
        if instance is None:
            return
        if self.emit_event(DialogEvents.REPROMPT_DIALOG, None, False, False):
            return
        dialog = self.find_dialog(instance.id)
        if dialog is not None:
            dialog.reprompt_dialog(self.context, instance)

    def emit_event(
        self,
        name: str,
        value: Any = None,
        bubble: bool = True,
        from_leaf: bool = False,
    ) -> bool:
        """활성 대화에 이벤트 전달. from_leaf면 가장 안쪽 컨텍스트부터."""
        dc: DialogContext = self
        if from_leaf:
            child = dc.child
            while child is not None:
                dc = child
                child = dc.child

        instance = dc.active_dialog
        if instance is None:
            return False
        dialog = dc.find_dialog(instance.id)
        if dialog is None:
            return False
        return dialog.on_dialog_event(dc, DialogEvent(name=name, value=value, bubble=bubble))

    def _end_active_dialog(self, reason: DialogReason) -> None:
        instance = self.active_dialog
        if instance is None:
            return

        dialog = self.find_dialog(instance.id)
        if dialog is not None:
            dialog.end_dialog(self.context, instance, reason)

        self.stack.pop(0)
        logger.debug(
            "pop %s (reason=%s, depth=%d)", instance.id, reason.value, len(self.stack)
        )
