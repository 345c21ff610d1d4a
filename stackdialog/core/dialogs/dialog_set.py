"""DialogSet - 대화 정의 레지스트리"""

from __future__ import annotations

import logging
from typing import Optional

from stackdialog.core.dialogs.dialog import Dialog
from stackdialog.core.dialogs.dialog_context import DialogContext
from stackdialog.core.dialogs.errors import DialogError, ErrorKind
from stackdialog.core.dialogs.models import DialogState
from stackdialog.core.state import StatePropertyAccessor
from stackdialog.core.turn_context import TurnContext

logger = logging.getLogger(__name__)


class DialogSet:
    """id → Dialog 등록부.

    상태 접근자에 바인딩된 세트만 create_context로 턴 컨텍스트를 만들 수 있다.
    ComponentDialog 내부 세트는 바인딩 없이 쓰인다.
    """

    def __init__(self, dialog_state: Optional[StatePropertyAccessor] = None) -> None:
        self._dialogs: dict[str, Dialog] = {}
        self._dialog_state = dialog_state

    def add(self, dialog: Dialog) -> "DialogSet":
        if not isinstance(dialog, Dialog):
            raise DialogError(ErrorKind.INVALID_DIALOG_BEING_ADDED)

        existing = self._dialogs.get(dialog.id)
        if existing is dialog:
            return self

        if existing is not None:
            # id 충돌: 숫자 접미사로 회피
            suffix = 2
            while f"{dialog.id}{suffix}" in self._dialogs:
                suffix += 1
            new_id = f"{dialog.id}{suffix}"
            logger.warning("Dialog id collision: %s → %s", dialog.id, new_id)
            dialog.id = new_id

        self._dialogs[dialog.id] = dialog
        logger.debug("DialogSet 등록: %s", dialog.id)
        return self

    def find(self, dialog_id: str) -> Optional[Dialog]:
        return self._dialogs.get(dialog_id)

    def get_dialogs(self) -> list[Dialog]:
        return list(self._dialogs.values())

    def __contains__(self, dialog_id: str) -> bool:
        return dialog_id in self._dialogs

    def __len__(self) -> int:
        return len(self._dialogs)

    def create_context(self, context: TurnContext) -> DialogContext:
        """바인딩된 접근자에서 DialogState를 읽어 DialogContext 생성"""
        if self._dialog_state is None:
            raise DialogError(ErrorKind.DIALOG_SET_NOT_BOUND)

        raw = self._dialog_state.get(context, DialogState)
        state = DialogState.from_raw(raw)
        if state is not raw:
            self._dialog_state.set(context, state)

        return DialogContext(self, context, state)
