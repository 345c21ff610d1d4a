"""WaterfallDialog - 순서 있는 스텝 대화

프레임 state: {"stepIndex": int, "options": ..., "values": {...}}

- begin: stepIndex=0, 0번 스텝 실행
- continue (자식 없이 원시 입력 도착): 현재 스텝 재실행 (result = 입력 텍스트)
- resume (자식 대화 완료): stepIndex+1 스텝을 자식 결과로 실행
- 마지막 스텝을 지나면 마지막 값으로 자동 종료
- 스텝 예외는 스텝 인덱스를 붙여 WaterfallStepError로 다시 raise (재시도 없음)
"""

from __future__ import annotations

import logging
import uuid
from typing import Any, Callable, Optional, Sequence

from stackdialog.core.activity import ActivityTypes
from stackdialog.core.dialogs.dialog import Dialog
from stackdialog.core.dialogs.dialog_context import DialogContext
from stackdialog.core.dialogs.errors import DialogError, ErrorKind, WaterfallStepError
from stackdialog.core.dialogs.models import (
    END_OF_TURN,
    DialogReason,
    DialogTurnResult,
)

logger = logging.getLogger(__name__)

STEP_INDEX = "stepIndex"
OPTIONS = "options"
VALUES = "values"
INSTANCE_ID = "instanceId"

WaterfallStep = Callable[["WaterfallStepContext"], DialogTurnResult]


class WaterfallStepContext(DialogContext):
    """스텝 1회 호출 동안의 뷰. 부모 DialogContext와 같은 스택을 공유한다.

    스텝은 다음 중 정확히 하나로 끝나야 한다:
    - next(value): 다음 스텝으로 조용히 진행
    - prompt(...) / begin_dialog(...): 자식 대화 push 후 대기
    - end_dialog(value): 워터폴 전체 종료
    """

    def __init__(
        self,
        dc: DialogContext,
        dialog_id: str,
        index: int,
        options: Any,
        reason: DialogReason,
        result: Any,
        values: dict,
        on_next: Callable[[Any], DialogTurnResult],
    ) -> None:
        super().__init__(dc.dialogs, dc.context, dc.state, dc.parent)
        self._dialog_id = dialog_id
        self.index = index
        self.options = options
        self.reason = reason
        self.result = result
        self.values = values
        self._on_next = on_next
        self._next_called = False

    def next(self, result: Any = None) -> DialogTurnResult:
        if self._next_called:
            raise DialogError(
                ErrorKind.STEP_ALREADY_ADVANCED,
                dialog_id=self._dialog_id,
                step_index=self.index,
            )
        self._next_called = True
        return self._on_next(result)


class WaterfallDialog(Dialog):
    def __init__(
        self, dialog_id: str, steps: Optional[Sequence[WaterfallStep]] = None
    ) -> None:
        super().__init__(dialog_id)
        self._steps: list[WaterfallStep] = list(steps or [])

    @property
    def steps(self) -> list[WaterfallStep]:
        return list(self._steps)

    def add_step(self, step: WaterfallStep) -> "WaterfallDialog":
        self._steps.append(step)
        return self

    def begin_dialog(self, dc: DialogContext, options: Any = None) -> DialogTurnResult:
        state = dc.active_dialog.state
        state[OPTIONS] = options if options is not None else {}
        state[VALUES] = {INSTANCE_ID: str(uuid.uuid4())}
        return self._run_step(dc, 0, DialogReason.BEGIN_CALLED, None)

    def continue_dialog(self, dc: DialogContext) -> DialogTurnResult:
        if dc.context.activity.type != ActivityTypes.MESSAGE.value:
            return END_OF_TURN

        state = dc.active_dialog.state
        return self._run_step(
            dc,
            state.get(STEP_INDEX, 0),
            DialogReason.CONTINUE_CALLED,
            dc.context.activity.text,
        )

    def resume_dialog(
        self, dc: DialogContext, reason: DialogReason, result: Any = None
    ) -> DialogTurnResult:
        state = dc.active_dialog.state
        return self._run_step(dc, state.get(STEP_INDEX, -1) + 1, reason, result)

    def on_step(self, step_context: WaterfallStepContext) -> DialogTurnResult:
        """스텝 1개 실행. 예외는 스텝 인덱스를 붙여 다시 raise."""
        try:
            return self._steps[step_context.index](step_context)
        except WaterfallStepError:
            raise
        except Exception as err:
            logger.error(
                "WaterfallDialog %s: step %d raised %s",
                self.id,
                step_context.index,
                type(err).__name__,
            )
            raise WaterfallStepError(step_context.index, self.id) from err

    def _run_step(
        self, dc: DialogContext, index: int, reason: DialogReason, result: Any
    ) -> DialogTurnResult:
        if index >= len(self._steps):
            # 마지막 스텝 이후: 마지막 값으로 종료
            return dc.end_dialog(result)

        state = dc.active_dialog.state
        state[STEP_INDEX] = index
        logger.debug("WaterfallDialog %s: step %d (%s)", self.id, index, reason.value)

        step_context = WaterfallStepContext(
            dc,
            self.id,
            index=index,
            options=state.get(OPTIONS),
            reason=reason,
            result=result,
            values=state.setdefault(VALUES, {}),
            on_next=lambda step_result: self.resume_dialog(
                dc, DialogReason.NEXT_CALLED, step_result
            ),
        )
        return self.on_step(step_context)
