"""대화 엔진 에러 종류

에러 코드 + 메시지 템플릿 표를 열거형으로 두고, 템플릿에 들어갈 값은
예외의 params에 구조화된 형태로 보관한다.
"""

from enum import Enum
from typing import Any


class ErrorKind(Enum):
    """(code, message template)"""

    # run_dialog 헬퍼
    MISSING_DIALOG = (-130000, "run_dialog(): missing dialog")
    MISSING_CONTEXT = (-130001, "run_dialog(): missing context")
    MISSING_CONTEXT_ACTIVITY = (-130002, "run_dialog(): missing context.activity")
    MISSING_ACCESSOR = (-130003, "run_dialog(): missing accessor")

    # DialogManager
    ROOT_DIALOG_NOT_CONFIGURED = (
        -130004,
        "DialogManager.on_turn: the 'root_dialog' has not been configured.",
    )
    CONVERSATION_STATE_NOT_CONFIGURED = (
        -130005,
        "DialogManager.on_turn: the 'conversation_state' has not been configured.",
    )

    # DialogSet
    INVALID_DIALOG_BEING_ADDED = (-130016, "DialogSet.add(): Invalid dialog being added.")
    DIALOG_SET_NOT_BOUND = (
        -130017,
        "DialogSet.create_context(): the dialog set was not bound to a state property when constructed.",
    )

    # Dialog
    ON_COMPUTE_ID_NOT_IMPLEMENTED = (-130020, "Dialog.on_compute_id(): not implemented.")

    # WaterfallDialog
    WATERFALL_STEP_ERROR = (-130028, "WaterfallDialog: error in step {step_index}.")
    STEP_ALREADY_ADVANCED = (
        -130029,
        "WaterfallStepContext.next(): method already called for dialog and step '{dialog_id}[{step_index}]'.",
    )

    # DialogContext
    DIALOG_NOT_FOUND = (
        -130030,
        "DialogContext.{operation}(): A dialog with an id of '{dialog_id}' wasn't found.",
    )

    @property
    def code(self) -> int:
        return self.value[0]

    @property
    def template(self) -> str:
        return self.value[1]


class DialogError(Exception):
    """설정/프로그래밍 오류. 발생 지점에서 즉시 raise, 재시도 없음."""

    def __init__(self, kind: ErrorKind, **params: Any) -> None:
        self.kind = kind
        self.params = params
        super().__init__(kind.template.format(**params))

    @property
    def code(self) -> int:
        return self.kind.code


class WaterfallStepError(DialogError):
    """워터폴 스텝 실행 중 예외. 원래 예외는 __cause__에 연결된다."""

    def __init__(self, step_index: int, dialog_id: str) -> None:
        super().__init__(ErrorKind.WATERFALL_STEP_ERROR, step_index=step_index)
        self.step_index = step_index
        self.dialog_id = dialog_id
