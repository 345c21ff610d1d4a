"""Dialog 인터페이스

모든 대화(워터폴, 컴포넌트, 프롬프트, 사용자 정의)가 구현하는 능력 집합:
begin / continue / resume / reprompt / end.
대화 id는 DialogSet 레지스트리 키이자 영속 프레임의 식별자다.

규칙:
- 대화 정의는 프로세스 시작 시 한 번 만들어지고 이후 불변
- 턴 간 상태는 오직 DialogContext가 준 프레임(DialogInstance.state)에만 둔다
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Optional

from stackdialog.core.dialogs.errors import DialogError, ErrorKind
from stackdialog.core.dialogs.models import (
    DialogEvent,
    DialogInstance,
    DialogReason,
    DialogTurnResult,
)
from stackdialog.core.turn_context import TurnContext

if TYPE_CHECKING:
    from stackdialog.core.dialogs.dialog_context import DialogContext


class Dialog(ABC):
    """대화 정의 기반 클래스"""

    def __init__(self, dialog_id: Optional[str] = None) -> None:
        self._id = dialog_id

    @property
    def id(self) -> str:
        if self._id is None:
            self._id = self.on_compute_id()
        return self._id

    @id.setter
    def id(self, value: str) -> None:
        self._id = value

    @abstractmethod
    def begin_dialog(
        self, dc: "DialogContext", options: Any = None
    ) -> DialogTurnResult:
        """스택에 막 push된 프레임에서 호출된다."""
        ...

    def continue_dialog(self, dc: "DialogContext") -> DialogTurnResult:
        """최상단 프레임에 새 입력이 도착. 기본: 그대로 종료."""
        return dc.end_dialog()

    def resume_dialog(
        self, dc: "DialogContext", reason: DialogReason, result: Any = None
    ) -> DialogTurnResult:
        """자식 대화가 끝나 다시 최상단이 됨. 기본: 자식 결과로 종료."""
        return dc.end_dialog(result)

    def reprompt_dialog(self, context: TurnContext, instance: DialogInstance) -> None:
        """질문 재표시. 기본: 없음."""

    def end_dialog(
        self, context: TurnContext, instance: DialogInstance, reason: DialogReason
    ) -> None:
        """프레임이 pop되기 직전 정리 훅. 기본: 없음."""

    def on_dialog_event(self, dc: "DialogContext", event: DialogEvent) -> bool:
        """이벤트 처리. pre-bubble → 부모로 전파 → post-bubble 순."""
        handled = self.on_pre_bubble_event(dc, event)

        if not handled and event.bubble and dc.parent is not None:
            handled = dc.parent.emit_event(event.name, event.value, True, False)

        if not handled:
            handled = self.on_post_bubble_event(dc, event)

        return handled

    def on_pre_bubble_event(self, dc: "DialogContext", event: DialogEvent) -> bool:
        return False

    def on_post_bubble_event(self, dc: "DialogContext", event: DialogEvent) -> bool:
        return False

    def on_compute_id(self) -> str:
        raise DialogError(ErrorKind.ON_COMPUTE_ID_NOT_IMPLEMENTED)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self._id!r})"


class DialogContainer(Dialog):
    """자체 내부 스택을 가진 대화 (ComponentDialog)"""

    @abstractmethod
    def create_child_context(self, dc: "DialogContext") -> Optional["DialogContext"]:
        """활성 프레임에 저장된 내부 스택의 DialogContext. 프레임이 없으면 None."""
        ...
