"""대화 스택 도메인 모델

DialogState는 영속되는 유일한 구조다: {"dialogStack": [{"id": ..., "state": {...}}]}.
스택의 0번이 최상단(활성) 프레임.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)


class DialogTurnStatus(str, Enum):
    EMPTY = "empty"
    WAITING = "waiting"
    COMPLETE = "complete"
    CANCELLED = "cancelled"


class DialogReason(str, Enum):
    BEGIN_CALLED = "beginCalled"
    CONTINUE_CALLED = "continueCalled"
    END_CALLED = "endCalled"
    REPLACE_CALLED = "replaceCalled"
    CANCEL_CALLED = "cancelCalled"
    NEXT_CALLED = "nextCalled"


class DialogEvents:
    """대화 이벤트 이름 상수"""

    BEGIN_DIALOG = "beginDialog"
    REPROMPT_DIALOG = "repromptDialog"
    CANCEL_DIALOG = "cancelDialog"
    ACTIVITY_RECEIVED = "activityReceived"
    ERROR = "error"


@dataclass(frozen=True)
class DialogTurnResult:
    status: DialogTurnStatus
    result: Any = None


@dataclass
class DialogEvent:
    name: str
    value: Any = None
    bubble: bool = True


class DialogInstance(BaseModel):
    """스택 프레임 1개. state는 해당 대화 전용 스크래치 메모리."""

    id: str
    state: dict[str, Any] = Field(default_factory=dict)


class DialogState(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    dialog_stack: list[DialogInstance] = Field(
        default_factory=list, alias="dialogStack"
    )

    @classmethod
    def from_raw(cls, raw: Any) -> "DialogState":
        """저장소에서 읽은 값을 DialogState로 보정.

        dialogStack이 없거나 형식이 깨졌으면 빈 스택으로 대체하고,
        잘못된 프레임은 버린다.
        """
        if isinstance(raw, DialogState):
            return raw
        if raw is None:
            return cls()
        if not isinstance(raw, dict):
            logger.warning("DialogState is not an object, using empty stack")
            return cls()

        stack = raw.get("dialogStack", raw.get("dialog_stack"))
        if not isinstance(stack, list):
            if stack is not None or raw:
                logger.warning("DialogState.dialogStack malformed, using empty stack")
            return cls()

        frames: list[DialogInstance] = []
        for entry in stack:
            frame = _to_instance(entry)
            if frame is None:
                logger.warning("Dropping malformed dialog frame: %r", entry)
                continue
            frames.append(frame)
        return cls(dialog_stack=frames)


def _to_instance(entry: Any) -> Optional[DialogInstance]:
    if isinstance(entry, DialogInstance):
        return entry
    if not isinstance(entry, dict):
        return None
    dialog_id = entry.get("id")
    state = entry.get("state", {})
    if not isinstance(dialog_id, str) or not dialog_id:
        return None
    if state is None:
        state = {}
    if not isinstance(state, dict):
        return None
    return DialogInstance(id=dialog_id, state=state)


END_OF_TURN = DialogTurnResult(status=DialogTurnStatus.WAITING)
