"""프롬프트 옵션/인식 결과/검증 컨텍스트"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Generic, Optional, TypeVar, Union

from pydantic import BaseModel

from stackdialog.core.activity import Activity
from stackdialog.core.choices.models import Choice
from stackdialog.core.turn_context import TurnContext

T = TypeVar("T")


class ListStyle(str, Enum):
    """선택지 표시 방식"""

    NONE = "none"
    AUTO = "auto"
    INLINE = "inline"
    LIST = "list"
    SUGGESTED_ACTION = "suggestedAction"
    HERO_CARD = "heroCard"


class PromptOptions(BaseModel):
    """프롬프트 시작 옵션. 프롬프트 프레임 state에 그대로 저장된다."""

    prompt: Optional[Union[str, Activity]] = None
    retry_prompt: Optional[Union[str, Activity]] = None
    choices: Optional[list[Choice]] = None
    style: Optional[ListStyle] = None
    validations: Any = None
    recognize_language: Optional[str] = None


@dataclass
class PromptRecognizerResult(Generic[T]):
    succeeded: bool = False
    value: Optional[T] = None


@dataclass
class PromptValidatorContext(Generic[T]):
    """검증기 입력.

    검증기는 recognized.value를 바꿔도 되고 (예: 여러 항목 중 일부만 남김),
    직접 메시지를 보내도 되며, succeeded=False여도 수락할 수 있다.
    """

    context: TurnContext
    recognized: PromptRecognizerResult[T]
    state: dict = field(default_factory=dict)
    options: PromptOptions = field(default_factory=PromptOptions)
    attempt_count: int = 0


PromptValidator = Callable[[PromptValidatorContext], bool]
