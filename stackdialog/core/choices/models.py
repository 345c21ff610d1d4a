"""선택지 인식 도메인 모델

Token/ModelResult는 호출 1회 동안만 쓰는 값이라 dataclass,
Choice는 프롬프트 옵션과 함께 대화 상태에 저장되므로 pydantic 모델.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, Optional, TypeVar, Union

from pydantic import BaseModel

from stackdialog.core.activity import CardAction

T = TypeVar("T")


@dataclass
class Token:
    """발화 내 토큰 1개. start/end는 원문 기준 (end 포함)."""

    start: int
    end: int
    text: str
    normalized: str


TokenizerFunction = Callable[[str, Optional[str]], list[Token]]


@dataclass
class ModelResult(Generic[T]):
    """인식 결과 1건. start/end는 원문 문자 오프셋 (end 포함)."""

    text: str
    start: int
    end: int
    type_name: str
    resolution: T


@dataclass
class SortedValue:
    """검색 후보 문자열 + 원래 목록에서의 위치"""

    value: str
    index: int


@dataclass
class FoundValue:
    value: str
    index: int
    score: float


@dataclass
class FoundChoice:
    value: str
    index: int
    score: float
    synonym: Optional[str] = None


class Choice(BaseModel):
    """사용자에게 제시하는 선택지 1개"""

    value: str
    action: Optional[CardAction] = None
    synonyms: Optional[list[str]] = None


ChoiceLike = Union[str, Choice, dict]


@dataclass
class FindValuesOptions:
    allow_partial_matches: bool = False
    locale: Optional[str] = None
    max_token_distance: int = 2
    tokenizer: Optional[TokenizerFunction] = None


@dataclass
class FindChoicesOptions(FindValuesOptions):
    no_value: bool = False
    no_action: bool = False
    recognize_numbers: bool = True
    recognize_ordinals: bool = True


def to_choice(choice: ChoiceLike) -> Choice:
    """문자열/dict/Choice를 Choice로 정규화"""
    if isinstance(choice, Choice):
        return choice
    if isinstance(choice, str):
        return Choice(value=choice)
    return Choice.model_validate(choice)
