"""고수준 선택지 인식

텍스트 검색(find_choices)을 먼저 시도하고, 결과가 0건일 때만
서수 → 숫자 순으로 "N번째" 인덱스 인식을 시도한다.
"the third one", "the first division book" 같은 발화가 두 전략 모두에
걸리지 않도록 한 호출에서는 한 전략의 결과만 반환한다.

서수/숫자 인식은 Recognizers-Text(recognizers_number)에 맡긴다.
"""

import logging
from typing import Any, Optional, Sequence

from recognizers_number import recognize_number, recognize_ordinal

from stackdialog.core.choices.find_choices import find_choices
from stackdialog.core.choices.models import (
    Choice,
    ChoiceLike,
    FindChoicesOptions,
    FoundChoice,
    ModelResult,
    to_choice,
)

logger = logging.getLogger(__name__)

DEFAULT_LOCALE = "en-us"


def _resolution_index(match: Any) -> Optional[int]:
    """인식 결과의 resolution["value"]를 1부터 시작하는 정수로. 정수가 아니면 None."""
    resolution = match.resolution or {}
    raw = resolution.get("value") if isinstance(resolution, dict) else None
    if raw is None:
        return None
    try:
        value = float(str(raw).replace(" ", "").replace(",", "."))
    except ValueError:
        return None
    if not value.is_integer():
        return None
    return int(value)


def _match_choice_by_index(
    choices: list[Choice], match: Any
) -> Optional[ModelResult[FoundChoice]]:
    value = _resolution_index(match)
    if value is None:
        return None

    index = value - 1
    if not 0 <= index < len(choices):
        return None

    return ModelResult(
        text=match.text,
        start=match.start,
        end=match.end,
        type_name="choice",
        resolution=FoundChoice(value=choices[index].value, index=index, score=1.0),
    )


def _dedupe(matched: list[ModelResult[FoundChoice]]) -> list[ModelResult[FoundChoice]]:
    """같은 span, 같은 선택지 인덱스는 먼저 나온 것만 남긴다"""
    seen_spans: set[tuple[int, int]] = set()
    by_span: list[ModelResult[FoundChoice]] = []
    for m in matched:
        if (m.start, m.end) not in seen_spans:
            seen_spans.add((m.start, m.end))
            by_span.append(m)

    seen_indexes: set[int] = set()
    result: list[ModelResult[FoundChoice]] = []
    for m in by_span:
        if m.resolution.index not in seen_indexes:
            seen_indexes.add(m.resolution.index)
            result.append(m)
    return result


def recognize_choices(
    utterance: str,
    choices: Sequence[ChoiceLike],
    options: Optional[FindChoicesOptions] = None,
) -> list[ModelResult[FoundChoice]]:
    opt = options or FindChoicesOptions()
    locale = (opt.locale or DEFAULT_LOCALE).lower()
    choice_list = [to_choice(c) for c in (choices or [])]

    matched = find_choices(utterance, choice_list, opt)
    if matched or not utterance:
        return matched

    fallback: list[ModelResult[FoundChoice]] = []
    if opt.recognize_ordinals:
        for ordinal in recognize_ordinal(utterance, locale):
            found = _match_choice_by_index(choice_list, ordinal)
            if found is not None:
                fallback.append(found)

    if opt.recognize_numbers:
        for number in recognize_number(utterance, locale):
            found = _match_choice_by_index(choice_list, number)
            if found is not None:
                fallback.append(found)

    fallback.sort(key=lambda m: m.start)
    result = _dedupe(fallback)
    if result:
        logger.debug(
            "recognize_choices: index fallback matched %s",
            [m.resolution.index for m in result],
        )
    return result
