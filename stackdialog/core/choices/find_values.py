"""퍼지 값 검색 - 선택지 인식의 핵심 알고리즘

1. 발화 전체가 후보 값과 (대소문자 무시) 일치하면 score 1.0 결과 1건을 즉시 반환
2. 아니면 후보를 값 길이 내림차순 정렬 (긴 후보가 토큰을 먼저 차지)
3. 후보 토큰마다 발화 토큰을 앞으로 스캔. 직전 매칭 위치에서
   max_token_distance 이내면 매칭, 건너뛴 거리는 deviation으로 누적
4. 전 토큰 매칭 또는 부분 매칭 허용 시에만 결과 생성
   score = (matched / total) * (matched / (matched + deviation))
5. score 내림차순으로 span/후보 index가 겹치지 않는 것만 채택 후 시작 위치순 정렬
"""

import logging
from typing import Optional

from stackdialog.core.choices.models import (
    FindValuesOptions,
    FoundValue,
    ModelResult,
    SortedValue,
    Token,
)
from stackdialog.core.choices.tokenizer import default_tokenizer

logger = logging.getLogger(__name__)


def _index_of_token(tokens: list[Token], token: Token, start_pos: int) -> int:
    for i in range(start_pos, len(tokens)):
        if tokens[i].normalized == token.normalized:
            return i
    return -1


def _find_exact_match(
    utterance: str, values: list[SortedValue]
) -> Optional[ModelResult[FoundValue]]:
    lowered = utterance.lower()
    for entry in values:
        if entry.value.lower() == lowered:
            return ModelResult(
                text=utterance,
                start=0,
                end=len(utterance) - 1,
                type_name="value",
                resolution=FoundValue(value=entry.value, index=entry.index, score=1.0),
            )
    return None


def _match_value(
    tokens: list[Token],
    max_distance: int,
    allow_partial: bool,
    index: int,
    value: str,
    v_tokens: list[Token],
    start_pos: int,
) -> Optional[ModelResult[FoundValue]]:
    """후보 1개를 start_pos부터 매칭. start/end는 토큰 인덱스로 반환."""
    matched = 0
    total_deviation = 0
    start = -1
    end = -1
    for token in v_tokens:
        pos = _index_of_token(tokens, token, start_pos)
        if pos < 0:
            continue
        distance = pos - start_pos if matched > 0 else 0
        if distance <= max_distance:
            matched += 1
            total_deviation += distance
            start_pos = pos + 1
            if start < 0:
                start = pos
            end = pos

    if matched == 0 or (matched != len(v_tokens) and not allow_partial):
        return None

    completeness = matched / len(v_tokens)
    accuracy = matched / (matched + total_deviation)
    return ModelResult(
        text="",
        start=start,
        end=end,
        type_name="value",
        resolution=FoundValue(value=value, index=index, score=completeness * accuracy),
    )


def find_values(
    utterance: str,
    values: list[SortedValue],
    options: Optional[FindValuesOptions] = None,
) -> list[ModelResult[FoundValue]]:
    """utterance 안에서 values를 검색해 ModelResult 목록 반환 (시작 위치순)"""
    utterance = utterance or ""
    exact = _find_exact_match(utterance, values)
    if exact is not None:
        return [exact]

    opt = options or FindValuesOptions()
    tokenizer = opt.tokenizer or default_tokenizer
    tokens = tokenizer(utterance, opt.locale)
    max_distance = opt.max_token_distance

    ordered = sorted(values, key=lambda v: len(v.value), reverse=True)

    matches: list[ModelResult[FoundValue]] = []
    for entry in ordered:
        start_pos = 0
        v_tokens = tokenizer(entry.value.strip(), opt.locale)
        while start_pos < len(tokens):
            match = _match_value(
                tokens,
                max_distance,
                opt.allow_partial_matches,
                entry.index,
                entry.value,
                v_tokens,
                start_pos,
            )
            if match is None:
                break
            start_pos = match.end + 1
            matches.append(match)

    matches.sort(key=lambda m: m.resolution.score, reverse=True)

    results: list[ModelResult[FoundValue]] = []
    found_indexes: set[int] = set()
    used_tokens: set[int] = set()
    for match in matches:
        if match.resolution.index in found_indexes:
            continue
        span = range(match.start, match.end + 1)
        if any(i in used_tokens for i in span):
            continue

        found_indexes.add(match.resolution.index)
        used_tokens.update(span)

        # 토큰 인덱스 → 원문 문자 오프셋
        match.start = tokens[match.start].start
        match.end = tokens[match.end].end
        match.text = utterance[match.start : match.end + 1]
        results.append(match)

    logger.debug(
        "find_values: %d candidates, %d raw matches, %d accepted",
        len(values),
        len(matches),
        len(results),
    )
    return sorted(results, key=lambda m: m.start)
