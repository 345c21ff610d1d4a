"""Choice 목록 검색

각 Choice를 검색 문자열(값, 액션 제목, 동의어)로 펼쳐 find_values에 위임하고,
결과를 원래 Choice 인덱스로 되돌린다.
"""

from typing import Optional, Sequence

from stackdialog.core.choices.find_values import find_values
from stackdialog.core.choices.models import (
    Choice,
    ChoiceLike,
    FindChoicesOptions,
    FoundChoice,
    ModelResult,
    SortedValue,
    to_choice,
)


def expand_synonyms(
    choices: Sequence[Choice], options: FindChoicesOptions
) -> list[SortedValue]:
    synonyms: list[SortedValue] = []
    for index, choice in enumerate(choices):
        if not options.no_value:
            synonyms.append(SortedValue(value=choice.value, index=index))
        if choice.action is not None and choice.action.title and not options.no_action:
            synonyms.append(SortedValue(value=choice.action.title, index=index))
        for synonym in choice.synonyms or []:
            synonyms.append(SortedValue(value=synonym, index=index))
    return synonyms


def find_choices(
    utterance: str,
    choices: Sequence[ChoiceLike],
    options: Optional[FindChoicesOptions] = None,
) -> list[ModelResult[FoundChoice]]:
    opt = options or FindChoicesOptions()
    choice_list = [to_choice(c) for c in (choices or [])]

    found = find_values(utterance, expand_synonyms(choice_list, opt), opt)

    results: list[ModelResult[FoundChoice]] = []
    for v in found:
        choice = choice_list[v.resolution.index]
        results.append(
            ModelResult(
                text=v.text,
                start=v.start,
                end=v.end,
                type_name="choice",
                resolution=FoundChoice(
                    value=choice.value,
                    index=v.resolution.index,
                    score=v.resolution.score,
                    synonym=v.resolution.value,
                ),
            )
        )
    return results
