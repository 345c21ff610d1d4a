"""선택지 인식 패키지

토크나이저 → find_values → find_choices → recognize_choices 순으로 쌓인다.
"""

from stackdialog.core.choices.choice_factory import (
    MAX_ACTION_TITLE_LENGTH,
    ChoiceFactoryOptions,
    for_channel,
    hero_card,
    inline,
    list_style,
    suggested_actions,
    to_choices,
)
from stackdialog.core.choices.find_choices import find_choices
from stackdialog.core.choices.find_values import find_values
from stackdialog.core.choices.models import (
    Choice,
    FindChoicesOptions,
    FindValuesOptions,
    FoundChoice,
    FoundValue,
    ModelResult,
    SortedValue,
    Token,
)
from stackdialog.core.choices.recognize_choices import recognize_choices
from stackdialog.core.choices.tokenizer import default_tokenizer

__all__ = [
    "MAX_ACTION_TITLE_LENGTH",
    "ChoiceFactoryOptions",
    "for_channel",
    "hero_card",
    "inline",
    "list_style",
    "suggested_actions",
    "to_choices",
    "find_choices",
    "find_values",
    "Choice",
    "FindChoicesOptions",
    "FindValuesOptions",
    "FoundChoice",
    "FoundValue",
    "ModelResult",
    "SortedValue",
    "Token",
    "recognize_choices",
    "default_tokenizer",
]
