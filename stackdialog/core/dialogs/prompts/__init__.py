"""프롬프트 대화 패키지"""

from stackdialog.core.dialogs.prompts.attachment import AttachmentPrompt
from stackdialog.core.dialogs.prompts.choice import ChoicePrompt
from stackdialog.core.dialogs.prompts.confirm import ConfirmPrompt
from stackdialog.core.dialogs.prompts.culture import PromptCultureModel, get_culture
from stackdialog.core.dialogs.prompts.number import NumberPrompt
from stackdialog.core.dialogs.prompts.options import (
    ListStyle,
    PromptOptions,
    PromptRecognizerResult,
    PromptValidator,
    PromptValidatorContext,
)
from stackdialog.core.dialogs.prompts.prompt import Prompt
from stackdialog.core.dialogs.prompts.text import TextPrompt

__all__ = [
    "AttachmentPrompt",
    "ChoicePrompt",
    "ConfirmPrompt",
    "PromptCultureModel",
    "get_culture",
    "NumberPrompt",
    "ListStyle",
    "PromptOptions",
    "PromptRecognizerResult",
    "PromptValidator",
    "PromptValidatorContext",
    "Prompt",
    "TextPrompt",
]
