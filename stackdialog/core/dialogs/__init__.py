"""대화 엔진 패키지

DialogSet(레지스트리) → DialogContext(스택 조작) → Dialog(워터폴/컴포넌트/프롬프트).
"""

from stackdialog.core.dialogs.component import ComponentDialog
from stackdialog.core.dialogs.dialog import Dialog, DialogContainer
from stackdialog.core.dialogs.dialog_context import DialogContext
from stackdialog.core.dialogs.dialog_set import DialogSet
from stackdialog.core.dialogs.errors import DialogError, ErrorKind, WaterfallStepError
from stackdialog.core.dialogs.manager import DialogManager, run_dialog
from stackdialog.core.dialogs.models import (
    END_OF_TURN,
    DialogEvent,
    DialogEvents,
    DialogInstance,
    DialogReason,
    DialogState,
    DialogTurnResult,
    DialogTurnStatus,
)
from stackdialog.core.dialogs.prompts import (
    AttachmentPrompt,
    ChoicePrompt,
    ConfirmPrompt,
    ListStyle,
    NumberPrompt,
    Prompt,
    PromptOptions,
    PromptRecognizerResult,
    PromptValidatorContext,
    TextPrompt,
)
from stackdialog.core.dialogs.waterfall import WaterfallDialog, WaterfallStepContext

__all__ = [
    "ComponentDialog",
    "Dialog",
    "DialogContainer",
    "DialogContext",
    "DialogSet",
    "DialogError",
    "ErrorKind",
    "WaterfallStepError",
    "DialogManager",
    "run_dialog",
    "END_OF_TURN",
    "DialogEvent",
    "DialogEvents",
    "DialogInstance",
    "DialogReason",
    "DialogState",
    "DialogTurnResult",
    "DialogTurnStatus",
    "AttachmentPrompt",
    "ChoicePrompt",
    "ConfirmPrompt",
    "ListStyle",
    "NumberPrompt",
    "Prompt",
    "PromptOptions",
    "PromptRecognizerResult",
    "PromptValidatorContext",
    "TextPrompt",
    "WaterfallDialog",
    "WaterfallStepContext",
]
