"""NumberPrompt - 숫자 입력 ("42", "twenty one", "3.5", "vingt-deux")"""

from typing import Any, Optional, Union

from recognizers_number import recognize_number

from stackdialog.core.dialogs.prompts.culture import map_to_nearest_language
from stackdialog.core.dialogs.prompts.options import (
    PromptOptions,
    PromptRecognizerResult,
    PromptValidator,
)
from stackdialog.core.dialogs.prompts.prompt import Prompt, resolve_locale, to_activity
from stackdialog.core.turn_context import TurnContext

Number = Union[int, float]


def parse_number(raw: Any) -> Optional[Number]:
    """인식기 resolution 값("1234.5", "3,5")을 수로. 정수면 int."""
    if raw is None:
        return None
    text = str(raw).replace(" ", "")
    try:
        value = float(text)
    except ValueError:
        try:
            value = float(text.replace(",", "."))
        except ValueError:
            return None
    return int(value) if value.is_integer() else value


class NumberPrompt(Prompt[Number]):
    def __init__(
        self,
        dialog_id: str,
        validator: Optional[PromptValidator] = None,
        default_locale: Optional[str] = None,
    ):
        super().__init__(dialog_id, validator)
        self.default_locale = default_locale

    def on_prompt(
        self,
        context: TurnContext,
        state: dict,
        options: PromptOptions,
        is_retry: bool,
    ) -> None:
        prompt = options.retry_prompt if is_retry and options.retry_prompt else options.prompt
        activity = to_activity(prompt)
        if activity is not None:
            context.send_activity(activity)

    def on_recognize(
        self, context: TurnContext, state: dict, options: PromptOptions
    ) -> PromptRecognizerResult[Number]:
        result: PromptRecognizerResult[Number] = PromptRecognizerResult()
        utterance = context.activity.text
        if not utterance:
            return result

        culture = map_to_nearest_language(resolve_locale(context, options, self.default_locale))
        # 첫 번째로 인식된 숫자만 사용
        found = recognize_number(utterance, culture)
        if found:
            value = parse_number((found[0].resolution or {}).get("value"))
            if value is not None:
                result.succeeded = True
                result.value = value
        return result
