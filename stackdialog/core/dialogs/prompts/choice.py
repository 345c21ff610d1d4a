"""ChoicePrompt - 선택지 중 하나 고르기

값은 최상위 FoundChoice (value, index, score, synonym).
"""

from typing import Optional

from stackdialog.core.choices.choice_factory import ChoiceFactoryOptions
from stackdialog.core.choices.models import FindChoicesOptions, FoundChoice
from stackdialog.core.choices.recognize_choices import recognize_choices
from stackdialog.core.dialogs.prompts.culture import get_culture
from stackdialog.core.dialogs.prompts.options import (
    ListStyle,
    PromptOptions,
    PromptRecognizerResult,
    PromptValidator,
)
from stackdialog.core.dialogs.prompts.prompt import Prompt, resolve_locale
from stackdialog.core.turn_context import TurnContext


class ChoicePrompt(Prompt[FoundChoice]):
    def __init__(
        self,
        dialog_id: str,
        validator: Optional[PromptValidator] = None,
        default_locale: Optional[str] = None,
        choice_options: Optional[ChoiceFactoryOptions] = None,
        recognizer_options: Optional[FindChoicesOptions] = None,
    ):
        super().__init__(dialog_id, validator)
        self.style = ListStyle.AUTO
        self.default_locale = default_locale
        self.choice_options = choice_options
        self.recognizer_options = recognizer_options

    def on_prompt(
        self,
        context: TurnContext,
        state: dict,
        options: PromptOptions,
        is_retry: bool,
    ) -> None:
        locale = resolve_locale(context, options, self.default_locale)
        culture = get_culture(locale)
        choice_options = self.choice_options or ChoiceFactoryOptions(
            inline_separator=culture.separator,
            inline_or=culture.inline_or,
            inline_or_more=culture.inline_or_more,
            include_numbers=True,
        )
        style = options.style or self.style

        prompt = options.retry_prompt if is_retry and options.retry_prompt else options.prompt
        activity = self.append_choices(
            prompt,
            context.activity.channel_id,
            options.choices or [],
            style,
            choice_options,
            context.activity.conversation.conversation_type,
        )
        context.send_activity(activity)

    def on_recognize(
        self, context: TurnContext, state: dict, options: PromptOptions
    ) -> PromptRecognizerResult[FoundChoice]:
        result: PromptRecognizerResult[FoundChoice] = PromptRecognizerResult()
        text = context.activity.text or ""
        if not text or not options.choices:
            return result

        base = self.recognizer_options or FindChoicesOptions()
        recognizer_options = FindChoicesOptions(
            allow_partial_matches=base.allow_partial_matches,
            locale=base.locale or resolve_locale(context, options, self.default_locale),
            max_token_distance=base.max_token_distance,
            tokenizer=base.tokenizer,
            no_value=base.no_value,
            no_action=base.no_action,
            recognize_numbers=base.recognize_numbers,
            recognize_ordinals=base.recognize_ordinals,
        )
        found = recognize_choices(text, options.choices, recognizer_options)
        if found:
            result.succeeded = True
            result.value = found[0].resolution
        return result
