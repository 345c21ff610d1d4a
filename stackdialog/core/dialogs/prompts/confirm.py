"""ConfirmPrompt - 예/아니오 입력

1차: Recognizers-Text 예/아니오 인식 (recognizers_choice.recognize_boolean)
2차: 번호를 붙여 보여줬다면 예/아니오 선택지 인식 ("1", "the first one", "Oui" → 예)
"""

from typing import Optional, Sequence

from recognizers_choice import recognize_boolean

from stackdialog.core.choices.choice_factory import ChoiceFactoryOptions
from stackdialog.core.choices.models import Choice, ChoiceLike, FindChoicesOptions, to_choice
from stackdialog.core.choices.recognize_choices import recognize_choices
from stackdialog.core.dialogs.prompts.culture import get_culture, map_to_nearest_language
from stackdialog.core.dialogs.prompts.options import (
    ListStyle,
    PromptOptions,
    PromptRecognizerResult,
    PromptValidator,
)
from stackdialog.core.dialogs.prompts.prompt import Prompt, resolve_locale
from stackdialog.core.turn_context import TurnContext


class ConfirmPrompt(Prompt[bool]):
    """style 기본값은 AUTO (채널에 맞춰 렌더링)"""

    def __init__(
        self,
        dialog_id: str,
        validator: Optional[PromptValidator] = None,
        default_locale: Optional[str] = None,
        choice_options: Optional[ChoiceFactoryOptions] = None,
        confirm_choices: Optional[Sequence[ChoiceLike]] = None,
    ):
        super().__init__(dialog_id, validator)
        self.style = ListStyle.AUTO
        self.default_locale = default_locale
        self.choice_options = choice_options
        self.confirm_choices = confirm_choices

    def _choices_for(self, locale: str) -> tuple[list[Choice], ChoiceFactoryOptions]:
        culture = get_culture(locale)
        if self.confirm_choices:
            choices = [to_choice(c) for c in self.confirm_choices]
        else:
            choices = [
                Choice(value=culture.yes_in_language),
                Choice(value=culture.no_in_language),
            ]
        options = self.choice_options or ChoiceFactoryOptions(
            inline_separator=culture.separator,
            inline_or=culture.inline_or,
            inline_or_more=culture.inline_or_more,
            include_numbers=True,
        )
        return choices, options

    def on_prompt(
        self,
        context: TurnContext,
        state: dict,
        options: PromptOptions,
        is_retry: bool,
    ) -> None:
        locale = resolve_locale(context, options, self.default_locale)
        choices, choice_options = self._choices_for(locale)
        style = options.style or self.style

        prompt = options.retry_prompt if is_retry and options.retry_prompt else options.prompt
        activity = self.append_choices(
            prompt,
            context.activity.channel_id,
            choices,
            style,
            choice_options,
            context.activity.conversation.conversation_type,
        )
        context.send_activity(activity)

    def on_recognize(
        self, context: TurnContext, state: dict, options: PromptOptions
    ) -> PromptRecognizerResult[bool]:
        result: PromptRecognizerResult[bool] = PromptRecognizerResult()
        utterance = context.activity.text
        if not utterance:
            return result

        culture = map_to_nearest_language(resolve_locale(context, options, self.default_locale))
        found = recognize_boolean(utterance, culture)
        if found and found[0].resolution and "value" in found[0].resolution:
            result.succeeded = True
            result.value = bool(found[0].resolution["value"])
            return result

        # 번호 붙은 선택지로 보여줬을 때만 선택지로 답한 경우를 인식. 0번이 예.
        choices, choice_options = self._choices_for(culture)
        if not choice_options.include_numbers:
            return result

        matched = recognize_choices(
            utterance, choices[:2], FindChoicesOptions(locale=culture)
        )
        if matched:
            result.succeeded = True
            result.value = matched[0].resolution.index == 0
        return result
