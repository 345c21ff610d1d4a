"""TextPrompt - 비어 있지 않은 텍스트 입력"""

from stackdialog.core.activity import ActivityTypes
from stackdialog.core.dialogs.prompts.options import PromptOptions, PromptRecognizerResult
from stackdialog.core.dialogs.prompts.prompt import Prompt, to_activity
from stackdialog.core.turn_context import TurnContext


class TextPrompt(Prompt[str]):
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
    ) -> PromptRecognizerResult[str]:
        result: PromptRecognizerResult[str] = PromptRecognizerResult()
        activity = context.activity
        if activity.type == ActivityTypes.MESSAGE.value and activity.text:
            result.succeeded = True
            result.value = activity.text
        return result

