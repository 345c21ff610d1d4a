"""AttachmentPrompt - 첨부 파일 1개 이상"""

from stackdialog.core.activity import ActivityTypes, Attachment
from stackdialog.core.dialogs.prompts.options import PromptOptions, PromptRecognizerResult
from stackdialog.core.dialogs.prompts.prompt import Prompt, to_activity
from stackdialog.core.turn_context import TurnContext


class AttachmentPrompt(Prompt[list[Attachment]]):
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
    ) -> PromptRecognizerResult[list[Attachment]]:
        result: PromptRecognizerResult[list[Attachment]] = PromptRecognizerResult()
        activity = context.activity
        if activity.type == ActivityTypes.MESSAGE.value and activity.attachments:
            result.succeeded = True
            result.value = list(activity.attachments)
        return result
