"""샘플 대화 - 사용자 프로필 수집

교통수단(선택) → 이름(텍스트) → 나이 입력 여부(확인) → 나이(숫자) → 최종 확인.
샘플 호스트의 루트 대화로 쓰인다.
"""

from stackdialog.core.dialogs import (
    ChoicePrompt,
    ComponentDialog,
    ConfirmPrompt,
    DialogTurnResult,
    NumberPrompt,
    PromptOptions,
    PromptValidatorContext,
    TextPrompt,
    WaterfallDialog,
    WaterfallStepContext,
)
from stackdialog.core.choices import Choice, FindChoicesOptions
from stackdialog.core.logging import get_logger

logger = get_logger(__name__)

PROFILE_DIALOG_ID = "profile"

TRANSPORT_CHOICES = ["Car", "Bus", "Bicycle"]
MIN_AGE = 0
MAX_AGE = 150


def age_validator(prompt_context: PromptValidatorContext) -> bool:
    """0 < age < 150"""
    recognized = prompt_context.recognized
    return recognized.succeeded and MIN_AGE < recognized.value < MAX_AGE


class UserProfileDialog(ComponentDialog):
    """프로필 수집 컴포넌트. 완료 시 프로필 dict (취소하면 None) 반환."""

    def __init__(self, default_locale: str = "en-us", max_token_distance: int = 2):
        super().__init__(PROFILE_DIALOG_ID)

        self.add_dialog(
            WaterfallDialog(
                "profile_steps",
                [
                    self.transport_step,
                    self.name_step,
                    self.name_confirm_step,
                    self.age_step,
                    self.confirm_step,
                    self.summary_step,
                ],
            )
        )
        self.add_dialog(TextPrompt("name_prompt"))
        self.add_dialog(
            NumberPrompt("age_prompt", age_validator, default_locale=default_locale)
        )
        self.add_dialog(
            ChoicePrompt(
                "transport_prompt",
                default_locale=default_locale,
                recognizer_options=FindChoicesOptions(max_token_distance=max_token_distance),
            )
        )
        self.add_dialog(ConfirmPrompt("confirm_prompt", default_locale=default_locale))

        self.initial_dialog_id = "profile_steps"

    def transport_step(self, step: WaterfallStepContext) -> DialogTurnResult:
        return step.prompt(
            "transport_prompt",
            PromptOptions(
                prompt="Please enter your mode of transport.",
                choices=[Choice(value=c) for c in TRANSPORT_CHOICES],
            ),
        )

    def name_step(self, step: WaterfallStepContext) -> DialogTurnResult:
        step.values["transport"] = step.result.value
        return step.prompt("name_prompt", "Please enter your name.")

    def name_confirm_step(self, step: WaterfallStepContext) -> DialogTurnResult:
        step.values["name"] = step.result
        step.context.send_activity(f"Thanks {step.result}")
        return step.prompt("confirm_prompt", "Would you like to give your age?")

    def age_step(self, step: WaterfallStepContext) -> DialogTurnResult:
        if step.result:
            return step.prompt(
                "age_prompt",
                PromptOptions(
                    prompt="Please enter your age.",
                    retry_prompt="The value entered must be greater than 0 and less than 150.",
                ),
            )
        # 나이 생략
        return step.next(-1)

    def confirm_step(self, step: WaterfallStepContext) -> DialogTurnResult:
        age = step.result
        step.values["age"] = age

        msg = (
            f"I have your mode of transport as {step.values['transport']} "
            f"and your name as {step.values['name']}."
        )
        if age != -1:
            msg += f" And age as {age}."
        step.context.send_activity(msg)

        return step.prompt("confirm_prompt", "Is this ok?")

    def summary_step(self, step: WaterfallStepContext) -> DialogTurnResult:
        if not step.result:
            step.context.send_activity("Thanks. Your profile will not be kept.")
            return step.end_dialog(None)

        profile = {
            "transport": step.values["transport"],
            "name": step.values["name"],
            "age": step.values["age"],
        }
        logger.info("Profile collected: %s", profile["name"])
        step.context.send_activity("Thanks. Your profile has been saved.")
        return step.end_dialog(profile)
