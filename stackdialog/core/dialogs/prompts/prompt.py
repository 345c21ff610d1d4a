"""Prompt - 질문 → 인식 → 검증 → 재질문 2단계 대화

상태: Started → WaitingForInput (종료: end_dialog)

- begin: 질문 렌더링 후 WAITING
- continue: 하위 클래스 인식기(on_recognize) 실행 → 검증기 → 수락이면 end_dialog(value)
- 인식 실패 또는 검증 거부: 같은 프레임에서 재질문 (retry_prompt 우선)
- 재시도 횟수 상한 없음. attemptCount는 검증기 참고용.
"""

from __future__ import annotations

import logging
from abc import abstractmethod
from typing import TYPE_CHECKING, Any, Generic, Optional, Sequence, TypeVar, Union

from stackdialog.core.activity import Activity, ActivityTypes, InputHints, message_activity
from stackdialog.core.choices import choice_factory
from stackdialog.core.choices.choice_factory import ChoiceFactoryOptions, to_choices
from stackdialog.core.choices.models import ChoiceLike
from stackdialog.core.dialogs.dialog import Dialog
from stackdialog.core.dialogs.models import (
    END_OF_TURN,
    DialogInstance,
    DialogReason,
    DialogTurnResult,
)
from stackdialog.core.dialogs.prompts.options import (
    ListStyle,
    PromptOptions,
    PromptRecognizerResult,
    PromptValidator,
    PromptValidatorContext,
)
from stackdialog.core.turn_context import TurnContext

if TYPE_CHECKING:
    from stackdialog.core.dialogs.dialog_context import DialogContext

logger = logging.getLogger(__name__)

T = TypeVar("T")

PERSISTED_OPTIONS = "options"
PERSISTED_STATE = "state"
ATTEMPT_COUNT = "attemptCount"
DEFAULT_LOCALE = "en-us"


def load_options(state: dict) -> PromptOptions:
    """프레임 state의 옵션을 PromptOptions로 복원 (저장소 왕복 후엔 dict)"""
    raw = state.get(PERSISTED_OPTIONS)
    if isinstance(raw, PromptOptions):
        return raw
    options = PromptOptions.model_validate(raw or {})
    state[PERSISTED_OPTIONS] = options
    return options


def to_activity(
    prompt: Union[str, Activity, None], input_hint: InputHints = InputHints.EXPECTING_INPUT
) -> Optional[Activity]:
    """저장된 프롬프트를 전송용 Activity 사본으로"""
    if prompt is None:
        return None
    if isinstance(prompt, str):
        return message_activity(prompt, None, input_hint)
    activity = prompt.model_copy(deep=True)
    activity.input_hint = activity.input_hint or input_hint.value
    return activity


def resolve_locale(
    context: TurnContext, options: PromptOptions, default_locale: Optional[str] = None
) -> str:
    """인식 언어 우선순위: 옵션 → 인바운드 Activity → 프롬프트 기본값 → en-us"""
    return (
        options.recognize_language
        or context.activity.locale
        or default_locale
        or DEFAULT_LOCALE
    ).lower()


class Prompt(Dialog, Generic[T]):
    """모든 프롬프트의 기반 클래스"""

    def __init__(self, dialog_id: str, validator: Optional[PromptValidator] = None):
        super().__init__(dialog_id)
        self._validator = validator

    def begin_dialog(self, dc: "DialogContext", options: Any = None) -> DialogTurnResult:
        if isinstance(options, PromptOptions):
            opt = options.model_copy()
        elif isinstance(options, (str, Activity)):
            opt = PromptOptions(prompt=options)
        else:
            opt = PromptOptions.model_validate(options or {})
        if opt.choices:
            opt.choices = to_choices(opt.choices)

        state = dc.active_dialog.state
        state[PERSISTED_OPTIONS] = opt
        state[PERSISTED_STATE] = {ATTEMPT_COUNT: 0}

        self.on_prompt(dc.context, state[PERSISTED_STATE], opt, False)
        return END_OF_TURN

    def continue_dialog(self, dc: "DialogContext") -> DialogTurnResult:
        if dc.context.activity.type != ActivityTypes.MESSAGE.value:
            return END_OF_TURN

        state = dc.active_dialog.state
        options = load_options(state)
        prompt_state = state.setdefault(PERSISTED_STATE, {})

        recognized = self.on_recognize(dc.context, prompt_state, options)
        prompt_state[ATTEMPT_COUNT] = prompt_state.get(ATTEMPT_COUNT, 0) + 1

        if self._validator is not None:
            is_valid = bool(
                self._validator(
                    PromptValidatorContext(
                        context=dc.context,
                        recognized=recognized,
                        state=prompt_state,
                        options=options,
                        attempt_count=prompt_state[ATTEMPT_COUNT],
                    )
                )
            )
        else:
            is_valid = recognized.succeeded

        if is_valid:
            logger.debug("%s accepted after %d attempt(s)", self.id, prompt_state[ATTEMPT_COUNT])
            return dc.end_dialog(recognized.value)

        # 검증기가 직접 안내 메시지를 보냈으면 재질문 생략
        if not dc.context.responded:
            self.on_prompt(dc.context, prompt_state, options, True)
        return END_OF_TURN

    def resume_dialog(
        self, dc: "DialogContext", reason: DialogReason, result: Any = None
    ) -> DialogTurnResult:
        # 프롬프트 위에 다른 대화가 push됐다가 끝난 경우. 질문을 다시 표시하고 대기.
        self.reprompt_dialog(dc.context, dc.active_dialog)
        return END_OF_TURN

    def reprompt_dialog(self, context: TurnContext, instance: DialogInstance) -> None:
        state = instance.state
        self.on_prompt(
            context, state.setdefault(PERSISTED_STATE, {}), load_options(state), False
        )

    @abstractmethod
    def on_prompt(
        self,
        context: TurnContext,
        state: dict,
        options: PromptOptions,
        is_retry: bool,
    ) -> None:
        ...

    @abstractmethod
    def on_recognize(
        self, context: TurnContext, state: dict, options: PromptOptions
    ) -> PromptRecognizerResult[T]:
        ...

    def append_choices(
        self,
        prompt: Union[str, Activity, None],
        channel_id: str,
        choices: Sequence[ChoiceLike],
        style: ListStyle,
        options: Optional[ChoiceFactoryOptions] = None,
        conversation_type: Optional[str] = None,
    ) -> Activity:
        """프롬프트에 선택지를 붙인 Activity 생성"""
        if isinstance(prompt, str):
            text = prompt
        elif prompt is not None and prompt.text:
            text = prompt.text
        else:
            text = ""

        if style == ListStyle.INLINE:
            msg = choice_factory.inline(choices, text, None, options)
        elif style == ListStyle.LIST:
            msg = choice_factory.list_style(choices, text, None, options)
        elif style == ListStyle.SUGGESTED_ACTION:
            msg = choice_factory.suggested_actions(choices, text)
        elif style == ListStyle.HERO_CARD:
            msg = choice_factory.hero_card(choices, text)
        elif style == ListStyle.NONE:
            msg = message_activity(text)
        else:
            msg = choice_factory.for_channel(
                channel_id, choices, text, None, options, conversation_type
            )

        if isinstance(prompt, Activity):
            # 원본 프롬프트는 상태에 저장돼 있으므로 사본에 반영
            result = prompt.model_copy(deep=True)
            result.text = msg.text
            if msg.suggested_actions is not None and msg.suggested_actions.actions:
                result.suggested_actions = msg.suggested_actions
            if msg.attachments:
                result.attachments = list(result.attachments) + list(msg.attachments)
            return result

        msg.input_hint = InputHints.EXPECTING_INPUT.value
        return msg
