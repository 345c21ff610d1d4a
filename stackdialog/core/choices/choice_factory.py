"""채널 적응형 선택지 렌더링

채널 능력표 + 선택지 개수 + 대화 유형 + 최대 제목 길이로
제안 액션 / 히어로 카드 / 인라인 / 번호 목록 중 하나를 결정한다.
"""

from dataclasses import dataclass
from typing import Optional, Sequence

from stackdialog.core.activity import (
    HERO_CARD_CONTENT_TYPE,
    ActionTypes,
    Activity,
    Attachment,
    CardAction,
    Channels,
    InputHints,
    SuggestedActions,
    message_activity,
)
from stackdialog.core.choices.models import Choice, ChoiceLike, to_choice

MAX_ACTION_TITLE_LENGTH = 20

# 채널별 버튼 수 상한. 표에 없으면 미지원.
SUGGESTED_ACTION_LIMITS: dict[str, int] = {
    Channels.FACEBOOK: 10,
    Channels.SKYPE: 10,
    Channels.LINE: 13,
    Channels.TELEGRAM: 100,
    Channels.EMULATOR: 100,
    Channels.DIRECTLINE: 100,
    Channels.WEBCHAT: 100,
    Channels.DIRECTLINE_SPEECH: 100,
}
TEAMS_PERSONAL_SUGGESTED_ACTION_LIMIT = 3

CARD_ACTION_LIMITS: dict[str, int] = {
    Channels.FACEBOOK: 3,
    Channels.SKYPE: 3,
    Channels.MSTEAMS: 50,
    Channels.LINE: 99,
    Channels.SLACK: 100,
    Channels.TELEGRAM: 100,
    Channels.EMULATOR: 100,
    Channels.DIRECTLINE: 100,
    Channels.DIRECTLINE_SPEECH: 100,
    Channels.WEBCHAT: 100,
}


@dataclass
class ChoiceFactoryOptions:
    inline_separator: str = ", "
    inline_or: str = " or "
    inline_or_more: str = ", or "
    include_numbers: bool = True


def supports_suggested_actions(
    channel_id: str, button_count: int = 100, conversation_type: str = ""
) -> bool:
    if channel_id == Channels.MSTEAMS:
        return (
            conversation_type == "personal"
            and button_count <= TEAMS_PERSONAL_SUGGESTED_ACTION_LIMIT
        )
    limit = SUGGESTED_ACTION_LIMITS.get(channel_id)
    return limit is not None and button_count <= limit


def supports_card_actions(channel_id: str, button_count: int = 100) -> bool:
    limit = CARD_ACTION_LIMITS.get(channel_id)
    return limit is not None and button_count <= limit


def to_choices(choices: Optional[Sequence[ChoiceLike]]) -> list[Choice]:
    """선택지 정규화. 액션이 있으면 title/value 빈 쪽을 서로 채운다."""
    result: list[Choice] = []
    for item in choices or []:
        choice = to_choice(item)
        action = choice.action
        if action is not None:
            action.type = action.type or ActionTypes.IM_BACK.value
            if not action.value and action.title:
                action.value = action.title
            elif not action.title and action.value:
                action.title = str(action.value)
            elif not action.title and not action.value:
                action.title = action.value = choice.value
        result.append(choice)
    return result


def _title(choice: Choice) -> str:
    if choice.action is not None and choice.action.title:
        return choice.action.title
    return choice.value


def _to_action(choice: Choice) -> CardAction:
    if choice.action is not None:
        return choice.action
    return CardAction(type=ActionTypes.IM_BACK.value, title=choice.value, value=choice.value)


def for_channel(
    channel_id: str,
    choices: Sequence[ChoiceLike],
    text: Optional[str] = None,
    speak: Optional[str] = None,
    options: Optional[ChoiceFactoryOptions] = None,
    conversation_type: Optional[str] = None,
) -> Activity:
    choice_list = to_choices(choices)
    max_title_length = max((len(_title(c)) for c in choice_list), default=0)

    long_titles = max_title_length > MAX_ACTION_TITLE_LENGTH
    suggested = supports_suggested_actions(
        channel_id, len(choice_list), conversation_type or ""
    )
    card = supports_card_actions(channel_id, len(choice_list))

    if not long_titles and not suggested and card:
        # 제안 액션 미지원 채널 (예: Teams 그룹 대화)
        return hero_card(choice_list, text, speak)
    if not long_titles and suggested:
        return suggested_actions(choice_list, text, speak)
    if not long_titles and len(choice_list) <= 3:
        return inline(choice_list, text, speak, options)
    return list_style(choice_list, text, speak, options)


def inline(
    choices: Sequence[ChoiceLike],
    text: Optional[str] = None,
    speak: Optional[str] = None,
    options: Optional[ChoiceFactoryOptions] = None,
) -> Activity:
    """Pick a color. (1) red, (2) green, or (3) blue 형식"""
    opt = options or ChoiceFactoryOptions()
    choice_list = to_choices(choices)

    connector = ""
    txt = (text or "") + " "
    for index, choice in enumerate(choice_list):
        number = f"({index + 1}) " if opt.include_numbers else ""
        txt += f"{connector}{number}{_title(choice)}"
        if index == len(choice_list) - 2:
            connector = opt.inline_or if index == 0 else opt.inline_or_more
        else:
            connector = opt.inline_separator

    return message_activity(txt, speak, InputHints.EXPECTING_INPUT)


def list_style(
    choices: Sequence[ChoiceLike],
    text: Optional[str] = None,
    speak: Optional[str] = None,
    options: Optional[ChoiceFactoryOptions] = None,
) -> Activity:
    """줄바꿈 번호 목록 (include_numbers=False면 글머리표)"""
    opt = options or ChoiceFactoryOptions()

    connector = ""
    txt = (text or "") + "\n\n   "
    for index, choice in enumerate(to_choices(choices)):
        bullet = f"{index + 1}. " if opt.include_numbers else "- "
        txt += f"{connector}{bullet}{_title(choice)}"
        connector = "\n   "

    return message_activity(txt, speak, InputHints.EXPECTING_INPUT)


def suggested_actions(
    choices: Sequence[ChoiceLike],
    text: Optional[str] = None,
    speak: Optional[str] = None,
) -> Activity:
    activity = message_activity(text, speak, InputHints.EXPECTING_INPUT)
    activity.suggested_actions = SuggestedActions(
        actions=[_to_action(c) for c in to_choices(choices)]
    )
    return activity


def hero_card(
    choices: Sequence[ChoiceLike],
    text: Optional[str] = None,
    speak: Optional[str] = None,
) -> Activity:
    buttons = [_to_action(c).model_dump() for c in to_choices(choices)]
    activity = message_activity(None, speak, InputHints.EXPECTING_INPUT)
    activity.attachments = [
        Attachment(
            content_type=HERO_CARD_CONTENT_TYPE,
            content={"text": text, "buttons": buttons},
        )
    ]
    return activity
