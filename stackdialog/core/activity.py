"""턴 입출력 메시지 모델

채널 어댑터/와이어 포맷은 범위 밖이다. 엔진이 실제로 읽고 쓰는
필드만 pydantic 모델로 정의한다.
"""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field


class ActivityTypes(str, Enum):
    MESSAGE = "message"
    EVENT = "event"
    CONVERSATION_UPDATE = "conversationUpdate"
    END_OF_CONVERSATION = "endOfConversation"


class InputHints(str, Enum):
    ACCEPTING_INPUT = "acceptingInput"
    IGNORING_INPUT = "ignoringInput"
    EXPECTING_INPUT = "expectingInput"


class ActionTypes(str, Enum):
    IM_BACK = "imBack"
    POST_BACK = "postBack"
    MESSAGE_BACK = "messageBack"
    OPEN_URL = "openUrl"


class Channels:
    """채널 식별자 상수"""

    DIRECTLINE = "directline"
    DIRECTLINE_SPEECH = "directlinespeech"
    EMAIL = "email"
    EMULATOR = "emulator"
    FACEBOOK = "facebook"
    LINE = "line"
    MSTEAMS = "msteams"
    SKYPE = "skype"
    SLACK = "slack"
    SMS = "sms"
    TELEGRAM = "telegram"
    TEST = "test"
    WEBCHAT = "webchat"


HERO_CARD_CONTENT_TYPE = "application/vnd.microsoft.card.hero"


class CardAction(BaseModel):
    """버튼/제안 액션"""

    type: str = ActionTypes.IM_BACK.value
    title: Optional[str] = None
    value: Any = None


class SuggestedActions(BaseModel):
    actions: list[CardAction] = Field(default_factory=list)


class Attachment(BaseModel):
    content_type: str
    content_url: Optional[str] = None
    content: Any = None
    name: Optional[str] = None


class ConversationAccount(BaseModel):
    id: str
    conversation_type: Optional[str] = None  # "personal" | "groupChat" | "channel"


class Activity(BaseModel):
    """인바운드/아웃바운드 메시지 1건"""

    type: str = ActivityTypes.MESSAGE.value
    text: Optional[str] = None
    speak: Optional[str] = None
    value: Any = None
    locale: Optional[str] = None
    channel_id: str = Channels.TEST
    conversation: ConversationAccount = Field(
        default_factory=lambda: ConversationAccount(id="conversation")
    )
    input_hint: Optional[str] = None
    attachments: list[Attachment] = Field(default_factory=list)
    suggested_actions: Optional[SuggestedActions] = None


def message_activity(
    text: Optional[str] = None,
    speak: Optional[str] = None,
    input_hint: Optional[InputHints] = None,
) -> Activity:
    """텍스트 메시지 Activity 생성"""
    return Activity(
        type=ActivityTypes.MESSAGE.value,
        text=text,
        speak=speak,
        input_hint=input_hint.value if input_hint else None,
    )
