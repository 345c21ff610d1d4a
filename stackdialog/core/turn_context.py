"""턴 컨텍스트 - 인바운드 Activity + 아웃바운드 전송

실제 채널 전송은 호스트가 on_send 콜백으로 연결한다.
콜백이 없으면 sent_activities에 쌓기만 한다 (테스트/샘플 호스트).
"""

import logging
from typing import Callable, Optional, Union

from stackdialog.core.activity import Activity, InputHints, message_activity

logger = logging.getLogger(__name__)

SendHandler = Callable[[Activity], None]


class TurnContext:
    """한 턴 동안만 유효한 컨텍스트"""

    def __init__(self, activity: Activity, on_send: Optional[SendHandler] = None):
        self.activity = activity
        self._on_send = on_send
        self.sent_activities: list[Activity] = []
        # 턴 범위 캐시 (ConversationState 등이 사용)
        self.turn_state: dict = {}

    @property
    def responded(self) -> bool:
        """이번 턴에 한 번이라도 메시지를 보냈는지"""
        return len(self.sent_activities) > 0

    def send_activity(
        self,
        activity_or_text: Union[Activity, str],
        speak: Optional[str] = None,
        input_hint: Optional[InputHints] = None,
    ) -> Activity:
        if isinstance(activity_or_text, str):
            activity = message_activity(
                activity_or_text,
                speak,
                input_hint or InputHints.ACCEPTING_INPUT,
            )
        else:
            activity = activity_or_text

        # 응답은 인바운드와 같은 대화로 라우팅
        activity.channel_id = self.activity.channel_id
        activity.conversation = self.activity.conversation

        self.sent_activities.append(activity)
        logger.debug("send_activity: %r", activity.text)
        if self._on_send is not None:
            self._on_send(activity)
        return activity
