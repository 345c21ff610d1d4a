"""대화 상태 캐시 + 프로퍼티 접근자

턴 시작 시 Storage에서 대화 키 1개를 읽어 turn_state에 캐시하고,
턴 종료 시 save_changes로 한 번에 기록한다.

    state = ConversationState(storage)
    accessor = state.create_property("DialogState")
    state.load(ctx)
    ...
    state.save_changes(ctx)
"""

import dataclasses
import json
import logging
from typing import Any, Callable, Optional

from pydantic import BaseModel

from stackdialog.core.storage import Storage
from stackdialog.core.turn_context import TurnContext

logger = logging.getLogger(__name__)

_CACHE_KEY = "ConversationState"


def _to_jsonable(value: Any) -> Any:
    """pydantic 모델을 포함한 값을 JSON 호환 구조로 변환"""
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True)
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return _to_jsonable(dataclasses.asdict(value))
    if isinstance(value, dict):
        return {k: _to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_to_jsonable(v) for v in value]
    return value


class _CachedState:
    def __init__(self, state: dict, hash_: str):
        self.state = state
        self.hash = hash_

    def is_changed(self) -> bool:
        return _compute_hash(self.state) != self.hash


def _compute_hash(state: dict) -> str:
    return json.dumps(_to_jsonable(state), sort_keys=True, default=str)


class ConversationState:
    """대화(conversation) 범위 상태"""

    def __init__(self, storage: Storage, namespace: str = "") -> None:
        self._storage = storage
        self._namespace = namespace

    def create_property(self, name: str) -> "StatePropertyAccessor":
        return StatePropertyAccessor(self, name)

    def get_storage_key(self, context: TurnContext) -> str:
        activity = context.activity
        if not activity.channel_id:
            raise ValueError("missing activity.channel_id")
        if not activity.conversation or not activity.conversation.id:
            raise ValueError("missing activity.conversation.id")
        key = f"{activity.channel_id}/conversations/{activity.conversation.id}"
        return f"{key}/{self._namespace}" if self._namespace else key

    def load(self, context: TurnContext, force: bool = False) -> dict:
        cached: Optional[_CachedState] = context.turn_state.get(_CACHE_KEY)
        if cached is None or force:
            key = self.get_storage_key(context)
            items = self._storage.read([key])
            state = items.get(key) or {}
            if not isinstance(state, dict):
                logger.warning("Stored state under %s is not an object, reset", key)
                state = {}
            cached = _CachedState(state, _compute_hash(state))
            context.turn_state[_CACHE_KEY] = cached
        return cached.state

    def save_changes(self, context: TurnContext, force: bool = False) -> None:
        cached: Optional[_CachedState] = context.turn_state.get(_CACHE_KEY)
        if cached is None:
            return
        if force or cached.is_changed():
            key = self.get_storage_key(context)
            data = _to_jsonable(cached.state)
            self._storage.write({key: data})
            cached.hash = _compute_hash(cached.state)
            logger.debug("Conversation state saved: %s", key)

    def clear(self, context: TurnContext) -> None:
        """캐시를 비운다. save_changes 후에 저장소에도 반영된다."""
        cached: Optional[_CachedState] = context.turn_state.get(_CACHE_KEY)
        if cached is None:
            context.turn_state[_CACHE_KEY] = _CachedState({}, "")
        else:
            cached.state = {}

    def delete(self, context: TurnContext) -> None:
        context.turn_state.pop(_CACHE_KEY, None)
        self._storage.delete([self.get_storage_key(context)])

    def get_property_value(self, context: TurnContext, name: str) -> Any:
        return self.load(context).get(name)

    def set_property_value(self, context: TurnContext, name: str, value: Any) -> None:
        self.load(context)[name] = value

    def delete_property_value(self, context: TurnContext, name: str) -> None:
        self.load(context).pop(name, None)


class StatePropertyAccessor:
    """ConversationState 안의 이름 있는 값 1개"""

    def __init__(self, state: ConversationState, name: str) -> None:
        self.state = state
        self.name = name

    def get(
        self,
        context: TurnContext,
        default_factory: Optional[Callable[[], Any]] = None,
    ) -> Any:
        value = self.state.get_property_value(context, self.name)
        if value is None and default_factory is not None:
            value = default_factory()
            self.state.set_property_value(context, self.name, value)
        return value

    def set(self, context: TurnContext, value: Any) -> None:
        self.state.set_property_value(context, self.name, value)

    def delete(self, context: TurnContext) -> None:
        self.state.delete_property_value(context, self.name)

