"""MemoryStorage + ConversationState 테스트"""

import pytest

from stackdialog.core.activity import Activity, ConversationAccount
from stackdialog.core.state import ConversationState
from stackdialog.core.storage import MemoryStorage
from stackdialog.core.turn_context import TurnContext


class TestMemoryStorage:
    def test_read_missing_keys(self) -> None:
        assert MemoryStorage().read(["a"]) == {}

    def test_write_then_read(self) -> None:
        storage = MemoryStorage()
        storage.write({"a": {"n": 1}, "b": {"n": 2}})
        assert storage.read(["a", "b", "c"]) == {"a": {"n": 1}, "b": {"n": 2}}

    def test_values_are_copied(self) -> None:
        storage = MemoryStorage()
        value = {"items": [1]}
        storage.write({"a": value})
        value["items"].append(2)

        read = storage.read(["a"])["a"]
        assert read == {"items": [1]}
        read["items"].append(3)
        assert storage.read(["a"])["a"] == {"items": [1]}

    def test_delete(self) -> None:
        storage = MemoryStorage({"a": 1, "b": 2})
        storage.delete(["a", "missing"])
        assert storage.read(["a", "b"]) == {"b": 2}

    def test_empty_arguments_rejected(self) -> None:
        storage = MemoryStorage()
        with pytest.raises(ValueError):
            storage.read([])
        with pytest.raises(ValueError):
            storage.write({})
        with pytest.raises(ValueError):
            storage.delete([])


class TestConversationState:
    def test_storage_key(self) -> None:
        activity = Activity(
            channel_id="webchat", conversation=ConversationAccount(id="c-1")
        )
        state = ConversationState(MemoryStorage())
        assert state.get_storage_key(TurnContext(activity)) == "webchat/conversations/c-1"

    def test_namespace_in_key(self) -> None:
        state = ConversationState(MemoryStorage(), namespace="bot")
        key = state.get_storage_key(TurnContext(Activity()))
        assert key == "test/conversations/conversation/bot"

    def test_missing_channel_rejected(self) -> None:
        state = ConversationState(MemoryStorage())
        with pytest.raises(ValueError):
            state.get_storage_key(TurnContext(Activity(channel_id="")))

    def test_property_accessor(self) -> None:
        storage = MemoryStorage()
        state = ConversationState(storage)
        accessor = state.create_property("counter")

        context = TurnContext(Activity())
        assert accessor.get(context) is None
        assert accessor.get(context, lambda: 0) == 0
        accessor.set(context, 5)
        state.save_changes(context)

        context = TurnContext(Activity())
        assert accessor.get(context) == 5
        accessor.delete(context)
        assert accessor.get(context) is None

    def test_clear_and_delete(self) -> None:
        storage = MemoryStorage()
        state = ConversationState(storage)
        context = TurnContext(Activity())
        state.set_property_value(context, "a", 1)
        state.save_changes(context)

        state.clear(context)
        state.save_changes(context)
        assert storage.read(["test/conversations/conversation"]) == {
            "test/conversations/conversation": {}
        }

        state.delete(TurnContext(Activity()))
        assert storage.read(["test/conversations/conversation"]) == {}
