"""TurnContext + 에러 종류 테스트"""

from stackdialog.core.activity import Activity, ConversationAccount, InputHints
from stackdialog.core.dialogs import DialogError, ErrorKind
from stackdialog.core.turn_context import TurnContext


class TestTurnContext:
    def test_send_text(self) -> None:
        context = TurnContext(Activity(text="hi"))
        assert context.responded is False

        sent = context.send_activity("hello")
        assert context.responded is True
        assert sent.text == "hello"
        assert sent.input_hint == InputHints.ACCEPTING_INPUT.value
        assert context.sent_activities == [sent]

    def test_reply_routed_to_inbound_conversation(self) -> None:
        inbound = Activity(
            text="hi", channel_id="slack", conversation=ConversationAccount(id="c9")
        )
        sent = TurnContext(inbound).send_activity(Activity(text="yo"))
        assert sent.channel_id == "slack"
        assert sent.conversation.id == "c9"

    def test_on_send_callback(self) -> None:
        delivered = []
        context = TurnContext(Activity(text="hi"), on_send=delivered.append)
        context.send_activity("one")
        context.send_activity("two")
        assert [a.text for a in delivered] == ["one", "two"]


class TestDialogError:
    def test_code_and_message(self) -> None:
        err = DialogError(ErrorKind.DIALOG_NOT_FOUND, operation="begin_dialog", dialog_id="x")
        assert err.code == -130030
        assert str(err) == "DialogContext.begin_dialog(): A dialog with an id of 'x' wasn't found."
        assert err.params["dialog_id"] == "x"

    def test_codes_are_unique(self) -> None:
        codes = [kind.code for kind in ErrorKind]
        assert len(codes) == len(set(codes))
