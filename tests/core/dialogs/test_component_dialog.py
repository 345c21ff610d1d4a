"""ComponentDialog 테스트"""

from stackdialog.core.dialogs import (
    END_OF_TURN,
    ComponentDialog,
    DialogReason,
    DialogTurnStatus,
    NumberPrompt,
    TextPrompt,
    WaterfallDialog,
)


class NameAgeDialog(ComponentDialog):
    def __init__(self) -> None:
        super().__init__("name_age")
        self.ended_with: list[DialogReason] = []
        self.add_dialog(
            WaterfallDialog("steps", [self.ask_name, self.ask_age, self.finish])
        )
        self.add_dialog(TextPrompt("name"))
        self.add_dialog(NumberPrompt("age"))

    def ask_name(self, step):
        return step.prompt("name", "Name?")

    def ask_age(self, step):
        step.values["name"] = step.result
        return step.prompt("age", "Age?")

    def finish(self, step):
        return step.end_dialog({"name": step.values["name"], "age": step.result})

    def on_end_dialog(self, context, instance, reason) -> None:
        self.ended_with.append(reason)


class QuitDialog(ComponentDialog):
    """내부 스텝이 "quit"을 받으면 내부 스택만 취소"""

    def __init__(self) -> None:
        super().__init__("quit")
        self.add_dialog(WaterfallDialog("steps", [self.ask, self.check]))
        self.add_dialog(TextPrompt("question"))

    def ask(self, step):
        return step.prompt("question", "Continue?")

    def check(self, step):
        if step.result == "quit":
            return step.cancel_all_dialogs()
        return step.end_dialog(step.result)

def _continue_or_begin(dialog_id: str):
    def logic(dc):
        result = dc.continue_dialog()
        if result.status == DialogTurnStatus.EMPTY:
            result = dc.begin_dialog(dialog_id)
        return result

    return logic


class TestComponentDialog:
    def test_initial_dialog_defaults_to_first_added(self) -> None:
        assert NameAgeDialog().initial_dialog_id == "steps"

    def test_inner_stack_hidden_from_outer(self, harness) -> None:
        harness.dialogs.add(NameAgeDialog())

        context, result = harness.turn(_continue_or_begin("name_age"), text="hi")
        assert result.status == DialogTurnStatus.WAITING
        assert context.sent_activities[0].text == "Name?"

        stack = harness.stored_stack()
        assert [frame["id"] for frame in stack] == ["name_age"]
        inner = stack[0]["state"]["dialogs"]["dialogStack"]
        assert [frame["id"] for frame in inner] == ["name", "steps"]

    def test_runs_to_completion(self, harness) -> None:
        component = NameAgeDialog()
        harness.dialogs.add(component)

        harness.turn(_continue_or_begin("name_age"), text="hi")
        context, _ = harness.turn(_continue_or_begin("name_age"), text="Bo")
        assert context.sent_activities[0].text == "Age?"
        assert len(harness.stored_stack()) == 1

        _, result = harness.turn(_continue_or_begin("name_age"), text="7")
        assert result.status == DialogTurnStatus.COMPLETE
        assert result.result == {"name": "Bo", "age": 7}
        assert harness.stored_stack() == []
        assert component.ended_with == [DialogReason.END_CALLED]

    def test_result_returned_to_outer_waterfall(self, harness) -> None:
        harness.dialogs.add(NameAgeDialog())
        harness.dialogs.add(
            WaterfallDialog(
                "outer",
                [
                    lambda step: step.begin_dialog("name_age"),
                    lambda step: step.end_dialog(("outer", step.result["name"])),
                ],
            )
        )

        harness.turn(_continue_or_begin("outer"), text="hi")
        assert [frame["id"] for frame in harness.stored_stack()] == ["name_age", "outer"]

        harness.turn(_continue_or_begin("outer"), text="Cy")
        _, result = harness.turn(_continue_or_begin("outer"), text="30")
        assert result.status == DialogTurnStatus.COMPLETE
        assert result.result == ("outer", "Cy")

    def test_cancel_clears_inner_stack(self, harness) -> None:
        component = NameAgeDialog()
        harness.dialogs.add(component)
        harness.turn(_continue_or_begin("name_age"), text="hi")

        _, result = harness.turn(lambda dc: dc.cancel_all_dialogs())
        assert result.status == DialogTurnStatus.CANCELLED
        assert harness.stored_stack() == []
        assert component.ended_with == [DialogReason.CANCEL_CALLED]

    def test_reprompt_reaches_inner_prompt(self, harness) -> None:
        harness.dialogs.add(NameAgeDialog())
        harness.turn(_continue_or_begin("name_age"), text="hi")

        context, _ = harness.turn(lambda dc: dc.reprompt_dialog() or END_OF_TURN)
        assert [a.text for a in context.sent_activities] == ["Name?"]

    def test_inner_context_child(self, harness) -> None:
        harness.dialogs.add(NameAgeDialog())
        harness.turn(_continue_or_begin("name_age"), text="hi")

        def logic(dc):
            child = dc.child
            assert child is not None
            assert child.active_dialog.id == "name"
            assert child.parent is dc
            return END_OF_TURN

        harness.turn(logic)


class TestInnerCancel:
    def test_parent_resumes_and_waits(self, harness) -> None:
        harness.dialogs.add(QuitDialog())
        harness.dialogs.add(TextPrompt("text"))
        harness.dialogs.add(
            WaterfallDialog(
                "outer",
                [
                    lambda step: step.begin_dialog("quit"),
                    lambda step: step.prompt("text", "Anything else?"),
                    lambda step: step.end_dialog(step.result),
                ],
            )
        )
        harness.turn(_continue_or_begin("outer"), text="hi")

        context, result = harness.turn(_continue_or_begin("outer"), text="quit")
        assert result.status == DialogTurnStatus.WAITING
        assert [a.text for a in context.sent_activities] == ["Anything else?"]
        assert [frame["id"] for frame in harness.stored_stack()] == ["text", "outer"]

    def test_root_component_reports_cancelled(self, harness) -> None:
        harness.dialogs.add(QuitDialog())
        harness.turn(_continue_or_begin("quit"), text="hi")

        _, result = harness.turn(_continue_or_begin("quit"), text="quit")
        assert result.status == DialogTurnStatus.CANCELLED
        assert harness.stored_stack() == []
