"""find_values / find_choices 테스트"""

from stackdialog.core.activity import CardAction
from stackdialog.core.choices import (
    Choice,
    FindChoicesOptions,
    FindValuesOptions,
    SortedValue,
    find_choices,
    find_values,
)
from stackdialog.core.choices.find_choices import expand_synonyms

COLOR_VALUES = [
    SortedValue(value="red", index=0),
    SortedValue(value="green", index=1),
    SortedValue(value="blue", index=2),
]


class TestFindValues:
    def test_exact_match_short_circuits(self) -> None:
        values = [
            SortedValue(value="red", index=0),
            SortedValue(value="red velvet", index=1),
        ]
        found = find_values("red", values)
        assert len(found) == 1
        assert found[0].resolution.value == "red"
        assert found[0].resolution.index == 0
        assert found[0].resolution.score == 1.0
        assert (found[0].start, found[0].end) == (0, 2)

    def test_exact_match_ignores_case(self) -> None:
        found = find_values("RED", COLOR_VALUES)
        assert len(found) == 1
        assert found[0].resolution.value == "red"

    def test_value_inside_utterance(self) -> None:
        found = find_values("I'd like the red one", COLOR_VALUES)
        assert len(found) == 1
        assert found[0].resolution.index == 0
        assert found[0].text == "red"
        assert (found[0].start, found[0].end) == (13, 15)

    def test_no_match(self) -> None:
        assert find_values("purple", COLOR_VALUES) == []

    def test_multiple_matches_ordered_by_start(self) -> None:
        found = find_values("blue then red", COLOR_VALUES)
        assert [m.resolution.value for m in found] == ["blue", "red"]
        assert found[0].start < found[1].start

    def test_partial_matches_ordered_by_start(self) -> None:
        values = [
            SortedValue(value="brown dog", index=0),
            SortedValue(value="cow", index=1),
        ]
        found = find_values(
            "brown cow", values, FindValuesOptions(allow_partial_matches=True)
        )
        assert [m.resolution.index for m in found] == [0, 1]
        assert found[0].text == "brown"
        assert found[0].resolution.score == 0.5
        assert found[1].text == "cow"
        assert found[1].resolution.score == 1.0

    def test_partial_match_rejected_by_default(self) -> None:
        values = [
            SortedValue(value="brown dog", index=0),
            SortedValue(value="cow", index=1),
        ]
        found = find_values("brown cow", values)
        assert [m.resolution.index for m in found] == [1]

    def test_token_distance_lowers_score(self) -> None:
        values = [SortedValue(value="red green", index=0)]
        found = find_values("red big shiny green", values)
        assert len(found) == 1
        # 2 / (2 + 2)
        assert found[0].resolution.score == 0.5
        assert found[0].text == "red big shiny green"

    def test_token_distance_limit(self) -> None:
        values = [SortedValue(value="red green", index=0)]
        found = find_values(
            "red big shiny green", values, FindValuesOptions(max_token_distance=1)
        )
        assert found == []

    def test_longer_value_claims_tokens_first(self) -> None:
        values = [
            SortedValue(value="red", index=0),
            SortedValue(value="red velvet", index=1),
        ]
        found = find_values("a slice of red velvet cake", values)
        assert len(found) == 1
        assert found[0].resolution.value == "red velvet"
        assert found[0].resolution.score == 1.0

    def test_each_index_found_once(self) -> None:
        found = find_values("red and red again", COLOR_VALUES)
        assert len(found) == 1
        assert found[0].start == 0

    def test_custom_tokenizer(self) -> None:
        calls = []

        def tokenizer(text, locale=None):
            calls.append(text)
            from stackdialog.core.choices import default_tokenizer

            return default_tokenizer(text, locale)

        find_values("the green one", COLOR_VALUES, FindValuesOptions(tokenizer=tokenizer))
        assert "the green one" in calls


class TestFindChoices:
    def test_matches_choice_value(self) -> None:
        found = find_choices("the green one please", ["red", "green", "blue"])
        assert len(found) == 1
        assert found[0].type_name == "choice"
        assert found[0].resolution.value == "green"
        assert found[0].resolution.index == 1
        assert found[0].resolution.synonym == "green"

    def test_matches_synonym(self) -> None:
        choices = [
            Choice(value="red", synonyms=["crimson", "scarlet"]),
            Choice(value="blue", synonyms=["navy"]),
        ]
        found = find_choices("I want navy", choices)
        assert len(found) == 1
        assert found[0].resolution.value == "blue"
        assert found[0].resolution.index == 1
        assert found[0].resolution.synonym == "navy"

    def test_matches_action_title(self) -> None:
        choices = [
            Choice(value="opt_a", action=CardAction(title="Alpha plan", value="opt_a")),
            Choice(value="opt_b", action=CardAction(title="Beta plan", value="opt_b")),
        ]
        found = find_choices("the beta plan", choices)
        assert [m.resolution.value for m in found] == ["opt_b"]
        assert found[0].resolution.synonym == "Beta plan"

    def test_no_action_option(self) -> None:
        choices = [Choice(value="opt_a", action=CardAction(title="Alpha", value="opt_a"))]
        found = find_choices("alpha", choices, FindChoicesOptions(no_action=True))
        assert found == []

    def test_expand_synonyms_no_value(self) -> None:
        choices = [Choice(value="red", synonyms=["crimson"])]
        values = expand_synonyms(choices, FindChoicesOptions(no_value=True))
        assert [(v.value, v.index) for v in values] == [("crimson", 0)]

    def test_accepts_dict_choices(self) -> None:
        found = find_choices("blue", [{"value": "red"}, {"value": "blue"}])
        assert found[0].resolution.index == 1
