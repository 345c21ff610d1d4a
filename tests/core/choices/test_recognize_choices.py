"""recognize_choices 테스트 (텍스트 매칭 + 서수/숫자 폴백)"""

from stackdialog.core.choices import (
    FindChoicesOptions,
    recognize_choices,
)

COLORS = ["red", "green", "blue"]


class TestRecognizeChoices:
    def test_text_match(self) -> None:
        found = recognize_choices("red", COLORS)
        assert len(found) == 1
        assert found[0].resolution.value == "red"
        assert found[0].resolution.score == 1.0

    def test_ordinal_fallback(self) -> None:
        found = recognize_choices("the second one", COLORS)
        assert len(found) == 1
        assert found[0].resolution.value == "green"
        assert found[0].resolution.index == 1
        assert found[0].resolution.score == 1.0
        assert found[0].text == "second"

    def test_numeric_ordinal(self) -> None:
        found = recognize_choices("the 3rd", COLORS)
        assert [m.resolution.index for m in found] == [2]

    def test_number_fallback(self) -> None:
        found = recognize_choices("1", COLORS)
        assert [m.resolution.value for m in found] == ["red"]

    def test_number_word_fallback(self) -> None:
        found = recognize_choices("I'll take two", COLORS)
        assert [m.resolution.value for m in found] == ["green"]

    def test_text_match_blocks_fallback(self) -> None:
        # "first"는 서수로도 읽히지만 텍스트 매칭이 우선
        found = recognize_choices("I want first class", ["economy", "first class"])
        assert len(found) == 1
        assert found[0].resolution.index == 1

    def test_text_match_blocks_number_fallback(self) -> None:
        found = recognize_choices("3 blue", COLORS)
        assert [m.resolution.value for m in found] == ["blue"]

    def test_out_of_range_index(self) -> None:
        assert recognize_choices("the fifth one", COLORS) == []
        assert recognize_choices("0", COLORS) == []

    def test_fractional_number_ignored(self) -> None:
        assert recognize_choices("1.5", COLORS) == []

    def test_disable_ordinals(self) -> None:
        options = FindChoicesOptions(recognize_ordinals=False)
        assert recognize_choices("the second one", COLORS, options) == []

    def test_disable_numbers(self) -> None:
        options = FindChoicesOptions(recognize_numbers=False)
        assert recognize_choices("2", COLORS, options) == []
    def test_locale_number_words(self) -> None:
        options = FindChoicesOptions(locale="fr-fr")
        assert [m.resolution.value for m in recognize_choices("deux", COLORS, options)] == ["green"]
        assert [m.resolution.index for m in recognize_choices("2", COLORS, options)] == [1]

    def test_locale_ordinal(self) -> None:
        options = FindChoicesOptions(locale="es-es")
        found = recognize_choices("el tercero", COLORS, options)
        assert [m.resolution.value for m in found] == ["blue"]

    def test_unicode_punctuation_in_utterance(self) -> None:
        found = recognize_choices("I’d like red…", COLORS)
        assert [m.resolution.value for m in found] == ["red"]

    def test_empty_utterance(self) -> None:
        assert recognize_choices("", COLORS) == []

    def test_no_match(self) -> None:
        assert recognize_choices("purple", COLORS) == []
