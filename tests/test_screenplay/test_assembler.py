"""
Tests for Screenplay Assembler

Tests for showrunner/screenplay/assembler.py
"""

import pytest

from showrunner.core.config import ScreenplayConfig
from showrunner.core.constants import ElementType
from showrunner.screenplay.assembler import ScreenplayAssembler, assemble


def _types(document):
    return [e.element_type for e in document.elements()]


class TestClassification:
    """Tests for line classification rules."""

    def test_heading_cue_dialogue(self):
        """A heading, a cue and a line of dialogue."""
        document = assemble("INT. OFFICE - DAY\nJASON\nHello there.")

        assert len(document.pages) == 1
        elements = document.pages[0].elements
        assert [(e.element_type, e.content) for e in elements] == [
            (ElementType.SCENE_HEADING, "INT. OFFICE - DAY"),
            (ElementType.CHARACTER_CUE, "JASON"),
            (ElementType.DIALOGUE, "Hello there."),
        ]
        assert elements[1].scene_index == 1
        assert elements[2].scene_index == 1
        assert elements[2].character_name == "JASON"

    def test_headings_are_uppercased(self):
        document = assemble("int. kitchen - night")

        heading = next(document.elements())
        assert heading.element_type is ElementType.SCENE_HEADING
        assert heading.content == "INT. KITCHEN - NIGHT"

    def test_int_ext_heading(self):
        document = assemble("INT/EXT. CAR - MOVING")

        assert _types(document) == [ElementType.SCENE_HEADING]

    def test_transitions(self):
        document = assemble("INT. OFFICE - DAY\ncut to:\nDISSOLVE TO:")

        elements = list(document.elements())
        assert elements[1].element_type is ElementType.TRANSITION
        assert elements[1].content == "CUT TO:"
        assert elements[2].element_type is ElementType.TRANSITION

    def test_caps_line_without_dialogue_is_action(self):
        """An upper-case line followed by more upper-case text is not a cue."""
        document = assemble("INT. HALL - DAY\nBANG\nTHE DOOR SLAMS SHUT")

        assert _types(document) == [
            ElementType.SCENE_HEADING,
            ElementType.ACTION,
            ElementType.ACTION,
        ]

    def test_cue_followed_by_parenthetical(self):
        document = assemble("MAYA\n(quietly)\nWe need to talk.")

        elements = list(document.elements())
        assert [e.element_type for e in elements] == [
            ElementType.CHARACTER_CUE,
            ElementType.PARENTHETICAL,
            ElementType.DIALOGUE,
        ]
        assert elements[1].character_name == "MAYA"
        assert elements[2].character_name == "MAYA"

    def test_lookahead_skips_one_blank_line(self):
        document = assemble("JASON\n\nHello there.")

        assert next(document.elements()).element_type is ElementType.CHARACTER_CUE

    def test_lookahead_window_is_limited(self):
        """Dialogue further away than the lookahead window does not make a cue."""
        document = assemble("JASON\n\n\nHello there.")

        assert next(document.elements()).element_type is ElementType.ACTION

    def test_wider_lookahead_from_config(self):
        assembler = ScreenplayAssembler(ScreenplayConfig(cue_lookahead=3))

        document = assembler.assemble("JASON\n\n\nHello there.")

        assert next(document.elements()).element_type is ElementType.CHARACTER_CUE

    def test_cue_length_limit(self):
        long_name = "THE EXTREMELY LONG WINDED NARRATOR OF THINGS"
        document = assemble(f"{long_name}\nHello there.")

        assert next(document.elements()).element_type is ElementType.ACTION

    @pytest.mark.parametrize("line", ["INT", "EXT OF THE HOUSE", "FADE", "THE END", "INTERN", "EXTRAS", "CUTTER"])
    def test_reserved_words_never_cue(self, line):
        document = assemble(f"{line}\nHello there.")

        assert next(document.elements()).element_type is not ElementType.CHARACTER_CUE

    def test_reserved_prefix_after_heading(self):
        """A name starting with a reserved word stays action."""
        document = assemble("INT. ROOM - DAY\nINTERN\nHi there.")

        assert [(e.element_type, e.content) for e in document.elements()][1] == (ElementType.ACTION, "INTERN")

    def test_blank_line_ends_dialogue(self):
        document = assemble("JASON\nHello there.\n\nShe leaves.")

        assert _types(document)[-1] is ElementType.ACTION

    def test_caps_line_ends_dialogue(self):
        document = assemble("JASON\nHello there.\nA LOUD CRASH")

        assert _types(document) == [
            ElementType.CHARACTER_CUE,
            ElementType.DIALOGUE,
            ElementType.ACTION,
        ]

    def test_dialogue_before_any_scene(self):
        document = assemble("JASON\nHi.")

        assert all(e.scene_index is None for e in document.elements())

    def test_markup_is_cleaned_before_classification(self):
        document = assemble("**INT. OFFICE - DAY**\n<b>JASON</b>\n*Hello there.*")

        assert _types(document) == [
            ElementType.SCENE_HEADING,
            ElementType.CHARACTER_CUE,
            ElementType.DIALOGUE,
        ]


class TestDocument:
    """Tests for document structure and metadata."""

    def test_empty_text_yields_one_page(self):
        document = assemble("")

        assert len(document.pages) == 1
        assert document.metadata.page_count == 1
        assert document.metadata.scene_count == 0

    @pytest.mark.parametrize("text", ["\n\n\n", "(((", "***", "INT.", "\u200b "])
    def test_never_raises(self, text):
        document = assemble(text)

        assert len(document.pages) >= 1

    def test_sample_metadata(self, sample_document):
        metadata = sample_document.metadata

        assert metadata.scene_count == 2
        assert metadata.character_count == 3
        assert metadata.page_count == 1
        assert metadata.estimated_runtime == "1 minutes"

    def test_title_and_episode(self, sample_document):
        assert sample_document.title == "Pilot"
        assert sample_document.episode_number == 1
        assert sample_document.to_dict()["title"] == "Pilot"

    def test_scene_indices_increase(self, sample_document):
        headings = [e for e in sample_document.elements() if e.element_type is ElementType.SCENE_HEADING]

        assert [h.scene_index for h in headings] == [1, 2]

    def test_order_preserved(self, sample_script, sample_document):
        """Non-empty elements appear in the order of their source lines."""
        contents = [e.content for e in sample_document.elements() if e.content]

        assert contents[0] == "FADE IN:"
        assert contents[-1] == "Then we're done."
        assert contents.index("Hello there.") < contents.index("We need to talk.")

    def test_pagination(self):
        text = "\n".join(["He walks."] * 200)

        document = assemble(text)

        assert document.metadata.page_count == 4
        assert [len(p.elements) for p in document.pages] == [56, 56, 56, 32]
        assert [p.page_number for p in document.pages] == [1, 2, 3, 4]
        assert document.metadata.estimated_runtime_minutes == 4

    def test_small_page_limit(self):
        assembler = ScreenplayAssembler(ScreenplayConfig(page_element_limit=2))

        document = assembler.assemble("a\nb\nc\nd\ne")

        assert [len(p.elements) for p in document.pages] == [3, 2]

    def test_to_dict(self, sample_document):
        data = sample_document.to_dict()

        assert data["metadata"]["scene_count"] == 2
        first = data["pages"][0]["elements"][0]
        assert first == {"type": "transition", "content": "FADE IN:"}
