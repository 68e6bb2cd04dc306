"""Test per-slide directive parsing and title inheritance."""

import pytest

from slide_segmenter.directives import find_secondary_title, inherit_title, parse_slide, size_media
from slide_segmenter.lines import LineKind, classify_lines


def _parse(text, alignment="center", animation="none"):
    return parse_slide(classify_lines(text), default_alignment=alignment, default_animation=animation)


class TestMediaSizing:

    def test_width_and_height_in_pixels(self):
        assert size_media("![cat](cat.png =300x200)") == (
            '<img src="cat.png" alt="cat" style="width: 300px; height: 200px;">'
        )

    def test_width_only_keeps_unit(self):
        assert size_media("![a](a.png =50%x)") == '<img src="a.png" alt="a" style="width: 50%;">'

    def test_height_only(self):
        assert size_media("![a](a.png =x10em)") == '<img src="a.png" alt="a" style="height: 10em;">'

    def test_units_containing_x(self):
        assert size_media("![a](a.png =10exx2em)") == (
            '<img src="a.png" alt="a" style="width: 10ex; height: 2em;">'
        )
        assert size_media("![a](a.png =300pxx200px)") == (
            '<img src="a.png" alt="a" style="width: 300px; height: 200px;">'
        )

    def test_unparsable_size_is_left_alone(self):
        assert size_media("![a](a.png =10ex)") == "![a](a.png =10ex)"

    def test_plain_image_unchanged(self):
        assert size_media("![a](a.png)") == "![a](a.png)"

    def test_image_inside_text(self):
        result = size_media("Look: ![a](a.png =20x) here")
        assert result == 'Look: <img src="a.png" alt="a" style="width: 20px;"> here'

    def test_code_block_is_not_rewritten(self):
        slide = _parse("```\n![a](a.png =1x2)\n```")
        assert "![a](a.png =1x2)" in slide.content


class TestAlignment:

    def test_left_marker_on_own_line(self):
        slide = _parse("::left\n# Title\nBody")

        assert slide.alignment == "left"
        assert slide.content == "# Title\nBody"
        assert slide.source_range == (0, 2)

    def test_left_marker_on_same_line(self):
        slide = _parse("::left # Title")

        assert slide.alignment == "left"
        assert slide.content == "# Title"
        assert slide.lines[0].kind == LineKind.HEADING

    def test_default_alignment(self):
        assert _parse("# Title").alignment == "center"
        assert _parse("# Title", alignment="left").alignment == "left"

    def test_misspelled_marker_stays_literal(self):
        slide = _parse("::lefty\ntext")

        assert slide.alignment == "center"
        assert slide.content.startswith("::lefty")


class TestAnimation:

    def test_fragment_after_left(self):
        slide = _parse("::left\n::fragment fade-up\n# T")

        assert slide.alignment == "left"
        assert slide.animation == "fade-up"
        assert slide.content == "# T"

    def test_inherits_default(self):
        assert _parse("# T", animation="grow").animation == "grow"

    def test_fragment_without_name_stays_literal(self):
        slide = _parse("::fragment\ntext")

        assert slide.animation == "none"
        assert slide.content == "::fragment\ntext"


class TestSpeakerNotes:

    def test_notes_are_extracted(self):
        slide = _parse("# T\nbody\nnote: say hi\nmore")

        assert slide.content == "# T\nbody"
        assert slide.notes == "say hi\nmore"
        assert slide.source_range == (0, 3)

    def test_notes_marker_on_first_line_is_content(self):
        slide = _parse("Note: hi")

        assert slide.content == "Note: hi"
        assert slide.notes == ""

    def test_notes_inside_code_are_content(self):
        slide = _parse("# T\n```\nNote: x\n```")
        assert slide.notes == ""
        assert "Note: x" in slide.content

    def test_everything_after_first_marker_is_notes(self):
        slide = _parse("# T\nNote: one\nNote: two")
        assert slide.notes == "one\nNote: two"


def test_directive_only_section_is_dropped():
    assert _parse("::left\n\n") is None
    assert _parse("\n\n") is None


class TestTitleInheritance:

    def test_deep_heading_gets_prefix(self):
        slide = inherit_title(_parse("### C\nx"), "B")
        assert slide.content == "### B - C\nx"

    def test_fourth_level_heading(self):
        slide = inherit_title(_parse("#### D"), "B")
        assert slide.content == "#### B - D"

    def test_already_prefixed_heading_unchanged(self):
        slide = inherit_title(_parse("### B details"), "B")
        assert slide.content == "### B details"

    def test_no_secondary_title(self):
        slide = inherit_title(_parse("### C"), "")
        assert slide.content == "### C"

    def test_second_level_heading_untouched(self):
        slide = inherit_title(_parse("## C"), "B")
        assert slide.content == "## C"

    @pytest.mark.parametrize("text, expected", [
        ("# A\n## B  \ntext", "B"),
        ("### Only deep", None),
        ("```\n## in code\n```", None),
    ])
    def test_find_secondary_title(self, text, expected):
        assert find_secondary_title(_parse(text)) == expected
