import re

import pytest

from prcompass.styles import (
    ERROR_STYLE,
    HELP_STYLE,
    ROUNDED_BORDER,
    Align,
    Style,
)

ANSI = re.compile(r"\x1b\[[0-9;]*m")


def plain(text):
    return ANSI.sub("", text)


def test_plain_style_leaves_text_unchanged():
    assert Style().render("hello") == "hello"


def test_plain_style_pads_lines_to_common_width():
    lines = Style().render("a\nbc").split("\n")
    assert [len(line) for line in lines] == [2, 2]
    assert lines[0].rstrip() == "a"


def test_padding_surrounds_text():
    lines = Style(padding=(1, 2, 1, 2)).render("ab").split("\n")
    assert len(lines) == 3
    assert all(len(line) == 6 for line in lines)
    assert lines[1].strip() == "ab"
    assert lines[0].strip() == ""


def test_rounded_border_box():
    assert Style(border=ROUNDED_BORDER).render("hi") == "╭──╮\n│hi│\n╰──╯"


def test_bold_uses_sgr_code():
    assert Style(bold=True).render("x").startswith("\x1b[1m")


def test_foreground_colour_is_true_colour():
    assert "38;2;255;0;0" in Style(foreground="#FF0000").render("x")


def test_invalid_colour_raises():
    with pytest.raises(ValueError):
        Style(foreground="#12").render("x")


def test_center_alignment_balances_lines():
    lines = Style(align=Align.CENTER).render("a\nabc").split("\n")
    assert len(lines[0]) == len(lines[1])
    assert lines[0].strip() == "a"
    assert lines[0].startswith(" ")


def test_margin_adds_blank_space():
    lines = Style(margin=(1, 0, 0, 2)).render("x").split("\n")
    assert len(lines) == 2
    assert lines[0].strip() == ""
    assert lines[1] == " " * 2 + "x"


def test_help_style_draws_only_top_border():
    rendered = plain(HELP_STYLE.render("help"))
    assert ROUNDED_BORDER.vertical not in rendered
    assert "help" in rendered
    lines = rendered.split("\n")
    # first line is the top margin, then the border line
    assert lines[0].strip() == ""
    assert set(lines[1]) == {"─"}


def test_error_style_boxes_message():
    rendered = plain(ERROR_STYLE.render("boom"))
    lines = rendered.split("\n")
    assert lines[0].startswith(ROUNDED_BORDER.top_left)
    assert lines[-1].endswith(ROUNDED_BORDER.bottom_right)
    assert any("boom" in line for line in lines)