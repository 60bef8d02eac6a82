"""Colour theme and a small terminal style renderer."""

from __future__ import annotations

import unicodedata
from dataclasses import dataclass
from enum import Enum

BACKGROUND_COLOR = "#1A1D23"
SURFACE_COLOR = "#252831"
BORDER_COLOR = "#3B4048"

PRIMARY_COLOR = "#7C9CBF"
SECONDARY_COLOR = "#9CABCA"
ACCENT_COLOR = "#98C379"

SUCCESS_COLOR = "#98C379"
WARNING_COLOR = "#E5C07B"
ERROR_COLOR = "#E06C75"
INFO_COLOR = "#61AFEF"

TEXT_PRIMARY = "#ABB2BF"
TEXT_SECONDARY = "#828997"
TEXT_MUTED = "#5C6370"
TEXT_BRIGHT = "#DCDFE4"

HEADER_BG_COLOR = "#2C3038"
HEADER_FG_COLOR = "#DCDFE4"
SELECTED_BG_COLOR = "#4B5263"
SELECTED_FG_COLOR = "#FFFFFF"
HOVER_BG_COLOR = "#383C45"

_RESET = "\x1b[0m"


@dataclass(frozen=True)
class Border:
    """Characters used to draw a box."""

    top_left: str
    top_right: str
    bottom_left: str
    bottom_right: str
    horizontal: str
    vertical: str


ROUNDED_BORDER = Border("╭", "╮", "╰", "╯", "─", "│")
NORMAL_BORDER = Border("┌", "┐", "└", "┘", "─", "│")


class Align(Enum):
    LEFT = "left"
    CENTER = "center"


def _display_width(text: str) -> int:
    width = 0
    for char in text:
        if unicodedata.combining(char) or char in "\ufe0f\u200d":
            continue
        width += 2 if unicodedata.east_asian_width(char) in ("W", "F") else 1
    return width


def _rgb(color: str) -> tuple[int, int, int]:
    digits = color.lstrip("#")
    if len(digits) != 6:
        raise ValueError(f"invalid colour: {color!r}")
    try:
        return int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16)
    except ValueError:
        raise ValueError(f"invalid colour: {color!r}") from None


def _sgr(foreground: str | None, background: str | None, bold: bool) -> str:
    codes = []
    if bold:
        codes.append("1")
    if foreground:
        codes.append("38;2;{};{};{}".format(*_rgb(foreground)))
    if background:
        codes.append("48;2;{};{};{}".format(*_rgb(background)))
    return f"\x1b[{';'.join(codes)}m" if codes else ""


@dataclass(frozen=True)
class Style:
    """A block style: colours, weight, padding, border and margin.

    Padding and margin are (top, right, bottom, left); border sides are
    (top, right, bottom, left) flags.
    """

    foreground: str | None = None
    background: str | None = None
    bold: bool = False
    padding: tuple[int, int, int, int] = (0, 0, 0, 0)
    margin: tuple[int, int, int, int] = (0, 0, 0, 0)
    border: Border | None = None
    border_sides: tuple[bool, bool, bool, bool] = (True, True, True, True)
    border_foreground: str | None = None
    align: Align = Align.LEFT

    def render(self, text: str) -> str:
        """Return the text laid out and coloured with this style."""
        lines = str(text).split("\n")
        width = max(_display_width(line) for line in lines)
        body = [self._aligned(line, width) for line in lines]

        pad_top, pad_right, pad_bottom, pad_left = self.padding
        inner = width + pad_left + pad_right
        body = [" " * pad_left + line + " " * pad_right for line in body]
        blank = " " * inner
        body = [blank] * pad_top + body + [blank] * pad_bottom

        codes = _sgr(self.foreground, self.background, self.bold)
        if codes:
            body = [f"{codes}{line}{_RESET}" for line in body]

        outer = inner
        if self.border is not None:
            body, outer = self._bordered(body, inner)

        m_top, m_right, m_bottom, m_left = self.margin
        body = [" " * m_left + line + " " * m_right for line in body]
        margin_line = " " * (outer + m_left + m_right)
        body = [margin_line] * m_top + body + [margin_line] * m_bottom
        return "\n".join(body)

    def _aligned(self, line: str, width: int) -> str:
        gap = width - _display_width(line)
        if self.align is Align.CENTER:
            left = gap // 2
            return " " * left + line + " " * (gap - left)
        return line + " " * gap

    def _bordered(self, body: list[str], inner: int) -> tuple[list[str], int]:
        border = self.border
        top, right, bottom, left = self.border_sides
        codes = _sgr(self.border_foreground, None, False)

        def paint(chars: str) -> str:
            return f"{codes}{chars}{_RESET}" if codes and chars else chars

        def edge(left_corner: str, right_corner: str) -> str:
            return paint(
                (left_corner if left else "")
                + border.horizontal * inner
                + (right_corner if right else "")
            )

        side_left = paint(border.vertical) if left else ""
        side_right = paint(border.vertical) if right else ""
        framed = [side_left + line + side_right for line in body]
        if top:
            framed.insert(0, edge(border.top_left, border.top_right))
        if bottom:
            framed.append(edge(border.bottom_left, border.bottom_right))
        return framed, inner + int(left) + int(right)


BASE_STYLE = Style(
    foreground=TEXT_PRIMARY,
    background=BACKGROUND_COLOR,
    padding=(1, 2, 1, 2),
    border=ROUNDED_BORDER,
    border_foreground=BORDER_COLOR,
)

HEADER_STYLE = Style(
    foreground=HEADER_FG_COLOR,
    background=HEADER_BG_COLOR,
    bold=True,
    padding=(0, 1, 0, 1),
    align=Align.CENTER,
)

SELECTED_STYLE = Style(
    foreground=SELECTED_FG_COLOR,
    background=SELECTED_BG_COLOR,
    bold=True,
    padding=(0, 1, 0, 1),
)

CELL_STYLE = Style(foreground=TEXT_PRIMARY, padding=(0, 1, 0, 1))

HELP_STYLE = Style(
    foreground=TEXT_SECONDARY,
    background=SURFACE_COLOR,
    padding=(1, 2, 1, 2),
    border=NORMAL_BORDER,
    border_sides=(True, False, False, False),
    border_foreground=BORDER_COLOR,
    margin=(1, 0, 0, 0),
)

STATUS_STYLE = Style(foreground=ACCENT_COLOR, margin=(0, 0, 1, 0))

TITLE_STYLE = Style(
    foreground=TEXT_BRIGHT,
    background=HEADER_BG_COLOR,
    bold=True,
    padding=(1, 3, 1, 3),
    margin=(0, 0, 1, 0),
    border=NORMAL_BORDER,
    border_foreground=PRIMARY_COLOR,
)

ERROR_STYLE = Style(
    foreground=ERROR_COLOR,
    background=SURFACE_COLOR,
    bold=True,
    padding=(1, 2, 1, 2),
    border=ROUNDED_BORDER,
    border_foreground=ERROR_COLOR,
)

MUTED_STYLE = Style(foreground=TEXT_MUTED)