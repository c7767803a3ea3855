"""
Settings that define the visual appearance of console log output.
"""

import re

from rich.highlighter import _combine_regex, RegexHighlighter
from rich.style import Style


## Colors

COLOR_HINT = "bright_black"

COLOR_KEY = "bright_blue"

COLOR_VALUE = "cyan"

COLOR_PATH = "cyan"

COLOR_LITERAL = "bright_blue"

COLOR_WARN = "bright_red"

COLOR_ERROR = "bright_red"


## Symbols

EMOJI_WARN = "△"

EMOJI_ERROR = EMOJI_WARN + EMOJI_WARN

EMOJI_ARROW = "→"


## Rich setup


class MdspaceHighlighter(RegexHighlighter):
    """
    Highlighter for workspace paths, rewrites, and counts in log lines.
    """

    base_style = "mdspace."
    highlights = [
        _combine_regex(
            f"(?P<warn>{re.escape(EMOJI_WARN)})",
            f"(?P<arrow>{re.escape(EMOJI_ARROW)}|->)",
        ),
        _combine_regex(
            r"(?P<ellipsis>(\.\.\.|…))",
            r"(?P<brace>[][{}()])",
            r"\b(?P<bool_true>True)\b|\b(?P<bool_false>False)\b|\b(?P<none>None)\b",
            r"(?P<path>\B(/[-\w._+ ]+)*\/)(?P<filename>[-\w._+]*)?",
            r"(?P<winpath>\b[A-Za-z]:[\\/][-\w._+\\/ ]*)",
            r"(?<![\\\w])(?P<str>'.*?(?<!\\)'|\".*?(?<!\\)\")",
            r"\b(?P<index>index -?\d+)\b",
        ),
    ]


RICH_STYLES = {
    "mdspace.warn": Style(color=COLOR_WARN, bold=True),
    "mdspace.arrow": Style(color=COLOR_HINT),
    "mdspace.ellipsis": Style(color=COLOR_HINT),
    "mdspace.brace": Style(bold=True),
    "mdspace.bool_true": Style(color=COLOR_VALUE, italic=True),
    "mdspace.bool_false": Style(color=COLOR_VALUE, italic=True),
    "mdspace.none": Style(color=COLOR_VALUE, italic=True),
    "mdspace.path": Style(color=COLOR_PATH),
    "mdspace.filename": Style(color=COLOR_PATH, bold=True),
    "mdspace.winpath": Style(color=COLOR_PATH),
    "mdspace.str": Style(color=COLOR_LITERAL),
    "mdspace.index": Style(color=COLOR_KEY),
}
