"""
Line classification for slide segmentation.

The document is scanned once, front to back, and every line is tagged with a
:class:`LineKind`.  Fenced code (```` ``` ````) and display math (``$$``) are
tracked while scanning: lines inside such a block are never reported as
separators or headings, so a ``# comment`` in a Python snippet or a ``---``
in a YAML sample cannot start a new slide.
"""
import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List

logger = logging.getLogger(__name__)

_HEADING_RE = re.compile(r'^(#+)[ \t]')

ALIGN_DIRECTIVE_RE = re.compile(r'^::left(?=\s|$)\s*')
FRAGMENT_DIRECTIVE_RE = re.compile(r'^::fragment[ \t]+(\S+)\s*')


class LineKind(Enum):
    BLANK = "blank"
    HEADING = "heading"
    HSEP = "horizontal_separator"  # ---
    VSEP = "vertical_separator"    # --
    FENCE = "fence"                # ``` opening or closing
    MATH = "math"                  # $$ opening or closing
    TABLE = "table"
    QUOTE = "quote"
    DIRECTIVE = "directive"        # ::left, ::fragment <name>
    TEXT = "text"


@dataclass(frozen=True)
class Line:
    """A source line with its position in the original document."""
    index: int
    text: str
    kind: LineKind
    level: int = 0          # heading level, 0 for non-headings
    in_block: bool = False  # inside a fenced code or display-math block

    def is_blank(self) -> bool:
        return self.kind == LineKind.BLANK

    def is_heading(self, min_level: int = 1, max_level: int = None) -> bool:
        if self.kind != LineKind.HEADING:
            return False
        if self.level < min_level:
            return False
        return max_level is None or self.level <= max_level


def _classify_open(text: str, stripped: str):
    """Classify a line outside any block. Returns (kind, level, opens_block)."""
    if stripped.startswith('```'):
        return LineKind.FENCE, 0, "code"
    if stripped.startswith('$$'):
        # $$x$$ on a single line is a complete block
        single_line = len(stripped) >= 4 and stripped.endswith('$$')
        return LineKind.MATH, 0, None if single_line else "math"
    if not stripped:
        return LineKind.BLANK, 0, None
    if stripped == '---':
        return LineKind.HSEP, 0, None
    if stripped == '--':
        return LineKind.VSEP, 0, None
    heading = _HEADING_RE.match(text)
    if heading:
        return LineKind.HEADING, len(heading.group(1)), None
    if stripped.startswith('|'):
        return LineKind.TABLE, 0, None
    if stripped.startswith('>'):
        return LineKind.QUOTE, 0, None
    if ALIGN_DIRECTIVE_RE.match(stripped) or FRAGMENT_DIRECTIVE_RE.match(stripped):
        return LineKind.DIRECTIVE, 0, None
    return LineKind.TEXT, 0, None


def classify_lines(text: str) -> List[Line]:
    """
    Split *text* on newlines and classify every line.

    Args:
        text: Raw markdown document

    Returns:
        One :class:`Line` per input line, in order
    """
    if not text:
        return []

    lines = []
    block = None  # "code" | "math" while a block is open

    for index, raw in enumerate(text.split('\n')):
        raw = raw.rstrip('\r')
        stripped = raw.strip()

        if block == "code":
            if stripped.startswith('```'):
                lines.append(Line(index, raw, LineKind.FENCE, in_block=True))
                block = None
            else:
                kind = LineKind.TEXT if stripped else LineKind.BLANK
                lines.append(Line(index, raw, kind, in_block=True))
            continue

        if block == "math":
            if stripped.endswith('$$'):
                lines.append(Line(index, raw, LineKind.MATH, in_block=True))
                block = None
            else:
                kind = LineKind.TEXT if stripped else LineKind.BLANK
                lines.append(Line(index, raw, kind, in_block=True))
            continue

        kind, level, opens = _classify_open(raw, stripped)
        lines.append(Line(index, raw, kind, level=level))
        block = opens

    if block is not None:
        logger.debug(f"Unterminated {block} block runs to end of document")

    return lines


def reclassify(line: Line, text: str) -> Line:
    """Return *line* with new text, classified as if outside any block."""
    kind, level, _ = _classify_open(text, text.strip())
    return Line(line.index, text, kind, level=level)


def has_content(lines: Iterable[Line]) -> bool:
    """True if any of *lines* is non-blank."""
    return any(not line.is_blank() for line in lines)


def has_body(lines: Iterable[Line]) -> bool:
    """True if any of *lines* is more than whitespace or a directive token."""
    return any(line.kind not in (LineKind.BLANK, LineKind.DIRECTIVE) for line in lines)


def trailing_directives(lines: List[Line]) -> List[Line]:
    """The directive lines (and blanks between them) closing *lines*.

    A directive written just above a heading belongs to the slide that the
    heading starts.
    """
    start = len(lines)
    for position in range(len(lines) - 1, -1, -1):
        kind = lines[position].kind
        if kind == LineKind.DIRECTIVE:
            start = position
        elif kind != LineKind.BLANK:
            break
    return lines[start:]


def trim_blank(lines: List[Line]) -> List[Line]:
    """Drop leading and trailing blank lines."""
    start, end = 0, len(lines)
    while start < end and lines[start].is_blank():
        start += 1
    while end > start and lines[end - 1].is_blank():
        end -= 1
    return lines[start:end]


def join_lines(lines: Iterable[Line]) -> str:
    return '\n'.join(line.text for line in lines)
