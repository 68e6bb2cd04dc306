"""
Per-slide directive parsing.

A raw sub-section is turned into a :class:`ParsedSlide` by applying, in order:

1. inline media sizing  ``![alt](url =WxH)``
2. the alignment marker ``::left``
3. the animation override ``::fragment <name>``
4. speaker notes (``Note:`` up to the end of the section)

Title inheritance for ``###``+ headings runs afterwards, once the caller knows
the current secondary (``##``) title.
"""
import logging
import re
from dataclasses import dataclass, replace
from html import escape
from typing import List, Optional, Tuple

from .lines import (
    ALIGN_DIRECTIVE_RE,
    FRAGMENT_DIRECTIVE_RE,
    Line,
    LineKind,
    join_lines,
    reclassify,
    trim_blank,
)
from .models import ALIGN_LEFT, NO_ANIMATION

logger = logging.getLogger(__name__)

NOTES_RE = re.compile(r'^note:', re.IGNORECASE)
_DIMENSION = r'(?:auto|\d+(?:\.\d+)?(?:px|em|ex|rem|ch|vw|vh|%)?)?'
MEDIA_SIZE_RE = re.compile(
    r'!\[(?P<alt>[^\]]*)\]\((?P<url>[^)\s]+)\s+='
    rf'(?P<width>{_DIMENSION})x(?P<height>{_DIMENSION})\)'
)
DEEP_HEADING_RE = re.compile(r'^(#{3,})\s+(.+)$')
_NUMERIC_RE = re.compile(r'\d+(?:\.\d+)?')


@dataclass(frozen=True)
class ParsedSlide:
    """A sub-section after directive parsing, still tied to its source lines."""
    lines: Tuple[Line, ...]
    content: str
    notes: str
    alignment: str
    animation: str
    source_range: Tuple[int, int]


def _dimension(value: str) -> str:
    if _NUMERIC_RE.fullmatch(value):
        return f"{value}px"
    return value


def _sized_image(match) -> str:
    style = []
    if match.group('width'):
        style.append(f"width: {_dimension(match.group('width'))};")
    if match.group('height'):
        style.append(f"height: {_dimension(match.group('height'))};")

    attrs = [f'src="{escape(match.group("url"))}"', f'alt="{escape(match.group("alt"))}"']
    if style:
        attrs.append(f'style="{" ".join(style)}"')
    return f"<img {' '.join(attrs)}>"


def size_media(text: str) -> str:
    """Rewrite ``![alt](url =WxH)`` into a sized ``<img>`` element.

    Either dimension may be omitted (``=300x``, ``=x200``).  Bare numbers are
    taken as pixels; values with a CSS unit (``50%``, ``10em``, ``2ex``) are
    kept as-is.  A size that does not parse leaves the image untouched.
    """
    if '](' not in text:
        return text
    return MEDIA_SIZE_RE.sub(_sized_image, text)


def _strip_directive(lines: List[Line], pattern) -> Tuple[Optional[re.Match], List[Line]]:
    """Remove a directive token from the start of *lines*, if present."""
    if not lines or lines[0].in_block:
        return None, lines

    first = lines[0]
    match = pattern.match(first.text.strip())
    if not match:
        return None, lines

    rest = first.text.strip()[match.end():]
    if rest:
        return match, [reclassify(first, rest)] + lines[1:]
    # token sat on its own line: the following whitespace goes with it
    return match, trim_blank(lines[1:])


def _split_notes(lines: List[Line]) -> Tuple[List[Line], str]:
    """Cut the ``Note:`` block off the end of the slide."""
    for position, line in enumerate(lines):
        if position == 0 or line.in_block:
            continue
        if NOTES_RE.match(line.text):
            notes = '\n'.join([line.text[len('note:'):]] + [l.text for l in lines[position + 1:]])
            return lines[:position], notes.strip()
    return lines, ""


def parse_slide(lines: List[Line], *, default_alignment: str,
                default_animation: str = NO_ANIMATION) -> Optional[ParsedSlide]:
    """
    Apply slide directives to one raw sub-section.

    Args:
        lines: Classified lines of the sub-section
        default_alignment: Alignment used when no ``::left`` marker is present
        default_animation: Animation used when no ``::fragment`` override is present

    Returns:
        The parsed slide, or ``None`` if nothing displayable is left
    """
    body = trim_blank(lines)
    if not body:
        return None
    source_range = (body[0].index, body[-1].index)

    # 1. media sizing
    body = [line if line.in_block else replace(line, text=size_media(line.text)) for line in body]

    # content is trimmed, so the first line loses its indentation
    if not body[0].in_block:
        body[0] = reclassify(body[0], body[0].text.lstrip())

    # 2. alignment
    alignment = default_alignment
    match, body = _strip_directive(body, ALIGN_DIRECTIVE_RE)
    if match:
        alignment = ALIGN_LEFT

    # 3. animation override
    animation = default_animation
    match, body = _strip_directive(body, FRAGMENT_DIRECTIVE_RE)
    if match:
        animation = match.group(1)

    # 4. speaker notes
    body, notes = _split_notes(body)
    body = trim_blank(body)

    if not body:
        logger.debug(f"Lines {source_range[0]}-{source_range[1]} hold only directives, skipped")
        return None

    return ParsedSlide(
        lines=tuple(body),
        content=join_lines(body),
        notes=notes,
        alignment=alignment,
        animation=animation,
        source_range=source_range,
    )


def inherit_title(slide: ParsedSlide, secondary_title: str) -> ParsedSlide:
    """Prefix a leading ``###``+ heading with the current ``##`` title.

    ``### Details`` under ``## Results`` becomes ``### Results - Details``,
    unless the heading already starts with the secondary title.
    """
    if not secondary_title:
        return slide

    first = slide.lines[0]
    if first.kind != LineKind.HEADING:
        return slide
    match = DEEP_HEADING_RE.match(first.text)
    if not match:
        return slide

    marker, title = match.groups()
    if title.startswith(secondary_title):
        return slide

    lines = (replace(first, text=f"{marker} {secondary_title} - {title}"),) + slide.lines[1:]
    return replace(slide, lines=lines, content=join_lines(lines))


def find_secondary_title(slide: ParsedSlide) -> Optional[str]:
    """Text of the first ``##`` heading in the slide, if any."""
    for line in slide.lines:
        if line.is_heading(2, 2):
            return line.text.lstrip('#').strip()
    return None
