"""Split oversized slides into vertical continuation slides."""
import logging
from dataclasses import replace
from typing import List, Tuple

from .directives import ParsedSlide
from .lines import Line, join_lines, trim_blank

logger = logging.getLogger(__name__)

AUTO_SPLIT_CHAR_LIMIT = 1500
AUTO_SPLIT_LINE_LIMIT = 24
AUTO_SPLIT_RATIO = 0.8

DEFAULT_CONTINUATION = ("##", "Continued")


def _continuation_heading(slide: ParsedSlide) -> Tuple[str, str]:
    """Marker and text of the slide's first heading."""
    for line in slide.lines:
        if line.is_heading():
            marker = '#' * line.level
            return marker, line.text[line.level:].strip()
    return DEFAULT_CONTINUATION


def _chunk_lines(lines: Tuple[Line, ...], char_limit: int, line_limit: int,
                 split_ratio: float) -> List[List[Line]]:
    chunks = []
    current: List[Line] = []
    char_count = 0

    for line in lines:
        # never break inside a fenced code or display-math block
        if current and not line.in_block:
            heading_break = char_count > char_limit * split_ratio and line.text.startswith('#')
            if heading_break or len(current) >= line_limit:
                chunks.append(current)
                current = []
                char_count = 0
        current.append(line)
        char_count += len(line.text) + 1

    if current:
        chunks.append(current)

    chunks = [trim_blank(chunk) for chunk in chunks]
    return [chunk for chunk in chunks if chunk]


def auto_split(slide: ParsedSlide, *, char_limit: int = AUTO_SPLIT_CHAR_LIMIT,
               line_limit: int = AUTO_SPLIT_LINE_LIMIT,
               split_ratio: float = AUTO_SPLIT_RATIO) -> List[ParsedSlide]:
    """
    Break a slide that is too long to display into several parts.

    A slide is too long when its content exceeds *char_limit* characters or
    *line_limit* lines.  Every part after the first is headed with the first
    heading of the whole slide plus ``(Part N)``; speaker notes stay with the
    first part.  Source ranges of the parts tile the original range.

    Returns:
        ``[slide]`` if no split was needed, otherwise the parts in order
    """
    if len(slide.content) <= char_limit and len(slide.lines) <= line_limit:
        return [slide]

    chunks = _chunk_lines(slide.lines, char_limit, line_limit, split_ratio)
    if len(chunks) <= 1:
        return [slide]

    marker, title = _continuation_heading(slide)
    start, end = slide.source_range
    parts = []

    for position, chunk in enumerate(chunks):
        part_start = start if position == 0 else chunk[0].index
        part_end = end if position == len(chunks) - 1 else chunks[position + 1][0].index - 1
        body = join_lines(chunk)
        if position > 0:
            body = f"{marker} {title} (Part {position + 1})\n\n{body}"
        parts.append(replace(
            slide,
            lines=tuple(chunk),
            content=body,
            notes=slide.notes if position == 0 else "",
            source_range=(part_start, part_end),
        ))

    logger.debug(f"Auto-split lines {start}-{end} into {len(parts)} parts")
    return parts
