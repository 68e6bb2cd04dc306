"""
Inject fragment (progressive reveal) annotations into slide markdown.

The annotations follow the Reveal.js markdown conventions:

* block level  ``<!-- .element: class="fragment fade-up" -->`` on its own line,
  applied by the renderer to the element right before it;
* inline level ``<span class="fragment fade-up">…</span>`` around list item text.

Multi-line constructs (fenced code, display math, tables, blockquotes) are
annotated once as a whole, never line by line.
"""
import re
from enum import Enum
from typing import List, Optional

from .models import NO_ANIMATION

ANNOTATION_MARKER = '<!-- .element:'

_HEADING_RE = re.compile(r'^#{1,6}(\s|$)')
_DIRECTIVE_RE = re.compile(r'^::(left|fragment)\b')
_LIST_ITEM_RE = re.compile(
    r'^(?P<indent>\s*)(?P<marker>[-*+]|\d+[.)])(?P<gap>\s+)(?P<checkbox>\[[ xX]\]\s+)?(?P<text>.*)$'
)


class BlockState(Enum):
    NONE = "none"
    CODE = "code"
    MATH = "math"
    TABLE = "table"
    QUOTE = "quote"


def block_annotation(animation: str, indent: str = "") -> str:
    return f'{indent}<!-- .element: class="fragment {animation}" -->'


def inline_annotation(animation: str, text: str) -> str:
    return f'<span class="fragment {animation}">{text}</span>'


def _is_skipped(stripped: str) -> bool:
    return (
        not stripped
        or bool(_HEADING_RE.match(stripped))
        or stripped in ('---', '--')
        or bool(_DIRECTIVE_RE.match(stripped))
        or ANNOTATION_MARKER in stripped
        or 'class="fragment' in stripped
    )


def _row_state(stripped: str) -> BlockState:
    if stripped.startswith('|'):
        return BlockState.TABLE
    if stripped.startswith('>'):
        return BlockState.QUOTE
    return BlockState.NONE


def _indent(line: str) -> int:
    return len(line) - len(line.lstrip())


def _content_column(item) -> int:
    """Column where the text of a list item starts."""
    gap = len(item.group('gap'))
    if gap > 4:
        # the text is an indented code block; content starts one space in
        gap = 1
    return len(item.group('indent')) + len(item.group('marker')) + gap


def _continues_paragraph(line: str) -> bool:
    """True if *line* would be read as more text of the paragraph above it."""
    stripped = line.strip()
    return not (
        _is_skipped(stripped)
        or _LIST_ITEM_RE.match(line)
        or _row_state(stripped) != BlockState.NONE
        or stripped.startswith(('```', '$$'))
    )


def inject_fragments(content: str, animation: Optional[str]) -> str:
    """
    Annotate *content* so each block appears progressively.

    Block annotations for lines inside a list item are indented to the item's
    content column so they stay in the item instead of closing the list.

    Args:
        content: Slide markdown, speaker notes already removed
        animation: Fragment style name; ``None`` or ``"none"`` leaves the
            content untouched

    Returns:
        Annotated markdown
    """
    if not content or not animation or animation == NO_ANIMATION:
        return content

    lines = content.split('\n')
    out: List[str] = []
    state = BlockState.NONE
    block_indent = ""
    item_column: Optional[int] = None  # content column of the enclosing list item
    position = 0

    while position < len(lines):
        line = lines[position]
        stripped = line.strip()
        position += 1

        if state == BlockState.CODE:
            out.append(line)
            if stripped.startswith('```'):
                out.append(block_annotation(animation, block_indent))
                state = BlockState.NONE
            continue

        if state == BlockState.MATH:
            out.append(line)
            if stripped.endswith('$$'):
                out.append(block_annotation(animation, block_indent))
                state = BlockState.NONE
            continue

        if item_column is not None and stripped and _indent(line) < item_column \
                and not _LIST_ITEM_RE.match(line):
            item_column = None
        indent = ' ' * item_column if item_column is not None else ''

        if stripped.startswith('```'):
            out.append(line)
            state, block_indent = BlockState.CODE, indent
            continue

        if stripped.startswith('$$'):
            out.append(line)
            if len(stripped) >= 4 and stripped.endswith('$$'):
                out.append(block_annotation(animation, indent))
            else:
                state, block_indent = BlockState.MATH, indent
            continue

        row_state = _row_state(stripped)
        if row_state != BlockState.NONE:
            out.append(line)
            following = lines[position].strip() if position < len(lines) else ""
            if _row_state(following) != row_state:
                # last row of the table / quote
                out.append(block_annotation(animation, indent))
            continue

        if _is_skipped(stripped):
            out.append(line)
            continue

        item = _LIST_ITEM_RE.match(line)
        if item:
            item_column = _content_column(item)
            wrapped = []
            while position < len(lines) and _continues_paragraph(lines[position]):
                wrapped.append(lines[position])
                position += 1

            if item.group('checkbox') or wrapped:
                # the whole item is one fragment
                out.append(line)
                out.extend(wrapped)
                out.append(block_annotation(animation, ' ' * item_column))
            else:
                out.append(
                    f"{item.group('indent')}{item.group('marker')}{item.group('gap')}"
                    f"{inline_annotation(animation, item.group('text'))}"
                )
            continue

        out.append(line)
        out.append(block_annotation(animation, indent))

    return '\n'.join(out)
