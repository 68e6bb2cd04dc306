#!/usr/bin/env python3
"""
Slide segmenter: turns a markdown document into a tree of slides.

Horizontal slides are separated by ``---`` or start at a ``#`` / ``##``
heading.  Inside a horizontal slide, ``--`` or a ``###``+ heading starts a
vertical sub-slide.  Each slide then goes through directive parsing,
title inheritance, auto-splitting and fragment injection.
"""

import json
import logging
from pathlib import Path
from typing import List, Optional, Tuple

from .autosplit import AUTO_SPLIT_CHAR_LIMIT, AUTO_SPLIT_LINE_LIMIT, AUTO_SPLIT_RATIO, auto_split
from .directives import find_secondary_title, inherit_title, parse_slide
from .fragments import inject_fragments
from .lines import Line, LineKind, classify_lines, has_body, has_content, trailing_directives
from .models import ALIGN_CENTER, ALIGNMENTS, NO_ANIMATION, SlideNode

logger = logging.getLogger(__name__)


def split_horizontal(lines: List[Line]) -> List[List[Line]]:
    """Split classified lines into horizontal sections.

    ``---`` lines are consumed; ``#`` and ``##`` headings open a new section
    once the current one has content, taking any directive lines written
    right above them along.  Blank sections are dropped.
    """
    return _split(lines, LineKind.HSEP, min_level=1, max_level=2)


def split_vertical(lines: List[Line]) -> List[List[Line]]:
    """Split one horizontal section on ``--`` lines and ``###``+ headings."""
    return _split(lines, LineKind.VSEP, min_level=3, max_level=None)


def _split(lines: List[Line], separator: LineKind, min_level: int,
           max_level: Optional[int]) -> List[List[Line]]:
    sections = []
    current: List[Line] = []

    for line in lines:
        if line.kind == separator:
            sections.append(current)
            current = []
            continue
        if line.is_heading(min_level, max_level) and has_body(current):
            carried = trailing_directives(current)
            sections.append(current[:len(current) - len(carried)])
            current = carried
        current.append(line)

    sections.append(current)
    return [section for section in sections if has_content(section)]


class SlideSegmenter:
    """
    Segment markdown into :class:`SlideNode` trees.

    The segmenter only holds configuration; every call to :meth:`segment`
    is independent, so one instance can be shared freely.
    """

    def __init__(
        self,
        *,
        char_limit: int = AUTO_SPLIT_CHAR_LIMIT,
        line_limit: int = AUTO_SPLIT_LINE_LIMIT,
        split_ratio: float = AUTO_SPLIT_RATIO,
        default_alignment: str = ALIGN_CENTER,
        default_animation: str = NO_ANIMATION,
    ):
        """Create a new :class:`SlideSegmenter`.

        Parameters
        ----------
        char_limit
            Slides longer than this many characters are auto-split.
        line_limit
            Slides with more lines than this are auto-split; also the maximum
            number of lines per part.
        split_ratio
            Fraction of *char_limit* after which a heading starts a new part.
        default_alignment
            Alignment for slides without a ``::left`` marker when the caller
            gives none.
        default_animation
            Fragment style for slides without a ``::fragment`` override when
            the caller gives none.
        """
        if char_limit <= 0 or line_limit <= 0:
            raise ValueError(f"Split limits must be positive (got {char_limit}, {line_limit})")
        if not 0 < split_ratio <= 1:
            raise ValueError(f"split_ratio must be in (0, 1], got {split_ratio}")
        if default_alignment not in ALIGNMENTS:
            raise ValueError(f"Invalid alignment: {default_alignment}")

        self.char_limit = char_limit
        self.line_limit = line_limit
        self.split_ratio = split_ratio
        self.default_alignment = default_alignment
        self.default_animation = default_animation or NO_ANIMATION

    def segment(
        self,
        text: Optional[str],
        global_animation: Optional[str] = None,
        global_alignment: Optional[str] = None,
    ) -> List[SlideNode]:
        """
        Segment a markdown document into slides.

        Args:
            text: Raw markdown document
            global_animation: Fragment style for slides without an override
            global_alignment: ``center`` or ``left`` for slides without a marker

        Returns:
            Top-level slides in presentation order; vertical groups are
            ``stack`` nodes
        """
        alignment = self._resolve_alignment(global_alignment)
        animation = global_animation or self.default_animation

        lines = classify_lines(text or "")
        if not has_content(lines):
            return []

        nodes = []
        secondary_title = ""
        for section in split_horizontal(lines):
            node, secondary_title = self._segment_section(section, secondary_title, alignment, animation)
            if node is not None:
                nodes.append(node)

        logger.debug(f"Segmented {len(lines)} lines into {len(nodes)} slides")
        return nodes

    def _resolve_alignment(self, alignment: Optional[str]) -> str:
        if alignment is None:
            return self.default_alignment
        if alignment not in ALIGNMENTS:
            logger.warning(f"Unknown alignment {alignment!r}, using {ALIGN_CENTER!r}")
            return ALIGN_CENTER
        return alignment

    def _segment_section(self, section: List[Line], secondary_title: str, alignment: str,
                         animation: str) -> Tuple[Optional[SlideNode], str]:
        leaves = []
        for piece in split_vertical(section):
            piece_leaves, secondary_title = self._build_leaves(piece, secondary_title, alignment, animation)
            leaves.extend(piece_leaves)

        if not leaves:
            return None, secondary_title
        if len(leaves) == 1:
            return leaves[0], secondary_title
        return SlideNode.stack(leaves), secondary_title

    def _build_leaves(self, piece: List[Line], secondary_title: str, alignment: str,
                      animation: str) -> Tuple[List[SlideNode], str]:
        parsed = parse_slide(piece, default_alignment=alignment, default_animation=animation)
        if parsed is None:
            return [], secondary_title

        parsed = inherit_title(parsed, secondary_title)
        secondary_title = find_secondary_title(parsed) or secondary_title

        parts = auto_split(
            parsed,
            char_limit=self.char_limit,
            line_limit=self.line_limit,
            split_ratio=self.split_ratio,
        )
        leaves = [
            SlideNode.leaf(
                inject_fragments(part.content, part.animation),
                notes=part.notes,
                alignment=part.alignment,
                animation=part.animation,
                source_range=part.source_range,
            )
            for part in parts
        ]
        return leaves, secondary_title


_default_segmenter = SlideSegmenter()


def segment(text: Optional[str], global_animation: Optional[str] = None,
            global_alignment: Optional[str] = None) -> List[SlideNode]:
    """
    Convenience function to segment markdown with the default settings.

    Args:
        text: Raw markdown document
        global_animation: Fragment style for slides without an override
        global_alignment: ``center`` or ``left``

    Returns:
        List of top-level slide nodes
    """
    return _default_segmenter.segment(text, global_animation, global_alignment)


def main(argv=None):
    """Command-line entry point for the slide segmenter."""
    import argparse
    import sys

    from .navigation import flatten
    from .preview import generate_reveal_html
    from .transitions import is_known_transition, list_transitions

    def _build_parser() -> argparse.ArgumentParser:
        p = argparse.ArgumentParser(prog="slideseg", description="Split a Markdown document into slides.")
        p.add_argument("markdown", type=Path, help="Markdown file to segment")
        p.add_argument("--output", "-o", type=Path, help="Write the result here instead of stdout")
        p.add_argument("--animation", "-a", default=NO_ANIMATION, help="Fragment style for every slide (default: none)")
        p.add_argument("--align", choices=ALIGNMENTS, default=ALIGN_CENTER, help="Default slide alignment")
        p.add_argument("--format", "-f", choices=("json", "outline", "reveal"), default="json", help="Output format")
        p.add_argument("--debug", action="store_true", help="Enable verbose logging")
        return p

    def _outline(nodes: List[SlideNode]) -> str:
        rows = []
        for flat in flatten(nodes):
            start, end = flat.slide.source_range
            indent = "    " if flat.is_sub_slide else ""
            rows.append(f"{indent}[{flat.h}.{flat.v}] {flat.slide.title or '(untitled)'}  (lines {start + 1}-{end + 1})")
        return '\n'.join(rows)

    parser = _build_parser()
    args = parser.parse_args(argv)

    # handlers come from the package __init__ (SLIDESEG_LOG_LEVEL)
    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    md_path: Path = args.markdown
    if not md_path.exists():
        logger.error(f"Markdown file '{md_path}' not found")
        sys.exit(1)

    if not is_known_transition(args.animation):
        logger.warning(f"Animation {args.animation!r} is not one of {', '.join(list_transitions())}; passing it through")

    nodes = segment(md_path.read_text(encoding="utf-8"), args.animation, args.align)

    if args.format == "json":
        result = json.dumps([node.to_dict() for node in nodes], indent=2, ensure_ascii=False)
    elif args.format == "outline":
        result = _outline(nodes)
    else:
        result = generate_reveal_html(nodes, args.align)

    if args.output:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(result + '\n', encoding="utf-8")
        logger.info("✅ %d slides written to %s", len(nodes), args.output)
    else:
        print(result)


if __name__ == "__main__":
    main()
