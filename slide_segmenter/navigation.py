"""
Map between editor positions and slide positions.

Slides are addressed the way the slideshow addresses them: ``(h, v)`` where
``h`` is the horizontal index and ``v`` the index inside a stack (``0`` for a
plain slide).  Previews show the same slides as one flat list.
"""
from dataclasses import dataclass
from typing import List, Sequence, Tuple

from .models import SlideNode


@dataclass(frozen=True)
class FlatSlide:
    """A leaf slide with its slideshow coordinates."""
    slide: SlideNode
    h: int
    v: int

    @property
    def is_sub_slide(self) -> bool:
        return self.v > 0


def flatten(nodes: Sequence[SlideNode]) -> List[FlatSlide]:
    """List every leaf in display order, stacks expanded in place."""
    flat = []
    for h, node in enumerate(nodes):
        for v, leaf in enumerate(node.leaves()):
            flat.append(FlatSlide(leaf, h, v))
    return flat


def find_slide_at_line(nodes: Sequence[SlideNode], line: int) -> Tuple[int, int]:
    """
    Find the slide an editor cursor line belongs to.

    Args:
        nodes: Segmenter output
        line: Zero-indexed line in the source document

    Returns:
        ``(h, v)`` of the slide whose source range contains *line*.  Lines
        between slides (separators, blank lines) belong to the slide before
        them; lines before the first slide map to ``(0, 0)``.
    """
    best = (0, 0)
    for flat in flatten(nodes):
        start, end = flat.slide.source_range
        if start <= line <= end:
            return flat.h, flat.v
        if start > line:
            break
        best = (flat.h, flat.v)
    return best


def indices_for_flat_index(nodes: Sequence[SlideNode], index: int) -> Tuple[int, int]:
    """Convert a position in the flat preview list into ``(h, v)``."""
    flat = flatten(nodes)
    if not flat:
        return 0, 0
    index = max(0, min(index, len(flat) - 1))
    return flat[index].h, flat[index].v


def line_for_indices(nodes: Sequence[SlideNode], h: int, v: int = 0) -> int:
    """First source line of slide ``(h, v)``; ``0`` if there is no such slide."""
    if not 0 <= h < len(nodes):
        return 0
    leaves = nodes[h].leaves()
    if not 0 <= v < len(leaves):
        return 0
    return leaves[v].source_range[0]
