"""
Data models for the slide segmenter.
"""
import re
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

LEAF = "leaf"
STACK = "stack"

ALIGN_CENTER = "center"
ALIGN_LEFT = "left"
ALIGNMENTS = (ALIGN_CENTER, ALIGN_LEFT)

NO_ANIMATION = "none"

_HEADING_RE = re.compile(r'^#+\s+(.+)$', re.MULTILINE)


@dataclass(frozen=True)
class SlideNode:
    """
    A single slide (``leaf``) or a vertical group of slides (``stack``).

    Nodes are value objects: a fresh tree is built on every segmentation and
    nothing in it is mutated afterwards.
    """
    kind: str
    content: str = ""
    notes: str = ""
    alignment: str = ALIGN_CENTER
    animation: str = NO_ANIMATION
    source_range: Optional[Tuple[int, int]] = None  # inclusive, zero-indexed
    children: Tuple["SlideNode", ...] = field(default_factory=tuple)

    @classmethod
    def leaf(cls, content: str, *, notes: str = "", alignment: str = ALIGN_CENTER,
             animation: str = NO_ANIMATION, source_range: Tuple[int, int] = None) -> "SlideNode":
        return cls(
            kind=LEAF,
            content=content,
            notes=notes,
            alignment=alignment,
            animation=animation,
            source_range=source_range,
        )

    @classmethod
    def stack(cls, children) -> "SlideNode":
        """Group leaves into a vertical stack; the range spans all children."""
        children = tuple(children)
        if not children:
            raise ValueError("A stack needs at least one child")
        if any(child.is_stack() for child in children):
            raise ValueError("Stacks cannot be nested")
        return cls(
            kind=STACK,
            source_range=(children[0].source_range[0], children[-1].source_range[1]),
            children=children,
        )

    def is_leaf(self) -> bool:
        return self.kind == LEAF

    def is_stack(self) -> bool:
        return self.kind == STACK

    @property
    def title(self) -> str:
        """Text of the first heading of the slide, or of its first child."""
        if self.is_stack():
            return self.children[0].title
        match = _HEADING_RE.search(self.content)
        return match.group(1).strip() if match else ""

    def leaves(self) -> Tuple["SlideNode", ...]:
        """The displayable slides under this node, in navigation order."""
        return self.children if self.is_stack() else (self,)

    def to_dict(self) -> Dict:
        """Plain JSON-friendly representation."""
        if self.is_stack():
            return {
                "kind": self.kind,
                "sourceRange": list(self.source_range),
                "children": [child.to_dict() for child in self.children],
            }
        return {
            "kind": self.kind,
            "content": self.content,
            "notes": self.notes,
            "alignment": self.alignment,
            "animation": self.animation,
            "sourceRange": list(self.source_range) if self.source_range else None,
        }
