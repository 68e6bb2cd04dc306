"""Catalog of named fragment / transition styles."""
from dataclasses import dataclass
from typing import List, Tuple


@dataclass(frozen=True)
class Transition:
    id: str
    label: str


TRANSITION_IDS: Tuple[str, ...] = (
    "none",
    "fade-out",
    "fade-up",
    "fade-down",
    "fade-left",
    "fade-right",
    "fade-in-then-out",
    "current-visible",
    "fade-in-then-semi-out",
    "grow",
    "semi-fade-out",
    "shrink",
    "strike",
    "highlight-red",
    "highlight-green",
    "highlight-blue",
    "highlight-current-red",
    "highlight-current-green",
    "highlight-current-blue",
)

TRANSITIONS: Tuple[Transition, ...] = tuple(Transition(id=t, label=t) for t in TRANSITION_IDS)


def list_transitions() -> List[str]:
    return list(TRANSITION_IDS)


def is_known_transition(transition_id: str) -> bool:
    return transition_id in TRANSITION_IDS


def get_transition_by_id(transition_id: str) -> Transition:
    """
    Look up a transition, falling back to ``none`` for unknown ids.

    Args:
        transition_id: Transition name, e.g. ``fade-up``

    Returns:
        The matching :class:`Transition`
    """
    for transition in TRANSITIONS:
        if transition.id == transition_id:
            return transition
    return TRANSITIONS[0]
