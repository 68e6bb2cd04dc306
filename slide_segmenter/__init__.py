"""Slide Segmenter – top-level package

Exposes the public API (`segment`, `SlideSegmenter`, etc.) **and** sets up a
minimal logging configuration so that every sub-module can call

```python
import logging
logger = logging.getLogger(__name__)
```

and honour a single environment variable `SLIDESEG_LOG_LEVEL`.
"""

from __future__ import annotations

import logging
import os

# ------------------------------------------------------------------
# Default logging – honour env var, otherwise INFO.
# ------------------------------------------------------------------
LOG_LEVEL = os.getenv("SLIDESEG_LOG_LEVEL", "INFO").upper()
if not logging.getLogger().handlers:
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

# Public API re-exports ------------------------------------------------
from .models import SlideNode  # noqa: E402  (import after logger)
from .segmenter import SlideSegmenter, segment  # noqa: E402
from .navigation import flatten, find_slide_at_line, indices_for_flat_index, line_for_indices  # noqa: E402
from .transitions import TRANSITIONS, get_transition_by_id  # noqa: E402

__all__ = [
    "SlideNode",
    "SlideSegmenter",
    "segment",
    "flatten",
    "find_slide_at_line",
    "indices_for_flat_index",
    "line_for_indices",
    "TRANSITIONS",
    "get_transition_by_id",
]
