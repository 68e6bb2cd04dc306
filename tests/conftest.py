import sys
from pathlib import Path

import pytest

# Ensure project root is on sys.path so `import slide_segmenter` works
project_root = Path(__file__).resolve().parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))


@pytest.fixture
def sample_deck():
    """A small deck with horizontal, vertical and notes-bearing slides."""
    return """# Welcome

Opening words.

---

## Results
Summary of results.
### Accuracy
Accuracy went up.
--
Closing thoughts.
Note: thank the team"""
