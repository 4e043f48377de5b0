"""Score awarded for line clears."""

from __future__ import annotations

# Base points indexed by the number of rows removed by one lock.  Clearing
# more rows than the table covers scores no base points.
LINE_SCORES = (0, 100, 300, 500, 800)


def line_score(lines: int, level: int) -> int:
    """Return the score for clearing ``lines`` rows at once on ``level``."""

    if lines <= 0 or lines >= len(LINE_SCORES):
        return 0
    return LINE_SCORES[lines] * level
