"""ColorAssigner - Cyclic palette allocator for route candidates.

Each call to next() returns palette[k mod N] and increments k. The counter is
session-wide: it is never reset between queries, so the first candidate of a
new query continues where the previous query stopped.
"""

import logging

from hillroute_planner.constants import StyleConfig

logger = logging.getLogger(__name__)


class ColorAssigner:
    """Hands out palette colors in a fixed cycle.

    Within one result set of size <= len(palette) all colors are distinct;
    larger result sets repeat colors with period len(palette).

    Example:
        assigner = ColorAssigner(palette=["#000000", "#FF0000"])
        assigner.next()  # "#000000"
        assigner.next()  # "#FF0000"
        assigner.next()  # "#000000"
    """

    def __init__(self, palette: list[str] | None = None) -> None:
        palette = list(StyleConfig.CANDIDATE_PALETTE if palette is None else palette)
        if not palette:
            raise ValueError("ColorAssigner needs at least one palette color")
        self._palette = tuple(palette)
        self._count = 0

    @property
    def palette(self) -> tuple[str, ...]:
        return self._palette

    @property
    def count(self) -> int:
        """Number of colors handed out so far."""
        return self._count

    def next(self) -> str:
        """Return the next palette color and advance the counter."""
        color = self._palette[self._count % len(self._palette)]
        self._count += 1
        return color

    def __repr__(self) -> str:
        return f"ColorAssigner(palette_size={len(self._palette)}, count={self._count})"
