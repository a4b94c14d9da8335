"""ResultSet - Ordered route candidates of exactly one query.

Append-only while a response is ingested. The coordinator replaces the whole
ResultSet on the next query instead of mutating it in place.

Aggregates (min/max distance and elevation) are computed over the current
candidates. The elevation aggregates use each candidate's climb, not raw
elevation samples.
"""

import logging
from collections.abc import Iterator

from hillroute_planner.core.color_assigner import ColorAssigner
from hillroute_planner.model.path_candidate import WeightedPathCandidate

logger = logging.getLogger(__name__)


class ResultSet:
    """Route candidates for the current query plus derived aggregates.

    The first candidate is the shortest route (the routing service orders
    its response ascending by path length).

    Example:
        result_set = ResultSet(color_assigner=ColorAssigner())
        result_set.add_candidate(candidate)
        result_set.min_distance
    """

    def __init__(self, color_assigner: ColorAssigner) -> None:
        self._color_assigner = color_assigner
        self._candidates: list[WeightedPathCandidate] = []
        self.distance_unit: str | None = None
        self.travel_type: str | None = None

    def clear(self) -> None:
        """Remove all candidates and reset unit/travel type."""
        self._candidates = []
        self.distance_unit = None
        self.travel_type = None

    def add_candidate(self, candidate: WeightedPathCandidate) -> None:
        """Append a candidate and give it the next palette color."""
        candidate.assign_color(self._color_assigner.next())
        if self.distance_unit is None:
            self.distance_unit = candidate.distance_unit
        elif candidate.distance_unit != self.distance_unit:
            logger.warning(
                f"Candidate {len(self._candidates)} uses unit '{candidate.distance_unit}', "
                f"result set uses '{self.distance_unit}'"
            )
        if self.travel_type is None:
            self.travel_type = candidate.travel_type
        elif candidate.travel_type != self.travel_type:
            logger.warning(
                f"Candidate {len(self._candidates)} has travel type '{candidate.travel_type}', "
                f"result set has '{self.travel_type}'"
            )
        self._candidates.append(candidate)

    @property
    def candidates(self) -> tuple[WeightedPathCandidate, ...]:
        return tuple(self._candidates)

    def is_empty(self) -> bool:
        return not self._candidates

    def __len__(self) -> int:
        return len(self._candidates)

    def __iter__(self) -> Iterator[WeightedPathCandidate]:
        return iter(self._candidates)

    def __getitem__(self, index: int) -> WeightedPathCandidate:
        return self._candidates[index]

    def _require_candidates(self, aggregate: str) -> None:
        if not self._candidates:
            raise ValueError(f"Cannot compute {aggregate} of an empty result set")

    @property
    def min_distance(self) -> float:
        self._require_candidates("min_distance")
        return min(c.distance for c in self._candidates)

    @property
    def max_distance(self) -> float:
        self._require_candidates("max_distance")
        return max(c.distance for c in self._candidates)

    @property
    def min_elevation(self) -> float:
        """Smallest candidate climb in meters."""
        self._require_candidates("min_elevation")
        return min(c.climb_m for c in self._candidates)

    @property
    def max_elevation(self) -> float:
        """Largest candidate climb in meters."""
        self._require_candidates("max_elevation")
        return max(c.climb_m for c in self._candidates)

    def __repr__(self) -> str:
        return f"ResultSet(size={len(self._candidates)}, unit={self.distance_unit}, travel_type={self.travel_type})"
