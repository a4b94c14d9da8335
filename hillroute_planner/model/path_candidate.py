"""WeightedPathCandidate - One route returned by the routing service.

Candidates are validated at the ingestion boundary (from_dict). A payload that
violates the response schema raises ResponseFormatError, which the routing
client reports as a failed query.

Response schema per candidate:
    path:          list of {"latitude", "longitude", "elevation"} (required, >= 1)
    distance:      finite number >= 0 (required)
    distance_type: string unit tag, e.g. "km" or "min" (required)
    travel_type:   string (optional, defaults to the requested travel type)
    elevation:     finite number >= 0 (optional, computed from the path when absent)
"""

import logging
from dataclasses import dataclass, field
from numbers import Real
from typing import Any

import numpy as np

from hillroute_planner.core.elevation_profile import ElevationProfileCalculator
from hillroute_planner.model.geo_point import GeoPoint, PathNode

logger = logging.getLogger(__name__)


class ResponseFormatError(ValueError):
    """Routing response does not match the expected schema."""


def _require_number(data: dict[str, Any], key: str, where: str) -> float:
    if key not in data:
        raise ResponseFormatError(f"{where}: missing required field '{key}'")
    value = data[key]
    if isinstance(value, bool) or not isinstance(value, Real):
        raise ResponseFormatError(f"{where}: field '{key}' must be a number, got {value!r}")
    # requests decodes NaN and Infinity literals
    if not np.isfinite(value):
        raise ResponseFormatError(f"{where}: field '{key}' must be finite, got {value!r}")
    return float(value)


def _require_str(data: dict[str, Any], key: str, where: str) -> str:
    if key not in data:
        raise ResponseFormatError(f"{where}: missing required field '{key}'")
    value = data[key]
    if not isinstance(value, str):
        raise ResponseFormatError(f"{where}: field '{key}' must be a string, got {value!r}")
    return value


@dataclass(frozen=True)
class WeightedPathCandidate:
    """A weighted route between the selected start and end points.

    Immutable after creation except for color, which the ColorAssigner sets
    once the candidate joins a ResultSet.

    Attributes:
        nodes: Ordered path nodes (at least one)
        distance: Route weight in distance_unit
        distance_unit: Unit tag from the routing service ("km", "min", "h min")
        travel_type: Travel type tag ("car", "bicycle", "foot")
        elevation_gain: Climb precomputed by the service, or None
        color: Assigned palette color, or None before assignment
    """

    nodes: tuple[PathNode, ...]
    distance: float
    distance_unit: str
    travel_type: str
    elevation_gain: float | None = None
    color: str | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if not self.nodes:
            raise ValueError("WeightedPathCandidate needs at least one path node")
        if not np.isfinite(self.distance) or self.distance < 0:
            raise ValueError(f"Distance must be finite and non-negative: {self.distance}")
        if self.elevation_gain is not None and not (np.isfinite(self.elevation_gain) and self.elevation_gain >= 0):
            raise ValueError(f"Elevation gain must be finite and non-negative: {self.elevation_gain}")

    @property
    def climb_m(self) -> float:
        """Cumulative climb: service value if present, else computed from nodes."""
        if self.elevation_gain is not None:
            return self.elevation_gain
        return ElevationProfileCalculator.total_climb(self.elevations)

    @property
    def elevations(self) -> list[float]:
        return [node.elevation for node in self.nodes]

    @property
    def first_node(self) -> PathNode:
        return self.nodes[0]

    @property
    def last_node(self) -> PathNode:
        return self.nodes[-1]

    @property
    def points(self) -> list[GeoPoint]:
        return [node.point for node in self.nodes]

    def assign_color(self, color: str) -> None:
        """Set the display color (the only field mutable after creation)."""
        object.__setattr__(self, "color", color)

    def tooltip_text(self) -> str:
        """Popup text shown for the main path segment."""
        return f"length: {self.distance}{self.distance_unit}\nelevation: {self.climb_m:.2f}m"

    @classmethod
    def from_dict(cls, data: Any, default_travel_type: str, index: int = 0) -> "WeightedPathCandidate":
        """Validate and create a candidate from one response array entry.

        Args:
            data: Decoded JSON object for one candidate
            default_travel_type: Travel type of the request (used if the entry has none)
            index: Position in the response array (for error messages)

        Raises:
            ResponseFormatError: If a required field is missing or mistyped.
        """
        where = f"candidate[{index}]"
        if not isinstance(data, dict):
            raise ResponseFormatError(f"{where}: expected an object, got {type(data).__name__}")

        raw_path = data.get("path")
        if not isinstance(raw_path, list) or not raw_path:
            raise ResponseFormatError(f"{where}: 'path' must be a non-empty list")

        nodes = []
        for i, raw_node in enumerate(raw_path):
            node_where = f"{where}.path[{i}]"
            if not isinstance(raw_node, dict):
                raise ResponseFormatError(f"{node_where}: expected an object")
            try:
                point = GeoPoint(
                    lat=_require_number(raw_node, "latitude", node_where),
                    lon=_require_number(raw_node, "longitude", node_where),
                )
                nodes.append(PathNode(point=point, elevation=_require_number(raw_node, "elevation", node_where)))
            except ResponseFormatError:
                raise
            except ValueError as e:
                raise ResponseFormatError(f"{node_where}: {e}") from e

        travel_type = data.get("travel_type", default_travel_type)
        if not isinstance(travel_type, str):
            raise ResponseFormatError(f"{where}: field 'travel_type' must be a string, got {travel_type!r}")

        elevation_gain = None
        if data.get("elevation") is not None:
            elevation_gain = _require_number(data, "elevation", where)
            if elevation_gain < 0:
                raise ResponseFormatError(f"{where}: 'elevation' cannot be negative ({elevation_gain})")

        distance = _require_number(data, "distance", where)
        if distance < 0:
            raise ResponseFormatError(f"{where}: 'distance' cannot be negative ({distance})")

        return cls(
            nodes=tuple(nodes),
            distance=distance,
            distance_unit=_require_str(data, "distance_type", where),
            travel_type=travel_type,
            elevation_gain=elevation_gain,
        )

    def __repr__(self) -> str:
        return (
            f"WeightedPathCandidate({len(self.nodes)} nodes, {self.distance}{self.distance_unit}, "
            f"climb={self.climb_m:.1f}m, color={self.color})"
        )


def parse_candidates(payload: Any, default_travel_type: str) -> list[WeightedPathCandidate]:
    """Validate a full routing response (JSON array) into candidates.

    Raises:
        ResponseFormatError: If the payload is not a list or any entry is invalid.
    """
    if not isinstance(payload, list):
        raise ResponseFormatError(f"Expected a JSON array of candidates, got {type(payload).__name__}")
    return [
        WeightedPathCandidate.from_dict(entry, default_travel_type=default_travel_type, index=i)
        for i, entry in enumerate(payload)
    ]
