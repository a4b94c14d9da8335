"""OverlayManager - Lifecycle of the map overlays of one result set.

Each candidate is drawn as a three-part overlay:
- approach segment: selected start -> first path node (dashed)
- main segment: the routed path in the candidate color
- departure segment: last path node -> selected end (dashed)

The manager exclusively owns the handles it creates. teardown() must run
before every render so the map never shows overlays of two queries at once.
"""

import logging
from dataclasses import dataclass

from hillroute_planner.constants import StyleConfig
from hillroute_planner.model.geo_point import GeoPoint
from hillroute_planner.model.path_candidate import WeightedPathCandidate
from hillroute_planner.model.result_set import ResultSet
from hillroute_planner.ui.surfaces import MapSurface, OverlayHandle, OverlayStyle, SegmentRole

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Overlay:
    """Rendered handles of one candidate."""

    candidate_index: int
    approach: OverlayHandle
    main: OverlayHandle
    departure: OverlayHandle

    @property
    def handles(self) -> tuple[OverlayHandle, OverlayHandle, OverlayHandle]:
        return (self.approach, self.main, self.departure)


class OverlayManager:
    """Creates and removes candidate overlays on a map surface.

    Example:
        manager = OverlayManager(map_surface=surface)
        manager.render_result_set(result_set, start_point=start, end_point=end)
        manager.teardown()
    """

    def __init__(self, map_surface: MapSurface) -> None:
        self.map_surface = map_surface
        self._overlays: list[Overlay] = []

    @property
    def overlays(self) -> tuple[Overlay, ...]:
        return tuple(self._overlays)

    @property
    def overlay_count(self) -> int:
        return len(self._overlays)

    def render_result_set(
        self,
        result_set: ResultSet,
        start_point: GeoPoint,
        end_point: GeoPoint,
    ) -> list[Overlay]:
        """Draw one overlay per candidate and fit the viewport once.

        If drawing fails partway, every overlay drawn by this call is removed
        again before the error propagates.

        Raises:
            RuntimeError: If overlays of a previous render are still live.
        """
        if self._overlays:
            raise RuntimeError(f"{len(self._overlays)} overlays still live - call teardown() before rendering")

        try:
            for index, candidate in enumerate(result_set):
                self._overlays.append(
                    self._render_candidate(
                        index=index,
                        candidate=candidate,
                        start_point=start_point,
                        end_point=end_point,
                    )
                )
        except Exception:
            logger.error(f"Overlay rendering failed after {len(self._overlays)} candidate(s), rolling back")
            self.teardown()
            raise

        if self._overlays:
            self.map_surface.fit_bounds([start_point, end_point])
        logger.info(f"Rendered {len(self._overlays)} candidate overlay(s)")
        return list(self._overlays)

    def _render_candidate(
        self,
        index: int,
        candidate: WeightedPathCandidate,
        start_point: GeoPoint,
        end_point: GeoPoint,
    ) -> Overlay:
        if candidate.color is None:
            raise ValueError(f"Candidate {index} has no color - add it through ResultSet.add_candidate()")

        segments = [
            ([start_point, candidate.first_node.point], self._off_track_style(role=SegmentRole.APPROACH, index=index)),
            (
                candidate.points,
                OverlayStyle(
                    color=candidate.color,
                    width_px=StyleConfig.PATH_WIDTH_PX,
                    role=SegmentRole.MAIN,
                    candidate_index=index,
                    tooltip=candidate.tooltip_text(),
                ),
            ),
            ([candidate.last_node.point, end_point], self._off_track_style(role=SegmentRole.DEPARTURE, index=index)),
        ]
        handles: list[OverlayHandle] = []
        try:
            for geometry, style in segments:
                handles.append(self.map_surface.add_overlay(geometry, style))
        except Exception:
            # Segments of an incomplete candidate are not in the registry yet
            for handle in handles:
                self.map_surface.remove_overlay(handle)
            raise
        approach, main, departure = handles
        return Overlay(candidate_index=index, approach=approach, main=main, departure=departure)

    @staticmethod
    def _off_track_style(role: SegmentRole, index: int) -> OverlayStyle:
        return OverlayStyle(
            color=StyleConfig.OFF_TRACK_COLOR,
            width_px=StyleConfig.OFF_TRACK_WIDTH_PX,
            role=role,
            candidate_index=index,
            dashed=True,
        )

    def teardown(self) -> None:
        """Remove every owned overlay from the map and forget it."""
        if not self._overlays:
            return
        for overlay in self._overlays:
            for handle in overlay.handles:
                self.map_surface.remove_overlay(handle)
        logger.info(f"Removed {len(self._overlays)} candidate overlay(s)")
        self._overlays = []

    def __repr__(self) -> str:
        return f"OverlayManager(overlays={len(self._overlays)})"
