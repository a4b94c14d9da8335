"""Map click capture for the route map via streamlit-deckgl.

st.pydeck_chart only reports picked objects. st_deckgl reports every onClick,
including clicks on bare map, which is what point selection needs.

Two click kinds matter here:
- ground click: no picked object, only a [lon, lat] coordinate -> select a point
- candidate click: the main segment of a route was picked -> show its profile

st_deckgl replays the last event on every rerun, so render_route_map() keeps a
signature of the last handled click in session state and drops repeats.
"""

import logging
from dataclasses import dataclass
from typing import Any

import pydeck as pdk
import streamlit as st
from streamlit_deckgl import st_deckgl  # type: ignore[import-untyped]

from hillroute_planner.constants import MapConfig
from hillroute_planner.model.geo_point import GeoPoint
from hillroute_planner.ui.center_map import CANDIDATE_PATH_TYPE

logger = logging.getLogger(__name__)

# Keys st_deckgl adds to every event next to the picked object's fields
_EVENT_KEYS = ("coordinate", "eventType")


@dataclass(frozen=True)
class MapClick:
    """One click on the route map.

    Attributes:
        picked: Properties of the picked layer datum, None for ground clicks
        lon_lat: Clicked position as (lon, lat), None if deck.gl sent none
    """

    picked: dict[str, Any] | None
    lon_lat: tuple[float, float] | None

    @classmethod
    def from_event(cls, event: Any) -> "MapClick | None":
        """Build a click from a raw st_deckgl event, or None if it holds no click.

        Object fields are spread into the event itself (there is no "object"
        key), and our layers tag every datum with a "type".
        """
        if not isinstance(event, dict) or not event:
            return None

        lon_lat = None
        coordinate = event.get("coordinate")
        if isinstance(coordinate, (list, tuple)) and len(coordinate) >= 2:
            lon_lat = (float(coordinate[0]), float(coordinate[1]))

        picked = None
        if event.get("type") not in (None, "", "click"):
            picked = {k: v for k, v in event.items() if k not in _EVENT_KEYS}

        if picked is None and lon_lat is None:
            return None
        return cls(picked=picked, lon_lat=lon_lat)

    @property
    def is_ground_click(self) -> bool:
        return self.picked is None and self.lon_lat is not None

    @property
    def candidate_index(self) -> int | None:
        """Result set index if a candidate's main segment was clicked."""
        if self.picked is None or self.picked.get("type") != CANDIDATE_PATH_TYPE:
            return None
        index = self.picked.get("candidate_index")
        return None if index is None else int(index)

    def to_geo_point(self) -> GeoPoint | None:
        if self.lon_lat is None:
            return None
        lon, lat = self.lon_lat
        try:
            return GeoPoint(lat=lat, lon=lon)
        except ValueError:
            logger.warning(f"Ignoring click at invalid position {self.lon_lat}")
            return None

    @property
    def signature(self) -> str:
        """Stable identity of the click, coordinates rounded to ~1m."""
        parts = []
        if self.picked and self.picked.get("type") and self.picked.get("id"):
            parts.append(f"{self.picked['type']}:{self.picked['id']}")
        if self.lon_lat is not None:
            parts.append(f"{self.lon_lat[0]:.5f},{self.lon_lat[1]:.5f}")
        return "|".join(parts)


def is_within_bounds(point: GeoPoint) -> bool:
    """True if the point lies inside the routing graph coverage."""
    south, west = MapConfig.MAX_BOUNDS_SOUTH_WEST
    north, east = MapConfig.MAX_BOUNDS_NORTH_EAST
    return south <= point.lat <= north and west <= point.lon <= east


def render_route_map(deck: pdk.Deck, key: str, height: int = MapConfig.MAP_HEIGHT_PX) -> MapClick | None:
    """Draw the deck and return the click made since the last rerun, if any."""
    seen_key = f"_route_map_last_click_{key}"

    # events=["click"] is required, st_deckgl reports nothing without it
    click = MapClick.from_event(st_deckgl(deck, key=key, height=height, events=["click"]))
    if click is None or click.signature == st.session_state.get(seen_key):
        return None
    st.session_state[seen_key] = click.signature

    logger.debug(f"Map click: picked={click.picked is not None}, at={click.lon_lat}")
    return click
