"""ProfileChart - Plotly chart surface for route candidates.

Renders two kinds of charts below the map:
- Elevation profile of one candidate (line with area fill)
- Distance vs climb scatter across all candidates

Implements the ChartSurface interface: every rendered figure gets a handle and
lives until destroy() is called with that handle.
"""

import logging

import plotly.graph_objects as go

from hillroute_planner.constants import ChartConfig
from hillroute_planner.ui.surfaces import ChartHandle, ChartKind, ChartSeries, ChartSurface

logger = logging.getLogger(__name__)


class ProfileChart(ChartSurface):
    """Renders chart series as Plotly figures.

    Example:
        chart = ProfileChart(width=800, height=320)
        handle = chart.render_series(series)
        st.plotly_chart(chart.get_figure(handle))
    """

    def __init__(
        self,
        width: int = ChartConfig.DEFAULT_WIDTH,
        height: int = ChartConfig.PROFILE_HEIGHT,
    ) -> None:
        """Initialize profile chart renderer.

        Args:
            width: Chart width in pixels
            height: Chart height in pixels
        """
        self.width = width
        self.height = height
        self._figures: dict[ChartHandle, tuple[ChartKind, go.Figure]] = {}
        self._next_handle: ChartHandle = 1

    @property
    def chart_count(self) -> int:
        return len(self._figures)

    def render_series(self, series: ChartSeries) -> ChartHandle:
        if not series.points:
            raise ValueError("Chart series must have points to render")

        if series.kind == ChartKind.PROFILE:
            fig = self._render_profile(series)
        else:
            fig = self._render_scatter(series)

        handle = self._next_handle
        self._next_handle += 1
        self._figures[handle] = (series.kind, fig)
        return handle

    def destroy(self, handle: ChartHandle) -> None:
        if handle not in self._figures:
            raise KeyError(f"Unknown chart handle {handle}")
        del self._figures[handle]

    def get_figure(self, handle: ChartHandle) -> go.Figure:
        return self._figures[handle][1]

    def latest_figure(self, kind: ChartKind) -> go.Figure | None:
        """Most recently rendered live figure of a kind, or None."""
        for handle in sorted(self._figures, reverse=True):
            fig_kind, fig = self._figures[handle]
            if fig_kind == kind:
                return fig
        return None

    def _render_profile(self, series: ChartSeries) -> go.Figure:
        distances = [p.x for p in series.points]
        elevations = [p.y for p in series.points]
        color = series.points[0].color

        # Calculate Y-axis range (not starting from 0)
        min_elev = min(elevations)
        max_elev = max(elevations)
        padding = max(
            (max_elev - min_elev) * ChartConfig.ELEVATION_PADDING_FACTOR,
            ChartConfig.ELEVATION_PADDING_MIN_M,
        )

        fig = go.Figure()
        fig.add_trace(
            go.Scatter(
                x=distances,
                y=elevations,
                fill="tozeroy",
                fillcolor=f"rgba{self._hex_to_rgba(hex_color=color, alpha=0.3)}",
                line=dict(color=color, width=2),
                text=[p.label for p in series.points],
                name="Elevation",
                hovertemplate="Distance: %{x:.2f}km<br>Elevation: %{y:.0f}m<extra></extra>",
            )
        )
        fig.update_layout(
            title=dict(text=series.title, x=0.5),
            xaxis=dict(title=series.x_label, showgrid=True, gridcolor="rgba(200, 200, 200, 0.3)"),
            yaxis=dict(
                title=series.y_label,
                showgrid=True,
                gridcolor="rgba(200, 200, 200, 0.3)",
                range=[min_elev - padding, max_elev + padding],
            ),
            showlegend=False,
            width=self.width,
            height=self.height,
            margin=dict(l=50, r=30, t=50, b=50),
            plot_bgcolor="white",
        )
        return fig

    def _render_scatter(self, series: ChartSeries) -> go.Figure:
        fig = go.Figure()
        # One trace per candidate so each keeps its own color
        for point in series.points:
            fig.add_trace(
                go.Scatter(
                    x=[point.x],
                    y=[point.y],
                    mode="markers",
                    marker=dict(color=point.color, size=ChartConfig.SCATTER_MARKER_SIZE),
                    name=point.label,
                    hovertemplate=f"{point.label}<br>%{{x}}<br>%{{y:.2f}}m<extra></extra>",
                )
            )
        fig.update_layout(
            title=dict(text=series.title, x=0.5),
            xaxis=dict(title=series.x_label, showgrid=True, gridcolor="rgba(200, 200, 200, 0.3)"),
            yaxis=dict(title=series.y_label, showgrid=True, gridcolor="rgba(200, 200, 200, 0.3)"),
            showlegend=False,
            width=self.width,
            height=ChartConfig.SCATTER_HEIGHT,
            margin=dict(l=50, r=30, t=50, b=50),
            plot_bgcolor="white",
        )
        return fig

    def _hex_to_rgba(self, hex_color: str, alpha: float) -> tuple:
        """Convert hex color to RGBA tuple."""
        hex_color = hex_color.lstrip("#")
        r = int(hex_color[0:2], 16)
        g = int(hex_color[2:4], 16)
        b = int(hex_color[4:6], 16)
        return (r, g, b, alpha)
