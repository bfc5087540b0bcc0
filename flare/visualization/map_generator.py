"""
Map Generator
Creates interactive Folium maps of airports and bundled flight paths.

Layout coordinates are drawn either geographically (x = latitude,
y = longitude on a tiled map) or on a planar grid (Simple CRS, x to the
right and y downwards) for layouts that are not geographic.
"""

from typing import Callable, Dict, List, Optional, Sequence

import folium
import numpy as np
from branca.element import MacroElement, Template

from flare.config import Colors, Settings
from flare.utils import PointScale
from .constants import (
    AIRPORT_FILL_OPACITY,
    AIRPORT_OPACITY,
    GRID_CRS,
    GRID_ZOOM,
    LABEL_FONT,
    MAP_TILE_URLS,
    MAP_TITLE,
    MONTH_AXIS_OFFSET,
    MONTH_AXIS_RANGE,
    MONTH_FONT,
    MONTH_LABELS,
)

# Binds Leaflet mouse events: hovering a path raises it, hovering an airport
# raises all of its outgoing paths; mouseout restores the resting opacity.
HOVER_TEMPLATE = """
{% macro script(this, kwargs) %}
(function() {
    var restOpacity = {{ this.rest_opacity|tojson }};
    var hoverOpacity = {{ this.hover_opacity|tojson }};
    function setOpacity(paths, opacity) {
        paths.forEach(function(path) { path.setStyle({opacity: opacity}); });
    }
    {% for path in this.paths %}
    {{ path }}.on('mouseover', function() { setOpacity([{{ path }}], hoverOpacity); });
    {{ path }}.on('mouseout', function() { setOpacity([{{ path }}], restOpacity); });
    {% endfor %}
    {% for bubble, flights in this.bubbles %}
    {{ bubble }}.on('mouseover', function() { setOpacity([{{ flights|join(', ') }}], hoverOpacity); });
    {{ bubble }}.on('mouseout', function() { setOpacity([{{ flights|join(', ') }}], restOpacity); });
    {% endfor %}
})();
{% endmacro %}
"""


class HoverHighlight(MacroElement):
    """Mouse-over opacity toggling for paths and airport bubbles."""

    def __init__(self, paths: List[str], bubbles, rest_opacity: float, hover_opacity: float):
        super().__init__()
        self._name = "HoverHighlight"
        self._template = Template(HOVER_TEMPLATE)
        self.paths = paths
        self.bubbles = bubbles
        self.rest_opacity = rest_opacity
        self.hover_opacity = hover_opacity


class MapGenerator:
    """
    Generates interactive maps using Folium.

    Supports visualization of:
    - Airport bubbles (sized by degree, with hover tooltips)
    - Bundled flight paths
    - Hover highlighting of paths per airport
    - Airport labels and a month axis for time-grid layouts
    """

    def __init__(
        self,
        center_x: float,
        center_y: float,
        zoom: int = Settings.DEFAULT_ZOOM,
        style: str = Settings.DEFAULT_MAP_STYLE,
        grid: bool = False,
    ):
        """
        Initialize map generator.

        Args:
            center_x: Center in layout x (latitude on geographic maps)
            center_y: Center in layout y (longitude on geographic maps)
            zoom: Initial zoom level (ignored on grid maps)
            style: Map style/theme (ignored on grid maps)
            grid: Draw on a planar grid instead of a tiled world map
        """
        self.center_x = center_x
        self.center_y = center_y
        self.zoom = zoom
        self.style = style
        self.grid = grid

        self.bubbles: Dict[int, folium.CircleMarker] = {}
        self.paths: List[folium.PolyLine] = []
        self._bounds: List[List[float]] = []

        # Create base map
        self.map = self._create_base_map()

    def to_location(self, x: float, y: float) -> List[float]:
        """Convert layout coordinates to a Leaflet [lat, lng] pair."""
        if self.grid:
            return [-float(y), float(x)]
        return [float(x), float(y)]

    def _create_base_map(self) -> folium.Map:
        """Create base Folium map."""
        location = self.to_location(self.center_x, self.center_y)

        if self.grid:
            return folium.Map(
                location=location,
                zoom_start=GRID_ZOOM,
                tiles=None,
                crs=GRID_CRS,
            )

        if self.style in MAP_TILE_URLS:
            tiles = MAP_TILE_URLS[self.style]
        else:
            tiles = self.style

        return folium.Map(
            location=location,
            zoom_start=self.zoom,
            tiles=tiles,
            attr="FLARE Route Visualization",
        )

    def add_airports(self, airports: Sequence, radius: Callable[[object], float]):
        """
        Draw airport bubbles.

        Args:
            airports: Airports with x/y, color and label
            radius: Bubble radius per airport
        """
        for airport in airports:
            location = self.to_location(airport.x, airport.y)
            bubble = folium.CircleMarker(
                location=location,
                radius=radius(airport),
                color=airport.color or Colors.AIRPORT_COLOR,
                opacity=AIRPORT_OPACITY,
                fill=True,
                fill_color=airport.color or Colors.AIRPORT_COLOR,
                fill_opacity=AIRPORT_FILL_OPACITY,
                tooltip=airport.label,
            )
            bubble.add_to(self.map)

            # makes it fast to select airports on hover
            self.bubbles[id(airport)] = bubble
            self._bounds.append(location)

    def add_flight_path(
        self,
        points: np.ndarray,
        color: str,
        weight: float,
        opacity: float,
        tooltip: Optional[str] = None,
    ) -> int:
        """
        Draw one flight path.

        Args:
            points: (m, 2) polyline in layout coordinates
            color: Stroke color
            weight: Stroke width
            opacity: Resting stroke opacity
            tooltip: Optional hover text

        Returns:
            Index of the path, for attaching it to airports
        """
        locations = [self.to_location(x, y) for x, y in np.asarray(points)]

        line = folium.PolyLine(
            locations=locations,
            color=color,
            weight=weight,
            opacity=opacity,
            tooltip=tooltip,
        )
        line.add_to(self.map)

        self.paths.append(line)
        self._bounds.extend(locations)
        return len(self.paths) - 1

    def add_hover(self, airports: Sequence, rest_opacity: float,
                  hover_opacity: float = Settings.HOVER_OPACITY):
        """
        Attach hover handlers to every drawn path and airport bubble.

        Must be called after all paths and airports are added.

        Args:
            airports: Airports whose flights list holds outgoing path indices
            rest_opacity: Opacity restored on mouseout
            hover_opacity: Opacity while hovered
        """
        bubbles = []
        for airport in airports:
            bubble = self.bubbles.get(id(airport))
            if bubble is None or not airport.flights:
                continue
            names = [self.paths[i].get_name() for i in airport.flights]
            bubbles.append((bubble.get_name(), names))

        HoverHighlight(
            paths=[path.get_name() for path in self.paths],
            bubbles=bubbles,
            rest_opacity=rest_opacity,
            hover_opacity=hover_opacity,
        ).add_to(self.map)

    def _add_text(self, x: float, y: float, text: str, font: str, css_class: str):
        folium.Marker(
            location=self.to_location(x, y),
            icon=folium.DivIcon(
                html=(
                    f"<div class='{css_class}' style='font: {font}; "
                    f"color: {Colors.LABEL_COLOR}; white-space: nowrap;'>{text}</div>"
                ),
                icon_size=(0, 0),
            ),
        ).add_to(self.map)

    def add_airport_labels(
        self,
        airports: Sequence,
        offset_x: float = Settings.LABEL_OFFSET_X,
        text: Callable[[object], str] = lambda airport: airport.iata,
    ):
        """
        Write airport labels next to their positions.

        Args:
            airports: Airports to label
            offset_x: Horizontal label offset in layout units
            text: Label text per airport
        """
        for airport in airports:
            self._add_text(airport.x + offset_x, airport.y, text(airport),
                           LABEL_FONT, "airportName")

    def add_month_axis(
        self,
        labels: Sequence[str] = MONTH_LABELS,
        span=MONTH_AXIS_RANGE,
        offset=MONTH_AXIS_OFFSET,
    ):
        """
        Write month names evenly along the bottom of a time-grid layout.

        Args:
            labels: Axis labels, first to last
            span: Layout x of the first and last label
            offset: (x, y) translation of the axis
        """
        scale = PointScale(labels, span)
        for label in labels:
            self._add_text(offset[0] + scale(label), offset[1], label,
                           MONTH_FONT, "month")

    def fit_bounds(self):
        """Zoom the map to everything drawn so far."""
        if not self._bounds:
            return
        locations = np.array(self._bounds)
        self.map.fit_bounds(
            [locations.min(axis=0).tolist(), locations.max(axis=0).tolist()]
        )

    def save(self, filename: str):
        """
        Save map to HTML file.

        Args:
            filename: Output filename (should end in .html)
        """
        self.map.save(filename)

        # Modify HTML file to include title
        with open(filename, "r", encoding="utf-8") as f:
            html_content = f.read()
        insert = "<head>\n    <title>" + MAP_TITLE + "</title>"
        html_content = html_content.replace("<head>", insert, 1)
        with open(filename, "w", encoding="utf-8") as f:
            f.write(html_content)

        print(f"✅ Map saved to: {filename}")
