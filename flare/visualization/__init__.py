"""
FLARE Visualization Component

Interactive map visualizations of bundled flight routes.

Main Classes:
    - MapGenerator: Base interactive map creation with Folium
    - BundlePlotter: Shared scale, layout and drawing pipeline
    - RoutePlotter: Hierarchical bundling of direct flights
    - WalkPlotter: Bundled walks over a time grid

Example:
    >>> from flare.visualization import RoutePlotter
    >>> plotter = RoutePlotter(Config('config.yaml'))
    >>> plotter.plot('routes.html')

Map Styles:
    - CartoDB.Positron (default)
    - CartoDB.DarkMatter
    - OpenStreetMap

Features:
    - Airport bubbles sized by outgoing traffic
    - Edge-bundled flight paths
    - Hover highlighting of an airport's outgoing paths
    - Month axis and labels for time-grid layouts
"""

# Main visualization components
from .map_generator import MapGenerator
from .bundle_plotter import BundlePlotter
from .route_plotter import RoutePlotter
from .walk_plotter import WalkPlotter

# Utilities
from . import constants

__all__ = [
    # Main classes
    "MapGenerator",
    "BundlePlotter",
    "RoutePlotter",
    "WalkPlotter",
    # Modules
    "constants",
]
