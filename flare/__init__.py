"""
FLARE - Flight Layout And Route Edge-bundling

Prepares airport and flight data for edge-bundled route maps and renders
them as interactive HTML visualizations.

Components:
    - loading: CSV parsing into typed records and the route network
    - bundling: Control-node generation, force simulation and bundle curves
    - visualization: Interactive map generation

Example:
    >>> from flare import Config
    >>> from flare.visualization import RoutePlotter
    >>> config = Config('config.yaml')
    >>> plotter = RoutePlotter(config)
    >>> plotter.plot('routes.html')
"""

# Component imports for easy access
from . import loading
from . import bundling
from . import visualization
from . import utils
from . import config
from .config import Config

FLARE_VERSION = "v0.3.0"

__version__ = FLARE_VERSION
__author__ = "FLARE Project"
__license__ = "MIT"

__all__ = [
    "loading",
    "bundling",
    "visualization",
    "utils",
    "config",
    "Config",
]
