"""
Bundle Plotter
Shared pipeline for bundled route maps: scales, force layout and drawing.
"""

from typing import Any, Dict, List, Sequence

import numpy as np

from flare.bundling import (
    Bundle,
    ForceSimulation,
    LinkForce,
    ManyBodyForce,
    PositionXForce,
    bundle_curve,
)
from flare.config import Config, Settings
from flare.utils import LinearScale, PowScale
from .map_generator import MapGenerator


class BundlePlotter:
    """
    Base class for plotters that lay out a bundle and draw it on a map.

    Subclasses set `mode` (the hyperparameter preset) and `grid` (planar
    rather than geographic drawing) and implement plot().
    """

    mode: str = ""
    grid: bool = False

    def __init__(
        self,
        config: Config,
        style: str = None,
        zoom: int = None,
        max_ticks: int = None,
    ):
        """
        Initialize plotter.

        Args:
            config: FLARE configuration
            style: Map style, default from config
            zoom: Initial zoom, default from config
            max_ticks: Cap on layout ticks, default from config
        """
        self.config = config
        self.params: Dict[str, Any] = config.hyperparams(self.mode)
        self.style = style or config.map_style
        self.zoom = zoom or config.zoom
        self.max_ticks = config.max_ticks if max_ticks is None else max_ticks

        # used to scale airport bubbles
        self.airport_scale = PowScale(
            exponent=self.params["airports_scale_exponent"],
            range_=(self.params["airports_scale_min"], self.params["airports_scale_max"]),
        )

        # used to scale number of segments per line
        self.segment_scale = LinearScale(
            domain=(
                self.params["segments_scale_domain_min"],
                self.params["segments_scale_domain_max"],
            ),
            range_=(
                self.params["segments_scale_range_min"],
                self.params["segments_scale_range_max"],
            ),
        )

        self.curves: List[np.ndarray] = []

    # --- Styling ---

    def node_radius(self, airport) -> float:
        """Bubble radius for an airport, from its outgoing degree."""
        return self.airport_scale(airport.outgoing / self.params["airports_value_divisor"])

    @property
    def stroke_opacity(self) -> float:
        return float(self.params["stroke_opacity"])

    # --- Layout ---

    def create_layout(self, bundle: Bundle) -> ForceSimulation:
        """
        Build the force simulation for a bundle.

        Args:
            bundle: Bundle whose nodes and links drive the layout

        Returns:
            Configured, not yet started simulation
        """
        params = self.params

        # settle at a layout faster
        layout = ForceSimulation(bundle.nodes, alpha_decay=params["alpha_decay"])

        # nearby nodes attract each other
        if params["force_charge_many_body"] is not None:
            layout.force(
                "charge",
                ManyBodyForce(
                    strength=params["force_charge_many_body"],
                    distance_max=params["force_distance_max"],
                ),
            )

        # edges want to be as short as possible
        # prevents too much stretching
        layout.force(
            "link",
            LinkForce(
                bundle.links,
                strength=params["force_link_strength"],
                distance=params["force_link_distance"],
            ),
        )

        if params["force_x_strength"] is not None:
            layout.force("x", PositionXForce(strength=params["force_x_strength"]))

        layout.on("tick", lambda sim: self.redraw(bundle))
        layout.on("end", self._report_layout)
        return layout

    def _report_layout(self, layout: ForceSimulation) -> None:
        if layout.settled:
            print(f"   layout complete after {layout.ticks} ticks")
        else:
            print(f"   layout stopped at the {layout.ticks} tick cap before settling")

    def redraw(self, bundle: Bundle) -> List[np.ndarray]:
        """Recompute path geometry from the current node positions."""
        self.curves = [bundle_curve(path) for path in bundle.paths]
        return self.curves

    def run_layout(self, bundle: Bundle) -> ForceSimulation:
        """Lay out the bundle until it settles (or max_ticks is reached)."""
        print(
            f"   Simulating {len(bundle.nodes)} nodes and {len(bundle.links)} links..."
        )
        self.redraw(bundle)
        layout = self.create_layout(bundle)
        layout.run(max_ticks=self.max_ticks)
        return layout

    # --- Drawing ---

    def create_map(self, airports: Sequence) -> MapGenerator:
        """Create a map centred on the airports."""
        if airports:
            center_x = float(np.mean([a.x for a in airports]))
            center_y = float(np.mean([a.y for a in airports]))
        else:
            center_x = center_y = 0.0

        return MapGenerator(center_x, center_y, self.zoom, self.style, grid=self.grid)

    def plot(self, output_file: str) -> MapGenerator:
        raise NotImplementedError
