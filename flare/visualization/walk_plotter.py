"""
Walk Plotter
Bundled walks over a time grid of airports.

Airports are laid out on a grid (one column per month); each walk visits a
sequence of grid airports. Walk endpoints are pinned to fixed airports and
their middle stops run through free copies that the flights pull together.
"""

from typing import List, Optional

from flare.bundling import Bundle, build_walk_bundle
from flare.config import Colors, Config, Settings
from flare.loading import RouteNetwork, Walk, read_airports, read_flights, read_walks
from flare.loading.records import Airport
from .bundle_plotter import BundlePlotter
from .map_generator import MapGenerator


def is_first_slot(airport: Airport) -> bool:
    """True for grid codes of the first time slot, e.g. 'ATL_1'."""
    code = airport.iata
    return len(code) == 5 and code[4] == "1"


class WalkPlotter(BundlePlotter):
    """
    Plots bundled walks on a planar time grid.

    Example:
        >>> plotter = WalkPlotter(Config('config.yaml'))
        >>> plotter.plot('walks.html')
    """

    mode = "walks"
    grid = True

    def __init__(
        self,
        config: Config,
        airports_path: Optional[str] = None,
        flights_path: Optional[str] = None,
        walks_path: Optional[str] = None,
        **kwargs,
    ):
        """
        Initialize walk plotter.

        Args:
            config: FLARE configuration
            airports_path: Grid airport CSV, default from config
            flights_path: Flight CSV, default from config
            walks_path: Walk CSV, default from config
            **kwargs: style, zoom, max_ticks (see BundlePlotter)

        Raises:
            ValueError: If no walk source is configured
        """
        super().__init__(config, **kwargs)
        self.airports_path = airports_path or config.airports_path
        self.flights_path = flights_path or config.flights_path
        self.walks_path = walks_path or config.walks_path
        if not self.walks_path:
            raise ValueError("No walks file configured (data.walks)")

        self.fixed: List[Airport] = []
        self.network: Optional[RouteNetwork] = None
        self.walks: List[Walk] = []
        self.bundle: Optional[Bundle] = None

    def load(self) -> RouteNetwork:
        """
        Read both airport copies, flights and walks.

        Returns:
            Network of the free (control) airports
        """
        self.fixed = read_airports(self.airports_path)
        control = read_airports(self.airports_path)
        flights = read_flights(self.flights_path)
        self.walks = read_walks(
            self.walks_path, int(self.config.get("data.max_time", Settings.MAX_TIME))
        )

        print(f"📍 airports: {len(control)}")
        print(f"📍 flights: {len(flights)}")
        print(f"📍 walks: {len(self.walks)}")

        # flights are given by airport iata code (not index)
        self.network = RouteNetwork(control, flights)
        self.network.resolve()

        # fixed copies carry the degrees for bubble sizing
        for fixed, free in zip(self.fixed, control):
            fixed.outgoing = free.outgoing
            fixed.incoming = free.incoming

        return self.network

    def build(self) -> Bundle:
        """Pin the fixed airports and route walks through the free ones."""
        if self.network is None:
            self.load()

        self.bundle = build_walk_bundle(
            self.fixed, self.network.airports, self.network.flights, self.walks
        )
        return self.bundle

    def plot(self, output_file: str = "walks.html") -> MapGenerator:
        """
        Run the full pipeline and save the map.

        Args:
            output_file: Output HTML filename

        Returns:
            The map generator that was saved
        """
        print("🗺️  Generating bundled walk map...")

        bundle = self.build()
        self.run_layout(bundle)

        map_gen = self.create_map(self.fixed)
        map_gen.add_airports(self.fixed, self.node_radius)

        width = self.params["stroke_width"]
        for path, curve in zip(bundle.paths, self.curves):
            start = path[0]
            index = map_gen.add_flight_path(
                curve,
                color=start.color or Colors.AIRPORT_COLOR,
                weight=float(width) if width is not None else 1.0,
                opacity=self.stroke_opacity,
                tooltip=f"{start.iata} → {path[-1].iata}",
            )
            # makes it fast to select outgoing paths
            start.flights.append(index)

        map_gen.add_hover(self.fixed, self.stroke_opacity)
        map_gen.add_month_axis()
        map_gen.add_airport_labels(
            [a for a in self.fixed if is_first_slot(a)],
            text=lambda airport: airport.iata[:3],
        )
        map_gen.fit_bounds()
        map_gen.save(output_file)
        return map_gen
