"""
Route Plotter
Hierarchical edge bundling of direct flights between airports.

Every flight is broken into a chain of control nodes; airports stay fixed
while the force layout pulls neighbouring control nodes together, bending
routes into bundles.
"""

from typing import Optional

from flare.bundling import Bundle, generate_segments
from flare.config import Colors, Config
from flare.loading import RouteNetwork, read_airports, read_flights
from .bundle_plotter import BundlePlotter
from .map_generator import MapGenerator


class RoutePlotter(BundlePlotter):
    """
    Plots bundled flight routes between airports.

    Example:
        >>> plotter = RoutePlotter(Config('config.yaml'))
        >>> plotter.plot('routes.html')
    """

    mode = "routes"

    def __init__(
        self,
        config: Config,
        airports_path: Optional[str] = None,
        flights_path: Optional[str] = None,
        **kwargs,
    ):
        """
        Initialize route plotter.

        Args:
            config: FLARE configuration
            airports_path: Airport CSV, default from config
            flights_path: Flight CSV, default from config
            **kwargs: style, zoom, max_ticks (see BundlePlotter)
        """
        super().__init__(config, **kwargs)
        self.airports_path = airports_path or config.airports_path
        self.flights_path = flights_path or config.flights_path
        self.network: Optional[RouteNetwork] = None
        self.bundle: Optional[Bundle] = None

    def load(self) -> RouteNetwork:
        """
        Read airports and flights and resolve the network.

        Returns:
            Resolved (and optionally filtered) network
        """
        airports = read_airports(self.airports_path)
        flights = read_flights(self.flights_path)

        print(f"📍 airports: {len(airports)}")
        print(f"📍 flights: {len(flights)}")

        network = RouteNetwork(airports, flights)
        network.resolve()

        filters = self.config.filters
        if any(filters.values()):
            network.filter_airports(
                drop_without_flights=bool(filters.get("drop_without_flights")),
                drop_na_state=bool(filters.get("drop_na_state")),
                top_airports=filters.get("top_airports"),
            )

        self.network = network
        return network

    def build(self) -> Bundle:
        """Break each flight between airports into multiple segments."""
        if self.network is None:
            self.load()

        self.bundle = generate_segments(
            self.network.airports, self.network.flights, self.segment_scale
        )
        return self.bundle

    def stroke_color(self, flight) -> str:
        """Source color inside a cluster, black across clusters."""
        if flight.source.cluster == flight.target.cluster:
            return flight.source.color or Colors.AIRPORT_COLOR
        return Colors.CROSS_CLUSTER_COLOR

    def stroke_width(self, flight) -> float:
        if self.params["stroke_width"] is not None:
            return float(self.params["stroke_width"])
        return flight.count ** (-0.5 / 10**10) if flight.count > 0 else 1.0

    def plot(self, output_file: str = "routes.html") -> MapGenerator:
        """
        Run the full pipeline and save the map.

        Args:
            output_file: Output HTML filename

        Returns:
            The map generator that was saved
        """
        print("🗺️  Generating bundled route map...")

        bundle = self.build()
        self.run_layout(bundle)

        airports = self.network.airports
        flights = self.network.flights

        map_gen = self.create_map(airports)
        map_gen.add_airports(airports, self.node_radius)

        for flight, curve in zip(flights, self.curves):
            index = map_gen.add_flight_path(
                curve,
                color=self.stroke_color(flight),
                weight=self.stroke_width(flight),
                opacity=self.stroke_opacity,
                tooltip=f"{flight.origin} → {flight.destination} ({flight.count})",
            )
            # makes it fast to select outgoing paths
            flight.source.flights.append(index)

        map_gen.add_hover(airports, self.stroke_opacity)
        map_gen.fit_bounds()
        map_gen.save(output_file)
        return map_gen
