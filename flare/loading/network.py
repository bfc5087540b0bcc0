"""
Route Network
Joins flights to airports by IATA code and derives airport degrees.
"""

from typing import Dict, List, Optional

import networkx as nx

from .constants import NA_STATE
from .records import Airport, Flight


def build_lookup(airports: List[Airport]) -> Dict[str, Airport]:
    """Convert an airports list into a map for fast lookup by code."""
    return {airport.iata: airport for airport in airports}


class RouteNetwork:
    """
    Airports and the flights between them.

    Flights are given by airport code; resolving them attaches the airport
    records as source/target and accumulates incoming and outgoing degree
    weighted by flight count.

    Example:
        >>> network = RouteNetwork(airports, flights)
        >>> network.resolve()
        >>> network.lookup['ATL'].outgoing
        1520
    """

    def __init__(self, airports: List[Airport], flights: List[Flight]):
        """
        Initialize route network.

        Args:
            airports: Parsed airport records
            flights: Parsed flight records (unresolved)
        """
        self.airports = list(airports)
        self.flights = list(flights)
        self.lookup = build_lookup(self.airports)
        self.removed_flights = 0

    def resolve(self) -> List[Flight]:
        """
        Resolve flight endpoints and accumulate degree counters.

        Flights whose origin or destination is not a known airport are
        removed.

        Returns:
            Remaining (resolved) flights
        """
        # degrees are recounted from scratch on every call
        for airport in self.airports:
            airport.outgoing = 0
            airport.incoming = 0

        resolved = []

        for flight in self.flights:
            flight.source = self.lookup.get(flight.origin)
            flight.target = self.lookup.get(flight.destination)

            if not flight.is_resolved:
                continue

            flight.source.outgoing += flight.count
            flight.target.incoming += flight.count
            flight.passengers = flight.count
            resolved.append(flight)

        self.removed_flights += len(self.flights) - len(resolved)
        self.flights = resolved

        if self.removed_flights:
            print(f"   removed: {self.removed_flights} flights")

        return self.flights

    def filter_airports(
        self,
        drop_without_flights: bool = False,
        drop_na_state: bool = False,
        top_airports: Optional[int] = None,
    ) -> List[Airport]:
        """
        Remove airports, then the flights that lost an endpoint.

        Call after resolve() so degrees are known.

        Args:
            drop_without_flights: Remove airports lacking incoming or outgoing traffic
            drop_na_state: Remove airports whose state is "NA"
            top_airports: Keep only this many airports, by outgoing degree

        Returns:
            Remaining airports
        """
        airports = self.airports

        if drop_na_state:
            old = len(airports)
            airports = [a for a in airports if a.state != NA_STATE]
            print(f"   removed: {old - len(airports)} airports with NA state")

        if drop_without_flights:
            old = len(airports)
            airports = [a for a in airports if a.outgoing > 0 and a.incoming > 0]
            print(f"   removed: {old - len(airports)} airports without flights")

        if top_airports is not None:
            old = len(airports)
            # sort airports by outgoing degree
            airports = sorted(airports, key=lambda a: a.outgoing, reverse=True)
            airports = airports[:top_airports]
            print(
                f"   removed: {old - len(airports)} airports with low outgoing degree"
            )

        self.airports = airports
        self.lookup = build_lookup(airports)

        # filter out flights that are not between airports we have leftover
        old = len(self.flights)
        self.flights = [
            f
            for f in self.flights
            if self.lookup.get(f.origin) is f.source
            and self.lookup.get(f.destination) is f.target
        ]
        self.removed_flights += old - len(self.flights)

        return self.airports

    def to_graph(self) -> nx.DiGraph:
        """
        Export the network as a directed graph keyed by IATA code.

        Parallel flights between the same pair are merged, summing counts.

        Returns:
            DiGraph with 'outgoing'/'incoming' node attributes and 'count' edges
        """
        graph = nx.DiGraph()

        for airport in self.airports:
            graph.add_node(
                airport.iata,
                x=airport.x,
                y=airport.y,
                outgoing=airport.outgoing,
                incoming=airport.incoming,
                cluster=airport.cluster,
            )

        for flight in self.flights:
            if graph.has_edge(flight.origin, flight.destination):
                graph[flight.origin][flight.destination]["count"] += flight.count
            else:
                graph.add_edge(flight.origin, flight.destination, count=flight.count)

        return graph
