"""
FLARE Loading Component

Parses the input CSV files into typed records and joins them into a
route network.

Main Classes:
    - Airport, Flight, Walk: Typed records
    - RouteNetwork: IATA lookup, flight resolution and degree counting

Example:
    >>> from flare.loading import read_airports, read_flights, RouteNetwork
    >>> network = RouteNetwork(read_airports('airports.csv'),
    ...                        read_flights('flights.csv'))
    >>> flights = network.resolve()
"""

from .records import Airport, Flight, Walk
from .readers import load_table, read_airports, read_flights, read_walks
from .network import RouteNetwork, build_lookup

# Utilities
from . import constants

__all__ = [
    # Records
    "Airport",
    "Flight",
    "Walk",
    # Readers
    "load_table",
    "read_airports",
    "read_flights",
    "read_walks",
    # Network
    "RouteNetwork",
    "build_lookup",
    # Modules
    "constants",
]
