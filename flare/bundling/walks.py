"""
Walk Bundling
Bundles walks (airport sequences over time slots) through a free copy of
every airport.

Each airport appears twice: a fixed copy anchoring walk endpoints and a free
"control" copy that the flights pull around. A walk is drawn through
fixed[first stop] -> control[middle stops] -> fixed[last stop].
"""

from typing import Dict, List, Sequence

from flare.loading.records import Airport, Flight, Walk
from .segments import Bundle, BundleLink


def _get(lookup: Dict[str, Airport], code: str, kind: str) -> Airport:
    try:
        return lookup[code]
    except KeyError:
        raise KeyError(f"Walk visits unknown {kind} airport: {code}") from None


def walk_path(
    walk: Walk, fixed: Dict[str, Airport], control: Dict[str, Airport]
) -> List[Airport]:
    """
    Resolve the airports a walk passes through.

    Args:
        walk: Walk with at least one stop
        fixed: Fixed airports by code
        control: Free airports by code

    Returns:
        Ordered path, endpoints taken from the fixed airports

    Raises:
        KeyError: If a stop is not a known airport
    """
    stops = walk.stops
    path = [_get(fixed, stops[0], "fixed")]
    path.extend(_get(control, code, "control") for code in stops[1:-1])
    path.append(_get(fixed, stops[-1], "fixed"))
    return path


def build_walk_bundle(
    fixed_airports: Sequence[Airport],
    control_airports: Sequence[Airport],
    flights: Sequence[Flight],
    walks: Sequence[Walk],
) -> Bundle:
    """
    Build the simulation graph and drawing paths for walks.

    Args:
        fixed_airports: Airports pinned in place (endpoints)
        control_airports: Airports free to move (simulation nodes)
        flights: Flights resolved against the control airports
        walks: Walks to draw; walks without stops are skipped

    Returns:
        Bundle whose nodes are the control airports
    """
    fixed = {airport.iata: airport for airport in fixed_airports}
    control = {airport.iata: airport for airport in control_airports}

    for airport in fixed_airports:
        airport.fix()

    bundle = Bundle(nodes=list(control_airports))
    bundle.links = [BundleLink(source=f.source, target=f.target) for f in flights]
    bundle.paths = [walk_path(walk, fixed, control) for walk in walks if walk.length]

    return bundle
