"""
Typed Records
Airports, flights and walks as parsed from the input CSV files.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(eq=False)
class Airport:
    """
    An airport bubble and, during layout, a simulation node.

    Coordinates are taken straight from the CSV without projection:
    x is the latitude column and y the longitude column.
    Records compare by identity so the same code can appear as both a fixed
    and a free node.
    """

    iata: str
    latitude: float
    longitude: float
    x: float
    y: float
    color: Optional[str] = None
    cluster: Optional[str] = None
    name: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    # eventually tracks number of outgoing / incoming flights
    outgoing: int = 0
    incoming: int = 0

    # eventually tracks outgoing flight paths (indices into the drawn paths)
    flights: List[int] = field(default_factory=list)

    # simulation state
    vx: float = 0.0
    vy: float = 0.0
    fx: Optional[float] = None
    fy: Optional[float] = None

    def fix(self) -> None:
        """Pin the airport at its current position."""
        self.fx = self.x
        self.fy = self.y

    @property
    def is_fixed(self) -> bool:
        return self.fx is not None and self.fy is not None

    @property
    def label(self) -> str:
        """Tooltip text, e.g. 'Hartsfield in Atlanta, GA'."""
        if not self.name:
            return self.iata
        if self.city and self.state:
            return f"{self.name} in {self.city}, {self.state}"
        if self.city:
            return f"{self.name} in {self.city}"
        return self.name


@dataclass(eq=False)
class Flight:
    """A directed edge between two airports, weighted by count."""

    origin: str
    destination: str
    count: int
    source: Optional[Airport] = None
    target: Optional[Airport] = None
    passengers: int = 0

    @property
    def is_resolved(self) -> bool:
        return self.source is not None and self.target is not None


@dataclass
class Walk:
    """
    A sequence of airport codes over discrete time slots.

    Empty slots are stored as empty strings so the slot index is preserved.
    """

    steps: List[str]
    length: int = 0
    start: Optional[int] = None

    @classmethod
    def from_steps(cls, steps: List[str]) -> "Walk":
        """Build a walk and derive its length and first occupied slot."""
        length = 0
        start = None
        for i, step in enumerate(steps):
            if step != "":
                if start is None:
                    start = i
                length += 1
        return cls(steps=list(steps), length=length, start=start)

    @property
    def stops(self) -> List[str]:
        """Airport codes of the occupied slots, in time order."""
        return [step for step in self.steps if step != ""]
