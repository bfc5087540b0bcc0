"""
Force Simulation
Iterative physics-style layout for bundle graphs.

The simulation follows the classic velocity-Verlet scheme used by
browser force layouts:

1. alpha cools towards alpha_target by alpha_decay every tick
2. each registered force adds to node velocities, scaled by alpha
3. velocities are damped by velocity_decay and added to positions
4. nodes with fx/fy are snapped back to their fixed position

The layout ends once alpha drops below alpha_min. Forces are evaluated on
numpy arrays for all nodes at once; positions and velocities are written
back to the node objects after every tick so "tick" listeners can redraw
from the nodes themselves.
"""

import math
from typing import Any, Callable, Dict, List, Optional, Sequence, Union

import numpy as np
from scipy.spatial import cKDTree

from .constants import (
    ALPHA_MIN,
    CHARGE_DISTANCE_MIN,
    CHARGE_STRENGTH,
    JIGGLE_SCALE,
    LINK_DISTANCE,
    POSITION_STRENGTH,
    VELOCITY_DECAY,
)

# Per-node parameter: constant or accessor called as f(node, index)
NodeParam = Union[float, Callable[[Any, int], float]]

EVENTS = ("tick", "end")


def _resolve(param, items: Sequence[Any]) -> np.ndarray:
    """Evaluate a constant-or-accessor parameter for every item."""
    if callable(param):
        return np.array([float(param(item, i)) for i, item in enumerate(items)])
    return np.full(len(items), float(param))


def _jiggle(values: np.ndarray, rng: np.random.Generator) -> np.ndarray:
    """Replace exact zeros with tiny random offsets."""
    zeros = values == 0
    if zeros.any():
        values = values.copy()
        values[zeros] = (rng.random(int(zeros.sum())) - 0.5) * JIGGLE_SCALE
    return values


# =============================================================================
# Forces
# =============================================================================


class Force:
    """Base class for simulation forces."""

    def initialize(self, simulation: "ForceSimulation") -> None:
        self.simulation = simulation

    def apply(self, alpha: float) -> None:
        raise NotImplementedError


class LinkForce(Force):
    """
    Pulls linked nodes towards a target distance.

    Each link's correction is split between its ends by bias: the end with
    fewer links moves more. With no explicit strength, a link gets
    1 / min(links at source, links at target).
    """

    def __init__(
        self,
        links: Sequence[Any] = (),
        strength: Optional[float] = None,
        distance: float = LINK_DISTANCE,
    ):
        """
        Initialize link force.

        Args:
            links: Objects with source and target nodes
            strength: Link stiffness, None for degree-based default
            distance: Rest length of each link
        """
        self.links = list(links)
        self.strength = strength
        self.distance = distance

    def initialize(self, simulation: "ForceSimulation") -> None:
        super().initialize(simulation)

        try:
            self.sources = np.array(
                [simulation.index_of(link.source) for link in self.links], dtype=int
            )
            self.targets = np.array(
                [simulation.index_of(link.target) for link in self.links], dtype=int
            )
        except KeyError as e:
            raise KeyError(f"Link references a node outside the simulation: {e}") from e

        count = np.bincount(
            np.concatenate([self.sources, self.targets]),
            minlength=len(simulation.nodes),
        ).astype(float)

        if len(self.links):
            self.bias = count[self.sources] / (
                count[self.sources] + count[self.targets]
            )
        else:
            self.bias = np.zeros(0)

        if self.strength is None:
            self.strengths = 1.0 / np.minimum(
                count[self.sources], count[self.targets]
            )
        else:
            self.strengths = _resolve(self.strength, self.links)

        self.distances = _resolve(self.distance, self.links)

    def apply(self, alpha: float) -> None:
        if not len(self.links):
            return

        sim = self.simulation
        ahead = sim.positions + sim.velocities

        delta = ahead[self.targets] - ahead[self.sources]
        dx = _jiggle(delta[:, 0], sim.rng)
        dy = _jiggle(delta[:, 1], sim.rng)

        length = np.sqrt(dx * dx + dy * dy)
        scale = (length - self.distances) / length * alpha * self.strengths
        dx *= scale
        dy *= scale

        shift = np.column_stack([dx, dy])
        np.add.at(sim.velocities, self.targets, -shift * self.bias[:, None])
        np.add.at(sim.velocities, self.sources, shift * (1 - self.bias)[:, None])


class ManyBodyForce(Force):
    """
    Mutual repulsion (negative strength) or attraction (positive strength).

    Every pair closer than distance_max interacts; distances below
    distance_min are softened to avoid instability.
    """

    def __init__(
        self,
        strength: NodeParam = CHARGE_STRENGTH,
        distance_min: float = CHARGE_DISTANCE_MIN,
        distance_max: float = math.inf,
    ):
        self.strength = strength
        self.distance_min = distance_min
        self.distance_max = distance_max

    def initialize(self, simulation: "ForceSimulation") -> None:
        super().initialize(simulation)
        self.strengths = _resolve(self.strength, simulation.nodes)

    def _pairs(self, positions: np.ndarray) -> np.ndarray:
        if len(positions) < 2 or self.distance_max <= 0:
            return np.zeros((0, 2), dtype=int)
        if math.isinf(self.distance_max):
            i, j = np.triu_indices(len(positions), k=1)
            return np.column_stack([i, j])
        pairs = cKDTree(positions).query_pairs(r=self.distance_max, output_type="ndarray")
        return np.asarray(pairs, dtype=int).reshape(-1, 2)

    def apply(self, alpha: float) -> None:
        sim = self.simulation
        pairs = self._pairs(sim.positions)
        if not len(pairs):
            return

        i, j = pairs[:, 0], pairs[:, 1]
        delta = sim.positions[j] - sim.positions[i]
        dx = _jiggle(delta[:, 0], sim.rng)
        dy = _jiggle(delta[:, 1], sim.rng)

        l2 = dx * dx + dy * dy
        min2 = self.distance_min * self.distance_min
        l2 = np.where(l2 < min2, np.sqrt(min2 * l2), l2)

        shift = np.column_stack([dx, dy]) * (alpha / l2)[:, None]
        np.add.at(sim.velocities, i, shift * self.strengths[j][:, None])
        np.add.at(sim.velocities, j, -shift * self.strengths[i][:, None])


class PositionXForce(Force):
    """Pushes nodes towards a target x coordinate."""

    axis = 0

    def __init__(self, target: NodeParam = 0.0, strength: NodeParam = POSITION_STRENGTH):
        self.target = target
        self.strength = strength

    def initialize(self, simulation: "ForceSimulation") -> None:
        super().initialize(simulation)
        self.targets = _resolve(self.target, simulation.nodes)
        self.strengths = _resolve(self.strength, simulation.nodes)

    def apply(self, alpha: float) -> None:
        sim = self.simulation
        offset = self.targets - sim.positions[:, self.axis]
        sim.velocities[:, self.axis] += offset * self.strengths * alpha


class PositionYForce(PositionXForce):
    """Pushes nodes towards a target y coordinate."""

    axis = 1


# =============================================================================
# Simulation
# =============================================================================


class ForceSimulation:
    """
    Runs forces over a set of nodes until the layout settles.

    Nodes are any objects with x, y, vx, vy, fx and fy attributes.

    Example:
        >>> layout = ForceSimulation(bundle.nodes, alpha_decay=0.1)
        >>> layout.force("link", LinkForce(bundle.links, strength=2, distance=0))
        >>> layout.on("tick", lambda sim: redraw())
        >>> layout.run()
    """

    def __init__(
        self,
        nodes: Sequence[Any] = (),
        alpha: float = 1.0,
        alpha_min: float = ALPHA_MIN,
        alpha_decay: Optional[float] = None,
        alpha_target: float = 0.0,
        velocity_decay: float = VELOCITY_DECAY,
        seed: Optional[int] = 0,
    ):
        """
        Initialize force simulation.

        Args:
            nodes: Simulation nodes
            alpha: Starting temperature
            alpha_min: Temperature below which the layout ends
            alpha_decay: Cooling rate per tick, None for ~300 ticks
            alpha_target: Temperature alpha cools towards
            velocity_decay: Fraction of velocity lost per tick (friction)
            seed: Seed for the jiggle applied to coincident nodes
        """
        self.alpha = alpha
        self.alpha_min = alpha_min
        if alpha_decay is None:
            alpha_decay = 1 - math.pow(alpha_min, 1 / 300)
        self.alpha_decay = alpha_decay
        self.alpha_target = alpha_target
        self.velocity_decay = velocity_decay
        self.rng = np.random.default_rng(seed)

        self.ticks = 0
        self.forces: Dict[str, Force] = {}
        self._listeners: Dict[str, List[Callable]] = {event: [] for event in EVENTS}
        self.set_nodes(nodes)

    # --- Nodes ---

    def set_nodes(self, nodes: Sequence[Any]) -> None:
        """Replace the simulation nodes and re-initialize all forces."""
        self.nodes = list(nodes)
        self._index = {id(node): i for i, node in enumerate(self.nodes)}

        self.fixed = np.array(
            [getattr(n, "fx", None) is not None and getattr(n, "fy", None) is not None
             for n in self.nodes],
            dtype=bool,
        )
        self.fixed_positions = np.array(
            [(n.fx, n.fy) if fixed else (n.x, n.y)
             for n, fixed in zip(self.nodes, self.fixed)],
            dtype=float,
        ).reshape(-1, 2)

        self.positions = np.array(
            [(n.x, n.y) for n in self.nodes], dtype=float
        ).reshape(-1, 2)
        self.positions[self.fixed] = self.fixed_positions[self.fixed]

        self.velocities = np.array(
            [(getattr(n, "vx", 0.0) or 0.0, getattr(n, "vy", 0.0) or 0.0)
             for n in self.nodes],
            dtype=float,
        ).reshape(-1, 2)

        for force in self.forces.values():
            force.initialize(self)

    def index_of(self, node: Any) -> int:
        """Position of a node in the simulation arrays."""
        return self._index[id(node)]

    # --- Forces & events ---

    def force(self, name: str, force: Optional[Force] = None) -> "ForceSimulation":
        """
        Register, replace or (with force=None) remove a named force.

        Returns:
            The simulation, for chaining
        """
        if force is None:
            self.forces.pop(name, None)
        else:
            force.initialize(self)
            self.forces[name] = force
        return self

    def on(self, event: str, callback: Callable[["ForceSimulation"], Any]) -> "ForceSimulation":
        """
        Listen for 'tick' (after every step) or 'end' (run finished, settled
        or stopped by max_ticks).

        Raises:
            ValueError: If event is unknown
        """
        if event not in self._listeners:
            raise ValueError(f"Unknown simulation event: {event}")
        self._listeners[event].append(callback)
        return self

    def _emit(self, event: str) -> None:
        for callback in self._listeners[event]:
            callback(self)

    # --- Stepping ---

    def tick(self, iterations: int = 1) -> "ForceSimulation":
        """
        Advance the layout without emitting events.

        Args:
            iterations: Number of steps to take
        """
        free = ~self.fixed
        keep = 1 - self.velocity_decay

        for _ in range(iterations):
            self.alpha += (self.alpha_target - self.alpha) * self.alpha_decay

            for force in self.forces.values():
                force.apply(self.alpha)

            self.velocities[free] *= keep
            self.positions[free] += self.velocities[free]
            self.positions[self.fixed] = self.fixed_positions[self.fixed]
            self.velocities[self.fixed] = 0.0
            self.ticks += 1

        self._sync_nodes()
        return self

    def _sync_nodes(self) -> None:
        for node, (x, y), (vx, vy) in zip(self.nodes, self.positions, self.velocities):
            node.x, node.y = float(x), float(y)
            node.vx, node.vy = float(vx), float(vy)

    @property
    def settled(self) -> bool:
        return self.alpha < self.alpha_min

    def run(self, max_ticks: Optional[int] = None) -> int:
        """
        Step until alpha drops below alpha_min, emitting events.

        Args:
            max_ticks: Optional cap on steps

        Returns:
            Number of ticks taken
        """
        start = self.ticks

        while not self.settled:
            if max_ticks is not None and self.ticks - start >= max_ticks:
                break
            self.tick()
            self._emit("tick")

        self._emit("end")
        return self.ticks - start
