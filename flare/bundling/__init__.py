"""
FLARE Bundling Component

Edge bundling by control-node synthesis and force-directed layout.

Main Classes:
    - Bundle: Nodes, links and drawing paths of a segmented graph
    - ForceSimulation: Tick-based layout with pluggable forces
    - LinkForce, ManyBodyForce, PositionXForce, PositionYForce: Forces

Example:
    >>> from flare.bundling import generate_segments, ForceSimulation, LinkForce
    >>> bundle = generate_segments(airports, flights, segment_scale)
    >>> layout = ForceSimulation(bundle.nodes, alpha_decay=0.1)
    >>> layout.force("link", LinkForce(bundle.links, strength=2, distance=0))
    >>> layout.run()
"""

from .segments import (
    Bundle,
    BundleLink,
    ControlNode,
    generate_segments,
    interpolate_points,
    segment_count,
)
from .walks import build_walk_bundle, walk_path
from .simulation import (
    ForceSimulation,
    LinkForce,
    ManyBodyForce,
    PositionXForce,
    PositionYForce,
)
from .curves import bundle_curve, basis_curve, straighten

# Utilities
from . import constants

__all__ = [
    # Segments
    "Bundle",
    "BundleLink",
    "ControlNode",
    "generate_segments",
    "interpolate_points",
    "segment_count",
    # Walks
    "build_walk_bundle",
    "walk_path",
    # Simulation
    "ForceSimulation",
    "LinkForce",
    "ManyBodyForce",
    "PositionXForce",
    "PositionYForce",
    # Curves
    "bundle_curve",
    "basis_curve",
    "straighten",
    # Modules
    "constants",
]
