"""
Segment Generation
Turns each direct edge into a chain of control nodes that a force
simulation can pull together, approximating edge bundling.

For an edge between source and target:
1. Measure the Euclidean distance between the endpoints
2. Map it through the segment scale and round to a control-node count N
3. Place N evenly spaced nodes on the straight line, at indices 1..N of the
   domain [0, N + 1] (0 is the source, N + 1 the target)
4. Chain source -> c1 -> ... -> cN -> target into N + 1 links
5. Record [source, c1, ..., cN, target] as the path to draw
"""

from dataclasses import dataclass, field
from typing import Any, List, Optional, Sequence

from flare.utils import LinearScale, distance, round_half_up

# Type alias for anything with x/y (airports, control nodes)
Node = Any


@dataclass(eq=False)
class ControlNode:
    """Synthetic node placed along an edge."""

    x: float
    y: float
    vx: float = 0.0
    vy: float = 0.0
    fx: Optional[float] = None
    fy: Optional[float] = None

    @property
    def is_fixed(self) -> bool:
        return self.fx is not None and self.fy is not None


@dataclass(eq=False)
class BundleLink:
    """One short link of a segmented edge."""

    source: Node
    target: Node


@dataclass
class Bundle:
    """
    Separate graph for edge bundling.

    Attributes:
        nodes: All nodes including control nodes
        links: All individual segments (source to target)
        paths: All segments combined into a single path per edge, for drawing
    """

    nodes: List[Node] = field(default_factory=list)
    links: List[BundleLink] = field(default_factory=list)
    paths: List[List[Node]] = field(default_factory=list)

    @property
    def control_nodes(self) -> List[ControlNode]:
        return [node for node in self.nodes if isinstance(node, ControlNode)]


def segment_count(length: float, scale: LinearScale) -> int:
    """
    Number of inner nodes for an edge of the given length.

    Args:
        length: Edge length
        scale: Segment scale (length -> count)

    Returns:
        Rounded, non-negative node count
    """
    return max(0, round_half_up(scale(length)))


def interpolate_points(source: Node, target: Node, total: int) -> List[ControlNode]:
    """
    Create control nodes evenly spaced between source and target.

    Args:
        source: Edge start (x/y)
        target: Edge end (x/y)
        total: Number of inner nodes

    Returns:
        total nodes at indices 1..total of the domain [0, total + 1]
    """
    # source, inner nodes, target
    xscale = LinearScale(domain=(0, total + 1), range_=(source.x, target.x))
    yscale = LinearScale(domain=(0, total + 1), range_=(source.y, target.y))

    return [ControlNode(x=xscale(j), y=yscale(j)) for j in range(1, total + 1)]


def generate_segments(
    nodes: Sequence[Node], links: Sequence[Any], scale: LinearScale
) -> Bundle:
    """
    Break every link into segments for simple edge bundling.

    Existing nodes are fixed in place (fx/fy set to their position); only
    the generated control nodes are free to move.

    Args:
        nodes: Airports (objects with x/y and fx/fy)
        links: Edges with resolved source and target nodes
        scale: Segment scale mapping edge length to inner node count

    Returns:
        Bundle with nodes, links and paths
    """
    bundle = Bundle()

    # make existing nodes fixed
    for node in nodes:
        node.fx = node.x
        node.fy = node.y
        bundle.nodes.append(node)

    for link in links:
        # calculate total number of inner nodes for this link
        total = segment_count(distance(link.source, link.target), scale)
        inner = interpolate_points(link.source, link.target, total)

        source = link.source
        local = [source]

        for target in inner:
            local.append(target)
            bundle.nodes.append(target)
            bundle.links.append(BundleLink(source=source, target=target))
            source = target

        # add last link to target node
        local.append(link.target)
        bundle.links.append(BundleLink(source=source, target=link.target))

        bundle.paths.append(local)

    return bundle
