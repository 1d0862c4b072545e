"""
Network data model.

Nodes and directed links with explicit typed fields. The mutable
fields on Link (free_speed, applied_factor, diagnostic_input) are
scratch state overwritten by every evaluation.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple

from freespeed.shared.constants import MOTORWAY_PREFIX


@dataclass
class Node:
    """Network node with projected coordinates."""
    id: str
    x: float
    y: float


@dataclass
class Link:
    """Directed network link."""
    id: str
    from_node: str
    to_node: str
    length: float                  # meters
    allowed_speed: float           # m/s
    free_speed: float              # m/s, used by the path search
    highway_type: str = ""
    junction_type: Optional[str] = None

    # Written by the mutator, read by the validation loop
    applied_factor: Optional[float] = None
    diagnostic_input: Optional[List[float]] = None

    @property
    def is_motorway(self) -> bool:
        """Motorway links (incl. motorway_link) are never modeled."""
        return self.highway_type.startswith(MOTORWAY_PREFIX)

    @property
    def travel_time(self) -> float:
        """Free-flow travel time in seconds."""
        return self.length / self.free_speed

    def reset_scratch(self) -> None:
        """Forget the factor and diagnostic vector of a previous evaluation."""
        self.applied_factor = None
        self.diagnostic_input = None


@dataclass
class NetworkGraph:
    """
    Directed road network.

    ``source`` keeps the parsed document the graph was loaded from so
    that it can be written back in the same format.
    """
    nodes: Dict[str, Node] = field(default_factory=dict)
    links: Dict[str, Link] = field(default_factory=dict)
    source: Optional[object] = field(default=None, repr=False)

    def add_node(self, node: Node) -> None:
        self.nodes[node.id] = node

    def add_link(self, link: Link) -> None:
        self.links[link.id] = link

    def __iter__(self) -> Iterator[Link]:
        return iter(self.links.values())

    def free_speeds(self) -> Dict[str, float]:
        """Snapshot of link free speeds."""
        return {link_id: link.free_speed for link_id, link in self.links.items()}

    def edges(self) -> Iterator[Tuple[str, str, Link]]:
        """Iterate (from_node, to_node, link)."""
        for link in self.links.values():
            yield link.from_node, link.to_node, link

    def reset_scratch(self) -> None:
        for link in self.links.values():
            link.reset_scratch()
