"""
Least-cost path search over a network.

Wraps networkx Dijkstra with free-flow travel time as link cost.
"""

import logging
from dataclasses import dataclass
from typing import List

import networkx as nx

from freespeed.errors import PathNotFoundError
from freespeed.network.models import Link, NetworkGraph

logger = logging.getLogger(__name__)


@dataclass
class RoutedPath:
    """Links of a least-cost path and its total travel time."""
    links: List[Link]
    travel_time: float  # seconds

    @property
    def distance(self) -> float:
        """Sum of traversed link lengths in meters."""
        return sum(link.length for link in self.links)


class PathOracle:
    """
    Shortest travel-time paths between network nodes.

    The topology is built once; ``refresh()`` re-reads link free speeds
    after the network was mutated. Of several parallel links between
    the same nodes the fastest one is used.
    """

    def __init__(self, graph: NetworkGraph):
        self._graph = graph
        self._g = nx.DiGraph()
        self._g.add_nodes_from(graph.nodes)
        self.refresh()

    def refresh(self) -> None:
        """Recompute edge costs from the current link free speeds."""
        self._g.remove_edges_from(list(self._g.edges))
        for u, v, link in self._graph.edges():
            cost = link.travel_time
            current = self._g.get_edge_data(u, v)
            if current is None or cost < current["weight"]:
                self._g.add_edge(u, v, weight=cost, link=link)

    def route(self, from_node: str, to_node: str) -> RoutedPath:
        """
        Least-cost path between two nodes.

        Raises:
            PathNotFoundError: If a node is unknown or unreachable
        """
        try:
            nodes = nx.dijkstra_path(self._g, from_node, to_node, weight="weight")
        except (nx.NodeNotFound, nx.NetworkXNoPath) as e:
            raise PathNotFoundError(f"No path from {from_node} to {to_node}: {e}") from e

        links = [self._g.edges[u, v]["link"] for u, v in zip(nodes, nodes[1:])]
        if not links:
            raise PathNotFoundError(f"Empty path from {from_node} to {to_node}")

        return RoutedPath(links=links, travel_time=sum(link.travel_time for link in links))
