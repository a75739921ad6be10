"""
Hall Selection & Connectivity Graph
Keeps the larger half of the rooms as halls and links them with a
relative neighborhood graph.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Set, Tuple

from .room import Room, area_key

logger = logging.getLogger(__name__)


@dataclass
class RoomGraph:
    """Undirected graph over hall indices."""
    vertex_count: int
    adjacency: Dict[int, Set[int]] = field(default_factory=dict)
    edge_list: List[Tuple[int, int]] = field(default_factory=list)  # insertion order

    def __post_init__(self):
        for vertex in range(self.vertex_count):
            self.adjacency.setdefault(vertex, set())

    def add_edge(self, a: int, b: int) -> None:
        if a == b:
            raise ValueError(f"Self loop on vertex {a}")
        if b in self.adjacency[a]:
            return
        self.adjacency[a].add(b)
        self.adjacency[b].add(a)
        self.edge_list.append((a, b))

    def has_edge(self, a: int, b: int) -> bool:
        return b in self.adjacency.get(a, set())

    def neighbors(self, vertex: int) -> Set[int]:
        return self.adjacency[vertex]

    def edges(self) -> List[Tuple[int, int]]:
        """Edges in insertion order, each listed once."""
        return list(self.edge_list)

    @property
    def edge_count(self) -> int:
        return len(self.edge_list)

    def components(self) -> List[Set[int]]:
        """Connected components of the graph."""
        seen: Set[int] = set()
        result = []
        for start in range(self.vertex_count):
            if start in seen:
                continue
            component = {start}
            stack = [start]
            while stack:
                vertex = stack.pop()
                for neighbor in self.adjacency[vertex]:
                    if neighbor not in component:
                        component.add(neighbor)
                        stack.append(neighbor)
            seen |= component
            result.append(component)
        return result


def select_halls(rooms: List[Room]) -> List[Room]:
    """
    Keep the larger half of the rooms (by area).

    Returns:
        The ``len(rooms) // 2`` largest rooms, largest first
    """
    hall_count = len(rooms) // 2
    ranked = sorted(rooms, key=area_key, reverse=True)
    return ranked[:hall_count]


def is_dominated(halls: List[Room], a: int, b: int) -> bool:
    """
    Check the relative neighborhood rule for the pair (a, b).

    The pair is dominated when some third hall is strictly closer to both
    endpoints than they are to each other. Equal distances do not count.
    """
    a_to_b = halls[a].squared_distance(halls[b])

    for c, hall_c in enumerate(halls):
        if c == a or c == b:
            continue
        if (halls[a].squared_distance(hall_c) < a_to_b
                and halls[b].squared_distance(hall_c) < a_to_b):
            return True

    return False


def build_neighborhood_graph(halls: List[Room]) -> RoomGraph:
    """
    Build the relative neighborhood graph of the hall centres.

    Args:
        halls: Halls, indexed by position

    Returns:
        RoomGraph with one vertex per hall
    """
    graph = RoomGraph(vertex_count=len(halls))

    for a in range(len(halls)):
        for b in range(a + 1, len(halls)):
            if not is_dominated(halls, a, b):
                graph.add_edge(a, b)

    logger.info(f"Connectivity graph: {len(halls)} halls, {graph.edge_count} edges")
    return graph
