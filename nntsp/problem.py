from dataclasses import dataclass
from functools import cached_property
from typing import Dict, Optional, Tuple


@dataclass(frozen=True)
class Vertex:
    id: int
    label: str = ""                                 # Opaque payload, never read by the solver
    coordinates: Optional[Tuple[float, float]] = None


@dataclass(frozen=True)
class Edge:
    departure_vertex_id: int
    arrival_vertex_id: int
    weight: int


@dataclass(frozen=True)
class Problem:
    """
    A travelling salesman instance.

    Args:
        vertices: Every location of the instance.
        edges: Directed, weighted edges. Their order is significant: among edges
            of equal weight the solver prefers the one listed first.
        departure_vertex_id: Id of the vertex the tour starts from.
        arrival_vertex_id: Id of the vertex the tour ends at. May equal the
            departure id, in which case the tour is closed.
    """
    vertices: Tuple[Vertex, ...]
    edges: Tuple[Edge, ...]
    departure_vertex_id: int
    arrival_vertex_id: int

    @property
    def vertices_count(self) -> int:
        return len(self.vertices)

    # Lookup indexes, built on first use. Duplicate ids resolve to the first vertex listed.

    @cached_property
    def vertices_by_id(self) -> Dict[int, Vertex]:
        index = {}
        for vertex in self.vertices:
            index.setdefault(vertex.id, vertex)
        return index

    @cached_property
    def edges_by_departure(self) -> Dict[int, Tuple[Edge, ...]]:
        """Outgoing edges per departure vertex id, each tuple in edge-list order."""
        index: Dict[int, list] = {}
        for edge in self.edges:
            index.setdefault(edge.departure_vertex_id, []).append(edge)
        return {vertex_id: tuple(edges) for vertex_id, edges in index.items()}


@dataclass(frozen=True)
class Solution:
    vertices: Tuple[Vertex, ...]     # Visiting order, departure first and arrival last
    cost: int                        # Sum of edge weights along consecutive pairs

    @property
    def vertex_ids(self) -> Tuple[int, ...]:
        return tuple(vertex.id for vertex in self.vertices)
