from typing import Dict, Optional, Sequence, Tuple

from .errors import MissingEdge
from .problem import Edge, Vertex


def find_edge(edges: Sequence[Edge], departure_vertex_id: int, arrival_vertex_id: int) -> Optional[Edge]:
    """Returns the first edge going from `departure_vertex_id` to `arrival_vertex_id`, or None."""
    for edge in edges:
        if edge.departure_vertex_id == departure_vertex_id and edge.arrival_vertex_id == arrival_vertex_id:
            return edge
    return None


def _first_edges(edges: Sequence[Edge]) -> Dict[Tuple[int, int], Edge]:
    """Maps each (departure, arrival) pair to the first edge listed for it."""
    index = {}
    for edge in edges:
        index.setdefault((edge.departure_vertex_id, edge.arrival_vertex_id), edge)
    return index


def tour_cost(edges: Sequence[Edge], tour: Sequence[Vertex]) -> int:
    """Calculates the total weight of a given tour (the tour is not wrapped around)."""
    index = _first_edges(edges)
    cost = 0
    for i in range(len(tour) - 1):
        a = tour[i].id
        b = tour[i + 1].id
        edge = index.get((a, b))
        if edge is None:
            raise MissingEdge(a, b)
        cost += edge.weight
    return cost
