"""Lookup helpers over a Problem. All functions are pure."""
from typing import AbstractSet, Iterator

from .errors import UnknownVertex
from .problem import Edge, Problem, Vertex


def vertex_by_id(problem: Problem, vertex_id: int) -> Vertex:
    vertex = problem.vertices_by_id.get(vertex_id)
    if vertex is None:
        raise UnknownVertex(vertex_id)
    return vertex


def is_visited(visited_ids: AbstractSet[int], vertex: Vertex) -> bool:
    """`visited_ids` holds the ids of the tour built so far."""
    return vertex.id in visited_ids


def is_arrival(problem: Problem, vertex: Vertex) -> bool:
    return vertex.id == problem.arrival_vertex_id


def edges_from(problem: Problem, vertex: Vertex) -> Iterator[Edge]:
    """Yields the edges leaving `vertex`, in edge-list order."""
    return iter(problem.edges_by_departure.get(vertex.id, ()))
