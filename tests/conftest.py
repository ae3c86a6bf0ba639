"""Shared test fixtures for all tests."""

import pytest

from nntsp.problem import Edge, Problem, Vertex


def make_problem(vertex_ids, edges, departure, arrival) -> Problem:
    """Builds a Problem from plain ids and (departure, arrival, weight) triples."""
    return Problem(
        vertices=tuple(Vertex(id=i, label=f"v{i}") for i in vertex_ids),
        edges=tuple(Edge(d, a, w) for d, a, w in edges),
        departure_vertex_id=departure,
        arrival_vertex_id=arrival,
    )


@pytest.fixture
def open_tour_problem() -> Problem:
    """3 vertices; the cheapest edge from 1 leads to the arrival vertex and must be skipped."""
    return make_problem([1, 2, 3], [(1, 2, 5), (1, 3, 1), (2, 3, 2)], departure=1, arrival=3)


@pytest.fixture
def closed_tour_problem() -> Problem:
    return make_problem([1, 2, 3], [(1, 2, 4), (2, 1, 4), (1, 3, 9)], departure=1, arrival=1)


# Complete directed graph on 6 vertices as (departure, arrival, weight) triples
COMPLETE_EDGES = [(i, j, abs(i - j) * 3 + (i * 7 + j) % 5) for i in range(6) for j in range(6) if i != j]


@pytest.fixture
def complete_problem() -> Problem:
    """Open tour from 0 to 5 over COMPLETE_EDGES."""
    return make_problem(list(range(6)), COMPLETE_EDGES, departure=0, arrival=5)
