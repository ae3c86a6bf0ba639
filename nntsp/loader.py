"""
Builders turning external problem definitions into `Problem` values.

Structural problems (missing keys, negative weights, duplicate ids) are
reported as `InvalidProblem`. Departure and arrival ids are passed through
unchecked: a dangling id surfaces as `UnknownVertex` when solving.
"""
import json
import os
import pickle as pkl
from typing import Any, Dict, List, Mapping, Optional, Tuple

import numpy as np

from .errors import InvalidProblem
from .problem import Edge, Problem, Vertex


def _vertex_from_dict(data: Mapping[str, Any]) -> Vertex:
    coordinates = None
    if 'x' in data and 'y' in data:
        coordinates = (float(data['x']), float(data['y']))
    return Vertex(id=int(data['id']), label=str(data.get('label', '')), coordinates=coordinates)


def _edge_from_dict(data: Mapping[str, Any]) -> Edge:
    weight = int(data['weight'])
    if weight < 0:
        raise InvalidProblem(f"Edge {data['departure']}->{data['arrival']} has negative weight {weight}.")
    return Edge(int(data['departure']), int(data['arrival']), weight)


def problem_from_dict(data: Mapping[str, Any]) -> Problem:
    """
    Builds a Problem from a mapping of the form

        {"vertices": [{"id": 1, "label": "A", "x": 0.0, "y": 0.0}, ...],
         "edges": [{"departure": 1, "arrival": 2, "weight": 5}, ...],
         "departure": 1, "arrival": 3}
    """
    try:
        vertices = tuple(_vertex_from_dict(v) for v in data['vertices'])
        edges = tuple(_edge_from_dict(e) for e in data['edges'])
        departure = int(data['departure'])
        arrival = int(data['arrival'])
    except KeyError as e:
        raise InvalidProblem(f"Missing key in problem definition: {e}") from e
    except (TypeError, ValueError) as e:
        raise InvalidProblem(f"Malformed problem definition: {e}") from e

    if len(vertices) < 2:
        raise InvalidProblem("A problem needs at least 2 vertices.")
    ids = [v.id for v in vertices]
    if len(set(ids)) != len(ids):
        raise InvalidProblem("Vertex ids must be unique.")

    return Problem(vertices=vertices, edges=edges, departure_vertex_id=departure, arrival_vertex_id=arrival)


def load_problem(path: str) -> Problem:
    """Reads a problem definition from a JSON file."""
    with open(path, 'r') as f:
        return problem_from_dict(json.load(f))


def problem_from_distance_matrix(distance_matrix: np.ndarray,
                                 coordinates: Optional[np.ndarray] = None,
                                 departure: int = 0,
                                 arrival: Optional[int] = None,
                                 scaling_factor: int = 1) -> Problem:
    """
    Builds a complete directed graph from a distance matrix.

    Args:
        distance_matrix: Numpy array of shape (n, n) containing pairwise distances between cities.
        coordinates: Optional numpy array of shape (n, 2), kept on the vertices as payload.
        departure: Index of the city the tour starts from.
        arrival: Index of the city the tour ends at. When omitted, an extra vertex with
            id n standing for the return to `departure` is added as the arrival, so the
            solver visits all n cities before closing the loop.
        scaling_factor: Distances are multiplied by this and rounded to int, since
            edge weights are integers.
    """
    distance_matrix = np.asarray(distance_matrix)
    if distance_matrix.ndim != 2 or distance_matrix.shape[0] != distance_matrix.shape[1]:
        raise InvalidProblem(f"Distance matrix must be square, got shape {distance_matrix.shape}.")
    n = distance_matrix.shape[0]
    if n < 2:
        raise InvalidProblem("A problem needs at least 2 vertices.")
    if np.any(distance_matrix < 0):
        raise InvalidProblem("Distances must be non-negative.")

    int_distance_matrix = np.rint(distance_matrix * scaling_factor).astype(int)

    vertices = []
    for i in range(n):
        xy = None
        if coordinates is not None:
            xy = (float(coordinates[i][0]), float(coordinates[i][1]))
        vertices.append(Vertex(id=i, label=str(i), coordinates=xy))

    edges = [Edge(i, j, int(int_distance_matrix[i, j])) for i in range(n) for j in range(n) if i != j]

    if arrival is None:
        if not 0 <= departure < n:
            raise InvalidProblem(f"Departure index {departure} out of range for {n} cities.")
        arrival = n
        vertices.append(Vertex(id=n, label=f"{departure}'", coordinates=vertices[departure].coordinates))
        edges.extend(Edge(i, n, int(int_distance_matrix[i, departure])) for i in range(n) if i != departure)

    return Problem(
        vertices=tuple(vertices),
        edges=tuple(edges),
        departure_vertex_id=departure,
        arrival_vertex_id=arrival,
    )


def load_dataset(path: str) -> List[Tuple[str, np.ndarray, np.ndarray, float]]:
    """Loads a pickled list of (name, coordinates, distance_matrix, baseline) instances."""
    if not os.path.exists(path):
        raise FileNotFoundError(f"Dataset file not found at: {path}")
    with open(path, 'rb') as f:
        return pkl.load(f)


def problem_to_dict(problem: Problem) -> Dict[str, Any]:
    """Inverse of `problem_from_dict`."""
    vertices = []
    for v in problem.vertices:
        entry = {'id': v.id, 'label': v.label}
        if v.coordinates is not None:
            entry['x'], entry['y'] = v.coordinates
        vertices.append(entry)
    return {
        'vertices': vertices,
        'edges': [{'departure': e.departure_vertex_id, 'arrival': e.arrival_vertex_id, 'weight': e.weight}
                  for e in problem.edges],
        'departure': problem.departure_vertex_id,
        'arrival': problem.arrival_vertex_id,
    }
