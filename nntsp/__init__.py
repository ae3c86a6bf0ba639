"""
Nearest Neighbour heuristic for the Travelling Salesman Problem, run as an
asyncio coroutine so that many solves can share one event loop.
"""

from .config import SolverConfig, configure_logging
from .constructive_nn import NearestNeighbourSolver
from .cost import find_edge, tour_cost
from .errors import DeadEnd, InvalidProblem, MissingEdge, TSPError, UnknownVertex
from .graph import edges_from, is_arrival, is_visited, vertex_by_id
from .loader import load_dataset, load_problem, problem_from_dict, problem_from_distance_matrix, problem_to_dict
from .metrics import NullReporter, Reporter, Timer, TimerRegistry
from .problem import Edge, Problem, Solution, Vertex

__all__ = [
    "NearestNeighbourSolver",
    "SolverConfig",
    "configure_logging",
    "Vertex",
    "Edge",
    "Problem",
    "Solution",
    "TSPError",
    "InvalidProblem",
    "UnknownVertex",
    "DeadEnd",
    "MissingEdge",
    "vertex_by_id",
    "is_visited",
    "is_arrival",
    "edges_from",
    "tour_cost",
    "find_edge",
    "problem_from_dict",
    "problem_to_dict",
    "load_problem",
    "problem_from_distance_matrix",
    "load_dataset",
    "Reporter",
    "NullReporter",
    "Timer",
    "TimerRegistry",
]
