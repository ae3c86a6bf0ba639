import asyncio
import logging
import time
from typing import List, Optional, Set

from .config import SolverConfig
from .cost import tour_cost
from .errors import DeadEnd
from .graph import edges_from, is_arrival, is_visited, vertex_by_id
from .metrics import NullReporter, Reporter
from .problem import Problem, Solution, Vertex

logger = logging.getLogger(__name__)


class NearestNeighbourSolver:
    def __init__(self, reporter: Optional[Reporter] = None, config: Optional[SolverConfig] = None):
        """
        Initialize the solver.

        Args:
            reporter: Receives the duration of every successful solve. Defaults to a no-op.
            config: Solver settings; only `yield_every` is used here.
        """
        self.reporter = reporter or NullReporter()
        self.config = config or SolverConfig()
        self.metric_name = f"{type(self).__name__}.solve"

    # --- Neighbour selection ---

    def _nearest_not_visited_neighbour(self, problem: Problem, current: Vertex, visited_ids: Set[int]) -> Vertex:
        """
        Returns the arrival vertex of the cheapest edge leaving `current` that leads
        neither to a visited vertex nor to the arrival vertex.

        Edges of equal weight keep their edge-list order, so the first one listed wins.
        """
        candidates = sorted(enumerate(edges_from(problem, current)), key=lambda item: (item[1].weight, item[0]))
        for _, edge in candidates:
            vertex = vertex_by_id(problem, edge.arrival_vertex_id)
            if not is_visited(visited_ids, vertex) and not is_arrival(problem, vertex):
                return vertex
        raise DeadEnd(current.id, len(visited_ids))

    # --- Tour construction ---

    async def _build_tour(self, problem: Problem, departure: Vertex) -> List[Vertex]:
        visited = [departure]
        visited_ids = {departure.id}
        current = departure
        steps = 0
        while len(visited) < problem.vertices_count - 1:
            current = self._nearest_not_visited_neighbour(problem, current, visited_ids)
            visited.append(current)
            visited_ids.add(current.id)
            steps += 1
            if steps % self.config.yield_every == 0:
                # Let other solves sharing the loop run; cancellation lands here.
                await asyncio.sleep(0)
        return visited

    async def solve(self, problem: Problem) -> Solution:
        """
        Solve the problem using the Nearest Neighbour heuristic.

        Starting from the departure vertex, repeatedly moves to the cheapest unvisited
        neighbour until all but one vertex have been visited, then closes the tour
        at the arrival vertex. There is no backtracking and no post-tour improvement.

        Returns:
            A Solution whose vertices start at the departure vertex, end at the
            arrival vertex and count `problem.vertices_count` entries.

        Raises:
            UnknownVertex: departure, arrival or an edge endpoint does not resolve.
            DeadEnd: some step found no eligible neighbour.
            MissingEdge: the tour has a consecutive pair with no edge.
        """
        logger.debug("Starting Nearest Neighbour heuristic.")
        start = time.perf_counter()
        try:
            departure = vertex_by_id(problem, problem.departure_vertex_id)
            arrival = vertex_by_id(problem, problem.arrival_vertex_id)
            tour = await self._build_tour(problem, departure)
            tour.append(arrival)
            cost = tour_cost(problem.edges, tour)
        except asyncio.CancelledError:
            logger.debug("Nearest Neighbour heuristic cancelled.")
            raise
        except Exception:
            logger.error("Error while executing heuristic.", exc_info=True)
            raise

        self.reporter.record(self.metric_name, time.perf_counter() - start)
        logger.debug("Done with Nearest Neighbour heuristic.")
        return Solution(vertices=tuple(tour), cost=cost)

    def solve_sync(self, problem: Problem) -> Solution:
        """Runs `solve` on a fresh event loop, for callers outside of asyncio."""
        return asyncio.run(self.solve(problem))
