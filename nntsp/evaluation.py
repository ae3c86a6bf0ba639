import argparse
import asyncio
import csv
import logging
import time
from typing import Any, Dict, List, Optional, Sequence, Tuple

import numpy as np
from tqdm import tqdm

from .config import SolverConfig, configure_logging
from .constructive_nn import NearestNeighbourSolver
from .errors import DeadEnd, InvalidProblem, MissingEdge, UnknownVertex
from .loader import load_dataset, problem_from_distance_matrix
from .metrics import TimerRegistry

__all__ = ['TSPEvaluation']

logger = logging.getLogger(__name__)

_ERROR_STATUS = {
    DeadEnd: 'dead_end',
    MissingEdge: 'missing_edge',
    UnknownVertex: 'unknown_vertex',
    InvalidProblem: 'invalid_problem',
}


class TSPEvaluation:
    """
    Evaluator for the Nearest Neighbour solver.
    It solves every instance of a dataset concurrently on one event loop
    and writes the results to a CSV file.
    """

    def __init__(self,
                 datasets: Sequence[Tuple[str, np.ndarray, np.ndarray, float]],
                 config: Optional[SolverConfig] = None,
                 solver: Optional[NearestNeighbourSolver] = None):
        """
        Args:
            datasets: (name, coordinates, distance_matrix, baseline) instances.
            config: Timeout, concurrency, scaling and output settings.
            solver: Solver to evaluate. Defaults to one reporting into `self.registry`.
        """
        self.config = config or SolverConfig()
        self.registry = TimerRegistry()
        self.solver = solver or NearestNeighbourSolver(reporter=self.registry, config=self.config)
        self._datasets = list(datasets)

        logger.info("Loaded %d TSP instances.", len(self._datasets))
        logger.info("Running evaluation with %d concurrent solves.", self.config.num_workers)

    @classmethod
    def from_path(cls, dataset_path: str, config: Optional[SolverConfig] = None) -> "TSPEvaluation":
        return cls(load_dataset(dataset_path), config=config)

    async def _run_single_solve(self, semaphore: asyncio.Semaphore,
                                instance: Tuple[str, np.ndarray, np.ndarray, float]) -> Dict[str, Any]:
        """Solves one instance. Returns a result row; failures are reported in its status."""
        name, coordinates, distance_matrix, baseline = instance
        row = {'instance_name': name, 'status': 'ok', 'cost': None, 'gap': None, 'solve_time': 0.0}

        async with semaphore:
            solve_start_time = time.perf_counter()
            try:
                problem = problem_from_distance_matrix(
                    distance_matrix, coordinates, scaling_factor=self.config.scaling_factor)
                solution = await asyncio.wait_for(self.solver.solve(problem), self.config.timeout_seconds)
            except asyncio.TimeoutError:
                row['status'] = 'timeout'
                logger.warning("Instance %s timed out after %.1fs.", name, self.config.timeout_seconds)
                return row
            except (DeadEnd, MissingEdge, UnknownVertex, InvalidProblem) as e:
                row['status'] = _ERROR_STATUS[type(e)]
                logger.warning("Instance %s failed: %s", name, e)
                return row
            except Exception:
                row['status'] = 'runtime_error'
                logger.exception("Runtime error on instance %s", name)
                return row
            finally:
                row['solve_time'] = time.perf_counter() - solve_start_time

        cost = solution.cost / self.config.scaling_factor
        row['cost'] = cost
        row['gap'] = (cost - baseline) / baseline if baseline > 0 else float('inf')
        logger.debug("instance_name=%s, gap=%s, solve_time=%s", name, row['gap'], row['solve_time'])
        return row

    async def evaluate_async(self) -> List[Dict[str, Any]]:
        semaphore = asyncio.Semaphore(self.config.num_workers)
        tasks = [asyncio.ensure_future(self._run_single_solve(semaphore, instance))
                 for instance in self._datasets]

        with tqdm(total=len(tasks), desc="Evaluating instances") as progress:
            for task in tasks:
                task.add_done_callback(lambda _: progress.update())
            # gather keeps dataset order
            return list(await asyncio.gather(*tasks))

    def evaluate(self) -> List[Dict[str, Any]]:
        """Evaluates every instance, writes the CSV and returns the rows in dataset order."""
        start_time = time.time()
        results = asyncio.run(self.evaluate_async())
        self.write_results_to_csv(results)
        logger.info("Evaluation finished in %.2f seconds.", time.time() - start_time)
        return results

    def write_results_to_csv(self, results_data: List[Dict[str, Any]]):
        """Writes the evaluation results to a CSV file."""
        if not results_data:
            logger.info("No results to write.")
            return

        headers = ['instance_name', 'status', 'cost', 'gap', 'solve_time']
        with open(self.config.output_csv_path, 'w', newline='') as csvfile:
            writer = csv.DictWriter(csvfile, fieldnames=headers, restval='N/A')
            writer.writeheader()
            writer.writerows(results_data)
        logger.info("Successfully wrote results to '%s'", self.config.output_csv_path)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Evaluate the Nearest Neighbour heuristic on a TSP dataset.")
    parser.add_argument('dataset_path', help="Pickle of (name, coordinates, distance_matrix, baseline) tuples")
    parser.add_argument('--output', help="CSV file to write")
    args = parser.parse_args(argv)

    config = SolverConfig.from_env()
    if args.output:
        config.output_csv_path = args.output
    configure_logging(config.log_level)

    tsp_evaluator = TSPEvaluation.from_path(args.dataset_path, config)
    results = tsp_evaluator.evaluate()

    if results:
        print("\n--- Sample of Results ---")
        for i in range(min(5, len(results))):
            print(results[i])
    print(tsp_evaluator.registry.snapshot())


if __name__ == '__main__':
    main()
