import asyncio
import csv
import pickle

import numpy as np
import pytest

from nntsp.config import SolverConfig
from nntsp.evaluation import TSPEvaluation, main
from nntsp.errors import DeadEnd


def _instance(name, coordinates, baseline):
    coordinates = np.asarray(coordinates, dtype=float)
    diff = coordinates[:, None, :] - coordinates[None, :, :]
    return name, coordinates, np.linalg.norm(diff, axis=-1), baseline


@pytest.fixture
def dataset():
    return [
        _instance("square", [[0, 0], [1, 0], [1, 1], [0, 1]], 4.0),
        _instance("line", [[0, 0], [1, 0], [2, 0]], 4.0),
    ]


@pytest.fixture
def config(tmp_path):
    return SolverConfig(output_csv_path=str(tmp_path / "results.csv"), num_workers=2)


def test_evaluate_writes_rows_in_dataset_order(dataset, config):
    evaluator = TSPEvaluation(dataset, config=config)
    results = evaluator.evaluate()

    assert [row["instance_name"] for row in results] == ["square", "line"]
    assert all(row["status"] == "ok" for row in results)
    assert results[0]["cost"] == pytest.approx(4.0)
    assert results[0]["gap"] == pytest.approx(0.0)
    assert evaluator.registry.snapshot()["NearestNeighbourSolver.solve"]["count"] == 2

    with open(config.output_csv_path, newline="") as f:
        rows = list(csv.DictReader(f))
    assert [row["instance_name"] for row in rows] == ["square", "line"]
    assert rows[0]["status"] == "ok"


class _StuckSolver:
    async def solve(self, problem):
        while True:
            await asyncio.sleep(0.01)


class _FailingSolver:
    async def solve(self, problem):
        raise DeadEnd(problem.departure_vertex_id, 1)


@pytest.mark.asyncio
async def test_timeout_is_reported(dataset, config):
    config.timeout_seconds = 0.05
    evaluator = TSPEvaluation(dataset[:1], config=config, solver=_StuckSolver())
    results = await evaluator.evaluate_async()
    assert results[0]["status"] == "timeout"
    assert results[0]["cost"] is None


@pytest.mark.asyncio
async def test_solver_errors_are_reported(dataset, config):
    evaluator = TSPEvaluation(dataset, config=config, solver=_FailingSolver())
    results = await evaluator.evaluate_async()
    assert [row["status"] for row in results] == ["dead_end", "dead_end"]


class _BrokenSolver:
    async def solve(self, problem):
        raise RuntimeError("boom")


def test_malformed_instance_does_not_abort_the_batch(dataset, config):
    bad = ("bad", np.zeros((3, 2)), np.zeros((3, 4)), 1.0)
    results = TSPEvaluation([dataset[0], bad], config=config).evaluate()

    assert [(row["instance_name"], row["status"]) for row in results] == [
        ("square", "ok"), ("bad", "invalid_problem")]
    with open(config.output_csv_path, newline="") as f:
        rows = list(csv.DictReader(f))
    assert [row["status"] for row in rows] == ["ok", "invalid_problem"]


@pytest.mark.asyncio
async def test_unexpected_errors_become_runtime_error_rows(dataset, config, caplog):
    evaluator = TSPEvaluation(dataset, config=config, solver=_BrokenSolver())
    results = await evaluator.evaluate_async()
    assert [row["status"] for row in results] == ["runtime_error", "runtime_error"]
    assert "Runtime error on instance square" in caplog.text


def test_no_results_writes_nothing(config):
    TSPEvaluation([], config=config).write_results_to_csv([])
    with pytest.raises(FileNotFoundError):
        open(config.output_csv_path)


def test_main(dataset, tmp_path, capsys):
    dataset_path = tmp_path / "dataset.pkl"
    with open(dataset_path, "wb") as f:
        pickle.dump(dataset, f)
    output = tmp_path / "out.csv"

    main([str(dataset_path), "--output", str(output)])

    assert output.exists()
    assert "Sample of Results" in capsys.readouterr().out
