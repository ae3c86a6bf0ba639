import logging
import os
from dataclasses import dataclass, fields


@dataclass
class SolverConfig:
    """Settings shared by the solver and the batch evaluator."""
    yield_every: int = 1              # Greedy steps between two yields to the event loop
    timeout_seconds: float = 30.0     # Per-solve timeout applied by the evaluator
    num_workers: int = 8              # Max solves in flight in the evaluator
    scaling_factor: int = 1000        # Float distances are multiplied by this before the int cast
    log_level: str = "INFO"
    output_csv_path: str = "tsp_evaluation_results.csv"

    def __post_init__(self):
        if self.yield_every < 1:
            raise ValueError("yield_every must be at least 1.")
        if self.num_workers < 1:
            raise ValueError("num_workers must be at least 1.")

    @classmethod
    def from_env(cls, prefix: str = "NNTSP_") -> "SolverConfig":
        """Builds a config, overriding defaults with e.g. NNTSP_TIMEOUT_SECONDS=5."""
        overrides = {}
        for f in fields(cls):
            raw = os.environ.get(prefix + f.name.upper())
            if raw is None:
                continue
            # Dataclass field types are the default values' types here
            overrides[f.name] = type(f.default)(raw)
        return cls(**overrides)


def configure_logging(level: str = "INFO"):
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
