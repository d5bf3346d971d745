"""Dataclass definitions for the activation-tree simulator."""

from __future__ import annotations

from dataclasses import dataclass, field

# Length of vehicle IDs as defined in ACPC and BCAM (~1 trillion vehicles)
DEFAULT_ID_LENGTH = 40

# First digits of Planck's constant and pi, used to derive trial seeds
PLANCK_SEED = 662607004
PI_STRIDE = 314159


@dataclass
class SimulationConfig:
    """Configuration for a revocation sweep."""

    id_length: int = DEFAULT_ID_LENGTH
    n_trials: int = 10000
    max_revocations: int = 50000
    revocation_step: int = 100
    percent_privacy: int = 10  # VSS target as a share of 2 << id_length
    seed_base: int = PLANCK_SEED
    seed_stride: int = PI_STRIDE
    output_dir: str = "."


@dataclass
class SelectionResult:
    """Outcome of one FSS or VSS pass over an activation tree."""

    nodes_picked: int
    crowd_size: int
    picks_per_depth: list[int] = field(default_factory=list)


@dataclass
class FSSRow:
    """Best, worst and average crowd size for one revocation count."""

    n_revocations: int
    best: int
    worst: int
    average: float

    def as_row(self) -> list:
        return [self.n_revocations, self.best, self.worst, self.average]


@dataclass
class VSSRow:
    """Best, worst and average picked-node counts for one revocation count."""

    n_revocations: int
    best: int
    worst: int
    average: float
    average_pickable: float  # pickable nodes before selection, averaged

    def as_row(self) -> list:
        return [
            self.n_revocations,
            self.best,
            self.worst,
            self.average,
            self.average_pickable,
        ]
