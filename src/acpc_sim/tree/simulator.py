"""Revocation sweeps for the FSS and VSS strategies.

For each revocation count the simulator builds a fresh activation tree
per scenario (best case, worst case and ``n_trials`` random cases), runs
a selector against it and aggregates the results into one row.
"""

from __future__ import annotations

import csv
import os
from collections.abc import Iterable, Iterator

import numpy as np

from acpc_sim.tree.activation_tree import ActivationTree
from acpc_sim.tree.revocations import RevocationGenerator
from acpc_sim.tree.selector import NodeSelector
from acpc_sim.tree.types import FSSRow, SimulationConfig, VSSRow

FSS_HEADER = ["#Rev", "Best", "Worst", "Avg"]
VSS_HEADER = ["#Rev", "Best", "Worst", "Avg", "All"]


class Simulator:
    """Batch driver tying generators, trees and selectors together."""

    def __init__(self, config: SimulationConfig | None = None) -> None:
        self.config = config or SimulationConfig()
        self.id_length = self.config.id_length
        self.generator = RevocationGenerator(self.id_length)
        self.selector = NodeSelector(self.id_length)

    def trial_seed(self, trial: int) -> int:
        return self.config.seed_base + trial * self.config.seed_stride

    def target_crowd(self) -> int:
        """VSS target: ``percent_privacy`` percent of ``2 << id_length``."""
        return (2 << self.id_length) * self.config.percent_privacy // 100

    def revocation_counts(self) -> range:
        step = self.config.revocation_step
        return range(step, self.config.max_revocations + 1, step)

    def build_tree(self, leaves: Iterable[int]) -> ActivationTree:
        tree = ActivationTree(self.id_length)
        tree.revoke(leaves)
        return tree

    def _random_trees(self, n_revocations: int) -> Iterator[ActivationTree]:
        for trial in range(self.config.n_trials):
            leaves = self.generator.random(n_revocations, self.trial_seed(trial))
            yield self.build_tree(leaves)

    def simulate_fss(self, n_revocations: int) -> FSSRow:
        """Best, worst and average FSS crowd size for ``n_revocations``."""
        best = self.selector.count_privacy_fss(
            self.build_tree(self.generator.best_case(n_revocations))
        )
        worst = self.selector.count_privacy_fss(
            self.build_tree(self.generator.worst_case(n_revocations))
        )

        crowd_sizes = [
            self.selector.count_privacy_fss(tree)
            for tree in self._random_trees(n_revocations)
        ]
        average = float(np.mean(crowd_sizes)) if crowd_sizes else 0.0

        return FSSRow(
            n_revocations=n_revocations,
            best=best,
            worst=worst,
            average=average,
        )

    def simulate_vss(
        self, n_revocations: int, target_crowd: int | None = None
    ) -> VSSRow:
        """Best, worst and average VSS node count for ``n_revocations``.

        Also averages the pickable nodes each random tree offers before
        selection, i.e. the size of a full broadcast.
        """
        if target_crowd is None:
            target_crowd = self.target_crowd()

        best = self.selector.count_asked_nodes_vss(
            self.build_tree(self.generator.best_case(n_revocations)), target_crowd
        )
        worst = self.selector.count_asked_nodes_vss(
            self.build_tree(self.generator.worst_case(n_revocations)), target_crowd
        )

        node_counts = []
        pickable_counts = []
        for tree in self._random_trees(n_revocations):
            pickable_counts.append(tree.count_all_pickable_nodes())
            node_counts.append(self.selector.count_asked_nodes_vss(tree, target_crowd))

        if node_counts:
            average = float(np.mean(node_counts))
            average_pickable = float(np.mean(pickable_counts))
        else:
            average = average_pickable = 0.0

        return VSSRow(
            n_revocations=n_revocations,
            best=best,
            worst=worst,
            average=average,
            average_pickable=average_pickable,
        )

    def sweep_fss(self) -> Iterator[FSSRow]:
        for n_revocations in self.revocation_counts():
            yield self.simulate_fss(n_revocations)

    def sweep_vss(self, target_crowd: int | None = None) -> Iterator[VSSRow]:
        if target_crowd is None:
            target_crowd = self.target_crowd()
        for n_revocations in self.revocation_counts():
            yield self.simulate_vss(n_revocations, target_crowd)


def default_filename(kind: str, config: SimulationConfig) -> str:
    """Result file name for an ``"fss"`` or ``"vss"`` sweep."""
    name = (
        f"ACPC_Sim{kind.upper()}_{config.max_revocations}+{config.revocation_step}"
        f" ({config.n_trials} repetitions, id {config.id_length}"
    )
    if kind.lower() == "vss":
        name += f", {config.percent_privacy}% privacy"
    name += ").txt"
    return os.path.join(config.output_dir, name)


def write_rows(
    filepath: str,
    header: list[str],
    rows: Iterable[FSSRow | VSSRow],
) -> Iterator[FSSRow | VSSRow]:
    """Append tab-delimited rows to ``filepath`` as they are produced.

    Yields each row after it is flushed, so callers can report progress.
    """
    with open(filepath, "a", newline="") as f:
        writer = csv.writer(f, delimiter="\t", lineterminator="\n")
        writer.writerow(header)
        f.flush()
        for row in rows:
            writer.writerow(row.as_row())
            f.flush()
            yield row
