"""Activation-tree core: revocation accounting, generators and selectors.

Leaves are vehicle IDs; revoking one marks its path to the root, and the
FSS/VSS selectors pick surviving nodes to measure the resulting crowd size.
"""

from __future__ import annotations

from acpc_sim.tree.activation_tree import ActivationTree
from acpc_sim.tree.revocations import RevocationGenerator
from acpc_sim.tree.selector import NodeSelector
from acpc_sim.tree.types import (
    FSSRow,
    SelectionResult,
    SimulationConfig,
    VSSRow,
)

__all__ = [
    "ActivationTree",
    "FSSRow",
    "NodeSelector",
    "RevocationGenerator",
    "SelectionResult",
    "SimulationConfig",
    "VSSRow",
]
