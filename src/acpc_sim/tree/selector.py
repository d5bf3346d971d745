"""FSS and VSS node selection over a revoked activation tree.

Both strategies are shallow-first greedy walks. The first pass takes one
node from every depth that still has one available; the second pass
restarts at depth 1 and drains depths top to bottom. Shallow nodes cover
exponentially more leaves, so they are always preferred.

FSS (Fixed-Size Subset) stops after a fixed node budget and reports the
crowd size reached. VSS (Variable-Size Subset) stops once a target crowd
size is reached and reports how many nodes it took.

Depth 0 is never picked: both strategies assume at least one revocation,
otherwise the root alone covers every leaf.
"""

from __future__ import annotations

from collections.abc import Callable

from acpc_sim.tree.activation_tree import ActivationTree
from acpc_sim.tree.types import SelectionResult


class NodeSelector:
    """Pick pickable nodes from an activation tree of a given ID length."""

    def __init__(self, id_length: int) -> None:
        self.id_length = id_length
        self.tree_height = id_length + 1

    def _pick(
        self,
        tree: ActivationTree,
        keep_going: Callable[[SelectionResult], bool],
    ) -> SelectionResult:
        result = SelectionResult(
            nodes_picked=0,
            crowd_size=0,
            picks_per_depth=[0] * self.tree_height,
        )

        def take(depth: int) -> None:
            tree.mark_picked_node(depth)
            result.crowd_size += tree.count_descendant_leaves(depth)
            result.nodes_picked += 1
            result.picks_per_depth[depth] += 1

        # One node from each depth that has any
        for depth in range(1, self.tree_height):
            if not keep_going(result):
                break
            if tree.count_available_nodes(depth) > 0:
                take(depth)

        # Drain depths from the top until done or nothing is left
        depth = 1
        while keep_going(result) and depth < self.tree_height:
            if tree.count_available_nodes(depth) > 0:
                take(depth)
            else:
                depth += 1

        return result

    def pick_fss(
        self, tree: ActivationTree, budget: int | None = None
    ) -> SelectionResult:
        """Pick up to ``budget`` nodes (default: one per ID bit)."""
        if budget is None:
            budget = self.id_length
        return self._pick(tree, lambda r: r.nodes_picked < budget)

    def pick_vss(self, tree: ActivationTree, target_crowd: int) -> SelectionResult:
        """Pick nodes until the crowd size reaches ``target_crowd``.

        If the tree runs out of pickable nodes first, the partial result
        is returned.
        """
        return self._pick(tree, lambda r: r.crowd_size < target_crowd)

    def count_privacy_fss(
        self, tree: ActivationTree, budget: int | None = None
    ) -> int:
        """Crowd size obtained by picking ``budget`` nodes."""
        return self.pick_fss(tree, budget).crowd_size

    def count_asked_nodes_vss(self, tree: ActivationTree, target_crowd: int) -> int:
        """Nodes that must be picked to reach ``target_crowd``."""
        return self.pick_vss(tree, target_crowd).nodes_picked
