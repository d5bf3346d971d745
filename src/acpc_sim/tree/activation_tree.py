r"""Activation tree with incremental pickable-node accounting.

Node IDs carry a leading sentinel 1-bit followed by the path from the
root, so the root is 1, its children are 10 and 11, and so forth. With
n-bit vehicle IDs the leaves run from 1 followed by n zeros through
1 followed by n ones, and the tree height is n+1:

                         0001                          => depth 0
                ________/    \________
               /                       \
           0010                        0011            => depth 1
        __/    \__                  __/    \__
       /          \                /          \
    0100          0101          0110          0111     => depth 2
    /  \          /  \          /  \          /  \
 1000  1001    1010  1011    1100  1101    1110  1111  => depth 3

Revoking a leaf revokes its whole path to the root. Each revoked ancestor
stops being pickable and exposes its two children instead; a selection
algorithm then consumes the pickable nodes depth by depth.
"""

from __future__ import annotations

from collections.abc import Iterable

import numpy as np
from numpy.typing import NDArray


def leaf_id(index: int, id_length: int) -> int:
    """Leaf identifier for the index-th vehicle (0-based, left to right)."""
    return (1 << id_length) | index


def to_binary(node_ids: Iterable[int]) -> str:
    """Render node IDs as a bracketed list of binary strings."""
    return "[ " + "".join(f"{node_id:b} " for node_id in node_ids) + "]"


class ActivationTree:
    """Revocation state of an ACPC activation tree.

    Stores, per depth, the revoked ancestors in ascending order and the
    number of nodes that are neither revoked nor picked. Revocation must
    complete before a selector starts calling ``mark_picked_node``.
    """

    def __init__(self, id_length: int) -> None:
        if id_length < 1:
            raise ValueError(
                f"id_length={id_length} too small (need a root and a leaf level)"
            )
        self.id_length = id_length
        self.height = id_length + 1
        self.revoked_nodes: list[list[int]] = [[] for _ in range(self.height)]

        # Only the root is pickable while nothing is revoked
        self._pickable: NDArray[np.int64] = np.zeros(self.height, dtype=np.int64)
        self._pickable[0] = 1

    @property
    def pickable(self) -> NDArray[np.int64]:
        """Copy of the per-depth pickable counters."""
        return self._pickable.copy()

    def is_leaf(self, node_id: int) -> bool:
        return (node_id >> self.id_length) == 1

    def _revoke_leaf(self, node_id: int) -> None:
        """Revoke one leaf and its path to the root.

        ``node_id`` must be larger than every leaf revoked before it: each
        depth is only compared against its last revoked ancestor.
        """
        shift = self.id_length
        last_depth = self.height - 1

        for depth in range(self.height):
            ancestor = node_id >> shift
            nodes_at_depth = self.revoked_nodes[depth]

            if not nodes_at_depth or nodes_at_depth[-1] != ancestor:
                nodes_at_depth.append(ancestor)
                self._pickable[depth] -= 1
                # Both children become pickable; the next depth removes
                # the one on this leaf's path
                if depth < last_depth:
                    self._pickable[depth + 1] += 2

            shift -= 1

    def revoke(self, node_ids: Iterable[int]) -> None:
        """Revoke a batch of leaves, in any order.

        The batch is validated before any state changes, then revoked in
        ascending order.
        """
        ordered = sorted(node_ids)
        for node_id in ordered:
            if not self.is_leaf(node_id):
                raise ValueError(
                    f"{node_id:#b} is not a leaf of a tree with id_length={self.id_length}"
                )

        for node_id in ordered:
            self._revoke_leaf(node_id)

    def count_available_nodes(self, depth: int) -> int:
        """Nodes at ``depth`` that are neither revoked nor picked."""
        return int(self._pickable[depth])

    def mark_picked_node(self, depth: int) -> int:
        """Consume one available node at ``depth``; return what remains.

        Callers check ``count_available_nodes(depth) > 0`` first.
        """
        self._pickable[depth] -= 1
        return self.count_available_nodes(depth)

    def count_descendant_leaves(self, depth: int) -> int:
        """Leaves below any single node at ``depth`` (its crowd size)."""
        return 1 << (self.id_length - depth)

    def count_max_nodes_below(self, baseline_depth: int, target_depth: int) -> int:
        """Nodes at ``target_depth`` covered by one node at ``baseline_depth``."""
        if baseline_depth > target_depth:
            return 0
        return 1 << (target_depth - baseline_depth)

    def count_revoked_nodes(self, depth: int) -> int:
        return len(self.revoked_nodes[depth])

    def count_all_pickable_nodes(self) -> int:
        """Total pickable nodes, i.e. the size of a full broadcast."""
        return int(self._pickable.sum())

    def describe(self) -> str:
        """Per-depth availability and crowd size, one line per depth."""
        lines = []
        for depth in range(self.height):
            lines.append(
                f"Available at depth {depth}: {self.count_available_nodes(depth)}"
                f". Crowd size for such a node: {self.count_descendant_leaves(depth)}"
            )
        return "\n".join(lines)

    def __str__(self) -> str:
        return "\n".join(
            f"{len(nodes)}:\t{to_binary(nodes)}" for nodes in self.revoked_nodes
        )
