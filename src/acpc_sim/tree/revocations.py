"""Revocation patterns that drive the simulation.

Three leaf sets are produced for a given revocation count:
1. Best case: contiguous leaves packed under as few ancestors as possible
2. Worst case: leaves spread so the shallowest depths are depleted first
3. Random: pseudorandom leaves from a seeded generator
"""

from __future__ import annotations

import numpy as np


class RevocationGenerator:
    """Build revocation lists for a tree with ``id_length``-bit leaves."""

    def __init__(self, id_length: int) -> None:
        self.id_length = id_length
        # Sentinel bit that marks an ID as a leaf
        self.base_id = 1 << id_length

    def is_supported(self, n_revocations: int) -> bool:
        """A tree cannot revoke more leaves than it has."""
        return 0 <= n_revocations <= self.base_id

    def _check(self, n_revocations: int) -> None:
        if not self.is_supported(n_revocations):
            raise ValueError(
                f"Cannot generate {n_revocations} leaves for an ID length of {self.id_length}"
            )

    def best_case(self, n_revocations: int) -> list[int]:
        """The ``n_revocations`` leftmost leaves.

        With 4-bit IDs and 2 revocations only node 10 is on a revocation
        path (10000 and 10001 are revoked); with 7 revocations (10000 to
        10110) its sibling 11 is still untouched.
        """
        self._check(n_revocations)
        return [self.base_id | i for i in range(n_revocations)]

    def worst_case(self, n_revocations: int) -> list[int]:
        """Leaves that put the most shallow nodes on revocation paths.

        Let p be the largest power of two not above ``n_revocations``, at
        depth k = log2(p). The first p leaves are 1||i||0...0 for i < p,
        one per depth-k node, which depletes depth k. Each of the
        remaining n - p leaves is 1||(2i+1)||0...0 with the odd counter
        one bit wider, revoking the sibling of an already revoked node at
        depth k+1.

        With 4-bit IDs: 2 revocations give 10000 and 11000 (depth 1 gone);
        4 give 10000, 10100, 11000, 11100 (depth 2 gone); 3 add 10100 to
        the first pair.
        """
        self._check(n_revocations)
        if n_revocations == 0:
            return []

        floor_log2 = n_revocations.bit_length() - 1
        largest_power = 1 << floor_log2
        shift = self.id_length - floor_log2

        leaves = [self.base_id | (i << shift) for i in range(largest_power)]

        for i in range(n_revocations - largest_power):
            partial_id = (i << 1) + 1
            leaves.append(self.base_id | (partial_id << (shift - 1)))

        return leaves

    def random(self, n_revocations: int, seed: int) -> list[int]:
        """``n_revocations`` distinct pseudorandom leaves, sorted.

        Each candidate joins a high draw of floor(L/2) bits and a low draw
        of the remaining bits under the sentinel. Collisions are resampled
        until enough distinct leaves exist, which is quick for
        n_revocations << 2^L but unbounded in general.
        """
        self._check(n_revocations)
        rng = np.random.default_rng(seed)

        high_bits = self.id_length // 2
        low_bits = self.id_length - high_bits

        leaves: set[int] = set()
        while len(leaves) < n_revocations:
            missing = n_revocations - len(leaves)
            highs = rng.integers(0, 1 << high_bits, size=missing, dtype=np.uint64)
            lows = rng.integers(0, 1 << low_bits, size=missing, dtype=np.uint64)
            for high, low in zip(highs, lows):
                leaves.add(self.base_id | (int(high) << low_bits) | int(low))

        return sorted(leaves)
