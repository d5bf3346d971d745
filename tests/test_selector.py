"""Tests for the FSS and VSS node selectors."""

from __future__ import annotations

import pytest

from acpc_sim.tree.activation_tree import ActivationTree
from acpc_sim.tree.revocations import RevocationGenerator
from acpc_sim.tree.selector import NodeSelector

EXAMPLE_LEAVES = [0b10000, 0b10001, 0b11111, 0b11110, 0b11101]


@pytest.fixture
def example_tree():
    """4-bit tree with pickable counters [0, 0, 2, 1, 1]."""
    tree = ActivationTree(4)
    tree.revoke(EXAMPLE_LEAVES)
    return tree


def revoked_tree(id_length: int, leaves: list[int]) -> ActivationTree:
    tree = ActivationTree(id_length)
    tree.revoke(leaves)
    return tree


class TestFSS:
    def test_single_revocation(self):
        tree = revoked_tree(4, [0b10000])
        result = NodeSelector(4).pick_fss(tree)
        assert result.picks_per_depth == [0, 1, 1, 1, 1]
        assert result.crowd_size == 8 + 4 + 2 + 1
        assert result.crowd_size < 16

    def test_count_privacy_fss(self, example_tree):
        # First pass: depths 2, 3, 4; second pass: the other depth-2 node
        assert NodeSelector(4).count_privacy_fss(example_tree) == 4 + 2 + 1 + 4
        assert example_tree.count_all_pickable_nodes() == 0

    def test_second_pass_prefers_shallow_depths(self):
        gen = RevocationGenerator(4)
        tree = revoked_tree(4, gen.worst_case(4))
        result = NodeSelector(4).pick_fss(tree)
        assert result.nodes_picked == 4
        assert result.picks_per_depth == [0, 0, 0, 3, 1]
        assert result.crowd_size == 7

    def test_best_case_half_revoked(self):
        gen = RevocationGenerator(4)
        tree = revoked_tree(4, gen.best_case(8))
        result = NodeSelector(4).pick_fss(tree)
        assert result.crowd_size == 8
        assert result.nodes_picked == 1

    def test_budget_respected(self):
        tree = revoked_tree(8, RevocationGenerator(8).worst_case(100))
        result = NodeSelector(8).pick_fss(tree, budget=3)
        assert result.nodes_picked == 3

    def test_budget_beyond_pickable_terminates(self, example_tree):
        result = NodeSelector(4).pick_fss(example_tree, budget=100)
        assert result.nodes_picked == 4
        assert result.crowd_size == 16 - len(EXAMPLE_LEAVES)

    def test_root_never_picked(self):
        """Without revocations only the root is pickable, and it is skipped."""
        tree = ActivationTree(4)
        result = NodeSelector(4).pick_fss(tree)
        assert result.crowd_size == 0
        assert result.picks_per_depth[0] == 0
        assert tree.count_available_nodes(0) == 1

    @pytest.mark.parametrize("seed", [1, 2, 3, 4])
    def test_crowd_bounded_by_live_leaves(self, seed):
        id_length, n = 12, 150
        tree = revoked_tree(id_length, RevocationGenerator(id_length).random(n, seed))
        crowd = NodeSelector(id_length).count_privacy_fss(tree)
        assert 0 < crowd <= (1 << id_length) - n


class TestVSS:
    def test_zero_target(self, example_tree):
        assert NodeSelector(4).count_asked_nodes_vss(example_tree, 0) == 0
        assert example_tree.count_all_pickable_nodes() == 4

    def test_reached_in_first_pass(self, example_tree):
        assert NodeSelector(4).count_asked_nodes_vss(example_tree, 4) == 1

    def test_reached_in_second_pass(self, example_tree):
        result = NodeSelector(4).pick_vss(example_tree, 8)
        assert result.nodes_picked == 4
        assert result.crowd_size == 11
        assert result.picks_per_depth == [0, 0, 2, 1, 1]

    def test_unreachable_target_takes_everything(self):
        tree = revoked_tree(4, [0b10110])
        all_pickable = tree.count_all_pickable_nodes()
        count = NodeSelector(4).count_asked_nodes_vss(tree, 1 << 10)
        assert count == all_pickable == 4
        assert tree.count_all_pickable_nodes() == 0

    def test_best_and_worst_case(self):
        gen = RevocationGenerator(8)
        target = (2 << 8) * 10 // 100
        selector = NodeSelector(8)
        best = selector.count_asked_nodes_vss(revoked_tree(8, gen.best_case(5)), target)
        worst = selector.count_asked_nodes_vss(revoked_tree(8, gen.worst_case(5)), target)
        assert best == 1
        assert worst == 3

    @pytest.mark.parametrize("seed", [5, 6, 7])
    def test_target_reached_when_possible(self, seed):
        id_length, n = 10, 40
        tree = revoked_tree(id_length, RevocationGenerator(id_length).random(n, seed))
        target = (1 << id_length) // 2
        result = NodeSelector(id_length).pick_vss(tree, target)
        assert result.crowd_size >= target
        assert result.nodes_picked == sum(result.picks_per_depth)
