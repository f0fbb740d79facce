"""Tests for NSGA-II primitives.

Comprehensive test suite covering:
- TestCompare / TestDominates: Pareto dominance checks
- TestPartitionFront: In-place extraction of a single front
- TestParetoFronts / TestNonDominatedSort: Full front decomposition
- TestCrowdingDistance: Diversity metric computation
"""

import numpy as np
import pytest

from tinynsga2.primitives import (
    Dominance,
    compare,
    crowding_distance,
    dominates,
    non_dominated_sort,
    pareto_fronts,
    partition_front,
)

# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def simple_2d_objectives() -> np.ndarray:
    """Simple 2D objectives with clear dominance hierarchy.

    Resulting fronts:
        Front 0: [1,1]
        Front 1: [2,2], [1,3], [3,1]
        Front 2: [3,3]
    """
    return np.array(
        [
            [1.0, 1.0],  # 0: dominates all (front 0)
            [2.0, 2.0],  # 1: dominated by 0 only (front 1)
            [3.0, 3.0],  # 2: dominated by 0, 1, 3, 4 (front 2)
            [1.0, 3.0],  # 3: dominated by 0 only (front 1)
            [3.0, 1.0],  # 4: dominated by 0 only (front 1)
        ]
    )


@pytest.fixture
def pareto_front_2d() -> np.ndarray:
    """A Pareto front where no solution dominates another."""
    return np.array([[1.0, 4.0], [2.0, 3.0], [3.0, 2.0], [4.0, 1.0]])


@pytest.fixture
def random_objectives() -> np.ndarray:
    """Random 3-objective data with many ties, for property checks."""
    rng = np.random.default_rng(7)
    return rng.integers(0, 5, size=(60, 3)).astype(np.float64)


def _front_sets(fronts: list[np.ndarray]) -> list[set[int]]:
    return [set(f.tolist()) for f in fronts]


# =============================================================================
# TestCompare
# =============================================================================


class TestCompare:
    """Tests for the three-way dominance comparison."""

    def test_a_dominates(self) -> None:
        """Better everywhere gives A_DOMINATES."""
        assert compare(np.array([1.0, 1.0]), np.array([2.0, 2.0])) is Dominance.A_DOMINATES

    def test_b_dominates(self) -> None:
        """Worse everywhere gives B_DOMINATES."""
        assert compare(np.array([2.0, 2.0]), np.array([1.0, 1.0])) is Dominance.B_DOMINATES

    def test_tradeoff_is_non_dominated(self) -> None:
        """Mixed better/worse gives NON_DOMINATED."""
        assert compare(np.array([1.0, 3.0]), np.array([3.0, 1.0])) is Dominance.NON_DOMINATED

    def test_equal_is_non_dominated(self) -> None:
        """Identical vectors are mutually non-dominated."""
        assert compare(np.array([1.0, 2.0]), np.array([1.0, 2.0])) is Dominance.NON_DOMINATED

    def test_partial_tie_with_one_better(self) -> None:
        """One tie and one strictly better gives dominance."""
        assert compare(np.array([1.0, 2.0]), np.array([1.0, 3.0])) is Dominance.A_DOMINATES

    def test_irreflexive(self, random_objectives: np.ndarray) -> None:
        """Comparing any vector with itself is NON_DOMINATED."""
        for row in random_objectives:
            assert compare(row, row) is Dominance.NON_DOMINATED

    def test_antisymmetric(self, random_objectives: np.ndarray) -> None:
        """Swapping the arguments flips strict results and keeps NON_DOMINATED."""
        for a in random_objectives[:20]:
            for b in random_objectives[20:40]:
                assert compare(b, a) == -compare(a, b)

    def test_single_objective(self) -> None:
        """Single objective case works correctly."""
        assert compare(np.array([1.0]), np.array([2.0])) is Dominance.A_DOMINATES
        assert compare(np.array([1.0]), np.array([1.0])) is Dominance.NON_DOMINATED

    def test_shape_mismatch_raises(self) -> None:
        """Vectors of different lengths are rejected."""
        with pytest.raises(ValueError, match="same shape"):
            compare(np.array([1.0, 2.0]), np.array([1.0]))


# =============================================================================
# TestDominates
# =============================================================================


class TestDominates:
    """Tests for the boolean dominates shortcut."""

    def test_clear_dominance(self) -> None:
        """Solution with all better values dominates."""
        assert dominates(np.array([1.0, 1.0]), np.array([2.0, 2.0])) is True

    def test_clear_dominance_reverse_is_false(self) -> None:
        """Dominated solution does not dominate the dominant one."""
        assert dominates(np.array([2.0, 2.0]), np.array([1.0, 1.0])) is False

    def test_identical_solutions_no_dominance(self) -> None:
        """Identical solutions do not dominate each other."""
        a = np.array([1.0, 2.0])
        assert dominates(a, a.copy()) is False

    def test_epsilon_difference(self) -> None:
        """Very small differences still count as dominance."""
        assert dominates(np.array([1.0, 1.0]), np.array([1.0 + 1e-10, 1.0])) is True

    def test_negative_values(self) -> None:
        """Dominance works with negative values."""
        assert dominates(np.array([-2.0, -2.0]), np.array([-1.0, -1.0])) is True


# =============================================================================
# TestPartitionFront
# =============================================================================


class TestPartitionFront:
    """Tests for single-front extraction over an index range."""

    def test_extracts_first_front(self, simple_2d_objectives: np.ndarray) -> None:
        """Only the globally best point is in the first front."""
        order = np.arange(5)
        end = partition_front(simple_2d_objectives, order)
        assert set(order[:end].tolist()) == {0}

    def test_order_remains_a_permutation(self, simple_2d_objectives: np.ndarray) -> None:
        """Partitioning only swaps entries."""
        order = np.arange(5)
        partition_front(simple_2d_objectives, order)
        assert sorted(order.tolist()) == [0, 1, 2, 3, 4]

    def test_respects_start_and_stop(self, simple_2d_objectives: np.ndarray) -> None:
        """Entries outside [start, stop) are untouched."""
        order = np.array([0, 2, 1, 3, 4])
        end = partition_front(simple_2d_objectives, order, start=1, stop=4)
        assert order[0] == 0
        assert order[4] == 4
        assert set(order[1:end].tolist()) == {1, 3}
        assert set(order[end:4].tolist()) == {2}

    def test_whole_pool_when_non_dominated(self, pareto_front_2d: np.ndarray) -> None:
        """A mutually non-dominated pool is a single front."""
        order = np.arange(4)
        assert partition_front(pareto_front_2d, order) == 4

    def test_empty_pool(self, simple_2d_objectives: np.ndarray) -> None:
        """An empty range yields an empty front."""
        order = np.arange(5)
        assert partition_front(simple_2d_objectives, order, start=2, stop=2) == 2

    def test_eviction_of_several_front_members(self) -> None:
        """A late point that dominates several accepted points evicts all of them."""
        objs = np.array(
            [
                [2.0, 5.0],
                [3.0, 4.0],
                [4.0, 3.0],
                [5.0, 2.0],
                [1.0, 1.0],  # dominates everything before it
                [0.0, 9.0],
            ]
        )
        order = np.arange(6)
        end = partition_front(objs, order)
        assert set(order[:end].tolist()) == {4, 5}

    def test_front_members_not_dominated_by_pool(self, random_objectives: np.ndarray) -> None:
        """No pool member dominates a front member; every remainder member is dominated."""
        order = np.arange(len(random_objectives))
        end = partition_front(random_objectives, order)
        front, rest = order[:end], order[end:]

        for i in front:
            assert not any(dominates(random_objectives[j], random_objectives[i]) for j in order)
        for i in rest:
            assert any(dominates(random_objectives[j], random_objectives[i]) for j in front)


# =============================================================================
# TestParetoFronts / TestNonDominatedSort
# =============================================================================


class TestParetoFronts:
    """Tests for the full front decomposition."""

    def test_known_structure(self, simple_2d_objectives: np.ndarray) -> None:
        """Fronts match the hand-computed hierarchy."""
        fronts = pareto_fronts(simple_2d_objectives)
        assert _front_sets(fronts) == [{0}, {1, 3, 4}, {2}]

    def test_partition_of_pool(self, random_objectives: np.ndarray) -> None:
        """Fronts are disjoint and their union is the whole pool."""
        fronts = pareto_fronts(random_objectives)
        members = np.concatenate(fronts)
        assert len(members) == len(random_objectives)
        assert set(members.tolist()) == set(range(len(random_objectives)))

    def test_fronts_are_mutually_non_dominated(self, random_objectives: np.ndarray) -> None:
        """No member of front k is dominated by another member of front k."""
        for front in pareto_fronts(random_objectives):
            for i in front:
                for j in front:
                    assert not dominates(random_objectives[j], random_objectives[i])

    def test_later_fronts_dominated_by_earlier(self, random_objectives: np.ndarray) -> None:
        """Every member of front k > 0 is dominated by some member of an earlier front."""
        fronts = pareto_fronts(random_objectives)
        for k in range(1, len(fronts)):
            earlier = np.concatenate(fronts[:k])
            for i in fronts[k]:
                assert any(dominates(random_objectives[j], random_objectives[i]) for j in earlier)

    def test_identical_objectives_single_front(self) -> None:
        """All-identical vectors form one front."""
        objs = np.ones((8, 2))
        fronts = pareto_fronts(objs)
        assert len(fronts) == 1
        assert len(fronts[0]) == 8

    def test_empty_pool(self) -> None:
        """An empty pool has no fronts."""
        assert pareto_fronts(np.empty((0, 2))) == []


class TestNonDominatedSort:
    """Tests for per-individual rank assignment."""

    def test_known_structure(self, simple_2d_objectives: np.ndarray) -> None:
        """Ranks match the hand-computed hierarchy."""
        np.testing.assert_array_equal(non_dominated_sort(simple_2d_objectives), [0, 1, 2, 1, 1])

    def test_chain(self) -> None:
        """A dominance chain yields consecutive ranks."""
        objs = np.array([[3.0, 3.0], [1.0, 1.0], [2.0, 2.0]])
        np.testing.assert_array_equal(non_dominated_sort(objs), [2, 0, 1])

    def test_every_rank_assigned(self, random_objectives: np.ndarray) -> None:
        """No individual is left without a rank."""
        assert np.all(non_dominated_sort(random_objectives) >= 0)

    def test_empty(self) -> None:
        """Empty input returns an empty rank array."""
        ranks = non_dominated_sort(np.empty((0, 3)))
        assert ranks.shape == (0,)


# =============================================================================
# TestCrowdingDistance
# =============================================================================


class TestCrowdingDistance:
    """Tests for crowding distance within one front."""

    def test_boundary_points_infinite(self, pareto_front_2d: np.ndarray) -> None:
        """Extreme members on each objective get infinite distance."""
        cd = crowding_distance(pareto_front_2d)
        assert np.isinf(cd[0])
        assert np.isinf(cd[3])

    def test_interior_values(self, pareto_front_2d: np.ndarray) -> None:
        """Interior members sum normalized neighbour gaps over all objectives."""
        cd = crowding_distance(pareto_front_2d)
        np.testing.assert_allclose(cd[1:3], [4.0 / 3.0, 4.0 / 3.0])

    def test_uneven_spacing(self) -> None:
        """More isolated interior members get larger distances."""
        objs = np.array([[0.0, 10.0], [1.0, 9.0], [2.0, 8.0], [10.0, 0.0]])
        cd = crowding_distance(objs)
        assert cd[2] > cd[1]

    def test_extremes_on_every_objective(self) -> None:
        """Members extreme on any one objective get infinite distance."""
        objs = np.array(
            [
                [0.0, 5.0, 5.0],
                [5.0, 0.0, 5.0],
                [5.0, 5.0, 0.0],
                [3.0, 3.0, 3.0],
                [1.0, 4.0, 4.0],
            ]
        )
        cd = crowding_distance(objs)
        for m in range(3):
            assert np.isinf(cd[np.argmin(objs[:, m])])
            assert np.isinf(cd[np.argmax(objs[:, m])])

    def test_zero_range_dimension_contributes_nothing(self) -> None:
        """A tied objective adds exactly zero; no NaN leaks."""
        objs = np.array([[1.0, 7.0], [2.0, 7.0], [3.0, 7.0], [4.0, 7.0]])
        cd = crowding_distance(objs)
        assert not np.any(np.isnan(cd))
        # Only objective 0 contributes, boundaries included
        np.testing.assert_allclose(cd, [np.inf, 2.0 / 3.0, 2.0 / 3.0, np.inf])

    def test_tied_dimension_gives_no_boundary_infinities(self) -> None:
        """Members interior on a varying objective stay finite despite a tied one."""
        objs = np.array([[3.0, 7.0], [1.0, 7.0], [2.0, 7.0]])
        cd = crowding_distance(objs)
        assert np.isinf(cd[0])
        assert np.isinf(cd[1])
        assert cd[2] == 1.0

    def test_all_identical(self) -> None:
        """All-identical front: every member has distance exactly zero."""
        cd = crowding_distance(np.ones((6, 3)))
        np.testing.assert_array_equal(cd, np.zeros(6))

    def test_small_fronts(self) -> None:
        """Fronts of size 0, 1 and 2."""
        assert crowding_distance(np.empty((0, 2))).shape == (0,)
        assert np.all(np.isinf(crowding_distance(np.array([[1.0, 2.0]]))))
        assert np.all(np.isinf(crowding_distance(np.array([[1.0, 2.0], [2.0, 1.0]]))))

    def test_does_not_modify_input(self, pareto_front_2d: np.ndarray) -> None:
        """The objective array is left untouched."""
        before = pareto_front_2d.copy()
        crowding_distance(pareto_front_2d)
        np.testing.assert_array_equal(pareto_front_2d, before)
