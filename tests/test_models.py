"""
Tests for the solution container and candidate pools.
"""

import pytest

from qbf_search.models import CandidatePools, IndexState, Solution


def assert_pools_disjoint(pools: CandidatePools, solution: Solution):
    """Candidates, trash and selection partition the domain."""
    candidates = set(pools.candidates())
    trash = set(pools.trash())
    selected = set(solution)

    assert not candidates & trash
    assert not candidates & selected
    assert not trash & selected
    assert candidates | trash | selected == set(range(pools.domain_size))
    assert sorted(pools.selected()) == sorted(solution)


def test_empty_solution():
    """An empty solution has zero cost."""
    solution = Solution.empty()

    assert len(solution) == 0
    assert solution.cost == 0.0
    assert solution.view() == ()


def test_solution_container_operations():
    """Append, remove by value, membership and indexed access."""
    solution = Solution(elements=[4, 1])
    solution.add(7)
    solution.remove(4)

    assert list(solution) == [1, 7]
    assert solution[1] == 7
    assert 7 in solution
    assert 4 not in solution

    snapshot = solution.copy()
    snapshot.add(9)
    assert 9 not in solution


def test_active_list_is_everything_not_selected():
    """The candidate list is built from every index outside the solution."""
    solution = Solution(elements=[3, 1])
    pools = CandidatePools(5, solution)

    assert pools.candidates() == [0, 2, 4]
    assert pools.trash() == []
    assert pools.state(1) is IndexState.SELECTED
    assert_pools_disjoint(pools, solution)


def test_pool_transitions():
    """Indices move between candidate, selected and trash states."""
    solution = Solution(elements=[1])
    pools = CandidatePools(4, solution)

    # insert 2
    assert pools.select(2) is IndexState.CANDIDATE
    solution.add(2)
    assert_pools_disjoint(pools, solution)

    # repair drops 1 into the trash
    solution.remove(1)
    pools.discard(1)
    assert pools.trash() == [1]
    assert 1 not in pools.candidates()
    assert_pools_disjoint(pools, solution)

    # re-insertion from the trash
    assert pools.select(1) is IndexState.TRASH
    solution.add(1)
    assert pools.trash() == []
    assert_pools_disjoint(pools, solution)

    # removal returns to the candidate list
    solution.remove(2)
    pools.release(2)
    assert 2 in pools.candidates()
    assert_pools_disjoint(pools, solution)

    counts = pools.counts()
    assert counts[IndexState.SELECTED] == 1
    assert counts[IndexState.CANDIDATE] == 3
    assert counts[IndexState.TRASH] == 0


def test_update_is_a_no_op():
    """Refreshing the candidate list does not filter anything."""
    pools = CandidatePools(3, [0])
    before = pools.candidates()
    pools.update()

    assert pools.candidates() == before == [1, 2]


def test_invalid_solution_rejected():
    """Out-of-domain and duplicated indices cannot seed the pools."""
    with pytest.raises(ValueError):
        CandidatePools(3, [3])

    with pytest.raises(ValueError):
        CandidatePools(3, [-1])

    with pytest.raises(ValueError):
        CandidatePools(3, [1, 1])


if __name__ == "__main__":
    pytest.main([__file__])
