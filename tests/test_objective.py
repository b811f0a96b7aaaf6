"""
Tests for the QBF objective functions.
"""

import pytest

from qbf_search.objective import QBF, InverseQBF, generate_instance


def create_test_matrix():
    """Upper-triangular 3x3 test matrix."""
    return [
        [1.0, 2.0, 3.0],
        [0.0, 4.0, 5.0],
        [0.0, 0.0, 6.0],
    ]


def test_evaluate_uses_upper_triangle_only():
    """Entries below the diagonal are ignored."""
    qbf = QBF([[1.0, 2.0], [3.0, 4.0]])

    assert qbf.evaluate(()) == 0.0
    assert qbf.evaluate((0,)) == 1.0
    assert qbf.evaluate((0, 1)) == 7.0  # 1 + 2 + 4, the 3 is dropped


def test_insertion_and_removal_costs_match_full_evaluation():
    """Incremental costs agree with the difference of full evaluations."""
    qbf = QBF(create_test_matrix())
    view = (0, 1)

    assert qbf.insertion_cost(2, view) == qbf.evaluate((0, 1, 2)) - qbf.evaluate(view)
    assert qbf.removal_cost(0, view) == qbf.evaluate((1,)) - qbf.evaluate(view)

    # Already-selected / not-selected short-circuits
    assert qbf.insertion_cost(1, view) == 0.0
    assert qbf.removal_cost(2, view) == 0.0


def test_exchange_cost():
    """Exchange swaps one selected index for an unselected one."""
    qbf = QBF(create_test_matrix())
    view = (0, 1)

    # {0, 1} -> {0, 2}: 7 -> 10
    assert qbf.exchange_cost(2, 1, view) == 3.0
    assert qbf.exchange_cost(2, 1, view) == qbf.evaluate((0, 2)) - qbf.evaluate(view)

    # Degenerate exchanges fall back to single moves
    assert qbf.exchange_cost(1, 1, view) == 0.0
    assert qbf.exchange_cost(0, 1, view) == qbf.removal_cost(1, view)
    assert qbf.exchange_cost(2, 2, (0,)) == 0.0
    assert qbf.exchange_cost(2, 1, (0,)) == qbf.insertion_cost(2, (0,))


def test_inverse_qbf_negates_everything():
    """The inverse function is the negated QBF."""
    matrix = create_test_matrix()
    qbf = QBF(matrix)
    inverse = InverseQBF(matrix)
    view = (0, 1)

    assert inverse.evaluate(view) == -qbf.evaluate(view)
    assert inverse.insertion_cost(2, view) == -qbf.insertion_cost(2, view)
    assert inverse.removal_cost(1, view) == -qbf.removal_cost(1, view)
    assert inverse.exchange_cost(2, 1, view) == -qbf.exchange_cost(2, 1, view)


def test_single_variable_inverse_insertion():
    """Switching on the only variable of a positive QBF is an improvement for the inverse."""
    inverse = InverseQBF([[5.0]])

    assert inverse.domain_size == 1
    assert inverse.insertion_cost(0, ()) == -5.0


def test_objective_does_not_mutate_view():
    """Cost queries leave the snapshot untouched."""
    qbf = QBF(create_test_matrix())
    elements = [0, 1]
    view = tuple(elements)

    qbf.insertion_cost(2, view)
    qbf.removal_cost(0, view)
    qbf.exchange_cost(2, 0, view)
    qbf.evaluate(view)

    assert view == (0, 1)
    assert elements == [0, 1]


def test_invalid_matrix_rejected():
    """Empty and non-square matrices are refused."""
    with pytest.raises(ValueError):
        QBF([])

    with pytest.raises(ValueError):
        QBF([[1.0, 2.0], [3.0]])


def test_generate_instance():
    """Generated instances are seeded, upper-triangular and within range."""
    matrix = generate_instance(6, seed=7, low=-3, high=3)

    assert len(matrix) == 6
    assert all(len(row) == 6 for row in matrix)
    assert matrix == generate_instance(6, seed=7, low=-3, high=3)

    for i in range(6):
        for j in range(6):
            if j < i:
                assert matrix[i][j] == 0.0
            else:
                assert -3 <= matrix[i][j] <= 3


def test_generate_instance_invalid_arguments():
    """Non-positive sizes and empty ranges are refused."""
    with pytest.raises(ValueError):
        generate_instance(0)

    with pytest.raises(ValueError):
        generate_instance(3, low=5, high=1)


if __name__ == "__main__":
    pytest.main([__file__])
