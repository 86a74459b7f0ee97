import pytest

from integrity_core.fault_tree import binomial, fault_tree_and, fault_tree_or, fault_tree_vote


def test_and_gate() -> None:
    assert fault_tree_and([0.1, 0.1]) == pytest.approx(0.01)
    assert fault_tree_and([0.5, 0.2, 0.1]) == pytest.approx(0.01)
    assert fault_tree_and([]) == 1.0


def test_or_gate() -> None:
    assert fault_tree_or([0.1, 0.1]) == pytest.approx(0.19)
    assert fault_tree_or([0.0, 0.0]) == 0.0
    assert fault_tree_or([1.0, 0.3]) == pytest.approx(1.0)
    assert fault_tree_or([]) == 0.0


@pytest.mark.parametrize("n, k, expected", [(5, 0, 1), (5, 5, 1), (5, 2, 10), (10, 3, 120), (3, 4, 0), (3, -1, 0)])
def test_binomial(n: int, k: int, expected: int) -> None:
    assert binomial(n, k) == pytest.approx(expected)


def test_binomial_large_values_do_not_overflow() -> None:
    assert binomial(200, 100) == pytest.approx(9.054851465610328e58, rel=1e-9)


def test_vote_gate_two_out_of_three() -> None:
    p = 0.1
    expected = 3 * p ** 2 * (1 - p) + p ** 3

    assert fault_tree_vote([p, p, p], 2) == pytest.approx(expected)


def test_vote_gate_limits() -> None:
    ps = [0.2, 0.2, 0.2, 0.2]

    assert fault_tree_vote(ps, 1) == pytest.approx(fault_tree_or(ps))
    assert fault_tree_vote(ps, 4) == pytest.approx(fault_tree_and(ps))
    assert fault_tree_vote(ps, 0) == pytest.approx(1.0)
    assert fault_tree_vote(ps, 5) == 0.0
    assert fault_tree_vote([], 1) == 0.0


def test_vote_gate_uses_first_probability() -> None:
    assert fault_tree_vote([0.1, 0.9, 0.5], 3) == pytest.approx(0.001)


@pytest.mark.parametrize("gate", [fault_tree_and, fault_tree_or])
def test_gates_reject_invalid_probabilities(gate) -> None:
    with pytest.raises(ValueError):
        gate([0.5, 1.5])
    with pytest.raises(ValueError):
        gate([-0.1])


def test_vote_rejects_invalid_probabilities() -> None:
    with pytest.raises(ValueError):
        fault_tree_vote([0.1, 2.0], 1)
