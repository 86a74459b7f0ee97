"""Fault-tree gates over independent basic-event probabilities."""

from __future__ import annotations

from typing import Iterable, List


def _checked(probabilities: Iterable[float]) -> List[float]:
    values = [float(p) for p in probabilities]
    for p in values:
        if not 0.0 <= p <= 1.0:
            raise ValueError(f"Probability out of range [0, 1]: {p}")
    return values


def fault_tree_and(probabilities: Iterable[float]) -> float:
    """All inputs fail. Empty input gives 1.0."""
    result = 1.0
    for p in _checked(probabilities):
        result *= p
    return result


def fault_tree_or(probabilities: Iterable[float]) -> float:
    """At least one input fails: ``1 - Π(1 - p)``. Empty input gives 0.0."""
    # accumulated as a + p - a*p, which is exact for e.g. [0.1, 0.1] -> 0.19
    result = 0.0
    for p in _checked(probabilities):
        result = result + p - result * p
    return result


def binomial(n: int, k: int) -> float:
    """``C(n, k)`` by the multiplicative recurrence."""
    if k < 0 or k > n:
        return 0.0
    if k == 0 or k == n:
        return 1.0
    result = 1.0
    for i in range(k):
        result = result * (n - i) / (i + 1)
    return result


def fault_tree_vote(probabilities: Iterable[float], min_failures: int) -> float:
    """k-out-of-n gate for identical components.

    All inputs are taken to share the probability of the first one.
    """
    values = _checked(probabilities)
    n = len(values)
    if n == 0:
        return 0.0
    p = values[0]
    total = 0.0
    for i in range(max(min_failures, 0), n + 1):
        total += binomial(n, i) * p ** i * (1.0 - p) ** (n - i)
    return total
