import math

import pytest

from integrity_core.engine import (
    calculate_architecture_pfd,
    calculate_architecture_sil,
    calculate_pfd_1oo1,
    calculate_pfd_1oo2,
    calculate_pfd_1oo2_markov,
    calculate_pfd_2oo3,
    classify_sil_from_pfd,
    classify_sil_from_pfh,
    hardware_fault_tolerance,
)
from integrity_core.models import Assumptions
from integrity_core.standards import SIL_0, SIL_1, SIL_2, SIL_3, SIL_4


def test_pfd_1oo1_worked_example(default_assumptions: Assumptions) -> None:
    assert math.isclose(calculate_pfd_1oo1(2e-6, default_assumptions.TI), 8.76e-3)


def test_pfd_1oo2_matches_beta_model(default_assumptions: Assumptions) -> None:
    asm = default_assumptions
    lambda_t = 2e-6 * asm.TI

    expected = lambda_t ** 2 / 3.0 + asm.beta * lambda_t / 2.0

    assert math.isclose(calculate_pfd_1oo2(2e-6, asm.TI, asm.beta), expected)


def test_pfd_2oo3_matches_beta_model(default_assumptions: Assumptions) -> None:
    asm = default_assumptions
    lambda_t = 1e-6 * asm.TI

    expected = 3.0 * lambda_t ** 2 + asm.beta * lambda_t / 2.0

    assert math.isclose(calculate_pfd_2oo3(1e-6, asm.TI, asm.beta), expected)


def test_pfd_1oo2_without_common_cause(default_assumptions: Assumptions) -> None:
    lambda_t = 2e-6 * default_assumptions.TI

    assert math.isclose(calculate_pfd_1oo2(2e-6, default_assumptions.TI, 0.0), lambda_t ** 2 / 3.0)


def test_markov_steady_state(default_assumptions: Assumptions) -> None:
    mu = default_assumptions.mu
    lambda_d = 1e-3

    expected = lambda_d ** 2 / (lambda_d + mu) ** 2

    assert mu == pytest.approx(0.125)
    assert math.isclose(calculate_pfd_1oo2_markov(lambda_d, mu), expected)
    assert calculate_pfd_1oo2_markov(0.0, mu) == 0.0


def test_markov_rejects_zero_rates() -> None:
    with pytest.raises(ValueError):
        calculate_pfd_1oo2_markov(0.0, 0.0)


@pytest.mark.parametrize(
    "pfd, sil",
    [
        (0.5, SIL_0),
        (0.1, SIL_0),
        (0.05, SIL_1),
        (0.01, SIL_1),
        (8.76e-3, SIL_2),
        (1e-3, SIL_2),
        (5e-4, SIL_3),
        (1e-4, SIL_3),
        (9.9e-5, SIL_4),
        (0.0, SIL_4),
    ],
)
def test_classify_sil_from_pfd(pfd: float, sil) -> None:
    assert classify_sil_from_pfd(pfd) == sil


@pytest.mark.parametrize(
    "pfh, sil",
    [(2e-5, SIL_0), (1e-5, SIL_0), (5e-6, SIL_1), (1e-7, SIL_2), (5e-8, SIL_3), (5e-9, SIL_4), (1e-10, SIL_4)],
)
def test_classify_sil_from_pfh(pfh: float, sil) -> None:
    assert classify_sil_from_pfh(pfh) == sil


def test_architecture_dispatch(default_assumptions: Assumptions) -> None:
    ti = default_assumptions.TI

    single = calculate_architecture_sil("1oo1", 2e-6, ti)
    series = calculate_architecture_sil("2oo2", 2e-6, ti)
    redundant = calculate_architecture_sil("1oo2", 2e-6, ti)
    voted = calculate_architecture_sil("2oo3", 2e-6, ti, beta=0.05)

    assert single.pfd == series.pfd == pytest.approx(8.76e-3)
    assert single.sil == SIL_2
    assert redundant.pfd == pytest.approx(calculate_pfd_1oo2(2e-6, ti, 0.1))
    assert redundant.sil == SIL_3
    assert voted.pfd == pytest.approx(calculate_pfd_2oo3(2e-6, ti, 0.05))


def test_unknown_architecture_is_rejected(default_assumptions: Assumptions) -> None:
    with pytest.raises(ValueError):
        calculate_architecture_pfd("3oo4", 1e-6, default_assumptions.TI)  # type: ignore[arg-type]
    with pytest.raises(ValueError):
        hardware_fault_tolerance("1oo3")  # type: ignore[arg-type]


@pytest.mark.parametrize("architecture, hft", [("1oo1", 0), ("2oo2", 0), ("1oo2", 1), ("2oo3", 2)])
def test_hardware_fault_tolerance(architecture: str, hft: int) -> None:
    assert hardware_fault_tolerance(architecture) == hft  # type: ignore[arg-type]
