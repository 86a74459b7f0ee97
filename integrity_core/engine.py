"""Pure math routines for PFD calculations of redundant architectures.

Simplified IEC 61508-6 formulas with ``λD`` the dangerous failure rate
(1/h), ``TI`` the proof-test interval (h) and ``β`` the common-cause factor.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

from .models import Architecture, IntegrityLevel
from .standards import SIL_0, SIL_1, SIL_2, SIL_3, SIL_4

ARCHITECTURES = ("1oo1", "1oo2", "2oo2", "2oo3")

_HFT: Dict[str, int] = {"1oo1": 0, "2oo2": 0, "1oo2": 1, "2oo3": 2}


@dataclass(frozen=True)
class ArchitectureResult:
    pfd: float
    sil: IntegrityLevel


def calculate_pfd_1oo1(lambda_d: float, ti: float) -> float:
    return lambda_d * ti / 2.0


def calculate_pfd_1oo2(lambda_d: float, ti: float, beta: float) -> float:
    """Independent term ``(λD·TI)²/3`` plus common cause ``β·λD·TI/2``."""
    lambda_t = lambda_d * ti
    return lambda_t * lambda_t / 3.0 + beta * lambda_t / 2.0


def calculate_pfd_2oo3(lambda_d: float, ti: float, beta: float) -> float:
    lambda_t = lambda_d * ti
    return 3.0 * lambda_t * lambda_t + beta * lambda_t / 2.0


def calculate_pfd_1oo2_markov(lambda_d: float, mu: float) -> float:
    """Steady-state probability of both channels failed dangerously.

    ``mu`` is the repair rate 1/MTTR; see ``Assumptions.mu``.
    """
    total = lambda_d + mu
    if total <= 0:
        raise ValueError("λD + μ must be positive.")
    return lambda_d * lambda_d / (total * total)


def classify_sil_from_pfd(pfd: float) -> IntegrityLevel:
    """Map an average PFD to the SIL it satisfies (SIL_0 when >= 0.1)."""
    if pfd >= 1e-1:
        return SIL_0
    if pfd >= 1e-2:
        return SIL_1
    if pfd >= 1e-3:
        return SIL_2
    if pfd >= 1e-4:
        return SIL_3
    return SIL_4


def classify_sil_from_pfh(pfh: float) -> IntegrityLevel:
    """IEC 61508-1 Table 3 lookup; anything below 1e-9/h counts as SIL_4."""
    if pfh >= 1e-5:
        return SIL_0
    if pfh >= 1e-6:
        return SIL_1
    if pfh >= 1e-7:
        return SIL_2
    if pfh >= 1e-8:
        return SIL_3
    return SIL_4


def calculate_architecture_pfd(
    architecture: Architecture, lambda_d: float, ti: float, beta: float = 0.1
) -> float:
    # 2oo2 fails dangerously like a single channel
    if architecture in ("1oo1", "2oo2"):
        return calculate_pfd_1oo1(lambda_d, ti)
    if architecture == "1oo2":
        return calculate_pfd_1oo2(lambda_d, ti, beta)
    if architecture == "2oo3":
        return calculate_pfd_2oo3(lambda_d, ti, beta)
    raise ValueError(f"Unsupported architecture: {architecture}")


def calculate_architecture_sil(
    architecture: Architecture, lambda_d: float, ti: float, beta: float = 0.1
) -> ArchitectureResult:
    pfd = calculate_architecture_pfd(architecture, lambda_d, ti, beta)
    return ArchitectureResult(pfd=pfd, sil=classify_sil_from_pfd(pfd))


def hardware_fault_tolerance(architecture: Architecture) -> int:
    """Number of channel failures the architecture tolerates."""
    try:
        return _HFT[architecture]
    except KeyError:
        raise ValueError(f"Unsupported architecture: {architecture}") from None
