"""SIL verification workflow: required SIL, achieved SIL, constraint, verdict."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import List

from .engine import ARCHITECTURES, calculate_architecture_sil, hardware_fault_tolerance
from .metrics import get_architectural_constraint_sil
from .models import (
    AssessmentMethodology,
    Architecture,
    ConsequenceSeverity,
    FailureProbabilityBound,
    IntegrityLevel,
    NumericRange,
    RiskAssessment,
    SILVerificationResult,
    UniversalIntegrityLevel,
)
from .standards import SIL_LATTICE

logger = logging.getLogger(__name__)

MAX_SIL_ORDINAL = 4


class VerificationError(ValueError):
    """Raised for inputs the verification workflow cannot evaluate."""


@dataclass(frozen=True)
class RequiredSIL:
    sil: IntegrityLevel
    rrf: float
    exact_level: float  # log10(rrf), -inf when rrf == 0


def _clamped_sil_ordinal(exact_level: float) -> int:
    if exact_level <= 0:
        return 0
    if exact_level >= MAX_SIL_ORDINAL:
        return MAX_SIL_ORDINAL
    return math.ceil(exact_level)


def derive_required_sil(unreduced_risk: float, tolerable_risk: float) -> RequiredSIL:
    """Required SIL from the risk reduction ``unreduced / tolerable``.

    ``SIL = clamp(ceil(log10(rrf)), 0, 4)``.
    """
    if not (math.isfinite(unreduced_risk) and math.isfinite(tolerable_risk)):
        raise VerificationError("Risk values must be finite")
    if tolerable_risk <= 0:
        raise VerificationError("Tolerable risk must be positive")
    if unreduced_risk < 0:
        raise VerificationError("Unreduced risk must be non-negative")

    rrf = unreduced_risk / tolerable_risk
    exact_level = math.log10(rrf) if rrf > 0 else -math.inf
    sil = SIL_LATTICE.levels[_clamped_sil_ordinal(exact_level)]
    return RequiredSIL(sil=sil, rrf=rrf, exact_level=exact_level)


def verify_sil_compliance(
    unreduced_risk: float,
    tolerable_risk: float,
    architecture: Architecture,
    lambda_d: float,
    ti: float,
    sff: float,
    beta: float = 0.1,
) -> SILVerificationResult:
    """Run the full verification and record every quantity in ``details``."""

    if architecture not in ARCHITECTURES:
        raise VerificationError(f"Unsupported architecture: {architecture}")
    if lambda_d < 0:
        raise VerificationError("Dangerous failure rate must be non-negative")
    if ti <= 0:
        raise VerificationError("Proof-test interval must be positive")

    details: List[str] = []

    required = derive_required_sil(unreduced_risk, tolerable_risk)
    details.append(
        f"Required SIL: {required.sil} (unreduced risk = {unreduced_risk:.3g}, "
        f"tolerable risk = {tolerable_risk:.3g}, RRF = {required.rrf:.3g}, "
        f"log10(RRF) = {required.exact_level:.3f})"
    )

    achieved = calculate_architecture_sil(architecture, lambda_d, ti, beta)
    details.append(
        f"Architecture {architecture}: λD = {lambda_d:.3g}/h, TI = {ti:g} h, β = {beta:g}, "
        f"PFD = {achieved.pfd:.2e}, achieved {achieved.sil}"
    )

    hft = hardware_fault_tolerance(architecture)
    constraint = get_architectural_constraint_sil(sff, hft)
    details.append(
        f"Architectural constraint (SFF = {sff * 100:.1f}%, HFT = {hft}): max {constraint}"
    )

    pfd_ok = achieved.sil.ordinal >= required.sil.ordinal
    constraint_ok = constraint.ordinal >= required.sil.ordinal
    verified = pfd_ok and constraint_ok

    if verified:
        details.append(
            f"✓ SIL COMPLIANCE VERIFIED: {achieved.sil} and {constraint} both meet {required.sil}"
        )
    else:
        if not pfd_ok:
            details.append(
                f"✗ PFD too high: need {required.sil}, achieved {achieved.sil}"
            )
        if not constraint_ok:
            details.append(
                f"✗ Architecture insufficient: need {required.sil}, constraint allows {constraint}"
            )

    for line in details:
        logger.debug(line)

    return SILVerificationResult(
        required_sil=required.sil,
        risk_reduction_factor=required.rrf,
        exact_level=required.exact_level,
        selected_architecture=architecture,
        hardware_fault_tolerance=hft,
        achieved_pfd=achieved.pfd,
        achieved_sil=achieved.sil,
        architectural_constraint=constraint,
        verified=verified,
        details=tuple(details),
    )


# ---------------------------------------------------------------------------
# Risk calculus
# ---------------------------------------------------------------------------


def severity_to_weight(severity: ConsequenceSeverity) -> float:
    return 10.0 ** int(severity)


def calculate_risk(
    hazard_frequency: float,
    exposure_probability: float,
    harm_probability: float,
    severity_weight: float,
) -> float:
    return hazard_frequency * exposure_probability * harm_probability * severity_weight


def compute_unreduced_risk(assessment: RiskAssessment) -> float:
    return calculate_risk(
        assessment.hazard_probability,
        assessment.exposure_probability,
        assessment.unavoidability_probability,
        severity_to_weight(assessment.severity),
    )


def compute_required_integrity(
    assessment: RiskAssessment, tolerable_risk: float
) -> UniversalIntegrityLevel:
    """Universal integrity a safety function needs for ``assessment``.

    The PFH target is the tolerable risk divided by the severity weight,
    with the lower bound one decade below.
    """
    required = derive_required_sil(compute_unreduced_risk(assessment), tolerable_risk)
    level = required.sil.ordinal
    required_pfh = tolerable_risk / severity_to_weight(assessment.severity)
    return UniversalIntegrityLevel(
        ordinal=level / MAX_SIL_ORDINAL,
        failure_probability=FailureProbabilityBound(
            upper=required_pfh,
            lower=required_pfh / 10.0,
            unit="per_hour",
            confidence=0.95,
        ),
        risk_reduction_factor=NumericRange(min=10.0 ** level, max=10.0 ** (level + 1)),
        consequence_severity=assessment.severity,
        methodology=AssessmentMethodology.QUANTITATIVE_PROBABILITY,
    )
