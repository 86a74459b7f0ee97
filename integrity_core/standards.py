"""Concrete integrity lattices of the supported safety standards.

Five chains are defined once at import time and never change afterwards:

* IEC 61508 SIL_0..SIL_4, quantitative (PFH for high demand/continuous mode,
  PFD for low demand mode, Tables 3 and 2 of IEC 61508-1:2010).
* ISO 26262 QM, ASIL_A..ASIL_D, qualitative S x E x C matrix. PMHF targets
  (Part 5, Table 6) exist only from ASIL B; B and C share ``< 1e-7/h``.
* DO-178C DAL_E..DAL_A, process based. DO-178C itself has no probability
  targets; the bounds below come from AC 25.1309-1A failure-condition
  classes.
* ECSS-E-ST-40C ECSS_D..ECSS_A and IEC 62304 CLASS_A..CLASS_C, severity
  based and without any probability target.
"""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Mapping, NamedTuple, Optional, Sequence, Tuple, Union

from .lattice import SafetyLattice, create_lattice
from .models import (
    AssessmentMethodology,
    ConsequenceSeverity,
    FailureProbabilityBound,
    IEC61508OperatingMode,
    IntegrityLevel,
    NumericRange,
    StandardIdentifier,
    UniversalIntegrityLevel,
)

BOUND_CONFIDENCE = 0.95


def _chain(names: Sequence[str]) -> Tuple[IntegrityLevel, ...]:
    return tuple(IntegrityLevel(name=name, ordinal=i) for i, name in enumerate(names))


def _normalized(level: IntegrityLevel, levels: Sequence[IntegrityLevel]) -> float:
    max_ordinal = len(levels) - 1
    return level.ordinal / max_ordinal if max_ordinal else 0.0


def _at(table: Sequence[Optional[FailureProbabilityBound]], ordinal: int) -> Optional[FailureProbabilityBound]:
    return table[ordinal] if 0 <= ordinal < len(table) else None


# ---------------------------------------------------------------------------
# IEC 61508
# ---------------------------------------------------------------------------

SIL_LEVELS = _chain(("SIL_0", "SIL_1", "SIL_2", "SIL_3", "SIL_4"))
SIL_0, SIL_1, SIL_2, SIL_3, SIL_4 = SIL_LEVELS

# (upper, lower) per ordinal
IEC61508_TABLE3_PFH: Tuple[Optional[Tuple[float, float]], ...] = (
    None,
    (1e-5, 1e-6),
    (1e-6, 1e-7),
    (1e-7, 1e-8),
    (1e-8, 1e-9),
)

IEC61508_TABLE2_PFD: Tuple[Optional[Tuple[float, float]], ...] = (
    None,
    (1e-1, 1e-2),
    (1e-2, 1e-3),
    (1e-3, 1e-4),
    (1e-4, 1e-5),
)


def sil_risk_reduction_factor(ordinal: int) -> Optional[NumericRange]:
    """RRF band ``[10^n, 10^(n+1)]``; ``None`` for SIL_0."""
    if ordinal <= 0:
        return None
    return NumericRange(min=10.0 ** ordinal, max=10.0 ** (ordinal + 1))


def _sil_universal(
    level: IntegrityLevel,
    table: Sequence[Optional[Tuple[float, float]]],
    unit: str,
    source: str,
) -> UniversalIntegrityLevel:
    bounds = table[level.ordinal] if 0 <= level.ordinal < len(table) else None
    probability = None
    if bounds is not None:
        upper, lower = bounds
        probability = FailureProbabilityBound(
            upper=upper,
            lower=lower,
            unit=unit,  # type: ignore[arg-type]
            confidence=BOUND_CONFIDENCE,
            source=source,
        )
    return UniversalIntegrityLevel(
        ordinal=_normalized(level, SIL_LEVELS),
        failure_probability=probability,
        risk_reduction_factor=sil_risk_reduction_factor(level.ordinal),
        consequence_severity=ConsequenceSeverity(min(max(level.ordinal, 0), 4)),
        methodology=AssessmentMethodology.QUANTITATIVE_PROBABILITY,
    )


def sil_high_demand_universal(level: IntegrityLevel) -> UniversalIntegrityLevel:
    """Universal image of a SIL using PFH bounds (high demand / continuous)."""
    return _sil_universal(level, IEC61508_TABLE3_PFH, "per_hour", "IEC 61508-1:2010 Table 3")


def sil_low_demand_universal(level: IntegrityLevel) -> UniversalIntegrityLevel:
    """Universal image of a SIL using PFDavg bounds (low demand)."""
    return _sil_universal(level, IEC61508_TABLE2_PFD, "per_demand", "IEC 61508-1:2010 Table 2")


def sil_universal(
    level: IntegrityLevel,
    mode: Union[IEC61508OperatingMode, str] = IEC61508OperatingMode.HIGH_DEMAND,
) -> UniversalIntegrityLevel:
    if IEC61508OperatingMode(mode) is IEC61508OperatingMode.LOW_DEMAND:
        return sil_low_demand_universal(level)
    return sil_high_demand_universal(level)


SIL_LATTICE = create_lattice(
    StandardIdentifier.IEC_61508, "IEC 61508 SIL", SIL_LEVELS, sil_high_demand_universal
)


# ---------------------------------------------------------------------------
# ISO 26262
# ---------------------------------------------------------------------------

ASIL_LEVELS = _chain(("QM", "ASIL_A", "ASIL_B", "ASIL_C", "ASIL_D"))
ASIL_QM, ASIL_A, ASIL_B, ASIL_C, ASIL_D = ASIL_LEVELS

_PMHF_SOURCE = "ISO 26262-5:2018 Table 6"

ISO26262_PMHF_TARGETS: Tuple[Optional[FailureProbabilityBound], ...] = (
    None,
    None,
    FailureProbabilityBound(1e-7, 0.0, "per_hour", BOUND_CONFIDENCE, _PMHF_SOURCE),
    FailureProbabilityBound(1e-7, 0.0, "per_hour", BOUND_CONFIDENCE, _PMHF_SOURCE),
    FailureProbabilityBound(1e-8, 0.0, "per_hour", BOUND_CONFIDENCE, _PMHF_SOURCE),
)


class HardwareTargets(NamedTuple):
    spfm: float  # single-point fault metric, fraction
    lfm: float  # latent fault metric, fraction


ASIL_HARDWARE_TARGETS: Mapping[str, HardwareTargets] = MappingProxyType(
    {
        "ASIL_B": HardwareTargets(spfm=0.90, lfm=0.60),
        "ASIL_C": HardwareTargets(spfm=0.97, lfm=0.80),
        "ASIL_D": HardwareTargets(spfm=0.99, lfm=0.90),
    }
)


def asil_universal(level: IntegrityLevel) -> UniversalIntegrityLevel:
    return UniversalIntegrityLevel(
        ordinal=_normalized(level, ASIL_LEVELS),
        failure_probability=_at(ISO26262_PMHF_TARGETS, level.ordinal),
        risk_reduction_factor=None,
        consequence_severity=ConsequenceSeverity(min(max(level.ordinal, 0), 4)),
        methodology=AssessmentMethodology.QUALITATIVE_MATRIX,
    )


ASIL_LATTICE = create_lattice(
    StandardIdentifier.ISO_26262, "ISO 26262 ASIL", ASIL_LEVELS, asil_universal
)


# ---------------------------------------------------------------------------
# DO-178C (+ AC 25.1309-1A)
# ---------------------------------------------------------------------------

DAL_LEVELS = _chain(("DAL_E", "DAL_D", "DAL_C", "DAL_B", "DAL_A"))
DAL_E, DAL_D, DAL_C, DAL_B, DAL_A = DAL_LEVELS

AC25_1309_PROBABILITY_TARGETS: Tuple[Optional[FailureProbabilityBound], ...] = (
    None,
    FailureProbabilityBound(
        float("inf"), 1e-5, "per_flight_hour", BOUND_CONFIDENCE, "AC 25.1309-1A (Probable)"
    ),
    FailureProbabilityBound(
        1e-5, 1e-7, "per_flight_hour", BOUND_CONFIDENCE, "AC 25.1309-1A (Remote)"
    ),
    FailureProbabilityBound(
        1e-7, 1e-9, "per_flight_hour", BOUND_CONFIDENCE, "AC 25.1309-1A (Extremely Remote)"
    ),
    FailureProbabilityBound(
        1e-9, 0.0, "per_flight_hour", BOUND_CONFIDENCE, "AC 25.1309-1A (Extremely Improbable)"
    ),
)

# DO-178C Annex A objective counts
DAL_OBJECTIVES: Mapping[str, int] = MappingProxyType(
    {"DAL_E": 0, "DAL_D": 26, "DAL_C": 62, "DAL_B": 69, "DAL_A": 71}
)


def dal_universal(level: IntegrityLevel) -> UniversalIntegrityLevel:
    return UniversalIntegrityLevel(
        ordinal=_normalized(level, DAL_LEVELS),
        failure_probability=_at(AC25_1309_PROBABILITY_TARGETS, level.ordinal),
        risk_reduction_factor=None,
        consequence_severity=ConsequenceSeverity(min(max(level.ordinal, 0), 4)),
        methodology=AssessmentMethodology.PROCESS_BASED,
    )


DAL_LATTICE = create_lattice(
    StandardIdentifier.DO_178C, "DO-178C DAL", DAL_LEVELS, dal_universal
)


# ---------------------------------------------------------------------------
# ECSS-E-ST-40C and IEC 62304
# ---------------------------------------------------------------------------

# Category A is the most critical; the chain runs D -> A.
ECSS_LEVELS = _chain(("ECSS_D", "ECSS_C", "ECSS_B", "ECSS_A"))
ECSS_D, ECSS_C, ECSS_B, ECSS_A = ECSS_LEVELS


def ecss_universal(level: IntegrityLevel) -> UniversalIntegrityLevel:
    return UniversalIntegrityLevel(
        ordinal=_normalized(level, ECSS_LEVELS),
        failure_probability=None,
        risk_reduction_factor=None,
        consequence_severity=ConsequenceSeverity(min(max(level.ordinal + 1, 0), 4)),
        methodology=AssessmentMethodology.SEVERITY_BASED,
    )


ECSS_LATTICE = create_lattice(
    StandardIdentifier.ECSS, "ECSS software criticality", ECSS_LEVELS, ecss_universal
)

# Class C is the most critical; the chain runs A -> C.
MEDICAL_LEVELS = _chain(("CLASS_A", "CLASS_B", "CLASS_C"))
CLASS_A, CLASS_B, CLASS_C = MEDICAL_LEVELS

_MEDICAL_SEVERITY = (
    ConsequenceSeverity.NEGLIGIBLE,
    ConsequenceSeverity.SERIOUS,
    ConsequenceSeverity.CRITICAL,
)


def medical_universal(level: IntegrityLevel) -> UniversalIntegrityLevel:
    index = min(max(level.ordinal, 0), len(_MEDICAL_SEVERITY) - 1)
    return UniversalIntegrityLevel(
        ordinal=_normalized(level, MEDICAL_LEVELS),
        failure_probability=None,
        risk_reduction_factor=None,
        consequence_severity=_MEDICAL_SEVERITY[index],
        methodology=AssessmentMethodology.SEVERITY_BASED,
    )


MEDICAL_LATTICE = create_lattice(
    StandardIdentifier.IEC_62304, "IEC 62304 software safety class", MEDICAL_LEVELS, medical_universal
)


# ---------------------------------------------------------------------------
# Registry and application domains
# ---------------------------------------------------------------------------

LATTICES: Mapping[StandardIdentifier, SafetyLattice] = MappingProxyType(
    {
        StandardIdentifier.IEC_61508: SIL_LATTICE,
        StandardIdentifier.ISO_26262: ASIL_LATTICE,
        StandardIdentifier.DO_178C: DAL_LATTICE,
        StandardIdentifier.ECSS: ECSS_LATTICE,
        StandardIdentifier.IEC_62304: MEDICAL_LATTICE,
    }
)

STANDARD_METHODOLOGY: Mapping[StandardIdentifier, AssessmentMethodology] = MappingProxyType(
    {
        StandardIdentifier.IEC_61508: AssessmentMethodology.QUANTITATIVE_PROBABILITY,
        StandardIdentifier.ISO_26262: AssessmentMethodology.QUALITATIVE_MATRIX,
        StandardIdentifier.DO_178C: AssessmentMethodology.PROCESS_BASED,
        StandardIdentifier.ECSS: AssessmentMethodology.SEVERITY_BASED,
        StandardIdentifier.IEC_62304: AssessmentMethodology.SEVERITY_BASED,
    }
)


def coerce_standard(standard: Union[StandardIdentifier, str]) -> Optional[StandardIdentifier]:
    """Return the identifier for ``standard`` or ``None`` if it is unknown."""
    if isinstance(standard, StandardIdentifier):
        return standard
    try:
        return StandardIdentifier(standard)
    except ValueError:
        return None


def get_lattice_for_standard(standard: Union[StandardIdentifier, str]) -> Optional[SafetyLattice]:
    identifier = coerce_standard(standard)
    if identifier is None:
        return None
    return LATTICES[identifier]


class SafetyDomain(str, Enum):
    AUTOMOTIVE = "automotive"
    AVIATION = "aviation"
    RAILWAY = "railway"
    NUCLEAR = "nuclear"
    SPACE = "space"
    MEDICAL_DEVICE = "medical_device"
    INDUSTRIAL_CONTROL = "industrial_control"
    MARINE = "marine"
    DEFENSE = "defense"
    FINTECH = "fintech"
    HEALTHCARE_IT = "healthcare_it"
    CRITICAL_INFRASTRUCTURE = "critical_infrastructure"


SAFETY_DOMAIN_STANDARDS: Mapping[SafetyDomain, Tuple[StandardIdentifier, ...]] = MappingProxyType(
    {
        SafetyDomain.AUTOMOTIVE: (StandardIdentifier.ISO_26262,),
        SafetyDomain.AVIATION: (StandardIdentifier.DO_178C,),
        SafetyDomain.RAILWAY: (StandardIdentifier.IEC_61508,),  # EN 50128 derives from it
        SafetyDomain.NUCLEAR: (StandardIdentifier.IEC_61508,),
        SafetyDomain.SPACE: (StandardIdentifier.ECSS,),
        SafetyDomain.MEDICAL_DEVICE: (StandardIdentifier.IEC_62304,),
        SafetyDomain.INDUSTRIAL_CONTROL: (StandardIdentifier.IEC_61508,),
        SafetyDomain.MARINE: (StandardIdentifier.IEC_61508,),
        SafetyDomain.DEFENSE: (StandardIdentifier.DO_178C,),
        SafetyDomain.FINTECH: (),
        SafetyDomain.HEALTHCARE_IT: (StandardIdentifier.IEC_62304,),
        SafetyDomain.CRITICAL_INFRASTRUCTURE: (StandardIdentifier.IEC_61508,),
    }
)

# Typical minimum integrity of a domain on the five-step 0..4 scale; it is
# projected onto the primary standard by normalized position.
BASELINE_SCALE = 4

SAFETY_DOMAIN_BASELINES: Mapping[SafetyDomain, int] = MappingProxyType(
    {
        SafetyDomain.NUCLEAR: 4,
        SafetyDomain.AVIATION: 4,
        SafetyDomain.SPACE: 4,
        SafetyDomain.MEDICAL_DEVICE: 3,
        SafetyDomain.RAILWAY: 3,
        SafetyDomain.AUTOMOTIVE: 3,
        SafetyDomain.DEFENSE: 3,
        SafetyDomain.INDUSTRIAL_CONTROL: 2,
        SafetyDomain.MARINE: 2,
        SafetyDomain.CRITICAL_INFRASTRUCTURE: 2,
        SafetyDomain.HEALTHCARE_IT: 2,
        SafetyDomain.FINTECH: 2,
    }
)


class RecommendedLevel(NamedTuple):
    standard: StandardIdentifier
    level: IntegrityLevel


def get_primary_standard(domain: SafetyDomain) -> Optional[StandardIdentifier]:
    standards = SAFETY_DOMAIN_STANDARDS[domain]
    return standards[0] if standards else None


def get_recommended_level(domain: SafetyDomain) -> Optional[RecommendedLevel]:
    """Baseline level of ``domain`` in its primary standard, if it has one.

    The baseline is rounded up to the first level whose normalized ordinal
    reaches ``baseline / BASELINE_SCALE``; on the five-level chains this is
    the level with the same ordinal.
    """
    standard = get_primary_standard(domain)
    if standard is None:
        return None
    lattice = LATTICES[standard]
    target = SAFETY_DOMAIN_BASELINES[domain] / BASELINE_SCALE
    for level in lattice.levels:
        if lattice.normalize(level) >= target:
            return RecommendedLevel(standard=standard, level=level)
    return RecommendedLevel(standard=standard, level=lattice.top)
