"""Domain models for integrity-level and reliability computations."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Any, Dict, Literal, Optional, Tuple

Architecture = Literal["1oo1", "1oo2", "2oo2", "2oo3"]
DemandMode = Literal["low_demand", "high_demand"]
ProbabilityUnit = Literal["per_hour", "per_demand", "per_flight_hour", "per_mission"]


class Ordering(IntEnum):
    """Result of comparing two levels of the same lattice."""

    LESS = -1
    EQUAL = 0
    GREATER = 1


class StandardIdentifier(str, Enum):
    IEC_61508 = "IEC_61508"  # industrial
    ISO_26262 = "ISO_26262"  # automotive
    DO_178C = "DO_178C"  # aviation, probabilities from AC 25.1309
    ECSS = "ECSS"  # space
    IEC_62304 = "IEC_62304"  # medical


class AssessmentMethodology(str, Enum):
    QUANTITATIVE_PROBABILITY = "quantitative_probability"
    QUALITATIVE_MATRIX = "qualitative_matrix"
    PROCESS_BASED = "process_based"
    SEVERITY_BASED = "severity_based"


class ConsequenceSeverity(IntEnum):
    """Normalized consequence scale. Not equivalent across domains."""

    NEGLIGIBLE = 0
    MARGINAL = 1
    SERIOUS = 2
    CRITICAL = 3
    CATASTROPHIC = 4


class IEC61508OperatingMode(str, Enum):
    LOW_DEMAND = "low_demand"  # < 1 demand/year, PFDavg
    HIGH_DEMAND = "high_demand"  # PFH
    CONTINUOUS = "continuous"  # PFH


class MappingConfidence(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    ORDINAL_ONLY = "ordinal_only"


@dataclass(frozen=True)
class Assumptions:
    """Global calculation assumptions expressed in hours and fractions."""

    TI: float  # Proof-test interval in hours
    MTTR: float  # Mean time to repair in hours
    beta: float  # Common-cause share of dangerous failures

    @property
    def mu(self) -> float:
        """Repair rate 1/MTTR in 1/h."""
        return 1.0 / self.MTTR


DEFAULT_ASSUMPTIONS = Assumptions(TI=8760.0, MTTR=8.0, beta=0.1)


@dataclass(frozen=True)
class IntegrityLevel:
    """A named level; ``ordinal`` is the only comparison key."""

    name: str
    ordinal: int

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class NumericRange:
    min: float
    max: float


@dataclass(frozen=True)
class FailureProbabilityBound:
    """Quantitative failure target of a level (upper = worst acceptable)."""

    upper: float
    lower: float
    unit: ProbabilityUnit
    confidence: float
    source: Optional[str] = None


@dataclass(frozen=True)
class UniversalIntegrityLevel:
    """Lossy image of a standard-specific level in the universal ordinal space.

    ``failure_probability`` and ``risk_reduction_factor`` are ``None`` when the
    source standard defines no such quantity; callers must check before doing
    arithmetic with them.
    """

    ordinal: float
    failure_probability: Optional[FailureProbabilityBound]
    risk_reduction_factor: Optional[NumericRange]
    consequence_severity: ConsequenceSeverity
    methodology: AssessmentMethodology


@dataclass(frozen=True)
class CompositionContext:
    """Redundancy description consumed by ``compose_with_context``."""

    redundant: bool = False
    independent: bool = False
    common_cause_freedom: float = 0.0  # in [0, 1]
    diverse_implementation: bool = False


DEFAULT_COMPOSITION_CONTEXT = CompositionContext()


@dataclass(frozen=True)
class HardwareMetrics:
    """Failure rates in 1/h."""

    safe_fault_rate: float
    detected_dangerous_rate: float
    undetected_dangerous_rate: float


@dataclass(frozen=True)
class RiskAssessment:
    hazard_probability: float
    exposure_probability: float
    unavoidability_probability: float
    severity: ConsequenceSeverity


@dataclass(frozen=True)
class SILVerificationResult:
    """Outcome of ``verify_sil_compliance`` together with its audit trail."""

    required_sil: IntegrityLevel
    risk_reduction_factor: float
    exact_level: float
    selected_architecture: str
    hardware_fault_tolerance: int
    achieved_pfd: float
    achieved_sil: IntegrityLevel
    architectural_constraint: IntegrityLevel
    verified: bool
    details: Tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        """Flat export, e.g. for a pandas row."""
        return {
            "required_sil": self.required_sil.name,
            "rrf": self.risk_reduction_factor,
            "exact_level": self.exact_level,
            "architecture": self.selected_architecture,
            "hft": self.hardware_fault_tolerance,
            "pfd": self.achieved_pfd,
            "achieved_sil": self.achieved_sil.name,
            "constraint_sil": self.architectural_constraint.name,
            "verified": self.verified,
            "details": "\n".join(self.details),
        }
