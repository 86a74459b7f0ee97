"""Integrity-level lattices, cross-standard translation and SIL verification."""

from .models import (
    DEFAULT_ASSUMPTIONS,
    DEFAULT_COMPOSITION_CONTEXT,
    Architecture,
    AssessmentMethodology,
    Assumptions,
    CompositionContext,
    ConsequenceSeverity,
    DemandMode,
    FailureProbabilityBound,
    HardwareMetrics,
    IEC61508OperatingMode,
    IntegrityLevel,
    MappingConfidence,
    NumericRange,
    Ordering,
    RiskAssessment,
    SILVerificationResult,
    StandardIdentifier,
    UniversalIntegrityLevel,
)
from .lattice import (
    ClassificationFunctor,
    GaloisConnection,
    ImpactDimension,
    ImpactSpace,
    LatticeVerificationResult,
    NearestHomomorphism,
    SafetyLattice,
    aggregate_impact,
    check_galois_property,
    compare_across_lattices,
    create_classification_functor,
    create_lattice,
    describe_lattice,
    find_nearest_equivalent,
    validate_lattice,
    verify_lattice_axioms,
)
from .standards import (
    ASIL_LATTICE,
    DAL_LATTICE,
    ECSS_LATTICE,
    LATTICES,
    MEDICAL_LATTICE,
    SIL_LATTICE,
    SafetyDomain,
    get_lattice_for_standard,
    get_primary_standard,
    get_recommended_level,
    sil_low_demand_universal,
    sil_universal,
)
from .translation import (
    CROSS_STANDARD_MAPPING_DISCLAIMER,
    PROBABILITY_BANDS,
    ProbabilityBand,
    TranslationResult,
    TranslationWarning,
    get_mapping_confidence,
    get_probability_band,
    get_universal_ordinal,
    project_to_standard,
    translate_integrity,
    translate_integrity_detailed,
)
from .composition import (
    CompositionResult,
    check_asil_decomposition,
    check_refinement_valid,
    compose_integrity_levels,
    compose_levels,
    compose_with_context,
    decompose_requirement,
    find_minimum_level,
    is_valid_asil_decomposition,
)
from .conversions import ConversionError, convert_pfd_to_pfh, convert_pfh_to_pfd, dangerous_failure_rate
from .engine import (
    ArchitectureResult,
    calculate_architecture_sil,
    calculate_pfd_1oo1,
    calculate_pfd_1oo2,
    calculate_pfd_1oo2_markov,
    calculate_pfd_2oo3,
    classify_sil_from_pfd,
    classify_sil_from_pfh,
    hardware_fault_tolerance,
)
from .fault_tree import binomial, fault_tree_and, fault_tree_or, fault_tree_vote
from .metrics import calculate_diagnostic_coverage, calculate_sff, get_architectural_constraint_sil
from .verification import (
    RequiredSIL,
    VerificationError,
    compute_required_integrity,
    compute_unreduced_risk,
    derive_required_sil,
    verify_sil_compliance,
)
from .config import ConfigError, IntegrityConfig, config_from_mapping, load_config

__all__ = [
    "Architecture",
    "AssessmentMethodology",
    "Assumptions",
    "CompositionContext",
    "ConsequenceSeverity",
    "DEFAULT_ASSUMPTIONS",
    "DEFAULT_COMPOSITION_CONTEXT",
    "DemandMode",
    "FailureProbabilityBound",
    "HardwareMetrics",
    "IEC61508OperatingMode",
    "IntegrityLevel",
    "MappingConfidence",
    "NumericRange",
    "Ordering",
    "RiskAssessment",
    "SILVerificationResult",
    "StandardIdentifier",
    "UniversalIntegrityLevel",
    "ClassificationFunctor",
    "GaloisConnection",
    "ImpactDimension",
    "ImpactSpace",
    "LatticeVerificationResult",
    "NearestHomomorphism",
    "SafetyLattice",
    "aggregate_impact",
    "check_galois_property",
    "compare_across_lattices",
    "create_classification_functor",
    "create_lattice",
    "describe_lattice",
    "find_nearest_equivalent",
    "validate_lattice",
    "verify_lattice_axioms",
    "ASIL_LATTICE",
    "DAL_LATTICE",
    "ECSS_LATTICE",
    "LATTICES",
    "MEDICAL_LATTICE",
    "SIL_LATTICE",
    "SafetyDomain",
    "get_lattice_for_standard",
    "get_primary_standard",
    "get_recommended_level",
    "sil_low_demand_universal",
    "sil_universal",
    "CROSS_STANDARD_MAPPING_DISCLAIMER",
    "PROBABILITY_BANDS",
    "ProbabilityBand",
    "TranslationResult",
    "TranslationWarning",
    "get_mapping_confidence",
    "get_probability_band",
    "get_universal_ordinal",
    "project_to_standard",
    "translate_integrity",
    "translate_integrity_detailed",
    "CompositionResult",
    "check_asil_decomposition",
    "check_refinement_valid",
    "compose_integrity_levels",
    "compose_levels",
    "compose_with_context",
    "decompose_requirement",
    "find_minimum_level",
    "is_valid_asil_decomposition",
    "ConversionError",
    "convert_pfd_to_pfh",
    "convert_pfh_to_pfd",
    "dangerous_failure_rate",
    "ArchitectureResult",
    "calculate_architecture_sil",
    "calculate_pfd_1oo1",
    "calculate_pfd_1oo2",
    "calculate_pfd_1oo2_markov",
    "calculate_pfd_2oo3",
    "classify_sil_from_pfd",
    "classify_sil_from_pfh",
    "hardware_fault_tolerance",
    "binomial",
    "fault_tree_and",
    "fault_tree_or",
    "fault_tree_vote",
    "calculate_diagnostic_coverage",
    "calculate_sff",
    "get_architectural_constraint_sil",
    "RequiredSIL",
    "VerificationError",
    "compute_required_integrity",
    "compute_unreduced_risk",
    "derive_required_sil",
    "verify_sil_compliance",
    "ConfigError",
    "IntegrityConfig",
    "config_from_mapping",
    "load_config",
]
