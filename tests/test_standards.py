import math

import pytest

from integrity_core.models import (
    AssessmentMethodology,
    ConsequenceSeverity,
    IEC61508OperatingMode,
    StandardIdentifier,
)
from integrity_core.standards import (
    ASIL_HARDWARE_TARGETS,
    ASIL_LATTICE,
    DAL_LATTICE,
    DAL_OBJECTIVES,
    ECSS_LATTICE,
    LATTICES,
    MEDICAL_LATTICE,
    SIL_0,
    SIL_3,
    SIL_LATTICE,
    STANDARD_METHODOLOGY,
    SafetyDomain,
    get_lattice_for_standard,
    get_primary_standard,
    get_recommended_level,
    sil_low_demand_universal,
    sil_universal,
)


def test_level_sets_are_contiguous_chains() -> None:
    expected = {
        StandardIdentifier.IEC_61508: ["SIL_0", "SIL_1", "SIL_2", "SIL_3", "SIL_4"],
        StandardIdentifier.ISO_26262: ["QM", "ASIL_A", "ASIL_B", "ASIL_C", "ASIL_D"],
        StandardIdentifier.DO_178C: ["DAL_E", "DAL_D", "DAL_C", "DAL_B", "DAL_A"],
        StandardIdentifier.ECSS: ["ECSS_D", "ECSS_C", "ECSS_B", "ECSS_A"],
        StandardIdentifier.IEC_62304: ["CLASS_A", "CLASS_B", "CLASS_C"],
    }
    for standard, names in expected.items():
        lattice = LATTICES[standard]
        assert [level.name for level in lattice.levels] == names
        assert [level.ordinal for level in lattice.levels] == list(range(len(names)))
        assert lattice.bottom.ordinal == 0
        assert lattice.top.ordinal == len(names) - 1


def test_sil_high_demand_uses_pfh_table() -> None:
    universal = SIL_LATTICE.to_universal(SIL_3)

    assert universal.ordinal == 0.75
    assert universal.failure_probability.upper == 1e-7
    assert universal.failure_probability.lower == 1e-8
    assert universal.failure_probability.unit == "per_hour"
    assert universal.failure_probability.confidence == 0.95
    assert universal.failure_probability.source == "IEC 61508-1:2010 Table 3"
    assert universal.risk_reduction_factor.min == 1000
    assert universal.risk_reduction_factor.max == 10000
    assert universal.methodology is AssessmentMethodology.QUANTITATIVE_PROBABILITY


def test_sil_low_demand_uses_pfd_table() -> None:
    universal = sil_low_demand_universal(SIL_3)

    assert universal.failure_probability.upper == 1e-3
    assert universal.failure_probability.lower == 1e-4
    assert universal.failure_probability.unit == "per_demand"
    assert universal.failure_probability.source == "IEC 61508-1:2010 Table 2"


@pytest.mark.parametrize(
    "mode, unit",
    [
        (IEC61508OperatingMode.LOW_DEMAND, "per_demand"),
        (IEC61508OperatingMode.HIGH_DEMAND, "per_hour"),
        ("continuous", "per_hour"),
    ],
)
def test_sil_universal_selects_table_by_mode(mode, unit: str) -> None:
    assert sil_universal(SIL_3, mode).failure_probability.unit == unit


def test_sil_0_has_no_quantitative_targets() -> None:
    for universal in (SIL_LATTICE.to_universal(SIL_0), sil_low_demand_universal(SIL_0)):
        assert universal.failure_probability is None
        assert universal.risk_reduction_factor is None
        assert universal.ordinal == 0.0


def test_asil_pmhf_targets() -> None:
    bounds = {level.name: ASIL_LATTICE.to_universal(level).failure_probability for level in ASIL_LATTICE}

    assert bounds["QM"] is None
    assert bounds["ASIL_A"] is None
    assert bounds["ASIL_B"].upper == bounds["ASIL_C"].upper == 1e-7
    assert bounds["ASIL_D"].upper == 1e-8
    for level in ASIL_LATTICE:
        assert ASIL_LATTICE.to_universal(level).risk_reduction_factor is None


def test_dal_bounds_come_from_ac_25_1309() -> None:
    dal_e, dal_d, dal_c, dal_b, dal_a = DAL_LATTICE.levels

    assert DAL_LATTICE.to_universal(dal_e).failure_probability is None
    assert math.isinf(DAL_LATTICE.to_universal(dal_d).failure_probability.upper)
    assert DAL_LATTICE.to_universal(dal_c).failure_probability.upper == 1e-5
    assert DAL_LATTICE.to_universal(dal_b).failure_probability.lower == 1e-9
    assert DAL_LATTICE.to_universal(dal_a).failure_probability.upper == 1e-9
    assert DAL_LATTICE.to_universal(dal_a).failure_probability.unit == "per_flight_hour"
    assert DAL_LATTICE.to_universal(dal_a).methodology is AssessmentMethodology.PROCESS_BASED


def test_severity_based_standards_carry_no_probabilities() -> None:
    for lattice in (ECSS_LATTICE, MEDICAL_LATTICE):
        for level in lattice:
            universal = lattice.to_universal(level)
            assert universal.failure_probability is None
            assert universal.risk_reduction_factor is None
            assert universal.methodology is AssessmentMethodology.SEVERITY_BASED


def test_consequence_severity_per_standard() -> None:
    assert [ECSS_LATTICE.to_universal(l).consequence_severity for l in ECSS_LATTICE] == [
        ConsequenceSeverity.MARGINAL,
        ConsequenceSeverity.SERIOUS,
        ConsequenceSeverity.CRITICAL,
        ConsequenceSeverity.CATASTROPHIC,
    ]
    assert [MEDICAL_LATTICE.to_universal(l).consequence_severity for l in MEDICAL_LATTICE] == [
        ConsequenceSeverity.NEGLIGIBLE,
        ConsequenceSeverity.SERIOUS,
        ConsequenceSeverity.CRITICAL,
    ]
    assert SIL_LATTICE.to_universal(SIL_3).consequence_severity is ConsequenceSeverity.CRITICAL


def test_universal_ordinal_is_normalized() -> None:
    assert [ECSS_LATTICE.to_universal(l).ordinal for l in ECSS_LATTICE] == pytest.approx([0, 1 / 3, 2 / 3, 1])
    assert [MEDICAL_LATTICE.to_universal(l).ordinal for l in MEDICAL_LATTICE] == [0.0, 0.5, 1.0]


def test_static_tables() -> None:
    assert STANDARD_METHODOLOGY[StandardIdentifier.ISO_26262] is AssessmentMethodology.QUALITATIVE_MATRIX
    assert ASIL_HARDWARE_TARGETS["ASIL_D"].spfm == 0.99
    assert ASIL_HARDWARE_TARGETS["ASIL_B"].lfm == 0.60
    assert "ASIL_A" not in ASIL_HARDWARE_TARGETS
    assert DAL_OBJECTIVES["DAL_A"] == 71
    assert DAL_OBJECTIVES["DAL_E"] == 0
    with pytest.raises(TypeError):
        LATTICES[StandardIdentifier.ECSS] = SIL_LATTICE  # type: ignore[index]


def test_get_lattice_for_standard() -> None:
    assert get_lattice_for_standard(StandardIdentifier.DO_178C) is DAL_LATTICE
    assert get_lattice_for_standard("ISO_26262") is ASIL_LATTICE
    assert get_lattice_for_standard("EN_50128") is None


@pytest.mark.parametrize(
    "domain, standard, level",
    [
        (SafetyDomain.AUTOMOTIVE, StandardIdentifier.ISO_26262, "ASIL_C"),
        (SafetyDomain.AVIATION, StandardIdentifier.DO_178C, "DAL_A"),
        (SafetyDomain.INDUSTRIAL_CONTROL, StandardIdentifier.IEC_61508, "SIL_2"),
        (SafetyDomain.SPACE, StandardIdentifier.ECSS, "ECSS_A"),
        (SafetyDomain.MEDICAL_DEVICE, StandardIdentifier.IEC_62304, "CLASS_C"),
        (SafetyDomain.HEALTHCARE_IT, StandardIdentifier.IEC_62304, "CLASS_B"),
    ],
)
def test_recommended_level(domain: SafetyDomain, standard: StandardIdentifier, level: str) -> None:
    recommended = get_recommended_level(domain)

    assert get_primary_standard(domain) is standard
    assert recommended.standard is standard
    assert recommended.level.name == level


def test_fintech_has_no_primary_standard() -> None:
    assert get_primary_standard(SafetyDomain.FINTECH) is None
    assert get_recommended_level(SafetyDomain.FINTECH) is None
