import logging
import warnings

import pytest

from integrity_core.models import (
    AssessmentMethodology,
    ConsequenceSeverity,
    MappingConfidence,
    StandardIdentifier,
    UniversalIntegrityLevel,
)
from integrity_core.translation import (
    CROSS_STANDARD_MAPPING_DISCLAIMER,
    PROBABILITY_BANDS,
    TranslationWarning,
    get_mapping_confidence,
    get_probability_band,
    get_universal_ordinal,
    project_to_standard,
    translate_integrity,
    translate_integrity_detailed,
)


def _universal(ordinal: float) -> UniversalIntegrityLevel:
    return UniversalIntegrityLevel(
        ordinal=ordinal,
        failure_probability=None,
        risk_reduction_factor=None,
        consequence_severity=ConsequenceSeverity.NEGLIGIBLE,
        methodology=AssessmentMethodology.QUANTITATIVE_PROBABILITY,
    )


def test_band_table_layout() -> None:
    assert [band.universal_ordinal for band in PROBABILITY_BANDS] == [0.0, 0.25, 0.5, 0.75, 1.0]
    assert [band.confidence for band in PROBABILITY_BANDS] == [
        MappingConfidence.HIGH,
        MappingConfidence.ORDINAL_ONLY,
        MappingConfidence.LOW,
        MappingConfidence.MEDIUM,
        MappingConfidence.MEDIUM,
    ]
    for upper, lower in zip(PROBABILITY_BANDS, PROBABILITY_BANDS[1:]):
        assert upper.pfh_lower == lower.pfh_upper


def test_translate_sil_0_to_qm_warns() -> None:
    with pytest.warns(TranslationWarning, match="APPROXIMATE and NON-NORMATIVE"):
        assert translate_integrity("SIL_0", "IEC_61508", "ISO_26262") == "QM"


@pytest.mark.parametrize(
    "level, source, target, expected",
    [
        ("SIL_3", StandardIdentifier.IEC_61508, StandardIdentifier.DO_178C, "DAL_B"),
        ("ASIL_D", "ISO_26262", "IEC_61508", "SIL_4"),
        ("CLASS_C", "IEC_62304", "IEC_61508", "SIL_3"),
        ("ECSS_D", "ECSS", "ISO_26262", "QM"),
        ("SIL_5", "IEC_61508", "ISO_26262", None),
        ("SIL_2", "IEC_61508", "EN_50128", None),
        ("SIL_2", "NOT_A_STANDARD", "ISO_26262", None),
    ],
)
def test_translate_integrity(level: str, source, target, expected) -> None:
    with pytest.warns(TranslationWarning):
        assert translate_integrity(level, source, target) == expected


def test_every_translation_warns() -> None:
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        translate_integrity("SIL_1", "IEC_61508", "DO_178C")
        translate_integrity("SIL_1", "IEC_61508", "DO_178C")
        translate_integrity("missing", "IEC_61508", "DO_178C")

    assert len([w for w in caught if issubclass(w.category, TranslationWarning)]) == 3


def test_repeated_translation_is_logged_every_time(caplog: pytest.LogCaptureFixture) -> None:
    with warnings.catch_warnings():
        warnings.resetwarnings()
        warnings.simplefilter("default")
        for _ in range(3):
            translate_integrity("SIL_1", "IEC_61508", "DO_178C")

    records = [r for r in caplog.records if r.name == "integrity_core.translation"]
    assert len(records) == 3
    assert all(r.levelno == logging.WARNING for r in records)
    assert "NON-NORMATIVE" in records[0].getMessage()


def test_detailed_translation_returns_advisories() -> None:
    with pytest.warns(TranslationWarning):
        result = translate_integrity_detailed("SIL_1", "IEC_61508", "ISO_26262")

    assert result.level == "ASIL_A"
    assert result.band is PROBABILITY_BANDS[1]
    assert len(result.warnings) == 2
    assert "DO NOT MATCH" in result.warnings[1]


def test_detailed_translation_miss() -> None:
    with pytest.warns(TranslationWarning):
        result = translate_integrity_detailed("ASIL_E", "ISO_26262", "IEC_61508")

    assert result.level is None
    assert result.band is None
    assert len(result.warnings) == 1


def test_universal_ordinal_and_band_lookup() -> None:
    assert get_universal_ordinal("DAL_C", "DO_178C") == 0.5
    assert get_universal_ordinal("DAL_Z", "DO_178C") is None
    assert get_probability_band("ASIL_C", StandardIdentifier.ISO_26262) is PROBABILITY_BANDS[3]
    # first matching band wins for levels listed twice
    assert get_probability_band("ECSS_D", "ECSS") is PROBABILITY_BANDS[0]
    assert get_probability_band("CLASS_C", "IEC_62304") is PROBABILITY_BANDS[3]


def test_mapping_confidence_verified_pair() -> None:
    result = get_mapping_confidence("SIL_0", "IEC_61508", "QM", "ISO_26262")

    assert result.confidence is MappingConfidence.HIGH
    assert result.verified


def test_mapping_confidence_pair_order_is_irrelevant() -> None:
    result = get_mapping_confidence("DAL_A", "DO_178C", "SIL_4", "IEC_61508")

    assert result.confidence is MappingConfidence.MEDIUM
    assert result.verified


def test_mapping_confidence_unverified_and_mismatched() -> None:
    same_band = get_mapping_confidence("ASIL_D", "ISO_26262", "DAL_A", "DO_178C")
    assert same_band.confidence is MappingConfidence.MEDIUM
    assert not same_band.verified

    assert get_mapping_confidence("SIL_3", "IEC_61508", "ASIL_D", "ISO_26262") is None
    assert get_mapping_confidence("SIL_9", "IEC_61508", "QM", "ISO_26262") is None


def test_project_to_standard_picks_nearest_band() -> None:
    assert project_to_standard(_universal(0.7), "ISO_26262") == "ASIL_C"
    assert project_to_standard(_universal(0.1), "IEC_61508") == "SIL_0"
    # equidistant from 0.25 and 0.5: the earlier band wins
    assert project_to_standard(_universal(0.375), "IEC_61508") == "SIL_1"
    assert project_to_standard(_universal(1.0), "unknown") is None


def test_disclaimer_names_all_standards() -> None:
    for name in ("IEC 61508", "ISO 26262", "DO-178C", "ECSS", "IEC 62304"):
        assert name in CROSS_STANDARD_MAPPING_DISCLAIMER
