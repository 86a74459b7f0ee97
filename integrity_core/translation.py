"""Approximate cross-standard translation through fixed probability bands.

Each band spans one decade of PFH and names, per standard, the level whose
ordinal position matches. The mapping is ordinal only: standards use
different assessment methodologies and no official correspondence exists.
Every translation therefore emits a ``TranslationWarning``.
"""

from __future__ import annotations

import logging
import warnings
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional, Tuple, Union

from .models import MappingConfidence, StandardIdentifier, UniversalIntegrityLevel
from .standards import coerce_standard

logger = logging.getLogger(__name__)

StandardKey = Union[StandardIdentifier, str]

CROSS_STANDARD_MAPPING_DISCLAIMER = """\
WARNING: Cross-standard mappings are APPROXIMATE and NON-NORMATIVE.

Standards were developed independently for different domains and use
fundamentally different methodologies:
- IEC 61508: Quantitative probability
- ISO 26262: Qualitative S x E x C matrix
- DO-178C: Process-based (probability from AC 25.1309)
- ECSS: Severity-based (advises against probabilistic software assessment)
- IEC 62304: Harm severity-based

No official cross-standard mapping exists.
Use these mappings only as rough guidance, never for compliance decisions.
"""

TRANSLATION_ADVISORY = (
    "Cross-standard mapping is APPROXIMATE and NON-NORMATIVE. "
    "See CROSS_STANDARD_MAPPING_DISCLAIMER for important caveats."
)


class TranslationWarning(UserWarning):
    """Issued on every cross-standard translation."""


@dataclass(frozen=True)
class ProbabilityBand:
    pfh_upper: float
    pfh_lower: float
    universal_ordinal: float
    mappings: Mapping[StandardIdentifier, str]
    meaning: str
    confidence: MappingConfidence
    # pairs of "STANDARD:LEVEL" keys, order irrelevant
    verified_pairs: Tuple[Tuple[str, str], ...] = ()

    def level_for(self, standard: StandardKey) -> Optional[str]:
        key = coerce_standard(standard)
        if key is None:
            return None
        return self.mappings.get(key)


def _band(
    pfh_upper: float,
    pfh_lower: float,
    universal_ordinal: float,
    names: Tuple[str, str, str, str, str],
    meaning: str,
    confidence: MappingConfidence,
    verified_pairs: Tuple[Tuple[str, str], ...] = (),
) -> ProbabilityBand:
    order = (
        StandardIdentifier.IEC_61508,
        StandardIdentifier.ISO_26262,
        StandardIdentifier.DO_178C,
        StandardIdentifier.ECSS,
        StandardIdentifier.IEC_62304,
    )
    return ProbabilityBand(
        pfh_upper=pfh_upper,
        pfh_lower=pfh_lower,
        universal_ordinal=universal_ordinal,
        mappings=MappingProxyType(dict(zip(order, names))),
        meaning=meaning,
        confidence=confidence,
        verified_pairs=verified_pairs,
    )


# Scanned in this order; the first band naming a level wins.
PROBABILITY_BANDS: Tuple[ProbabilityBand, ...] = (
    _band(
        float("inf"), 1e-5, 0.0,
        ("SIL_0", "QM", "DAL_E", "ECSS_D", "CLASS_A"),
        "No safety requirements (ordinal equivalence only)",
        MappingConfidence.HIGH,
        (
            ("IEC_61508:SIL_0", "ISO_26262:QM"),
            ("IEC_61508:SIL_0", "DO_178C:DAL_E"),
        ),
    ),
    _band(
        1e-5, 1e-6, 0.25,
        ("SIL_1", "ASIL_A", "DAL_D", "ECSS_D", "CLASS_A"),
        "Low integrity (ordinal equivalence only - probability values DO NOT MATCH)",
        MappingConfidence.ORDINAL_ONLY,
    ),
    _band(
        1e-6, 1e-7, 0.5,
        ("SIL_2", "ASIL_B", "DAL_C", "ECSS_C", "CLASS_B"),
        "Medium integrity (ordinal equivalence only - probability values DO NOT MATCH)",
        MappingConfidence.LOW,
    ),
    _band(
        1e-7, 1e-8, 0.75,
        ("SIL_3", "ASIL_C", "DAL_B", "ECSS_B", "CLASS_C"),
        "High integrity (best probability alignment at this level)",
        MappingConfidence.MEDIUM,
        (("IEC_61508:SIL_3", "DO_178C:DAL_B"),),
    ),
    _band(
        1e-8, 1e-9, 1.0,
        ("SIL_4", "ASIL_D", "DAL_A", "ECSS_A", "CLASS_C"),
        "Highest integrity (ordinal equivalence; see scholarly note)",
        MappingConfidence.MEDIUM,
        (
            ("IEC_61508:SIL_4", "ISO_26262:ASIL_D"),
            ("IEC_61508:SIL_4", "DO_178C:DAL_A"),
        ),
    ),
)


@dataclass(frozen=True)
class TranslationResult:
    level: Optional[str]
    band: Optional[ProbabilityBand]
    warnings: Tuple[str, ...]


@dataclass(frozen=True)
class MappingConfidenceResult:
    confidence: MappingConfidence
    verified: bool


def get_probability_band(level: str, standard: StandardKey) -> Optional[ProbabilityBand]:
    """First band whose mapping for ``standard`` is ``level``."""
    for band in PROBABILITY_BANDS:
        if band.level_for(standard) == level:
            return band
    return None


def get_universal_ordinal(level: str, standard: StandardKey) -> Optional[float]:
    band = get_probability_band(level, standard)
    return band.universal_ordinal if band is not None else None


def translate_integrity_detailed(
    level: str, from_standard: StandardKey, to_standard: StandardKey
) -> TranslationResult:
    """Translate ``level`` and return the advisories alongside the result.

    The advisories are also issued as ``TranslationWarning``.
    """
    notes = [TRANSLATION_ADVISORY]
    band = get_probability_band(level, from_standard)
    target = band.level_for(to_standard) if band is not None else None
    if band is not None and target is not None:
        if band.confidence is MappingConfidence.ORDINAL_ONLY:
            notes.append(f"Band at ordinal {band.universal_ordinal:g}: {band.meaning}")
        elif band.confidence is MappingConfidence.LOW:
            notes.append(f"Low-confidence band at ordinal {band.universal_ordinal:g}: {band.meaning}")

    for note in notes:
        logger.warning("%s %s -> %s: %s", level, from_standard, to_standard, note)
        warnings.warn(note, TranslationWarning, stacklevel=2)
    return TranslationResult(level=target, band=band, warnings=tuple(notes))


def translate_integrity(
    level: str, from_standard: StandardKey, to_standard: StandardKey
) -> Optional[str]:
    """Name of the level of ``to_standard`` sharing a band with ``level``.

    Returns ``None`` when either side is unknown. Always warns, and logs the
    advisory on every call since the warnings filter may show it only once.
    """
    logger.warning("%s %s -> %s: %s", level, from_standard, to_standard, TRANSLATION_ADVISORY)
    warnings.warn(TRANSLATION_ADVISORY, TranslationWarning, stacklevel=2)
    band = get_probability_band(level, from_standard)
    return band.level_for(to_standard) if band is not None else None


def get_mapping_confidence(
    level1: str, standard1: StandardKey, level2: str, standard2: StandardKey
) -> Optional[MappingConfidenceResult]:
    band1 = get_probability_band(level1, standard1)
    band2 = get_probability_band(level2, standard2)
    if band1 is None or band2 is None or band1 is not band2:
        return None

    key1 = f"{coerce_standard(standard1).value}:{level1}"  # type: ignore[union-attr]
    key2 = f"{coerce_standard(standard2).value}:{level2}"  # type: ignore[union-attr]
    verified = any(
        (a == key1 and b == key2) or (a == key2 and b == key1)
        for a, b in band1.verified_pairs
    )
    return MappingConfidenceResult(confidence=band1.confidence, verified=verified)


def project_to_standard(
    universal: UniversalIntegrityLevel, standard: StandardKey
) -> Optional[str]:
    """Level name of ``standard`` in the band nearest to ``universal.ordinal``."""
    closest: Optional[ProbabilityBand] = None
    closest_distance = float("inf")
    for band in PROBABILITY_BANDS:
        distance = abs(band.universal_ordinal - universal.ordinal)
        if distance < closest_distance:
            closest = band
            closest_distance = distance
    if closest is None:
        return None
    return closest.level_for(standard)
