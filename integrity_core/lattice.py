"""Bounded total-order lattices of integrity levels and their axiom checker.

Every integrity scheme handled by this package (SIL, ASIL, DAL, ...) is a
finite chain ``L = (E, <=, bottom, top)``. On a chain the lattice operations
are trivial: ``join`` is the maximum and ``meet`` the minimum, both decided
purely by ``IntegrityLevel.ordinal``.

Levels of different lattices are only comparable through the normalization
``ordinal / (k - 1)`` into ``[0, 1]``. That comparison preserves order but
drops every semantic detail of the source standard.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Iterator, List, Literal, Mapping, Optional, Sequence, Tuple, Union

from .models import IntegrityLevel, Ordering, StandardIdentifier, UniversalIntegrityLevel

UniversalFunction = Callable[[IntegrityLevel], UniversalIntegrityLevel]


@dataclass(frozen=True)
class SafetyLattice:
    """Immutable chain of integrity levels for one standard."""

    standard: StandardIdentifier
    name: str
    levels: Tuple[IntegrityLevel, ...]
    bottom: IntegrityLevel
    top: IntegrityLevel
    universal: UniversalFunction = field(repr=False, compare=False)

    def compare(self, a: IntegrityLevel, b: IntegrityLevel) -> Ordering:
        if a.ordinal < b.ordinal:
            return Ordering.LESS
        if a.ordinal > b.ordinal:
            return Ordering.GREATER
        return Ordering.EQUAL

    def join(self, a: IntegrityLevel, b: IntegrityLevel) -> IntegrityLevel:
        return a if a.ordinal >= b.ordinal else b

    def meet(self, a: IntegrityLevel, b: IntegrityLevel) -> IntegrityLevel:
        return a if a.ordinal <= b.ordinal else b

    def leq(self, a: IntegrityLevel, b: IntegrityLevel) -> bool:
        return a.ordinal <= b.ordinal

    def to_universal(self, level: IntegrityLevel) -> UniversalIntegrityLevel:
        return self.universal(level)

    def from_ordinal(self, ordinal: int) -> Optional[IntegrityLevel]:
        for level in self.levels:
            if level.ordinal == ordinal:
                return level
        return None

    def level(self, name: str) -> Optional[IntegrityLevel]:
        """Return the level called ``name`` or ``None``."""
        for level in self.levels:
            if level.name == name:
                return level
        return None

    def normalize(self, level: IntegrityLevel) -> float:
        max_ordinal = self.top.ordinal
        if max_ordinal == 0:
            return 0.0
        return level.ordinal / max_ordinal

    def __contains__(self, level: object) -> bool:
        return level in self.levels

    def __iter__(self) -> Iterator[IntegrityLevel]:
        return iter(self.levels)

    def __len__(self) -> int:
        return len(self.levels)


def create_lattice(
    standard: StandardIdentifier,
    name: str,
    levels: Sequence[IntegrityLevel],
    universal: UniversalFunction,
) -> SafetyLattice:
    """Build a lattice from ``levels`` listed bottom to top."""

    if not levels:
        raise ValueError("Lattice must have at least one level.")
    lattice = SafetyLattice(
        standard=standard,
        name=name,
        levels=tuple(levels),
        bottom=levels[0],
        top=levels[-1],
        universal=universal,
    )
    check = validate_lattice(lattice)
    if not check.valid:
        raise ValueError(f"Malformed lattice '{name}': " + "; ".join(check.violations))
    return lattice


# ---------------------------------------------------------------------------
# Axiom verification
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class LatticeVerificationResult:
    valid: bool
    violations: Tuple[str, ...]


def validate_lattice(lattice: SafetyLattice) -> LatticeVerificationResult:
    """Structural checks: levels listed bottom to top with ordinals ``0..k-1``.

    Names must be unique, ``bottom`` must be the first level and ``top`` the
    last one.
    """
    violations: List[str] = []
    levels = lattice.levels
    if not levels:
        return LatticeVerificationResult(valid=False, violations=("Lattice has no levels",))

    for index, level in enumerate(levels):
        if level.ordinal != index:
            violations.append(
                f"Ordinals not contiguous from 0: {level.name} has ordinal "
                f"{level.ordinal} at position {index}"
            )
    seen = set()
    for level in levels:
        if level.name in seen:
            violations.append(f"Duplicate level name: {level.name}")
        seen.add(level.name)
    if lattice.bottom != levels[0]:
        violations.append("Bottom is not the first level")
    if lattice.top != levels[-1]:
        violations.append("Top is not the last level")

    return LatticeVerificationResult(valid=not violations, violations=tuple(violations))


def verify_lattice_axioms(lattice: SafetyLattice) -> LatticeVerificationResult:
    """Check the chain axioms of ``lattice`` and collect every violation.

    The structural checks of ``validate_lattice`` come first. The axiom
    checks are: antisymmetry and consistency of ``compare`` over all ordered
    pairs, bottom/top bounds, join upper bound and commutativity,
    join identity (bottom), absorption (top) and idempotence, and finally
    that among adjacent levels carrying a probability bound a higher level
    never has a weaker (larger) upper bound. Equal bounds are accepted since
    ISO 26262 assigns the same PMHF target to ASIL B and C.
    """

    violations: List[str] = list(validate_lattice(lattice).violations)
    levels = lattice.levels

    for a in levels:
        for b in levels:
            cmp_ab = lattice.compare(a, b)
            cmp_ba = lattice.compare(b, a)
            if cmp_ab == Ordering.LESS and cmp_ba == Ordering.LESS:
                violations.append(
                    f"Antisymmetry violated: {a.name} < {b.name} and {b.name} < {a.name}"
                )
            if cmp_ab == Ordering.LESS and cmp_ba != Ordering.GREATER:
                violations.append(f"Order consistency violated: {a.name}, {b.name}")

    for x in levels:
        if lattice.compare(lattice.bottom, x) == Ordering.GREATER:
            violations.append(f"Bottom bound violated: ⊥ > {x.name}")
        if lattice.compare(x, lattice.top) == Ordering.GREATER:
            violations.append(f"Top bound violated: {x.name} > ⊤")

    for a in levels:
        for b in levels:
            j = lattice.join(a, b)
            if lattice.compare(a, j) == Ordering.GREATER:
                violations.append(
                    f"Join upper bound violated: {a.name} > join({a.name}, {b.name})"
                )
            if lattice.compare(b, j) == Ordering.GREATER:
                violations.append(
                    f"Join upper bound violated: {b.name} > join({a.name}, {b.name})"
                )
            if j.ordinal != lattice.join(b, a).ordinal:
                violations.append(
                    f"Join commutativity violated: {a.name} ⊔ {b.name} ≠ {b.name} ⊔ {a.name}"
                )

        if lattice.join(a, lattice.bottom).ordinal != a.ordinal:
            violations.append(f"Join identity violated: {a.name} ⊔ ⊥ ≠ {a.name}")
        if lattice.join(a, lattice.top).ordinal != lattice.top.ordinal:
            violations.append(f"Join absorption violated: {a.name} ⊔ ⊤ ≠ ⊤")
        if lattice.join(a, a).ordinal != a.ordinal:
            violations.append(f"Join idempotence violated: {a.name} ⊔ {a.name} ≠ {a.name}")

    ordered = sorted(levels, key=lambda level: level.ordinal)
    for prev, curr in zip(ordered, ordered[1:]):
        lower = lattice.to_universal(prev).failure_probability
        higher = lattice.to_universal(curr).failure_probability
        if lower is not None and higher is not None and lower.upper < higher.upper:
            violations.append(
                f"Probability consistency violated: {prev.name} has a stricter "
                f"bound ({lower.upper:g}) than {curr.name} ({higher.upper:g})"
            )

    return LatticeVerificationResult(valid=not violations, violations=tuple(violations))


# ---------------------------------------------------------------------------
# Cross-lattice comparison
# ---------------------------------------------------------------------------

ApproximationQuality = Literal["exact", "lower_bound", "upper_bound"]


@dataclass(frozen=True)
class CrossLatticeMapping:
    source: IntegrityLevel
    source_lattice: SafetyLattice
    target: IntegrityLevel
    target_lattice: SafetyLattice
    approximation_quality: ApproximationQuality


def compare_across_lattices(
    lattice1: SafetyLattice,
    level1: IntegrityLevel,
    lattice2: SafetyLattice,
    level2: IntegrityLevel,
) -> Ordering:
    """Order two levels of different lattices by their normalized ordinals."""

    u1 = lattice1.normalize(level1)
    u2 = lattice2.normalize(level2)
    if u1 < u2:
        return Ordering.LESS
    if u1 > u2:
        return Ordering.GREATER
    return Ordering.EQUAL


def find_nearest_equivalent(
    source_lattice: SafetyLattice,
    level: IntegrityLevel,
    target_lattice: SafetyLattice,
) -> CrossLatticeMapping:
    """Return the target level closest in normalized ordinal to ``level``.

    Ties are resolved in favour of the lower target level.
    """

    source_value = source_lattice.normalize(level)
    nearest = target_lattice.bottom
    nearest_distance = abs(target_lattice.normalize(nearest) - source_value)
    for candidate in target_lattice.levels:
        distance = abs(target_lattice.normalize(candidate) - source_value)
        if distance < nearest_distance:
            nearest = candidate
            nearest_distance = distance

    nearest_value = target_lattice.normalize(nearest)
    quality: ApproximationQuality
    if nearest_value == source_value:
        quality = "exact"
    elif nearest_value < source_value:
        quality = "lower_bound"
    else:
        quality = "upper_bound"

    return CrossLatticeMapping(
        source=level,
        source_lattice=source_lattice,
        target=nearest,
        target_lattice=target_lattice,
        approximation_quality=quality,
    )


@dataclass(frozen=True)
class NearestHomomorphism:
    """Order-preserving map sending each source level to its nearest target level."""

    source: SafetyLattice
    target: SafetyLattice

    def map(self, level: IntegrityLevel) -> IntegrityLevel:
        return find_nearest_equivalent(self.source, level, self.target).target

    @property
    def preserves_join(self) -> bool:
        return all(
            self.map(self.source.join(a, b)) == self.target.join(self.map(a), self.map(b))
            for a in self.source.levels
            for b in self.source.levels
        )

    @property
    def preserves_meet(self) -> bool:
        return all(
            self.map(self.source.meet(a, b)) == self.target.meet(self.map(a), self.map(b))
            for a in self.source.levels
            for b in self.source.levels
        )


@dataclass(frozen=True)
class GaloisConnection:
    """Rounding adjunction between two lattices.

    ``lower`` rounds up into ``target`` and ``upper`` rounds down into
    ``source``, so ``upper(lower(a)) >= a`` for every ``a`` of ``source``.
    """

    source: SafetyLattice
    target: SafetyLattice

    def lower(self, level: IntegrityLevel) -> IntegrityLevel:
        value = self.source.normalize(level)
        for candidate in self.target.levels:
            if self.target.normalize(candidate) >= value:
                return candidate
        return self.target.top

    def upper(self, level: IntegrityLevel) -> IntegrityLevel:
        value = self.target.normalize(level)
        result = self.source.bottom
        for candidate in self.source.levels:
            if self.source.normalize(candidate) <= value:
                result = candidate
        return result


@dataclass(frozen=True)
class GaloisCheck:
    inflated: bool
    original: IntegrityLevel
    round_trip: IntegrityLevel


def check_galois_property(connection: GaloisConnection, level: IntegrityLevel) -> GaloisCheck:
    round_trip = connection.upper(connection.lower(level))
    return GaloisCheck(
        inflated=connection.source.leq(level, round_trip),
        original=level,
        round_trip=round_trip,
    )


def describe_lattice(lattice: SafetyLattice) -> str:
    lines = [
        f"Lattice: {lattice.name} ({lattice.standard.value})",
        f"Levels ({len(lattice)}):",
    ]
    for level in lattice.levels:
        if level == lattice.bottom:
            marker = " [⊥]"
        elif level == lattice.top:
            marker = " [⊤]"
        else:
            marker = ""
        lines.append(
            f"  {level.ordinal}: {level.name} (normalized: {lattice.normalize(level):.2f}){marker}"
        )
    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Impact classification
# ---------------------------------------------------------------------------

AggregationStrategy = Literal["max", "weighted_sum", "product"]
CustomAggregation = Callable[[Mapping[str, int]], float]

# keeps a single zero dimension from zeroing the whole product
PRODUCT_OFFSET = 0.1


@dataclass(frozen=True)
class ImpactDimension:
    """One assessed dimension (severity, exposure, ...) with its ordinal scale."""

    id: str
    values: SafetyLattice
    weight: float = 1.0
    description: str = ""


@dataclass(frozen=True)
class ImpactSpace:
    dimensions: Tuple[ImpactDimension, ...]
    aggregation: Union[AggregationStrategy, CustomAggregation] = "max"
    weights: Mapping[str, float] = field(default_factory=dict)


def aggregate_impact(space: ImpactSpace, assessment: Mapping[str, int]) -> float:
    """Combine the assessed ordinals of ``space`` into one score.

    Parameters
    ----------
    space:
        Dimensions and aggregation strategy.
    assessment:
        ``{dimension id: ordinal}``; missing dimensions count as 0.

    Each dimension is normalized by the top ordinal of its scale before
    aggregation. ``weighted_sum`` takes weights from ``space.weights`` and
    falls back to the dimension weight. ``product`` adds ``PRODUCT_OFFSET``
    to every factor and caps the result at 1.
    """
    if callable(space.aggregation):
        return float(space.aggregation(assessment))

    normalized: List[Tuple[ImpactDimension, float]] = []
    for dim in space.dimensions:
        top = dim.values.top.ordinal
        value = assessment.get(dim.id, 0)
        normalized.append((dim, value / top if top > 0 else 0.0))

    if space.aggregation == "max":
        return max((value for _, value in normalized), default=0.0)
    if space.aggregation == "weighted_sum":
        total = 0.0
        total_weight = 0.0
        for dim, value in normalized:
            weight = space.weights.get(dim.id, dim.weight)
            total += value * weight
            total_weight += weight
        return total / total_weight if total_weight > 0 else 0.0
    if space.aggregation == "product":
        product = 1.0
        for _, value in normalized:
            product *= value + PRODUCT_OFFSET
        return min(1.0, product)
    raise ValueError(f"Unknown aggregation strategy: {space.aggregation}")


@dataclass(frozen=True)
class ClassificationFunctor:
    """Maps impact assessments to levels of ``lattice`` through score thresholds."""

    impact_space: ImpactSpace
    lattice: SafetyLattice
    thresholds: Tuple[float, ...]

    def classify(self, assessment: Mapping[str, int]) -> IntegrityLevel:
        """Highest level whose threshold the aggregated score reaches."""
        score = aggregate_impact(self.impact_space, assessment)
        result = self.lattice.bottom
        for level, threshold in zip(self.lattice.levels, self.thresholds):
            if score >= threshold:
                result = level
        return result


def create_classification_functor(
    impact_space: ImpactSpace,
    lattice: SafetyLattice,
    thresholds: Optional[Sequence[float]] = None,
) -> ClassificationFunctor:
    """Evenly spaced thresholds ``i / (k - 1)`` unless ``thresholds`` is given."""
    k = len(lattice)
    if thresholds is None:
        thresholds = [i / (k - 1 or 1) for i in range(k)]
    if len(thresholds) != k:
        raise ValueError(f"Expected {k} thresholds, got {len(thresholds)}")
    if any(b < a for a, b in zip(thresholds, thresholds[1:])):
        raise ValueError("Thresholds must be non-decreasing")
    return ClassificationFunctor(
        impact_space=impact_space, lattice=lattice, thresholds=tuple(thresholds)
    )
