"""Composition and decomposition of integrity levels within one lattice."""

from __future__ import annotations

from dataclasses import dataclass
from functools import reduce
from typing import List, Literal, Sequence, Tuple, Union

from .lattice import SafetyLattice
from .models import DEFAULT_COMPOSITION_CONTEXT, CompositionContext, IntegrityLevel, Ordering
from .standards import ASIL_LATTICE

CompositionStrategy = Literal["series", "parallel", "allocated"]
DecompositionStrategy = Literal["conservative", "equal_split"]

COMMON_CAUSE_FREEDOM_THRESHOLD = 0.9

SYNTHESIS_ADVISORY = (
    "Synthesis applied based on redundancy and independence. "
    "Verify against specific standard requirements (IEC 61508-2 or ISO 26262-9)."
)
DECOMPOSITION_ADVISORY = (
    "Simplified check (ordinal sum). ISO 26262-9 only permits the decompositions "
    "listed in its Table 1 and requires sufficient independence of the elements."
)


@dataclass(frozen=True)
class CompositionResult:
    result_level: IntegrityLevel
    synthesis_applied: bool
    warnings: Tuple[str, ...] = ()


@dataclass(frozen=True)
class DecompositionCheck:
    valid: bool
    warnings: Tuple[str, ...] = ()


@dataclass(frozen=True)
class DecompositionResult:
    system_level: IntegrityLevel
    subsystem_levels: Tuple[IntegrityLevel, ...]
    strategy: DecompositionStrategy
    valid: bool
    rationale: str


def compose_integrity_levels(
    lattice: SafetyLattice, levels: Sequence[IntegrityLevel]
) -> IntegrityLevel:
    """Weakest link: the system inherits the most demanding component level."""
    return reduce(lattice.join, levels, lattice.bottom)


def compose_with_context(
    lattice: SafetyLattice,
    levels: Sequence[IntegrityLevel],
    context: CompositionContext = DEFAULT_COMPOSITION_CONTEXT,
) -> CompositionResult:
    """Compose ``levels`` taking a redundancy description into account.

    Without redundancy the result is ``compose_integrity_levels``. Redundant,
    independent channels with common-cause freedom of at least 0.9 may be
    credited one level above the weakest channel (two or more channels),
    capped at the top of the lattice. The credit is only applied when it
    beats the conservative join.
    """
    if not levels:
        return CompositionResult(result_level=lattice.bottom, synthesis_applied=False)

    conservative = compose_integrity_levels(lattice, levels)

    if not context.redundant:
        return CompositionResult(result_level=conservative, synthesis_applied=False)

    if not context.independent:
        return CompositionResult(
            result_level=conservative,
            synthesis_applied=False,
            warnings=("Components are redundant but not independent - cannot apply synthesis",),
        )

    if context.common_cause_freedom < COMMON_CAUSE_FREEDOM_THRESHOLD:
        return CompositionResult(
            result_level=conservative,
            synthesis_applied=False,
            warnings=(
                f"Common cause freedom ({context.common_cause_freedom:g}) below "
                f"{COMMON_CAUSE_FREEDOM_THRESHOLD:g} threshold - cannot apply synthesis",
            ),
        )

    min_ordinal = min(level.ordinal for level in levels)
    bonus = 1 if len(levels) >= 2 else 0
    synthesized = lattice.from_ordinal(min(min_ordinal + bonus, lattice.top.ordinal))

    if synthesized is None or synthesized.ordinal <= conservative.ordinal:
        return CompositionResult(
            result_level=conservative,
            synthesis_applied=False,
            warnings=(
                f"Redundancy gives no improvement over the conservative result {conservative.name}",
            ),
        )

    warnings: List[str] = [SYNTHESIS_ADVISORY]
    if not context.diverse_implementation:
        warnings.append(
            "Channels are not diversely implemented; systematic faults may defeat redundancy"
        )
    return CompositionResult(
        result_level=synthesized, synthesis_applied=True, warnings=tuple(warnings)
    )


def check_refinement_valid(
    lattice: SafetyLattice, spec_level: IntegrityLevel, impl_level: IntegrityLevel
) -> bool:
    """An implementation must be at least as stringent as the level it refines."""
    return lattice.compare(impl_level, spec_level) != Ordering.LESS


def find_minimum_level(lattice: SafetyLattice, target_universal_ordinal: float) -> IntegrityLevel:
    """Lowest level whose universal ordinal reaches the target, else top."""
    for level in lattice.levels:
        if lattice.to_universal(level).ordinal >= target_universal_ordinal:
            return level
    return lattice.top


AsilLike = Union[IntegrityLevel, str]


def _asil_ordinal(level: AsilLike) -> int:
    name = level.name if isinstance(level, IntegrityLevel) else level
    resolved = ASIL_LATTICE.level(name)
    if resolved is None:
        raise ValueError(f"Unknown ASIL: {name!r}")
    return resolved.ordinal


def is_valid_asil_decomposition(target: AsilLike, component1: AsilLike, component2: AsilLike) -> bool:
    """Sufficiency check ``ord(c1) + ord(c2) >= ord(target)``.

    A simplification of ISO 26262-9; e.g. ASIL D = B + B passes, A + A does not.
    """
    return _asil_ordinal(component1) + _asil_ordinal(component2) >= _asil_ordinal(target)


def check_asil_decomposition(
    target: AsilLike, component1: AsilLike, component2: AsilLike
) -> DecompositionCheck:
    return DecompositionCheck(
        valid=is_valid_asil_decomposition(target, component1, component2),
        warnings=(DECOMPOSITION_ADVISORY,),
    )


def compose_levels(
    lattice: SafetyLattice,
    levels: Sequence[IntegrityLevel],
    strategy: CompositionStrategy = "series",
) -> IntegrityLevel:
    """Combine levels by ``strategy``.

    ``series`` and ``allocated`` take the join; ``parallel`` takes the meet
    seeded at top. An empty input yields bottom for every strategy.
    """
    if not levels:
        return lattice.bottom
    if strategy in ("series", "allocated"):
        return reduce(lattice.join, levels, lattice.bottom)
    if strategy == "parallel":
        return reduce(lattice.meet, levels, lattice.top)
    raise ValueError(f"Unknown composition strategy: {strategy!r}")


def decompose_requirement(
    lattice: SafetyLattice,
    system_level: IntegrityLevel,
    count: int,
    strategy: DecompositionStrategy = "conservative",
) -> DecompositionResult:
    """Allocate ``system_level`` to ``count`` subsystems.

    Both strategies hand each subsystem the full system level; ``equal_split``
    is reported invalid because splitting needs domain-specific rules.
    """
    if count < 0:
        raise ValueError("Subsystem count must be non-negative.")
    if system_level not in lattice:
        raise ValueError(f"{system_level.name} is not a level of {lattice.name}")

    allocated = (system_level,) * count
    if strategy == "conservative":
        return DecompositionResult(
            system_level=system_level,
            subsystem_levels=allocated,
            strategy=strategy,
            valid=True,
            rationale=f"Each of {count} subsystems allocated full system requirement",
        )
    if strategy == "equal_split":
        return DecompositionResult(
            system_level=system_level,
            subsystem_levels=allocated,
            strategy=strategy,
            valid=False,
            rationale="Equal split requires domain-specific rules (e.g., ASIL decomposition table)",
        )
    raise ValueError(f"Unknown decomposition strategy: {strategy!r}")
