"""Hardware metrics (DC, SFF) and the IEC 61508-2 architectural constraint."""

from __future__ import annotations

from typing import Dict, Tuple

from .models import HardwareMetrics, IntegrityLevel
from .standards import SIL_1, SIL_2, SIL_3, SIL_4

# Route 1H, type B elements: max SIL per SFF bucket, indexed by HFT 0..2
ARCHITECTURAL_CONSTRAINTS: Dict[str, Tuple[IntegrityLevel, IntegrityLevel, IntegrityLevel]] = {
    "low": (SIL_1, SIL_2, SIL_3),
    "medium": (SIL_2, SIL_3, SIL_4),
    "high": (SIL_3, SIL_4, SIL_4),
    "very_high": (SIL_3, SIL_4, SIL_4),
}


def _check_rates(metrics: HardwareMetrics) -> None:
    for name in ("safe_fault_rate", "detected_dangerous_rate", "undetected_dangerous_rate"):
        if getattr(metrics, name) < 0:
            raise ValueError(f"{name} must be non-negative.")


def calculate_diagnostic_coverage(metrics: HardwareMetrics) -> float:
    """``λDD / (λDD + λDU)``; 1.0 when there are no dangerous failures."""
    _check_rates(metrics)
    dangerous = metrics.detected_dangerous_rate + metrics.undetected_dangerous_rate
    if dangerous == 0:
        return 1.0
    return metrics.detected_dangerous_rate / dangerous


def calculate_sff(metrics: HardwareMetrics) -> float:
    """``(λS + λDD) / (λS + λDD + λDU)``; 1.0 when all rates are zero."""
    _check_rates(metrics)
    total = (
        metrics.safe_fault_rate
        + metrics.detected_dangerous_rate
        + metrics.undetected_dangerous_rate
    )
    if total == 0:
        return 1.0
    return (metrics.safe_fault_rate + metrics.detected_dangerous_rate) / total


def sff_category(sff: float) -> str:
    if sff < 0.6:
        return "low"
    if sff < 0.9:
        return "medium"
    if sff < 0.99:
        return "high"
    return "very_high"


def get_architectural_constraint_sil(sff: float, hft: int) -> IntegrityLevel:
    """Highest SIL the architecture may claim regardless of its PFD."""
    if hft not in (0, 1, 2):
        raise ValueError(f"Hardware fault tolerance must be 0, 1 or 2, got {hft}")
    return ARCHITECTURAL_CONSTRAINTS[sff_category(sff)][hft]
