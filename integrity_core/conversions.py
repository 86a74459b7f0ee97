"""PFD/PFH conversions and dangerous failure rates from manufacturer data."""

from __future__ import annotations

from typing import Mapping, Optional, Tuple

from .models import Assumptions, DemandMode


class ConversionError(ValueError):
    """Raised when reliability figures cannot be converted."""


def convert_pfd_to_pfh(pfd_avg: float, ti: float) -> float:
    """``PFH = 2 * PFDavg / TI`` for a proof-test interval ``ti`` in hours."""
    if ti <= 0:
        raise ConversionError("Proof-test interval (TI) must be greater than zero.")
    return 2.0 * pfd_avg / ti


def convert_pfh_to_pfd(pfh: float, ti: float) -> float:
    """``PFDavg = PFH * TI / 2``, inverse of :func:`convert_pfd_to_pfh`."""
    if ti <= 0:
        raise ConversionError("Proof-test interval (TI) must be greater than zero.")
    return pfh * ti / 2.0


def dangerous_failure_rate(
    raw: Mapping[str, object],
    demand_mode: DemandMode,
    assumptions: Assumptions,
) -> Tuple[float, str]:
    """Return ``(lambda_d, provenance)`` for one SIF data row.

    Parameters
    ----------
    raw:
        Row of manufacturer data. Recognised keys, in order of preference:
        ``lambda_d``; ``lambda_du`` together with ``lambda_dd``; ``pfh`` /
        ``pfh_avg`` (high demand) or ``pfd`` / ``pfd_avg`` (low demand).
    demand_mode:
        ``"low_demand"`` or ``"high_demand"``; picks PFD or PFH when no
        native rate is present.
    assumptions:
        Provides TI for the PFD to rate derivation.
    """

    if demand_mode not in ("low_demand", "high_demand"):
        raise ConversionError(f"Unsupported demand mode: {demand_mode}")

    context = _row_label(raw)

    lambda_d = _optional_float(raw, "lambda_d", context)
    if lambda_d is not None:
        if lambda_d < 0:
            raise ConversionError(f"{context}: λD must be non-negative.")
        return lambda_d, "native"

    lambda_du = _optional_float(raw, "lambda_du", context)
    lambda_dd = _optional_float(raw, "lambda_dd", context)
    if lambda_du is not None or lambda_dd is not None:
        if lambda_du is None or lambda_dd is None:
            raise ConversionError(f"{context}: both λDU and λDD are required.")
        if lambda_du < 0 or lambda_dd < 0:
            raise ConversionError(f"{context}: λDU/λDD must be non-negative.")
        return lambda_du + lambda_dd, "native_du_dd"

    if demand_mode == "high_demand":
        pfh = _first_float(raw, ("pfh", "pfh_avg"), context)
        if pfh is None:
            raise ConversionError(f"{context}: PFH data required for high demand mode.")
        if pfh < 0:
            raise ConversionError(f"{context}: PFH must be non-negative (1/h).")
        return pfh, "derived_from_pfh"

    pfd = _first_float(raw, ("pfd", "pfd_avg"), context)
    if pfd is None:
        raise ConversionError(f"{context}: PFD data required for low demand mode.")
    if pfd < 0:
        raise ConversionError(f"{context}: PFD must be non-negative.")
    return convert_pfd_to_pfh(pfd, assumptions.TI), "derived_from_pfd"


def _row_label(raw: Mapping[str, object]) -> str:
    for key in ("sif", "tag", "name"):
        val = raw.get(key)
        if isinstance(val, str) and val.strip():
            return val
    return "SIF"


def _first_float(
    raw: Mapping[str, object], keys: Tuple[str, ...], context: str
) -> Optional[float]:
    for key in keys:
        value = _optional_float(raw, key, context)
        if value is not None:
            return value
    return None


def _optional_float(raw: Mapping[str, object], key: str, context: str) -> Optional[float]:
    value = raw.get(key)
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    try:
        number = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        raise ConversionError(f"{context}: invalid numeric value for '{key}'.")
    # pandas hands over NaN for empty cells
    if number != number:
        return None
    return number
