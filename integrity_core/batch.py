"""Tabular SIL verification of safety instrumented functions (SIFs).

One input row describes one SIF: its unreduced risk, the voting
architecture, manufacturer reliability data and the SFF of the subsystem.
Column headers are mapped to logical fields through ``IntegrityConfig.columns``.
"""

from __future__ import annotations

import logging
import os
import warnings
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

import numpy as np
import pandas as pd
import yaml

from .config import IntegrityConfig
from .conversions import ConversionError, dangerous_failure_rate
from .verification import VerificationError, verify_sil_compliance

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("sif", "unreduced_risk", "architecture", "sff")

RESULT_COLUMNS = [
    "sif",
    "required_sil",
    "rrf",
    "exact_level",
    "architecture",
    "hft",
    "lambda_d",
    "lambda_source",
    "pfd",
    "achieved_sil",
    "constraint_sil",
    "verified",
    "details",
    "error",
]

PathLike = Union[str, "os.PathLike[str]"]


def load_sif_table(
    path: PathLike,
    delimiter: str = ";",
    sheet: Optional[Union[str, int]] = None,
) -> pd.DataFrame:
    """Read a SIF table from CSV or from an Excel workbook (openpyxl)."""
    suffix = os.path.splitext(os.fspath(path))[1].lower()
    if suffix in (".xlsx", ".xlsm"):
        df = pd.read_excel(path, sheet_name=sheet if sheet is not None else 0, engine="openpyxl")
    else:
        df = pd.read_csv(path, delimiter=delimiter)
    logger.info("Loaded %d SIF rows from %s", len(df), path)
    return df


def _logical_rows(df: pd.DataFrame, columns: Mapping[str, str]) -> List[Dict[str, Any]]:
    header_to_field = {header: name for name, header in columns.items()}
    missing = [columns[name] for name in REQUIRED_FIELDS if columns[name] not in df.columns]
    if missing:
        raise ValueError(f"SIF table is missing required columns: {missing}")
    renamed = df.rename(columns=header_to_field)
    keep = [name for name in columns if name in renamed.columns]
    return renamed[keep].to_dict("records")


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, float) and np.isnan(value)) or value == ""


def _row_float(row: Mapping[str, Any], key: str, default: Optional[float] = None) -> float:
    value = row.get(key)
    if _is_blank(value):
        if default is None:
            raise VerificationError(f"Missing value for '{key}'")
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        raise VerificationError(f"Invalid numeric value for '{key}': {value!r}") from None


def _verify_row(row: Mapping[str, Any], config: IntegrityConfig) -> Dict[str, Any]:
    lambda_d, source = dangerous_failure_rate(row, config.demand_mode, config.assumptions)
    result = verify_sil_compliance(
        unreduced_risk=_row_float(row, "unreduced_risk"),
        tolerable_risk=_row_float(row, "tolerable_risk", config.tolerable_risk),
        architecture=str(row.get("architecture", "")).strip(),  # type: ignore[arg-type]
        lambda_d=lambda_d,
        ti=config.assumptions.TI,
        sff=_row_float(row, "sff"),
        beta=_row_float(row, "beta", config.assumptions.beta),
    )
    record = result.to_dict()
    record["lambda_d"] = lambda_d
    record["lambda_source"] = source
    return record


def verify_sif_table(df: pd.DataFrame, config: IntegrityConfig) -> pd.DataFrame:
    """Verify every SIF row; failing rows are kept with ``error`` filled in."""
    records: List[Dict[str, Any]] = []
    for row in _logical_rows(df, config.columns):
        sif = str(row.get("sif", ""))
        try:
            record = _verify_row(row, config)
            record["error"] = None
        except (ConversionError, VerificationError) as exc:
            warnings.warn(f"SIF '{sif}' could not be verified: {exc}", UserWarning, stacklevel=2)
            record = {"error": str(exc)}
        record["sif"] = sif
        records.append(record)
        logger.info(
            "%s: %s",
            sif,
            "error" if record["error"] else ("verified" if record["verified"] else "NOT verified"),
        )

    return pd.DataFrame.from_records(records, columns=RESULT_COLUMNS)


class NumpySafeDumper(yaml.SafeDumper):
    def represent_data(self, data):
        if isinstance(data, (np.integer, np.floating, np.bool_)):
            return super().represent_data(data.item())
        return super().represent_data(data)


def export_results_yaml(
    results: Union[pd.DataFrame, Iterable[Mapping[str, Any]]], path: PathLike
) -> None:
    """Write verification results to ``path`` as ``{"results": [...]}``."""
    if isinstance(results, pd.DataFrame):
        rows = results.astype(object).where(results.notna(), None).to_dict("records")
    else:
        rows = [dict(row) for row in results]
    with open(path, "w", encoding="utf-8") as f:
        yaml.dump({"results": rows}, f, sort_keys=False, allow_unicode=True, Dumper=NumpySafeDumper)
    logger.info("Exported %d results to %s", len(rows), path)
