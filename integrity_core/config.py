"""YAML configuration for batch SIL verification."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Union

import yaml

from .models import DEFAULT_ASSUMPTIONS, Assumptions, DemandMode

logger = logging.getLogger(__name__)

REQUIRED_SECTIONS = ("assumptions", "verification")

# logical field -> column header of the SIF table
DEFAULT_COLUMNS: Mapping[str, str] = MappingProxyType(
    {
        "sif": "sif",
        "unreduced_risk": "unreduced_risk",
        "tolerable_risk": "tolerable_risk",
        "architecture": "architecture",
        "lambda_d": "lambda_d",
        "lambda_du": "lambda_du",
        "lambda_dd": "lambda_dd",
        "pfd": "pfd_avg",
        "pfh": "pfh_avg",
        "sff": "sff",
        "beta": "beta",
    }
)


class ConfigError(ValueError):
    """Raised when the configuration is missing or invalid."""


@dataclass(frozen=True)
class TableSettings:
    path: Optional[str] = None
    delimiter: str = ";"
    sheet: Optional[Union[str, int]] = None


@dataclass(frozen=True)
class IntegrityConfig:
    assumptions: Assumptions = DEFAULT_ASSUMPTIONS
    tolerable_risk: float = 1e-4
    demand_mode: DemandMode = "low_demand"
    table: TableSettings = field(default_factory=TableSettings)
    columns: Mapping[str, str] = field(default_factory=lambda: DEFAULT_COLUMNS)


def load_config(path: Union[str, "os.PathLike[str]"] = "config.yaml") -> IntegrityConfig:
    """Read ``path`` with ``yaml.safe_load`` and validate it."""
    if not os.path.isfile(path):
        raise ConfigError(f"Configuration file not found: {path}")
    with open(path, "r", encoding="utf-8") as file:
        try:
            data = yaml.safe_load(file)
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc
    logger.debug("Loaded configuration from %s", path)
    return config_from_mapping(data)


def config_from_mapping(data: Any) -> IntegrityConfig:
    if not isinstance(data, Mapping):
        raise ConfigError("Configuration must be a mapping.")
    for section in REQUIRED_SECTIONS:
        if section not in data:
            raise ConfigError(f"Missing configuration section: '{section}'")

    assumptions = _assumptions(_section(data, "assumptions"))
    verification = _section(data, "verification")

    tolerable_risk = _number(verification, "tolerable_risk", 1e-4)
    if tolerable_risk <= 0:
        raise ConfigError("verification.tolerable_risk must be positive.")

    demand_mode = verification.get("demand_mode", "low_demand")
    if demand_mode not in ("low_demand", "high_demand"):
        raise ConfigError(f"Unsupported demand mode: {demand_mode}")

    table_section = _section(data, "table")
    table = TableSettings(
        path=table_section.get("path"),
        delimiter=str(table_section.get("delimiter", ";")),
        sheet=table_section.get("sheet"),
    )

    columns: Dict[str, str] = dict(DEFAULT_COLUMNS)
    for key, header in _section(data, "columns").items():
        if key not in DEFAULT_COLUMNS:
            raise ConfigError(f"Unknown column mapping key: '{key}'")
        columns[key] = str(header)

    return IntegrityConfig(
        assumptions=assumptions,
        tolerable_risk=tolerable_risk,
        demand_mode=demand_mode,
        table=table,
        columns=MappingProxyType(columns),
    )


def _section(data: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    section = data.get(name)
    if section is None:
        return {}
    if not isinstance(section, Mapping):
        raise ConfigError(f"Section '{name}' must be a mapping.")
    return section


def _number(section: Mapping[str, Any], key: str, default: float) -> float:
    value = section.get(key, default)
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ConfigError(f"Invalid numeric value for '{key}': {value!r}") from None


def _assumptions(section: Mapping[str, Any]) -> Assumptions:
    ti = _number(section, "TI", DEFAULT_ASSUMPTIONS.TI)
    mttr = _number(section, "MTTR", DEFAULT_ASSUMPTIONS.MTTR)
    beta = _number(section, "beta", DEFAULT_ASSUMPTIONS.beta)
    if ti <= 0:
        raise ConfigError("assumptions.TI must be positive.")
    if mttr <= 0:
        raise ConfigError("assumptions.MTTR must be positive.")
    if not 0.0 <= beta <= 1.0:
        raise ConfigError("assumptions.beta must lie in [0, 1].")
    return Assumptions(TI=ti, MTTR=mttr, beta=beta)
