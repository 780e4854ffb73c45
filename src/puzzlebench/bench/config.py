"""Benchmark configuration and profile loading.

Handles:
- Loading benchmark profiles from YAML files.
- Merging CLI options with profile defaults.
- Validating the final configuration before sampling starts.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from puzzlebench.bench.stats import DEFAULT_RESERVOIR_CAPACITY
from puzzlebench.bench.timing import DEFAULT_BUDGET_S, DEFAULT_CALIBRATION_ROUNDS
from puzzlebench.logging import get_logger

log = get_logger("bench.config")


# ---------------------------------------------------------------------------
# BenchConfig
# ---------------------------------------------------------------------------


@dataclass
class BenchConfig:
    """Resolved configuration for a benchmark session."""

    name: str = ""
    budget_s: float = DEFAULT_BUDGET_S  # per candidate
    reservoir_capacity: int = DEFAULT_RESERVOIR_CAPACITY
    seed: int | None = None  # reservoir sampling seed
    calibrate: bool = True
    calibration_rounds: int = DEFAULT_CALIBRATION_ROUNDS


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


@dataclass
class ValidationError:
    """A single configuration validation error."""

    field: str
    message: str
    severity: str = "error"  # "error" or "warning"


def validate_config(config: BenchConfig) -> list[ValidationError]:
    """Validate a benchmark configuration.

    Returns a list of validation errors.  Empty list means valid.
    """
    errors: list[ValidationError] = []

    if not math.isfinite(config.budget_s):
        errors.append(
            ValidationError(
                field="budget_s",
                message=f"Benchmark budget must be a finite number (got {config.budget_s}).",
            )
        )
    elif config.budget_s < 0:
        errors.append(
            ValidationError(
                field="budget_s",
                message=f"Benchmark budget cannot be negative (got {config.budget_s}).",
            )
        )
    elif config.budget_s == 0:
        errors.append(
            ValidationError(
                field="budget_s",
                message="Benchmark budget is zero; each solution runs exactly once.",
                severity="warning",
            )
        )

    if config.reservoir_capacity < 1:
        errors.append(
            ValidationError(
                field="reservoir_capacity",
                message=(
                    f"Reservoir capacity must be at least 1 (got {config.reservoir_capacity})."
                ),
            )
        )

    if config.calibrate and config.calibration_rounds < 1:
        errors.append(
            ValidationError(
                field="calibration_rounds",
                message=(
                    f"Calibration needs at least 1 round (got {config.calibration_rounds})."
                ),
            )
        )

    return errors


# ---------------------------------------------------------------------------
# Profile loading
# ---------------------------------------------------------------------------


def load_profile(profile_path: Path) -> dict[str, Any]:
    """Load a benchmark profile from a YAML file.

    Profile format::

        name: "quick"
        budget: 0.5
        reservoir_capacity: 2048
        seed: 7
        calibrate: true
        calibration_rounds: 500

    Returns:
        The parsed YAML as a dict.
    """
    if not profile_path.exists():
        raise FileNotFoundError(f"Profile not found: {profile_path}")

    data = yaml.safe_load(profile_path.read_text(encoding="utf-8"))
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Profile must be a YAML mapping, got {type(data).__name__}")

    return data


def _as_bool(key: str, value: Any) -> bool:
    # YAML strings such as "false" would otherwise be truthy.
    if not isinstance(value, bool):
        raise ValueError(f"{key} must be true or false, got {value!r}")
    return value


def config_from_profile(
    profile_data: dict[str, Any],
    *,
    cli_overrides: dict[str, Any] | None = None,
) -> BenchConfig:
    """Build a BenchConfig from a parsed YAML profile.

    CLI overrides take precedence over profile values. An override of
    ``None`` means the option was not given on the command line.

    Args:
        profile_data: Parsed YAML profile dict.
        cli_overrides: Dict of CLI option values keyed by BenchConfig
            field name.
    """
    cli = {k: v for k, v in (cli_overrides or {}).items() if v is not None}

    def pick(key: str, profile_key: str, default: Any) -> Any:
        if key in cli:
            return cli[key]
        return profile_data.get(profile_key, default)

    try:
        config = BenchConfig(
            name=str(pick("name", "name", "")),
            budget_s=float(pick("budget_s", "budget", DEFAULT_BUDGET_S)),
            reservoir_capacity=int(
                pick("reservoir_capacity", "reservoir_capacity", DEFAULT_RESERVOIR_CAPACITY)
            ),
            calibrate=_as_bool("calibrate", pick("calibrate", "calibrate", True)),
            calibration_rounds=int(
                pick("calibration_rounds", "calibration_rounds", DEFAULT_CALIBRATION_ROUNDS)
            ),
        )
        seed = pick("seed", "seed", None)
        config.seed = int(seed) if seed is not None else None
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Invalid value in benchmark profile: {exc}") from exc

    log.debug("Benchmark config: %s", config)
    return config
