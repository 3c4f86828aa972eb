"""Preset library for solver configurations.

Provides pre-configured SolverConfig objects for common speed/quality
trade-offs, with support for loading from dict and JSON.
"""

from __future__ import annotations

import json
import logging
from dataclasses import replace
from pathlib import Path

from cssfilter.config.solver import NarrowSearchConfig, SolverConfig, WideSearchConfig

logger = logging.getLogger(__name__)

# ============================================================================
# Solver Presets
# ============================================================================

DEFAULT = SolverConfig()

FAST = SolverConfig(
    wide=WideSearchConfig(iterations=400, restarts=2),
    narrow=NarrowSearchConfig(iterations=200),
)

THOROUGH = SolverConfig(
    wide=WideSearchConfig(iterations=1500, restarts=6, early_exit_loss=10.0),
    narrow=NarrowSearchConfig(iterations=1000),
)

SOLVER_PRESETS: dict[str, SolverConfig] = {
    "default": DEFAULT,
    "fast": FAST,
    "thorough": THOROUGH,
}

# ============================================================================
# Loading Functions
# ============================================================================


def get_solver_preset(name: str) -> SolverConfig:
    """Get solver preset by name.

    :param name: Preset name (case-insensitive)
    :returns: SolverConfig preset
    :raises KeyError: If preset not found
    """
    name_lower = name.lower()
    if name_lower not in SOLVER_PRESETS:
        available = ", ".join(SOLVER_PRESETS.keys())
        raise KeyError(f"Unknown solver preset '{name}'. Available: {available}")
    return SOLVER_PRESETS[name_lower]


def solver_config_from_dict(d: dict) -> SolverConfig:
    """Create SolverConfig from dictionary.

    Unknown keys are ignored. A ``"preset"`` key selects the base
    configuration that the remaining keys override.

    :param d: Dictionary with ``wide``/``narrow`` sub-dicts and exponents
    :returns: SolverConfig instance
    :raises ValueError: If a section is not a dict or a value is invalid
    :raises KeyError: If ``"preset"`` names an unknown preset

    Example:
        >>> d = {"wide": {"restarts": 5}, "narrow": {"iterations": 800}}
        >>> config = solver_config_from_dict(d)
    """
    if not isinstance(d, dict):
        raise ValueError(f"Solver config must be a dict, got {type(d).__name__}")
    base = get_solver_preset(str(d["preset"])) if "preset" in d else DEFAULT

    wide_section = d.get("wide", {})
    narrow_section = d.get("narrow", {})
    for name, section in (("wide", wide_section), ("narrow", narrow_section)):
        if not isinstance(section, dict):
            raise ValueError(
                f"Solver config '{name}' must be a dict, got {type(section).__name__}"
            )

    wide_fields = {"A", "c", "a", "initial", "iterations", "restarts", "early_exit_loss"}
    narrow_fields = {"c", "a_weights", "iterations"}

    wide_kwargs = {k: v for k, v in wide_section.items() if k in wide_fields}
    narrow_kwargs = {k: v for k, v in narrow_section.items() if k in narrow_fields}

    ignored = set(wide_section) - wide_fields | set(narrow_section) - narrow_fields
    if ignored:
        logger.warning("Ignoring unknown solver config keys: %s", ", ".join(sorted(ignored)))

    wide = replace(base.wide, **wide_kwargs)
    narrow = replace(base.narrow, **narrow_kwargs)

    return SolverConfig(
        wide=wide,
        narrow=narrow,
        alpha=d.get("alpha", base.alpha),
        gamma=d.get("gamma", base.gamma),
    )


def load_solver_json(path: str | Path) -> SolverConfig:
    """Load SolverConfig from JSON file.

    :param path: Path to JSON file
    :returns: SolverConfig instance
    """
    with open(path) as f:
        d = json.load(f)
    logger.debug("Loaded solver config from %s", path)
    return solver_config_from_dict(d)
