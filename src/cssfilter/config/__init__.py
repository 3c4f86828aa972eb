"""Configuration: parameter domains, filter values and solver settings."""

from cssfilter.config.operations import (
    HUE_INDEX,
    N_PARAMS,
    PARAMETER_NAMES,
    PARAMETER_SPECS,
    ParameterSpec,
    fix_parameter_vector,
    kernel_scale_vector,
    max_vector,
    midpoint_vector,
)
from cssfilter.config.presets import (
    SOLVER_PRESETS,
    get_solver_preset,
    load_solver_json,
    solver_config_from_dict,
)
from cssfilter.config.solver import (
    DEFAULT_CONFIG,
    NarrowSearchConfig,
    SolverConfig,
    WideSearchConfig,
)
from cssfilter.config.values import FilterValues

__all__ = [
    # Parameter domains
    "ParameterSpec",
    "PARAMETER_SPECS",
    "PARAMETER_NAMES",
    "N_PARAMS",
    "HUE_INDEX",
    "fix_parameter_vector",
    "kernel_scale_vector",
    "max_vector",
    "midpoint_vector",
    # Values
    "FilterValues",
    # Solver settings
    "SolverConfig",
    "WideSearchConfig",
    "NarrowSearchConfig",
    "DEFAULT_CONFIG",
    # Presets
    "SOLVER_PRESETS",
    "get_solver_preset",
    "solver_config_from_dict",
    "load_solver_json",
]
