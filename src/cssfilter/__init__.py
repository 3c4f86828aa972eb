"""
cssfilter - CSS filter chains that turn black into any color

Finds magnitudes for the six chained CSS filters
``invert sepia saturate hue-rotate brightness contrast`` that, applied to a
black element, reproduce a target color as closely as possible.

Features:
- Hex (3/6 digit) and ``r,g,b`` color parsing, RGB/HSL conversion
- Pure NumPy reference filter pipeline matching browser filter matrices
- Numba-compiled loss kernel for the search hot path
- Two-phase SPSA search (wide restarts, narrow refinement)
- Seedable, reproducible random streams
- Overridable solver settings with presets and JSON loading

Example - One call:
    >>> from cssfilter import solve
    >>> css, loss = solve("#FF5733", seed=42)
    >>> print(f"filter: {css};")

Example - Full result:
    >>> from cssfilter import FilterSolver, get_solver_preset
    >>>
    >>> solver = FilterSolver(config=get_solver_preset("thorough"), seed=42)
    >>> result = solver.solve_detailed("255,87,51")
    >>> result.declaration, result.loss, result.quality

Example - Filter pipeline:
    >>> from cssfilter import FilterValues, apply_filter_chain
    >>> apply_filter_chain(FilterValues(invert=100, sepia=50))
"""

__version__ = "0.1.0"

# Color space
from cssfilter.color import (
    TargetColor,
    hex_to_rgb,
    normalize_hex,
    parse_color,
    rgb_to_hex,
    rgb_to_hsl,
)

# Config values, domains and presets
from cssfilter.config import (
    DEFAULT_CONFIG,
    PARAMETER_SPECS,
    FilterValues,
    NarrowSearchConfig,
    ParameterSpec,
    SolverConfig,
    WideSearchConfig,
    fix_parameter_vector,
    get_solver_preset,
    load_solver_json,
    solver_config_from_dict,
)

# Errors
from cssfilter.exceptions import InvalidColorFormat

# Filter pipeline
from cssfilter.filter import apply_filter_chain

# Solver
from cssfilter.solver import (
    FilterLoss,
    FilterSolver,
    SolveResult,
    SPSAOptimizer,
    SPSAResult,
    classify_loss,
    solve,
    spsa,
)

__all__ = [
    # Version
    "__version__",
    # Entry point
    "solve",
    # Errors
    "InvalidColorFormat",
    # Color space
    "TargetColor",
    "hex_to_rgb",
    "rgb_to_hex",
    "rgb_to_hsl",
    "parse_color",
    "normalize_hex",
    # Values and domains
    "FilterValues",
    "ParameterSpec",
    "PARAMETER_SPECS",
    "fix_parameter_vector",
    # Solver settings
    "SolverConfig",
    "WideSearchConfig",
    "NarrowSearchConfig",
    "DEFAULT_CONFIG",
    "get_solver_preset",
    "solver_config_from_dict",
    "load_solver_json",
    # Pipeline
    "apply_filter_chain",
    # Solver
    "FilterSolver",
    "SolveResult",
    "FilterLoss",
    "SPSAOptimizer",
    "SPSAResult",
    "spsa",
    "classify_loss",
]
