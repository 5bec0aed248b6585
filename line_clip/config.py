"""
Clipping configuration.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from numbers import Real

from line_clip.clipping import DEFAULT_EPSILON, DEFAULT_MAX_DEPTH, PARALLEL_TOLERANCE
from line_clip.geometry import EXTENT_MARGIN, ValidationError


@dataclass(frozen=True)
class ClipConfig:
    """Immutable tuning parameters for a clipping run.

    Attributes:
        epsilon: Manhattan length below which the midpoint clipper stops
            subdividing a branch. Defaults to 1e-3.
        max_depth: Maximum midpoint subdivision depth. Defaults to 50.
        parallel_tolerance: |n . d| below which Cyrus-Beck treats a segment
            as parallel to a polygon edge. Defaults to 1e-12.
        extent_margin: Fraction of each axis span added around the scene
            extent for display. Defaults to 0.1.
        normalize_winding: If True, polygons read from input are reordered
            counter-clockwise before clipping.

    Raises:
        ValidationError: If epsilon or parallel_tolerance is not a finite
            positive number
        ValidationError: If max_depth is not a non-negative integer
        ValidationError: If extent_margin is negative or not finite
    """

    epsilon: float = DEFAULT_EPSILON
    max_depth: int = DEFAULT_MAX_DEPTH
    parallel_tolerance: float = PARALLEL_TOLERANCE
    extent_margin: float = EXTENT_MARGIN
    normalize_winding: bool = True

    def __post_init__(self) -> None:
        _validate_clip_config(self)


def _finite_number(value: object, name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, Real):
        raise ValidationError(f"{name} must be a number, got {type(value).__name__}")
    result = float(value)
    if not math.isfinite(result):
        raise ValidationError(f"{name} must be finite, got {value}")
    return result


def _validate_clip_config(config: ClipConfig) -> None:
    """Validate a ClipConfig instance.

    Raises:
        ValidationError: If any field is invalid
    """
    if _finite_number(config.epsilon, "epsilon") <= 0:
        raise ValidationError(f"epsilon must be positive, got {config.epsilon}")

    if isinstance(config.max_depth, bool) or not isinstance(config.max_depth, int):
        raise ValidationError(
            f"max_depth must be an integer, got {type(config.max_depth).__name__}"
        )
    if config.max_depth < 0:
        raise ValidationError(f"max_depth must be non-negative, got {config.max_depth}")

    if _finite_number(config.parallel_tolerance, "parallel_tolerance") <= 0:
        raise ValidationError(
            f"parallel_tolerance must be positive, got {config.parallel_tolerance}"
        )

    if _finite_number(config.extent_margin, "extent_margin") < 0:
        raise ValidationError(
            f"extent_margin must be non-negative, got {config.extent_margin}"
        )

    if not isinstance(config.normalize_winding, bool):
        raise ValidationError(
            f"normalize_winding must be a bool, got {type(config.normalize_winding).__name__}"
        )
