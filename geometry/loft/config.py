# -*- coding: utf-8 -*-
# Loftus/geometry/loft/config.py

"""
Project: Loftus
Date: 10/18/2026

Purpose
-------
Immutable, validated loft parameters plus a small schema layer that canonicalizes
user-friendly keys (snake_case or the legacy CamelCase names), checks numeric ranges and
rejects unknown keys, raising `LoftConfigError` with actionable messages.

Main Tasks
----------
    1. `LoftConfig`: frozen dataclass holding every loft parameter with its default.
    2. `normalize_keys`: map aliases to canonical field names through `ALIASES`.
    3. `validate`: per-key checks (RANGES, booleans, constraint kinds) and cross-key rules.
    4. `LoftConfig.from_mapping` / `replace` / `as_dict` for building, overriding and
       serializing configs.

Notes
-----
- Validation runs in `__post_init__`, so an invalid LoftConfig cannot exist.
- Unknown keys are rejected (a typo would otherwise silently fall back to a default).
- Resampling and FFT smoothing need more than 2 output samples along the length.
"""

import math
from dataclasses import dataclass, asdict, fields, replace as dc_replace
from typing import Any, Dict, Mapping, Optional
from ..errors import LoftConfigError
from ..ops.spectral import NUM_INTERP_PTS, is_power_of_two

__all__ = ["LoftConfig", "normalize_keys", "validate", "ALIASES", "RANGES", "SPLINE_TYPES"]

# --------------------------
# Canonicalization (aliases)
# --------------------------
ALIASES = {
    # cross-section sampling
    "num_out_pts_in_segs": "num_points_per_profile",
    "NumOutPtsInSegs": "num_points_per_profile",
    "num_pts": "num_points_per_profile",

    # length sampling
    "NumOutPtsAlongLength": "num_out_pts_along_length",
    "num_out_pts": "num_out_pts_along_length",
    "NumLinearPtsAlongLength": "num_linear_pts_along_length",
    "UseLinearSampleAlongLength": "use_linear_sample_along_length",
    "use_linear_sample": "use_linear_sample_along_length",

    # smoothing
    "UseFFT": "use_fft",
    "NumModes": "num_modes",
    "keep_modes": "num_modes",

    # spline
    "SplineType": "spline_type",
    "Tension": "tension",
    "Bias": "bias",
    "Continuity": "continuity",
}

# --------------------------
# Numeric ranges (inclusive)
# --------------------------
# key -> (min, max, integer)
RANGES = {
    "num_points_per_profile": (2, 10**7, True),
    "num_out_pts_along_length": (2, 10**7, True),
    "num_linear_pts_along_length": (2, 10**8, True),
    "num_modes": (1, 10**6, True),
    "num_interp_pts": (2, 2**24, True),
    "tension": (-1e6, 1e6, False),
    "bias": (-1e6, 1e6, False),
    "continuity": (-1e6, 1e6, False),
    "left_value": (-1e12, 1e12, False),
    "right_value": (-1e12, 1e12, False),
}

_BOOLS = ("use_linear_sample_along_length", "use_fft")
_CONSTRAINT_KEYS = ("left_constraint", "right_constraint")
_CONSTRAINT_KINDS = (0, 1, 2, 3)

# 0 = Kochanek
SPLINE_TYPES = (0,)


def normalize_keys(params: Mapping[str, Any]) -> Dict[str, Any]:
    """Map user-friendly keys to canonical LoftConfig field names (no value coercion)."""
    out = {}
    for k, v in params.items():
        out[ALIASES.get(k, k)] = v
    return out


def _check_range(key: str, val: Any) -> None:
    lo, hi, integer = RANGES[key]
    if isinstance(val, bool):
        raise LoftConfigError("Expected a number, got a bool.", {"key": key, "value": val})
    try:
        fval = float(val)
    except (TypeError, ValueError):
        raise LoftConfigError("Non-numeric value.", {"key": key, "value": val})
    if not math.isfinite(fval):
        raise LoftConfigError("Value must be finite.", {"key": key, "value": val})
    if integer and fval != int(fval):
        raise LoftConfigError("Expected an integer.", {"key": key, "value": val})
    if not (lo <= fval <= hi):
        raise LoftConfigError(
            "Out-of-range value (expected {} <= value <= {}).".format(lo, hi),
            {"key": key, "value": val},
        )


def validate(params: Mapping[str, Any]) -> None:
    """
    Validate canonical parameters (after `normalize_keys`).

    Checks
    ------
    - Unknown keys.
    - Numeric ranges and integrality for keys in `RANGES`.
    - Booleans for the sampling/smoothing switches.
    - Constraint kinds in {0, 1, 2, 3}; spline type in `SPLINE_TYPES`.
    - Cross-key: num_interp_pts is a power of two; num_modes <= num_interp_pts // 2 with
      FFT smoothing; num_out_pts_along_length > 2 when linear sampling or FFT smoothing
      is enabled.

    Raises
    ------
    LoftConfigError
        On the first violation found.
    """
    known = set(f.name for f in fields(LoftConfig))
    unknown = sorted(k for k in params if k not in known)
    if unknown:
        raise LoftConfigError("Unknown loft parameter(s).", {"keys": unknown})

    for k, v in params.items():
        if k in RANGES:
            _check_range(k, v)
        elif k in _BOOLS:
            if not isinstance(v, bool):
                raise LoftConfigError("Expected a bool.", {"key": k, "value": v})
        elif k in _CONSTRAINT_KEYS:
            if isinstance(v, bool) or v not in _CONSTRAINT_KINDS:
                raise LoftConfigError(
                    "End constraint must be one of {}.".format(_CONSTRAINT_KINDS),
                    {"key": k, "value": v},
                )
        elif k == "spline_type":
            if isinstance(v, bool) or v not in SPLINE_TYPES:
                raise LoftConfigError(
                    "Unsupported spline type (0 = Kochanek).", {"key": k, "value": v}
                )

    if "num_interp_pts" in params and not is_power_of_two(params["num_interp_pts"]):
        raise LoftConfigError(
            "num_interp_pts must be a power of two.", {"num_interp_pts": params["num_interp_pts"]}
        )

    if params.get("use_fft") and "num_modes" in params and "num_interp_pts" in params:
        if int(params["num_modes"]) > int(params["num_interp_pts"]) // 2:
            raise LoftConfigError(
                "num_modes cannot exceed num_interp_pts // 2.",
                {"num_modes": params["num_modes"], "num_interp_pts": params["num_interp_pts"]},
            )

    needs_resample = params.get("use_linear_sample_along_length") or params.get("use_fft")
    n_out = params.get("num_out_pts_along_length")
    if needs_resample and n_out is not None and int(n_out) <= 2:
        raise LoftConfigError(
            "Resampling along the length needs more than 2 output points.",
            {"num_out_pts_along_length": n_out,
             "use_linear_sample_along_length": params.get("use_linear_sample_along_length"),
             "use_fft": params.get("use_fft")},
        )


@dataclass(frozen=True)
class LoftConfig:
    """
    Loft parameters.

    Attributes
    ----------
    num_points_per_profile : int
        Points used from each profile (the first N); also the ring count of the surface.
    num_out_pts_along_length : int
        Samples along the sweep for each cross-section index.
    num_linear_pts_along_length : int
        Dense spline samples used before linear resampling.
    use_linear_sample_along_length : bool
        Dense-sample the spline and resample by arclength (True) or evaluate it directly
        at evenly spaced parameters (False).
    use_fft : bool
        Low-pass each longitudinal curve with `num_modes` Fourier modes.
    num_modes : int
        Fourier modes kept by the smoother.
    num_interp_pts : int
        Uniform samples fed to the FFT (power of two).
    spline_type : int
        Longitudinal spline family; 0 = Kochanek.
    tension, bias, continuity : float
        Kochanek shape parameters.
    left_constraint, right_constraint : int
        Spline end conditions (0 chord, 1 slope, 2 second derivative, 3 ratio).
    left_value, right_value : float
        Values for the end conditions.
    """
    num_points_per_profile: int = 30
    num_out_pts_along_length: int = 60
    num_linear_pts_along_length: int = 600
    use_linear_sample_along_length: bool = True
    use_fft: bool = False
    num_modes: int = 20
    num_interp_pts: int = NUM_INTERP_PTS
    spline_type: int = 0
    tension: float = 0.0
    bias: float = 0.0
    continuity: float = 0.0
    left_constraint: int = 2
    left_value: float = 0.0
    right_constraint: int = 2
    right_value: float = 0.0

    def __post_init__(self):
        validate(asdict(self))
        # 12.0 -> 12 for count fields; frozen, so bypass __setattr__
        for key, (_lo, _hi, integer) in RANGES.items():
            value = getattr(self, key)
            object.__setattr__(self, key, int(value) if integer else float(value))
        for key in _CONSTRAINT_KEYS + ("spline_type",):
            object.__setattr__(self, key, int(getattr(self, key)))

    @classmethod
    def from_mapping(cls, params: Optional[Mapping[str, Any]] = None, **overrides) -> "LoftConfig":
        """
        Build a config from a user mapping and/or keyword overrides (aliases allowed).

        Keyword overrides win over `params`. Missing keys take the defaults.
        """
        merged = normalize_keys(params or {})
        merged.update(normalize_keys(overrides))
        validate(merged)
        return cls(**merged)

    def replace(self, **overrides) -> "LoftConfig":
        """Return a new validated config with `overrides` applied (aliases allowed)."""
        if not overrides:
            return self
        canon = normalize_keys(overrides)
        validate(canon)
        return dc_replace(self, **canon)

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)
