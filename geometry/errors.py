# -*- coding: utf-8 -*-
# Loftus/geometry/errors.py

"""
Project: Loftus
Date: 10/18/2026

Purpose
-------
Typed exceptions for the lofting pipeline with compact, context-aware messages, so that
callers see a single pass/fail outcome together with the stage that failed.

Main Tasks
----------
    1. Define LoftError(message, context) with a compact context suffix in __str__.
    2. Provide typed subclasses: InvalidInputSize, InterpolationRangeError,
       AllocationFailure, LoftConfigError.
    3. Provide `with_context` to re-raise an inner error with extra context
       (e.g., stage name and cross-section index) while keeping its type.

Notes
-----
- Context is optional; long values are truncated for readability.
- Errors are deterministic signals from a numerical pipeline; nothing here retries.
"""

__all__ = [
    "LoftError",
    "InvalidInputSize",
    "InterpolationRangeError",
    "AllocationFailure",
    "LoftConfigError",
]


def _format_context(ctx):
    """Return a compact ' | key1=val1, key2=val2' string or '' if no context."""
    if not ctx:
        return ""
    parts = []
    for k in sorted(ctx.keys()):
        sv = repr(ctx[k])
        if len(sv) > 120:
            sv = sv[:117] + "..."
        parts.append("{}={}".format(k, sv))
    return " | " + ", ".join(parts)


class LoftError(Exception):
    """
    Base class for all lofting errors.

    Parameters
    ----------
    message : str
        Human-readable error.
    context : dict, optional
        Extra fields appended in the string form (e.g., {"stage": "smooth", "index": 4}).

    Notes
    -----
    - Subclasses inherit the same constructor.
    - `message` is kept separately so that `with_context` can rebuild the error.
    """
    def __init__(self, message, context=None):
        self.message = message
        self.context = dict(context) if context else None
        super(LoftError, self).__init__(message)

    def __str__(self):
        return self.message + _format_context(self.context)

    @property
    def stage(self):
        """Name of the pipeline stage that failed, if known."""
        if not self.context:
            return None
        return self.context.get("stage")

    def with_context(self, **extra):
        """
        Return a new error of the same type whose context is extended by `extra`.

        Existing keys win, so the innermost stage information is never overwritten.
        """
        ctx = dict(extra)
        if self.context:
            ctx.update(self.context)
        return type(self)(self.message, ctx)


class InvalidInputSize(LoftError):
    """
    Too few profiles, points or output samples, or arrays with the wrong shape:
      - fewer than 2 profiles, or a profile shorter than num_points_per_profile
      - curves with n <= 1 points, or num_out_pts <= 2 for the resamplers
      - keep_modes < 1, or an FFT length that is not a power of two
    """


class InterpolationRangeError(LoftError):
    """
    A resample parameter falls inside the source domain but cannot be bracketed
    (non-monotone or NaN parametrization). Signals a bug, not a recoverable condition.
    """


class AllocationFailure(LoftError):
    """
    A working buffer could not be allocated (MemoryError or an invalid shape).
    """


class LoftConfigError(LoftError):
    """
    Configuration problems detected by LoftConfig:
      - unknown keys after alias normalization
      - non-numeric or out-of-range values
      - cross-key contradictions (e.g., FFT enabled with too few output points)
    """
