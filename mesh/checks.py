# -*- coding: utf-8 -*-
# Loftus/mesh/checks.py

"""
Project: Loftus
Date: 10/18/2026

Purpose:
--------
Validation rules for lofted surfaces. Each rule inspects the surface and returns one
normalized "finding" record; `run_checks` runs the enabled rules in a fixed order and
aggregates a top-level `ok` flag.

Finding Schema:
---------------
    {
      "id": "<rule_id>",
      "severity": "error" | "warn",
      "ok": bool,
      "count": int,
      "examples": [...],        # capped at 25 entries
      "details": {...},
      "fixable": bool,
    }

Rules:
------
   - non_finite_points        (error)  NaN/Inf coordinates
   - non_manifold_edges       (error)  edges shared by 3+ triangles
   - inconsistent_orientation (error)  interior edges traversed twice in the same direction
   - degenerate_triangles     (warn)   area below `degenerate_area_rel` * mean area
                                       (or below `degenerate_area_abs`)

Notes:
------
- Thresholds are merged over `DEFAULTS`; unknown keys are ignored.
- `ok` is False iff an enabled error-severity rule fails.
"""

import copy
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional
import numpy as np
from .stats import edge_topology, triangle_areas

__all__ = ["DEFAULTS", "REGISTRY", "RULES_ORDER", "run_checks"]


DEFAULTS: Dict[str, Any] = {
    "enabled": {
        "non_finite_points": True,
        "non_manifold_edges": True,
        "inconsistent_orientation": True,
        "degenerate_triangles": True,
    },
    "thresholds": {
        "degenerate_area_rel": 1e-10,
        "degenerate_area_abs": 0.0,
    },
}


def _finding(rule_id: str, severity: str, ok: bool, count: int, examples: List, details: Dict,
             fixable: bool = False) -> dict:
    return {
        "id": rule_id,
        "severity": severity,
        "ok": bool(ok),
        "count": int(count),
        "examples": examples[:25],
        "details": details,
        "fixable": bool(fixable),
    }


# ---- Rules: fn(surface, thresholds, cache) -> finding ----

def non_finite_points(surface, th, cache) -> dict:
    pts = np.asarray(surface.points, dtype=np.float64)
    bad = np.flatnonzero(~np.all(np.isfinite(pts), axis=1))
    return _finding("non_finite_points", "error", bad.size == 0, bad.size,
                    bad.tolist(), {"n_points": int(pts.shape[0])})


def non_manifold_edges(surface, th, cache) -> dict:
    topo = cache["topology"]
    return _finding("non_manifold_edges", "error", topo["non_manifold"] == 0, topo["non_manifold"],
                    topo["non_manifold_edges"], {"n_edges": topo["n_edges"]})


def inconsistent_orientation(surface, th, cache) -> dict:
    topo = cache["topology"]
    return _finding("inconsistent_orientation", "error", topo["inconsistent"] == 0, topo["inconsistent"],
                    topo["inconsistent_edges"], {"interior_edges": topo["interior"]}, fixable=True)


def degenerate_triangles(surface, th, cache) -> dict:
    areas = cache["areas"]
    mean = float(areas.mean()) if areas.size else 0.0
    floor = max(float(th.get("degenerate_area_rel", 0.0)) * mean, float(th.get("degenerate_area_abs", 0.0)))
    bad = np.flatnonzero(areas <= floor) if areas.size else np.empty(0, dtype=np.int64)
    return _finding("degenerate_triangles", "warn", bad.size == 0, bad.size, bad.tolist(),
                    {"area_floor": floor, "mean_area": mean}, fixable=True)


@dataclass(frozen=True)
class RuleSpec:
    id: str
    fn: Callable   # fn(surface, thresholds, cache) -> finding
    severity: str  # "error" | "warn"


REGISTRY: Dict[str, RuleSpec] = {
    "non_finite_points": RuleSpec("non_finite_points", non_finite_points, "error"),
    "non_manifold_edges": RuleSpec("non_manifold_edges", non_manifold_edges, "error"),
    "inconsistent_orientation": RuleSpec("inconsistent_orientation", inconsistent_orientation, "error"),
    "degenerate_triangles": RuleSpec("degenerate_triangles", degenerate_triangles, "warn"),
}

# Validity first, then topology, then quality
RULES_ORDER: List[str] = [
    "non_finite_points",
    "non_manifold_edges",
    "inconsistent_orientation",
    "degenerate_triangles",
]


def _deep_merge(base: Dict[str, Any], upd: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Right-biased deep merge of nested dicts; inputs are not mutated."""
    out = copy.deepcopy(base)
    if not upd:
        return out
    for k, v in upd.items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = _deep_merge(out[k], v)
        else:
            out[k] = copy.deepcopy(v)
    return out


def run_checks(surface, config: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """
    Run all enabled rules against a surface.

    Parameters
    ----------
    surface : LoftedSurface
        Any object with `points (N,3)` and `triangles (T,3)`.
    config : dict, optional
        Overrides for `DEFAULTS` ({"enabled": {...}, "thresholds": {...}}).

    Returns
    -------
    dict
        {"ok": bool, "rules": {rule_id: finding}, "meta": {"n_points", "n_triangles",
         "thresholds", "enabled"}}
    """
    cfg = _deep_merge(DEFAULTS, config)
    th = cfg["thresholds"]
    enabled = cfg["enabled"]
    cache = {
        "topology": edge_topology(surface),
        "areas": triangle_areas(surface),
    }

    results: Dict[str, Any] = {}
    for rid in RULES_ORDER:
        if not enabled.get(rid, True):
            continue
        results[rid] = REGISTRY[rid].fn(surface, th, cache)

    ok = all(f["ok"] for rid, f in results.items() if REGISTRY[rid].severity == "error")
    return {
        "ok": ok,
        "rules": results,
        "meta": {
            "n_points": int(np.asarray(surface.points).shape[0]),
            "n_triangles": int(np.asarray(surface.triangles).shape[0]),
            "thresholds": copy.deepcopy(th),
            "enabled": copy.deepcopy(enabled),
        },
    }
