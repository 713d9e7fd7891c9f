# -*- coding: utf-8 -*-
# Loftus/main.py

"""
End-to-end driver:
  1) Load profiles from the files given on the command line, or synthesize a vessel
  2) Resample, orient and align the profiles
  3) Loft the surface (spline sampling + optional FFT smoothing)
  4) Surface checks (hard stop on errors)
  5) Write surface (.vtk/.stl) + summary (CSV/JSON/XLSX)
  6) Quick plots (profiles/surface)
"""

import os
import sys
import json
import logging
import numpy as np

from pathlib import Path
from geometry.api import load_and_prepare, loft, write_loft
from geometry.loft.config import LoftConfig
from geometry.profiles.prepare import prepare_profiles
from mesh.checks import run_checks
from mesh.stats import summarize
from mesh.export import write_summary_csv, write_summary_json, write_summary_excel
from post.plot_loft import plot_profiles, plot_surface


def synthetic_vessel(num_profiles=6, num_pts=48, length=10.0, radius=1.0, stenosis=0.4):
    """
    Circular cross-sections along a gently curved axis with a narrowing in the middle.
    """
    z = np.linspace(0.0, length, num_profiles)
    theta = np.linspace(0.0, 2.0 * np.pi, num_pts, endpoint=False)
    profiles = []
    for zk in z:
        r = radius * (1.0 - stenosis * np.exp(-((zk - 0.5 * length) / (0.2 * length)) ** 2))
        cx = 0.3 * np.sin(np.pi * zk / length)
        profiles.append(np.column_stack((cx + r * np.cos(theta), r * np.sin(theta), np.full(num_pts, zk))))
    return profiles


if __name__ == "__main__":
    # ------------------------------------------------------------------
    # 0) Logging
    # ------------------------------------------------------------------
    logging.basicConfig(level=logging.INFO, format="%(levelname)s:%(name)s:%(message)s")
    log = logging.getLogger("Loftus")

    out_dir = "out"
    os.makedirs(out_dir, exist_ok=True)

    # ------------------------------------------------------------------
    # 1-2) Profiles
    # ------------------------------------------------------------------
    config = LoftConfig(
        num_points_per_profile=40,
        num_out_pts_along_length=80,
        num_linear_pts_along_length=800,
        use_linear_sample_along_length=True,
        use_fft=True,
        num_modes=12,
    )

    paths = sys.argv[1:]
    if paths:
        profiles = load_and_prepare(paths, config.num_points_per_profile, align="distance")
    else:
        profiles = prepare_profiles(synthetic_vessel(), config.num_points_per_profile, align="distance")
    log.info("Prepared %d profiles with %d points each", len(profiles), config.num_points_per_profile)

    try:
        plot_profiles(profiles, show=False, save_path=os.path.join(out_dir, "profiles.png"))
    except Exception as e:
        log.warning("Skipping profile plot: %s", e)

    # ------------------------------------------------------------------
    # 3) Loft
    # ------------------------------------------------------------------
    surface = loft(profiles, config)

    # ------------------------------------------------------------------
    # 4) Checks (hard stop on errors)
    # ------------------------------------------------------------------
    findings = run_checks(surface)
    report_path = Path(out_dir) / "loft.checks.json"
    report_path.write_text(json.dumps(findings, indent=2))

    if not findings["ok"]:
        failures = [
            (rid, int(f.get("count", 0)), f.get("examples", [])[:3])
            for rid, f in findings["rules"].items()
            if f.get("severity") == "error" and not f.get("ok", True)
        ]
        lines = ["Surface validation failed. The following error checks did not pass:"]
        lines += ["  - {}: count={}, examples={}".format(rid, cnt, ex) for rid, cnt, ex in failures]
        lines.append("See full report: {}".format(report_path))
        print("\n".join(lines), file=sys.stderr)
        sys.exit(1)
    log.info("Surface checks passed. Report: %s", report_path)

    # ------------------------------------------------------------------
    # 5) Write surface + summary
    # ------------------------------------------------------------------
    vtk_path = write_loft(surface, os.path.join(out_dir, "loft.vtk"), config=config,
                          provenance={"profiles": paths or "synthetic_vessel"})
    stl_path = write_loft(surface, os.path.join(out_dir, "loft.stl"))

    summary = summarize(surface)
    csv_path = write_summary_csv(summary, os.path.join(out_dir, "summary.csv"))
    json_path = write_summary_json(summary, os.path.join(out_dir, "summary.json"))
    xlsx_path = write_summary_excel(summary, os.path.join(out_dir, "summary.xlsx"))
    log.info("Artifacts written: %s, %s, %s, %s, %s", vtk_path, stl_path, csv_path, json_path, xlsx_path)

    # ------------------------------------------------------------------
    # 6) Plots
    # ------------------------------------------------------------------
    try:
        plot_surface(surface, show=True, save_path=os.path.join(out_dir, "surface.png"), profiles=profiles)
    except Exception as e:
        log.warning("Skipping surface plot: %s", e)
