# -*- coding: utf-8 -*-
# Loftus/mesh/export.py

"""
Project: Loftus
Date: 10/18/2026

Purpose:
--------
Export surface summaries and check reports (arbitrary nested dictionaries/lists) into
human-readable formats: CSV, JSON, and Excel. Nested structures are flattened into
"dot.path.key" rows; numpy scalars and arrays are JSON-encoded.

Main Tasks:
-----------
    1. Flatten nested dictionaries/lists into ("dot.path.key", value) rows.
    2. Export as:
        - CSV: 2-column "key,value" table.
        - JSON: structured, indented JSON.
        - Excel: single-sheet file via pandas.
"""

import csv
import json
import os
from typing import Any, Dict, List, Tuple
import numpy as np
import pandas as pd

__all__ = ["flatten_summary", "write_summary_csv", "write_summary_json", "write_summary_excel"]


def _is_scalar(x: Any) -> bool:
    return isinstance(x, (str, bool, int, float, np.generic))


def _default(o):
    if isinstance(o, np.generic):
        return o.item()
    if isinstance(o, np.ndarray):
        return o.tolist()
    return str(o)


def _to_json_str(x: Any) -> str:
    return json.dumps(x, default=_default, ensure_ascii=False)


def _flatten(prefix: str, obj: Any, out: List[Tuple[str, Any]]) -> None:
    """
    Recursively flatten into (key_path, value) rows.

    - Scalars are stored as-is (numpy scalars unwrapped).
    - dicts: recurse into sorted keys, joined with '.'.
    - lists/tuples/arrays/other objects: stored as a JSON string.
    """
    if _is_scalar(obj):
        out.append((prefix, obj.item() if isinstance(obj, np.generic) else obj))
        return
    if isinstance(obj, dict):
        for k in sorted(obj.keys(), key=str):
            key = str(k)
            _flatten(key if prefix == "" else "{}.{}".format(prefix, key), obj[k], out)
        return
    out.append((prefix, _to_json_str(obj)))


def flatten_summary(summary: Dict[str, Any]) -> List[Tuple[str, Any]]:
    """Return the flattened ("dot.path.key", value) rows of a nested summary."""
    rows: List[Tuple[str, Any]] = []
    _flatten("", summary, rows)
    return rows


def _ensure_folder(path: str) -> None:
    folder = os.path.dirname(os.path.abspath(path))
    if folder and not os.path.exists(folder):
        os.makedirs(folder, exist_ok=True)


def write_summary_csv(summary: Dict[str, Any], path: str) -> str:
    """Write a summary to a 2-column CSV file ("key,value"); returns the path."""
    rows = flatten_summary(summary)
    _ensure_folder(path)
    with open(path, "w", newline="", encoding="utf-8") as f:
        w = csv.writer(f)
        w.writerow(["key", "value"])
        for k, v in rows:
            w.writerow([k, v])
    return path


def write_summary_json(summary: Dict[str, Any], path: str, indent: int = 2) -> str:
    """Write a summary to an indented JSON file; returns the path."""
    _ensure_folder(path)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(summary, f, indent=indent, ensure_ascii=False, default=_default)
    return path


def write_summary_excel(summary: Dict[str, Any], path: str, sheet_name: str = "summary") -> str:
    """
    Write a summary to a single-sheet Excel file.

    The engine is selected by pandas (openpyxl for .xlsx).
    """
    df = pd.DataFrame(flatten_summary(summary), columns=["key", "value"])
    _ensure_folder(path)
    df.to_excel(path, index=False, sheet_name=sheet_name)
    return path
