"""
Quality Control analysis for generated STL artifacts.
Detects common generator failure modes: empty meshes, wrong scale, missing
head or shank, collapsed triangles.
"""
import math
from pathlib import Path
from typing import Dict, Optional

import numpy as np
import trimesh

from boltgen.core.types import FastenerSpec, HeadType
from boltgen.params.schema import get_schema
from boltgen.qc.thresholds import QC_THRESHOLDS

# Hex across corners / across flats
_HEX_CORNER_RATIO = 1.0 / math.cos(math.radians(30.0))


def load_stl(path: Path) -> trimesh.Trimesh:
    """Load a binary or ASCII STL as-is (no vertex merging or face cleanup)."""
    try:
        mesh = trimesh.load(str(path), file_type="stl", force="mesh", process=False)
    except Exception as e:
        raise ValueError(f"{path}: unreadable STL") from e
    return mesh


def _degenerate_pct(mesh: trimesh.Trimesh) -> float:
    collapsed = len(mesh.faces) - int(np.count_nonzero(mesh.nondegenerate_faces()))
    return 100.0 * collapsed / len(mesh.faces)


def _expected(spec: FastenerSpec, part: str) -> Dict[str, float]:
    """Expected axial length and radial bounds in millimetres."""
    if part == "nut":
        s = spec.nut_across_flats or 1.5 * spec.nominal_diameter
        axial = spec.nut_height + (0.5 if spec.nut_washer_face > 0 else 0.0)
        return {
            "axial": axial,
            "radial_min": s,
            "radial_max": max(s * _HEX_CORNER_RATIO, spec.nut_washer_face),
        }

    head = spec.width_across_flats
    if spec.head_type == HeadType.HEX:
        head = head * _HEX_CORNER_RATIO
    return {
        "axial": spec.total_length + spec.head_height,
        "radial_min": spec.nominal_diameter,
        "radial_max": max(head, spec.washer_face_diameter, spec.nominal_diameter),
    }


def analyze_stl(path: Path, spec: FastenerSpec, part: str = "bolt", thresholds: Optional[Dict] = None) -> Dict:
    """
    Analyze a generated STL against the spec it was built from.

    Args:
        path: STL file
        spec: Normalized spec passed to the generator
        part: "bolt" or "nut"
        thresholds: Override for QC_THRESHOLDS[part]

    Returns:
        Dict with metrics and pass/fail flags
    """
    th = thresholds or QC_THRESHOLDS[part]
    scale = get_schema(spec.schema_version).length_scale
    failures = []
    warnings = []
    try:
        mesh = load_stl(path)
    except ValueError as e:
        failures.append(str(e))
        return {"status": "fail", "metrics": {}, "failures": failures, "warnings": warnings}

    count = len(mesh.faces)
    metrics: Dict[str, float] = {"triangle_count": count}

    if count < th["min_triangles"]:
        failures.append(f"Too few triangles: {count} < {th['min_triangles']}")
        return {"status": "fail", "metrics": metrics, "failures": failures, "warnings": warnings}

    extent = mesh.extents / scale
    axial = float(extent[2])
    radial = float(max(extent[0], extent[1]))
    metrics.update({
        "axial_extent_mm": axial,
        "radial_extent_mm": radial,
        "degenerate_pct": _degenerate_pct(mesh),
    })

    expected = _expected(spec, part)
    metrics["expected_axial_mm"] = expected["axial"]

    if abs(axial - expected["axial"]) > th["axial_rel_tol"] * expected["axial"]:
        failures.append(
            f"Axial extent {axial:.3f} mm differs from expected {expected['axial']:.3f} mm"
        )
    if radial < th["radial_min_ratio"] * expected["radial_min"]:
        failures.append(
            f"Radial extent {radial:.3f} mm below {th['radial_min_ratio']} x {expected['radial_min']:.3f} mm"
        )
    if radial > th["radial_max_ratio"] * expected["radial_max"]:
        failures.append(
            f"Radial extent {radial:.3f} mm above {th['radial_max_ratio']} x {expected['radial_max']:.3f} mm"
        )
    if metrics["degenerate_pct"] > th["degenerate_max_pct"]:
        warnings.append(f"Degenerate triangles: {metrics['degenerate_pct']:.2f}%")

    return {
        "status": "fail" if failures else "pass",
        "metrics": metrics,
        "failures": failures,
        "warnings": warnings,
    }
