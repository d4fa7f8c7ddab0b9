"""
Default QC thresholds per part.
"""
QC_THRESHOLDS = {
    "bolt": {
        "min_triangles": 12,
        "axial_rel_tol": 0.05,  # Bounding box height vs L + k
        "radial_min_ratio": 0.9,  # Widest section vs d
        "radial_max_ratio": 1.05,  # Widest section vs head across corners / washer face
        "degenerate_max_pct": 1.0,  # Max % zero-area triangles
    },
    "nut": {
        "min_triangles": 12,
        "axial_rel_tol": 0.1,  # Bounding box height vs m (+ washer face)
        "radial_min_ratio": 0.95,  # Width vs across flats
        "radial_max_ratio": 1.05,  # Width vs across corners
        "degenerate_max_pct": 1.0,
    },
}
