"""
Quality Control module for generated bolt and nut meshes.
"""
from boltgen.qc.qc import analyze_stl, load_stl
from boltgen.qc.thresholds import QC_THRESHOLDS

__all__ = ["analyze_stl", "load_stl", "QC_THRESHOLDS"]
