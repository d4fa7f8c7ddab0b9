"""
Parameter normalization and safe-range clamping.
Default values: single source is canonical_defaults.ENGINE_DEFAULTS; use normalize({}) for resolved defaults.
"""
from boltgen.params.schema import PARAM_SCHEMA, CURRENT_SCHEMA, SCHEMA_VERSIONS, get_schema
from boltgen.params.resolve import Accepted, Rejected, normalize, normalize_or_raise, new_filename
from boltgen.params.clamp import clamp_params
from boltgen.params.thread_sizes import THREAD_SIZES, lookup_thread_size

__all__ = [
    "PARAM_SCHEMA",
    "CURRENT_SCHEMA",
    "SCHEMA_VERSIONS",
    "get_schema",
    "Accepted",
    "Rejected",
    "normalize",
    "normalize_or_raise",
    "new_filename",
    "clamp_params",
    "THREAD_SIZES",
    "lookup_thread_size",
]
