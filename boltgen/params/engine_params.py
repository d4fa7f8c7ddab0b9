"""
Request params contract: only fields that pass through here reach the normalizer.
Maps the original web form's short field names onto wire names. In dev mode,
log if legacy names were present.
"""
from typing import Dict, Any
import logging

from boltgen.config import DEV

logger = logging.getLogger("bolt-generator")

# Original form field -> wire name
LEGACY_PARAM_ALIASES: Dict[str, str] = {
    "majord": "majorDiameter",
    "length": "totalLength",
    "pitch": "threadPitch",
    "headD1": "widthAcrossFlats",
    "headD2": "headHeight",
    "headD3": "socketSize",
    "headD4": "socketDepth",
    "tolerance": "nutTolerance",
}

# Never accepted from callers
RESERVED_KEYS = frozenset({"filename", "schemaVersion"})


def map_legacy_params(params: Dict[str, Any]) -> Dict[str, Any]:
    """Return a copy of params with legacy keys renamed. Wire names win on conflict."""
    out = {}
    for key, value in params.items():
        if key in LEGACY_PARAM_ALIASES:
            continue
        out[key] = value
    for legacy, wire in LEGACY_PARAM_ALIASES.items():
        if legacy in params and wire not in out:
            out[wire] = params[legacy]
    return out


def to_request_params(raw: Dict[str, Any]) -> Dict[str, Any]:
    """
    Normalize a raw request body to wire-named params: rename legacy keys and
    drop reserved ones. Single entry point for everything that reaches normalize().
    """
    if raw is None:
        return {}
    found_legacy = [k for k in LEGACY_PARAM_ALIASES if k in raw]
    if found_legacy:
        if DEV:
            logger.warning(
                "[Parameter Contract] Legacy fields mapped before normalization: %s",
                found_legacy,
            )
        raw = map_legacy_params(raw)
    return {k: v for k, v in raw.items() if k not in RESERVED_KEYS}
