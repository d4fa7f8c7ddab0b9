"""
Cross-field geometric clamping: caps values that would make the generator build a
degenerate or self-intersecting solid.
Every clamp only lowers a value toward its ceiling (the pitch floor is the one
exception) and is idempotent.
"""
import logging
from typing import Dict, Any

from boltgen.core.params import clamp_if_bounds
from boltgen.params.schema import SchemaVersion

logger = logging.getLogger("bolt-generator")


def _note(name: str, before: float, after: float) -> None:
    if after != before:
        logger.info("Clamp: %s %s -> %s", name, before, after)


def pitch_ceiling(params: dict, schema: SchemaVersion) -> float:
    return schema.pitch_upper_ratio * params["nominalDiameter"]


def effective_nut_across_flats(params: dict, schema: SchemaVersion) -> float:
    """Nut across flats, or nut_flats_ratio * d when the caller left it out."""
    s = params.get("nutAcrossFlats") or 0.0
    if s > 0:
        return s
    return schema.nut_flats_ratio * params["nominalDiameter"]


def clamp_params(params: Dict[str, Any], schema: SchemaVersion) -> Dict[str, Any]:
    """
    Clamp a fully defaulted wire-name dict to the safe ranges of `schema`.
    Returns a new dict (does not mutate input).

    Clamps:
    - gripLength <= totalLength - runout * threadPitch, floored at 0
    - threadPitch in [pitch_lower, pitch_upper_ratio * d]; the ceiling wins if they cross
    - edgeFilletRadius <= 0.1 * d
    - nutEdgeFilletRadius <= 0.1 * nut across flats (only when generating a nut)
    """
    result = params.copy()
    d = result["nominalDiameter"]

    # Pitch resolves first: the grip ceiling is measured in resolved pitches.
    requested_pitch = result["threadPitch"]
    ceiling = pitch_ceiling(result, schema)
    pitch = clamp_if_bounds(requested_pitch, min=schema.pitch_lower, max=ceiling)
    pitch = min(pitch, ceiling)

    grip_max = result["totalLength"] - schema.grip_runout_pitches * pitch
    grip = max(0.0, min(result["gripLength"], grip_max))
    _note("gripLength", result["gripLength"], grip)
    result["gripLength"] = grip

    _note("threadPitch", requested_pitch, pitch)
    result["threadPitch"] = pitch

    fillet = max(0.0, min(result["edgeFilletRadius"], schema.bolt_fillet_ratio * d))
    _note("edgeFilletRadius", result["edgeFilletRadius"], fillet)
    result["edgeFilletRadius"] = fillet

    if result["generateNut"]:
        s = effective_nut_across_flats(result, schema)
        nut_fillet = max(0.0, min(result["nutEdgeFilletRadius"], schema.nut_fillet_ratio * s))
        _note("nutEdgeFilletRadius", result["nutEdgeFilletRadius"], nut_fillet)
        result["nutEdgeFilletRadius"] = nut_fillet

    return result
