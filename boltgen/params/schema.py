"""
Parameter schema and schema generations.
PARAM_SCHEMA describes every wire field (type, bounds, group) for parsing and UI.
SchemaVersion records pin everything that changed between generations: the
required set, unit scale, pitch band, defaults and generator argument order.
"""
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Any, Literal, Mapping, Optional, Tuple

from boltgen.core.errors import UnknownSchemaVersion
from boltgen.params.canonical_defaults import ENGINE_DEFAULTS

# Type definitions
ParamType = Literal["float", "bool", "str", "enum"]
ParamGroup = Literal["head", "body", "nut", "cosmetic"]

# Schema entry structure: type, attr, min, max, group, unit, description
ParamSchemaEntry = Dict[str, Any]


def _make_param(
    param_type: ParamType,
    attr: str,
    min_val: Optional[float],
    max_val: Optional[float],
    group: ParamGroup,
    description: str,
    unit: Optional[str] = "mm",
) -> ParamSchemaEntry:
    """Helper to create a schema entry."""
    return {
        "type": param_type,
        "attr": attr,
        "min": min_val,
        "max": max_val,
        "group": group,
        "unit": unit,
        "description": description,
    }


# -----------------------------------------------------------------------------
# PARAM_SCHEMA: wire name -> metadata. Order is the FastenerSpec field order.
# -----------------------------------------------------------------------------

PARAM_SCHEMA: Dict[str, ParamSchemaEntry] = {
    # Head
    "headType": _make_param(
        "enum", "head_type", None, None, "head", "Head profile (0 hex, 1 socket cap, 2 flat, 3 countersunk)", unit=None
    ),
    "widthAcrossFlats": _make_param(
        "float", "width_across_flats", 0.0, None, "head", "Head width across flats (s)"
    ),
    "headHeight": _make_param(
        "float", "head_height", 0.0, None, "head", "Head height (k)"
    ),
    "washerFaceDiameter": _make_param(
        "float", "washer_face_diameter", 0.0, None, "head", "Washer face diameter (dw)"
    ),
    "washerFaceThickness": _make_param(
        "float", "washer_face_thickness", 0.0, None, "head", "Washer face thickness (c)"
    ),
    "underheadFilletRadius": _make_param(
        "float", "underhead_fillet_radius", 0.0, None, "head", "Fillet radius under the head (r)"
    ),
    "socketSize": _make_param(
        "float", "socket_size", 0.0, None, "head", "Hex socket size (socket cap heads only)"
    ),
    "socketDepth": _make_param(
        "float", "socket_depth", 0.0, None, "head", "Hex socket depth (socket cap heads only)"
    ),
    # Body / thread
    "nominalDiameter": _make_param(
        "float", "nominal_diameter", 0.0, None, "body", "Nominal thread size (d)"
    ),
    "totalLength": _make_param(
        "float", "total_length", 0.0, None, "body", "Shank length under the head (L)"
    ),
    "gripLength": _make_param(
        "float", "grip_length", 0.0, None, "body", "Unthreaded shank length (ls)"
    ),
    "bodyTolerance": _make_param(
        "float", "body_tolerance", 0.0, None, "body", "Diameter reduction of the shank body"
    ),
    "majorDiameter": _make_param(
        "float", "major_diameter", 0.0, None, "body", "Thread major diameter (defaults to d)"
    ),
    "threadPitch": _make_param(
        "float", "thread_pitch", 0.0, None, "body", "Thread pitch (P)"
    ),
    "minorDiameter": _make_param(
        "float", "minor_diameter", 0.0, None, "body", "Thread minor diameter (0 = derived by generator)"
    ),
    "threadClearance": _make_param(
        "float", "thread_clearance", 0.0, None, "body", "Radial thread clearance"
    ),
    "toleranceClass": _make_param(
        "str", "tolerance_class", None, None, "body", "ISO tolerance class (e.g. 6g)", unit=None
    ),
    # Nut
    "generateNut": _make_param(
        "bool", "generate_nut", None, None, "nut", "Also generate a matching nut", unit=None
    ),
    "nutAcrossFlats": _make_param(
        "float", "nut_across_flats", 0.0, None, "nut", "Nut width across flats"
    ),
    "nutHeight": _make_param(
        "float", "nut_height", 0.0, None, "nut", "Nut height (m)"
    ),
    "nutWasherFace": _make_param(
        "float", "nut_washer_face", 0.0, None, "nut", "Nut washer face diameter"
    ),
    "nutTolerance": _make_param(
        "float", "nut_tolerance", 0.0, None, "nut", "Clearance between bolt and nut thread"
    ),
    # Cosmetic / manufacturability
    "edgeFilletRadius": _make_param(
        "float", "edge_fillet_radius", 0.0, None, "cosmetic", "Bolt edge fillet (<= 10% of d)"
    ),
    "nutEdgeFilletRadius": _make_param(
        "float", "nut_edge_fillet_radius", 0.0, None, "cosmetic", "Nut edge fillet (<= 10% of nut across flats)"
    ),
    "topFilletRadius": _make_param(
        "float", "top_fillet_radius", 0.0, None, "cosmetic", "Head top fillet"
    ),
    "verticalChamfer": _make_param(
        "float", "vertical_chamfer", 0.0, None, "cosmetic", "Chamfer on the vertical head edges"
    ),
    "transitionFilletRadius": _make_param(
        "float", "transition_fillet_radius", 0.0, None, "cosmetic", "Fillet at the grip/thread transition"
    ),
    "crestRadius": _make_param(
        "float", "crest_radius", 0.0, None, "cosmetic", "Thread crest rounding"
    ),
    "chamferAngle": _make_param(
        "float", "chamfer_angle", 0.0, 90.0, "cosmetic", "Head chamfer angle", unit="deg"
    ),
}

# Fields scaled by SchemaVersion.length_scale when serialized
LENGTH_FIELDS = frozenset(
    name for name, entry in PARAM_SCHEMA.items() if entry["unit"] == "mm"
)


# -----------------------------------------------------------------------------
# Generator argument orders (after the leading output identifier)
# -----------------------------------------------------------------------------

ARGV_LEGACY_FORM: Tuple[str, ...] = (
    "majorDiameter",
    "threadPitch",
    "totalLength",
    "widthAcrossFlats",
    "headHeight",
    "socketSize",
    "socketDepth",
    "headType",
    "nutHeight",
    "nutAcrossFlats",
    "nutTolerance",
    "generateNut",
)

ARGV_EXTENDED: Tuple[str, ...] = (
    "headType",
    "widthAcrossFlats",
    "headHeight",
    "washerFaceDiameter",
    "washerFaceThickness",
    "underheadFilletRadius",
    "socketSize",
    "socketDepth",
    "nominalDiameter",
    "totalLength",
    "gripLength",
    "bodyTolerance",
    "majorDiameter",
    "threadPitch",
    "minorDiameter",
    "generateNut",
    "nutAcrossFlats",
    "nutHeight",
    "nutWasherFace",
    "nutTolerance",
    "edgeFilletRadius",
)

ARGV_COSMETIC: Tuple[str, ...] = ARGV_EXTENDED + (
    "nutEdgeFilletRadius",
    "topFilletRadius",
    "verticalChamfer",
    "transitionFilletRadius",
    "crestRadius",
    "chamferAngle",
    "threadClearance",
    "toleranceClass",
)

LEGACY_REQUIRED: Tuple[str, ...] = (
    "majorDiameter",
    "totalLength",
    "threadPitch",
    "widthAcrossFlats",
    "headHeight",
    "headType",
)


@dataclass(frozen=True)
class SchemaVersion:
    """One rule generation. Selected once; never mutated."""
    version: int
    required: Tuple[str, ...]
    length_scale: float
    pitch_lower: float
    pitch_upper_ratio: float
    defaults: Mapping[str, Any]
    argv_fields: Tuple[str, ...]
    persist_derived_nut_flats: bool = False
    # Grip leaves this many pitches of thread run-out
    grip_runout_pitches: float = 2.0
    bolt_fillet_ratio: float = 0.1
    nut_fillet_ratio: float = 0.1
    nut_flats_ratio: float = 1.5

    @property
    def argc(self) -> int:
        """Positional argument count including the output identifier."""
        return len(self.argv_fields) + 1


SCHEMA_VERSIONS: Mapping[int, SchemaVersion] = MappingProxyType({
    # Desktop-era generator: geometry in metres
    1: SchemaVersion(
        version=1,
        required=LEGACY_REQUIRED,
        length_scale=1.0e-3,
        pitch_lower=0.2,
        pitch_upper_ratio=0.4,
        defaults=ENGINE_DEFAULTS[1],
        argv_fields=ARGV_LEGACY_FORM,
    ),
    2: SchemaVersion(
        version=2,
        required=LEGACY_REQUIRED,
        length_scale=1.0,
        pitch_lower=0.2,
        pitch_upper_ratio=0.4,
        defaults=ENGINE_DEFAULTS[2],
        argv_fields=ARGV_LEGACY_FORM,
    ),
    3: SchemaVersion(
        version=3,
        required=(),
        length_scale=1.0,
        pitch_lower=0.2,
        pitch_upper_ratio=0.4,
        defaults=ENGINE_DEFAULTS[3],
        argv_fields=ARGV_EXTENDED,
    ),
    4: SchemaVersion(
        version=4,
        required=(),
        length_scale=1.0,
        pitch_lower=1.0,
        pitch_upper_ratio=0.2,
        defaults=ENGINE_DEFAULTS[4],
        argv_fields=ARGV_COSMETIC,
        persist_derived_nut_flats=True,
    ),
})

CURRENT_SCHEMA: SchemaVersion = SCHEMA_VERSIONS[4]


def get_schema(version: Any) -> SchemaVersion:
    """Look up a generation by number (int or numeric string)."""
    try:
        key = int(version)
    except (TypeError, ValueError):
        raise UnknownSchemaVersion(version) from None
    if key not in SCHEMA_VERSIONS:
        raise UnknownSchemaVersion(version)
    return SCHEMA_VERSIONS[key]
