"""
Canonical defaults per schema generation: single source for default substitution.
Values describe a common M8 hex bolt rather than zero, since zero would trip
the grip/pitch/fillet bounds on its own.
Generations 1 and 2 mirror the original web form (bolt geometry mandatory,
nut fallbacks 5 / 10 / 0.1); generations 3 and 4 default everything.
"""

from types import MappingProxyType
from typing import Dict, Any, Mapping

# Optional geometry: absent means "feature off" for the generator.
_OPTIONAL_ZEROES: Dict[str, Any] = {
    "washerFaceDiameter": 0.0,
    "washerFaceThickness": 0.0,
    "underheadFilletRadius": 0.0,
    "socketSize": 0.0,
    "socketDepth": 0.0,
    "gripLength": 0.0,
    "bodyTolerance": 0.0,
    "minorDiameter": 0.0,  # generator derives d - 1.0825 * P
    "threadClearance": 0.0,
    "nutWasherFace": 0.0,
    "edgeFilletRadius": 0.0,
    "nutEdgeFilletRadius": 0.0,
    "topFilletRadius": 0.0,
    "verticalChamfer": 0.0,
    "transitionFilletRadius": 0.0,
    "crestRadius": 0.0,
}

_COMMON: Dict[str, Any] = {
    **_OPTIONAL_ZEROES,
    "generateNut": False,
    "toleranceClass": "6g",
    "chamferAngle": 30.0,
}

# Gen 1/2 (web form): the bolt triple and head are mandatory, so no
# defaults exist for them here.
DEFAULTS_LEGACY_FORM: Dict[str, Any] = {
    **_COMMON,
    "nutHeight": 5.0,
    "nutAcrossFlats": 10.0,
    "nutTolerance": 0.1,
}

# Gen 3: relaxed required set, generic generator argument list.
DEFAULTS_EXTENDED: Dict[str, Any] = {
    **_COMMON,
    "headType": 0,
    "nominalDiameter": 8.0,
    "totalLength": 10.0,
    "threadPitch": 1.75,
    "widthAcrossFlats": 13.0,
    "headHeight": 5.3,
    "nutHeight": 6.5,
    "nutAcrossFlats": 0.0,  # derived from d for the fillet bound
    "nutTolerance": 0.15,
}

# Gen 4: as gen 3 with the M8 coarse pitch.
DEFAULTS_CURRENT: Dict[str, Any] = {
    **DEFAULTS_EXTENDED,
    "threadPitch": 1.25,
}

ENGINE_DEFAULTS: Dict[int, Mapping[str, Any]] = {
    1: MappingProxyType(DEFAULTS_LEGACY_FORM),
    2: MappingProxyType(DEFAULTS_LEGACY_FORM),
    3: MappingProxyType(DEFAULTS_EXTENDED),
    4: MappingProxyType(DEFAULTS_CURRENT),
}
