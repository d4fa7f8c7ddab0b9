"""
Standard thread sizes (UNC/UNF/UNEF and ISO metric) selectable by name.
A preset only fills fields the caller left absent; clamping still applies.
"""
import logging
import re
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

from boltgen.core.types import HeadType

logger = logging.getLogger("bolt-generator")

MM_PER_INCH = 25.4


def _inch(value: float) -> float:
    return value * MM_PER_INCH


def _unified(major_in: float, tpi: int, head_height_in: float = None, flats_in: float = None) -> Dict[str, float]:
    preset = {
        "majorDiameter": _inch(major_in),
        "threadPitch": _inch(1.0 / tpi),
    }
    if flats_in is not None:
        preset["widthAcrossFlats"] = _inch(flats_in)
        preset["headHeight"] = _inch(head_height_in)
    return preset


# Display name -> field values in millimetres. Hex head sizes are listed
# only where the standard head for the size is defined here.
THREAD_SIZES: Mapping[str, Mapping[str, float]] = MappingProxyType({
    name: MappingProxyType(values)
    for name, values in {
        '1/4"-20 UNC': _unified(0.250, 20, 11.0 / 64.0, 7.0 / 16.0),
        '1/4"-28 UNF': _unified(0.250, 28, 11.0 / 64.0, 7.0 / 16.0),
        '1/4"-32 UNEF': _unified(0.250, 32, 11.0 / 64.0, 7.0 / 16.0),
        '5/16"-18 UNC': _unified(0.3125, 18),
        '5/16"-24 UNF': _unified(0.3125, 24),
        '5/16"-32 UNEF': _unified(0.3125, 32),
        "M5x0.8": {"majorDiameter": 5.0, "threadPitch": 0.8},
    }.items()
})


def _key(name: str) -> str:
    return re.sub(r'[\s"]', "", name).lower()


_LOOKUP = {_key(name): values for name, values in THREAD_SIZES.items()}

# Head dimensions in a preset describe a hex head
_HEAD_FIELDS = ("widthAcrossFlats", "headHeight")


def lookup_thread_size(name: Any) -> Optional[Mapping[str, float]]:
    """
    Preset for a thread designation. Quotes, spaces and case are ignored,
    so '1/4"-20 UNC', '1/4-20unc' and 'm5x0.8' all resolve.
    """
    if not isinstance(name, str):
        return None
    return _LOOKUP.get(_key(name))


def apply_thread_size(parsed: Dict[str, Any], name: Any) -> Dict[str, Any]:
    """
    Fill absent pitch, diameter (when neither diameter field is given) and
    hex head fields from the named preset. Returns a new dict; unknown names
    leave the fields untouched.
    """
    if name is None:
        return parsed
    preset = lookup_thread_size(name)
    if preset is None:
        logger.warning("Unknown threadSize %r ignored", name)
        return parsed

    result = parsed.copy()
    hex_head = result.get("headType") in (None, HeadType.HEX)
    # A caller-supplied diameter in either field outranks the preset diameter
    sized = result.get("nominalDiameter") is not None or result.get("majorDiameter") is not None
    for field, value in preset.items():
        if field in _HEAD_FIELDS and not hex_head:
            continue
        if field == "majorDiameter" and sized:
            continue
        if result.get(field) is None:
            result[field] = value
    if not sized:
        result["nominalDiameter"] = preset["majorDiameter"]
    return result
