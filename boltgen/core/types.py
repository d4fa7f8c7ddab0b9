from dataclasses import dataclass, asdict
from enum import IntEnum
from typing import Dict, Any


class HeadType(IntEnum):
    """Head profile IDs, numbered exactly as the generator expects them."""
    HEX = 0
    SOCKET_CAP = 1
    FLAT = 2
    COUNTERSUNK = 3


HEAD_TYPE_NAMES: Dict[str, HeadType] = {
    "hex": HeadType.HEX,
    "socket": HeadType.SOCKET_CAP,
    "socket_cap": HeadType.SOCKET_CAP,
    "socketcap": HeadType.SOCKET_CAP,
    "flat": HeadType.FLAT,
    "countersunk": HeadType.COUNTERSUNK,
}


@dataclass(frozen=True)
class FastenerSpec:
    """
    Fully populated, clamped bolt/nut parameter record.
    All lengths are millimetres; unit scaling happens at serialization.
    """
    # Head
    head_type: HeadType
    width_across_flats: float
    head_height: float
    washer_face_diameter: float
    washer_face_thickness: float
    underhead_fillet_radius: float
    socket_size: float
    socket_depth: float
    # Body / thread
    nominal_diameter: float
    total_length: float
    grip_length: float
    body_tolerance: float
    major_diameter: float
    thread_pitch: float
    minor_diameter: float
    thread_clearance: float
    tolerance_class: str
    # Nut
    generate_nut: bool
    nut_across_flats: float
    nut_height: float
    nut_washer_face: float
    nut_tolerance: float
    # Cosmetic / manufacturability
    edge_fillet_radius: float
    nut_edge_fillet_radius: float
    top_fillet_radius: float
    vertical_chamfer: float
    transition_fillet_radius: float
    crest_radius: float
    chamfer_angle: float

    filename: str
    schema_version: int

    def to_dict(self) -> Dict[str, Any]:
        """Wire-name view of the record; valid as a request payload."""
        from boltgen.params.schema import PARAM_SCHEMA  # deferred: boltgen.params imports this module

        values = asdict(self)
        out: Dict[str, Any] = {}
        for wire_name, entry in PARAM_SCHEMA.items():
            value = values[entry["attr"]]
            if entry["type"] == "enum":
                value = int(value)
            out[wire_name] = value
        out["filename"] = self.filename
        out["schemaVersion"] = self.schema_version
        return out
