"""
Parameter resolution: the normalize pipeline.
raw fields -> parse (failures become absent) -> threadSize preset ->
required/socket checks -> defaults -> derived values -> clamp_params -> FastenerSpec.
Pure: no I/O, no shared state; the output identifier is passed in or minted here.
"""
import time
import uuid
from dataclasses import dataclass
from typing import Dict, Any, Optional, Union

from boltgen.core.errors import (
    InvalidFeatureSelection,
    MissingRequiredField,
    ValidationError,
)
from boltgen.core.params import (
    parse_bool,
    parse_float,
    parse_head_type,
    parse_tolerance_class,
)
from boltgen.core.types import FastenerSpec, HeadType
from boltgen.params.clamp import clamp_params, effective_nut_across_flats
from boltgen.params.engine_params import to_request_params
from boltgen.params.schema import CURRENT_SCHEMA, PARAM_SCHEMA, SchemaVersion
from boltgen.params.thread_sizes import apply_thread_size


@dataclass(frozen=True)
class Accepted:
    spec: FastenerSpec
    ok = True

    def unwrap(self) -> FastenerSpec:
        return self.spec


@dataclass(frozen=True)
class Rejected:
    error: ValidationError
    ok = False

    def unwrap(self) -> FastenerSpec:
        raise self.error


NormalizeResult = Union[Accepted, Rejected]


def new_filename() -> str:
    """Output identifier: submission time in ms plus a short random suffix."""
    return f"bolt_{int(time.time() * 1000)}_{uuid.uuid4().hex[:6]}"


def _parse_value(entry: Dict[str, Any], value: Any) -> Any:
    kind = entry["type"]
    if kind == "float":
        return parse_float(value, min=entry["min"], max=entry["max"])
    if kind == "bool":
        return parse_bool(value)
    if kind == "enum":
        return parse_head_type(value)
    return parse_tolerance_class(value)


def parse_fields(params: Dict[str, Any]) -> Dict[str, Any]:
    """Parse every schema field; anything unusable comes back as None."""
    return {
        name: _parse_value(entry, params.get(name))
        for name, entry in PARAM_SCHEMA.items()
    }


def _missing_required(parsed: Dict[str, Any], schema: SchemaVersion) -> Dict[str, str]:
    return {
        name: "required"
        for name in schema.required
        if parsed.get(name) is None
    }


def _missing_socket_sizing(parsed: Dict[str, Any]) -> Dict[str, str]:
    if parsed.get("headType") != HeadType.SOCKET_CAP:
        return {}
    return {
        name: "required > 0 for a socket head"
        for name in ("socketSize", "socketDepth")
        if parsed.get(name) is None
    }


def _apply_defaults(parsed: Dict[str, Any], schema: SchemaVersion) -> Dict[str, Any]:
    values = {}
    for name, value in parsed.items():
        if value is None:
            value = schema.defaults.get(name)
        values[name] = value

    # Older generations are keyed on major diameter; nominal follows it.
    if parsed["nominalDiameter"] is None and parsed["majorDiameter"] is not None:
        values["nominalDiameter"] = parsed["majorDiameter"]
    if values["majorDiameter"] is None:
        values["majorDiameter"] = values["nominalDiameter"]

    values["headType"] = HeadType(values["headType"])
    return values


def _derive(values: Dict[str, Any], schema: SchemaVersion) -> Dict[str, Any]:
    result = values.copy()
    if result["generateNut"] and schema.persist_derived_nut_flats and not result["nutAcrossFlats"]:
        result["nutAcrossFlats"] = effective_nut_across_flats(result, schema)
    return result


def _to_spec(values: Dict[str, Any], schema: SchemaVersion, filename: str) -> FastenerSpec:
    kwargs = {entry["attr"]: values[name] for name, entry in PARAM_SCHEMA.items()}
    return FastenerSpec(filename=filename, schema_version=schema.version, **kwargs)


def normalize(
    raw: Optional[Dict[str, Any]],
    schema: SchemaVersion = CURRENT_SCHEMA,
    filename: Optional[str] = None,
) -> NormalizeResult:
    """
    Normalize an untrusted request into a FastenerSpec.

    Args:
        raw: Request mapping (wire names or legacy form names; may be partial).
            An optional threadSize names a standard preset for absent fields.
        schema: Rule generation to apply
        filename: Output identifier; minted with new_filename() when omitted

    Returns:
        Accepted(spec), or Rejected(error) naming every offending field.
    """
    params = to_request_params(raw or {})
    parsed = parse_fields(params)
    parsed = apply_thread_size(parsed, params.get("threadSize"))

    missing = _missing_required(parsed, schema)
    socket = _missing_socket_sizing(parsed)
    if missing:
        return Rejected(MissingRequiredField({**missing, **socket}))
    if socket:
        return Rejected(InvalidFeatureSelection(socket))

    values = _apply_defaults(parsed, schema)
    values = _derive(values, schema)
    values = clamp_params(values, schema)

    return Accepted(_to_spec(values, schema, filename or new_filename()))


def normalize_or_raise(
    raw: Optional[Dict[str, Any]],
    schema: SchemaVersion = CURRENT_SCHEMA,
    filename: Optional[str] = None,
) -> FastenerSpec:
    """Like normalize(), but raises the ValidationError on rejection."""
    return normalize(raw, schema, filename).unwrap()
