"""
Normalizer tests: defaults, parsing, required/socket rejections, clamping examples,
and idempotence across schema generations.
Run from project root: python -m pytest tests/test_normalize.py -v
"""
import sys
import os
import re
import dataclasses

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

import pytest

from boltgen.core.errors import InvalidFeatureSelection, MissingRequiredField, ValidationError
from boltgen.core.types import HeadType
from boltgen.params.resolve import Accepted, Rejected, new_filename, normalize, normalize_or_raise
from boltgen.params.schema import SCHEMA_VERSIONS, get_schema

V1, V2, V3, V4 = (SCHEMA_VERSIONS[v] for v in (1, 2, 3, 4))

# Minimal request accepted by every generation
LEGACY_FORM = {
    "majorDiameter": 8,
    "totalLength": 40,
    "threadPitch": 1.25,
    "widthAcrossFlats": 13,
    "headHeight": 5.3,
    "headType": 0,
}


def _spec(raw, schema=V4):
    result = normalize(raw, schema, filename="bolt_test")
    assert isinstance(result, Accepted), getattr(result, "error", None)
    return result.spec


class TestEndToEndExamples:
    def test_grip_clamped_to_thread_runout(self):
        """Grip 100 on a 40 mm M8x1.25 leaves two pitches of thread: 37.5."""
        spec = _spec({"nominalDiameter": 8, "totalLength": 40, "threadPitch": 1.25, "gripLength": 100})
        assert spec.thread_pitch == 1.25
        assert spec.grip_length == pytest.approx(37.5)

    def test_pitch_clamped_to_diameter_ratio(self):
        """Pitch 3.0 on d=10 with ratio 0.2 is clamped to 2.0."""
        spec = _spec({"nominalDiameter": 10, "threadPitch": 3.0})
        assert spec.thread_pitch == pytest.approx(2.0)

    def test_socket_head_without_sizing_rejected(self):
        result = normalize({"headType": "socket"})
        assert isinstance(result, Rejected)
        assert isinstance(result.error, InvalidFeatureSelection)
        assert set(result.error.fields) == {"socketSize", "socketDepth"}

    def test_bolt_fillet_clamped_to_tenth_of_diameter(self):
        spec = _spec({"nominalDiameter": 6, "edgeFilletRadius": 5})
        assert spec.edge_fillet_radius == pytest.approx(0.6)


class TestDefaults:
    def test_empty_request_current_generation(self):
        spec = _spec({})
        assert spec.nominal_diameter == 8.0
        assert spec.major_diameter == 8.0
        assert spec.total_length == 10.0
        assert spec.thread_pitch == 1.25
        assert spec.grip_length == 0.0
        assert spec.head_type == HeadType.HEX
        assert spec.nut_tolerance == 0.15
        assert spec.chamfer_angle == 30.0
        assert spec.tolerance_class == "6g"
        assert spec.generate_nut is False
        assert spec.schema_version == 4

    def test_zero_is_treated_as_absent(self):
        spec = _spec({"nominalDiameter": 0, "totalLength": 0, "nutTolerance": 0})
        assert spec.nominal_diameter == 8.0
        assert spec.total_length == 10.0
        assert spec.nut_tolerance == 0.15

    def test_major_diameter_follows_nominal(self):
        spec = _spec({"nominalDiameter": 12})
        assert spec.major_diameter == 12.0

    def test_explicit_major_diameter_kept(self):
        spec = _spec({"nominalDiameter": 12, "majorDiameter": 11.8})
        assert spec.nominal_diameter == 12.0
        assert spec.major_diameter == 11.8

    def test_nominal_falls_back_to_major(self):
        spec = _spec({"majorDiameter": 10})
        assert spec.nominal_diameter == 10.0

    def test_generation_3_default_pitch(self):
        spec = _spec({}, V3)
        assert spec.thread_pitch == 1.75


class TestParsing:
    def test_parse_failures_become_defaults(self):
        spec = _spec({"nominalDiameter": "abc", "totalLength": "-5", "threadPitch": "nan"})
        assert spec.nominal_diameter == 8.0
        assert spec.total_length == 10.0
        assert spec.thread_pitch == 1.25

    def test_numeric_strings_accepted(self):
        spec = _spec({"nominalDiameter": "10", "threadPitch": " 1.5 "})
        assert spec.nominal_diameter == 10.0
        assert spec.thread_pitch == 1.5

    def test_infinite_values_rejected(self):
        spec = _spec({"totalLength": float("inf")})
        assert spec.total_length == 10.0

    def test_oversized_integers_become_defaults(self):
        """Integers too large for a float are treated as absent."""
        spec = _spec({"totalLength": 10 ** 400, "nominalDiameter": -(10 ** 400)})
        assert spec.total_length == 10.0
        assert spec.nominal_diameter == 8.0

    @pytest.mark.parametrize("value,expected", [
        (0, HeadType.HEX),
        ("1", HeadType.SOCKET_CAP),
        ("flat", HeadType.FLAT),
        ("COUNTERSUNK", HeadType.COUNTERSUNK),
        (7, HeadType.HEX),
        (1.5, HeadType.HEX),
        ("round", HeadType.HEX),
    ])
    def test_head_type_parsing(self, value, expected):
        raw = {"headType": value, "socketSize": 5, "socketDepth": 4}
        assert _spec(raw).head_type == expected

    @pytest.mark.parametrize("value,expected", [
        (True, True), ("true", True), ("1", True), (1, True), ("on", True),
        (False, False), ("false", False), ("no", False), (0, False), ("maybe", False),
    ])
    def test_generate_nut_parsing(self, value, expected):
        assert _spec({"generateNut": value}).generate_nut is expected

    def test_tolerance_class(self):
        assert _spec({"toleranceClass": "6H"}).tolerance_class == "6H"
        assert _spec({"toleranceClass": "4g6g"}).tolerance_class == "4g6g"
        assert _spec({"toleranceClass": "bogus"}).tolerance_class == "6g"
        assert _spec({"toleranceClass": 6}).tolerance_class == "6g"

    def test_chamfer_angle_out_of_range(self):
        assert _spec({"chamferAngle": 120}).chamfer_angle == 30.0
        assert _spec({"chamferAngle": 45}).chamfer_angle == 45.0

    def test_caller_filename_ignored(self):
        result = normalize({"filename": "../../etc/passwd"}, V4, filename="bolt_1")
        assert result.spec.filename == "bolt_1"

    def test_filename_generated(self):
        assert re.match(r"^bolt_\d+_[0-9a-f]{6}$", new_filename())
        spec = normalize({}).spec
        assert spec.filename.startswith("bolt_")

    def test_none_request(self):
        assert normalize(None).ok


class TestLegacyAliases:
    def test_form_names_mapped(self):
        raw = {"majord": 10, "length": 30, "pitch": 1.5, "headD1": 16, "headD2": 6.4,
               "headD3": 8, "headD4": 5, "headType": "1", "tolerance": 0.2}
        spec = _spec(raw, V2)
        assert spec.major_diameter == 10.0
        assert spec.nominal_diameter == 10.0
        assert spec.total_length == 30.0
        assert spec.thread_pitch == 1.5
        assert spec.width_across_flats == 16.0
        assert spec.head_height == 6.4
        assert spec.socket_size == 8.0
        assert spec.socket_depth == 5.0
        assert spec.nut_tolerance == 0.2

    def test_wire_name_wins_over_alias(self):
        spec = _spec({"pitch": 3.0, "threadPitch": 1.5})
        assert spec.thread_pitch == 1.5


class TestRequiredFields:
    @pytest.mark.parametrize("schema", [V1, V2])
    def test_empty_request_rejected_naming_every_field(self, schema):
        result = normalize({}, schema)
        assert not result.ok
        assert isinstance(result.error, MissingRequiredField)
        assert set(result.error.fields) == {
            "majorDiameter", "totalLength", "threadPitch", "widthAcrossFlats", "headHeight", "headType",
        }

    def test_head_type_zero_counts_as_present(self):
        assert normalize(LEGACY_FORM, V2).ok

    def test_missing_head_type_only(self):
        raw = dict(LEGACY_FORM)
        del raw["headType"]
        result = normalize(raw, V1)
        assert set(result.error.fields) == {"headType"}

    def test_unparseable_required_field_is_missing(self):
        raw = dict(LEGACY_FORM, threadPitch="coarse")
        result = normalize(raw, V2)
        assert set(result.error.fields) == {"threadPitch"}

    def test_missing_fields_and_socket_reported_together(self):
        result = normalize({"headType": 1}, V2)
        assert isinstance(result.error, MissingRequiredField)
        assert "socketSize" in result.error.fields
        assert "majorDiameter" in result.error.fields

    @pytest.mark.parametrize("schema", [V3, V4])
    def test_relaxed_generations_need_nothing(self, schema):
        assert normalize({}, schema).ok

    def test_legacy_nut_defaults(self):
        spec = _spec(LEGACY_FORM, V2)
        assert spec.nut_height == 5.0
        assert spec.nut_across_flats == 10.0
        assert spec.nut_tolerance == 0.1


class TestSocketHead:
    @pytest.mark.parametrize("version", [1, 2, 3, 4])
    def test_zero_socket_size_always_rejected(self, version):
        raw = dict(LEGACY_FORM, headType=1, socketSize=0, socketDepth=3)
        result = normalize(raw, get_schema(version))
        assert not result.ok
        assert isinstance(result.error, ValidationError)
        assert "socketSize" in result.error.fields
        assert "socketDepth" not in result.error.fields

    def test_negative_socket_depth_rejected(self):
        result = normalize({"headType": 1, "socketSize": 6, "socketDepth": -1})
        assert set(result.error.fields) == {"socketDepth"}

    def test_sized_socket_accepted(self):
        spec = _spec({"headType": 1, "socketSize": 6, "socketDepth": 4})
        assert spec.head_type == HeadType.SOCKET_CAP
        assert spec.socket_size == 6.0
        assert spec.socket_depth == 4.0

    def test_socket_fields_ignored_for_hex(self):
        assert normalize({"headType": 0, "socketSize": 0}).ok

    def test_unwrap_raises(self):
        result = normalize({"headType": 1})
        with pytest.raises(InvalidFeatureSelection):
            result.unwrap()
        with pytest.raises(InvalidFeatureSelection) as exc:
            normalize_or_raise({"headType": 1})
        assert exc.value.to_dict()["fields"].keys() == {"socketSize", "socketDepth"}


class TestNutFields:
    def test_nut_fillet_uses_derived_across_flats(self):
        spec = _spec({"generateNut": True, "nutEdgeFilletRadius": 5})
        assert spec.nut_edge_fillet_radius == pytest.approx(1.2)

    def test_nut_fillet_uses_explicit_across_flats(self):
        spec = _spec({"generateNut": True, "nutAcrossFlats": 20, "nutEdgeFilletRadius": 5})
        assert spec.nut_edge_fillet_radius == pytest.approx(2.0)
        assert spec.nut_across_flats == 20.0

    def test_derived_across_flats_persisted_in_current_generation(self):
        spec = _spec({"generateNut": True})
        assert spec.nut_across_flats == pytest.approx(12.0)

    def test_derived_across_flats_not_persisted_in_generation_3(self):
        spec = _spec({"generateNut": True, "nutEdgeFilletRadius": 5}, V3)
        assert spec.nut_across_flats == 0.0
        assert spec.nut_edge_fillet_radius == pytest.approx(1.2)

    def test_nut_fields_untouched_without_nut(self):
        spec = _spec({"generateNut": False, "nutEdgeFilletRadius": 5})
        assert spec.nut_edge_fillet_radius == 5.0
        assert spec.nut_across_flats == 0.0


class TestImmutabilityAndIdempotence:
    def test_spec_is_frozen(self):
        spec = _spec({})
        with pytest.raises(dataclasses.FrozenInstanceError):
            spec.grip_length = 3.0

    @pytest.mark.parametrize("schema,raw", [
        (V4, {"nominalDiameter": 8, "totalLength": 40, "threadPitch": 1.25, "gripLength": 100}),
        (V4, {"nominalDiameter": 6, "edgeFilletRadius": 5, "generateNut": "true", "nutEdgeFilletRadius": 9}),
        (V4, {"nominalDiameter": 3, "threadPitch": 0.5, "totalLength": 1}),
        (V4, {"headType": 1, "socketSize": 6, "socketDepth": 4, "toleranceClass": "6H"}),
        (V3, {"nominalDiameter": 10, "threadPitch": 5, "gripLength": 30, "totalLength": 25, "generateNut": 1}),
        (V2, dict(LEGACY_FORM, threadPitch=9)),
        (V1, dict(LEGACY_FORM, gripLength=50, generateNut=True)),
    ])
    def test_renormalizing_is_identity(self, schema, raw):
        first = _spec(raw, schema)
        second = normalize(first.to_dict(), schema, filename=first.filename).unwrap()
        assert second == first
