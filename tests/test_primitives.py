"""Tests for scalar and packed-array decoders and the default table."""

import hypothesis
import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from dragonbones.core import (
    Action,
    ArityViolation,
    BonePose,
    Color,
    Point,
    ShapeMismatch,
    Transform,
    VertexWeight,
)
from dragonbones.io import defaults
from dragonbones.io.primitives import (
    decode_action,
    decode_bone_poses,
    decode_color,
    decode_int,
    decode_number,
    decode_points,
    decode_slot_poses,
    decode_transform,
    decode_triangles,
    decode_weights,
    decode_z_order_offsets,
    join,
    unpack,
)

# Use hypothesis profile for CI
hypothesis.settings.register_profile("ci", max_examples=10, deadline=None)

PACKED_DECODERS = [
    (decode_points, 2),
    (decode_weights, 3),
    (decode_slot_poses, 6),
    (decode_bone_poses, 7),
    (decode_triangles, 3),
    (decode_z_order_offsets, 2),
]


def test_join():
    assert join("", "armature") == "armature"
    assert join("armature", 0) == "armature[0]"
    assert join("armature[0]", "bone") == "armature[0].bone"


def test_empty_transform_is_identity():
    """Test an empty transform node has unit scale and zero offset."""
    transform = decode_transform({}, "transform")
    assert (transform.x, transform.y) == (0.0, 0.0)
    assert (transform.sk_x, transform.sk_y) == (0.0, 0.0)
    assert (transform.sc_x, transform.sc_y) == (1.0, 1.0)


def test_partial_transform():
    transform = decode_transform({"scX": 2, "skY": -45}, "transform")
    assert transform == Transform(sk_y=-45.0, sc_x=2.0)


def test_empty_color():
    assert decode_color({}, "color") == Color()
    assert Color().a_m == 100.0
    assert Color().a_o == 0.0


def test_color_channels():
    color = decode_color({"rM": 10, "gM": 20, "bM": 30, "aO": -1, "gO": 255}, "color")
    assert color == Color(r_m=10.0, g_m=20.0, b_m=30.0, a_o=-1.0, g_o=255.0)


@pytest.mark.parametrize("node", [True, "1", None, [1]])
def test_decode_number_rejects_non_numbers(node):
    with pytest.raises(ShapeMismatch):
        decode_number(node, "n")


def test_decode_int():
    assert decode_int(3, "i") == 3
    assert decode_int(3.0, "i") == 3
    with pytest.raises(ShapeMismatch):
        decode_int(3.5, "i")
    with pytest.raises(ShapeMismatch):
        decode_int(False, "i")


def test_unpack_groups():
    assert unpack([1, 2, 3, 4, 5, 6], "a", 3) == [(1.0, 2.0, 3.0), (4.0, 5.0, 6.0)]
    assert unpack([], "a", 3) == []


def test_unpack_reports_bad_element_path():
    with pytest.raises(ShapeMismatch) as exc_info:
        unpack([1, 2, "x", 4], "vertices", 2)
    assert exc_info.value.path == "vertices[2]"


def test_decode_weights():
    assert decode_weights([2, 0, 0.25, 2, 1, 0.75], "w") == (
        VertexWeight(2, 0, 0.25),
        VertexWeight(2, 1, 0.75),
    )


def test_decode_bone_poses():
    poses = decode_bone_poses([4, 1, 0, 0, 1, -3, 9], "p")
    assert poses == (BonePose(4, 1.0, 0.0, 0.0, 1.0, -3.0, 9.0),)


def test_packed_array_must_be_array():
    with pytest.raises(ShapeMismatch):
        decode_points({"x": 1}, "vertices")


@given(
    st.sampled_from(PACKED_DECODERS),
    st.integers(min_value=0, max_value=12),
    st.integers(min_value=1, max_value=6),
)
@settings(deadline=None)
def test_arity_violation(decoder_and_arity, groups, extra):
    """Test a packed array with a trailing partial group always fails."""
    decoder, arity = decoder_and_arity
    hypothesis.assume(extra % arity)
    values = [0] * (groups * arity + extra)
    with pytest.raises(ArityViolation) as exc_info:
        decoder(values, "packed")
    assert exc_info.value.arity == arity
    assert exc_info.value.length == len(values)


@given(
    st.sampled_from(PACKED_DECODERS),
    st.integers(min_value=0, max_value=12),
)
@settings(deadline=None)
def test_whole_groups_decode_to_one_record_each(decoder_and_arity, groups):
    decoder, arity = decoder_and_arity
    assert len(decoder([1] * (groups * arity), "packed")) == groups


@given(st.lists(st.floats(allow_nan=False, allow_infinity=False, width=32), max_size=20))
@settings(deadline=None)
def test_points_preserve_order(values):
    hypothesis.assume(len(values) % 2 == 0)
    points = decode_points(values, "vertices")
    assert [c for p in points for c in (p.x, p.y)] == [float(v) for v in values]


def test_decode_action():
    assert decode_action(["gotoAndPlay", "run"], "a") == Action("gotoAndPlay", "run")
    with pytest.raises(ArityViolation):
        decode_action(["gotoAndPlay"], "a")
    with pytest.raises(ShapeMismatch):
        decode_action(["gotoAndPlay", 3], "a")


@pytest.mark.parametrize("kind, field, expected", [
    ("slot", "displayIndex", 0),
    ("slot", "blendMode", "normal"),
    ("transform", "scX", 1.0),
    ("transform", "skX", 0.0),
    ("color", "aM", 100.0),
    ("color", "rO", 0.0),
    ("display", "inheritFDD", True),
    ("display", "subType", "rectangle"),
    ("display", "pivot", Point(0.5, 0.5)),
    ("ik", "bendPositive", True),
    ("ik", "chain", 0),
    ("ik", "weight", 0.0),
    ("animation", "loop", 1),
    ("animation", "duration", 1.0),
    ("boneFrame", "duration", 1.0),
    ("slotFrame", "tweenEasing", None),
])
def test_default_table(kind, field, expected):
    assert defaults.default_for(kind, field) == expected


def test_required_fields_have_no_default():
    with pytest.raises(KeyError):
        defaults.default_for("bone", "name")
    with pytest.raises(KeyError):
        defaults.default_for("ik", "target")
