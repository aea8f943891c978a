"""Tests for display object dispatch."""

import logging

import pytest

from dragonbones.core import (
    ArityViolation,
    BonePose,
    BoundBoxType,
    DisplayKind,
    MissingField,
    Point,
    ShapeMismatch,
    SlotPose,
    Transform,
)
from dragonbones.io.decoder import decode_display

MESH_ONLY_FIELDS = ("uvs", "triangles", "weights", "slot_pose", "bone_pose")


def test_display_defaults():
    """Test a display with only a name is a centered image."""
    display = decode_display({"name": "hand"}, "display[0]")

    assert display.kind is DisplayKind.IMAGE
    assert display.type_tag == "image"
    assert display.inherit_fdd is True
    assert display.sub_type is BoundBoxType.RECTANGLE
    assert display.pivot == Point(0.5, 0.5)
    assert display.transform == Transform()
    assert display.path == ""
    assert display.share == ""
    assert display.color == 0
    assert display.width == 0.0
    assert display.height == 0.0
    assert display.raw is None
    assert display.vertices == ()
    for field in MESH_ONLY_FIELDS:
        assert getattr(display, field) == ()


def test_image_ignores_mesh_fields():
    node = {
        "name": "img",
        "type": "image",
        "vertices": [0, 0, 1, 1],
        "weights": [1, 0],
        "path": "ignored",
        "subType": "ellipse",
    }
    display = decode_display(node, "display")
    assert display.vertices == ()
    assert display.weights == ()
    assert display.path == ""
    assert display.sub_type is BoundBoxType.RECTANGLE


def test_armature_display():
    display = decode_display({"name": "Weapon", "type": "armature", "path": "weapons/sword"}, "d")
    assert display.kind is DisplayKind.ARMATURE
    assert display.path == "weapons/sword"
    assert display.vertices == ()


def test_mesh_display():
    node = {
        "name": "cape",
        "type": "mesh",
        "share": "cape_base",
        "inheritFDD": False,
        "vertices": [0, 0, 10, 0, 10, 10],
        "uvs": [0, 0, 1, 0, 1, 1],
        "triangles": [0, 1, 2],
        "slotPose": [1, 0, 0, 1, 5, 6],
        "bonePose": [3, 0, 1, -1, 0, 7, 8],
    }
    display = decode_display(node, "display")

    assert display.kind is DisplayKind.MESH
    assert display.share == "cape_base"
    assert display.inherit_fdd is False
    assert display.vertices[2] == Point(10.0, 10.0)
    assert display.uvs[1] == Point(1.0, 0.0)
    assert display.slot_pose == (SlotPose(1.0, 0.0, 0.0, 1.0, 5.0, 6.0),)
    assert display.bone_pose == (BonePose(3, 0.0, 1.0, -1.0, 0.0, 7.0, 8.0),)
    assert display.weights == ()


@pytest.mark.parametrize("weights", [[1], [1, 0], [1, 0, 1.0, 1]])
def test_mesh_weights_arity(weights):
    """Test a mesh weight list whose length is not divisible by 3 fails."""
    node = {"name": "m", "type": "mesh", "weights": weights}
    with pytest.raises(ArityViolation) as exc_info:
        decode_display(node, "display[0]")
    assert exc_info.value.path == "display[0].weights"
    assert exc_info.value.arity == 3
    assert exc_info.value.length == len(weights)


def test_mesh_bone_index_must_be_integral():
    node = {"name": "m", "type": "mesh", "bonePose": [0.5, 1, 0, 0, 1, 0, 0]}
    with pytest.raises(ShapeMismatch) as exc_info:
        decode_display(node, "display")
    assert exc_info.value.path == "display.bonePose[0]"


@pytest.mark.parametrize("tag, expected", [
    ("rectangle", BoundBoxType.RECTANGLE),
    ("ellipse", BoundBoxType.ELLIPSE),
    ("polygon", BoundBoxType.POLYGON),
])
def test_bounding_box_sub_type(tag, expected):
    node = {"name": "hit", "type": "boundingBox", "subType": tag, "width": 20, "height": 8}
    display = decode_display(node, "display")
    assert display.kind is DisplayKind.BOUNDING_BOX
    assert display.sub_type is expected
    assert display.sub_type_tag == tag
    assert display.width == 20.0
    assert display.height == 8.0
    assert display.uvs == ()


def test_bounding_box_defaults_to_rectangle():
    display = decode_display({"name": "hit", "type": "boundingBox"}, "display")
    assert display.sub_type is BoundBoxType.RECTANGLE
    assert display.color == 0


def test_bounding_box_color_is_passed_through():
    display = decode_display({"name": "hit", "type": "boundingBox", "color": "0xff0000"}, "display")
    assert display.color == "0xff0000"


def test_unknown_bounding_box_type(caplog):
    with caplog.at_level(logging.WARNING):
        display = decode_display({"name": "hit", "type": "boundingBox", "subType": "capsule"}, "d")
    assert display.sub_type is BoundBoxType.UNKNOWN
    assert display.sub_type_tag == "capsule"
    assert "capsule" in caplog.text


def test_unknown_display_type_keeps_payload(caplog):
    """Test an extension display type decodes to the opaque variant."""
    node = {
        "name": "flame",
        "type": "particle",
        "transform": "not-an-object",
        "emitter": {"rate": 30, "textures": ["a", "b"]},
    }
    with caplog.at_level(logging.WARNING, logger="dragonbones.io.dispatch"):
        display = decode_display(node, "display[4]")

    assert display.kind is DisplayKind.UNKNOWN
    assert display.type_tag == "particle"
    assert display.name == "flame"
    assert display.raw == node
    assert display.raw is not node
    assert display.transform == Transform()
    assert display.vertices == ()
    assert "display[4].type" in caplog.text


def test_unknown_display_payload_is_a_copy():
    node = {"name": "flame", "type": "particle", "emitter": {"rate": 30}}
    display = decode_display(node, "display")
    node["emitter"]["rate"] = 1
    assert display.raw["emitter"]["rate"] == 30


def test_display_requires_name():
    with pytest.raises(MissingField) as exc_info:
        decode_display({"type": "mesh"}, "display[0]")
    assert exc_info.value.field == "name"


def test_display_type_must_be_string():
    with pytest.raises(ShapeMismatch):
        decode_display({"name": "x", "type": 2}, "display")


@pytest.mark.parametrize("pivot", [[0.5], [0.5, 0.5, 0.5]])
def test_pivot_needs_two_numbers(pivot):
    with pytest.raises(ArityViolation):
        decode_display({"name": "x", "pivot": pivot}, "display")


def test_unknown_display_is_hashable():
    display = decode_display({"name": "flame", "type": "particle", "emitter": {"rate": 1}}, "display")
    assert hash(display) == hash(display.replace())
    assert display in {display}
