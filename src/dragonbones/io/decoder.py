"""Decoder from a generic JSON value tree to the typed DragonBones model.

This module provides one decoder per entity of the format and the ``decode``
entry point for whole documents. Decoding is all-or-nothing: the first
structural error is raised with the full path of the offending node and no
partial document is returned. Keys the schema does not know are ignored.
"""

import copy
import logging
from typing import Any, Mapping, Optional

from semver import Version

from dragonbones.core.display import Display, DisplayKind
from dragonbones.core.errors import VersionParse
from dragonbones.core.model import (
    ActionFrame,
    Animation,
    Armature,
    Bone,
    BoneFrame,
    BoneTimeline,
    Document,
    Event,
    FfdFrame,
    FfdTimeline,
    Ik,
    Skin,
    SkinSlot,
    Slot,
    SlotFrame,
    SlotTimeline,
    Tween,
    ZOrderFrame,
    ZOrderTimeline,
)
from .defaults import default_for, resolve_frame_rate
from .dispatch import bound_box_type, decode_animation_type, display_kind
from .primitives import (
    decode_actions,
    decode_bone_poses,
    decode_bool,
    decode_color,
    decode_int,
    decode_ints,
    decode_number,
    decode_numbers,
    decode_point,
    decode_points,
    decode_scalar,
    decode_slot_poses,
    decode_string,
    decode_strings,
    decode_transform,
    decode_triangles,
    decode_weights,
    decode_z_order_offsets,
    expect_object,
    join,
    optional,
    required,
    sequence_of,
)

logger = logging.getLogger(__name__)


def _copy_raw(node: Any, path: str) -> Any:
    """Keep a free-form value (``userData``) as an independent copy."""
    return copy.deepcopy(node)


def decode_version(node: Any, path: str) -> Version:
    """Parse a semantic version; ``"5.5"`` is read as ``5.5.0``."""
    if not isinstance(node, str):
        raise VersionParse(path, node)
    try:
        return Version.parse(node, optional_minor_and_patch=True)
    except ValueError as exc:
        raise VersionParse(path, node) from exc


# Armature entities

def decode_bone(node: Any, path: str) -> Bone:
    obj = expect_object(node, path)
    return Bone(
        name=required(obj, "name", decode_string, path),
        parent=required(obj, "parent", decode_string, path),
        transform=optional(obj, "transform", decode_transform, path, "bone"),
        user_data=optional(obj, "userData", _copy_raw, path, "bone"),
    )


def decode_slot(node: Any, path: str) -> Slot:
    obj = expect_object(node, path)
    return Slot(
        name=required(obj, "name", decode_string, path),
        parent=required(obj, "parent", decode_string, path),
        display_index=optional(obj, "displayIndex", decode_int, path, "slot"),
        blend_mode=optional(obj, "blendMode", decode_string, path, "slot"),
        color=optional(obj, "color", decode_color, path, "slot"),
        user_data=optional(obj, "userData", _copy_raw, path, "slot"),
        actions=optional(obj, "actions", decode_actions, path, "slot"),
    )


def decode_display(node: Any, path: str) -> Display:
    """Decode a display object, dispatching on its ``type`` tag.

    Only the fields that belong to the dispatched kind are read; the others
    keep their defaults. Unknown kinds retain a copy of the whole node.
    """
    obj = expect_object(node, path)
    name = required(obj, "name", decode_string, path)
    type_tag = optional(obj, "type", decode_string, path, "display")
    kind = display_kind(type_tag, join(path, "type"))
    if kind is DisplayKind.UNKNOWN:
        return Display(name=name, kind=kind, type_tag=type_tag, raw=copy.deepcopy(dict(obj)))

    fields = dict(
        name=name,
        kind=kind,
        type_tag=type_tag,
        transform=optional(obj, "transform", decode_transform, path, "display"),
        pivot=optional(obj, "pivot", decode_point, path, "display"),
    )
    if kind.has_path:
        fields["path"] = optional(obj, "path", decode_string, path, "display")
    if kind.has_vertices:
        fields["vertices"] = optional(obj, "vertices", decode_points, path, "display")
    if kind is DisplayKind.MESH:
        fields.update(
            share=optional(obj, "share", decode_string, path, "display"),
            inherit_fdd=optional(obj, "inheritFDD", decode_bool, path, "display"),
            uvs=optional(obj, "uvs", decode_points, path, "display"),
            triangles=optional(obj, "triangles", decode_triangles, path, "display"),
            weights=optional(obj, "weights", decode_weights, path, "display"),
            slot_pose=optional(obj, "slotPose", decode_slot_poses, path, "display"),
            bone_pose=optional(obj, "bonePose", decode_bone_poses, path, "display"),
        )
    elif kind is DisplayKind.BOUNDING_BOX:
        sub_type_tag = optional(obj, "subType", decode_string, path, "display")
        fields.update(
            sub_type=bound_box_type(sub_type_tag, join(path, "subType")),
            sub_type_tag=sub_type_tag,
            color=optional(obj, "color", decode_scalar, path, "display"),
            width=optional(obj, "width", decode_number, path, "display"),
            height=optional(obj, "height", decode_number, path, "display"),
        )
    return Display(**fields)


def decode_skin_slot(node: Any, path: str) -> SkinSlot:
    obj = expect_object(node, path)
    return SkinSlot(
        name=required(obj, "name", decode_string, path),
        displays=optional(obj, "display", sequence_of(decode_display), path, "skinSlot"),
    )


def decode_skin(node: Any, path: str) -> Skin:
    obj = expect_object(node, path)
    return Skin(
        name=required(obj, "name", decode_string, path),
        slots=optional(obj, "slot", sequence_of(decode_skin_slot), path, "skin"),
    )


def decode_ik(node: Any, path: str) -> Ik:
    obj = expect_object(node, path)
    return Ik(
        name=optional(obj, "name", decode_string, path, "ik"),
        bone=required(obj, "bone", decode_string, path),
        target=required(obj, "target", decode_string, path),
        bend_positive=optional(obj, "bendPositive", decode_bool, path, "ik"),
        chain=optional(obj, "chain", decode_int, path, "ik"),
        weight=optional(obj, "weight", decode_number, path, "ik"),
    )


# Animation timelines

def decode_tween(obj: Any, path: str, kind: str) -> Tween:
    """Read the easing fields that are flattened into a frame node."""
    return Tween(
        tween_type=optional(obj, "tweenType", decode_int, path, kind),
        tween_easing=optional(obj, "tweenEasing", decode_number, path, kind),
        curve=optional(obj, "curve", decode_points, path, kind),
    )


def decode_event(node: Any, path: str) -> Event:
    obj = expect_object(node, path)
    return Event(
        name=optional(obj, "name", decode_string, path, "event"),
        bone=optional(obj, "bone", decode_string, path, "event"),
        slot=optional(obj, "slot", decode_string, path, "event"),
        ints=optional(obj, "ints", decode_ints, path, "event"),
        floats=optional(obj, "floats", decode_numbers, path, "event"),
        strings=optional(obj, "strings", decode_strings, path, "event"),
    )


def decode_action_frame(node: Any, path: str) -> ActionFrame:
    obj = expect_object(node, path)
    return ActionFrame(
        duration=optional(obj, "duration", decode_number, path, "actionFrame"),
        sound=optional(obj, "sound", decode_string, path, "actionFrame"),
        events=optional(obj, "events", sequence_of(decode_event), path, "actionFrame"),
        actions=optional(obj, "actions", decode_actions, path, "actionFrame"),
    )


def decode_z_order_frame(node: Any, path: str) -> ZOrderFrame:
    obj = expect_object(node, path)
    return ZOrderFrame(
        duration=optional(obj, "duration", decode_number, path, "zOrderFrame"),
        z_order=optional(obj, "zOrder", decode_z_order_offsets, path, "zOrderFrame"),
    )


def decode_z_order_timeline(node: Any, path: str) -> ZOrderTimeline:
    obj = expect_object(node, path)
    return ZOrderTimeline(
        frames=optional(obj, "frame", sequence_of(decode_z_order_frame), path, "zOrderTimeline"),
    )


def _decode_z_order(node: Any, path: str):
    # Format 5.x writes a single timeline object, older exports a list.
    if isinstance(node, Mapping):
        return (decode_z_order_timeline(node, path),)
    return sequence_of(decode_z_order_timeline)(node, path)


def decode_bone_frame(node: Any, path: str) -> BoneFrame:
    obj = expect_object(node, path)
    return BoneFrame(
        duration=optional(obj, "duration", decode_number, path, "boneFrame"),
        tween=decode_tween(obj, path, "boneFrame"),
        transform=optional(obj, "transform", decode_transform, path, "boneFrame"),
    )


def decode_bone_timeline(node: Any, path: str) -> BoneTimeline:
    obj = expect_object(node, path)
    return BoneTimeline(
        name=required(obj, "name", decode_string, path),
        scale=optional(obj, "scale", decode_number, path, "boneTimeline"),
        offset=optional(obj, "offset", decode_number, path, "boneTimeline"),
        frames=optional(obj, "frame", sequence_of(decode_bone_frame), path, "boneTimeline"),
    )


def decode_slot_frame(node: Any, path: str) -> SlotFrame:
    obj = expect_object(node, path)
    return SlotFrame(
        duration=optional(obj, "duration", decode_number, path, "slotFrame"),
        tween=decode_tween(obj, path, "slotFrame"),
        display_index=optional(obj, "displayIndex", decode_int, path, "slotFrame"),
        color=optional(obj, "color", decode_color, path, "slotFrame"),
        actions=optional(obj, "actions", decode_actions, path, "slotFrame"),
    )


def decode_slot_timeline(node: Any, path: str) -> SlotTimeline:
    obj = expect_object(node, path)
    return SlotTimeline(
        name=required(obj, "name", decode_string, path),
        frames=optional(obj, "frame", sequence_of(decode_slot_frame), path, "slotTimeline"),
    )


def decode_ffd_frame(node: Any, path: str) -> FfdFrame:
    obj = expect_object(node, path)
    return FfdFrame(
        duration=optional(obj, "duration", decode_number, path, "ffdFrame"),
        tween=decode_tween(obj, path, "ffdFrame"),
        offset=optional(obj, "offset", decode_int, path, "ffdFrame"),
        vertices=optional(obj, "vertices", decode_points, path, "ffdFrame"),
    )


def decode_ffd_timeline(node: Any, path: str) -> FfdTimeline:
    obj = expect_object(node, path)
    return FfdTimeline(
        name=required(obj, "name", decode_string, path),
        skin=optional(obj, "skin", decode_string, path, "ffdTimeline"),
        slot=required(obj, "slot", decode_string, path),
        frames=optional(obj, "frame", sequence_of(decode_ffd_frame), path, "ffdTimeline"),
    )


def decode_animation(node: Any, path: str) -> Animation:
    obj = expect_object(node, path)
    return Animation(
        name=required(obj, "name", decode_string, path),
        loop=optional(obj, "loop", decode_int, path, "animation"),
        duration=optional(obj, "duration", decode_number, path, "animation"),
        frames=optional(obj, "frame", sequence_of(decode_action_frame), path, "animation"),
        z_order=optional(obj, "zOrder", _decode_z_order, path, "animation"),
        bones=optional(obj, "bone", sequence_of(decode_bone_timeline), path, "animation"),
        slots=optional(obj, "slot", sequence_of(decode_slot_timeline), path, "animation"),
        ffds=optional(obj, "ffd", sequence_of(decode_ffd_timeline), path, "animation"),
    )


# Armature and document

def _decode_frame_rate(node: Any, path: str) -> Optional[float]:
    rate = decode_number(node, path)
    # Negative rates are the exporter's "unset" sentinel.
    return rate if rate >= 0 else None


def decode_armature(node: Any, path: str) -> Armature:
    """Decode an armature without resolving its frame rate.

    ``frame_rate`` is None when the armature does not set its own; ``decode``
    fills it in from the document.
    """
    obj = expect_object(node, path)
    armature = Armature(
        name=required(obj, "name", decode_string, path),
        frame_rate=optional(obj, "frameRate", _decode_frame_rate, path, "armature"),
        type=optional(obj, "type", decode_animation_type, path, "armature"),
        user_data=optional(obj, "userData", _copy_raw, path, "armature"),
        default_actions=optional(obj, "defaultActions", decode_actions, path, "armature"),
        bones=optional(obj, "bone", sequence_of(decode_bone), path, "armature"),
        slots=optional(obj, "slot", sequence_of(decode_slot), path, "armature"),
        skins=optional(obj, "skin", sequence_of(decode_skin), path, "armature"),
        iks=optional(obj, "ik", sequence_of(decode_ik), path, "armature"),
        animations=optional(obj, "animation", sequence_of(decode_animation), path, "armature"),
    )
    logger.debug(
        "Decoded armature '%s': %d bones, %d slots, %d skins, %d animations",
        armature.name, len(armature.bones), len(armature.slots),
        len(armature.skins), len(armature.animations),
    )
    return armature


def decode(root: Any) -> Document:
    """Decode a DragonBones document from a parsed JSON value tree.

    Args:
        root: The top-level object of a ``*_ske.json`` file, as returned by a
              JSON parser.

    Returns:
        Document: The typed, fully defaulted skeleton data.

    Raises:
        DecodeError: On the first structural problem found.
    """
    obj = expect_object(root, "")
    name = required(obj, "name", decode_string, "")
    version = required(obj, "version", decode_version, "")
    compatible_version = required(obj, "compatibleVersion", decode_version, "")
    frame_rate = optional(obj, "frameRate", _decode_frame_rate, "", "document")
    if frame_rate is None:
        frame_rate = default_for("document", "frameRate")
    armatures = optional(obj, "armature", sequence_of(decode_armature), "", "document")
    document = Document(
        name=name,
        version=version,
        compatible_version=compatible_version,
        frame_rate=frame_rate,
        user_data=optional(obj, "userData", _copy_raw, "", "document"),
        armatures=tuple(resolve_frame_rate(armature, frame_rate) for armature in armatures),
    )
    logger.debug(
        "Decoded document '%s' (version %s, %d armatures)",
        document.name, document.version, len(document.armatures),
    )
    return document
