"""Encoder from the typed model back to a JSON value tree.

The output is the canonical form of the document: every field is written
explicitly with its resolved value and packed records are flattened back
into numeric arrays. Decoding the output yields a value-equal ``Document``.
"""

import copy
from typing import Any, Dict, Iterable, List, Sequence

from dragonbones.core.display import Display, DisplayKind
from dragonbones.core.model import (
    Action,
    ActionFrame,
    Animation,
    Armature,
    Bone,
    BoneFrame,
    BoneTimeline,
    Color,
    Document,
    Event,
    FfdFrame,
    FfdTimeline,
    Ik,
    Point,
    Skin,
    SkinSlot,
    Slot,
    SlotFrame,
    SlotTimeline,
    Transform,
    Tween,
    ZOrderFrame,
    ZOrderTimeline,
)

Node = Dict[str, Any]


def _flatten(records: Iterable[Any], fields: Sequence[str]) -> List[Any]:
    return [getattr(record, name) for record in records for name in fields]


def _points(points: Iterable[Point]) -> List[float]:
    return _flatten(points, ("x", "y"))


def _actions(actions: Iterable[Action]) -> List[List[str]]:
    return [[action.verb, action.argument] for action in actions]


def _with_user_data(node: Node, user_data: Any) -> Node:
    if user_data is not None:
        node["userData"] = copy.deepcopy(user_data)
    return node


def encode_transform(transform: Transform) -> Node:
    return {
        "x": transform.x,
        "y": transform.y,
        "skX": transform.sk_x,
        "skY": transform.sk_y,
        "scX": transform.sc_x,
        "scY": transform.sc_y,
    }


def encode_color(color: Color) -> Node:
    return {
        "aM": color.a_m, "rM": color.r_m, "gM": color.g_m, "bM": color.b_m,
        "aO": color.a_o, "rO": color.r_o, "gO": color.g_o, "bO": color.b_o,
    }


def encode_bone(bone: Bone) -> Node:
    node = {"name": bone.name, "parent": bone.parent, "transform": encode_transform(bone.transform)}
    return _with_user_data(node, bone.user_data)


def encode_slot(slot: Slot) -> Node:
    node = {
        "name": slot.name,
        "parent": slot.parent,
        "displayIndex": slot.display_index,
        "blendMode": slot.blend_mode,
        "color": encode_color(slot.color),
        "actions": _actions(slot.actions),
    }
    return _with_user_data(node, slot.user_data)


def encode_display(display: Display) -> Node:
    if display.kind is DisplayKind.UNKNOWN:
        return copy.deepcopy(display.raw)
    node = {
        "name": display.name,
        "type": display.type_tag,
        "transform": encode_transform(display.transform),
        "pivot": [display.pivot.x, display.pivot.y],
    }
    if display.kind.has_path:
        node["path"] = display.path
    if display.kind.has_vertices:
        node["vertices"] = _points(display.vertices)
    if display.kind is DisplayKind.MESH:
        node.update(
            share=display.share,
            inheritFDD=display.inherit_fdd,
            uvs=_points(display.uvs),
            triangles=_flatten(display.triangles, ("i0", "i1", "i2")),
            weights=_flatten(display.weights, ("bone_count", "bone_index", "weight")),
            slotPose=_flatten(display.slot_pose, ("a", "b", "c", "d", "tx", "ty")),
            bonePose=_flatten(display.bone_pose, ("bone_index", "a", "b", "c", "d", "tx", "ty")),
        )
    elif display.kind is DisplayKind.BOUNDING_BOX:
        node.update(
            subType=display.sub_type_tag,
            color=display.color,
            width=display.width,
            height=display.height,
        )
    return node


def encode_skin_slot(skin_slot: SkinSlot) -> Node:
    return {"name": skin_slot.name, "display": [encode_display(d) for d in skin_slot.displays]}


def encode_skin(skin: Skin) -> Node:
    return {"name": skin.name, "slot": [encode_skin_slot(s) for s in skin.slots]}


def encode_ik(ik: Ik) -> Node:
    return {
        "name": ik.name,
        "bone": ik.bone,
        "target": ik.target,
        "bendPositive": ik.bend_positive,
        "chain": ik.chain,
        "weight": ik.weight,
    }


def _tween_fields(tween: Tween) -> Node:
    node = {"tweenType": tween.tween_type, "curve": _points(tween.curve)}
    if tween.tween_easing is not None:
        node["tweenEasing"] = tween.tween_easing
    return node


def encode_event(event: Event) -> Node:
    return {
        "name": event.name,
        "bone": event.bone,
        "slot": event.slot,
        "ints": list(event.ints),
        "floats": list(event.floats),
        "strings": list(event.strings),
    }


def encode_action_frame(frame: ActionFrame) -> Node:
    return {
        "duration": frame.duration,
        "sound": frame.sound,
        "events": [encode_event(e) for e in frame.events],
        "actions": _actions(frame.actions),
    }


def encode_z_order_frame(frame: ZOrderFrame) -> Node:
    return {"duration": frame.duration, "zOrder": _flatten(frame.z_order, ("slot_index", "offset"))}


def encode_z_order_timeline(timeline: ZOrderTimeline) -> Node:
    return {"frame": [encode_z_order_frame(f) for f in timeline.frames]}


def encode_bone_frame(frame: BoneFrame) -> Node:
    node = {"duration": frame.duration, "transform": encode_transform(frame.transform)}
    node.update(_tween_fields(frame.tween))
    return node


def encode_bone_timeline(timeline: BoneTimeline) -> Node:
    return {
        "name": timeline.name,
        "scale": timeline.scale,
        "offset": timeline.offset,
        "frame": [encode_bone_frame(f) for f in timeline.frames],
    }


def encode_slot_frame(frame: SlotFrame) -> Node:
    node = {
        "duration": frame.duration,
        "displayIndex": frame.display_index,
        "color": encode_color(frame.color),
        "actions": _actions(frame.actions),
    }
    node.update(_tween_fields(frame.tween))
    return node


def encode_slot_timeline(timeline: SlotTimeline) -> Node:
    return {"name": timeline.name, "frame": [encode_slot_frame(f) for f in timeline.frames]}


def encode_ffd_frame(frame: FfdFrame) -> Node:
    node = {"duration": frame.duration, "offset": frame.offset, "vertices": _points(frame.vertices)}
    node.update(_tween_fields(frame.tween))
    return node


def encode_ffd_timeline(timeline: FfdTimeline) -> Node:
    return {
        "name": timeline.name,
        "skin": timeline.skin,
        "slot": timeline.slot,
        "frame": [encode_ffd_frame(f) for f in timeline.frames],
    }


def encode_animation(animation: Animation) -> Node:
    return {
        "name": animation.name,
        "loop": animation.loop,
        "duration": animation.duration,
        "frame": [encode_action_frame(f) for f in animation.frames],
        "zOrder": [encode_z_order_timeline(t) for t in animation.z_order],
        "bone": [encode_bone_timeline(t) for t in animation.bones],
        "slot": [encode_slot_timeline(t) for t in animation.slots],
        "ffd": [encode_ffd_timeline(t) for t in animation.ffds],
    }


def encode_armature(armature: Armature) -> Node:
    node = {
        "name": armature.name,
        "frameRate": armature.frame_rate,
        "type": armature.type.value,
        "defaultActions": _actions(armature.default_actions),
        "bone": [encode_bone(b) for b in armature.bones],
        "slot": [encode_slot(s) for s in armature.slots],
        "skin": [encode_skin(s) for s in armature.skins],
        "ik": [encode_ik(i) for i in armature.iks],
        "animation": [encode_animation(a) for a in armature.animations],
    }
    return _with_user_data(node, armature.user_data)


def encode(document: Document) -> Node:
    """Encode a document into a JSON-serializable value tree.

    Args:
        document: A decoded document.

    Returns:
        The canonical ``*_ske.json`` object for ``document``.
    """
    node = {
        "name": document.name,
        "version": str(document.version),
        "compatibleVersion": str(document.compatible_version),
        "frameRate": document.frame_rate,
        "armature": [encode_armature(a) for a in document.armatures],
    }
    return _with_user_data(node, document.user_data)
