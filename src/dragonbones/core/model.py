"""Immutable PyTree records for decoded DragonBones skeleton data.

Every record is a frozen ``flax.struct`` dataclass. Names and references to
other entities (parent bone, IK target, timeline slot, ...) are plain strings
stored as static fields; numeric payloads are pytree leaves, so a decoded
armature can be passed straight through ``jax.tree_util`` utilities.

References are never resolved here: a bone's ``parent`` is the name of another
bone in the same armature, looked up by the consumer.
"""

import enum
from typing import Any, Optional, Tuple

from flax import struct
from semver import Version


class AnimationType(enum.Enum):
    """Playback model of an armature (``armature.type``)."""
    ARMATURE = "Armature"
    MOVIE_CLIP = "MovieClip"
    STAGE = "Stage"


# Packed numeric records

@struct.dataclass
class Point:
    """A coordinate pair unpacked from a flat ``[x0, y0, x1, y1, ...]`` array."""
    x: float
    y: float


@struct.dataclass
class VertexWeight:
    """One ``(boneCount, boneIndex, weight)`` triple of a mesh weight list."""
    bone_count: int
    bone_index: int
    weight: float


@struct.dataclass
class SlotPose:
    """Slot registration matrix ``(a, b, c, d, tx, ty)`` of a mesh."""
    a: float
    b: float
    c: float
    d: float
    tx: float
    ty: float


@struct.dataclass
class BonePose:
    """Bind matrix ``(a, b, c, d, tx, ty)`` of the bone at ``bone_index``."""
    bone_index: int
    a: float
    b: float
    c: float
    d: float
    tx: float
    ty: float


@struct.dataclass
class Triangle:
    """Three vertex indices of a mesh triangle."""
    i0: int
    i1: int
    i2: int


@struct.dataclass
class ZOrderOffset:
    """Draw-order shift of the slot at ``slot_index`` by ``offset`` places."""
    slot_index: int
    offset: int


# Object-shaped primitives

@struct.dataclass
class Transform:
    """Translation, skew (degrees) and scale relative to the parent.

    Scale defaults to identity, never zero.
    """
    x: float = 0.0
    y: float = 0.0
    sk_x: float = 0.0
    sk_y: float = 0.0
    sc_x: float = 1.0
    sc_y: float = 1.0


@struct.dataclass
class Color:
    """Color transform: multipliers in percent, offsets in [-255, 255]."""
    a_m: float = 100.0
    r_m: float = 100.0
    g_m: float = 100.0
    b_m: float = 100.0
    a_o: float = 0.0
    r_o: float = 0.0
    g_o: float = 0.0
    b_o: float = 0.0


@struct.dataclass
class Action:
    """A triggered behavior such as ``["gotoAndPlay", "walk"]``."""
    verb: str = struct.field(pytree_node=False)
    argument: str = struct.field(pytree_node=False)


@struct.dataclass
class Tween:
    """Easing descriptor of a keyframe.

    Attributes:
        tween_type: 0 means ``tween_easing``/``curve`` describe the easing,
                    other values are extension easing enumerations.
        tween_easing: 0.0 is linear, None means no easing (hold the frame).
        curve: Bezier control points ``(x1, y1), (x2, y2), ...``.
    """
    tween_type: int = 0
    tween_easing: Optional[float] = None
    curve: Tuple[Point, ...] = ()


# Armature entities

@struct.dataclass
class Bone:
    name: str = struct.field(pytree_node=False)
    parent: str = struct.field(pytree_node=False)
    transform: Transform = struct.field(default_factory=Transform)
    user_data: Any = struct.field(pytree_node=False, default=None, hash=False)


@struct.dataclass
class Slot:
    name: str = struct.field(pytree_node=False)
    parent: str = struct.field(pytree_node=False)
    display_index: int = 0
    blend_mode: str = struct.field(pytree_node=False, default="normal")
    color: Color = struct.field(default_factory=Color)
    user_data: Any = struct.field(pytree_node=False, default=None, hash=False)
    actions: Tuple[Action, ...] = ()


@struct.dataclass
class SkinSlot:
    """Display objects a skin provides for the slot called ``name``."""
    name: str = struct.field(pytree_node=False)
    displays: Tuple[Any, ...] = ()


@struct.dataclass
class Skin:
    name: str = struct.field(pytree_node=False)
    slots: Tuple[SkinSlot, ...] = ()


@struct.dataclass
class Ik:
    """Inverse kinematics constraint on ``bone`` towards ``target``.

    Attributes:
        chain: 0 constrains only ``bone``, n also constrains n parent levels.
        weight: 0.0 (no constraint) to 1.0 (full constraint).
    """
    bone: str = struct.field(pytree_node=False)
    target: str = struct.field(pytree_node=False)
    name: str = struct.field(pytree_node=False, default="")
    bend_positive: bool = struct.field(pytree_node=False, default=True)
    chain: int = 0
    weight: float = 0.0


# Animation timelines

@struct.dataclass
class Event:
    name: str = struct.field(pytree_node=False, default="")
    bone: str = struct.field(pytree_node=False, default="")
    slot: str = struct.field(pytree_node=False, default="")
    ints: Tuple[int, ...] = ()
    floats: Tuple[float, ...] = ()
    strings: Tuple[str, ...] = struct.field(pytree_node=False, default=())


@struct.dataclass
class ActionFrame:
    """Keyframe of the animation-level event/action timeline."""
    duration: float = 1.0
    sound: str = struct.field(pytree_node=False, default="")
    events: Tuple[Event, ...] = ()
    actions: Tuple[Action, ...] = ()


@struct.dataclass
class ZOrderFrame:
    duration: float = 1.0
    z_order: Tuple[ZOrderOffset, ...] = ()


@struct.dataclass
class ZOrderTimeline:
    frames: Tuple[ZOrderFrame, ...] = ()


@struct.dataclass
class BoneFrame:
    duration: float = 1.0
    tween: Tween = struct.field(default_factory=Tween)
    transform: Transform = struct.field(default_factory=Transform)


@struct.dataclass
class BoneTimeline:
    name: str = struct.field(pytree_node=False)
    scale: float = 1.0
    offset: float = 0.0
    frames: Tuple[BoneFrame, ...] = ()


@struct.dataclass
class SlotFrame:
    duration: float = 1.0
    tween: Tween = struct.field(default_factory=Tween)
    display_index: int = 0
    color: Color = struct.field(default_factory=Color)
    actions: Tuple[Action, ...] = ()


@struct.dataclass
class SlotTimeline:
    name: str = struct.field(pytree_node=False)
    frames: Tuple[SlotFrame, ...] = ()


@struct.dataclass
class FfdFrame:
    """Free-form deform keyframe: vertex displacements starting at ``offset``."""
    duration: float = 1.0
    tween: Tween = struct.field(default_factory=Tween)
    offset: int = 0
    vertices: Tuple[Point, ...] = ()


@struct.dataclass
class FfdTimeline:
    name: str = struct.field(pytree_node=False)
    slot: str = struct.field(pytree_node=False)
    skin: str = struct.field(pytree_node=False, default="")
    frames: Tuple[FfdFrame, ...] = ()


@struct.dataclass
class Animation:
    """A named clip.

    Attributes:
        loop: 0 loops forever, n plays n times.
        frames: Event/action keyframes of the clip itself.
        z_order: Draw-order timelines.
        bones, slots, ffds: Per-bone, per-slot and free-form deform timelines.
    """
    name: str = struct.field(pytree_node=False)
    loop: int = 1
    duration: float = 1.0
    frames: Tuple[ActionFrame, ...] = ()
    z_order: Tuple[ZOrderTimeline, ...] = ()
    bones: Tuple[BoneTimeline, ...] = ()
    slots: Tuple[SlotTimeline, ...] = ()
    ffds: Tuple[FfdTimeline, ...] = ()


@struct.dataclass
class Armature:
    """One independently posable skeleton.

    ``bones`` and ``slots`` keep their source order, which fixes IK evaluation
    and draw order for the renderer. ``frame_rate`` is None only between the
    raw decode and the document-level default pass.
    """
    name: str = struct.field(pytree_node=False)
    frame_rate: Optional[float] = None
    type: AnimationType = struct.field(pytree_node=False, default=AnimationType.ARMATURE)
    user_data: Any = struct.field(pytree_node=False, default=None, hash=False)
    default_actions: Tuple[Action, ...] = ()
    bones: Tuple[Bone, ...] = ()
    slots: Tuple[Slot, ...] = ()
    skins: Tuple[Skin, ...] = ()
    iks: Tuple[Ik, ...] = ()
    animations: Tuple[Animation, ...] = ()


@struct.dataclass
class Document:
    """One exported DragonBones data file."""
    name: str = struct.field(pytree_node=False)
    version: Version = struct.field(pytree_node=False)
    compatible_version: Version = struct.field(pytree_node=False)
    frame_rate: float = 24.0
    user_data: Any = struct.field(pytree_node=False, default=None, hash=False)
    armatures: Tuple[Armature, ...] = ()
