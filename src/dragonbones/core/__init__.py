"""Core data structures for decoded DragonBones skeletons.

This module provides the immutable records produced by the decoder and the
errors it raises.
"""

from .display import BoundBoxType, Display, DisplayKind
from .errors import ArityViolation, DecodeError, MissingField, ShapeMismatch, VersionParse
from .model import (
    Action,
    ActionFrame,
    Animation,
    AnimationType,
    Armature,
    Bone,
    BoneFrame,
    BonePose,
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
    SlotPose,
    SlotTimeline,
    Transform,
    Triangle,
    Tween,
    VertexWeight,
    ZOrderFrame,
    ZOrderOffset,
    ZOrderTimeline,
)

__all__ = [
    "Action",
    "ActionFrame",
    "Animation",
    "AnimationType",
    "Armature",
    "ArityViolation",
    "Bone",
    "BoneFrame",
    "BonePose",
    "BoneTimeline",
    "BoundBoxType",
    "Color",
    "DecodeError",
    "Display",
    "DisplayKind",
    "Document",
    "Event",
    "FfdFrame",
    "FfdTimeline",
    "Ik",
    "MissingField",
    "Point",
    "ShapeMismatch",
    "Skin",
    "SkinSlot",
    "Slot",
    "SlotFrame",
    "SlotPose",
    "SlotTimeline",
    "Transform",
    "Triangle",
    "Tween",
    "VersionParse",
    "VertexWeight",
    "ZOrderFrame",
    "ZOrderOffset",
    "ZOrderTimeline",
]
