"""Resolution of the format's string discriminators into closed enums.

Display types and bounding box shapes are open-ended in the format: an
exporter may write a tag this package does not know. Such tags are logged
and mapped to the ``UNKNOWN`` member instead of failing the decode.
"""

import logging
from typing import Any

from dragonbones.core.display import BoundBoxType, DisplayKind
from dragonbones.core.errors import ShapeMismatch
from dragonbones.core.model import AnimationType
from .primitives import decode_string

logger = logging.getLogger(__name__)

_DISPLAY_KINDS = {kind.value: kind for kind in DisplayKind if kind.value is not None}
_BOUND_BOX_TYPES = {shape.value: shape for shape in BoundBoxType if shape.value is not None}
_ANIMATION_TYPES = {kind.value: kind for kind in AnimationType}


def display_kind(tag: str, path: str) -> DisplayKind:
    kind = _DISPLAY_KINDS.get(tag)
    if kind is None:
        logger.warning("%s: unknown display type %r, keeping raw payload", path, tag)
        return DisplayKind.UNKNOWN
    return kind


def bound_box_type(tag: str, path: str) -> BoundBoxType:
    shape = _BOUND_BOX_TYPES.get(tag)
    if shape is None:
        logger.warning("%s: unknown bounding box type %r", path, tag)
        return BoundBoxType.UNKNOWN
    return shape


def decode_animation_type(node: Any, path: str) -> AnimationType:
    """Decode ``armature.type``, which has no extension mechanism."""
    tag = decode_string(node, path)
    try:
        return _ANIMATION_TYPES[tag]
    except KeyError:
        expected = " | ".join(_ANIMATION_TYPES)
        raise ShapeMismatch(path, f"one of {expected}", repr(tag)) from None
