"""Decoders for scalars and the packed numeric layouts of the format.

Every decoder takes ``(node, path)`` where ``node`` is a value from a generic
JSON tree and ``path`` is the dotted location used in error messages. Packed
arrays such as ``[x0, y0, x1, y1, ...]`` are validated against their record
arity and unpacked into one record per group; a trailing partial group is an
``ArityViolation``, never silently dropped.
"""

from typing import Any, Callable, List, Mapping, Sequence, Tuple, TypeVar

from dragonbones.core.errors import ArityViolation, MissingField, ShapeMismatch
from dragonbones.core.model import (
    Action,
    BonePose,
    Color,
    Point,
    SlotPose,
    Transform,
    Triangle,
    VertexWeight,
    ZOrderOffset,
)
from .defaults import default_for

T = TypeVar("T")
Decoder = Callable[[Any, str], T]


def join(path: str, key) -> str:
    """Extend ``path`` with an object key or a sequence index."""
    if isinstance(key, int):
        return f"{path}[{key}]"
    return f"{path}.{key}" if path else key


def node_kind(node: Any) -> str:
    if node is None:
        return "null"
    if isinstance(node, bool):
        return "boolean"
    if isinstance(node, (int, float)):
        return "number"
    if isinstance(node, str):
        return "string"
    if isinstance(node, Mapping):
        return "object"
    if isinstance(node, (list, tuple)):
        return "array"
    return type(node).__name__


def expect_object(node: Any, path: str) -> Mapping[str, Any]:
    if not isinstance(node, Mapping):
        raise ShapeMismatch(path, "object", node_kind(node))
    return node


def expect_array(node: Any, path: str) -> Sequence[Any]:
    if not isinstance(node, (list, tuple)):
        raise ShapeMismatch(path, "array", node_kind(node))
    return node


# Scalars

def decode_number(node: Any, path: str) -> float:
    if isinstance(node, bool) or not isinstance(node, (int, float)):
        raise ShapeMismatch(path, "number", node_kind(node))
    return float(node)


def decode_int(node: Any, path: str) -> int:
    if isinstance(node, float) and node.is_integer():
        return int(node)
    if isinstance(node, bool) or not isinstance(node, int):
        raise ShapeMismatch(path, "integer", node_kind(node))
    return node


def decode_string(node: Any, path: str) -> str:
    if not isinstance(node, str):
        raise ShapeMismatch(path, "string", node_kind(node))
    return node


def decode_bool(node: Any, path: str) -> bool:
    if not isinstance(node, bool):
        raise ShapeMismatch(path, "boolean", node_kind(node))
    return node


def decode_scalar(node: Any, path: str) -> Any:
    """Pass a string, number or boolean through unchanged."""
    if not isinstance(node, (str, int, float)):
        raise ShapeMismatch(path, "scalar", node_kind(node))
    return node


def sequence_of(decode_item: Decoder) -> Decoder:
    """Build a decoder for an array whose elements all use ``decode_item``."""

    def decode_sequence(node: Any, path: str) -> Tuple[Any, ...]:
        items = expect_array(node, path)
        return tuple(decode_item(item, join(path, i)) for i, item in enumerate(items))

    return decode_sequence


# Field access

def required(node: Mapping[str, Any], key: str, decode: Decoder, path: str):
    """Decode a field that must be present and not null."""
    value = node.get(key)
    if value is None:
        raise MissingField(path, key)
    return decode(value, join(path, key))


def optional(node: Mapping[str, Any], key: str, decode: Decoder, path: str, kind: str):
    """Decode a field, falling back to its documented default for ``kind``."""
    value = node.get(key)
    if value is None:
        return default_for(kind, key)
    return decode(value, join(path, key))


# Packed layouts

def unpack(node: Any, path: str, arity: int) -> List[Tuple[float, ...]]:
    """Split a flat numeric array into groups of ``arity`` numbers."""
    values = expect_array(node, path)
    if len(values) % arity:
        raise ArityViolation(path, arity, len(values))
    numbers = [decode_number(value, join(path, i)) for i, value in enumerate(values)]
    return [tuple(numbers[i:i + arity]) for i in range(0, len(numbers), arity)]


def _unpack_ints(node: Any, path: str, arity: int) -> List[Tuple[int, ...]]:
    values = expect_array(node, path)
    if len(values) % arity:
        raise ArityViolation(path, arity, len(values))
    numbers = [decode_int(value, join(path, i)) for i, value in enumerate(values)]
    return [tuple(numbers[i:i + arity]) for i in range(0, len(numbers), arity)]


def _as_int(value: float, path: str) -> int:
    if not value.is_integer():
        raise ShapeMismatch(path, "integer", "number")
    return int(value)


def decode_point(node: Any, path: str) -> Point:
    """Decode exactly two adjacent numbers, e.g. a pivot ``[0.5, 0.5]``."""
    values = expect_array(node, path)
    if len(values) != 2:
        raise ArityViolation(path, 2, len(values))
    (x, y), = unpack(values, path, 2)
    return Point(x, y)


def decode_points(node: Any, path: str) -> Tuple[Point, ...]:
    return tuple(Point(x, y) for x, y in unpack(node, path, 2))


def decode_weights(node: Any, path: str) -> Tuple[VertexWeight, ...]:
    weights = []
    for i, (count, index, weight) in enumerate(unpack(node, path, 3)):
        weights.append(VertexWeight(
            bone_count=_as_int(count, join(path, 3 * i)),
            bone_index=_as_int(index, join(path, 3 * i + 1)),
            weight=weight,
        ))
    return tuple(weights)


def decode_slot_poses(node: Any, path: str) -> Tuple[SlotPose, ...]:
    return tuple(SlotPose(*group) for group in unpack(node, path, 6))


def decode_bone_poses(node: Any, path: str) -> Tuple[BonePose, ...]:
    poses = []
    for i, (index, *matrix) in enumerate(unpack(node, path, 7)):
        poses.append(BonePose(_as_int(index, join(path, 7 * i)), *matrix))
    return tuple(poses)


def decode_triangles(node: Any, path: str) -> Tuple[Triangle, ...]:
    return tuple(Triangle(*group) for group in _unpack_ints(node, path, 3))


def decode_z_order_offsets(node: Any, path: str) -> Tuple[ZOrderOffset, ...]:
    return tuple(ZOrderOffset(*group) for group in _unpack_ints(node, path, 2))


# Object-shaped primitives

def decode_transform(node: Any, path: str) -> Transform:
    obj = expect_object(node, path)
    return Transform(
        x=optional(obj, "x", decode_number, path, "transform"),
        y=optional(obj, "y", decode_number, path, "transform"),
        sk_x=optional(obj, "skX", decode_number, path, "transform"),
        sk_y=optional(obj, "skY", decode_number, path, "transform"),
        sc_x=optional(obj, "scX", decode_number, path, "transform"),
        sc_y=optional(obj, "scY", decode_number, path, "transform"),
    )


def decode_color(node: Any, path: str) -> Color:
    obj = expect_object(node, path)
    channels = {}
    for key in ("aM", "rM", "gM", "bM", "aO", "rO", "gO", "bO"):
        channels[f"{key[0]}_{key[1].lower()}"] = optional(obj, key, decode_number, path, "color")
    return Color(**channels)


def decode_action(node: Any, path: str) -> Action:
    """Decode a ``[verb, argument]`` string pair."""
    values = expect_array(node, path)
    if len(values) != 2:
        raise ArityViolation(path, 2, len(values))
    return Action(
        verb=decode_string(values[0], join(path, 0)),
        argument=decode_string(values[1], join(path, 1)),
    )


decode_actions = sequence_of(decode_action)
decode_ints = sequence_of(decode_int)
decode_numbers = sequence_of(decode_number)
decode_strings = sequence_of(decode_string)
