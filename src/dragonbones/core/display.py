"""Display objects attached to skin slots.

A display is a single record whose ``kind`` selects which payload fields are
meaningful. Fields that do not apply to the kind hold empty tuples or their
documented defaults, so consumers never have to test for missing values.
Display types this package does not know keep the whole source node in
``raw`` so that nothing is lost.
"""

import enum
from typing import Any, Optional, Tuple

from flax import struct

from .model import BonePose, Point, SlotPose, Transform, Triangle, VertexWeight


class DisplayKind(enum.Enum):
    IMAGE = "image"
    ARMATURE = "armature"
    MESH = "mesh"
    BOUNDING_BOX = "boundingBox"
    UNKNOWN = None

    @property
    def has_vertices(self) -> bool:
        return self in (DisplayKind.MESH, DisplayKind.BOUNDING_BOX)

    @property
    def has_path(self) -> bool:
        return self in (DisplayKind.MESH, DisplayKind.ARMATURE)


class BoundBoxType(enum.Enum):
    RECTANGLE = "rectangle"
    ELLIPSE = "ellipse"
    POLYGON = "polygon"
    UNKNOWN = None


@struct.dataclass
class Display:
    """One renderable shape of a skin slot.

    Attributes:
        name: Texture name for images and meshes, armature name for
              sub-armatures.
        kind: Dispatched display type.
        type_tag: The ``type`` string exactly as found in the source.
        path: Sub-armature name or mesh texture path (armature, mesh).
        share: Name of the mesh whose vertices this mesh shares (mesh).
        inherit_fdd: Whether a shared mesh inherits free-form deform
                     animation (mesh).
        sub_type: Bounding box shape (bounding box).
        sub_type_tag: The ``subType`` string exactly as found in the source.
        color: Bounding box debug color, passed through untouched.
        transform: Offset relative to the slot's bone.
        pivot: Registration point in normalized texture space.
        width, height: Size of rectangle and ellipse bounding boxes.
        vertices: Mesh or polygon vertices relative to the pivot.
        uvs, triangles, weights, slot_pose, bone_pose: Mesh geometry and
              skinning data.
        raw: Deep copy of the source node for ``DisplayKind.UNKNOWN``.
    """
    name: str = struct.field(pytree_node=False)
    kind: DisplayKind = struct.field(pytree_node=False, default=DisplayKind.IMAGE)
    type_tag: str = struct.field(pytree_node=False, default="image")
    path: str = struct.field(pytree_node=False, default="")
    share: str = struct.field(pytree_node=False, default="")
    inherit_fdd: bool = struct.field(pytree_node=False, default=True)
    sub_type: BoundBoxType = struct.field(pytree_node=False, default=BoundBoxType.RECTANGLE)
    sub_type_tag: str = struct.field(pytree_node=False, default="rectangle")
    color: Any = struct.field(pytree_node=False, default=0)
    transform: Transform = struct.field(default_factory=Transform)
    pivot: Point = struct.field(default_factory=lambda: Point(0.5, 0.5))
    width: float = 0.0
    height: float = 0.0
    vertices: Tuple[Point, ...] = ()
    uvs: Tuple[Point, ...] = ()
    triangles: Tuple[Triangle, ...] = ()
    weights: Tuple[VertexWeight, ...] = ()
    slot_pose: Tuple[SlotPose, ...] = ()
    bone_pose: Tuple[BonePose, ...] = ()
    raw: Optional[Any] = struct.field(pytree_node=False, default=None, hash=False)
