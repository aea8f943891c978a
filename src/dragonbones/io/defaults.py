"""Default values for optional DragonBones fields.

Defaults are keyed by ``(entity kind, source field name)`` using the camelCase
field names of the JSON format. All of them are constants except the armature
frame rate, which falls back to the document frame rate in a second pass
after the armature has been decoded (see ``resolve_frame_rate``).
"""

from typing import Any, Dict

from dragonbones.core.model import AnimationType, Armature, Color, Point, Transform


DEFAULTS: Dict[str, Dict[str, Any]] = {
    "document": {
        "frameRate": 24.0,
        "userData": None,
        "armature": (),
    },
    "armature": {
        # Resolved against the document by ``resolve_frame_rate``.
        "frameRate": None,
        "type": AnimationType.ARMATURE,
        "userData": None,
        "defaultActions": (),
        "bone": (),
        "slot": (),
        "skin": (),
        "ik": (),
        "animation": (),
    },
    "bone": {
        "transform": Transform(),
        "userData": None,
    },
    "slot": {
        "displayIndex": 0,
        "blendMode": "normal",
        "color": Color(),
        "userData": None,
        "actions": (),
    },
    "skin": {
        "slot": (),
    },
    "skinSlot": {
        "display": (),
    },
    "display": {
        "type": "image",
        "path": "",
        "share": "",
        "inheritFDD": True,
        "subType": "rectangle",
        "color": 0,
        "transform": Transform(),
        "pivot": Point(0.5, 0.5),
        "width": 0.0,
        "height": 0.0,
        "vertices": (),
        "uvs": (),
        "triangles": (),
        "weights": (),
        "slotPose": (),
        "bonePose": (),
    },
    "transform": {
        "x": 0.0,
        "y": 0.0,
        "skX": 0.0,
        "skY": 0.0,
        "scX": 1.0,
        "scY": 1.0,
    },
    "color": {
        "aM": 100.0,
        "rM": 100.0,
        "gM": 100.0,
        "bM": 100.0,
        "aO": 0.0,
        "rO": 0.0,
        "gO": 0.0,
        "bO": 0.0,
    },
    "ik": {
        "name": "",
        "bendPositive": True,
        "chain": 0,
        "weight": 0.0,
    },
    "animation": {
        "loop": 1,
        "duration": 1.0,
        "frame": (),
        "zOrder": (),
        "bone": (),
        "slot": (),
        "ffd": (),
    },
    "tween": {
        "tweenType": 0,
        "tweenEasing": None,
        "curve": (),
    },
    "actionFrame": {
        "duration": 1.0,
        "sound": "",
        "events": (),
        "actions": (),
    },
    "event": {
        "name": "",
        "bone": "",
        "slot": "",
        "ints": (),
        "floats": (),
        "strings": (),
    },
    "zOrderTimeline": {
        "frame": (),
    },
    "zOrderFrame": {
        "duration": 1.0,
        "zOrder": (),
    },
    "boneTimeline": {
        "scale": 1.0,
        "offset": 0.0,
        "frame": (),
    },
    "boneFrame": {
        "duration": 1.0,
        "transform": Transform(),
    },
    "slotTimeline": {
        "frame": (),
    },
    "slotFrame": {
        "duration": 1.0,
        "displayIndex": 0,
        "color": Color(),
        "actions": (),
    },
    "ffdTimeline": {
        "skin": "",
        "frame": (),
    },
    "ffdFrame": {
        "duration": 1.0,
        "offset": 0,
        "vertices": (),
    },
}

# Tween fields are flattened into every timeline frame node.
for _kind in ("boneFrame", "slotFrame", "ffdFrame"):
    DEFAULTS[_kind].update(DEFAULTS["tween"])


def default_for(kind: str, field: str) -> Any:
    """Return the default of ``field`` on an entity of the given kind.

    Raises:
        KeyError: If the field has no documented default, i.e. it is required.
    """
    try:
        return DEFAULTS[kind][field]
    except KeyError:
        raise KeyError(f"No default for field '{field}' of '{kind}'") from None


def resolve_frame_rate(armature: Armature, document_frame_rate: float) -> Armature:
    """Second default pass: give an armature without its own rate the document's."""
    if armature.frame_rate is not None:
        return armature
    return armature.replace(frame_rate=document_frame_rate)
