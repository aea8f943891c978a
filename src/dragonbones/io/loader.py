"""Loading of DragonBones ``*_ske.json`` files from disk."""

import json
import logging
from pathlib import Path
from typing import Union

from dragonbones.core.model import Document
from .decoder import decode

logger = logging.getLogger(__name__)


def load_dragonbones(path: Union[str, Path]) -> Document:
    """Load a DragonBones skeleton file and decode it.

    Args:
        path: Path to a ``*_ske.json`` file.

    Returns:
        Document: The decoded skeleton data.
    """
    path = Path(path)
    logger.debug("Loading DragonBones data from %s", path)
    with path.open(encoding="utf-8") as f:
        root = json.load(f)
    return decode(root)
