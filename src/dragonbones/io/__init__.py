"""I/O utilities for DragonBones skeleton data.

This module provides the decoder from parsed JSON trees to the typed model,
the inverse encoder and a file loader built on the decoder.
"""

from .decoder import decode
from .encoder import encode
from .loader import load_dragonbones

__all__ = ["decode", "encode", "load_dragonbones"]
