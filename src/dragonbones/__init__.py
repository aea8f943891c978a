"""
DragonBones: a typed decoder for DragonBones skeleton animation data.

This library turns the loosely structured JSON exported by the DragonBones
authoring tool into immutable, fully defaulted records that can be consumed
by renderers and JAX tree utilities alike.
"""

import jax
jax.config.update("jax_enable_x64", True)

# Import core modules
from . import core
from . import io
from .io import decode, encode, load_dragonbones

__version__ = "0.1.0"
__all__ = ["core", "io", "decode", "encode", "load_dragonbones"]
