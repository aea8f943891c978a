"""Decode errors raised while building the typed skeleton model.

Every error carries the dotted path of the node that failed, e.g.
``armature[0].skin[1].slot[0].display[2].weights``.
"""


class DecodeError(ValueError):
    """Base class for all structural decode failures."""

    def __init__(self, path: str, message: str):
        self.path = path
        super().__init__(f"{path or '<root>'}: {message}")


class MissingField(DecodeError):
    """A required field is absent (or null) in the source node."""

    def __init__(self, path: str, field: str):
        self.field = field
        super().__init__(path, f"missing required field '{field}'")


class ShapeMismatch(DecodeError):
    """A node has a different kind than the schema expects."""

    def __init__(self, path: str, expected: str, actual: str):
        self.expected = expected
        self.actual = actual
        super().__init__(path, f"expected {expected}, got {actual}")


class ArityViolation(DecodeError):
    """A packed numeric array length is not a multiple of its record arity."""

    def __init__(self, path: str, arity: int, length: int):
        self.arity = arity
        self.length = length
        super().__init__(path, f"length {length} is not a multiple of {arity}")


class VersionParse(DecodeError):
    """A version string is not a valid semantic version."""

    def __init__(self, path: str, raw):
        self.raw = raw
        super().__init__(path, f"invalid semantic version {raw!r}")
