"""Error kinds raised inside the validation workers.

Workers never let these escape: each one is turned into a terminal
status on its track. I/O failures use the builtin ``OSError`` family.
"""

from __future__ import annotations


class ValidationError(Exception):
    """Base class for result validation failures."""


class SizeMismatchError(ValidationError):
    """The reference image does not have the frame buffer's size."""

    def __init__(self, expected: int, actual: int, unit: str = "bytes"):
        self.expected = expected
        self.actual = actual
        super().__init__(f"Wrong reference image size: expected {expected} {unit}, got {actual}")


class UnsupportedSceneError(ValidationError):
    """A validator was invoked for a scene that is not validated."""


class UnsupportedModeError(ValidationError):
    """The image validator was invoked for a mode with no reference image."""


class HashMismatchError(ValidationError):
    """The scene digest differs from the expected one."""

    def __init__(self, expected: str, actual: str):
        self.expected = expected
        self.actual = actual
        super().__init__(f"Scene digest mismatch: expected {expected}, got {actual}")


class ComparatorExhaustedError(ValidationError):
    """A convergence test was fed a third image without being reset."""
