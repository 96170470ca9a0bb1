"""Status events emitted by the validation tracks."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional

LABEL_STARTING = "Starting..."
LABEL_COMPARING = "Comparing..."
LABEL_OK = "OK"
LABEL_FAILED = "Failed"
LABEL_ERROR = "Error"
LABEL_NOT_APPLICABLE = "N/A"


class Track(str, enum.Enum):
    SCENE = "scene"
    IMAGE = "image"


@dataclass(frozen=True)
class ValidationStatus:
    """One label update on a track. Progress updates carry ``ok=False``."""

    track: Track
    label: str
    ok: bool = False


@dataclass(frozen=True)
class SessionSummary:
    scene: Optional[ValidationStatus] = None
    image: Optional[ValidationStatus] = None

    @property
    def all_ok(self) -> bool:
        return bool(self.scene and self.scene.ok and self.image and self.image.ok)
