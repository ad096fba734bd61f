"""Schema registry compatibility levels."""

from __future__ import annotations

from enum import Enum


class CompatibilityLevel(str, Enum):
    """Compatibility rule a registry enforces for a subject.

    BACKWARD: consumers using the new schema can read data written with the old one.
    FORWARD: consumers using the old schema can read data written with the new one.
    FULL: both. The *_TRANSITIVE variants check against every registered
    version instead of only the latest.
    """

    NONE = "NONE"
    BACKWARD = "BACKWARD"
    BACKWARD_TRANSITIVE = "BACKWARD_TRANSITIVE"
    FORWARD = "FORWARD"
    FORWARD_TRANSITIVE = "FORWARD_TRANSITIVE"
    FULL = "FULL"
    FULL_TRANSITIVE = "FULL_TRANSITIVE"

    @property
    def is_transitive(self) -> bool:
        return self.value.endswith("_TRANSITIVE")

    @property
    def checks_backward(self) -> bool:
        return self.value.startswith(("BACKWARD", "FULL"))

    @property
    def checks_forward(self) -> bool:
        return self.value.startswith(("FORWARD", "FULL"))
