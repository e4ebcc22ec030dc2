"""Position, rotation and scale of a model in the world."""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from modelview import linalg

_X_AXIS = (1.0, 0.0, 0.0)
_Y_AXIS = (0.0, 1.0, 0.0)
_Z_AXIS = (0.0, 0.0, 1.0)


@dataclass(eq=False)
class Transform:
    """Model placement; ``rotation`` holds Euler angles in degrees."""

    position: np.ndarray = field(default_factory=lambda: np.zeros(3))
    rotation: np.ndarray = field(default_factory=lambda: np.zeros(3))
    scale: np.ndarray = field(default_factory=lambda: np.ones(3))

    def __post_init__(self) -> None:
        self.position = np.array(self.position, dtype=np.float64)
        self.rotation = np.array(self.rotation, dtype=np.float64)
        self.scale = np.array(self.scale, dtype=np.float64)

    def model_matrix(self) -> np.ndarray:
        """Translate, then rotate about X, Y and Z, then scale."""
        angles = np.radians(self.rotation)
        model = linalg.translate(linalg.identity(), self.position)
        model = linalg.rotate(model, angles[0], _X_AXIS)
        model = linalg.rotate(model, angles[1], _Y_AXIS)
        model = linalg.rotate(model, angles[2], _Z_AXIS)
        return linalg.scale(model, self.scale)