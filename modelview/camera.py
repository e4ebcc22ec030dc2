"""A fixed camera looking at a target point."""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from modelview.linalg import look_at


def _vector(*components: float):
    return lambda: np.array(components, dtype=np.float64)


@dataclass(eq=False)
class Camera:
    """Camera defined by its position, the point it looks at and its up direction."""

    position: np.ndarray = field(default_factory=_vector(0.0, 0.0, 7.5))
    target: np.ndarray = field(default_factory=_vector(0.0, 0.0, 0.0))
    up: np.ndarray = field(default_factory=_vector(0.0, 1.0, 0.0))

    def __post_init__(self) -> None:
        self.position = np.array(self.position, dtype=np.float64)
        self.target = np.array(self.target, dtype=np.float64)
        self.up = np.array(self.up, dtype=np.float64)

    def view_matrix(self) -> np.ndarray:
        """Return the world-to-view matrix."""
        return look_at(self.position, self.target, self.up)