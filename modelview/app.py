"""The model viewer application and its command-line entry point."""

from __future__ import annotations

import math
import sys
import time
from dataclasses import dataclass, field
from enum import Enum
from os import PathLike
from pathlib import Path
from typing import Iterable

import numpy as np

from modelview.camera import Camera
from modelview.linalg import perspective
from modelview.model import Model
from modelview.shader import Shader
from modelview.transform import Transform
from modelview.window import Window

DEFAULT_MODEL_PATH = "assets/models/backpack/backpack.obj"
VERTEX_SHADER_PATH = "assets/shaders/vert.glsl"
FRAGMENT_SHADER_PATH = "assets/shaders/frag.glsl"

LIGHT_SPEED = 2.5
ROTATE_SPEED = 90.0


class Key(str, Enum):
    """Keys the viewer reacts to."""

    ESCAPE = "ESCAPE"
    L = "L"
    LEFT = "LEFT"
    RIGHT = "RIGHT"
    UP = "UP"
    DOWN = "DOWN"


@dataclass(eq=False)
class SceneState:
    """What the user controls: the model's transform and the light position."""

    transform: Transform = field(default_factory=Transform)
    light_pos: np.ndarray = field(default_factory=lambda: np.array([2.0, 2.0, 2.0]))
    running: bool = True


def apply_input(state: SceneState, pressed: Iterable[Key], delta_time: float) -> SceneState:
    """Update ``state`` for the keys held during a frame of ``delta_time`` seconds.

    With L held the arrows move the light, otherwise they rotate the model.
    """
    keys = set(pressed)
    if Key.ESCAPE in keys:
        state.running = False

    if Key.L in keys:
        step = LIGHT_SPEED * delta_time
        if Key.RIGHT in keys:
            state.light_pos[0] += step
        if Key.LEFT in keys:
            state.light_pos[0] -= step
        if Key.UP in keys:
            state.light_pos[1] -= step
        if Key.DOWN in keys:
            state.light_pos[1] += step
    else:
        step = ROTATE_SPEED * delta_time
        rotation = state.transform.rotation
        if Key.RIGHT in keys:
            rotation[1] += step
        if Key.LEFT in keys:
            rotation[1] -= step
        if Key.UP in keys:
            rotation[0] -= step
        if Key.DOWN in keys:
            rotation[0] += step
    return state


class App:
    """Opens a window, loads a model and renders it until closed."""

    def __init__(self, model_path: str | PathLike) -> None:
        self.window = Window()
        try:
            from pyglet import gl

            self._gl = gl
            self.state = SceneState()
            self.camera = Camera()
            self.model = Model(model_path)
            self.projection = perspective(
                math.radians(45.0), self.window.props.aspect_ratio, 0.1, 100.0
            )
            gl.glEnable(gl.GL_DEPTH_TEST)
        except BaseException:
            self.window.close()
            raise
        self._delta_time = 0.0
        self._last_frame = time.perf_counter()

    def run(self) -> None:
        """Render frames until Escape is pressed or the window is closed."""
        gl = self._gl
        try:
            shader = Shader(VERTEX_SHADER_PATH, FRAGMENT_SHADER_PATH)
            try:
                while self.state.running:
                    now = time.perf_counter()
                    self._delta_time = now - self._last_frame
                    self._last_frame = now

                    self.process_input()

                    gl.glClearColor(0.1, 0.1, 0.2, 1.0)
                    gl.glClear(gl.GL_COLOR_BUFFER_BIT | gl.GL_DEPTH_BUFFER_BIT)

                    shader.use()
                    shader.set_mat4("model", self.state.transform.model_matrix())
                    shader.set_mat4("view", self.camera.view_matrix())
                    shader.set_mat4("projection", self.projection)
                    shader.set_vec3("lightPos", self.state.light_pos)
                    shader.set_vec3("viewPos", self.camera.position)

                    self.model.draw(shader)
                    self.window.on_update()
            finally:
                shader.delete()
        finally:
            self.window.close()

    def process_input(self) -> None:
        """Read the keyboard and apply it to the scene."""
        pressed = {key for key in Key if self.window.is_pressed(key)}
        if self.window.should_close():
            self.state.running = False
        apply_input(self.state, pressed, self._delta_time)


def main(argv: list[str] | None = None) -> int:
    """View the model named on the command line, or the default one."""
    args = sys.argv[1:] if argv is None else argv
    model_path = Path(args[0]) if args else Path(DEFAULT_MODEL_PATH)

    if not model_path.exists():
        print(f"FATAL: Path does not exist: {model_path}", file=sys.stderr)
        return 1

    try:
        App(model_path).run()
    except Exception as exc:
        print(exc, file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())