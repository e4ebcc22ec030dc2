"""An OpenGL 3.3 core window with keyboard state."""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_WIDTH = 1280
DEFAULT_HEIGHT = 960
DEFAULT_TITLE = "3D Model Viewer"


class WindowError(RuntimeError):
    """Raised when the window or its OpenGL context cannot be created."""


@dataclass
class WindowProps:
    """Requested window size and title."""

    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    title: str = DEFAULT_TITLE

    @property
    def aspect_ratio(self) -> float:
        return self.width / self.height


class Window:
    """A resizable window whose viewport follows its framebuffer size."""

    def __init__(
        self,
        width: int = DEFAULT_WIDTH,
        height: int = DEFAULT_HEIGHT,
        title: str = DEFAULT_TITLE,
    ) -> None:
        if width <= 0 or height <= 0:
            raise WindowError(f"failed to create window: invalid size {width}x{height}")
        self.props = WindowProps(width, height, title)
        self._closing = False
        try:
            import pyglet

            config = pyglet.gl.Config(
                double_buffer=True,
                depth_size=24,
                major_version=3,
                minor_version=3,
                forward_compatible=True,
            )
            native = pyglet.window.Window(
                width=width,
                height=height,
                caption=title,
                config=config,
                resizable=True,
            )
        except Exception as exc:
            raise WindowError("failed to create window") from exc

        self._gl = pyglet.gl
        self._key_symbols = pyglet.window.key
        self._handled = pyglet.event.EVENT_HANDLED
        self._keys = pyglet.window.key.KeyStateHandler()
        native.push_handlers(self._keys)
        native.push_handlers(on_close=self._on_close, on_resize=self._on_resize)
        native.switch_to()
        self._native = native

    def _on_close(self):
        self._closing = True
        return self._handled

    def _on_resize(self, width, height):
        fb_width, fb_height = self._native.get_framebuffer_size()
        self._gl.glViewport(0, 0, fb_width, fb_height)
        return self._handled

    @property
    def width(self) -> int:
        return self.props.width

    @property
    def height(self) -> int:
        return self.props.height

    def is_pressed(self, key) -> bool:
        """Whether the named key (e.g. ``"ESCAPE"`` or ``"L"``) is held down."""
        name = str(getattr(key, "value", key))
        symbol = getattr(self._key_symbols, name, None)
        if not isinstance(symbol, int):
            raise ValueError(f"unknown key: {name}")
        return bool(self._keys[symbol])

    def should_close(self) -> bool:
        """Whether the user asked for the window to be closed."""
        return self._closing

    def on_update(self) -> None:
        """Present the frame and process pending events."""
        if self._native is None:
            raise WindowError("window has been closed")
        self._native.flip()
        self._native.dispatch_events()

    def close(self) -> None:
        """Destroy the window; closing twice does nothing."""
        if self._native is not None:
            self._native.close()
            self._native = None