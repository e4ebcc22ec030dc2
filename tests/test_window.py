import pytest

from modelview.window import Window, WindowError, WindowProps


def test_props_defaults():
    props = WindowProps()
    assert (props.width, props.height, props.title) == (1280, 960, "3D Model Viewer")


def test_aspect_ratio_invariant():
    props = WindowProps(width=800, height=600, title="view")
    assert props.aspect_ratio * props.height == pytest.approx(props.width)


@pytest.mark.parametrize("width,height", [(0, 960), (1280, 0), (-5, 10)])
def test_invalid_size_rejected(width, height):
    with pytest.raises(WindowError):
        Window(width, height, "view")