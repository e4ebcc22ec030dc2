import pytest

from modelview.shader import Shader, ShaderError, read_sources


@pytest.fixture
def sources(tmp_path):
    vert = tmp_path / "vert.glsl"
    frag = tmp_path / "frag.glsl"
    vert.write_text("void main() { gl_Position = vec4(0); }\n")
    frag.write_text("out vec4 c; void main() { c = vec4(1); }\n")
    return vert, frag


def test_read_sources_returns_both_in_order(sources):
    vert, frag = sources
    assert read_sources(vert, frag) == (vert.read_text(), frag.read_text())


def test_missing_vertex_source(sources, tmp_path):
    _, frag = sources
    with pytest.raises(ShaderError, match="vertex"):
        read_sources(tmp_path / "none.glsl", frag)


def test_missing_fragment_source(sources, tmp_path):
    vert, _ = sources
    with pytest.raises(ShaderError, match="fragment"):
        read_sources(vert, tmp_path / "none.glsl")


def test_vertex_error_reported_first_when_both_missing(tmp_path):
    with pytest.raises(ShaderError, match="vertex"):
        read_sources(tmp_path / "a.glsl", tmp_path / "b.glsl")


def test_shader_constructor_reports_missing_source(tmp_path):
    with pytest.raises(ShaderError, match="vertex"):
        Shader(tmp_path / "a.glsl", tmp_path / "b.glsl")