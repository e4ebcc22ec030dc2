import pytest
from PIL import Image

from modelview.texture import ImageData, Texture, TextureError, load_image


def _save(tmp_path, image, name="img.png"):
    path = tmp_path / name
    image.save(path)
    return path


def test_load_rgb_image(tmp_path):
    image = Image.new("RGB", (2, 1))
    image.putpixel((0, 0), (10, 20, 30))
    image.putpixel((1, 0), (40, 50, 60))
    data = load_image(_save(tmp_path, image))
    assert data == ImageData(2, 1, 3, bytes([10, 20, 30, 40, 50, 60]))


def test_load_image_flips_rows(tmp_path):
    image = Image.new("RGB", (1, 2))
    image.putpixel((0, 0), (255, 0, 0))
    image.putpixel((0, 1), (0, 0, 255))
    data = load_image(_save(tmp_path, image))
    assert data.pixels == bytes([0, 0, 255, 255, 0, 0])


@pytest.mark.parametrize(
    "mode, channels", [("L", 1), ("LA", 2), ("RGB", 3), ("RGBA", 4)]
)
def test_channel_count_follows_mode(tmp_path, mode, channels):
    data = load_image(_save(tmp_path, Image.new(mode, (3, 2))))
    assert data.channels == channels
    assert len(data.pixels) == 3 * 2 * channels


def test_palette_image_without_transparency_is_rgb(tmp_path):
    image = Image.new("RGB", (2, 2), (1, 2, 3)).convert("P")
    data = load_image(_save(tmp_path, image))
    assert data.channels == 3
    assert data.pixels[:3] == bytes([1, 2, 3])


def test_missing_file_raises(tmp_path):
    with pytest.raises(TextureError):
        load_image(tmp_path / "absent.png")


def test_garbage_file_raises(tmp_path):
    path = tmp_path / "broken.png"
    path.write_bytes(b"not an image")
    with pytest.raises(TextureError):
        load_image(path)


def test_texture_rejects_two_channel_images(tmp_path):
    path = _save(tmp_path, Image.new("LA", (2, 2)))
    with pytest.raises(TextureError, match="unknown texture format"):
        Texture(path)


def test_texture_missing_file_raises(tmp_path):
    with pytest.raises(TextureError, match="failed to load"):
        Texture(tmp_path / "absent.png")