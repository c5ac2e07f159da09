import pytest

from pnm_editor.models.image_model import ImageFormat, NetpbmImage
from pnm_editor.services.preview_service import PreviewService


@pytest.fixture
def preview() -> PreviewService:
    return PreviewService()


def test_bitmap_one_is_black(preview):
    pil = preview.to_pil_image(NetpbmImage(ImageFormat.PBM, [[True, False]]))
    assert pil.mode == "L"
    assert pil.size == (2, 1)
    assert [pil.getpixel((0, 0)), pil.getpixel((1, 0))] == [0, 255]


def test_graymap_is_scaled_to_8_bit(preview):
    pil = preview.to_pil_image(NetpbmImage(ImageFormat.PGM, [[0, 15, 65535]], 65535))
    assert pil.mode == "L"
    assert [pil.getpixel((x, 0)) for x in range(3)] == [0, 0, 255]


def test_pixmap_is_rgb(preview):
    pil = preview.to_pil_image(NetpbmImage(ImageFormat.PPM, [[[15, 0, 5]]], 15))
    assert pil.mode == "RGB"
    assert pil.getpixel((0, 0)) == (255, 0, 85)


def test_describe_sample(preview):
    gray = NetpbmImage(ImageFormat.PGM, [[1, 2], [3, 4]], 9)
    assert preview.describe_sample(gray, 1, 0) == "X: 1, Y: 0  серый: 2/9"
    assert preview.describe_sample(gray, 2, 0) == "—"
    assert preview.describe_sample(gray, None, None) == "—"

    color = NetpbmImage(ImageFormat.PPM, [[[1, 2, 3]]], 9)
    assert preview.describe_sample(color, 0, 0) == "X: 0, Y: 0  RGB: (1, 2, 3)/9"

    bits = NetpbmImage(ImageFormat.PBM, [[True]])
    assert preview.describe_sample(bits, 0, 0) == "X: 0, Y: 0  бит: 1"
