import logging

import pytest

from pnm_editor.models.errors import IncompatibleImagesError
from pnm_editor.models.image_model import ImageFormat, NetpbmImage
from pnm_editor.services.collage_service import CollageService


@pytest.fixture
def collage() -> CollageService:
    return CollageService()


def _gray(rows, max_value=255, name="g.pgm"):
    return NetpbmImage(ImageFormat.PGM, rows, max_value, name)


def test_horizontal_places_second_image_to_the_right(collage):
    a = _gray([[1, 2], [3, 4]])
    b = _gray([[5, 6], [7, 8]])
    result = collage.compose("horizontal", a, b, "out.pgm")
    assert (result.width, result.height) == (4, 2)
    assert result.pixels.tolist() == [[1, 2, 5, 6], [3, 4, 7, 8]]
    assert result.name == "out.pgm"


def test_vertical_places_second_image_below(collage):
    a = NetpbmImage(ImageFormat.PBM, [[True, False]])
    b = NetpbmImage(ImageFormat.PBM, [[False, False]])
    result = collage.compose("vertical", a, b, "out.pbm")
    assert (result.width, result.height) == (2, 2)
    assert result.pixels.tolist() == [[True, False], [False, False]]
    assert result.max_color_value is None


def test_pixmap_dimensions(collage):
    a = NetpbmImage(ImageFormat.PPM, [[[1, 2, 3]]] * 3, 9)
    result = collage.compose("horizontal", a, a, "wide.ppm")
    assert result.pixels.shape == (3, 2, 3)


def test_max_is_the_larger_one(collage, caplog):
    a = _gray([[10]], max_value=15)
    b = _gray([[200]], max_value=255)
    with caplog.at_level(logging.WARNING):
        result = collage.compose("horizontal", a, b, "mix.pgm")
    assert result.max_color_value == 255
    # отсчёты не перенормируются
    assert result.pixels.tolist() == [[10, 200]]
    assert "mix.pgm" in caplog.text


def test_sources_unchanged(collage):
    a = _gray([[1]])
    b = _gray([[2]])
    collage.compose("vertical", a, b, "out.pgm")
    assert a.pixels.tolist() == [[1]]
    assert b.pixels.tolist() == [[2]]


def test_extension_check_is_case_insensitive(collage):
    a = _gray([[1]])
    assert collage.compose("horizontal", a, a, "OUT.PGM").name == "OUT.PGM"


@pytest.mark.parametrize(
    "direction, first, second, output",
    [
        ("diagonal", _gray([[1]]), _gray([[1]]), "out.pgm"),
        ("horizontal", _gray([[1]]), NetpbmImage(ImageFormat.PBM, [[True]]), "out.pgm"),
        ("horizontal", _gray([[1]]), _gray([[1, 2]]), "out.pgm"),
        ("vertical", _gray([[1]]), _gray([[1], [2]]), "out.pgm"),
        ("horizontal", _gray([[1]]), _gray([[1]]), "out.ppm"),
    ],
)
def test_incompatible(collage, direction, first, second, output):
    with pytest.raises(IncompatibleImagesError):
        collage.compose(direction, first, second, output)
