import pytest

from pnm_editor.config import EditorConfig
from pnm_editor.services.session_service import SessionService

BITMAP = "P1\n2 2\n0 1\n1 0\n"
GRAYMAP = "P2\n# маленький градиент\n3 2\n255\n0 100 200\n50 150 255\n"
PIXMAP = "P3\n2 1\n255\n10 20 30\n255 0 128\n"


@pytest.fixture
def image_dir(tmp_path):
    """Каталог с тремя корректными файлами и одним чужим."""
    directory = tmp_path / "images"
    directory.mkdir()
    (directory / "bits.pbm").write_text(BITMAP, encoding="ascii")
    (directory / "gray.pgm").write_text(GRAYMAP, encoding="utf-8")
    (directory / "color.ppm").write_text(PIXMAP, encoding="ascii")
    (directory / "other.txt").write_text("P6\n1 1\n255\n", encoding="ascii")
    return directory


@pytest.fixture
def config(tmp_path, image_dir):
    return EditorConfig(image_dir=image_dir, output_dir=tmp_path / "out")


@pytest.fixture
def sessions(config):
    return SessionService(config)
