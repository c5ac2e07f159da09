import pytest

from pnm_editor.services.file_service import FileService


def test_existing_path_wins(image_dir, tmp_path):
    direct = tmp_path / "direct.pgm"
    direct.write_text("P2\n1 1\n1\n0\n", encoding="ascii")
    assert FileService(image_dir).resolve(str(direct)) == direct


def test_name_in_image_dir(image_dir):
    assert FileService(image_dir).resolve("gray.pgm") == image_dir / "gray.pgm"


def test_extension_is_added(image_dir):
    assert FileService(image_dir).resolve("bits") == image_dir / "bits.pbm"


def test_ppm_is_tried_first(image_dir):
    (image_dir / "twin.pgm").write_text("P2\n1 1\n1\n0\n", encoding="ascii")
    (image_dir / "twin.ppm").write_text("P3\n1 1\n1\n0 0 0\n", encoding="ascii")
    assert FileService(image_dir).resolve("twin") == image_dir / "twin.ppm"


def test_case_insensitive_match(image_dir):
    service = FileService(image_dir)
    assert service.resolve("GRAY.PGM") == image_dir / "gray.pgm"
    assert service.resolve("Color") == image_dir / "color.ppm"


def test_not_found(image_dir):
    with pytest.raises(FileNotFoundError):
        FileService(image_dir).resolve("absent")


def test_missing_directory(tmp_path):
    with pytest.raises(FileNotFoundError):
        FileService(tmp_path / "nowhere").resolve("x.pbm")
