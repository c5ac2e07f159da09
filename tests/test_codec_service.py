"""
Tests for reading and writing plain Netpbm text.
"""

import numpy as np
import pytest

from pnm_editor.models.errors import InvalidFormatError, UnsupportedFormatError
from pnm_editor.models.image_model import ImageFormat, NetpbmImage
from pnm_editor.services.codec_service import CodecService

from conftest import BITMAP, GRAYMAP, PIXMAP


@pytest.fixture
def codec() -> CodecService:
    return CodecService()


class TestParse:
    def test_bitmap(self, codec):
        image = codec.parse(BITMAP)
        assert image.format is ImageFormat.PBM
        assert (image.width, image.height) == (2, 2)
        assert image.max_color_value is None
        assert image.pixels.tolist() == [[False, True], [True, False]]

    def test_graymap_with_comment(self, codec):
        image = codec.parse(GRAYMAP)
        assert image.format is ImageFormat.PGM
        assert (image.width, image.height) == (3, 2)
        assert image.max_color_value == 255
        assert image.pixels.tolist() == [[0, 100, 200], [50, 150, 255]]

    def test_pixmap(self, codec):
        image = codec.parse(PIXMAP)
        assert image.format is ImageFormat.PPM
        assert image.pixels.shape == (1, 2, 3)
        assert image.pixels[0, 1].tolist() == [255, 0, 128]

    def test_comments_blank_lines_and_free_layout(self, codec):
        text = "# header\n\nP2 # magic\n  2\t2 # size\n\n9\n1 2 3\n# body comment\n4\n"
        image = codec.parse(text)
        assert image.pixels.tolist() == [[1, 2], [3, 4]]
        assert image.max_color_value == 9

    def test_extra_tokens_ignored(self, codec):
        image = codec.parse("P1\n1 1\n1\n0 1 1\n")
        assert image.pixels.tolist() == [[True]]

    def test_non_positive_dimensions_are_skipped(self, codec):
        image = codec.parse("P1\n0 0\nwidth height\n2 1\n1 0\n")
        assert (image.width, image.height) == (2, 1)
        assert image.pixels.tolist() == [[True, False]]

    def test_dimension_scan_is_bounded(self):
        text = "P1\n" + "0 0\n" * 10 + "1 1\n1\n"
        with pytest.raises(InvalidFormatError):
            CodecService(max_header_lines=5).parse(text)
        assert CodecService(max_header_lines=50).parse(text).pixels.tolist() == [[True]]

    def test_missing_dimensions(self, codec):
        with pytest.raises(InvalidFormatError):
            codec.parse("P1\n0 0\n")

    def test_empty_text(self, codec):
        with pytest.raises(InvalidFormatError):
            codec.parse("# only a comment\n")

    def test_unknown_magic(self, codec):
        with pytest.raises(UnsupportedFormatError):
            codec.parse("P6\n1 1\n255\n0 0 0\n")

    def test_expected_magic_mismatch(self, codec):
        with pytest.raises(InvalidFormatError):
            codec.parse(BITMAP, expected=ImageFormat.PGM)

    def test_truncated_body(self, codec):
        with pytest.raises(InvalidFormatError):
            codec.parse("P2\n2 2\n255\n1 2 3\n")

    def test_bitmap_value_not_a_bit(self, codec):
        with pytest.raises(InvalidFormatError):
            codec.parse("P1\n2 1\n0 2\n")

    def test_sample_above_max(self, codec):
        with pytest.raises(InvalidFormatError):
            codec.parse("P2\n1 1\n15\n16\n")

    def test_negative_sample(self, codec):
        with pytest.raises(InvalidFormatError):
            codec.parse("P2\n1 1\n15\n-1\n")

    @pytest.mark.parametrize("max_value", ["0", "65536", "-3", "abc"])
    def test_bad_max_color(self, codec, max_value):
        with pytest.raises(InvalidFormatError):
            codec.parse(f"P3\n1 1\n{max_value}\n0 0 0\n")

    def test_non_numeric_sample(self, codec):
        with pytest.raises(InvalidFormatError):
            codec.parse("P2\n2 1\n255\n1 x\n")

    @pytest.mark.parametrize(
        "text",
        [
            "P2\n1 1\n255\n99999999999999999999\n",
            "P3\n1 1\n255\n0 -99999999999999999999 0\n",
            "P1\n1 1\n99999999999999999999\n",
            "P2\n99999999999999999999 1\n255\n0\n",
            "P2\n1 99999999999999999999\n255\n0\n",
            "P2\n1 1\n99999999999999999999\n0\n",
        ],
        ids=["sample", "negative-sample", "bit", "width", "height", "max"],
    )
    def test_oversized_numbers(self, codec, text):
        with pytest.raises(InvalidFormatError):
            codec.parse(text)

    @pytest.mark.parametrize("token", ["1_0", "٣", "+", "0x1", "1.0"])
    def test_only_ascii_decimal_samples(self, codec, token):
        with pytest.raises(InvalidFormatError):
            codec.parse(f"P2\n1 1\n255\n{token}\n")

    def test_non_ascii_max_color(self, codec):
        with pytest.raises(InvalidFormatError):
            codec.parse("P2\n1 1\n2_55\n0\n")

    def test_signed_sample_is_accepted_in_range(self, codec):
        assert codec.parse("P2\n1 1\n255\n+7\n").pixels.tolist() == [[7]]

    def test_invalid_format_is_value_error(self, codec):
        with pytest.raises(ValueError):
            codec.parse("P2\n1 1\n15\n99\n")


class TestSerialize:
    def test_bitmap_after_rotation(self, codec):
        image = codec.parse(BITMAP)
        rotated = image.with_pixels(np.rot90(image.pixels))
        assert codec.serialize(rotated) == "P1\n2 2\n1 0\n0 1\n"

    def test_graymap_layout(self, codec):
        assert codec.serialize(codec.parse(GRAYMAP)) == "P2\n3 2\n255\n0 100 200\n50 150 255\n"

    def test_pixmap_one_triple_per_line(self, codec):
        assert codec.serialize(codec.parse(PIXMAP)) == "P3\n2 1\n255\n10 20 30\n255 0 128\n"

    def test_no_trailing_spaces(self, codec):
        text = codec.serialize(codec.parse(GRAYMAP))
        assert all(line == line.rstrip() for line in text.splitlines())

    def test_parse_serialize_parse_preserves_content(self, codec):
        for text in (BITMAP, GRAYMAP, PIXMAP):
            image = codec.parse(text)
            assert codec.parse(codec.serialize(image)).same_content(image)


class TestFiles:
    def test_probe(self, codec, image_dir):
        assert codec.probe(image_dir / "bits.pbm") is ImageFormat.PBM
        assert codec.probe(image_dir / "gray.pgm") is ImageFormat.PGM
        assert codec.probe(image_dir / "color.ppm") is ImageFormat.PPM
        assert codec.probe(image_dir / "other.txt") is None
        assert codec.probe(image_dir / "missing.pbm") is None

    def test_probe_skips_leading_comments(self, codec, tmp_path):
        path = tmp_path / "c.pgm"
        path.write_text("# created by hand\n\nP2\n1 1\n1\n0\n", encoding="ascii")
        assert codec.probe(path) is ImageFormat.PGM

    def test_load_sets_path(self, codec, image_dir):
        image = codec.load(image_dir / "gray.pgm")
        assert image.name == "gray.pgm"
        assert image.path == image_dir / "gray.pgm"

    def test_load_missing_file(self, codec, tmp_path):
        with pytest.raises(FileNotFoundError):
            codec.load(tmp_path / "nope.pbm")

    def test_load_directory(self, codec, tmp_path):
        with pytest.raises(FileNotFoundError):
            codec.load(tmp_path)

    def test_load_binary_garbage(self, codec, tmp_path):
        path = tmp_path / "bad.pgm"
        path.write_bytes(b"\xff\xfe\x00\x81")
        with pytest.raises(InvalidFormatError):
            codec.load(path)

    def test_save_creates_directories(self, codec, tmp_path):
        image = NetpbmImage(ImageFormat.PGM, [[1, 2]], 3)
        path = codec.save(image, tmp_path / "a" / "b" / "out.pgm")
        assert path.read_text(encoding="ascii") == "P2\n2 1\n3\n1 2\n"
