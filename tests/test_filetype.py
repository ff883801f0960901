# tests/test_filetype.py

import pytest

from extfix.errors import FileReadError
from extfix.filetype import SIGNATURE_LENGTH, detect, detect_source, read_prefix
from extfix.model import DetectedFormat

from samples import GIF, JPEG, PNG, WEBP


class TestDetect:
    @pytest.mark.parametrize("prefix, expected", [
        (bytes.fromhex("89504E470D0A1A0A"), DetectedFormat.PNG),
        (bytes.fromhex("FFD8FFE000104A464946"), DetectedFormat.JPEG),
        (bytes.fromhex("474946383961"), DetectedFormat.GIF),
        (bytes.fromhex("524946460000000057454250"), DetectedFormat.WEBP),
        (bytes.fromhex("00010203"), DetectedFormat.UNKNOWN),
    ])
    def test_known_signatures(self, prefix, expected):
        assert detect(prefix) is expected

    def test_gif87a(self):
        assert detect(b"GIF87a") is DetectedFormat.GIF

    @pytest.mark.parametrize("prefix", [b"", b"\x89", b"\xFF\xD8", b"GIF", b"RIFF", b"RIFF\x00\x00\x00\x00WEB"])
    def test_short_prefix_is_unknown(self, prefix):
        assert detect(prefix) is DetectedFormat.UNKNOWN

    def test_riff_without_webp_tag(self):
        assert detect(b"RIFF\x24\x00\x00\x00WAVEfmt ") is DetectedFormat.UNKNOWN

    def test_none_is_unknown(self):
        assert detect(None) is DetectedFormat.UNKNOWN

    def test_only_leading_bytes_matter(self):
        assert detect(b"xx" + PNG) is DetectedFormat.UNKNOWN


class TestReadPrefix:
    def test_bytes_source_is_truncated(self):
        assert read_prefix(WEBP) == WEBP[:SIGNATURE_LENGTH]

    def test_reads_only_prefix_from_disk(self, tmp_path):
        fp = tmp_path / "big.bin"
        fp.write_bytes(JPEG + b"\x00" * 100_000)
        assert read_prefix(fp) == JPEG[:SIGNATURE_LENGTH]

    def test_short_file(self, tmp_path):
        fp = tmp_path / "tiny"
        fp.write_bytes(b"GIF")
        assert read_prefix(fp) == b"GIF"

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(FileReadError) as excinfo:
            read_prefix(tmp_path / "gone.png", label="album/gone.png")
        assert excinfo.value.path == "album/gone.png"

    def test_detect_source(self, tmp_path):
        fp = tmp_path / "x.jpg"
        fp.write_bytes(GIF)
        assert detect_source(fp) is DetectedFormat.GIF
        assert detect_source(PNG) is DetectedFormat.PNG
