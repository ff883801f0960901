# tests/conftest.py

import pytest

from samples import GIF, JPEG, JUNK, PNG, WEBP


@pytest.fixture
def photo_dir(tmp_path):
    """A small folder tree with good, wrong and unknown files plus filtered ones."""
    root = tmp_path / "album"
    (root / "sub").mkdir(parents=True)
    (root / "__MACOSX").mkdir()
    (root / "a.png").write_bytes(PNG)
    (root / "b.jpg").write_bytes(GIF)
    (root / "c.dat").write_bytes(JUNK)
    (root / "sub" / "IMG_001").write_bytes(WEBP)
    (root / ".DS_Store").write_bytes(b"\x00\x00\x00\x01Bud1")
    (root / "__MACOSX" / "._a.png").write_bytes(b"\x00\x05\x16\x07")
    return root
