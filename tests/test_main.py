# tests/test_main.py

import json
import zipfile

import pytest

import main

from samples import GIF, JUNK, PNG, WEBP


def _names(path):
    with zipfile.ZipFile(path) as zf:
        return sorted(zf.namelist())


def test_end_to_end(photo_dir, tmp_path, capsys):
    out = tmp_path / "out" / "fixed.zip"
    report = tmp_path / "report.csv"

    code = main.main(["--input", str(photo_dir), "--output", str(out), "--report", str(report)])

    assert code == 0
    assert _names(out) == ["album/a.png", "album/b.gif", "album/c.dat", "album/sub/IMG_001.webp"]
    with zipfile.ZipFile(out) as zf:
        assert zf.read("album/b.gif") == GIF
        assert zf.read("album/sub/IMG_001.webp") == WEBP
        assert zf.read("album/c.dat") == JUNK
    assert report.exists()

    printed = capsys.readouterr().out
    assert "FIXED album/b.jpg -> b.gif (Detected: GIF)" in printed
    assert "Total: 4 | Fixed: 2 | Skipped: 2" in printed


def test_config_file_supplies_defaults(photo_dir, tmp_path):
    out = tmp_path / "from_config.zip"
    cfg = tmp_path / "params.json"
    cfg.write_text(json.dumps({"input": str(photo_dir), "output": str(out)}), encoding="utf-8")

    assert main.main(["--config", str(cfg), "--quiet"]) == 0
    assert "album/a.png" in _names(out)


def test_missing_input(tmp_path):
    with pytest.raises(SystemExit) as excinfo:
        main.main(["--input", str(tmp_path / "nope")])
    assert excinfo.value.code == 2


def test_only_filtered_files(tmp_path, capsys):
    root = tmp_path / "empty"
    root.mkdir()
    (root / ".DS_Store").write_bytes(PNG)

    assert main.main(["--input", str(root), "--output", str(tmp_path / "x.zip")]) == 2
    assert not (tmp_path / "x.zip").exists()
    assert "No valid files" in capsys.readouterr().err


def test_archive_failure_exit_code(photo_dir, tmp_path, monkeypatch, capsys):
    from extfix.errors import ArchiveError

    def broken(entries):
        raise ArchiveError("disk full")

    monkeypatch.setattr("extfix.pipeline.build_archive", broken)
    out = tmp_path / "fixed.zip"

    assert main.main(["--input", str(photo_dir), "--output", str(out), "--quiet"]) == 3
    assert not out.exists()
    assert "Please try again" in capsys.readouterr().err


def test_progress_line_shows_percent(photo_dir, tmp_path, capsys):
    assert main.main(["--input", str(photo_dir), "--output", str(tmp_path / "x.zip")]) == 0
    printed = capsys.readouterr().out
    assert "[1/4 25%] OK    album/a.png" in printed
    assert "[4/4 100%] FIXED album/sub/IMG_001 -> IMG_001.webp" in printed


def test_output_inside_input_is_not_packed_again(photo_dir):
    out = photo_dir / "fixed_images.zip"
    report = photo_dir / "report.csv"
    argv = ["--input", str(photo_dir), "--output", str(out), "--report", str(report), "--quiet"]

    assert main.main(argv) == 0
    assert main.main(argv) == 0
    assert _names(out) == ["album/a.png", "album/b.gif", "album/c.dat", "album/sub/IMG_001.webp"]


def test_unwritable_output_exit_code(photo_dir, tmp_path, capsys):
    blocker = tmp_path / "not_a_dir"
    blocker.write_bytes(b"")

    code = main.main(["--input", str(photo_dir), "--output", str(blocker / "fixed.zip"), "--quiet"])

    assert code == 3
    assert "[ERR] Failed to write output" in capsys.readouterr().err
