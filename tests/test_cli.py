"""Tests for the command-line entry point."""

import logging

import numpy as np
import pytest
from PIL import Image

from fls.cli import _build_parser, main


@pytest.fixture(autouse=True)
def restore_logging():
    """main() reconfigures the root logger; put it back after each test."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    for handler in root.handlers[:]:
        if handler not in handlers:
            root.removeHandler(handler)
    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(level)


@pytest.fixture
def gray_png(tmp_path):
    path = tmp_path / "gray.png"
    Image.new("RGB", (16, 10), (128, 128, 128)).save(str(path))
    return path


class TestParser:
    def test_defaults(self):
        args = _build_parser().parse_args(["in.png"])
        assert args.input == "in.png"
        assert args.scale == 1.0
        assert args.output == ""
        assert args.verbose is False

    def test_short_flags(self):
        args = _build_parser().parse_args(["in.png", "-s", "0.5", "-o", "x.png", "-v"])
        assert args.scale == 0.5
        assert args.output == "x.png"
        assert args.verbose is True

    def test_requires_input(self):
        with pytest.raises(SystemExit):
            _build_parser().parse_args([])


class TestMain:
    def test_explicit_output(self, gray_png, tmp_path):
        out = tmp_path / "result.png"
        main([str(gray_png), "-o", str(out)])

        with Image.open(out) as img:
            assert img.size == (16, 10)
            rgb = np.array(img.convert("RGB"))
        assert set(np.unique(rgb).tolist()) <= {0, 255}

    def test_scale(self, gray_png, tmp_path):
        out = tmp_path / "small.png"
        main([str(gray_png), "--scale", "0.5", "-o", str(out)])
        with Image.open(out) as img:
            assert img.size == (8, 5)

    def test_default_output_in_cwd(self, gray_png, tmp_path, monkeypatch):
        workdir = tmp_path / "work"
        workdir.mkdir()
        monkeypatch.chdir(workdir)
        main([str(gray_png)])
        assert (workdir / "gray_fls.png").exists()

    def test_missing_file(self, tmp_path, capsys):
        with pytest.raises(SystemExit) as exc:
            main([str(tmp_path / "nope.png")])
        assert exc.value.code == 1
        assert "File not found" in capsys.readouterr().err

    def test_unsupported_format(self, tmp_path, capsys):
        path = tmp_path / "image.bmp"
        Image.new("RGB", (2, 2)).save(str(path))
        with pytest.raises(SystemExit) as exc:
            main([str(path)])
        assert exc.value.code == 1
        assert "Unsupported format" in capsys.readouterr().err

    def test_invalid_scale(self, gray_png, tmp_path, capsys):
        out = tmp_path / "never.png"
        with pytest.raises(SystemExit) as exc:
            main([str(gray_png), "-s", "0", "-o", str(out)])
        assert exc.value.code == 1
        assert "Scale" in capsys.readouterr().err
        assert not out.exists()

    def test_write_failure_names_output(self, gray_png, tmp_path, capsys):
        # Output path is an existing directory, so the PNG write fails
        with pytest.raises(SystemExit) as exc:
            main([str(gray_png), "-o", str(tmp_path)])
        assert exc.value.code == 1
        err = capsys.readouterr().err
        assert str(tmp_path) in err
        assert str(gray_png) not in err

    def test_corrupt_image(self, tmp_path, capsys):
        path = tmp_path / "broken.png"
        path.write_bytes(b"not a png")
        with pytest.raises(SystemExit) as exc:
            main([str(path)])
        assert exc.value.code == 1
        assert "Error:" in capsys.readouterr().err

    def test_verbose_logs(self, gray_png, tmp_path, capsys):
        main([str(gray_png), "-v", "-o", str(tmp_path / "v.png")])
        err = capsys.readouterr().err
        assert "read file" in err
        assert "Floyd-Steinberg" in err
        assert "writing result PNG image" in err

    def test_quiet_by_default(self, gray_png, tmp_path, capsys):
        main([str(gray_png), "-o", str(tmp_path / "q.png")])
        assert capsys.readouterr().err == ""
