"""Tests for the read → filter → write pipeline and the ppm-edit command."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from ppm_editor.cli.image_editor import main
from ppm_editor.errors import ParseError
from ppm_editor.models.color import Color
from ppm_editor.models.image_filter import FilterKind, ImageFilter
from ppm_editor.pipeline.image_editor import edit_image
from ppm_editor.repositories.ppm_repository import PpmRepository
from ppm_editor.services.image_service import ImageService


@pytest.fixture()
def image_service() -> ImageService:
    return ImageService(PpmRepository(separator=" "))


class TestEditImage:
    def test_writes_filtered_image(self, sample_file: Path, tmp_path: Path, image_service: ImageService) -> None:
        out = tmp_path / "inverted.ppm"
        grid = edit_image(sample_file, out, ImageFilter(FilterKind.INVERT), image_service=image_service)

        assert grid.get(0, 0) == Color(245, 235, 225)
        assert image_service.load(out) == grid
        assert out.read_text(encoding="utf-8").splitlines()[3] == "245 235 225 215 205 195"

    def test_parse_failure_writes_nothing(self, tmp_path: Path, image_service: ImageService) -> None:
        src = tmp_path / "short.ppm"
        src.write_text("P3 3 2 255 " + " ".join(["1 2 3"] * 5), encoding="utf-8")
        out = tmp_path / "out.ppm"

        with pytest.raises(ParseError):
            edit_image(src, out, ImageFilter(FilterKind.EMBOSS), image_service=image_service)
        assert not out.exists()


class TestMain:
    def test_grayscale(self, sample_file: Path, tmp_path: Path) -> None:
        out = tmp_path / "gray.ppm"
        assert main([str(sample_file), str(out), "grayscale"]) == 0
        assert ImageService().load(out).get(1, 1) == Color(110, 110, 110)

    def test_greyscale_alias(self, sample_file: Path, tmp_path: Path) -> None:
        out = tmp_path / "grey.ppm"
        assert main([str(sample_file), str(out), "greyscale"]) == 0
        assert ImageService().load(out).get(0, 0) == Color(20, 20, 20)

    def test_emboss(self, sample_file: Path, tmp_path: Path) -> None:
        out = tmp_path / "emboss.ppm"
        assert main([str(sample_file), str(out), "emboss"]) == 0
        grid = ImageService().load(out)
        assert grid.get(0, 0) == Color(128, 128, 128)
        assert grid.get(1, 1) == Color(218, 218, 218)

    def test_motion_blur(self, sample_file: Path, tmp_path: Path) -> None:
        out = tmp_path / "blur.ppm"
        assert main([str(sample_file), str(out), "motionblur", "2"]) == 0
        grid = ImageService().load(out)
        assert grid.get(0, 0) == Color(25, 35, 45)
        assert grid.get(1, 0) == Color(40, 50, 60)

    @pytest.mark.parametrize(
        "extra",
        [
            ["sepia"],
            ["invert", "3"],
            ["motionblur"],
            ["motionblur", "abc"],
            ["motionblur", "-2"],
            ["motionblur", "2", "3"],
        ],
    )
    def test_usage_errors(
        self, sample_file: Path, tmp_path: Path, capsys: pytest.CaptureFixture, extra: list
    ) -> None:
        out = tmp_path / "out.ppm"
        assert main([str(sample_file), str(out), *extra]) == 2
        assert "usage: ppm-edit" in capsys.readouterr().err
        assert not out.exists()

    @pytest.mark.parametrize("argv", [[], ["only-input.ppm"], ["in.ppm", "out.ppm"]])
    def test_too_few_arguments(self, argv: list, capsys: pytest.CaptureFixture) -> None:
        assert main(argv) == 2
        assert "usage: ppm-edit" in capsys.readouterr().err

    def test_usage_checked_before_reading(self, tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
        out = tmp_path / "out.ppm"
        assert main([str(tmp_path / "missing.ppm"), str(out), "sepia"]) == 2
        assert not out.exists()

    def test_missing_input(self, tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
        out = tmp_path / "out.ppm"
        with caplog.at_level(logging.ERROR):
            assert main([str(tmp_path / "missing.ppm"), str(out), "invert"]) == 1
        assert "missing.ppm" in caplog.text
        assert not out.exists()

    def test_malformed_input(self, tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
        src = tmp_path / "bad.ppm"
        src.write_text("P3 2 2 255 1 2 three", encoding="utf-8")
        out = tmp_path / "out.ppm"
        with caplog.at_level(logging.ERROR):
            assert main([str(src), str(out), "invert"]) == 1
        assert "Expected an integer" in caplog.text
        assert not out.exists()

    def test_channel_value_too_large(self, tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
        src = tmp_path / "huge.ppm"
        src.write_text("P3 1 1 255 99999999999999999999 0 0", encoding="utf-8")
        out = tmp_path / "out.ppm"
        with caplog.at_level(logging.ERROR):
            assert main([str(src), str(out), "invert"]) == 1
        assert "out of range" in caplog.text
        assert not out.exists()

    def test_bad_separator_setting(
        self, sample_file: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
    ) -> None:
        monkeypatch.setenv("PPM_TRIPLE_SEPARATOR", ",")
        out = tmp_path / "out.ppm"
        with caplog.at_level(logging.ERROR):
            assert main([str(sample_file), str(out), "invert"]) == 1
        assert "Triple separator" in caplog.text
        assert not out.exists()
