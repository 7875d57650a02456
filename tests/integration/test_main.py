"""
Tests for CLI entry point (pptxconnect.main).
"""
from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest

from pptxconnect.main import main


def test_main_success_creates_pptx(sample_pptx_path: Path, tmp_path: Path, capsys) -> None:
    """Running main with valid input creates the output pptx file."""
    out_pptx = tmp_path / "out.pptx"
    argv = ["pptxconnect", str(sample_pptx_path), str(out_pptx)]

    with patch("sys.argv", argv):
        main()  # success path does not call sys.exit()

    assert out_pptx.exists()
    assert out_pptx.stat().st_size > 0
    assert "1 connectors re-routed" in capsys.readouterr().out


def test_main_accepts_argv(sample_pptx_path: Path, tmp_path: Path) -> None:
    out_pptx = tmp_path / "out.pptx"
    main([str(sample_pptx_path), str(out_pptx), "--min-clearance", "30", "--samples", "20", "-v"])
    assert out_pptx.exists()


def test_main_missing_input_exits_with_error(tmp_path: Path) -> None:
    """Main exits with code 1 when input file does not exist."""
    out_pptx = tmp_path / "out.pptx"
    argv = ["pptxconnect", str(tmp_path / "nonexistent.pptx"), str(out_pptx)]

    with patch("sys.argv", argv):
        with pytest.raises(SystemExit) as exc_info:
            main()

    assert exc_info.value.code == 1
    assert not out_pptx.exists()


def test_main_invalid_config_is_usage_error(sample_pptx_path: Path, tmp_path: Path) -> None:
    """A fallback offset below the exit clearance is rejected by the argument parser."""
    out_pptx = tmp_path / "out.pptx"
    with pytest.raises(SystemExit) as exc_info:
        main([str(sample_pptx_path), str(out_pptx), "--fallback-offset", "10"])
    assert exc_info.value.code == 2
    assert not out_pptx.exists()


def test_main_corrupt_input_exits_with_error(tmp_path: Path) -> None:
    """A file that is not a presentation is reported and exits with code 1."""
    bogus = tmp_path / "bogus.pptx"
    bogus.write_text("not a zip file")
    with pytest.raises(SystemExit) as exc_info:
        main([str(bogus), str(tmp_path / "out.pptx")])
    assert exc_info.value.code == 1
