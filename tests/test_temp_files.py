"""Tests for TemporaryFile."""

import logging
from pathlib import Path
from unittest.mock import patch

import pytest

from zpl2image.errors import TempResourceFailure
from zpl2image.temp_files import TemporaryFile


def test_temporary_file_removed(tmp_path: Path) -> None:
    with TemporaryFile(suffix=".svg", dir=str(tmp_path)) as path:
        assert path.exists()
        assert path.suffix == ".svg"
        assert path.name.startswith("zpl2image_")
    assert not path.exists()
    assert list(tmp_path.iterdir()) == []


def test_temporary_file_removed_on_error(tmp_path: Path) -> None:
    with pytest.raises(RuntimeError):
        with TemporaryFile(dir=str(tmp_path)) as path:
            raise RuntimeError("boom")
    assert not path.exists()


def test_temporary_file_unique_names(tmp_path: Path) -> None:
    with TemporaryFile(dir=str(tmp_path)) as first, TemporaryFile(
        dir=str(tmp_path)
    ) as second:
        assert first != second


def test_reserved_output_path(tmp_path: Path) -> None:
    """Test create=False yields a fresh path and removes both files."""
    with TemporaryFile(suffix=".png", dir=str(tmp_path), create=False) as path:
        assert not path.exists()
        assert path.suffix == ".png"
        path.write_bytes(b"data")
    assert list(tmp_path.iterdir()) == []


def test_write_text(tmp_path: Path) -> None:
    temp = TemporaryFile(suffix=".svg", dir=str(tmp_path))
    with temp as path:
        temp.write_text("<svg>é</svg>")
        assert path.read_text(encoding="utf-8") == "<svg>é</svg>"


def test_write_text_failure(tmp_path: Path) -> None:
    temp = TemporaryFile(dir=str(tmp_path))
    with temp:
        with patch.object(Path, "write_text", side_effect=OSError("disk full")):
            with pytest.raises(TempResourceFailure, match="disk full"):
                temp.write_text("<svg/>")


def test_create_failure(tmp_path: Path) -> None:
    with pytest.raises(TempResourceFailure):
        with TemporaryFile(dir=str(tmp_path / "missing")):
            pass


def test_cleanup_failure_is_reported(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    """Test a removal failure is logged without masking the result."""
    temp = TemporaryFile(dir=str(tmp_path))
    with caplog.at_level(logging.WARNING):
        with patch.object(Path, "unlink", side_effect=PermissionError("busy")):
            with temp as path:
                result = "rendered"

    assert result == "rendered"
    assert len(temp.cleanup_errors) == 1
    assert "Failed to remove temporary file" in caplog.text
    path.unlink()


def test_cleanup_failure_keeps_primary_error(tmp_path: Path) -> None:
    """Test a removal failure does not replace an exception in flight."""
    temp = TemporaryFile(dir=str(tmp_path))
    with patch.object(Path, "unlink", side_effect=PermissionError("busy")):
        with pytest.raises(ValueError, match="primary"):
            with temp:
                raise ValueError("primary")
    assert len(temp.cleanup_errors) == 1
