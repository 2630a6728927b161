"""Scoped temporary files for the external rasterizer."""

import logging
import os
import tempfile
from pathlib import Path
from types import TracebackType
from typing import Optional, Type

from zpl2image.errors import TempResourceFailure

logger = logging.getLogger(__name__)

TEMP_PREFIX = "zpl2image_"


class TemporaryFile:
    """A uniquely named temporary file removed when the scope exits.

    The name is reserved with ``tempfile.mkstemp``. With ``create=False`` the
    yielded path is a sibling of the reserved file (same stem plus ``suffix``)
    that does not exist yet, so a child process can be asked to create it and
    its existence checked afterwards. Both files are removed on exit.

    Removal failures never raise. They are logged at WARNING level and kept in
    ``cleanup_errors`` so the outcome of the enclosing call is preserved.

    Example:
        >>> with TemporaryFile(suffix=".svg") as path:
        ...     path.write_text("<svg/>")
    """

    def __init__(
        self,
        suffix: str = "",
        prefix: str = TEMP_PREFIX,
        dir: Optional[str] = None,
        create: bool = True,
    ) -> None:
        self.suffix = suffix
        self.prefix = prefix
        self.dir = dir
        self.create = create
        self.path: Optional[Path] = None
        self.cleanup_errors: list[OSError] = []
        self._reserved: Optional[Path] = None

    def __enter__(self) -> Path:
        try:
            if self.create:
                fd, name = tempfile.mkstemp(
                    suffix=self.suffix, prefix=self.prefix, dir=self.dir
                )
            else:
                fd, name = tempfile.mkstemp(prefix=self.prefix, dir=self.dir)
            os.close(fd)
        except OSError as e:
            raise TempResourceFailure(f"Failed to create temporary file: {e}") from e

        if self.create:
            self.path = Path(name)
        else:
            self._reserved = Path(name)
            self.path = Path(name + self.suffix)
        return self.path

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_value: Optional[BaseException],
        traceback: Optional[TracebackType],
    ) -> None:
        for path in (self.path, self._reserved):
            if path is not None:
                self._remove(path)

    def write_text(self, content: str) -> None:
        """Write UTF-8 text to the file, raising TempResourceFailure on error."""
        if self.path is None:
            raise RuntimeError("TemporaryFile is not active")
        try:
            self.path.write_text(content, encoding="utf-8")
        except OSError as e:
            raise TempResourceFailure(
                f"Failed to write temporary file {self.path}: {e}"
            ) from e

    def _remove(self, path: Path) -> None:
        try:
            path.unlink()
        except FileNotFoundError:
            pass
        except OSError as e:
            self.cleanup_errors.append(e)
            logger.warning(f"Failed to remove temporary file {path}: {e}")
