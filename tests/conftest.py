import logging
import stat
import sys
from pathlib import Path
from typing import Callable

import pytest

logger = logging.getLogger(__name__)


# Stand-in for rsvg-convert. Modes:
#   success     writes a PNG of the requested size
#   fail        prints a diagnostic and exits 1
#   no-output   exits 0 without writing the output file
#   wrong-size  writes a 10x10 PNG
FAKE_RSVG_CONVERT = """#!{python}
import sys

with open({calls!r}, "a", encoding="utf-8") as log:
    log.write(" ".join(sys.argv[1:]) + "\\n")

if "--version" in sys.argv:
    print("rsvg-convert version 2.58.0")
    sys.exit(0)

args = dict(
    a[2:].split("=", 1) for a in sys.argv[1:] if a.startswith("--") and "=" in a
)
mode = {mode!r}
if mode == "fail":
    sys.stderr.write("rsvg-convert: Error reading SVG: bad input\\n")
    sys.exit(1)
if mode in ("success", "wrong-size"):
    from PIL import Image

    size = (10, 10) if mode == "wrong-size" else (int(args["width"]), int(args["height"]))
    Image.new("RGBA", size, (255, 0, 0, 128)).save(args["output"], format="PNG")
    print("rendered", args["output"])
"""


class FakeTool:
    """Handle for a generated fake rsvg-convert executable."""

    def __init__(self, path: Path, calls: Path) -> None:
        self.path = path
        self.calls = calls

    @property
    def invocations(self) -> list[str]:
        if not self.calls.exists():
            return []
        return self.calls.read_text(encoding="utf-8").splitlines()


@pytest.fixture
def fake_rsvg_convert(tmp_path: Path) -> Callable[[str], FakeTool]:
    """Factory writing a fake rsvg-convert script into tmp_path/bin."""
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir(exist_ok=True)

    def make(mode: str = "success") -> FakeTool:
        path = bin_dir / "rsvg-convert"
        calls = tmp_path / "calls.log"
        path.write_text(
            FAKE_RSVG_CONVERT.format(python=sys.executable, calls=str(calls), mode=mode),
            encoding="utf-8",
        )
        path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return FakeTool(path, calls)

    return make


@pytest.fixture
def work_dir(tmp_path: Path) -> Path:
    """Empty directory used as the temporary file location."""
    path = tmp_path / "work"
    path.mkdir()
    return path


class StubProber:
    """Prober test double with a fixed answer."""

    def __init__(self, available: bool) -> None:
        self._available = available
        self.calls = 0

    def available(self) -> bool:
        self.calls += 1
        return self._available


@pytest.fixture
def stub_prober() -> Callable[[bool], StubProber]:
    return StubProber


@pytest.fixture
def transparent_circle_svg() -> str:
    """4x6 inch label with a half-transparent circle on a transparent canvas."""
    return """<?xml version="1.0" encoding="UTF-8"?>
<svg xmlns="http://www.w3.org/2000/svg" width="4in" height="6in" viewBox="0 0 400 600">
    <circle cx="200" cy="300" r="150" fill="red" fill-opacity="0.5"/>
</svg>"""


@pytest.fixture
def simple_svg() -> str:
    return """<?xml version="1.0" encoding="UTF-8"?>
<svg xmlns="http://www.w3.org/2000/svg" width="100" height="100" viewBox="0 0 100 100">
    <rect x="10" y="10" width="80" height="80" fill="black"/>
</svg>"""

