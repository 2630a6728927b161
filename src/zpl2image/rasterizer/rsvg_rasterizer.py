"""
rsvg-convert rasterizer module.

Prerequisite:

    sudo apt-get install -y librsvg2-bin

"""

import logging
import subprocess
from typing import Optional

from PIL import Image

from zpl2image.errors import ExternalToolFailure, TempResourceFailure
from zpl2image.image_utils import decode_image
from zpl2image.rasterizer.base_rasterizer import BaseRasterizer
from zpl2image.render_options import RSVG_CONVERT
from zpl2image.temp_files import TemporaryFile

logger = logging.getLogger(__name__)


def build_command(
    executable: str,
    input_path: str,
    output_path: str,
    width_px: int,
    height_px: int,
    dpi: int,
) -> list[str]:
    """Build the rsvg-convert argument list."""
    return [
        executable,
        f"--width={width_px}",
        f"--height={height_px}",
        f"--dpi-x={dpi}",
        f"--dpi-y={dpi}",
        "--format=png",
        f"--output={output_path}",
        input_path,
    ]


class RsvgConvertRasterizer(BaseRasterizer):
    """External-process rasterizer using librsvg's ``rsvg-convert``.

    Each render writes the SVG to a fresh temporary file, runs rsvg-convert
    against it and reads back a second temporary PNG file. Both files are
    removed on every exit path. A failed run raises ExternalToolFailure; there
    is no retry.

    Example:
        >>> rasterizer = RsvgConvertRasterizer()
        >>> image = rasterizer.render(svg_content, 1200, 1800, 300)
        >>> image.size
        (1200, 1800)
    """

    name = "rsvg-convert"

    def __init__(
        self,
        executable: str = RSVG_CONVERT,
        timeout: int = 0,
        temp_dir: Optional[str] = None,
    ) -> None:
        self.executable = executable
        self.timeout = timeout
        self.temp_dir = temp_dir

    def render(
        self, svg_content: str, width_px: int, height_px: int, dpi: int
    ) -> Image.Image:
        input_file = TemporaryFile(suffix=".svg", dir=self.temp_dir)
        output_file = TemporaryFile(suffix=".png", dir=self.temp_dir, create=False)
        with input_file as input_path, output_file as output_path:
            input_file.write_text(svg_content)
            cmd = build_command(
                self.executable,
                str(input_path),
                str(output_path),
                width_px,
                height_px,
                dpi,
            )
            self._run(cmd)

            if not output_path.exists():
                raise ExternalToolFailure(
                    f"{self.executable} did not produce {output_path}", command=cmd
                )
            try:
                data = output_path.read_bytes()
            except OSError as e:
                raise TempResourceFailure(
                    f"Failed to read temporary file {output_path}: {e}"
                ) from e

        image = decode_image(data)
        if image.size != (width_px, height_px):
            size = image.size
            image.close()
            raise ExternalToolFailure(
                f"{self.executable} produced a {size[0]}x{size[1]} image, "
                f"expected {width_px}x{height_px}",
                command=cmd,
            )
        return image

    def _run(self, cmd: list[str]) -> None:
        logger.debug(f"Running {subprocess.list2cmdline(cmd)}")
        try:
            proc = subprocess.run(
                cmd,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                timeout=self.timeout if self.timeout > 0 else None,
            )
        except subprocess.TimeoutExpired as e:
            output = (e.output or b"").decode("utf-8", errors="replace")
            raise ExternalToolFailure(
                f"{self.executable} timed out after {self.timeout} seconds",
                diagnostics=output,
                command=cmd,
            ) from e
        except OSError as e:
            raise ExternalToolFailure(
                f"Failed to run {self.executable}", diagnostics=str(e), command=cmd
            ) from e

        output = (proc.stdout or b"").decode("utf-8", errors="replace")
        if proc.returncode != 0:
            raise ExternalToolFailure(
                f"{self.executable} failed (code={proc.returncode})",
                diagnostics=output,
                returncode=proc.returncode,
                command=cmd,
            )
        if output.strip():
            logger.debug(f"{self.executable}: {output.strip()}")
