"""Capability probe for the external rasterizer executable."""

import logging
import shutil
import subprocess
import threading
from typing import Optional

from zpl2image.errors import ProbeInconclusive
from zpl2image.render_options import RSVG_CONVERT

logger = logging.getLogger(__name__)


class CapabilityProber:
    """Determines once whether the external rasterizer can be invoked.

    The first call to ``available()`` resolves the executable on PATH and runs
    ``<executable> --version`` as a diagnostic. The result is stored under a
    lock and returned unchanged for the lifetime of the prober; there is no
    re-probe.

    Example:
        >>> prober = CapabilityProber()
        >>> prober.available()
        True
    """

    def __init__(self, executable: str = RSVG_CONVERT, timeout: float = 5.0) -> None:
        self.executable = executable
        self.timeout = timeout
        self.executable_path: Optional[str] = None
        self._available: Optional[bool] = None
        self._lock = threading.Lock()

    @property
    def probed(self) -> bool:
        return self._available is not None

    def available(self) -> bool:
        """Return whether the external rasterizer is invocable."""
        result = self._available
        if result is not None:
            return result
        with self._lock:
            if self._available is None:
                try:
                    self._available = self._probe()
                except ProbeInconclusive as e:
                    logger.warning(f"{e}; treating {self.executable} as unavailable")
                    self._available = False
            return self._available

    def _probe(self) -> bool:
        path = shutil.which(self.executable)
        if path is None:
            logger.info(f"{self.executable} not found on PATH")
            return False

        try:
            proc = subprocess.run(
                [path, "--version"],
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                errors="replace",
                timeout=self.timeout,
            )
        except (OSError, subprocess.TimeoutExpired) as e:
            raise ProbeInconclusive(f"Failed to run {path} --version: {e}") from e

        if proc.returncode != 0:
            logger.info(
                f"{path} --version exited with status {proc.returncode}: "
                f"{proc.stdout.strip()}"
            )
            return False

        self.executable_path = path
        version = proc.stdout.strip().splitlines()
        logger.info(f"Found {path} ({version[0] if version else 'unknown version'})")
        return True


_default_prober: Optional[CapabilityProber] = None
_default_lock = threading.Lock()


def default_prober() -> CapabilityProber:
    """Return the process-wide prober for ``rsvg-convert``.

    The prober is created on first use and shared afterwards, so the probe
    subprocess runs at most once per process.
    """
    global _default_prober
    with _default_lock:
        if _default_prober is None:
            _default_prober = CapabilityProber()
        return _default_prober
