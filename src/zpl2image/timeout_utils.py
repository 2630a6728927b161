"""Timeout utilities for in-process rendering."""

import signal
import threading
from typing import Any, Callable, TypeVar

T = TypeVar("T")


def with_timeout(
    func: Callable[..., T], timeout_seconds: int, *args: Any, **kwargs: Any
) -> T:
    """Execute function with timeout protection (cross-platform).

    Args:
        func: Function to execute with timeout.
        timeout_seconds: Maximum execution time in seconds.
            If 0 or negative, no timeout is applied.
        *args: Positional arguments to pass to func.
        **kwargs: Keyword arguments to pass to func.

    Returns:
        Return value from func.

    Raises:
        TimeoutError: If function execution exceeds timeout_seconds.

    Note:
        - On Unix/macOS main thread: Uses signal.SIGALRM for reliable timeout
        - Elsewhere: Uses threading (may not interrupt native code; the worker
          keeps running in the background after the deadline)
    """
    if timeout_seconds <= 0:
        return func(*args, **kwargs)

    message = (
        f"SVG rendering timed out after {timeout_seconds} seconds. "
        f"Increase RenderOptions(timeout=...) or set it to 0 to disable."
    )

    # SIGALRM handlers can only be installed from the main thread.
    if (
        hasattr(signal, "SIGALRM")
        and threading.current_thread() is threading.main_thread()
    ):

        def timeout_handler(signum: int, frame: Any) -> None:
            raise TimeoutError(message)

        old_handler = signal.signal(signal.SIGALRM, timeout_handler)
        signal.alarm(timeout_seconds)
        try:
            return func(*args, **kwargs)
        finally:
            signal.alarm(0)
            signal.signal(signal.SIGALRM, old_handler)
    else:
        result: list[Any] = [None]
        exception: list[Exception | None] = [None]

        def target() -> None:
            try:
                result[0] = func(*args, **kwargs)
            except Exception as e:
                exception[0] = e

        thread = threading.Thread(target=target, daemon=True)
        thread.start()
        thread.join(timeout=timeout_seconds)

        if thread.is_alive():
            raise TimeoutError(message)
        if exception[0]:
            raise exception[0]
        return result[0]  # type: ignore[return-value]
