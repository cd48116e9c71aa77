"""Process metrics service backed by psutil."""

import platform
import sys
import time

import psutil

from showcase.domain import ProcessSnapshot

from .interfaces import ProcessMetricsPort


class PsutilProcessMetricsService(ProcessMetricsPort):
    """Read uptime and memory usage of the current process through psutil."""

    def __init__(self, process: psutil.Process | None = None):
        """Initialize process metrics service.

        Args:
            process: Optional process handle. Defaults to the current process.
        """

        self._process = process or psutil.Process()

    def runtime_process_snapshot(self) -> ProcessSnapshot:
        """Capture current process uptime, memory and platform metadata.

        Returns:
            ProcessSnapshot: Immutable snapshot computed at call time.

        Raises:
            RuntimeError: Raised when psutil cannot read the process.
        """

        try:
            with self._process.oneshot():
                created_at = self._process.create_time()
                memory_used_bytes = self._process.memory_info().rss
        except psutil.Error as error:
            raise RuntimeError("process metrics are unavailable") from error

        return ProcessSnapshot(
            uptime_seconds=max(time.time() - created_at, 0.0),
            memory_used_bytes=int(memory_used_bytes),
            platform=sys.platform,
            runtime_version=platform.python_version(),
        )
