"""Typed interfaces for runtime-layer responsibilities."""

from typing import Protocol

from showcase.domain import ProcessSnapshot


class ProcessMetricsPort(Protocol):
    """Port definition for reading metadata about the serving process."""

    def runtime_process_snapshot(self) -> ProcessSnapshot:
        """Capture current process uptime, memory and platform metadata.

        Returns:
            ProcessSnapshot: Immutable snapshot computed at call time.

        Raises:
            RuntimeError: Raised when process metadata cannot be read.
        """
