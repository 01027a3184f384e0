"""Run progress tracking with callback-based listener notification.

Tracks the current phase and completion percentage of a resolution run and
broadcasts every update to registered listener callbacks.

    Orchestrator ──update()──→ ProgressTracker ──callback()──→ CLI printer
                                                ──→ (any other listener)

Listener errors are caught and logged so a broken listener can never stop
a run.  Both sync and async callbacks are supported.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from dataclasses import dataclass

import structlog

from bandlink.models.pipeline import PipelinePhase
from bandlink.utils.logging import get_logger


@dataclass
class _RunStatus:
    """Internal snapshot of the run's progress."""

    phase: PipelinePhase = PipelinePhase.LOADING
    progress: float = 0.0
    message: str = ""


class ProgressTracker:
    """Tracks and broadcasts run progress via callbacks.

    Callbacks receive ``(phase, progress, message)``.
    """

    def __init__(self) -> None:
        self._status = _RunStatus()
        self._listeners: list[Callable] = []
        self._logger: structlog.BoundLogger = get_logger(__name__)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def update(self, phase: PipelinePhase, progress: float, message: str) -> None:
        """Record a progress update and notify all registered listeners.

        Parameters
        ----------
        phase:
            The current run phase.
        progress:
            Completion percentage, clamped to 0.0 – 100.0.
        message:
            Human-readable status message.
        """
        progress = max(0.0, min(100.0, progress))
        self._status = _RunStatus(phase=phase, progress=progress, message=message)

        self._logger.debug(
            "progress_update",
            phase=phase.value,
            progress=round(progress, 1),
            message=message,
        )

        await self._notify_listeners(phase, progress, message)

    def register_listener(self, callback: Callable) -> None:
        if callback not in self._listeners:
            self._listeners.append(callback)

    def unregister_listener(self, callback: Callable) -> None:
        if callback in self._listeners:
            self._listeners.remove(callback)

    def get_status(self) -> dict:
        """Return the latest ``phase``, ``progress`` and ``message``."""
        return {
            "phase": self._status.phase.value,
            "progress": self._status.progress,
            "message": self._status.message,
        }

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    async def _notify_listeners(self, phase: PipelinePhase, progress: float, message: str) -> None:
        for callback in list(self._listeners):
            try:
                result = callback(phase, progress, message)
                if asyncio.iscoroutine(result):
                    await result
            except Exception as exc:
                self._logger.warning(
                    "listener_callback_error",
                    error=str(exc),
                    callback=getattr(callback, "__name__", repr(callback)),
                )
