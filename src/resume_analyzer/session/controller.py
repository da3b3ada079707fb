"""Owner of the current analysis state; drives one attempt at a time."""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable

from resume_analyzer.models.analysis import AnalysisResult
from resume_analyzer.session.state import (
    AnalysisFailed,
    AnalysisSucceeded,
    AppState,
    Cancelled,
    Event,
    FileSelected,
    Status,
    classify_error,
    error_message,
    transition,
)

logger = logging.getLogger(__name__)

AnalyzeFn = Callable[[bytes], Awaitable[AnalysisResult]]


class AnalysisSession:
    """Holds the AppState and applies events to it.

    ``analyze`` is the coroutine function that performs the model call,
    usually ``ResumeAnalyst.analyze`` or a wrapper that builds the analyst
    first (so configuration errors surface as an error state too).
    """

    def __init__(
        self,
        analyze: AnalyzeFn,
        state: AppState | None = None,
        on_change: Callable[[AppState], None] | None = None,
    ):
        self.state = state if state is not None else AppState()
        self._analyze = analyze
        self._on_change = on_change
        self._task: asyncio.Task | None = None

    def dispatch(self, event: Event) -> AppState:
        new_state = transition(self.state, event)
        if new_state is not self.state:
            logger.info(
                "Analysis %s -> %s (generation %d)",
                self.state.status.value,
                new_state.status.value,
                new_state.generation,
            )
            self.state = new_state
            if self._on_change is not None:
                self._on_change(new_state)
        return self.state

    async def run(self, document: bytes, filename: str) -> AppState:
        """Analyze ``document`` and return the state it ends in.

        Does nothing unless the session is idle.
        """
        if self.state.status is not Status.IDLE:
            logger.warning("Ignoring %s: session is %s", filename, self.state.status.value)
            return self.state

        self.dispatch(FileSelected(filename))
        generation = self.state.generation
        task = asyncio.ensure_future(self._analyze(document))
        self._task = task
        try:
            result = await task
        except asyncio.CancelledError:
            if self.state.generation == generation:
                # Cancelled from outside rather than through cancel()
                self.dispatch(Cancelled())
                raise
            return self.state
        except Exception as exc:
            logger.exception("Resume analysis failed")
            self.dispatch(AnalysisFailed(generation, error_message(exc), classify_error(exc)))
        else:
            self.dispatch(AnalysisSucceeded(generation, result))
        finally:
            if self._task is task:
                self._task = None
        return self.state

    def cancel(self) -> AppState:
        """Leave the analyzing state and cancel the in-flight request, if any."""
        state = self.dispatch(Cancelled())
        if self._task is not None and not self._task.done():
            self._task.cancel()
        return state

    async def cancel_and_wait(self, timeout: float | None = None) -> AppState:
        """Cancel like ``cancel()``, then wait up to ``timeout`` seconds for the
        request to finish unwinding."""
        task = self._task
        state = self.cancel()
        if task is not None and not task.done():
            await asyncio.wait({task}, timeout=timeout)
        return state

    @property
    def in_flight(self) -> bool:
        return self._task is not None and not self._task.done()
