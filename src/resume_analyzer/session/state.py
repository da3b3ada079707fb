"""Lifecycle of one resume analysis attempt as a pure state machine.

``transition(state, event)`` never mutates its input; it returns the next
state, or the same state object when the event does not apply.

Every attempt carries a ``generation`` number. Completion events echo the
generation they were started with and are dropped when it no longer matches,
so a response that lands after a cancel or reset cannot overwrite the
state the user moved to.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Union

import anthropic

from resume_analyzer.errors import (
    ConfigurationError,
    EmptyResponseError,
    MalformedResponseError,
)
from resume_analyzer.models.analysis import AnalysisResult

GENERIC_ERROR_MESSAGE = "Failed to analyze resume. Please try again."


class Status(str, Enum):
    IDLE = "idle"
    ANALYZING = "analyzing"
    SUCCESS = "success"
    ERROR = "error"


class ErrorKind(str, Enum):
    CONFIGURATION = "configuration"
    TRANSPORT = "transport"
    EMPTY_RESPONSE = "empty_response"
    MALFORMED_RESPONSE = "malformed_response"
    UNEXPECTED = "unexpected"


def classify_error(exc: BaseException) -> ErrorKind:
    if isinstance(exc, ConfigurationError):
        return ErrorKind.CONFIGURATION
    if isinstance(exc, EmptyResponseError):
        return ErrorKind.EMPTY_RESPONSE
    if isinstance(exc, MalformedResponseError):
        return ErrorKind.MALFORMED_RESPONSE
    if isinstance(exc, (anthropic.APIError, OSError, TimeoutError)):
        return ErrorKind.TRANSPORT
    return ErrorKind.UNEXPECTED


def error_message(exc: BaseException) -> str:
    """User-facing message: the error's own text, or the generic fallback."""
    return str(exc).strip() or GENERIC_ERROR_MESSAGE


@dataclass(frozen=True)
class AppState:
    status: Status = Status.IDLE
    result: AnalysisResult | None = None
    error_message: str | None = None
    error_kind: ErrorKind | None = None
    generation: int = 0
    filename: str | None = None

    @property
    def can_retry(self) -> bool:
        return self.status is Status.ERROR and self.error_kind is not ErrorKind.CONFIGURATION


# --- Events ---


@dataclass(frozen=True)
class FileSelected:
    filename: str


@dataclass(frozen=True)
class AnalysisSucceeded:
    generation: int
    result: AnalysisResult


@dataclass(frozen=True)
class AnalysisFailed:
    generation: int
    message: str = GENERIC_ERROR_MESSAGE
    kind: ErrorKind = ErrorKind.UNEXPECTED


@dataclass(frozen=True)
class Cancelled:
    pass


@dataclass(frozen=True)
class Retried:
    pass


@dataclass(frozen=True)
class Reset:
    pass


Event = Union[FileSelected, AnalysisSucceeded, AnalysisFailed, Cancelled, Retried, Reset]


def _is_current(state: AppState, generation: int) -> bool:
    return state.status is Status.ANALYZING and state.generation == generation


def transition(state: AppState, event: Event) -> AppState:
    """Return the state that follows ``state`` after ``event``."""
    if isinstance(event, FileSelected):
        # Uploads are only accepted from idle; one attempt is current at a time
        if state.status is not Status.IDLE:
            return state
        return AppState(
            status=Status.ANALYZING,
            generation=state.generation + 1,
            filename=event.filename,
        )

    if isinstance(event, AnalysisSucceeded):
        if not _is_current(state, event.generation):
            return state
        return replace(state, status=Status.SUCCESS, result=event.result)

    if isinstance(event, AnalysisFailed):
        if not _is_current(state, event.generation):
            return state
        return replace(
            state,
            status=Status.ERROR,
            error_message=event.message or GENERIC_ERROR_MESSAGE,
            error_kind=event.kind,
        )

    if isinstance(event, Cancelled):
        if state.status is not Status.ANALYZING:
            return state
        return AppState(generation=state.generation + 1)

    if isinstance(event, Retried):
        if state.status is not Status.ERROR:
            return state
        return AppState(generation=state.generation)

    if isinstance(event, Reset):
        if state.status not in (Status.SUCCESS, Status.ERROR):
            return state
        return AppState(generation=state.generation)

    raise TypeError(f"Unknown event: {event!r}")
