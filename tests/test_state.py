"""Tests for the pure analysis state machine."""

from __future__ import annotations

import anthropic
import httpx
import pytest

from resume_analyzer.errors import (
    ConfigurationError,
    EmptyResponseError,
    LocalValidationError,
    MalformedResponseError,
)
from resume_analyzer.session.state import (
    GENERIC_ERROR_MESSAGE,
    AnalysisFailed,
    AnalysisSucceeded,
    AppState,
    Cancelled,
    ErrorKind,
    FileSelected,
    Reset,
    Retried,
    Status,
    classify_error,
    error_message,
    transition,
)


def _analyzing(generation: int = 1) -> AppState:
    return AppState(status=Status.ANALYZING, generation=generation, filename="cv.pdf")


class TestFileSelected:
    def test_idle_starts_analysis_with_new_generation(self):
        state = transition(AppState(generation=3), FileSelected("cv.pdf"))
        assert state.status is Status.ANALYZING
        assert state.generation == 4
        assert state.filename == "cv.pdf"
        assert state.result is None
        assert state.error_message is None

    @pytest.mark.parametrize("status", [Status.ANALYZING, Status.SUCCESS, Status.ERROR])
    def test_ignored_outside_idle(self, status):
        state = AppState(status=status, generation=2)
        assert transition(state, FileSelected("other.pdf")) is state


class TestCompletion:
    def test_success_moves_to_success_with_result(self, sample_result):
        state = transition(_analyzing(), AnalysisSucceeded(1, sample_result))
        assert state.status is Status.SUCCESS
        assert state.result is sample_result
        assert state.filename == "cv.pdf"

    def test_failure_moves_to_error_with_message(self):
        state = transition(
            _analyzing(), AnalysisFailed(1, "Service unavailable", ErrorKind.TRANSPORT)
        )
        assert state.status is Status.ERROR
        assert state.error_message == "Service unavailable"
        assert state.error_kind is ErrorKind.TRANSPORT
        assert state.result is None

    def test_failure_without_message_uses_generic_text(self):
        state = transition(_analyzing(), AnalysisFailed(1, ""))
        assert state.error_message == GENERIC_ERROR_MESSAGE

    def test_stale_generation_dropped(self, sample_result):
        state = _analyzing(generation=5)
        assert transition(state, AnalysisSucceeded(4, sample_result)) is state
        assert transition(state, AnalysisFailed(4, "late")) is state

    def test_completion_ignored_when_not_analyzing(self, sample_result):
        state = AppState(generation=1)
        assert transition(state, AnalysisSucceeded(1, sample_result)) is state


class TestCancelRetryReset:
    def test_cancel_returns_to_idle_and_bumps_generation(self):
        state = transition(_analyzing(generation=2), Cancelled())
        assert state == AppState(generation=3)

    def test_late_success_after_cancel_leaves_idle(self, sample_result):
        cancelled = transition(_analyzing(generation=2), Cancelled())
        assert transition(cancelled, AnalysisSucceeded(2, sample_result)) is cancelled

    def test_late_result_cannot_land_on_a_newer_attempt(self, sample_result):
        state = transition(_analyzing(generation=2), Cancelled())
        state = transition(state, FileSelected("second.pdf"))
        assert state.generation == 4
        assert transition(state, AnalysisSucceeded(2, sample_result)) is state

    def test_cancel_ignored_outside_analyzing(self):
        state = AppState(status=Status.SUCCESS, generation=1)
        assert transition(state, Cancelled()) is state

    def test_retry_from_error_goes_idle(self):
        error = AppState(status=Status.ERROR, error_message="x", generation=7)
        assert transition(error, Retried()) == AppState(generation=7)

    def test_retry_ignored_outside_error(self):
        state = AppState(status=Status.SUCCESS, generation=1)
        assert transition(state, Retried()) is state

    @pytest.mark.parametrize("status", [Status.SUCCESS, Status.ERROR])
    def test_reset_clears_result_and_error(self, status, sample_result):
        state = AppState(status=status, result=sample_result, error_message="x", generation=2)
        assert transition(state, Reset()) == AppState(generation=2)

    def test_reset_ignored_while_analyzing(self):
        state = _analyzing()
        assert transition(state, Reset()) is state

    def test_input_state_not_mutated(self, sample_result):
        state = _analyzing()
        transition(state, AnalysisSucceeded(1, sample_result))
        assert state.status is Status.ANALYZING
        assert state.result is None

    def test_unknown_event_raises(self):
        with pytest.raises(TypeError):
            transition(AppState(), object())


class TestClassifyError:
    def test_configuration(self):
        assert classify_error(ConfigurationError("no key")) is ErrorKind.CONFIGURATION

    def test_empty_and_malformed(self):
        assert classify_error(EmptyResponseError("x")) is ErrorKind.EMPTY_RESPONSE
        assert classify_error(MalformedResponseError("x")) is ErrorKind.MALFORMED_RESPONSE

    def test_transport(self):
        error = anthropic.APIConnectionError(
            request=httpx.Request("POST", "https://api.anthropic.com/v1/messages")
        )
        assert classify_error(error) is ErrorKind.TRANSPORT
        assert classify_error(TimeoutError()) is ErrorKind.TRANSPORT

    def test_anything_else_is_unexpected(self):
        assert classify_error(LocalValidationError("x")) is ErrorKind.UNEXPECTED
        assert classify_error(KeyError("x")) is ErrorKind.UNEXPECTED

    def test_error_message_falls_back_to_generic(self):
        assert error_message(RuntimeError("  ")) == GENERIC_ERROR_MESSAGE
        assert error_message(RuntimeError("boom")) == "boom"


class TestCanRetry:
    def test_error_states_can_retry(self):
        assert AppState(status=Status.ERROR, error_kind=ErrorKind.TRANSPORT).can_retry

    def test_configuration_errors_cannot_retry(self):
        assert not AppState(status=Status.ERROR, error_kind=ErrorKind.CONFIGURATION).can_retry

    def test_non_error_states_cannot_retry(self):
        assert not AppState(status=Status.SUCCESS).can_retry
