"""Tests for SubmissionGuard."""

import pytest

from storefront.services import SubmissionGuard
from storefront.services.submission import SubmissionInFlightError


class TestSubmissionGuard:
    """Single-flight and generation tracking."""

    def test_begin_marks_in_flight(self):
        guard = SubmissionGuard()
        token = guard.begin()
        assert guard.in_flight
        assert guard.is_current(token)

    def test_second_begin_rejected_while_in_flight(self):
        guard = SubmissionGuard()
        guard.begin()
        with pytest.raises(SubmissionInFlightError):
            guard.begin()

    def test_finish_releases(self):
        guard = SubmissionGuard()
        token = guard.begin()
        guard.finish(token)
        assert not guard.in_flight
        assert guard.is_current(token)

    def test_invalidate_makes_token_stale_but_keeps_request_in_flight(self):
        guard = SubmissionGuard()
        token = guard.begin()
        guard.invalidate()
        assert not guard.is_current(token)
        assert guard.in_flight
        with pytest.raises(SubmissionInFlightError):
            guard.begin()

    def test_stale_request_releases_guard_when_it_settles(self):
        guard = SubmissionGuard()
        old = guard.begin()
        guard.invalidate()
        guard.finish(old)
        assert not guard.in_flight

        new = guard.begin()
        assert guard.is_current(new)

    def test_finish_with_foreign_token_keeps_guard(self):
        guard = SubmissionGuard()
        old = guard.begin()
        guard.finish(old)
        new = guard.begin()
        guard.finish(old)
        assert guard.in_flight
        assert guard.is_current(new)

    def test_invalidate_when_idle(self):
        guard = SubmissionGuard()
        guard.invalidate()
        assert not guard.in_flight
        assert guard.generation == 1
