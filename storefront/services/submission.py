"""Single-flight guard for order submission."""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


class SubmissionInFlightError(RuntimeError):
    """A submission is already awaiting its response."""


class SubmissionGuard:
    """
    Allows one submission at a time and tags each with a generation.

    ``invalidate()`` bumps the generation; a response whose token is no
    longer current must be dropped by the caller. The request itself keeps
    the guard busy until it settles, stale or not.
    """

    def __init__(self) -> None:
        self._generation = 0
        self._pending: int | None = None

    @property
    def in_flight(self) -> bool:
        return self._pending is not None

    @property
    def generation(self) -> int:
        return self._generation

    def begin(self) -> int:
        if self._pending is not None:
            raise SubmissionInFlightError("submission already in flight")
        self._generation += 1
        self._pending = self._generation
        logger.debug("submission %d started", self._generation)
        return self._generation

    def finish(self, token: int) -> None:
        if token == self._pending:
            self._pending = None

    def invalidate(self) -> None:
        self._generation += 1
        if self._pending is not None:
            logger.debug("submission %d superseded", self._pending)

    def is_current(self, token: int) -> bool:
        return token == self._generation
