"""Cooperative cancellation for batch tasks."""

import logging

from .errors import BatchCancelled

logger = logging.getLogger(__name__)


class CancellationToken:
    """Flag shared between the manager and one batch task.

    The batch checks the token between files. Services that can abort a
    long call early may also check it and raise BatchCancelled.
    """

    def __init__(self, name: str = "batch"):
        self.name = name
        self._cancelled = False

    @property
    def is_cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        if not self._cancelled:
            logger.debug(f"Cancellation requested for {self.name}")
        self._cancelled = True

    def raise_if_cancelled(self) -> None:
        if self._cancelled:
            raise BatchCancelled()

    def __repr__(self) -> str:
        return f"CancellationToken(name={self.name!r}, cancelled={self._cancelled})"
