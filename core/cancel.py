"""Cooperative cancellation shared by every stage and router call."""

import threading

from core.errors import PipelineCancelled


class CancelToken:
    """Set once by the caller, polled by the pipeline between units of work."""

    def __init__(self):
        self._event = threading.Event()
        self.reason = ""

    def cancel(self, reason="cancelled by caller"):
        self.reason = reason
        self._event.set()

    @property
    def cancelled(self):
        return self._event.is_set()

    def raise_if_cancelled(self):
        if self._event.is_set():
            raise PipelineCancelled(self.reason or "cancelled")


def check(token):
    """Raise PipelineCancelled if a token is present and set."""
    if token is not None:
        token.raise_if_cancelled()
