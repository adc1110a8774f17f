"""Typed progress events pushed from the orchestrator to a consumer."""

from __future__ import annotations

import queue
from dataclasses import dataclass

EVENT_TYPES = ("stage", "file", "error", "complete")


@dataclass
class ProgressEvent:
    type: str                   # "stage" | "file" | "error" | "complete"
    stage: str | None = None
    status: str | None = None   # "start" | "complete" for stage events
    path: str | None = None
    content: str | None = None
    message: str | None = None
    data: dict | None = None

    def to_dict(self):
        return {k: v for k, v in self.__dict__.items() if v is not None}


class ListSink:
    """Collects events in memory. Used by the CLI and tests."""

    def __init__(self):
        self.events = []

    def __call__(self, event: ProgressEvent):
        self.events.append(event)

    def of_type(self, event_type):
        return [e for e in self.events if e.type == event_type]


class QueueSink:
    """Hands events to another thread, e.g. an SSE response generator."""

    def __init__(self, maxsize=0):
        self.queue = queue.Queue(maxsize=maxsize)

    def __call__(self, event: ProgressEvent):
        self.queue.put(event)

    def close(self):
        self.queue.put(None)

    def __iter__(self):
        while True:
            event = self.queue.get()
            if event is None:
                return
            yield event
