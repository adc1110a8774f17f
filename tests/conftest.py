"""Shared fixtures: a scripted provider transport and settings factories."""

import pytest

from config.settings import Settings
from utils.llm import Completion, ProviderError


class FakeTransport:
    """Stands in for utils.llm. Replies are scripted per provider.

    ``replies`` maps provider id -> reply or list of replies. A reply is a
    string, an Exception instance (raised), or a callable taking the
    messages and returning either. A list is consumed in order and its
    last entry repeats. ``responder`` answers for providers with no entry.
    """

    def __init__(self, replies=None, responder=None):
        self.replies = {k: (list(v) if isinstance(v, list) else [v]) for k, v in (replies or {}).items()}
        self.responder = responder
        self.calls = []

    def _reply(self, provider_id, messages):
        queue = self.replies.get(provider_id)
        if queue:
            reply = queue.pop(0) if len(queue) > 1 else queue[0]
        elif self.responder is not None:
            reply = self.responder
        else:
            reply = ProviderError(provider_id, "unreachable", 503)
        if callable(reply) and not isinstance(reply, Exception):
            reply = reply(messages)
        if isinstance(reply, Exception):
            raise reply
        return reply

    def complete(self, provider_id, model, messages, api_key, max_tokens, temperature, timeout):
        self.calls.append((provider_id, model))
        return Completion(content=self._reply(provider_id, messages), tokens_used=42)

    def stream(self, provider_id, model, messages, api_key, max_tokens, temperature, timeout,
               on_chunk, cancel=None):
        self.calls.append((provider_id, model))
        content = self._reply(provider_id, messages)
        for i in range(0, len(content), 16):
            if cancel is not None:
                cancel.raise_if_cancelled()
            on_chunk(content[i:i + 16])
        return Completion(content=content, tokens_used=42)


def make_settings(*providers, **overrides):
    settings = Settings(credentials={p: f"key-{p}" for p in providers})
    for key, value in overrides.items():
        setattr(settings, key, value)
    return settings


@pytest.fixture
def fake_transport():
    return FakeTransport


@pytest.fixture
def settings_for():
    return make_settings
