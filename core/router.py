"""Provider router: task -> ordered candidate chain, scored with fallback."""

from __future__ import annotations

import logging
import time
from concurrent.futures import FIRST_COMPLETED, ThreadPoolExecutor, wait

from config.defaults import DEFAULTS
from config.providers import (
    PROVIDERS, TASK_ROUTING, STRUCTURED_TASKS, GENERATION_TASKS,
    ENSEMBLE_CANDIDATES, resolve_model,
)
from config.rules import PLACEHOLDER_PATTERNS
from core.cancel import check
from core.errors import AllProvidersExhausted
from core.state import CallResult
from utils import llm
from utils.llm import ProviderError, FILE_BLOCK_RE
from utils.structured import parse_json_object, Parsed, Malformed

logger = logging.getLogger(__name__)

MIN_RESPONSE_CHARS = 10

# How often a waiting ensemble re-checks its cancel token
CANCEL_POLL_SECONDS = 0.25

_SOURCE_BONUS = {"direct": 0.3, "fenced": 0.2, "embedded": 0.15}


def score_response(task, content, expected_fields=None):
    """Heuristic 0-1 confidence for a response to the given task."""
    if not content or len(content.strip()) < MIN_RESPONSE_CHARS:
        return 0.0

    score = 0.5
    if any(p.search(content) for p in PLACEHOLDER_PATTERNS):
        score -= 0.3
    else:
        score += 0.2

    if task in STRUCTURED_TASKS:
        result = parse_json_object(content, required=expected_fields or ())
        if isinstance(result, Parsed):
            score += _SOURCE_BONUS[result.source]
            if expected_fields:
                score += 0.3
        elif isinstance(result, Malformed) and result.missing:
            score -= 0.2
        else:
            score -= 0.3

    elif task in GENERATION_TASKS:
        blocks = [m.group(3) for m in FILE_BLOCK_RE.finditer(content)]
        if blocks:
            score += 0.3
            if len(blocks) >= 5:
                score += 0.1
            if len(blocks) >= 10:
                score += 0.1
            if all(b.count("{") == b.count("}") for b in blocks):
                score += 0.2
            else:
                score -= 0.3
        else:
            score -= 0.3

    return max(0.0, min(1.0, score))


class ProviderRouter:
    """Executes a task against its provider chain.

    The transport is any object exposing ``complete`` and ``stream`` with the
    signatures of ``utils.llm``; tests substitute a fake.
    """

    def __init__(self, settings, transport=None):
        self.settings = settings
        self.transport = transport or llm

    def has_any_provider(self):
        return bool(self.settings.credentialed())

    def build_chain(self, task):
        """Ordered (provider, model) candidates for a task, credentialed only."""
        primary, alias, _, fallback, fallback_alias = TASK_ROUTING[task]
        chain = []
        seen = set()

        def add(provider_id, model_alias=None):
            if provider_id in seen or not self.settings.has_credential(provider_id):
                return
            seen.add(provider_id)
            chain.append((provider_id, resolve_model(provider_id, model_alias)))

        add(primary, alias)
        add(fallback, fallback_alias)
        for provider_id in PROVIDERS:
            add(provider_id)
        return chain

    def threshold(self, task):
        return TASK_ROUTING[task][2]

    def call(self, task, messages, max_tokens=None, temperature=None,
             expected_fields=None, cancel=None) -> CallResult:
        def send(provider_id, model):
            return self.transport.complete(
                provider_id, model, messages,
                api_key=self.settings.credentials.get(provider_id),
                max_tokens=max_tokens or DEFAULTS["max_tokens"],
                temperature=DEFAULTS["temperature"] if temperature is None else temperature,
                timeout=self.settings.request_timeout,
            )

        return self._run_chain(task, send, expected_fields, cancel)

    def call_streaming(self, task, messages, on_chunk, max_tokens=None, temperature=None,
                       expected_fields=None, cancel=None) -> CallResult:
        """Same contract as call(), with text deltas pushed to on_chunk as they arrive."""
        def send(provider_id, model):
            return self.transport.stream(
                provider_id, model, messages,
                api_key=self.settings.credentials.get(provider_id),
                max_tokens=max_tokens or DEFAULTS["max_tokens"],
                temperature=DEFAULTS["temperature"] if temperature is None else temperature,
                timeout=self.settings.request_timeout,
                on_chunk=on_chunk,
                cancel=cancel,
            )

        return self._run_chain(task, send, expected_fields, cancel)

    def _run_chain(self, task, send, expected_fields, cancel):
        chain = self.build_chain(task)
        if not chain:
            raise AllProvidersExhausted(task)

        threshold = self.threshold(task)
        errors = []
        best = None

        for index, (provider_id, model) in enumerate(chain):
            check(cancel)
            is_last = index == len(chain) - 1
            started = time.monotonic()
            try:
                completion = send(provider_id, model)
            except ProviderError as e:
                logger.warning("task=%s provider=%s failed: %s", task, provider_id, e)
                errors.append(str(e))
                continue

            latency_ms = int((time.monotonic() - started) * 1000)
            confidence = score_response(task, completion.content, expected_fields)
            result = CallResult(
                content=completion.content,
                provider=provider_id,
                model=model,
                tokens_used=completion.tokens_used,
                latency_ms=latency_ms,
                confidence=confidence,
                used_fallback=index > 0,
            )
            logger.info(
                "task=%s provider=%s model=%s confidence=%.2f latency=%dms",
                task, provider_id, model, confidence, latency_ms,
            )

            if confidence < threshold and not is_last:
                logger.info("task=%s confidence %.2f below %.2f, trying next provider",
                            task, confidence, threshold)
                if best is None or confidence > best.confidence:
                    best = result
                continue
            return result

        # Every remaining candidate failed at the transport level. A scored
        # response from earlier in the chain still beats no response.
        if best is not None:
            return best
        raise AllProvidersExhausted(task, errors)

    def call_ensemble(self, task, messages, max_tokens=None, temperature=None,
                      expected_fields=None, cancel=None, size=None) -> CallResult:
        """Race several providers; the first response at or above threshold wins.

        With fewer than two credentialed candidates this is a plain call().
        If no candidate reaches the threshold, the highest-scoring one is
        returned. If every candidate fails, falls back to call().
        """
        size = size or self.settings.ensemble_size
        candidates = [
            (provider_id, resolve_model(provider_id, alias))
            for provider_id, alias in ENSEMBLE_CANDIDATES
            if self.settings.has_credential(provider_id)
        ][:size]
        if len(candidates) < 2:
            return self.call(task, messages, max_tokens, temperature, expected_fields, cancel)

        check(cancel)
        threshold = self.threshold(task)
        max_tokens = max_tokens or DEFAULTS["max_tokens"]
        temperature = DEFAULTS["temperature"] if temperature is None else temperature

        def send(provider_id, model):
            started = time.monotonic()
            completion = self.transport.complete(
                provider_id, model, messages,
                api_key=self.settings.credentials.get(provider_id),
                max_tokens=max_tokens,
                temperature=temperature,
                timeout=self.settings.request_timeout,
            )
            return completion, int((time.monotonic() - started) * 1000)

        pool = ThreadPoolExecutor(max_workers=len(candidates), thread_name_prefix="ensemble")
        best = None
        try:
            pending = {
                pool.submit(send, provider_id, model): (index, provider_id, model)
                for index, (provider_id, model) in enumerate(candidates)
            }
            while pending:
                done, _ = wait(pending, timeout=CANCEL_POLL_SECONDS, return_when=FIRST_COMPLETED)
                check(cancel)
                for future in sorted(done, key=lambda f: pending[f][0]):
                    index, provider_id, model = pending.pop(future)
                    try:
                        completion, latency_ms = future.result()
                    except ProviderError as e:
                        logger.warning("ensemble task=%s provider=%s failed: %s", task, provider_id, e)
                        continue
                    confidence = score_response(task, completion.content, expected_fields)
                    result = CallResult(
                        content=completion.content,
                        provider=provider_id,
                        model=model,
                        tokens_used=completion.tokens_used,
                        latency_ms=latency_ms,
                        confidence=confidence,
                        used_fallback=index > 0,
                    )
                    if confidence >= threshold:
                        logger.info("ensemble task=%s won by %s (%.2f)", task, provider_id, confidence)
                        return result
                    if best is None or confidence > best.confidence:
                        best = result
        finally:
            # Requests already on the wire cannot be aborted; their results are dropped.
            pool.shutdown(wait=False, cancel_futures=True)

        if best is not None:
            return best
        logger.warning("ensemble task=%s: every candidate failed, using standard routing", task)
        return self.call(task, messages, max_tokens, temperature, expected_fields, cancel)
