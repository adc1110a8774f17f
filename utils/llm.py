"""Provider transport: one blocking or streaming chat call per invocation.

Grok, Gemini and OpenAI all speak the OpenAI chat-completions protocol and
go through the ``openai`` SDK with a provider ``base_url``. Claude goes
through the ``anthropic`` SDK. Both SDK error hierarchies are folded into
``ProviderError`` so the router only handles one transport failure type.
"""

from __future__ import annotations

import logging
import posixpath
import re
from dataclasses import dataclass

import anthropic
import openai

from config.providers import PROVIDERS
from core.cancel import check

logger = logging.getLogger(__name__)

# ```tsx:src/components/Hero.tsx
FILE_BLOCK_RE = re.compile(r"```(\w+)?:([^\n]+)\n(.*?)```", re.DOTALL)


class ProviderError(Exception):
    """A backend was unreachable or answered with a non-2xx status."""

    def __init__(self, provider, message, status=None):
        self.provider = provider
        self.status = status
        super().__init__(f"{provider}: {message}" + (f" (HTTP {status})" if status else ""))


@dataclass
class Completion:
    content: str
    tokens_used: int = 0
    truncated: bool = False


def get_client(provider_id, api_key, timeout):
    """Return an SDK client for the provider. Raises if no API key is given."""
    if not api_key:
        raise ProviderError(provider_id, "no API key configured")
    provider = PROVIDERS[provider_id]
    if provider["sdk"] == "anthropic":
        return anthropic.Anthropic(api_key=api_key, timeout=timeout, max_retries=0)
    return openai.OpenAI(
        api_key=api_key,
        base_url=provider["base_url"],
        timeout=timeout,
        max_retries=0,
    )


def _split_system(messages):
    """Anthropic takes the system prompt separately from the turn list."""
    system = "\n\n".join(m["content"] for m in messages if m["role"] == "system")
    turns = [
        {"role": m["role"], "content": m["content"]}
        for m in messages if m["role"] != "system"
    ]
    return system, turns


def _cap_tokens(provider_id, max_tokens):
    return min(max_tokens, PROVIDERS[provider_id]["max_tokens"])


def complete(provider_id, model, messages, api_key, max_tokens, temperature, timeout):
    """Issue one non-streaming chat call and return its text."""
    client = get_client(provider_id, api_key, timeout)
    max_tokens = _cap_tokens(provider_id, max_tokens)

    try:
        if PROVIDERS[provider_id]["sdk"] == "anthropic":
            system, turns = _split_system(messages)
            response = client.messages.create(
                model=model,
                max_tokens=max_tokens,
                temperature=temperature,
                system=system,
                messages=turns,
            )
            text = "".join(
                block.text for block in response.content if getattr(block, "type", "") == "text"
            )
            usage = response.usage
            tokens = (usage.input_tokens + usage.output_tokens) if usage else 0
            truncated = response.stop_reason == "max_tokens"
        else:
            response = client.chat.completions.create(
                model=model,
                messages=messages,
                max_tokens=max_tokens,
                temperature=temperature,
            )
            choice = response.choices[0]
            text = choice.message.content or ""
            tokens = response.usage.total_tokens if response.usage else 0
            truncated = choice.finish_reason == "length"
    except anthropic.APIError as e:
        raise ProviderError(provider_id, str(e), getattr(e, "status_code", None)) from e
    except openai.APIError as e:
        raise ProviderError(provider_id, str(e), getattr(e, "status_code", None)) from e

    if truncated:
        logger.warning("%s/%s response hit the token limit, output may be incomplete", provider_id, model)
    return Completion(content=text, tokens_used=tokens, truncated=truncated)


def stream(provider_id, model, messages, api_key, max_tokens, temperature, timeout,
           on_chunk, cancel=None):
    """Stream one chat call, pushing each text delta to on_chunk.

    The cancel token is polled on every delta; a cancelled stream is closed
    before PipelineCancelled propagates.
    """
    client = get_client(provider_id, api_key, timeout)
    max_tokens = _cap_tokens(provider_id, max_tokens)
    parts = []
    tokens = 0
    truncated = False

    try:
        if PROVIDERS[provider_id]["sdk"] == "anthropic":
            system, turns = _split_system(messages)
            with client.messages.stream(
                model=model,
                max_tokens=max_tokens,
                temperature=temperature,
                system=system,
                messages=turns,
            ) as response:
                for chunk in response.text_stream:
                    check(cancel)
                    parts.append(chunk)
                    on_chunk(chunk)
                final = response.get_final_message()
                tokens = final.usage.input_tokens + final.usage.output_tokens
                truncated = final.stop_reason == "max_tokens"
        else:
            with client.chat.completions.create(
                model=model,
                messages=messages,
                max_tokens=max_tokens,
                temperature=temperature,
                stream=True,
            ) as response:
                for event in response:
                    check(cancel)
                    if getattr(event, "usage", None):
                        tokens = event.usage.total_tokens
                    if not event.choices:
                        continue
                    choice = event.choices[0]
                    if choice.finish_reason == "length":
                        truncated = True
                    delta = choice.delta.content if choice.delta else None
                    if delta:
                        parts.append(delta)
                        on_chunk(delta)
    except anthropic.APIError as e:
        raise ProviderError(provider_id, str(e), getattr(e, "status_code", None)) from e
    except openai.APIError as e:
        raise ProviderError(provider_id, str(e), getattr(e, "status_code", None)) from e

    if truncated:
        logger.warning("%s/%s stream hit the token limit, output may be incomplete", provider_id, model)
    return Completion(content="".join(parts), tokens_used=tokens, truncated=truncated)


def parse_files(response):
    """Extract (path, content) pairs from path-annotated fenced blocks.

    Expected format, one block per file:
        ```tsx:src/components/Hero.tsx
        export default function Hero() { ... }
        ```

    Paths are normalized ("src/./a.tsx" -> "src/a.tsx", leading slashes
    dropped) and bodies are trimmed. Blocks whose normalized path has no
    directory component or climbs out of the workspace are skipped.

    Returns list of (relative_path, content) tuples.
    """
    files = []
    for match in FILE_BLOCK_RE.finditer(response or ""):
        path = posixpath.normpath(match.group(2).strip().replace("\\", "/").lstrip("/"))
        if "/" not in path or path.startswith("../"):
            continue
        files.append((path, match.group(3).strip()))
    return files
