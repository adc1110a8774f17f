"""Tagged parsing of loosely-typed JSON in model output."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field

_FENCED_JSON_RE = re.compile(r"```(?:json)?\s*\n?(.*?)```", re.DOTALL)


@dataclass(frozen=True)
class Parsed:
    value: dict
    source: str = "direct"      # "direct" | "fenced" | "embedded"


@dataclass(frozen=True)
class Malformed:
    raw: str
    reason: str = ""
    missing: tuple = field(default_factory=tuple)


@dataclass(frozen=True)
class Absent:
    pass


def first_balanced_object(text):
    """Return the first brace-balanced {...} substring, ignoring braces in strings."""
    start = text.find("{")
    while start != -1:
        depth = 0
        in_string = False
        escaped = False
        for i in range(start, len(text)):
            ch = text[i]
            if in_string:
                if escaped:
                    escaped = False
                elif ch == "\\":
                    escaped = True
                elif ch == '"':
                    in_string = False
                continue
            if ch == '"':
                in_string = True
            elif ch == "{":
                depth += 1
            elif ch == "}":
                depth -= 1
                if depth == 0:
                    return text[start:i + 1]
        # unbalanced from this brace, try the next one
        start = text.find("{", start + 1)
    return None


def parse_json_object(text, required=()):
    """Parse a JSON object from model output.

    Tries the whole text, then a fenced block, then the first balanced
    object embedded in prose. Returns Parsed, Malformed, or Absent.
    """
    if not text or not text.strip():
        return Absent()

    stripped = text.strip()
    candidates = [(stripped, "direct")]
    fenced = _FENCED_JSON_RE.search(stripped)
    if fenced:
        candidates.append((fenced.group(1).strip(), "fenced"))
    embedded = first_balanced_object(stripped)
    if embedded:
        candidates.append((embedded, "embedded"))

    looked_like_json = False
    for candidate, source in candidates:
        if not candidate.startswith("{"):
            continue
        looked_like_json = True
        try:
            value = json.loads(candidate)
        except json.JSONDecodeError:
            continue
        if not isinstance(value, dict):
            continue
        missing = tuple(f for f in required if f not in value)
        if missing:
            return Malformed(raw=text, reason="missing required fields", missing=missing)
        return Parsed(value=value, source=source)

    if looked_like_json:
        return Malformed(raw=text, reason="invalid JSON")
    return Absent()
