"""Keyword-pattern intent classifier, the zero-call fast path of intent detection."""

import re

from core.state import IntentResult

FAST_PATH_THRESHOLD = 0.85

# Checked in order; the first intent with a matching phrase wins.
# Each entry: (intent_type, confidence, phrases)
INTENT_PATTERNS = [
    ("create_project", 0.9, (
        "build me", "create a", "make a", "build a", "new website", "new project",
        "make me", "generate a",
    )),
    ("add_page", 0.85, (
        "add a page", "add page", "new page", "create page", "add a new page",
    )),
    ("add_component", 0.85, (
        "add a component", "add component", "add a section", "add section",
        "add a button", "add a form", "add a navbar", "add a footer",
    )),
    ("modify_component", 0.8, (
        "change the", "update the", "modify the", "edit the", "make it", "replace the",
    )),
    ("fix_error", 0.85, (
        "fix the", "fix this", "error", "bug", "broken", "not working", "doesn't work",
    )),
    ("style_change", 0.8, (
        "change color", "change the color", "make it darker", "make it lighter",
        "dark mode", "light mode", "font", "styling",
    )),
    ("refactor", 0.8, (
        "refactor", "clean up", "reorganize", "split into",
    )),
    ("question", 0.9, (
        "how do i", "how can i", "what is", "can you explain", "tell me about",
    )),
]

# Intents that normally write files and may overwrite user edits
_DESTRUCTIVE = {"modify_component", "refactor", "style_change"}

NEW_PROJECT_ENTRY = "src/pages/Index.tsx"


def _phrase_re(phrase):
    return re.compile(r"\b" + re.escape(phrase) + r"\b")


_COMPILED = [
    (intent, confidence, [_phrase_re(p) for p in phrases])
    for intent, confidence, phrases in INTENT_PATTERNS
]


def classify(prompt, has_existing_artifacts):
    """Match a prompt against the keyword table.

    With no existing artifacts every non-question match is coerced to
    create_project. A prompt that matches nothing on an empty workspace
    is a low-confidence create_project.

    Returns an IntentResult, or None when nothing matched on an existing
    project.
    """
    text = prompt.lower()

    for intent, confidence, patterns in _COMPILED:
        if not any(p.search(text) for p in patterns):
            continue

        if not has_existing_artifacts and intent != "question":
            return IntentResult(
                type="create_project",
                confidence=max(confidence, FAST_PATH_THRESHOLD),
                summary="Create a new project",
                target_paths=[NEW_PROJECT_ENTRY],
                requires_new_artifacts=True,
                is_destructive=False,
            )

        return IntentResult(
            type=intent,
            confidence=confidence,
            summary=f"Detected {intent.replace('_', ' ')} request",
            requires_new_artifacts=intent in ("create_project", "add_page", "add_component"),
            is_destructive=intent in _DESTRUCTIVE,
        )

    if not has_existing_artifacts:
        return IntentResult(
            type="create_project",
            confidence=0.7,
            summary="Create a new project",
            target_paths=[NEW_PROJECT_ENTRY],
        )
    return None
