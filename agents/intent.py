"""Intent agent — keyword fast path, backend-assisted slow path."""

import os

from core.errors import AllProvidersExhausted
from core.state import PipelineContext, IntentResult, INTENT_TYPES
from core.telemetry import Tracer, get_logger
from manager.classifier import classify, FAST_PATH_THRESHOLD
from utils.structured import parse_json_object, Parsed

_PROMPT_FILE = os.path.join(os.path.dirname(__file__), "prompts", "intent.txt")

REQUIRED_FIELDS = ("type", "confidence", "summary")
PARSE_FAILURE_CONFIDENCE = 0.5
CALL_FAILURE_CONFIDENCE = 0.3


def _load_prompt():
    with open(_PROMPT_FILE) as f:
        return f.read()


def fallback_intent(has_existing, confidence, reason):
    """Low-confidence default used whenever the slow path cannot decide."""
    if has_existing:
        return IntentResult(
            type="modify_component",
            confidence=confidence,
            summary=f"Modify the existing project ({reason})",
            requires_new_artifacts=False,
            is_destructive=True,
        )
    return IntentResult(
        type="create_project",
        confidence=confidence,
        summary=f"Create a new project ({reason})",
        target_paths=["src/pages/Index.tsx"],
    )


def _from_payload(payload):
    intent_type = payload.get("type")
    if intent_type not in INTENT_TYPES:
        return None
    try:
        confidence = float(payload.get("confidence", 0))
    except (TypeError, ValueError):
        return None
    targets = payload.get("targetFiles")
    return IntentResult(
        type=intent_type,
        confidence=max(0.0, min(1.0, confidence)),
        summary=str(payload.get("summary", "")),
        target_paths=[str(p) for p in targets] if isinstance(targets, list) else [],
        requires_new_artifacts=bool(payload.get("requiresNewFiles", intent_type != "question")),
        is_destructive=bool(payload.get("isDestructive", False)),
    )


class IntentAgent:
    """Classifies what the user wants before any planning happens."""

    name = "intent"

    def __init__(self, router):
        self.router = router

    def run(self, context: PipelineContext) -> IntentResult:
        tracer = Tracer(context)
        log = get_logger(__name__, context.session_id)
        has_existing = not context.is_new_project

        quick = classify(context.prompt, has_existing)
        if quick is not None and quick.confidence >= FAST_PATH_THRESHOLD:
            log.info("intent fast path: %s (%.2f)", quick.type, quick.confidence)
            context.intent = quick
            return quick

        files = ", ".join(a.path for a in context.existing_artifacts[:20]) or "none"
        messages = [
            {"role": "system", "content": _load_prompt()},
            {"role": "user", "content": f"Existing files: {files}\n\nRequest: {context.prompt}"},
        ]
        try:
            result = self.router.call(
                "intent", messages,
                max_tokens=500, temperature=0.2,
                expected_fields=REQUIRED_FIELDS,
                cancel=context.cancel,
            )
        except AllProvidersExhausted as e:
            tracer.stage_retry("intent", 1, str(e))
            intent = fallback_intent(has_existing, CALL_FAILURE_CONFIDENCE, "classifier unavailable")
            context.intent = intent
            return intent

        tracer.model_call("intent", "intent", result)
        parsed = parse_json_object(result.content, required=REQUIRED_FIELDS)
        intent = _from_payload(parsed.value) if isinstance(parsed, Parsed) else None
        if intent is None:
            log.warning("intent response unusable, falling back")
            intent = fallback_intent(has_existing, PARSE_FAILURE_CONFIDENCE, "unparseable classification")

        context.intent = intent
        return intent
