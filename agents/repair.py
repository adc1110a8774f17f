"""Repair agent — bounded auto-fix and backend-assisted repair loop."""

import os
import time

from agents.autofixer import auto_fix
from agents.patch_composer import PatchComposer
from config.defaults import SAFETY_LIMITS
from core.context import filter_writeable, merge_artifacts
from core.errors import AllProvidersExhausted
from core.state import PipelineContext, RepairAttempt, RepairOutcome, Artifact
from core.telemetry import Tracer, get_logger
from core.validation import validate
from utils.llm import parse_files

_PROMPT_FILE = os.path.join(os.path.dirname(__file__), "prompts", "repair.txt")


def _load_prompt():
    with open(_PROMPT_FILE) as f:
        return f.read()


def _error_labels(errors):
    return [f"{e.category}: {e.path} {e.message}" for e in errors]


class RepairAgent:
    """Drives artifacts toward a valid state within a fixed attempt budget."""

    name = "repair"

    def __init__(self, router, max_attempts=None):
        self.router = router
        limit = SAFETY_LIMITS["max_repair_attempts"]
        self.max_attempts = limit if max_attempts is None else max(0, min(max_attempts, limit))
        self.composer = PatchComposer()

    def repair(self, context: PipelineContext, validation) -> RepairOutcome:
        """Never raises for provider or parse failures; cancellation propagates."""
        tracer = Tracer(context)
        log = get_logger(__name__, context.session_id)
        plan = context.plan
        artifacts = list(context.generated_artifacts)
        attempts = []

        # Deterministic fixes first, kept only if they strictly help
        fixed, changed = auto_fix(artifacts)
        if changed:
            fixed_validation = validate(fixed, plan)
            if len(fixed_validation.critical_errors) < len(validation.critical_errors):
                log.info("auto-fix reduced errors %d -> %d (%s)",
                         len(validation.critical_errors), len(fixed_validation.critical_errors),
                         ", ".join(changed))
                artifacts, validation = fixed, fixed_validation

        best_artifacts, best_validation = artifacts, validation
        prompt = _load_prompt()

        for number in range(1, self.max_attempts + 1):
            if validation.valid:
                break
            if context.cancel is not None:
                context.cancel.raise_if_cancelled()

            started = time.monotonic()
            targeted = _error_labels(self.composer.select(validation.critical_errors))
            message, _ = self.composer.compose(validation.critical_errors, artifacts)
            patched = []

            try:
                result = self.router.call(
                    "repair",
                    [{"role": "system", "content": prompt}, {"role": "user", "content": message}],
                    temperature=0.2,
                    cancel=context.cancel,
                )
                tracer.model_call("repair", "repair", result)
                patches = filter_writeable([
                    Artifact(path=path, content=content, operation="update")
                    for path, content in parse_files(result.content)
                ])
                if patches:
                    artifacts = merge_artifacts(artifacts, patches)
                    validation = validate(artifacts, plan)
                    patched = [p.path for p in patches]
                else:
                    tracer.stage_retry("repair", number, "response contained no file blocks")
            except AllProvidersExhausted as e:
                tracer.stage_retry("repair", number, str(e))

            attempt = RepairAttempt(
                attempt=number,
                errors=targeted,
                patches_applied=patched,
                resolved=validation.valid,
                duration_ms=int((time.monotonic() - started) * 1000),
            )
            attempts.append(attempt)
            context.repair_history.append(attempt)
            tracer.repair_attempt(attempt)

            if len(validation.critical_errors) < len(best_validation.critical_errors):
                best_artifacts, best_validation = artifacts, validation

        return RepairOutcome(
            artifacts=best_artifacts,
            validation=best_validation,
            attempts=attempts,
            success=best_validation.valid,
        )


def analyze_repair_history(attempts):
    """Summary of a repair run: success rate and recurring error categories."""
    if not attempts:
        return {"attempts": 0, "resolved": False, "success_rate": 0.0, "common_errors": []}

    counts = {}
    for attempt in attempts:
        for label in attempt.errors:
            category = label.split(":", 1)[0]
            counts[category] = counts.get(category, 0) + 1
    common = sorted(counts, key=counts.get, reverse=True)

    patched = sum(1 for a in attempts if a.patches_applied)
    return {
        "attempts": len(attempts),
        "resolved": attempts[-1].resolved,
        "success_rate": round(patched / len(attempts), 2),
        "common_errors": common,
        "total_duration_ms": sum(a.duration_ms for a in attempts),
    }
