"""Stage tracer and logging setup.

Every stage transition and backend call lands in the context's telemetry
list as a TelemetryEvent and is mirrored to the log with the session tag.
"""

from __future__ import annotations

import logging
import time

from core.state import CallResult, PipelineContext, TelemetryEvent

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level="INFO"):
    logging.basicConfig(level=getattr(logging, str(level).upper(), logging.INFO), format=LOG_FORMAT)


class SessionLogger(logging.LoggerAdapter):
    """Prefixes every record with the short session id."""

    def process(self, msg, kwargs):
        return f"[{self.extra['session']}] {msg}", kwargs


def get_logger(name, session_id=None):
    logger = logging.getLogger(name)
    if session_id:
        return SessionLogger(logger, {"session": session_id[:8]})
    return logger


class Tracer:
    """Records stage and model-call events into a PipelineContext."""

    def __init__(self, context: PipelineContext):
        self.context = context
        self.log = get_logger("pipeline.telemetry", context.session_id)
        self._started = {}

    def _record(self, stage, event, **fields):
        entry = TelemetryEvent(stage=stage, event=event, timestamp=time.time(), **fields)
        self.context.telemetry.append(entry)
        return entry

    def stage_start(self, stage, **metadata):
        self._started[stage] = time.monotonic()
        self.log.info("%s started", stage)
        return self._record(stage, "start", metadata=metadata)

    def _elapsed(self, stage):
        started = self._started.pop(stage, None)
        return int((time.monotonic() - started) * 1000) if started is not None else 0

    def stage_complete(self, stage, **metadata):
        duration = self._elapsed(stage)
        self.log.info("%s completed in %dms", stage, duration)
        return self._record(stage, "complete", duration_ms=duration, success=True, metadata=metadata)

    def stage_error(self, stage, error, **metadata):
        duration = self._elapsed(stage)
        self.log.error("%s failed after %dms: %s", stage, duration, error)
        metadata["error"] = str(error)
        return self._record(stage, "error", duration_ms=duration, success=False, metadata=metadata)

    def stage_retry(self, stage, attempt, reason):
        self.log.warning("%s retry %d: %s", stage, attempt, reason)
        return self._record(stage, "retry", metadata={"attempt": attempt, "reason": reason})

    def model_call(self, stage, task, result: CallResult):
        """One backend call. Also appends "task: model" to the models-used list."""
        label = f"{task}: {result.model}"
        if label not in self.context.models_used:
            self.context.models_used.append(label)
        self.log.debug("%s call %s/%s tokens=%d latency=%dms confidence=%.2f",
                       task, result.provider, result.model, result.tokens_used,
                       result.latency_ms, result.confidence)
        return self._record(
            stage, "complete",
            duration_ms=result.latency_ms,
            success=True,
            tokens=result.tokens_used,
            model=result.model,
            metadata={
                "kind": "model_call",
                "task": task,
                "provider": result.provider,
                "confidence": result.confidence,
                "used_fallback": result.used_fallback,
            },
        )

    def validation_result(self, validation):
        self.log.info("validation valid=%s score=%d errors=%d warnings=%d",
                      validation.valid, validation.score,
                      len(validation.critical_errors), len(validation.warnings))
        return self._record("validate", "complete", success=validation.valid, metadata={
            "kind": "validation",
            "score": validation.score,
            "completeness": validation.completeness,
            "errors": len(validation.critical_errors),
            "warnings": len(validation.warnings),
        })

    def repair_attempt(self, attempt):
        self.log.info("repair attempt %d resolved=%s patched=%d",
                      attempt.attempt, attempt.resolved, len(attempt.patches_applied))
        return self._record("repair", "complete", duration_ms=attempt.duration_ms,
                            success=attempt.resolved, metadata={
                                "kind": "repair_attempt",
                                "attempt": attempt.attempt,
                                "patches": list(attempt.patches_applied),
                            })

    def summary(self):
        return summarize(self.context)


def summarize(context: PipelineContext):
    """Per-stage durations, total duration, tokens, models and repair count."""
    stages = [
        {"name": e.stage, "duration_ms": e.duration_ms or 0, "success": e.success}
        for e in context.telemetry
        if e.event in ("complete", "error") and "kind" not in e.metadata
    ]
    return {
        "stages": stages,
        "total_duration_ms": int((time.time() - context.start_time) * 1000),
        "total_tokens": sum(e.tokens or 0 for e in context.telemetry),
        "models_used": list(context.models_used),
        "repair_attempts": len(context.repair_history),
    }


def collect_metrics(context: PipelineContext):
    """Flat counters for dashboards."""
    calls = [e for e in context.telemetry if e.metadata.get("kind") == "model_call"]
    return {
        "session_id": context.session_id,
        "model_calls": len(calls),
        "fallback_calls": sum(1 for e in calls if e.metadata.get("used_fallback")),
        "total_tokens": sum(e.tokens or 0 for e in calls),
        "errors": sum(1 for e in context.telemetry if e.event == "error"),
        "retries": sum(1 for e in context.telemetry if e.event == "retry"),
        "files_generated": len(context.generated_artifacts),
        "repair_attempts": len(context.repair_history),
    }


def export_diagnostics(context: PipelineContext):
    """Full JSON-safe dump of a run for debugging."""
    return {
        "session_id": context.session_id,
        "workspace_id": context.workspace_id,
        "status": context.status,
        "summary": summarize(context),
        "metrics": collect_metrics(context),
        "events": [
            {
                "stage": e.stage,
                "event": e.event,
                "timestamp": e.timestamp,
                "duration_ms": e.duration_ms,
                "success": e.success,
                "tokens": e.tokens,
                "model": e.model,
                "metadata": e.metadata,
            }
            for e in context.telemetry
        ],
        "repairs": [
            {"attempt": r.attempt, "errors": r.errors, "patches": r.patches_applied,
             "resolved": r.resolved, "duration_ms": r.duration_ms}
            for r in context.repair_history
        ],
        "checkpoints": [{"id": p.id, "stage": p.stage, "files": len(p.snapshot)}
                        for p in context.rollback_points],
    }
