"""Main pipeline orchestrator — sequences stages, checkpoints, events and persistence."""

from __future__ import annotations

from core.cancel import CancelToken
from core.context import (
    ContextBuilder, create_checkpoint, latest_checkpoint, rollback_to, derive_routes,
)
from core.errors import AllProvidersExhausted, NoArtifactsExtracted, PipelineCancelled
from core.events import ProgressEvent
from core.router import ProviderRouter
from core.state import GenerationRequest, PipelineContext, PipelineResult
from core.store import InMemoryArtifactStore, SessionStore
from core.telemetry import Tracer, export_diagnostics, get_logger, summarize
from core.validation import validate
from agents.intent import IntentAgent
from agents.planner import PlannerAgent
from agents.generator import GeneratorAgent
from agents.defaults import default_artifacts
from agents.repair import RepairAgent, analyze_repair_history
from agents.persona import PersonaWriter, QUESTION_MESSAGE, FAILURE_MESSAGE, FAILURE_SUGGESTIONS
from manager.library_matcher import find_matches


class Orchestrator:
    """Runs one generation request end to end.

    context -> intent -> plan -> library match -> generate -> validate
    -> repair (if needed) -> persist. Every outcome, including provider
    exhaustion and cancellation, comes back as a PipelineResult.
    """

    def __init__(self, settings, store=None, sessions=None, router=None, gates=None):
        self.settings = settings
        self.store = store or InMemoryArtifactStore()
        self.sessions = sessions or SessionStore()
        self.router = router or ProviderRouter(settings)
        self.gates = list(gates or [])
        self.context_builder = ContextBuilder(self.store)
        self.intent = IntentAgent(self.router)
        self.planner = PlannerAgent(self.router, settings)
        self.generator = GeneratorAgent(self.router, settings)
        self.repairer = RepairAgent(self.router, settings.max_repair_attempts)
        self.persona = PersonaWriter()

    # -- helpers ---------------------------------------------------------

    def _emit(self, sink, log, **fields):
        if sink is None:
            return
        try:
            sink(ProgressEvent(**fields))
        except Exception:
            log.exception("progress sink raised, event dropped")

    def _set_status(self, context, status):
        context.status = status
        self.sessions.update_status(context.session_id, status)

    def _check(self, context):
        if context.cancel is not None:
            context.cancel.raise_if_cancelled()

    def _failure(self, context, errors, message=FAILURE_MESSAGE, suggestions=None):
        self._set_status(context, "failed")
        return PipelineResult(
            success=False,
            models_used=list(context.models_used),
            repair_attempts=len(context.repair_history),
            errors=list(errors),
            message=message,
            suggestions=list(suggestions if suggestions is not None else FAILURE_SUGGESTIONS),
            telemetry=summarize(context),
            session_id=context.session_id,
            intent=context.intent.type if context.intent else "",
            diagnostics=export_diagnostics(context),
        )

    # -- gates -----------------------------------------------------------

    def check_gates(self, request):
        """Return None if every gate passes, else the first refusal reason."""
        for gate in self.gates:
            ok, reason = gate(request)
            if not ok:
                return reason or "request refused"
        return None

    # -- pipeline --------------------------------------------------------

    def run(self, request: GenerationRequest, sink=None, cancel: CancelToken | None = None) -> PipelineResult:
        context = PipelineContext.from_request(request, cancel=cancel)
        log = get_logger(__name__, context.session_id)
        tracer = Tracer(context)
        self._set_status(context, "pending")

        refusal = self.check_gates(request)
        if refusal:
            log.warning("request refused before start: %s", refusal)
            self._emit(sink, log, type="error", message=refusal)
            return self._failure(context, [refusal], message=refusal, suggestions=[])

        if not self.router.has_any_provider():
            error = str(AllProvidersExhausted("all"))
            self._emit(sink, log, type="error", message="No AI providers are configured")
            return self._failure(context, [error])

        stage = "context"
        try:
            tracer.stage_start(stage)
            self._emit(sink, log, type="stage", stage=stage, status="start")
            if not context.existing_artifacts:
                context.existing_artifacts = self.store.list_artifacts(request.workspace_id)
            context.project = self.context_builder.build(request.workspace_id, context.existing_artifacts)
            tracer.stage_complete(stage, files=len(context.existing_artifacts))
            self._emit(sink, log, type="stage", stage=stage, status="complete")

            stage = "intent"
            self._check(context)
            tracer.stage_start(stage)
            self._emit(sink, log, type="stage", stage=stage, status="start")
            intent = self.intent.run(context)
            tracer.stage_complete(stage, intent=intent.type, confidence=intent.confidence)
            self._emit(sink, log, type="stage", stage=stage, status="complete",
                       message=intent.summary, data={"intent": intent.type, "confidence": intent.confidence})

            if intent.type == "question":
                self._set_status(context, "completed")
                self._emit(sink, log, type="complete", message=QUESTION_MESSAGE)
                return PipelineResult(
                    success=True,
                    models_used=list(context.models_used),
                    validation_passed=True,
                    message=QUESTION_MESSAGE,
                    telemetry=summarize(context),
                    session_id=context.session_id,
                    intent=intent.type,
                    diagnostics=export_diagnostics(context),
                )

            stage = "plan"
            self._check(context)
            self._set_status(context, "planning")
            tracer.stage_start(stage)
            self._emit(sink, log, type="stage", stage=stage, status="start")
            plan = self.planner.plan(context)
            plan.library_matches = find_matches(context.prompt)
            create_checkpoint(context, "plan")
            tracer.stage_complete(stage, project_type=plan.project_type,
                                  library_matches=len(plan.library_matches))
            self._emit(sink, log, type="stage", stage=stage, status="complete",
                       data={"projectType": plan.project_type, "files": plan.planned_paths()})

            stage = "generate"
            self._check(context)
            self._set_status(context, "generating")
            tracer.stage_start(stage)
            self._emit(sink, log, type="stage", stage=stage, status="start")
            try:
                artifacts = self.generator.generate(context, plan)
            except (NoArtifactsExtracted, AllProvidersExhausted) as e:
                if not context.is_new_project:
                    raise
                log.warning("generation unusable (%s), using default site", e)
                tracer.stage_retry(stage, 1, str(e))
                artifacts = default_artifacts(context.prompt)
            context.generated_artifacts = artifacts
            create_checkpoint(context, "generate")
            tracer.stage_complete(stage, files=len(artifacts))
            self._emit(sink, log, type="stage", stage=stage, status="complete")

            stage = "validate"
            self._check(context)
            self._set_status(context, "validating")
            tracer.stage_start(stage)
            self._emit(sink, log, type="stage", stage=stage, status="start")
            validation = validate(context.generated_artifacts, plan)
            tracer.validation_result(validation)
            tracer.stage_complete(stage, valid=validation.valid, score=validation.score)
            self._emit(sink, log, type="stage", stage=stage, status="complete",
                       data={"valid": validation.valid, "score": validation.score,
                             "errors": len(validation.critical_errors)})

            if not validation.valid:
                stage = "repair"
                tracer.stage_start(stage)
                self._emit(sink, log, type="stage", stage=stage, status="start")
                initial_errors = len(validation.critical_errors)
                outcome = self.repairer.repair(context, validation)
                if len(outcome.validation.critical_errors) >= initial_errors:
                    # No progress: restore the exact post-generation set
                    point = latest_checkpoint(context, "generate")
                    if point is not None:
                        rollback_to(context, point.id)
                else:
                    context.generated_artifacts = outcome.artifacts
                    validation = outcome.validation
                history = analyze_repair_history(outcome.attempts)
                log.info("repair finished: %d attempts, common errors %s",
                         history["attempts"], history["common_errors"])
                tracer.stage_complete(stage, attempts=len(outcome.attempts), success=outcome.success,
                                      common_errors=history["common_errors"])
                self._emit(sink, log, type="stage", stage=stage, status="complete",
                           data={"attempts": len(outcome.attempts), "valid": validation.valid})

            stage = "persist"
            self._check(context)
            model = context.models_used[-1].split(": ", 1)[-1] if context.models_used else "default"
            self.store.persist(context.workspace_id, context.generated_artifacts, model=model)
            for artifact in context.generated_artifacts:
                self._emit(sink, log, type="file", path=artifact.path, content=artifact.content,
                           status=artifact.operation)

        except PipelineCancelled as e:
            tracer.stage_error(stage, e)
            self._emit(sink, log, type="error", stage=stage, message="Generation cancelled")
            return self._failure(context, [str(e)], message="Generation cancelled.", suggestions=[])
        except AllProvidersExhausted as e:
            tracer.stage_error(stage, e)
            self._emit(sink, log, type="error", stage=stage, message=FAILURE_MESSAGE)
            return self._failure(context, [str(e)])
        except NoArtifactsExtracted as e:
            tracer.stage_error(stage, e)
            self._emit(sink, log, type="error", stage=stage, message=str(e))
            return self._failure(context, [str(e)])
        except Exception as e:
            log.exception("unexpected failure in %s stage", stage)
            tracer.stage_error(stage, e)
            self._emit(sink, log, type="error", stage=stage, message=FAILURE_MESSAGE)
            return self._failure(context, [f"{type(e).__name__}: {e}"])

        self._set_status(context, "completed")
        message, suggestions = self.persona.summarize(
            context.prompt, context.generated_artifacts,
            is_new_project=context.is_new_project,
            validation_passed=validation.valid,
        )
        result = PipelineResult(
            success=True,
            artifacts=list(context.generated_artifacts),
            models_used=list(context.models_used),
            validation_passed=validation.valid,
            repair_attempts=len(context.repair_history),
            errors=[f"{e.category}: {e.path} {e.message}" for e in validation.critical_errors],
            message=message,
            routes=derive_routes([a.path for a in context.generated_artifacts]),
            suggestions=suggestions,
            telemetry=summarize(context),
            session_id=context.session_id,
            intent=context.intent.type if context.intent else "",
            diagnostics=export_diagnostics(context),
        )
        self._emit(sink, log, type="complete", message=message,
                   data={"files": len(result.artifacts), "validationPassed": result.validation_passed})
        log.info("run completed: %d files, valid=%s", len(result.artifacts), result.validation_passed)
        return result
