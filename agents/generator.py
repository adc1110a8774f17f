"""Generator agent — produces artifacts from plan, context and library matches."""

import os

from config.defaults import DEFAULTS, SAFETY_LIMITS
from core.context import build_summary, filter_writeable
from core.errors import NoArtifactsExtracted
from core.state import PipelineContext, ArchitecturePlan, Artifact
from core.telemetry import Tracer, get_logger
from agents.planner import plan_to_json
from manager.library_matcher import library_payload
from utils.llm import parse_files

_PROMPT_DIR = os.path.join(os.path.dirname(__file__), "prompts")
_PROMPT_FILE = os.path.join(_PROMPT_DIR, "generator.txt")
_MODIFY_PROMPT_FILE = os.path.join(_PROMPT_DIR, "generator_modify.txt")
_DIRECTIVES_FILE = os.path.join(_PROMPT_DIR, "directives.txt")

EXCERPT_EXTENSIONS = (".tsx", ".ts", ".jsx", ".js")


def _load_prompt(path):
    with open(path) as f:
        return f.read()


def existing_excerpt(artifacts, max_files=None, max_chars=None):
    """Size-bounded view of existing code files for modification prompts."""
    max_files = max_files or DEFAULTS["excerpt_files"]
    max_chars = max_chars or DEFAULTS["excerpt_chars"]
    code_files = [a for a in artifacts if a.path.endswith(EXCERPT_EXTENSIONS)][:max_files]
    parts = ["## EXISTING FILES"]
    for a in code_files:
        body = a.content if len(a.content) <= max_chars else a.content[:max_chars] + "\n(truncated)"
        parts.append(f"### {a.path}\n{body}")
    return "\n\n".join(parts)


def enforce_limits(artifacts, log=None):
    """Drop files beyond the per-generation count and size ceilings."""
    kept, total = [], 0
    for a in artifacts:
        size = len(a.content.encode("utf-8"))
        if len(kept) >= SAFETY_LIMITS["max_files_per_generation"]:
            if log:
                log.warning("file limit reached, dropping %s", a.path)
            continue
        if size > SAFETY_LIMITS["max_file_size_bytes"] or total + size > SAFETY_LIMITS["max_total_content_bytes"]:
            if log:
                log.warning("size limit exceeded, dropping %s (%d bytes)", a.path, size)
            continue
        kept.append(a)
        total += size
    return kept


class GeneratorAgent:
    """Generates full-file artifacts for a plan."""

    name = "generator"

    def __init__(self, router, settings=None):
        self.router = router
        self.settings = settings

    def build_system_prompt(self, context: PipelineContext, plan: ArchitecturePlan):
        modifying = not context.is_new_project
        parts = [
            _load_prompt(_MODIFY_PROMPT_FILE if modifying else _PROMPT_FILE),
            _load_prompt(_DIRECTIVES_FILE),
        ]
        if modifying:
            if context.project is not None:
                budget = self.settings.context_summary_chars if self.settings else DEFAULTS["context_summary_chars"]
                parts.append(build_summary(context.project, budget))
            parts.append(existing_excerpt(context.existing_artifacts))
        payload = library_payload(plan.library_matches)
        if payload:
            parts.append(payload)
        return "\n\n".join(parts)

    def build_messages(self, context: PipelineContext, plan: ArchitecturePlan):
        messages = [{"role": "system", "content": self.build_system_prompt(context, plan)}]
        for turn in context.conversation_history[-DEFAULTS["history_turns"]:]:
            if turn.get("role") in ("user", "assistant") and turn.get("content"):
                messages.append({"role": turn["role"], "content": turn["content"]})
        messages.append({
            "role": "user",
            "content": f"PLAN:\n{plan_to_json(plan)}\n\nUSER REQUEST: {context.prompt}",
        })
        return messages

    def _use_ensemble(self, context):
        if not context.is_new_project or self.settings is None:
            return False
        return self.settings.ensemble_enabled and len(self.settings.credentialed()) >= 2

    def generate(self, context: PipelineContext, plan: ArchitecturePlan) -> list:
        """Call the coding task and extract artifacts.

        Raises NoArtifactsExtracted when nothing usable comes back. Provider
        exhaustion propagates to the orchestrator.
        """
        context.status = "generating"
        tracer = Tracer(context)
        log = get_logger(__name__, context.session_id)
        messages = self.build_messages(context, plan)

        if self._use_ensemble(context):
            result = self.router.call_ensemble("coding", messages, temperature=0.5, cancel=context.cancel)
        else:
            result = self.router.call("coding", messages, temperature=0.5, cancel=context.cancel)
        tracer.model_call("generate", "coding", result)

        existing_paths = {a.path for a in context.existing_artifacts}
        # A path emitted twice keeps its last body
        extracted = dict(parse_files(result.content))
        artifacts = [
            Artifact(path=path, content=content,
                     operation="update" if path in existing_paths else "create")
            for path, content in extracted.items()
        ]
        artifacts = enforce_limits(filter_writeable(artifacts), log)
        if not artifacts:
            raise NoArtifactsExtracted(
                f"{result.provider}/{result.model} returned no path-annotated code blocks"
            )

        log.info("generated %d artifacts via %s", len(artifacts), result.provider)
        return artifacts
