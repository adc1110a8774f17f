"""Context builder — classifies existing artifacts and summarizes the project.

Classification is a hard safety boundary: every path the generator or the
repair loop emits goes through ``is_writeable`` before it is accepted.
"""

from __future__ import annotations

import copy
import logging
import posixpath
import re
import time
import uuid

from config.rules import CLASSIFICATION_RULES, DEFAULT_CLASSIFICATION, OUTSIDE_CLASSIFICATION
from core.state import Artifact, PipelineContext, ProjectContext, RollbackPoint

logger = logging.getLogger(__name__)

# Structural signals. Each entry: (marker substring, pattern name)
PATTERN_MARKERS = [
    ("react-router", "react-router"),
    ("@/components/ui/", "shadcn"),
    ("useState", "hooks"),
    ("useEffect", "hooks"),
    ("useQuery", "react-query"),
    ("useMutation", "react-query"),
    ("zustand", "zustand"),
    ("@reduxjs/toolkit", "redux"),
    ("react-redux", "redux"),
]

# (import marker, dependency name)
DEPENDENCY_MARKERS = [
    ("lucide-react", "lucide-react"),
    ("framer-motion", "framer-motion"),
    ("@tanstack/react-query", "@tanstack/react-query"),
    ("zustand", "zustand"),
    ("react-router-dom", "react-router-dom"),
]

_PAGE_RE = re.compile(r"^src/pages/([^/]+)\.(?:tsx|jsx)$")


def normalize_path(path):
    """Collapse "." and ".." segments: "src/../package.json" -> "package.json"."""
    return posixpath.normpath(path.replace("\\", "/").lstrip("/"))


def classify_path(path):
    """Return (classification, writeable) for a workspace-relative path.

    Rules match the normalized path, so ".." segments cannot dodge them.
    """
    normalized = normalize_path(path)
    if normalized in (".", "..") or normalized.startswith("../"):
        return OUTSIDE_CLASSIFICATION
    for pattern, classification, writeable in CLASSIFICATION_RULES:
        if pattern.search(normalized):
            return classification, writeable
    return DEFAULT_CLASSIFICATION


def is_writeable(path):
    return classify_path(path)[1]


def filter_writeable(artifacts):
    """Drop artifacts the pipeline may not write, logging each one."""
    kept = []
    for artifact in artifacts:
        if is_writeable(artifact.path):
            kept.append(artifact)
        else:
            logger.warning("Dropping non-writeable path %s (%s)",
                           artifact.path, classify_path(artifact.path)[0])
    return kept


def derive_routes(paths):
    """Route list from page-shaped paths: src/pages/About.tsx -> /about."""
    routes = []
    for path in paths:
        match = _PAGE_RE.match(path)
        if not match:
            continue
        name = match.group(1)
        route = "/" if name.lower() == "index" else "/" + name.lower()
        if route not in routes:
            routes.append(route)
    return routes


def detect_patterns(artifacts):
    """Scan artifact content for styling, structural patterns and dependencies."""
    all_content = "\n".join(a.content for a in artifacts)

    styling = "tailwind"
    if "styled-components" in all_content:
        styling = "styled-components"
    elif "@emotion" in all_content:
        styling = "emotion"

    patterns = []
    for marker, name in PATTERN_MARKERS:
        if marker in all_content and name not in patterns:
            patterns.append(name)

    dependencies = [dep for marker, dep in DEPENDENCY_MARKERS if marker in all_content]
    return styling, patterns, dependencies


class ContextBuilder:
    """Builds a ProjectContext from supplied or persisted artifacts."""

    name = "context"

    def __init__(self, store=None):
        self.store = store

    def build(self, workspace_id, existing_artifacts=None) -> ProjectContext:
        artifacts = list(existing_artifacts or [])
        if not artifacts and self.store is not None:
            artifacts = self.store.list_artifacts(workspace_id)
            logger.debug("Loaded %d persisted artifacts for %s", len(artifacts), workspace_id)

        paths = [a.path for a in artifacts]
        styling, patterns, dependencies = detect_patterns(artifacts)

        return ProjectContext(
            framework="react",
            styling=styling,
            component_count=sum(1 for p in paths if p.startswith("src/components/")),
            page_count=sum(1 for p in paths if _PAGE_RE.match(p)),
            patterns=patterns,
            dependencies=dependencies,
            routes=derive_routes(paths),
            classifications={p: classify_path(p) for p in paths},
            last_modified=time.time(),
        )


def build_summary(project: ProjectContext, max_length=2000):
    """Compact text summary for prompt injection, truncated at max_length."""
    lines = [
        "## Project Context",
        f"- Framework: {project.framework}",
        f"- Styling: {project.styling}",
        f"- Components: {project.component_count}",
        f"- Pages: {project.page_count}",
    ]
    if project.patterns:
        lines.append(f"- Patterns: {', '.join(project.patterns)}")
    if project.dependencies:
        lines.append(f"- Dependencies: {', '.join(project.dependencies)}")
    if project.routes:
        lines.append(f"- Routes: {', '.join(project.routes)}")

    protected = sorted(p for p, (_, writeable) in project.classifications.items() if not writeable)
    if protected:
        lines.append(f"- Protected (do not modify): {', '.join(protected)}")

    summary = "\n".join(lines)
    if len(summary) > max_length:
        summary = summary[:max_length - 3] + "..."
    return summary


# ---------------------------------------------------------------------------
# Rollback checkpoints
# ---------------------------------------------------------------------------

def create_checkpoint(context: PipelineContext, stage) -> RollbackPoint:
    """Snapshot the generated artifact set and append it to the context."""
    point = RollbackPoint(
        id=str(uuid.uuid4()),
        snapshot=copy.deepcopy(context.generated_artifacts),
        timestamp=time.time(),
        stage=stage,
    )
    context.rollback_points.append(point)
    return point


def rollback_to(context: PipelineContext, point_id) -> bool:
    """Restore a checkpoint and discard every checkpoint taken after it."""
    for index, point in enumerate(context.rollback_points):
        if point.id == point_id:
            context.generated_artifacts = copy.deepcopy(point.snapshot)
            del context.rollback_points[index + 1:]
            logger.info("Rolled back to checkpoint %s (%s)", point.stage, point.id)
            return True
    return False


def latest_checkpoint(context: PipelineContext, stage=None):
    for point in reversed(context.rollback_points):
        if stage is None or point.stage == stage:
            return point
    return None


def merge_artifacts(base, updates):
    """Replace artifacts in base by path, keeping each path's operation kind."""
    merged = {a.path: a for a in base}
    for artifact in updates:
        if artifact.path in merged:
            merged[artifact.path] = Artifact(artifact.path, artifact.content, merged[artifact.path].operation)
        else:
            merged[artifact.path] = artifact
    return list(merged.values())
