"""Pipeline state models shared across all stages."""

from __future__ import annotations

import time
import uuid
from dataclasses import dataclass, field

INTENT_TYPES = (
    "create_project", "add_page", "add_component", "modify_component",
    "fix_error", "style_change", "refactor", "question",
)


@dataclass
class Artifact:
    path: str           # workspace-relative, e.g. "src/components/Hero.tsx"
    content: str        # full text, never a diff
    operation: str = "create"   # "create" | "update"


@dataclass
class IntentResult:
    type: str
    confidence: float
    summary: str = ""
    target_paths: list[str] = field(default_factory=list)
    requires_new_artifacts: bool = True
    is_destructive: bool = False


@dataclass
class PageSpec:
    path: str
    name: str = ""
    description: str = ""


@dataclass
class ComponentSpec:
    path: str
    name: str = ""
    capabilities: list[str] = field(default_factory=list)


@dataclass
class LibraryMatch:
    kind: str           # "theme" | "component" | "page-template"
    id: str
    name: str
    confidence: float
    code: str
    category: str
    path: str | None = None


@dataclass
class ArchitecturePlan:
    project_type: str = "landing-page"
    theme: dict = field(default_factory=dict)       # primary, accent, style
    pages: list[PageSpec] = field(default_factory=list)
    components: list[ComponentSpec] = field(default_factory=list)
    routes: list[str] = field(default_factory=list)
    media: dict = field(default_factory=dict)       # hero, gallery, avatars
    special_instructions: str = ""
    library_matches: list[LibraryMatch] = field(default_factory=list)

    def planned_paths(self):
        return [p.path for p in self.pages] + [c.path for c in self.components]


@dataclass
class ValidationError:
    category: str       # "SYNTAX" | "IMPORT" | "STRUCTURE"
    path: str
    message: str
    fix: str = ""
    severity: str = "error"     # "error" | "warning"
    auto_fixable: bool = False


@dataclass
class ValidationResult:
    valid: bool
    score: int
    completeness: float
    critical_errors: list[ValidationError] = field(default_factory=list)
    warnings: list[ValidationError] = field(default_factory=list)
    suggestions: list[str] = field(default_factory=list)
    missing_paths: list[str] = field(default_factory=list)


@dataclass
class RepairAttempt:
    attempt: int
    errors: list[str]
    patches_applied: list[str]
    resolved: bool
    duration_ms: int


@dataclass
class RepairOutcome:
    artifacts: list[Artifact]
    validation: ValidationResult
    attempts: list[RepairAttempt]
    success: bool


@dataclass
class RollbackPoint:
    id: str
    snapshot: list[Artifact]
    timestamp: float
    stage: str


@dataclass
class TelemetryEvent:
    stage: str
    event: str          # "start" | "complete" | "error" | "retry"
    timestamp: float
    duration_ms: int | None = None
    success: bool | None = None
    tokens: int | None = None
    model: str | None = None
    metadata: dict = field(default_factory=dict)


@dataclass
class CallResult:
    content: str
    provider: str
    model: str
    tokens_used: int
    latency_ms: int
    confidence: float
    used_fallback: bool = False


@dataclass
class ProjectContext:
    framework: str = "react"
    styling: str = "tailwind"
    component_count: int = 0
    page_count: int = 0
    patterns: list[str] = field(default_factory=list)
    dependencies: list[str] = field(default_factory=list)
    routes: list[str] = field(default_factory=list)
    classifications: dict = field(default_factory=dict)     # path -> (class, writeable)
    last_modified: float = 0.0


@dataclass
class GenerationRequest:
    workspace_id: str
    prompt: str
    conversation_history: list[dict] = field(default_factory=list)     # {"role", "content"}
    existing_artifacts: list[Artifact] = field(default_factory=list)
    session_id: str = ""


@dataclass
class PipelineContext:
    session_id: str
    workspace_id: str
    prompt: str
    conversation_history: list[dict] = field(default_factory=list)
    existing_artifacts: list[Artifact] = field(default_factory=list)
    generated_artifacts: list[Artifact] = field(default_factory=list)
    telemetry: list[TelemetryEvent] = field(default_factory=list)
    repair_history: list[RepairAttempt] = field(default_factory=list)
    rollback_points: list[RollbackPoint] = field(default_factory=list)
    models_used: list[str] = field(default_factory=list)
    start_time: float = field(default_factory=time.time)
    status: str = "pending"     # pending|planning|generating|validating|completed|failed
    cancel: object = None       # CancelToken
    project: ProjectContext | None = None
    intent: IntentResult | None = None
    plan: ArchitecturePlan | None = None

    @classmethod
    def from_request(cls, request: GenerationRequest, cancel=None) -> PipelineContext:
        return cls(
            session_id=request.session_id or str(uuid.uuid4()),
            workspace_id=request.workspace_id,
            prompt=request.prompt,
            conversation_history=list(request.conversation_history),
            existing_artifacts=list(request.existing_artifacts),
            cancel=cancel,
        )

    @property
    def is_new_project(self):
        return not self.existing_artifacts


@dataclass
class PipelineResult:
    success: bool
    artifacts: list[Artifact] = field(default_factory=list)
    models_used: list[str] = field(default_factory=list)
    validation_passed: bool = False
    repair_attempts: int = 0
    errors: list[str] = field(default_factory=list)
    message: str = ""
    routes: list[str] = field(default_factory=list)
    suggestions: list[str] = field(default_factory=list)
    telemetry: dict = field(default_factory=dict)
    session_id: str = ""
    intent: str = ""
    diagnostics: dict = field(default_factory=dict)
