"""Tests for core.state, config.settings and core.cancel."""

import pytest

from config.defaults import SAFETY_LIMITS
from config.settings import Settings
from core.cancel import CancelToken, check
from core.errors import PipelineCancelled
from core.state import (
    Artifact, ArchitecturePlan, ComponentSpec, GenerationRequest, PageSpec, PipelineContext,
)


def test_context_from_request_generates_session():
    request = GenerationRequest(workspace_id="ws1", prompt="build me a bakery site")
    context = PipelineContext.from_request(request)
    assert context.session_id
    assert context.workspace_id == "ws1"
    assert context.status == "pending"
    assert context.is_new_project


def test_context_keeps_given_session_and_copies_lists():
    existing = [Artifact("src/App.tsx", "x", "update")]
    request = GenerationRequest(workspace_id="ws1", prompt="p", existing_artifacts=existing, session_id="abc")
    context = PipelineContext.from_request(request)
    assert context.session_id == "abc"
    assert not context.is_new_project
    context.existing_artifacts.append(Artifact("src/b.ts", "y"))
    assert len(request.existing_artifacts) == 1


def test_planned_paths_pages_then_components():
    plan = ArchitecturePlan(
        pages=[PageSpec(path="src/pages/Index.tsx")],
        components=[ComponentSpec(path="src/components/Hero.tsx")],
    )
    assert plan.planned_paths() == ["src/pages/Index.tsx", "src/components/Hero.tsx"]


def test_settings_from_env_discovers_keys():
    settings = Settings.from_env({"XAI_API_KEY": "x", "GOOGLE_API_KEY": "g", "ANTHROPIC_API_KEY": " "})
    assert settings.credentialed() == ["grok", "gemini"]
    assert settings.has_credential("grok")
    assert not settings.has_credential("anthropic")


def test_settings_primary_env_name_wins():
    settings = Settings.from_env({"GROK_API_KEY": "first", "XAI_API_KEY": "second"})
    assert settings.credentials["grok"] == "first"


def test_settings_repair_attempts_capped():
    settings = Settings.from_env({"SITESMITH_MAX_REPAIR_ATTEMPTS": "50"})
    assert settings.max_repair_attempts == SAFETY_LIMITS["max_repair_attempts"]


def test_settings_overrides():
    settings = Settings.from_env({
        "SITESMITH_REQUEST_TIMEOUT": "5",
        "SITESMITH_ENSEMBLE": "off",
        "SITESMITH_LOG_LEVEL": "debug",
    })
    assert settings.request_timeout == 5.0
    assert settings.ensemble_enabled is False
    assert settings.log_level == "DEBUG"


def test_cancel_token():
    token = CancelToken()
    assert not token.cancelled
    token.raise_if_cancelled()
    token.cancel("stop")
    assert token.cancelled
    with pytest.raises(PipelineCancelled, match="stop"):
        token.raise_if_cancelled()


def test_check_accepts_none():
    check(None)
