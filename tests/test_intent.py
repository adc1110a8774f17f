"""Tests for agents.intent — fast path, slow path and fallbacks."""

from agents.intent import CALL_FAILURE_CONFIDENCE, PARSE_FAILURE_CONFIDENCE, IntentAgent, fallback_intent
from core.router import ProviderRouter
from core.state import Artifact, GenerationRequest, PipelineContext
from utils.llm import ProviderError

EXISTING = [Artifact("src/pages/Index.tsx", "export default function Index() { return <main />; }", "update")]


def _context(prompt, existing=None):
    request = GenerationRequest(workspace_id="ws", prompt=prompt, existing_artifacts=list(existing or []))
    return PipelineContext.from_request(request)


def test_fast_path_makes_no_call(settings_for, fake_transport):
    transport = fake_transport()
    agent = IntentAgent(ProviderRouter(settings_for("gemini"), transport))
    context = _context("build me a bakery landing page")
    intent = agent.run(context)
    assert intent.type == "create_project"
    assert intent.confidence >= 0.85
    assert transport.calls == []
    assert context.intent is intent


def test_slow_path_uses_backend(settings_for, fake_transport):
    reply = '{"type": "style_change", "confidence": 0.92, "summary": "Warmer palette", "isDestructive": true}'
    transport = fake_transport({"gemini": reply})
    agent = IntentAgent(ProviderRouter(settings_for("gemini"), transport))
    context = _context("bakery vibes please", EXISTING)
    intent = agent.run(context)
    assert intent.type == "style_change"
    assert intent.confidence == 0.92
    assert intent.is_destructive
    assert context.models_used[0].startswith("intent: ")


def test_low_confidence_keyword_match_goes_to_backend(settings_for, fake_transport):
    reply = '{"type": "modify_component", "confidence": 0.95, "summary": "Edit hero"}'
    transport = fake_transport({"gemini": reply})
    agent = IntentAgent(ProviderRouter(settings_for("gemini"), transport))
    intent = agent.run(_context("change the hero headline", EXISTING))
    assert intent.confidence == 0.95
    assert len(transport.calls) == 1


def test_unparseable_reply_falls_back(settings_for, fake_transport):
    transport = fake_transport({"gemini": "Honestly I am not sure what they want."})
    agent = IntentAgent(ProviderRouter(settings_for("gemini"), transport))
    intent = agent.run(_context("bakery vibes please", EXISTING))
    assert intent.type == "modify_component"
    assert intent.confidence == PARSE_FAILURE_CONFIDENCE


def test_unknown_intent_type_falls_back(settings_for, fake_transport):
    transport = fake_transport({"gemini": '{"type": "dance", "confidence": 1, "summary": "?"}'})
    agent = IntentAgent(ProviderRouter(settings_for("gemini"), transport))
    intent = agent.run(_context("bakery vibes please", EXISTING))
    assert intent.confidence == PARSE_FAILURE_CONFIDENCE


def test_exhausted_providers_fall_back(settings_for, fake_transport):
    transport = fake_transport({"gemini": ProviderError("gemini", "down", 503)})
    agent = IntentAgent(ProviderRouter(settings_for("gemini"), transport))
    context = _context("bakery vibes please", EXISTING)
    intent = agent.run(context)
    assert intent.type == "modify_component"
    assert intent.confidence == CALL_FAILURE_CONFIDENCE
    assert any(e.event == "retry" for e in context.telemetry)


def test_fallback_for_new_project():
    intent = fallback_intent(False, 0.3, "offline")
    assert intent.type == "create_project"
    assert intent.target_paths == ["src/pages/Index.tsx"]
