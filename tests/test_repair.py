"""Tests for agents.repair and agents.patch_composer."""

import pytest

from agents.patch_composer import PatchComposer
from agents.repair import RepairAgent, analyze_repair_history
from core.cancel import CancelToken
from core.errors import PipelineCancelled
from core.router import ProviderRouter
from core.state import Artifact, GenerationRequest, PipelineContext, RepairAttempt, ValidationError, ValidationResult
from core.validation import validate
from utils.llm import ProviderError

LAZY_HERO = "export default function Hero() {\n  // ...\n  return <section />;\n}"
HERO = "export default function Hero() {\n  return <section className=\"py-24\">Fresh bread</section>;\n}"


def _context(artifacts, cancel=None):
    context = PipelineContext.from_request(GenerationRequest(workspace_id="ws", prompt="bakery"), cancel=cancel)
    context.generated_artifacts = list(artifacts)
    return context


def _reply(path, content):
    return f"```tsx:{path}\n{content}\n```"


def test_auto_fix_alone_resolves(settings_for, fake_transport):
    transport = fake_transport()
    broken = Artifact("src/components/Counter.tsx",
                      "export default function Counter() {\n  const [n] = useState(0);\n  return <p>{n}</p>;\n}")
    context = _context([broken])
    outcome = RepairAgent(ProviderRouter(settings_for("openai"), transport)).repair(context, validate([broken]))
    assert outcome.success
    assert outcome.attempts == []
    assert transport.calls == []
    assert "from 'react'" in outcome.artifacts[0].content


def test_backend_repair_resolves(settings_for, fake_transport):
    transport = fake_transport({"openai": _reply("src/components/Hero.tsx", HERO)})
    lazy = Artifact("src/components/Hero.tsx", LAZY_HERO)
    context = _context([lazy, Artifact("src/App.tsx", "export default function App() { return <main />; }")])
    outcome = RepairAgent(ProviderRouter(settings_for("openai"), transport)).repair(context, validate(context.generated_artifacts))
    assert outcome.success
    assert len(outcome.attempts) == 1
    assert outcome.attempts[0].patches_applied == ["src/components/Hero.tsx"]
    assert outcome.attempts[0].resolved
    assert len(outcome.artifacts) == 2
    assert context.repair_history == outcome.attempts


def test_bounded_attempts_never_raise(settings_for, fake_transport):
    transport = fake_transport({"openai": _reply("src/components/Hero.tsx", LAZY_HERO)})
    lazy = Artifact("src/components/Hero.tsx", LAZY_HERO)
    context = _context([lazy])
    agent = RepairAgent(ProviderRouter(settings_for("openai"), transport), max_attempts=2)
    outcome = agent.repair(context, validate([lazy]))
    assert not outcome.success
    assert len(outcome.attempts) == 2
    assert len(transport.calls) == 2
    assert not outcome.validation.valid


def test_exhausted_provider_records_attempts(settings_for, fake_transport):
    transport = fake_transport({"openai": ProviderError("openai", "down", 500)})
    lazy = Artifact("src/components/Hero.tsx", LAZY_HERO)
    context = _context([lazy])
    outcome = RepairAgent(ProviderRouter(settings_for("openai"), transport), max_attempts=2).repair(context, validate([lazy]))
    assert not outcome.success
    assert [a.patches_applied for a in outcome.attempts] == [[], []]
    assert outcome.artifacts[0].content == LAZY_HERO


def test_protected_patch_ignored(settings_for, fake_transport):
    transport = fake_transport({"openai": _reply("src/main.tsx", "hijack")})
    lazy = Artifact("src/components/Hero.tsx", LAZY_HERO)
    context = _context([lazy])
    outcome = RepairAgent(ProviderRouter(settings_for("openai"), transport), max_attempts=1).repair(context, validate([lazy]))
    assert [a.path for a in outcome.artifacts] == ["src/components/Hero.tsx"]


def test_zero_attempts(settings_for, fake_transport):
    lazy = Artifact("src/components/Hero.tsx", LAZY_HERO)
    outcome = RepairAgent(ProviderRouter(settings_for("openai"), fake_transport()), max_attempts=0).repair(
        _context([lazy]), validate([lazy]))
    assert outcome.attempts == []
    assert not outcome.success


def test_cancellation_propagates(settings_for, fake_transport):
    token = CancelToken()
    token.cancel()
    lazy = Artifact("src/components/Hero.tsx", LAZY_HERO)
    agent = RepairAgent(ProviderRouter(settings_for("openai"), fake_transport()))
    with pytest.raises(PipelineCancelled):
        agent.repair(_context([lazy], cancel=token), validate([lazy]))


def test_patch_composer_limits():
    artifacts = [Artifact(f"src/components/C{i}.tsx", f"body {i}") for i in range(5)]
    errors = [ValidationError("STRUCTURE", f"src/components/C{i}.tsx", "incomplete", "finish it") for i in range(5)]
    errors.append(ValidationError("SYNTAX", "src/components/C4.tsx", "Unbalanced braces", "close it"))
    message, paths = PatchComposer().compose(errors, artifacts)
    assert paths[0] == "src/components/C4.tsx"
    assert len(paths) == 3
    assert message.startswith("Fix the following errors:")
    assert "1. [SYNTAX] src/components/C4.tsx: Unbalanced braces" in message
    assert "```tsx:src/components/C4.tsx\nbody 4\n```" in message
    assert message.count("[STRUCTURE]") == 4


def test_attempt_records_errors_in_request_order(settings_for, fake_transport):
    transport = fake_transport({"openai": ProviderError("openai", "down", 500)})
    errors = [ValidationError("STRUCTURE", f"src/components/C{i}.tsx", "incomplete", "finish it") for i in range(5)]
    errors.append(ValidationError("SYNTAX", "src/components/C4.tsx", "Unbalanced braces", "close it"))
    validation = ValidationResult(valid=False, score=40, completeness=1.0, critical_errors=errors)
    agent = RepairAgent(ProviderRouter(settings_for("openai"), transport), max_attempts=1)
    outcome = agent.repair(_context([]), validation)
    recorded = outcome.attempts[0].errors
    assert recorded[0] == "SYNTAX: src/components/C4.tsx Unbalanced braces"
    assert len(recorded) == 5
    assert recorded == [f"{e.category}: {e.path} {e.message}" for e in PatchComposer().select(errors)]


def test_patch_composer_empty():
    assert PatchComposer().compose([], []) == ("", [])


def test_analyze_repair_history():
    attempts = [
        RepairAttempt(1, ["SYNTAX: a.tsx Unbalanced braces"], ["a.tsx"], False, 10),
        RepairAttempt(2, ["SYNTAX: a.tsx Unbalanced braces"], ["a.tsx"], True, 12),
    ]
    summary = analyze_repair_history(attempts)
    assert summary["attempts"] == 2
    assert summary["resolved"] is True
    assert analyze_repair_history([])["attempts"] == 0
