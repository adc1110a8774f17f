"""Tests for agents.generator — prompt assembly and artifact extraction."""

import pytest

from agents.generator import GeneratorAgent, enforce_limits, existing_excerpt
from agents.planner import default_plan
from config.defaults import SAFETY_LIMITS
from core.errors import NoArtifactsExtracted
from core.router import ProviderRouter
from core.state import Artifact, GenerationRequest, PipelineContext
from manager.library_matcher import find_matches

HERO = "export default function Hero() {\n  return <section className=\"py-24\">Fresh bread</section>;\n}"
APP = "export default function App() {\n  return <main />;\n}"


def _blocks(*files):
    return "\n\n".join(f"```tsx:{path}\n{content}\n```" for path, content in files)


def _context(prompt="build me a bakery landing page", existing=None, history=None):
    request = GenerationRequest(
        workspace_id="ws", prompt=prompt,
        existing_artifacts=list(existing or []),
        conversation_history=list(history or []),
    )
    return PipelineContext.from_request(request)


def test_generate_extracts_artifacts(settings_for, fake_transport):
    transport = fake_transport({"grok": _blocks(("src/components/Hero.tsx", HERO), ("src/App.tsx", APP))})
    agent = GeneratorAgent(ProviderRouter(settings_for("grok"), transport), settings_for("grok"))
    context = _context()
    artifacts = agent.generate(context, default_plan(context.prompt))
    assert [a.path for a in artifacts] == ["src/components/Hero.tsx", "src/App.tsx"]
    assert all(a.operation == "create" for a in artifacts)
    assert context.models_used[0].startswith("coding: ")


def test_protected_paths_dropped(settings_for, fake_transport):
    reply = _blocks(("src/App.tsx", APP), ("src/main.tsx", "bad")) + "\n\n```json:package.json\n{}\n```"
    agent = GeneratorAgent(ProviderRouter(settings_for("grok"), fake_transport({"grok": reply})))
    artifacts = agent.generate(_context(), default_plan("bakery"))
    assert [a.path for a in artifacts] == ["src/App.tsx"]


def test_existing_paths_marked_update(settings_for, fake_transport):
    existing = [Artifact("src/App.tsx", "old", "update")]
    reply = _blocks(("src/App.tsx", APP), ("src/pages/About.tsx", "export default function About() { return <div />; }"))
    agent = GeneratorAgent(ProviderRouter(settings_for("grok"), fake_transport({"grok": reply})))
    artifacts = agent.generate(_context("add an about page", existing), default_plan("bakery"))
    ops = {a.path: a.operation for a in artifacts}
    assert ops == {"src/App.tsx": "update", "src/pages/About.tsx": "create"}


def test_duplicate_path_keeps_last(settings_for, fake_transport):
    reply = _blocks(("src/App.tsx", "first"), ("src/App.tsx", APP))
    agent = GeneratorAgent(ProviderRouter(settings_for("grok"), fake_transport({"grok": reply})))
    artifacts = agent.generate(_context(), default_plan("bakery"))
    assert len(artifacts) == 1
    assert artifacts[0].content == APP


def test_no_blocks_raises(settings_for, fake_transport):
    agent = GeneratorAgent(ProviderRouter(settings_for("grok"), fake_transport({"grok": "I would love to help!"})))
    with pytest.raises(NoArtifactsExtracted):
        agent.generate(_context(), default_plan("bakery"))


def test_messages_layout():
    history = [{"role": "user", "content": f"turn {i}"} for i in range(6)] + [{"role": "system", "content": "x"}]
    agent = GeneratorAgent(router=None)
    context = _context(history=history)
    plan = default_plan(context.prompt)
    messages = agent.build_messages(context, plan)
    assert messages[0]["role"] == "system"
    assert [m["content"] for m in messages[1:-1]] == ["turn 3", "turn 4", "turn 5"]
    assert messages[-1]["content"].startswith("PLAN:\n")
    assert messages[-1]["content"].endswith("USER REQUEST: build me a bakery landing page")


def test_system_prompt_includes_library_code():
    agent = GeneratorAgent(router=None)
    context = _context()
    plan = default_plan(context.prompt)
    plan.library_matches = find_matches(context.prompt)
    system = agent.build_system_prompt(context, plan)
    assert "LIBRARY ASSETS" in system
    assert "Your product, beautifully launched" in system


def test_system_prompt_modify_mode_has_excerpt():
    existing = [Artifact("src/components/Hero.tsx", HERO, "update"), Artifact("package.json", "{}", "update")]
    agent = GeneratorAgent(router=None)
    context = _context("change the hero headline", existing)
    system = agent.build_system_prompt(context, default_plan("bakery"))
    assert "## EXISTING FILES" in system
    assert "### src/components/Hero.tsx" in system
    assert "### package.json" not in system


def test_ensemble_only_for_new_projects(settings_for):
    agent = GeneratorAgent(router=None, settings=settings_for("grok", "gemini"))
    assert agent._use_ensemble(_context())
    assert not agent._use_ensemble(_context(existing=[Artifact("src/App.tsx", APP)]))
    single = GeneratorAgent(router=None, settings=settings_for("grok"))
    assert not single._use_ensemble(_context())
    disabled = GeneratorAgent(router=None, settings=settings_for("grok", "gemini", ensemble_enabled=False))
    assert not disabled._use_ensemble(_context())


def test_existing_excerpt_truncates():
    long = Artifact("src/A.tsx", "x" * 5000)
    excerpt = existing_excerpt([long], max_chars=100)
    assert "(truncated)" in excerpt
    assert len(excerpt) < 200


def test_enforce_limits():
    many = [Artifact(f"src/c/F{i}.tsx", "x") for i in range(SAFETY_LIMITS["max_files_per_generation"] + 5)]
    assert len(enforce_limits(many)) == SAFETY_LIMITS["max_files_per_generation"]
    huge = Artifact("src/Huge.tsx", "x" * (SAFETY_LIMITS["max_file_size_bytes"] + 1))
    assert enforce_limits([huge, Artifact("src/A.tsx", "a")])[0].path == "src/A.tsx"
