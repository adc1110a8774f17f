"""Tests for the main.py command handlers."""

import argparse

import pytest

import main
from agents.defaults import default_artifacts
from core.store import DirectoryArtifactStore


def test_validate_command_on_default_site(tmp_path, capsys):
    DirectoryArtifactStore(str(tmp_path)).persist("bakery", default_artifacts("bakery site"))
    main.cmd_validate(argparse.Namespace(directory=str(tmp_path / "bakery")))
    out = capsys.readouterr().out
    assert "Files:        12" in out
    assert "Valid:        yes" in out


def test_validate_command_reports_errors(tmp_path, capsys):
    site = tmp_path / "broken" / "src"
    site.mkdir(parents=True)
    (site / "App.tsx").write_text("export default function App() {\n  return <main>;\n")
    with pytest.raises(SystemExit) as exc:
        main.cmd_validate(argparse.Namespace(directory=str(tmp_path / "broken")))
    assert exc.value.code == 1
    assert "Unbalanced braces" in capsys.readouterr().out


def test_validate_command_missing_dir(tmp_path):
    with pytest.raises(SystemExit) as exc:
        main.cmd_validate(argparse.Namespace(directory=str(tmp_path / "nope")))
    assert exc.value.code == 2


def test_match_command(capsys):
    main.cmd_match(argparse.Namespace(prompt="use the Ocean Blue theme"))
    assert "0.95  theme" in capsys.readouterr().out


def test_providers_command(capsys, monkeypatch):
    monkeypatch.setenv("GROK_API_KEY", "k")
    for name in ("XAI_API_KEY", "GEMINI_API_KEY", "GOOGLE_API_KEY", "OPENAI_API_KEY", "ANTHROPIC_API_KEY"):
        monkeypatch.delenv(name, raising=False)
    main.cmd_providers(argparse.Namespace())
    out = capsys.readouterr().out
    assert "grok       configured" in out
    assert "openai     no key" in out
