"""Tests for agents.persona — closing message and next-step suggestions."""

from agents.defaults import default_artifacts
from agents.persona import PersonaWriter, suggestions_for
from core.state import Artifact


def test_new_project_summary_lists_sections():
    artifacts = default_artifacts("build me a bakery landing page")
    message, suggestions = PersonaWriter().summarize("build me a bakery landing page", artifacts)
    assert message.startswith(f"Done! I built your bakery site with {len(artifacts)} files, including")
    assert "a responsive navigation bar" in message
    assert " and a footer." in message
    assert suggestions


def test_single_section_summary():
    artifacts = [Artifact("src/components/Hero.tsx", "x", "update")]
    message, _ = PersonaWriter().summarize("make the hero bigger", artifacts, is_new_project=False)
    assert message == "Done! I updated 1 file, including a hero section with a full-bleed image."


def test_no_sections():
    message, _ = PersonaWriter().summarize("tweak", [Artifact("src/lib/utils.ts", "x")], is_new_project=False)
    assert message == "Done! I updated 1 file."


def test_failed_validation_note():
    message, _ = PersonaWriter().summarize("tweak", [], is_new_project=False, validation_passed=False)
    assert "could not be fixed automatically" in message


def test_suggestions_depend_on_sections():
    with_hero = suggestions_for([Artifact("src/components/Hero.tsx", "x")])
    assert "Change the hero image or colors" in with_hero
    with_contact = suggestions_for([Artifact("src/pages/Contact.tsx", "x"), Artifact("src/components/Pricing.tsx", "x")])
    assert "Add a contact form" not in with_contact
    assert "Add a pricing section" not in with_contact
    assert len(with_hero) <= 4
