"""Tests for manager.classifier — the keyword fast path."""

from manager.classifier import FAST_PATH_THRESHOLD, NEW_PROJECT_ENTRY, classify


def test_new_project_prompt():
    result = classify("build me a bakery landing page", has_existing_artifacts=False)
    assert result.type == "create_project"
    assert result.confidence >= FAST_PATH_THRESHOLD
    assert result.target_paths == [NEW_PROJECT_ENTRY]


def test_empty_workspace_coerces_to_create():
    result = classify("add a page for our menu", has_existing_artifacts=False)
    assert result.type == "create_project"
    assert result.confidence >= FAST_PATH_THRESHOLD


def test_question_not_coerced():
    result = classify("how do i deploy this?", has_existing_artifacts=False)
    assert result.type == "question"


def test_unmatched_empty_workspace_low_confidence():
    result = classify("bakery", has_existing_artifacts=False)
    assert result.type == "create_project"
    assert result.confidence < FAST_PATH_THRESHOLD


def test_existing_add_page():
    result = classify("add a page for pricing", has_existing_artifacts=True)
    assert result.type == "add_page"
    assert result.requires_new_artifacts


def test_existing_modify_is_destructive():
    result = classify("change the hero headline", has_existing_artifacts=True)
    assert result.type == "modify_component"
    assert result.is_destructive


def test_existing_fix_error():
    result = classify("the navbar is broken on mobile", has_existing_artifacts=True)
    assert result.type == "fix_error"


def test_existing_no_match_returns_none():
    assert classify("bakery vibes please", has_existing_artifacts=True) is None


def test_phrases_match_whole_words():
    # "terror" must not hit the "error" phrase
    assert classify("a terror themed gallery", has_existing_artifacts=True) is None
