"""Tests for core.store — upsert semantics, operation log, session statuses."""

import json
import os

import pytest

from core.state import Artifact
from core.store import DirectoryArtifactStore, InMemoryArtifactStore, SessionStore


def test_upsert_is_idempotent():
    store = InMemoryArtifactStore()
    store.persist("ws", [Artifact("src/App.tsx", "v1")])
    store.persist("ws", [Artifact("src/App.tsx", "v2", "update")])
    artifacts = store.list_artifacts("ws")
    assert len(artifacts) == 1
    assert artifacts[0].content == "v2"


def test_workspaces_are_isolated():
    store = InMemoryArtifactStore()
    store.upsert("a", "src/App.tsx", "a")
    store.upsert("b", "src/App.tsx", "b")
    assert [x.content for x in store.list_artifacts("a")] == ["a"]


def test_persist_logs_operations():
    store = InMemoryArtifactStore()
    written = store.persist("ws", [Artifact("src/A.tsx", "a"), Artifact("src/B.tsx", "b", "update")], model="grok-3-fast")
    assert written == ["src/A.tsx", "src/B.tsx"]
    assert [(e.path, e.operation, e.model) for e in store.operations] == [
        ("src/A.tsx", "create", "grok-3-fast"),
        ("src/B.tsx", "update", "grok-3-fast"),
    ]


def test_directory_store_round_trip(tmp_path):
    store = DirectoryArtifactStore(str(tmp_path))
    store.persist("site", [Artifact("src/components/Hero.tsx", "hero"), Artifact("public/robots.txt", "ok")])
    store.persist("site", [Artifact("src/components/Hero.tsx", "hero v2", "update")])

    artifacts = store.list_artifacts("site")
    assert [a.path for a in artifacts] == ["public/robots.txt", "src/components/Hero.tsx"]
    assert artifacts[1].content == "hero v2"

    with open(os.path.join(tmp_path, "site", ".oplog.jsonl")) as fp:
        entries = [json.loads(line) for line in fp]
    assert len(entries) == 3
    assert entries[-1]["operation"] == "update"


def test_directory_store_rejects_escape(tmp_path):
    store = DirectoryArtifactStore(str(tmp_path))
    with pytest.raises(ValueError):
        store.upsert("site", "../../etc/passwd", "x")
    with pytest.raises(ValueError):
        store.list_artifacts("../outside")


def test_directory_store_missing_workspace(tmp_path):
    assert DirectoryArtifactStore(str(tmp_path)).list_artifacts("nothing") == []


def test_session_status():
    sessions = SessionStore()
    assert sessions.get_status("s1") is None
    sessions.update_status("s1", "planning")
    assert sessions.get_status("s1") == "planning"


def test_session_status_rejects_unknown():
    with pytest.raises(ValueError):
        SessionStore().update_status("s1", "exploded")
