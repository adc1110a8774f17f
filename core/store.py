"""Artifact persistence and session status collaborators.

Persistence is a path-keyed upsert: writing the same (workspace, path)
twice leaves one artifact, last write wins. Every write also appends an
operation-log entry for audit.
"""

from __future__ import annotations

import json
import os
import threading
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, asdict

from config.defaults import STATUSES
from core.state import Artifact


@dataclass
class OperationLogEntry:
    workspace_id: str
    path: str
    operation: str
    model: str
    timestamp: float


class ArtifactStore(ABC):
    """Workspace-scoped artifact storage."""

    @abstractmethod
    def upsert(self, workspace_id, path, content):
        """Create or replace the artifact at (workspace_id, path)."""

    @abstractmethod
    def list_artifacts(self, workspace_id):
        """Return the workspace's current artifacts."""

    @abstractmethod
    def append_operation(self, entry: OperationLogEntry):
        """Append one audit entry."""

    def persist(self, workspace_id, artifacts, model=""):
        """Upsert every artifact and log each write."""
        written = []
        for artifact in artifacts:
            self.upsert(workspace_id, artifact.path, artifact.content)
            self.append_operation(OperationLogEntry(
                workspace_id=workspace_id,
                path=artifact.path,
                operation=artifact.operation,
                model=model,
                timestamp=time.time(),
            ))
            written.append(artifact.path)
        return written


class InMemoryArtifactStore(ArtifactStore):

    def __init__(self):
        self._artifacts = {}        # (workspace_id, path) -> content
        self.operations = []
        self._lock = threading.Lock()

    def upsert(self, workspace_id, path, content):
        with self._lock:
            self._artifacts[(workspace_id, path)] = content

    def list_artifacts(self, workspace_id):
        with self._lock:
            return [
                Artifact(path=path, content=content, operation="update")
                for (ws, path), content in sorted(self._artifacts.items())
                if ws == workspace_id
            ]

    def append_operation(self, entry):
        with self._lock:
            self.operations.append(entry)


class DirectoryArtifactStore(ArtifactStore):
    """Stores each workspace as a directory tree under root."""

    OPLOG_NAME = ".oplog.jsonl"

    def __init__(self, root):
        self.root = root
        self._lock = threading.Lock()

    def _workspace_dir(self, workspace_id):
        return self._contained(self.root, workspace_id)

    @staticmethod
    def _contained(base, relative_path):
        full_path = os.path.join(base, relative_path)
        resolved = os.path.realpath(full_path)
        if not resolved.startswith(os.path.realpath(base) + os.sep):
            raise ValueError(f"Path escapes output directory: {relative_path}")
        return resolved

    def upsert(self, workspace_id, path, content):
        resolved = self._contained(self._workspace_dir(workspace_id), path)
        os.makedirs(os.path.dirname(resolved), exist_ok=True)
        with open(resolved, "w") as fp:
            fp.write(content)

    def list_artifacts(self, workspace_id):
        base = self._workspace_dir(workspace_id)
        if not os.path.isdir(base):
            return []
        artifacts = []
        for dirpath, _, filenames in os.walk(base):
            for filename in sorted(filenames):
                if filename == self.OPLOG_NAME:
                    continue
                full_path = os.path.join(dirpath, filename)
                rel = os.path.relpath(full_path, base).replace(os.sep, "/")
                with open(full_path) as fp:
                    artifacts.append(Artifact(path=rel, content=fp.read(), operation="update"))
        return sorted(artifacts, key=lambda a: a.path)

    def append_operation(self, entry):
        base = self._workspace_dir(entry.workspace_id)
        os.makedirs(base, exist_ok=True)
        with self._lock, open(os.path.join(base, self.OPLOG_NAME), "a") as fp:
            fp.write(json.dumps(asdict(entry)) + "\n")


class SessionStore:
    """In-memory session status table."""

    def __init__(self):
        self._statuses = {}
        self._lock = threading.Lock()

    def update_status(self, session_id, status):
        if status not in STATUSES:
            raise ValueError(f"Unknown session status: {status}")
        with self._lock:
            self._statuses[session_id] = status

    def get_status(self, session_id):
        with self._lock:
            return self._statuses.get(session_id)
