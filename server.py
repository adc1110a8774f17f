#!/usr/bin/env python3
"""Sitesmith - HTTP API for the site generation pipeline."""

import json
import logging
import os
import threading
import time
import uuid
from flask import Flask, Response, jsonify, request

from config.providers import PROVIDERS, TASK_ROUTING
from config.settings import Settings
from core.cancel import CancelToken
from core.events import QueueSink
from core.orchestrator import Orchestrator
from core.state import Artifact, GenerationRequest
from core.store import InMemoryArtifactStore, SessionStore
from core.telemetry import configure_logging
from manager.library_matcher import find_matches

logger = logging.getLogger(__name__)

app = Flask(__name__)
settings = Settings.from_env()
configure_logging(settings.log_level)
store = InMemoryArtifactStore()
sessions = SessionStore()
orchestrator = Orchestrator(settings, store=store, sessions=sessions)

# In-flight runs keyed by session_id: {id: {"cancel": CancelToken, "created": timestamp}}
_jobs = {}
_jobs_lock = threading.Lock()
_MAX_JOBS = 50  # prevent unbounded memory growth
_JOB_TTL = 3600  # expire jobs after 1 hour


def _cleanup_jobs():
    """Drop runs older than the TTL, then the oldest beyond the cap. Called under _jobs_lock.

    A dropped run is cancelled so its worker stops at the next stage boundary.
    """
    cutoff = time.time() - _JOB_TTL
    by_age = sorted(_jobs, key=lambda sid: _jobs[sid]["created"])
    overflow = max(0, len(by_age) - _MAX_JOBS)
    for index, session_id in enumerate(by_age):
        if index < overflow or _jobs[session_id]["created"] < cutoff:
            _jobs.pop(session_id)["cancel"].cancel()


def _register_job(session_id):
    """Create and remember the cancel token for a run.

    Returns None when the session already has a run in flight.
    """
    token = CancelToken()
    with _jobs_lock:
        _cleanup_jobs()
        if session_id in _jobs:
            return None
        _jobs[session_id] = {"cancel": token, "created": time.time()}
    return token


def _finish_job(session_id, token):
    with _jobs_lock:
        job = _jobs.get(session_id)
        if job is not None and job["cancel"] is token:
            del _jobs[session_id]


def _get_job(session_id):
    with _jobs_lock:
        return _jobs.get(session_id)


def _parse_request(data):
    """Build a GenerationRequest from a JSON body, or return an error string."""
    if not data:
        return None, "Missing JSON body"
    prompt = (data.get("prompt") or "").strip()
    workspace_id = (data.get("workspaceId") or "").strip()
    if not prompt:
        return None, "Missing prompt"
    if not workspace_id:
        return None, "Missing workspaceId"

    existing = []
    for item in data.get("existingArtifacts") or []:
        if not isinstance(item, dict) or not item.get("path"):
            return None, "Each existing artifact needs a path"
        existing.append(Artifact(path=item["path"], content=item.get("content", ""), operation="update"))

    history = [
        {"role": turn.get("role"), "content": turn.get("content", "")}
        for turn in data.get("conversationHistory") or []
        if isinstance(turn, dict)
    ]
    return GenerationRequest(
        workspace_id=workspace_id,
        prompt=prompt,
        conversation_history=history,
        existing_artifacts=existing,
        session_id=data.get("sessionId") or str(uuid.uuid4()),
    ), None


def _wants_diagnostics():
    return request.args.get("diagnostics", "").lower() in ("1", "true", "yes")


def _result_to_dict(result, diagnostics=False):
    """Serialize PipelineResult to the camelCase wire shape.

    The full run dump (every telemetry event, repair and checkpoint) is
    included only when asked for.
    """
    payload = {
        "success": result.success,
        "sessionId": result.session_id,
        "intent": result.intent,
        "artifacts": [
            {"path": a.path, "content": a.content, "operation": a.operation}
            for a in result.artifacts
        ],
        "modelsUsed": result.models_used,
        "validationPassed": result.validation_passed,
        "repairAttempts": result.repair_attempts,
        "errors": result.errors,
        "message": result.message,
        "routes": result.routes,
        "suggestions": result.suggestions,
        "telemetry": result.telemetry,
    }
    if diagnostics:
        payload["diagnostics"] = result.diagnostics
    return payload


@app.route("/api/generate", methods=["POST"])
def api_generate():
    """Run the whole pipeline and return the final result."""
    gen_request, error = _parse_request(request.get_json(silent=True))
    if error:
        return jsonify({"error": error}), 400

    token = _register_job(gen_request.session_id)
    if token is None:
        return jsonify({"error": f"Session {gen_request.session_id} is already running"}), 409
    try:
        result = orchestrator.run(gen_request, cancel=token)
    finally:
        _finish_job(gen_request.session_id, token)
    return jsonify(_result_to_dict(result, diagnostics=_wants_diagnostics()))


@app.route("/api/generate/stream", methods=["POST"])
def api_generate_stream():
    """Run the pipeline, streaming progress events as server-sent events."""
    gen_request, error = _parse_request(request.get_json(silent=True))
    if error:
        return jsonify({"error": error}), 400

    token = _register_job(gen_request.session_id)
    if token is None:
        return jsonify({"error": f"Session {gen_request.session_id} is already running"}), 409
    sink = QueueSink()
    diagnostics = _wants_diagnostics()
    outcome = {}

    def worker():
        try:
            outcome["result"] = orchestrator.run(gen_request, sink=sink, cancel=token)
        except Exception:
            logger.exception("stream worker crashed for %s", gen_request.session_id)
        finally:
            _finish_job(gen_request.session_id, token)
            sink.close()

    threading.Thread(target=worker, daemon=True).start()

    def events():
        for event in sink:
            yield f"data: {json.dumps(event.to_dict())}\n\n"
        result = outcome.get("result")
        if result is not None:
            payload = {"type": "result", "data": _result_to_dict(result, diagnostics)}
        else:
            payload = {"type": "error", "message": "Generation failed unexpectedly"}
        yield f"data: {json.dumps(payload)}\n\n"

    return Response(events(), mimetype="text/event-stream",
                    headers={"Cache-Control": "no-cache", "X-Accel-Buffering": "no"})


@app.route("/api/cancel", methods=["POST"])
def api_cancel():
    data = request.get_json(silent=True) or {}
    session_id = data.get("sessionId")
    if not session_id:
        return jsonify({"error": "Missing sessionId"}), 400

    job = _get_job(session_id)
    if not job:
        return jsonify({"error": "Session not running"}), 404
    job["cancel"].cancel("cancelled by client")
    return jsonify({"sessionId": session_id, "cancelled": True})


@app.route("/api/status/<session_id>")
def api_status(session_id):
    status = sessions.get_status(session_id)
    if status is None:
        return jsonify({"error": "Session not found"}), 404
    return jsonify({"sessionId": session_id, "status": status,
                    "running": _get_job(session_id) is not None})


@app.route("/api/workspaces/<workspace_id>/artifacts")
def api_artifacts(workspace_id):
    artifacts = store.list_artifacts(workspace_id)
    return jsonify([{"path": a.path, "content": a.content} for a in artifacts])


@app.route("/api/providers")
def api_providers():
    providers = [
        {"id": pid, "name": p["name"], "configured": settings.has_credential(pid)}
        for pid, p in PROVIDERS.items()
    ]
    routing = {
        task: {"primary": primary, "fallback": fallback, "threshold": threshold}
        for task, (primary, _, threshold, fallback, _) in TASK_ROUTING.items()
    }
    return jsonify({"providers": providers, "routing": routing})


@app.route("/api/library/match", methods=["POST"])
def api_library_match():
    data = request.get_json(silent=True) or {}
    prompt = (data.get("prompt") or "").strip()
    if not prompt:
        return jsonify({"error": "Missing prompt"}), 400
    matches = find_matches(prompt)
    return jsonify([
        {"kind": m.kind, "id": m.id, "name": m.name, "confidence": m.confidence,
         "category": m.category, "path": m.path}
        for m in matches
    ])


if __name__ == "__main__":
    port = int(os.environ.get("PORT", 5001))
    print(f"Sitesmith API running at http://localhost:{port}")
    app.run(debug=False, port=port, threaded=True)
