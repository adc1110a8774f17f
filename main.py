#!/usr/bin/env python3
"""Sitesmith - prompt-to-website generation pipeline.

Usage:
    python main.py build --prompt "build me a bakery landing page"
    python main.py build --prompt "..." --output-dir ./sites --verbose
    python main.py build --prompt "make the hero darker" --workspace ./sites/Bakery
    python main.py validate ./sites/Bakery
    python main.py match --prompt "use the ocean blue theme"
    python main.py providers
"""

import argparse
import os
import sys

from config.providers import PROVIDERS
from config.settings import Settings
from core.events import ListSink
from core.orchestrator import Orchestrator
from core.state import GenerationRequest
from core.store import DirectoryArtifactStore
from core.telemetry import configure_logging
from core.validation import validate
from manager.library_matcher import find_matches
from utils.folder_naming import get_output_dir


def _format_errors(errors):
    """Format validation errors for CLI display."""
    lines = []
    for error in errors:
        marker = "ERROR" if error.severity == "error" else "WARN"
        lines.append(f"  [{marker}] {error.category} {error.path}: {error.message}")
        if error.fix:
            lines.append(f"           Fix: {error.fix}")
    return "\n".join(lines)


def _print_event(event):
    if event.type == "stage":
        print(f"  {event.stage:<9s} {event.status}")
    elif event.type == "error":
        print(f"  error: {event.message}")


def cmd_build(args):
    """Run the pipeline against a workspace directory."""
    settings = Settings.from_env()
    if args.no_ensemble:
        settings.ensemble_enabled = False
    configure_logging("DEBUG" if args.verbose else settings.log_level)

    if args.workspace:
        workspace = os.path.abspath(args.workspace)
    else:
        os.makedirs(args.output_dir, exist_ok=True)
        workspace = os.path.abspath(get_output_dir(args.output_dir, args.prompt))
    root, workspace_id = os.path.split(workspace)

    orchestrator = Orchestrator(settings, store=DirectoryArtifactStore(root))
    sink = ListSink()
    result = orchestrator.run(
        GenerationRequest(workspace_id=workspace_id, prompt=args.prompt),
        sink=sink,
    )

    if args.verbose:
        for event in sink.events:
            _print_event(event)

    print(f"\n{result.message}")
    print(f"Output:     {workspace}")
    print(f"Intent:     {result.intent or '-'}")
    print(f"Validation: {'passed' if result.validation_passed else 'FAILED'}")
    print(f"Repairs:    {result.repair_attempts}")
    if result.models_used:
        print(f"Models:     {', '.join(result.models_used)}")
    if result.artifacts:
        print(f"\nWrote {len(result.artifacts)} file(s):")
        for artifact in result.artifacts:
            print(f"  {artifact.operation:6s} {artifact.path}")
    if result.routes:
        print(f"\nRoutes: {', '.join(result.routes)}")
    if result.errors:
        print("\nErrors:")
        for error in result.errors:
            print(f"  {error}")
    if result.suggestions:
        print("\nNext steps:")
        for suggestion in result.suggestions:
            print(f"  - {suggestion}")

    if not result.success:
        sys.exit(1)


def cmd_validate(args):
    """Run the validator over an existing workspace directory."""
    workspace = os.path.abspath(args.directory)
    if not os.path.isdir(workspace):
        print(f"Not a directory: {args.directory}")
        sys.exit(2)
    root, workspace_id = os.path.split(workspace)
    artifacts = DirectoryArtifactStore(root).list_artifacts(workspace_id)

    result = validate(artifacts)
    print(f"Files:        {len(artifacts)}")
    print(f"Valid:        {'yes' if result.valid else 'NO'}")
    print(f"Score:        {result.score}")
    print(f"Completeness: {result.completeness:.0%}")
    if result.critical_errors or result.warnings:
        print("\nIssues found:")
        print(_format_errors(result.critical_errors + result.warnings))
    for suggestion in result.suggestions:
        print(f"  hint: {suggestion}")

    if not result.valid:
        sys.exit(1)


def cmd_match(args):
    """Show which library assets a prompt would pull in."""
    matches = find_matches(args.prompt)
    if not matches:
        print("No library matches.")
        return
    for match in matches:
        target = f" -> {match.path}" if match.path else ""
        print(f"  {match.confidence:.2f}  {match.kind:13s} {match.name}{target}")


def cmd_providers(args):
    """List providers and whether each has a credential."""
    settings = Settings.from_env()
    print("Providers (discovery order):")
    for provider_id, provider in PROVIDERS.items():
        state = "configured" if settings.has_credential(provider_id) else "no key"
        keys = " / ".join(provider["env_keys"])
        print(f"  {provider_id:10s} {state:11s} ({keys})")


def main():
    parser = argparse.ArgumentParser(
        prog="sitesmith",
        description="Generate React + Tailwind websites from a prompt",
    )
    subparsers = parser.add_subparsers(dest="command")

    build_parser = subparsers.add_parser("build", help="Generate or modify a site")
    build_parser.add_argument("--prompt", required=True, help="Natural language request")
    build_parser.add_argument("--workspace", help="Existing workspace directory to modify")
    build_parser.add_argument("--output-dir", default="output",
                              help="Where new workspaces are created (default: output)")
    build_parser.add_argument("--verbose", action="store_true",
                              help="Show stage progress and debug logging")
    build_parser.add_argument("--no-ensemble", action="store_true",
                              help="Use a single coding provider instead of an ensemble")

    validate_parser = subparsers.add_parser("validate", help="Validate a workspace directory")
    validate_parser.add_argument("directory", help="Workspace directory")

    match_parser = subparsers.add_parser("match", help="Show library matches for a prompt")
    match_parser.add_argument("--prompt", required=True, help="Natural language request")

    subparsers.add_parser("providers", help="List providers and credentials")

    args = parser.parse_args()

    if args.command == "build":
        cmd_build(args)
    elif args.command == "validate":
        cmd_validate(args)
    elif args.command == "match":
        cmd_match(args)
    elif args.command == "providers":
        cmd_providers(args)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
