"""Static validation of generated artifacts.

Text-scanning heuristics only: delimiter balance, placeholder markers,
empty components and missing hook imports are critical errors. Router
and icon usage without an import are auto-fixable warnings; polish score
and plan completeness are informational.
"""

from __future__ import annotations

import re

from config.rules import (
    CODE_EXTENSIONS, MARKUP_EXTENSIONS, STYLE_EXTENSIONS,
    PLACEHOLDER_PATTERNS, INCOMPLETE_TERNARY, MARKUP_RE, RETURN_NULL_RE,
    REACT_HOOKS, ROUTER_HOOKS, LUCIDE_ICONS,
    POLISH_MARKERS, POLISH_BASE, FILE_COUNT_BONUSES, MIN_FILE_COUNT,
)
from core.state import ValidationError, ValidationResult

_REACT_IMPORT_RE = re.compile(r"import\s+([^;]*?)\s+from\s+['\"]react['\"]", re.DOTALL)
_ROUTER_IMPORT_RE = re.compile(r"from\s*['\"]react-router-dom['\"]")


def _hook_call_re(hook):
    # React.useState(...) is fine without a named import
    return re.compile(r"(?<![.\w])" + hook + r"\s*\(")


_HOOK_CALLS = {hook: _hook_call_re(hook) for hook in REACT_HOOKS}


def missing_hook_imports(content):
    """Hooks called in content but not imported from 'react'."""
    imported = " ".join(_REACT_IMPORT_RE.findall(content))
    missing = []
    for hook, pattern in _HOOK_CALLS.items():
        if pattern.search(content) and not re.search(r"\b" + hook + r"\b", imported):
            missing.append(hook)
    return missing


def _jsx_tag_re(name):
    return re.compile(r"<" + name + r"[\s/>]")


def missing_router_imports(content):
    """Router hooks and components used with no react-router-dom import at all."""
    if _ROUTER_IMPORT_RE.search(content):
        return []
    used = []
    for name in ROUTER_HOOKS:
        pattern = _hook_call_re(name) if name.startswith("use") else _jsx_tag_re(name)
        if pattern.search(content):
            used.append(name)
    return used


def missing_icon_imports(content):
    """Lucide icons rendered as JSX tags but never imported."""
    return [
        icon for icon in LUCIDE_ICONS
        if _jsx_tag_re(icon).search(content)
        and not re.search(r"import[^;]*\b" + icon + r"\b", content)
    ]


def _balance_errors(path, content):
    errors = []
    opened, closed = content.count("{"), content.count("}")
    if opened != closed:
        errors.append(ValidationError(
            category="SYNTAX",
            path=path,
            message=f"Unbalanced braces: {opened} opening, {closed} closing",
            fix="Close every opened block" if opened > closed else "Remove the stray closing brace",
            auto_fixable=opened > closed,
        ))
    return errors


def validate_artifact(artifact):
    """Return (errors, warnings) for a single artifact."""
    path, content = artifact.path, artifact.content

    if path.endswith(STYLE_EXTENSIONS):
        return _balance_errors(path, content), []
    if not path.endswith(CODE_EXTENSIONS):
        return [], []

    errors = _balance_errors(path, content)
    warnings = []

    opened, closed = content.count("("), content.count(")")
    if opened != closed:
        errors.append(ValidationError(
            category="SYNTAX",
            path=path,
            message=f"Unbalanced parentheses: {opened} opening, {closed} closing",
            fix="Check JSX returns and function calls for a missing parenthesis",
        ))

    if INCOMPLETE_TERNARY.search(content):
        errors.append(ValidationError(
            category="SYNTAX",
            path=path,
            message="Incomplete ternary expression",
            fix="Complete the ternary: {condition ? <A /> : <B />}",
        ))

    if any(p.search(content) for p in PLACEHOLDER_PATTERNS):
        errors.append(ValidationError(
            category="STRUCTURE",
            path=path,
            message="Placeholder comment found, file is incomplete",
            fix="Replace the placeholder with the full implementation",
        ))

    if path.endswith(MARKUP_EXTENSIONS) and not MARKUP_RE.search(content):
        if RETURN_NULL_RE.search(content):
            errors.append(ValidationError(
                category="STRUCTURE",
                path=path,
                message="Component returns null and renders no markup",
                fix="Return the component's JSX",
            ))
        elif "export default" in content:
            warnings.append(ValidationError(
                category="STRUCTURE",
                path=path,
                message="Component file contains no markup",
                fix="Make sure the component renders JSX",
                severity="warning",
            ))

    missing = missing_hook_imports(content)
    if missing:
        errors.append(ValidationError(
            category="IMPORT",
            path=path,
            message=f"Missing React import for: {', '.join(missing)}",
            fix=f"import {{ {', '.join(missing)} }} from 'react';",
            auto_fixable=True,
        ))

    router = missing_router_imports(content)
    if router:
        warnings.append(ValidationError(
            category="IMPORT",
            path=path,
            message=f"Router used without a react-router-dom import: {', '.join(router)}",
            fix=f"import {{ {', '.join(router)} }} from 'react-router-dom';",
            severity="warning",
            auto_fixable=True,
        ))

    icons = missing_icon_imports(content)
    if icons:
        shown = ", ".join(icons[:3]) + ("..." if len(icons) > 3 else "")
        warnings.append(ValidationError(
            category="IMPORT",
            path=path,
            message=f"Lucide icons used but not imported: {shown}",
            fix=f"import {{ {', '.join(icons)} }} from 'lucide-react';",
            severity="warning",
            auto_fixable=True,
        ))

    return errors, warnings


def polish_score(artifacts):
    all_content = "\n".join(a.content for a in artifacts)
    score = POLISH_BASE
    for pattern, bonus in POLISH_MARKERS:
        if pattern.search(all_content):
            score += bonus
    for minimum, bonus in FILE_COUNT_BONUSES:
        if len(artifacts) >= minimum:
            score += bonus
    return min(100, score)


def validate(artifacts, plan=None) -> ValidationResult:
    """Validate an artifact set, optionally against the plan it came from."""
    critical, warnings = [], []
    for artifact in artifacts:
        errors, file_warnings = validate_artifact(artifact)
        critical.extend(errors)
        warnings.extend(file_warnings)

    all_content = "\n".join(a.content for a in artifacts)
    if "unsplash.com" not in all_content:
        warnings.append(ValidationError(
            category="STRUCTURE", path="", severity="warning",
            message="No imagery references found",
            fix="Add real images to the hero and gallery sections",
        ))
    if len(artifacts) < MIN_FILE_COUNT:
        warnings.append(ValidationError(
            category="STRUCTURE", path="", severity="warning",
            message=f"Only {len(artifacts)} files generated",
            fix="Split the page into more section components",
        ))
    if "transition-" not in all_content:
        warnings.append(ValidationError(
            category="STRUCTURE", path="", severity="warning",
            message="No transition markers found",
            fix="Add hover transitions to interactive elements",
        ))

    completeness, missing_paths = 1.0, []
    planned = plan.planned_paths() if plan is not None else []
    if planned:
        present = {a.path for a in artifacts}
        missing_paths = [p for p in planned if p not in present]
        completeness = round((len(planned) - len(missing_paths)) / len(planned), 3)
        for path in missing_paths:
            warnings.append(ValidationError(
                category="STRUCTURE", path=path, severity="warning",
                message="Planned file was not generated",
                fix=f"Generate {path}",
            ))

    suggestions = []
    for w in warnings:
        if w.fix and w.fix not in suggestions:
            suggestions.append(w.fix)

    return ValidationResult(
        valid=not critical,
        score=polish_score(artifacts),
        completeness=completeness,
        critical_errors=critical,
        warnings=warnings,
        suggestions=suggestions,
        missing_paths=missing_paths,
    )


def classify_errors(errors):
    """Order errors for repair: SYNTAX first, then IMPORT, then STRUCTURE."""
    priority = {"SYNTAX": 0, "IMPORT": 1, "STRUCTURE": 2}
    return sorted(errors, key=lambda e: (priority.get(e.category, 3), e.path))
