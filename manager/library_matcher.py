"""Fuzzy matching of request text against the reusable-asset catalog."""

from config.library import THEMES, COMPONENTS, PAGE_TEMPLATES, CATEGORY_ALIASES
from core.state import LibraryMatch


def score_match(prompt, item_id, name, category):
    """Confidence that a lowercased prompt asks for this catalog entry."""
    name_lower = name.lower()
    if name_lower in prompt:
        return 0.95

    if item_id in prompt or item_id.replace("-", " ") in prompt:
        return 0.9

    name_words = name_lower.split()
    if len(name_words) >= 2 and all(w in prompt for w in name_words):
        return 0.8

    aliases = CATEGORY_ALIASES.get(category, [category])
    if any(alias in prompt for alias in aliases):
        partial = any(w in prompt for w in name_words)
        return 0.6 if partial else 0.3

    return 0.0


def theme_code(theme):
    """Render a theme as a className/style attribute pair."""
    if theme.get("style"):
        style = ", ".join(f"{k}: '{v}'" for k, v in theme["style"].items())
        return f'className="{theme["class_name"]}" style={{{{{style}}}}}'
    return f'className="{theme["class_name"]}"'


def find_matches(prompt):
    """All catalog entries the prompt plausibly refers to, best first."""
    text = prompt.lower()
    matches = []

    for theme in THEMES:
        confidence = score_match(text, theme["id"], theme["name"], theme["category"])
        if confidence > 0:
            matches.append(LibraryMatch(
                kind="theme", id=theme["id"], name=theme["name"], confidence=confidence,
                code=theme_code(theme), category=theme["category"],
            ))

    for component in COMPONENTS:
        confidence = score_match(text, component["id"], component["name"], component["category"])
        if confidence > 0:
            matches.append(LibraryMatch(
                kind="component", id=component["id"], name=component["name"],
                confidence=confidence, code=component["code"], category=component["category"],
            ))

    for page in PAGE_TEMPLATES:
        confidence = score_match(text, page["id"], page["name"], page["category"])
        if confidence > 0:
            matches.append(LibraryMatch(
                kind="page-template", id=page["id"], name=page["name"],
                confidence=confidence, code=page["code"], category=page["category"],
                path=page["path"],
            ))

    matches.sort(key=lambda m: m.confidence, reverse=True)
    return matches


def library_catalog():
    """Names of every catalog entry, for prompt injection."""
    themes = "\n".join(f'  - "{t["name"]}" ({t["category"]})' for t in THEMES)
    components = "\n".join(f'  - "{c["name"]}" ({c["category"]})' for c in COMPONENTS)
    pages = "\n".join(f'  - "{p["name"]}" ({p["category"]})' for p in PAGE_TEMPLATES)
    return (
        "## AVAILABLE LIBRARY ASSETS\n\n"
        f"### Themes:\n{themes}\n\n"
        f"### Components:\n{components}\n\n"
        f"### Page Templates:\n{pages}\n\n"
        "When a user requests any of these by name, use the EXACT code from the library."
    )


def library_payload(matches, min_confidence=0.6):
    """Verbatim code block for matches confident enough to inject."""
    chosen = [m for m in matches if m.confidence >= min_confidence]
    if not chosen:
        return ""
    parts = [
        "## LIBRARY ASSETS (reproduce this code verbatim; only brand name and copy may change)",
    ]
    for m in chosen:
        target = f" -> {m.path}" if m.path else ""
        parts.append(f"### {m.name} [{m.kind}]{target}\n{m.code}")
    return "\n\n".join(parts)
