"""Auto-fixer — deterministic import and brace repairs. Zero LLM calls."""

import re

from config.rules import CODE_EXTENSIONS
from core.state import Artifact
from core.validation import missing_hook_imports, missing_icon_imports, missing_router_imports

_REACT_NAMED_IMPORT_RE = re.compile(r"import\s*\{([^}]*)\}\s*from\s*['\"]react['\"];?")
_REACT_DEFAULT_IMPORT_RE = re.compile(r"import\s+(\w+)\s+from\s*['\"]react['\"];?")
_IMPORT_LINE_RE = re.compile(r"^import\s.*$", re.MULTILINE)


def _insert_after_imports(content, line):
    """Insert an import line after the last existing import."""
    imports = list(_IMPORT_LINE_RE.finditer(content))
    if not imports:
        return f"{line}\n{content}"
    end = imports[-1].end()
    return content[:end] + "\n" + line + content[end:]


def add_hook_imports(content):
    missing = missing_hook_imports(content)
    if not missing:
        return content

    named = _REACT_NAMED_IMPORT_RE.search(content)
    if named:
        names = [n.strip() for n in named.group(1).split(",") if n.strip()]
        merged = ", ".join(names + missing)
        return content[:named.start()] + f"import {{ {merged} }} from 'react';" + content[named.end():]

    default = _REACT_DEFAULT_IMPORT_RE.search(content)
    if default:
        line = f"import {default.group(1)}, {{ {', '.join(missing)} }} from 'react';"
        return content[:default.start()] + line + content[default.end():]

    return f"import {{ {', '.join(missing)} }} from 'react';\n{content}"


def add_icon_imports(content):
    """Import lucide icons used as JSX tags but never imported."""
    missing = missing_icon_imports(content)
    if not missing:
        return content
    return _insert_after_imports(content, f"import {{ {', '.join(missing)} }} from 'lucide-react';")


def add_router_imports(content):
    used = missing_router_imports(content)
    if not used:
        return content
    return _insert_after_imports(content, f"import {{ {', '.join(used)} }} from 'react-router-dom';")


def close_braces(content):
    """Append closing braces for every unclosed opening brace."""
    missing = content.count("{") - content.count("}")
    if missing <= 0:
        return content
    return content.rstrip() + "\n" + "}" * missing + "\n"


def fix_artifact(artifact):
    if not artifact.path.endswith(CODE_EXTENSIONS + (".css",)):
        return artifact
    content = artifact.content
    if artifact.path.endswith(CODE_EXTENSIONS):
        content = add_hook_imports(content)
        content = add_icon_imports(content)
        content = add_router_imports(content)
    content = close_braces(content)
    if content == artifact.content:
        return artifact
    return Artifact(path=artifact.path, content=content, operation=artifact.operation)


def auto_fix(artifacts):
    """Apply every deterministic fix. Returns (artifacts, changed paths)."""
    fixed, changed = [], []
    for artifact in artifacts:
        result = fix_artifact(artifact)
        if result is not artifact:
            changed.append(artifact.path)
        fixed.append(result)
    return fixed, changed
