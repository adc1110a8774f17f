"""Tests for agents.autofixer — deterministic repairs."""

from agents.autofixer import (
    add_hook_imports, add_icon_imports, add_router_imports, auto_fix, close_braces,
)
from core.state import Artifact
from core.validation import validate


def test_adds_missing_hook_import():
    content = "export default function A() {\n  const [n] = useState(0);\n  return <p>{n}</p>;\n}"
    fixed = add_hook_imports(content)
    assert fixed.startswith("import { useState } from 'react';\n")


def test_merges_into_named_import():
    content = "import { useState } from 'react';\nconst r = useRef(null);\nconst [a] = useState(1);"
    fixed = add_hook_imports(content)
    assert "import { useState, useRef } from 'react';" in fixed
    assert fixed.count("from 'react'") == 1


def test_extends_default_import():
    content = "import React from 'react';\nconst [a] = useState(1);"
    assert add_hook_imports(content).startswith("import React, { useState } from 'react';")


def test_hook_imports_noop():
    content = "import { useState } from 'react';\nconst [a] = useState(1);"
    assert add_hook_imports(content) == content


def test_adds_icon_import_after_imports():
    content = "import { Link } from 'react-router-dom';\n\nexport const A = () => <Menu className=\"w-4\" />;"
    fixed = add_icon_imports(content)
    lines = fixed.splitlines()
    assert lines[1] == "import { Menu } from 'lucide-react';"


def test_icon_already_imported():
    content = "import { Menu } from 'lucide-react';\nexport const A = () => <Menu />;"
    assert add_icon_imports(content) == content


def test_adds_router_imports():
    content = "export default function Nav() {\n  const navigate = useNavigate();\n  return <Link to=\"/\">Home</Link>;\n}"
    fixed = add_router_imports(content)
    assert fixed.startswith("import { useNavigate, Link } from 'react-router-dom';")


def test_router_import_present_is_noop():
    content = "import { Link } from 'react-router-dom';\nconst a = <Link to=\"/\" />;"
    assert add_router_imports(content) == content


def test_close_braces():
    assert close_braces("function a() {\n  if (x) {\n") == "function a() {\n  if (x) {\n}}\n"
    assert close_braces("{}") == "{}"


def test_auto_fix_reports_changed_paths():
    broken = Artifact("src/components/Counter.tsx",
                      "export default function Counter() {\n  const [n] = useState(0);\n  return <p>{n}</p>;\n", "create")
    fine = Artifact("src/index.css", "body { margin: 0; }")
    fixed, changed = auto_fix([broken, fine])
    assert changed == ["src/components/Counter.tsx"]
    assert fixed[1] is fine
    assert fixed[0].operation == "create"
    assert validate(fixed).valid


def test_auto_fix_skips_non_code():
    artifact = Artifact("public/robots.txt", "{")
    fixed, changed = auto_fix([artifact])
    assert changed == []
    assert fixed[0] is artifact


def test_fix_clears_reported_import_warnings():
    content = (
        "export default function Nav() {\n"
        "  const navigate = useNavigate();\n"
        "  return <nav><Link to=\"/about\">About</Link><Menu onClick={() => navigate(\"/\")} /></nav>;\n"
        "}\n"
    )
    before = validate([Artifact("src/components/Nav.tsx", content)])
    assert sorted(w.message.split(":")[0] for w in before.warnings if w.category == "IMPORT") == [
        "Lucide icons used but not imported", "Router used without a react-router-dom import",
    ]
    fixed, changed = auto_fix([Artifact("src/components/Nav.tsx", content)])
    assert changed == ["src/components/Nav.tsx"]
    after = validate(fixed)
    assert not [w for w in after.warnings if w.category == "IMPORT"]
