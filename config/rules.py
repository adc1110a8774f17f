"""Static path-classification and validation rule patterns."""

import re

# Path classification. First match wins. Each entry:
# (pattern_regex, classification, writeable)
CLASSIFICATION_RULES = [
    (re.compile(r"^src/integrations/"), "internal", False),
    (re.compile(r"^src/main\.tsx$"), "system", False),
    (re.compile(r"^package\.json$"), "system", False),
    (re.compile(r"^package-lock\.json$"), "system", False),
    (re.compile(r"^tsconfig.*\.json$"), "system", False),
    (re.compile(r"^vite\.config\.ts$"), "system", False),
    (re.compile(r"^tailwind\.config\.ts$"), "system", False),
    (re.compile(r"^\.cache/"), "runtime", False),
    (re.compile(r"^node_modules/"), "runtime", False),
    (re.compile(r"^dist/"), "runtime", False),
]
DEFAULT_CLASSIFICATION = ("generated", True)
# Paths that leave the workspace root after normalization
OUTSIDE_CLASSIFICATION = ("outside", False)

CODE_EXTENSIONS = (".tsx", ".ts", ".jsx", ".js")
MARKUP_EXTENSIONS = (".tsx", ".jsx")
STYLE_EXTENSIONS = (".css",)

# Placeholder markers left behind by truncated or lazy output
PLACEHOLDER_PATTERNS = [
    re.compile(r"//\s*\.\.\."),
    re.compile(r"/\*\s*\.\.\.\s*\*/"),
    re.compile(r"//\s*TODO", re.IGNORECASE),
    re.compile(r"//\s*rest of", re.IGNORECASE),
]

# "{cond ? : other}". Requires whitespace before "?" so TS optional
# props like "title?: string" are not flagged.
INCOMPLETE_TERNARY = re.compile(r"\s\?\s*:")

MARKUP_RE = re.compile(r"<\w")
RETURN_NULL_RE = re.compile(r"return\s+null\s*;?")

REACT_HOOKS = (
    "useState", "useEffect", "useRef", "useMemo", "useCallback",
    "useContext", "useReducer", "useLayoutEffect",
)
ROUTER_HOOKS = ("useNavigate", "useParams", "useLocation", "Link")

# lucide icon components commonly emitted without their import
LUCIDE_ICONS = (
    "ArrowRight", "ArrowLeft", "Check", "ChevronDown", "ChevronRight", "Menu", "X",
    "Star", "Heart", "Mail", "Phone", "MapPin", "Sparkles", "Zap", "Shield",
    "Globe", "Clock", "Users", "Award", "Leaf", "ShieldCheck", "Search",
)

# Polish markers. Each entry: (pattern_regex, bonus)
POLISH_MARKERS = [
    (re.compile(r"unsplash\.com"), 10),
    (re.compile(r"bg-gradient-to-"), 8),
    (re.compile(r"hover:"), 8),
    (re.compile(r"backdrop-blur"), 5),
    (re.compile(r"transition-"), 5),
    (re.compile(r"text-[5-7]xl"), 5),
    (re.compile(r"\bpy-(?:2\d|3\d)\b"), 5),
    (re.compile(r"tracking-"), 3),
    (re.compile(r"leading-"), 3),
    (re.compile(r"animate-|@keyframes"), 5),
    (re.compile(r"group-hover:"), 3),
    (re.compile(r"hover:-translate-y"), 3),
]
POLISH_BASE = 50
# (minimum file count, bonus)
FILE_COUNT_BONUSES = [(8, 5), (10, 5)]
MIN_FILE_COUNT = 6
