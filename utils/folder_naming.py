"""Naming utilities: slugs, brand names from requests, deduped output dirs."""

import os
import re

# Words that never carry the subject of a site request
FILLER = {
    "build", "me", "a", "an", "the", "create", "make", "generate", "design",
    "write", "for", "to", "with", "using", "that", "and", "app", "my", "our",
    "application", "please", "can", "you", "i", "want", "need", "some", "new",
    "nice", "modern", "beautiful", "simple", "landing", "page", "website",
    "site", "web", "one", "of", "in",
}


def slugify(text):
    """Lowercase underscore slug, e.g. "Hello, World" -> "hello_world"."""
    cleaned = re.sub(r"[^\w\s-]", "", text.lower())
    return "_".join(part for part in re.split(r"[\s_-]+", cleaned) if part)


def _meaningful_words(request):
    words = re.sub(r"[^\w\s]", " ", request.lower()).split()
    return [w for w in words if w not in FILLER]


def extract_project_name(request):
    """Pull a short project slug from the request text."""
    return slugify("_".join(_meaningful_words(request)[:3])) or "project"


def brand_name(request):
    """Display name for generated copy, e.g. "build me a bakery site" -> "Bakery"."""
    meaningful = _meaningful_words(request)
    if not meaningful:
        return "My Project"
    return " ".join(w.capitalize() for w in meaningful[:2])


MAX_DEDUP = 1000


def get_output_dir(base_dir, request):
    """First free directory under base_dir for a request: name, name_2, name_3..."""
    slug = extract_project_name(request)
    root = os.path.realpath(base_dir)
    target = os.path.join(base_dir, slug)
    if not os.path.realpath(target).startswith(root + os.sep):
        raise ValueError(f"Output directory escapes {base_dir}: {slug}")

    suffixes = [""] + [f"_{n}" for n in range(2, MAX_DEDUP + 2)]
    for suffix in suffixes:
        if not os.path.exists(target + suffix):
            return target + suffix
    raise RuntimeError(f"No free output directory for {slug} after {MAX_DEDUP} attempts")
