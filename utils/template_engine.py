"""Site template rendering for the static fallback site.

Templates live under templates/<set>/ and use string.Template placeholders
such as $brand and $hero_url. safe_substitute leaves every other "$name"
token alone, so JSX template literals like `${active}` pass through.
"""

import os
from string import Template

TEMPLATES_DIR = os.path.join(os.path.dirname(os.path.dirname(__file__)), "templates")


def template_path(template_set, template_name=""):
    """Absolute path inside TEMPLATES_DIR. Raises ValueError on escape."""
    root = os.path.realpath(TEMPLATES_DIR)
    resolved = os.path.realpath(os.path.join(root, template_set, template_name))
    if not resolved.startswith(root + os.sep):
        raise ValueError(f"Template path escapes templates directory: {template_set}/{template_name}")
    return resolved


def load_template(template_set, template_name):
    with open(template_path(template_set, template_name)) as f:
        return f.read()


def render_template(template_set, template_name, variables):
    return Template(load_template(template_set, template_name)).safe_substitute(variables)


def render_set(template_set, targets, variables):
    """Render (template name, target path) pairs into (target path, content) pairs."""
    return [
        (target, render_template(template_set, name, variables).strip())
        for name, target in targets
    ]
