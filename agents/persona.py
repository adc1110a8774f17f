"""Persona writer — conversational summary and next steps. Zero LLM calls."""

from config.media import detect_niche, NICHE_LABELS

# (component name fragment, description used in the summary)
CANONICAL_SECTIONS = [
    ("navbar", "a responsive navigation bar"),
    ("hero", "a hero section with a full-bleed image"),
    ("features", "a features grid"),
    ("gallery", "an image gallery"),
    ("testimonials", "customer testimonials"),
    ("cta", "a call to action"),
    ("footer", "a footer"),
]

QUESTION_MESSAGE = (
    "I understand you have a question. Let me help you with that! "
    "What would you like to know?"
)
FAILURE_MESSAGE = "Oops! Something went wrong while building your project. Let me try again..."
FAILURE_SUGGESTIONS = ["Try simplifying your request", "Check the console for errors"]


def _names(artifacts):
    return [a.path.rsplit("/", 1)[-1].rsplit(".", 1)[0].lower() for a in artifacts]


def suggestions_for(artifacts):
    """Next actions based on which canonical sections exist."""
    names = _names(artifacts)
    joined = " ".join(names)
    suggestions = []
    if "contact" not in joined:
        suggestions.append("Add a contact form")
    if "pricing" not in joined:
        suggestions.append("Add a pricing section")
    if "hero" in names:
        suggestions.append("Change the hero image or colors")
    suggestions.append("Try a library theme like \"Ocean Blue\" or \"Mesh Gradient\"")
    return suggestions[:4]


class PersonaWriter:
    """Writes the closing chat message for a finished run."""

    name = "persona"

    def summarize(self, prompt, artifacts, is_new_project=True, validation_passed=True):
        """Return (message, suggestions)."""
        names = _names(artifacts)
        sections = [desc for key, desc in CANONICAL_SECTIONS if any(key in n for n in names)]
        label = NICHE_LABELS.get(detect_niche(prompt), "website")

        if is_new_project:
            message = f"Done! I built your {label} site with {len(artifacts)} files"
        else:
            message = f"Done! I updated {len(artifacts)} file{'s' if len(artifacts) != 1 else ''}"
        if sections:
            message += ", including " + ", ".join(sections[:-1])
            message += (" and " + sections[-1]) if len(sections) > 1 else sections[-1]
        message += "."
        if not validation_passed:
            message += " A few issues could not be fixed automatically; ask me to fix them next."

        return message, suggestions_for(artifacts)
