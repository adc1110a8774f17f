"""Patch composer — turns validation errors into a repair request. Zero LLM calls."""

from core.validation import classify_errors

MAX_ERRORS = 5
MAX_FILES = 3


class PatchComposer:
    """Formats the highest-priority errors and the files they touch."""

    name = "patch_composer"

    def select(self, errors):
        """The errors a repair request targets, in the order it lists them."""
        return classify_errors(errors)[:MAX_ERRORS]

    def compose(self, errors, artifacts):
        """Return (message, paths included) for a repair call.

        Errors are ordered SYNTAX, IMPORT, STRUCTURE; at most MAX_ERRORS are
        listed and at most MAX_FILES affected files are attached in full.
        """
        ordered = self.select(errors)
        if not ordered:
            return "", []

        lines = ["Fix the following errors:\n"]
        for idx, error in enumerate(ordered, 1):
            lines.append(
                f"{idx}. [{error.category}] {error.path or 'project'}: {error.message}\n"
                f"   Fix: {error.fix}"
            )

        by_path = {a.path: a for a in artifacts}
        paths = []
        for error in ordered:
            if error.path in by_path and error.path not in paths:
                paths.append(error.path)
        paths = paths[:MAX_FILES]

        lines.append("\n--- FILES TO FIX (return each one complete) ---")
        for path in paths:
            lang = path.rsplit(".", 1)[-1]
            lines.append(f"\n```{lang}:{path}\n{by_path[path].content}\n```")

        return "\n".join(lines), paths
