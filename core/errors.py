"""Pipeline exception hierarchy."""


class PipelineError(RuntimeError):
    """Base class for failures raised inside the pipeline."""


class AllProvidersExhausted(PipelineError):
    """No candidate in a task's provider chain produced a usable response."""

    def __init__(self, task, errors=None):
        self.task = task
        self.errors = list(errors or [])
        detail = "; ".join(self.errors) if self.errors else "no credentialed provider"
        super().__init__(f"All providers failed for task '{task}': {detail}")


class NoArtifactsExtracted(PipelineError):
    """A generation response contained no usable path-annotated blocks."""


class PipelineCancelled(PipelineError):
    """The caller cancelled the run."""
