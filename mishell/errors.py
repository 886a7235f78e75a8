"""Errors raised while wiring up a pipeline.

None of them is fatal to the shell: the executor reports them and the
driver loop moves on to the next line.
"""


class MishellError(Exception):
    """Base class for errors reported to the operator."""


class SpawnError(MishellError):
    """Process creation or image replacement failed."""

    def __init__(self, name, reason):
        super().__init__(f"{name}: {reason}")
        self.name = name
        self.reason = reason


class RedirectionError(MishellError):
    """A redirect target could not be opened."""

    def __init__(self, path, reason):
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


class PipeWiringError(MishellError):
    """os.pipe() failed while building a pipeline."""


def reason(e):
    """Operator-facing text for an OSError or ValueError."""
    return getattr(e, "strerror", None) or str(e)
