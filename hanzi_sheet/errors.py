from __future__ import annotations


class SourceUnavailable(RuntimeError):
    """A dictionary source could not answer (network error, bad status, bad payload)."""

    def __init__(self, source: str, reason: str):
        super().__init__(f"{source}: {reason}")
        self.source = source
        self.reason = reason


class InputInvalid(ValueError):
    """Raised for blank input, before any lookup happens."""
