"""Error types raised outside the analysis core.

The detectors, ranker and differ are total functions and raise nothing. Errors
only originate while locating/reading/decoding input files or validating tool
arguments, and each one is terminal for the requested operation.
"""

from __future__ import annotations


from typing import Optional


class AnalyzerError(Exception):
    """Base class for all errors surfaced to a tool caller.

    ``context`` is an optional prefix naming the step that failed (for example
    "Failed to load baseline data"); it is prepended when the error is
    rendered.
    """

    context: Optional[str] = None

    def __str__(self) -> str:
        message = super().__str__()
        if self.context:
            return f"{self.context}: {message}"
        return message


class InputUnavailableError(AnalyzerError):
    """The requested profile file is missing or unreadable."""

    def __init__(self, path: str, tried: list[str], reason: str) -> None:
        self.path = path
        self.tried = list(tried)
        self.reason = reason
        super().__init__(f"failed to read file (tried: {', '.join(self.tried)}): {reason}")


class InputMalformedError(AnalyzerError):
    """The profile file could not be decoded into a session."""

    def __init__(self, path: str, diagnostic: str) -> None:
        self.path = path
        self.diagnostic = diagnostic
        super().__init__(f"failed to parse JSON: {diagnostic}")


class InvalidRequestError(AnalyzerError):
    """Tool arguments were rejected by the request contracts."""
