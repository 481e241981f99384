"""Exception hierarchy for the analysis core.

Every failure the core surfaces to a caller derives from ``AnalysisError``.
``TransportError`` and ``MalformedResponse`` are ``AnalysisFailed`` kinds, so a
caller can catch the broad kind or the specific one.
"""

from __future__ import annotations


class AnalysisError(Exception):
    """Base class for all analysis-core errors."""


class InvalidInput(AnalysisError, ValueError):
    """The text submitted for analysis was empty."""


class ProviderUnavailable(AnalysisError):
    """The active provider's availability check returned False."""

    def __init__(self, provider: str) -> None:
        super().__init__(f"AI provider {provider} is not available")
        self.provider = provider


class AnalysisFailed(AnalysisError):
    """The provider call failed; the underlying cause is chained."""


class TransportError(AnalysisFailed):
    """The remote completion endpoint was unreachable or rejected the call."""

    def __init__(self, provider: str, message: str) -> None:
        super().__init__(f"{provider} request failed: {message}")
        self.provider = provider


class MalformedResponse(AnalysisFailed):
    """The remote reply could not be parsed as a JSON object.

    ``raw_text`` keeps the reply for diagnostics. It is never part of the
    message, which may be shown to an end user.
    """

    def __init__(self, message: str, raw_text: str = "") -> None:
        super().__init__(message)
        self.raw_text = raw_text


class UnknownProvider(AnalysisError, KeyError):
    """A provider name is not in the registry's table."""

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"Provider {self.name} not available"
