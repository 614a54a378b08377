"""Exception hierarchy for click series failures."""

from __future__ import annotations

from typing import Any, Mapping


class ClickSeriesError(Exception):
    """Base class for all domain-level errors in the click series package."""

    default_message = "Click series error occurred"

    def __init__(
        self, message: str | None = None, *, context: Mapping[str, Any] | None = None
    ):
        self.message = message or self.default_message
        self.context: Mapping[str, Any] = dict(context or {})
        formatted = self._format_message()
        super().__init__(formatted)

    def _format_message(self) -> str:
        if self.context:
            return f"{self.message} | context={self.context}"
        return self.message


class SourceError(ClickSeriesError):
    """Generic click source issues (bad status, unreadable payload)."""

    default_message = "Click source error"


class SourceUnavailableError(SourceError):
    """Click source is down or unreachable."""

    default_message = "Click source is unavailable"


class SourceAuthError(SourceUnavailableError):
    """The click source rejected the supplied authorization."""

    default_message = "Click source rejected authorization"


class MalformedTimestampError(ClickSeriesError):
    """A raw click value could not be read as an instant."""

    default_message = "Malformed click timestamp"


class ConfigurationError(ClickSeriesError):
    """Raised when configuration values are missing or invalid."""

    default_message = "Invalid click series configuration"
