"""Click source abstractions and shared behavior implementations."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Optional, Sequence

from click_series.domain.exceptions import SourceError


@dataclass(frozen=True)
class ClickSourceConfig:
    """Configuration values shared by remote click sources."""

    base_url: str
    timeout: float = 30.0

    def __post_init__(self) -> None:
        if not self.base_url:
            raise ValueError("base_url must be provided")
        if self.timeout <= 0:
            raise ValueError("timeout must be greater than zero")


class BaseClickSource(ABC):
    """Template-method base class that handles logging and error wrapping.

    There is no retry: a failed fetch is reported once and the caller decides.
    """

    SOURCE_KEY = "custom"

    def __init__(self, *, logger: Optional[logging.Logger] = None) -> None:
        self.logger = logger or logging.getLogger(
            f"{__name__}.{self.__class__.__name__}"
        )

    async def fetch_timestamps(self, subject: str, token: str) -> Sequence[Any]:
        """Public API that aligns with IClickSource.fetch_timestamps."""

        self.log_request(subject)
        try:
            values = await self._fetch(subject, token)
        except SourceError:
            raise
        except Exception as exc:
            self.logger.exception("Unexpected click source failure")
            raise SourceError(
                "Unexpected click source failure",
                context={"source": self.__class__.__name__, "subject": subject},
            ) from exc
        self.log_response(subject, values)
        return values

    @abstractmethod
    async def _fetch(self, subject: str, token: str) -> Sequence[Any]:
        """Source-specific retrieval implemented by subclasses."""

    def log_request(self, subject: str) -> None:
        self.logger.debug(
            "click_fetch_request",
            extra={"subject": subject, "source": self.SOURCE_KEY},
        )

    def log_response(self, subject: str, values: Sequence[Any]) -> None:
        self.logger.debug(
            "click_fetch_response",
            extra={"subject": subject, "clicks": len(values), "source": self.SOURCE_KEY},
        )
