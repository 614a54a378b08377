"""In-memory click source for fixtures and demos."""

from __future__ import annotations

import asyncio
from typing import Any, Dict, List, Mapping, Optional, Sequence

from click_series.domain.exceptions import SourceAuthError

from .base import BaseClickSource


class InMemoryClickSource(BaseClickSource):
    """Serves click lists held in a dict, keyed by link subject.

    When ``token`` is set, requests carrying a different token are rejected the
    way the REST API rejects them.
    """

    SOURCE_KEY = "memory"

    def __init__(
        self,
        clicks: Optional[Mapping[str, Sequence[Any]]] = None,
        *,
        token: Optional[str] = None,
        delay: float = 0.0,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self._clicks: Dict[str, List[Any]] = {
            subject: list(values) for subject, values in (clicks or {}).items()
        }
        self._token = token
        self._delay = delay

    def record(self, subject: str, value: Any) -> None:
        self._clicks.setdefault(subject, []).append(value)

    async def _fetch(self, subject: str, token: str) -> Sequence[Any]:
        if self._delay:
            await asyncio.sleep(self._delay)
        if self._token is not None and token != self._token:
            raise SourceAuthError(context={"subject": subject})
        return list(self._clicks.get(subject, []))
