"""Click source adapter for the shortener's REST API built on ``BaseClickSource``."""

from __future__ import annotations

from typing import Any, Dict, List, Sequence
from urllib.parse import quote

import httpx

from click_series.domain.exceptions import (
    SourceAuthError,
    SourceError,
    SourceUnavailableError,
)

from .base import BaseClickSource, ClickSourceConfig

REDIRECTS_PATH = "/me/links/{subject}/redirects"


class HttpClickSource(BaseClickSource):
    """Reads a link's redirect timestamps over HTTP with a bearer token."""

    SOURCE_KEY = "http"

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        config: ClickSourceConfig,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self.config = config
        self._http = http_client

    def endpoint(self, subject: str) -> str:
        path = REDIRECTS_PATH.format(subject=quote(subject, safe=""))
        return f"{self.config.base_url.rstrip('/')}{path}"

    async def _fetch(self, subject: str, token: str) -> Sequence[Any]:
        headers: Dict[str, str] = {"Accept": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"

        try:
            http_response = await self._http.get(
                self.endpoint(subject),
                headers=headers,
                timeout=self.config.timeout,
            )
        except httpx.HTTPError as exc:
            raise SourceUnavailableError(
                "Click source request failed",
                context={"subject": subject, "error": str(exc)},
            ) from exc

        return self._map_response(http_response, subject)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _map_response(self, http_response: httpx.Response, subject: str) -> List[Any]:
        status = http_response.status_code

        if status in (401, 403):
            raise SourceAuthError(context={"status_code": status, "subject": subject})
        if status >= 500:
            raise SourceUnavailableError(
                "Click source service unavailable",
                context={"status_code": status, "subject": subject},
            )
        if status >= 400:
            raise SourceError(
                self._error_detail(http_response) or "Click source request failed",
                context={"status_code": status, "subject": subject},
            )

        try:
            data = http_response.json()
        except ValueError as exc:
            raise SourceError(
                "Malformed click payload", context={"subject": subject}
            ) from exc
        if not isinstance(data, list):
            raise SourceError(
                "Click payload must be a list",
                context={"subject": subject, "type": type(data).__name__},
            )
        return data

    @staticmethod
    def _error_detail(http_response: httpx.Response) -> str | None:
        try:
            data = http_response.json()
        except ValueError:
            return None
        if isinstance(data, dict):
            detail = data.get("detail")
            if isinstance(detail, str):
                return detail
        return None
