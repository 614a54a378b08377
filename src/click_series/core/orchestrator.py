"""Per-link fetch orchestration with last-request-wins supersession."""

from __future__ import annotations

import asyncio
import logging
from typing import AsyncIterator, Callable, List, Optional, Set, Union

from click_series.domain.exceptions import SourceError
from click_series.domain.interfaces import (
    IClickAggregator,
    IClickSource,
    ISeriesBuilder,
    SeriesListener,
)
from click_series.domain.models import (
    AggregationRequest,
    ErrorKind,
    FetchStatus,
    Granularity,
    SeriesState,
)

GranularityLike = Union[Granularity, str, int]


class FetchOrchestrator:
    """Keeps one link's click series in step with the chart's current intent.

    Every issued request takes the next sequence number. A fetch that completes
    after a newer request was issued is dropped, so only the latest request's
    outcome is ever published. In-flight I/O is never cancelled.
    """

    def __init__(
        self,
        source: IClickSource,
        aggregator: IClickAggregator,
        builder: ISeriesBuilder,
        *,
        default_granularity: GranularityLike = Granularity.MINUTE,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._source = source
        self._aggregator = aggregator
        self._builder = builder
        self._logger = logger or logging.getLogger(__name__)
        self._state = SeriesState()
        self._sequence = 0
        self._listeners: List[SeriesListener] = []
        self._tasks: Set["asyncio.Task[SeriesState]"] = set()
        self._subject: Optional[str] = None
        self._token = ""
        self._granularity = Granularity.parse(default_granularity)

    @property
    def state(self) -> SeriesState:
        return self._state

    @property
    def sequence(self) -> int:
        return self._sequence

    @property
    def current_request(self) -> Optional[AggregationRequest]:
        if self._subject is None:
            return None
        return AggregationRequest(
            subject=self._subject, token=self._token, granularity=self._granularity
        )

    def subscribe(self, listener: SeriesListener) -> Callable[[], None]:
        """Register a state listener; the returned callable removes it."""

        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def request(
        self, subject: str, token: str = "", granularity: GranularityLike | None = None
    ) -> SeriesState:
        """Issue a request and wait for it.

        Returns the orchestrator state once the fetch settles, which reflects a
        newer request if this one was superseded meanwhile.
        """

        request = self._build_request(subject, token, granularity)
        sequence = self._issue(request)
        return await self._complete(request, sequence)

    def update(
        self,
        *,
        subject: Optional[str] = None,
        token: Optional[str] = None,
        granularity: GranularityLike | None = None,
    ) -> Optional["asyncio.Task[SeriesState]"]:
        """Change part of the intent, scheduling a fetch only when it changed.

        Must be called with a running event loop. Nothing is fetched until a
        subject is known.
        """

        previous = self.current_request
        if subject is not None:
            self._subject = subject
        if token is not None:
            self._token = token
        if granularity is not None:
            self._granularity = Granularity.parse(granularity)

        current = self.current_request
        if current is None or current == previous:
            return None
        return self._schedule(current)

    def set_subject(self, subject: str) -> Optional["asyncio.Task[SeriesState]"]:
        return self.update(subject=subject)

    def set_token(self, token: str) -> Optional["asyncio.Task[SeriesState]"]:
        return self.update(token=token)

    def set_granularity(
        self, granularity: GranularityLike
    ) -> Optional["asyncio.Task[SeriesState]"]:
        return self.update(granularity=granularity)

    def refresh(self) -> Optional["asyncio.Task[SeriesState]"]:
        """Re-issue the current intent."""

        current = self.current_request
        if current is None:
            return None
        return self._schedule(current)

    async def wait(self) -> SeriesState:
        """Wait for every scheduled fetch, stale ones included, to settle."""

        while self._tasks:
            await asyncio.gather(*list(self._tasks))
        return self._state

    async def observe(
        self,
        subject: str,
        token: str = "",
        granularity: GranularityLike | None = None,
    ) -> AsyncIterator[SeriesState]:
        """Stream published states for the given intent.

        The current state is yielded first when the intent is already active.
        """

        queue: "asyncio.Queue[SeriesState]" = asyncio.Queue()
        unsubscribe = self.subscribe(queue.put_nowait)
        try:
            task = self.update(subject=subject, token=token, granularity=granularity)
            if task is None:
                queue.put_nowait(self._state)
            while True:
                yield await queue.get()
        finally:
            unsubscribe()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _build_request(
        self, subject: str, token: str, granularity: GranularityLike | None
    ) -> AggregationRequest:
        resolved = (
            self._granularity if granularity is None else Granularity.parse(granularity)
        )
        request = AggregationRequest(subject=subject, token=token, granularity=resolved)
        self._subject = request.subject
        self._token = request.token
        self._granularity = request.granularity
        return request

    def _schedule(self, request: AggregationRequest) -> "asyncio.Task[SeriesState]":
        loop = asyncio.get_running_loop()
        sequence = self._issue(request)
        task = loop.create_task(self._complete(request, sequence))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    def _issue(self, request: AggregationRequest) -> int:
        self._sequence += 1
        self._publish(
            SeriesState(
                status=FetchStatus.LOADING,
                request=request,
                series=self._state.series,
                is_loading=True,
            )
        )
        return self._sequence

    async def _complete(self, request: AggregationRequest, sequence: int) -> SeriesState:
        try:
            values = await self._source.fetch_timestamps(request.subject, request.token)
        except Exception as exc:
            if self._is_stale(sequence, request):
                return self._state
            self._fail(request, exc)
            return self._state

        if self._is_stale(sequence, request):
            return self._state

        try:
            aggregation = self._aggregator.aggregate_raw(values, request.granularity)
            series = self._builder.build(aggregation.counts, request.granularity)
        except Exception as exc:
            self._fail(request, exc)
            return self._state

        self._publish(
            SeriesState(
                status=FetchStatus.READY,
                request=request,
                series=series,
                skipped=aggregation.skipped,
            )
        )
        return self._state

    def _fail(self, request: AggregationRequest, exc: Exception) -> None:
        extra = {
            "subject": request.subject,
            "granularity": request.granularity.value,
        }
        if isinstance(exc, SourceError):
            self._logger.warning("series_fetch_failed", extra=extra, exc_info=exc)
        else:
            self._logger.exception("series_fetch_failed", extra=extra, exc_info=exc)
        self._publish(
            SeriesState(
                status=FetchStatus.FAILED,
                request=request,
                series=self._state.series,
                error=ErrorKind.SOURCE_UNAVAILABLE,
            )
        )

    def _is_stale(self, sequence: int, request: AggregationRequest) -> bool:
        if sequence == self._sequence:
            return False
        self._logger.debug(
            "stale_result_discarded",
            extra={
                "subject": request.subject,
                "granularity": request.granularity.value,
                "sequence": sequence,
                "current_sequence": self._sequence,
            },
        )
        return True

    def _publish(self, state: SeriesState) -> None:
        self._state = state
        for listener in list(self._listeners):
            listener(state)
