"""
Live search coordination.

Keystrokes only trigger a search once the text has been stable for a quiet
period; filter changes search immediately with the text settled so far.
Every search gets a sequence number and only the response to the most
recently issued one is delivered, so a slow early response can never
overwrite fresher results.
"""

import asyncio
import logging
from enum import Enum
from typing import Awaitable, Callable, Dict, List, Mapping, Optional, Set

from ..exceptions import RemoteQueryError
from ..models.notification import Notification
from ..models.patient import Patient
from ..models.search import SearchState

logger = logging.getLogger(__name__)

SearchFn = Callable[[str, Mapping[str, str]], Awaitable[List[Patient]]]
ResultsCallback = Callable[[List[Patient]], Awaitable[None]]
ErrorCallback = Callable[[Notification], Awaitable[None]]

SEARCH_FAILED_MESSAGE = "Erro ao buscar pacientes. Tente novamente."


class SearchPhase(str, Enum):
    IDLE = "idle"
    PENDING_DEBOUNCE = "pending_debounce"
    QUERYING = "querying"


class DebouncedSearchController:
    """Turns search bar events into patient searches."""

    def __init__(
        self,
        search: SearchFn,
        on_results: ResultsCallback,
        on_error: ErrorCallback,
        quiet_period: float = 0.3
    ):
        self._search = search
        self._on_results = on_results
        self._on_error = on_error
        self.quiet_period = quiet_period

        self.query = ""
        self.filters: Dict[str, str] = {}
        self.results: List[Patient] = []
        self.phase = SearchPhase.IDLE

        self._pending_text: Optional[str] = None
        self._timer: Optional[asyncio.TimerHandle] = None
        self._issued = 0
        self._in_flight: Set[asyncio.Task] = set()
        self._closed = False

    @property
    def state(self) -> SearchState:
        """Settled text and current filter selections."""
        return SearchState(query=self.query, filters=dict(self.filters))

    @property
    def issued(self) -> int:
        """Number of searches started so far."""
        return self._issued

    def keystroke(self, text: str) -> None:
        """Record new search text and restart the quiet period."""
        if self._closed:
            return
        if self._timer is not None:
            self._timer.cancel()

        self._pending_text = text
        self.phase = SearchPhase.PENDING_DEBOUNCE
        loop = asyncio.get_running_loop()
        self._timer = loop.call_later(self.quiet_period, self._settle)

    def change_filter(self, name: str, value: str) -> None:
        """Select a filter option and search right away."""
        if self._closed:
            return
        self.filters[name] = value
        self._dispatch()

    def clear_filters(self) -> None:
        if self._closed:
            return
        self.filters = {}
        self._dispatch()

    def refresh(self) -> None:
        """Search again with the current text and filters."""
        if self._closed:
            return
        self._dispatch()

    async def wait_idle(self) -> None:
        """Wait until every started search has completed."""
        pending = [task for task in self._in_flight if not task.done()]
        while pending:
            await asyncio.gather(*pending, return_exceptions=True)
            pending = [task for task in self._in_flight if not task.done()]

    def close(self) -> None:
        """Stop the timer; responses still in flight are dropped on arrival."""
        self._closed = True
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        self._pending_text = None

    def _settle(self) -> None:
        self._timer = None
        if self._pending_text is None:
            return
        self.query = self._pending_text
        self._pending_text = None
        self._dispatch()

    def _dispatch(self) -> None:
        self._issued += 1
        seq = self._issued
        if self._timer is None:
            self.phase = SearchPhase.QUERYING

        task = asyncio.ensure_future(self._run(seq, self.query, dict(self.filters)))
        self._in_flight.add(task)
        task.add_done_callback(self._in_flight.discard)

    async def _run(self, seq: int, query: str, filters: Dict[str, str]) -> None:
        try:
            results = await self._search(query, filters)
        except RemoteQueryError as exc:
            if not self._is_current(seq):
                logger.debug("Dropping error of superseded search #%d: %s", seq, exc)
                return
            logger.warning("Patient search #%d failed: %s", seq, exc)
            self._finish()
            await self._on_error(Notification.error(SEARCH_FAILED_MESSAGE))
            return

        if not self._is_current(seq):
            logger.debug("Dropping results of superseded search #%d", seq)
            return
        self.results = results
        self._finish()
        await self._on_results(results)

    def _is_current(self, seq: int) -> bool:
        return not self._closed and seq == self._issued

    def _finish(self) -> None:
        self.phase = SearchPhase.PENDING_DEBOUNCE if self._timer is not None else SearchPhase.IDLE
