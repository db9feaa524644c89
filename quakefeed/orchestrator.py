"""Orchestrator - Wires Functional Core and Imperative Shell.

This module coordinates the flow of data between the pure functional
core and the I/O-performing shell components: it checks connectivity,
runs the feed fetch on a worker thread, formats the records into rows
and publishes the resulting feed state to a listener.
"""

import logging
import threading
import webbrowser
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable

from quakefeed.core.config import Config, is_query_setting, with_query_setting
from quakefeed.core.formatter import EarthquakeRow, to_rows
from quakefeed.core.query import QueryFilter
from quakefeed.shell.connectivity import has_connectivity
from quakefeed.shell.usgs_client import FetchResult, FetchStatus, USGSClient


logger = logging.getLogger(__name__)


class LoadStatus(Enum):
    """Where the feed currently stands."""
    NOT_LOADED = "not_loaded"
    LOADING = "loading"
    NO_CONNECTION = "no_connection"
    LOADED = "loaded"
    EMPTY = "empty"
    FAILED = "failed"


STATUS_MESSAGES = {
    LoadStatus.NO_CONNECTION: "No internet connection.",
    LoadStatus.EMPTY: "No earthquakes found.",
    LoadStatus.FAILED: "Could not load earthquakes.",
}


@dataclass
class FeedState:
    """Snapshot of the feed handed to the rendering layer.

    Attributes:
        status: Load status
        rows: Formatted rows in server order (empty unless LOADED)
        error: Error message if the fetch failed
    """
    status: LoadStatus
    rows: list[EarthquakeRow] = field(default_factory=list)
    error: str | None = None

    @property
    def message(self) -> str | None:
        """User-facing message for states that show no rows."""
        return STATUS_MESSAGES.get(self.status)

    @property
    def is_terminal(self) -> bool:
        """Returns True once a load has finished one way or another."""
        return self.status not in (LoadStatus.NOT_LOADED, LoadStatus.LOADING)

    def to_dict(self) -> dict:
        return {
            "status": self.status.value,
            "message": self.message,
            "error": self.error,
            "count": len(self.rows),
            "rows": [row.to_dict() for row in self.rows],
        }


FeedListener = Callable[[FeedState], None]


class Orchestrator:
    """Coordinates loading and formatting of the earthquake feed.

    At most one load is outstanding. Starting a new load supersedes the
    previous one: it is cancelled if it has not started yet, and its
    result is discarded otherwise. Every load that is not superseded
    publishes exactly one terminal state.
    """

    def __init__(
        self,
        config: Config,
        usgs_client: USGSClient | None = None,
        connectivity_check: Callable[[], bool] | None = None,
        listener: FeedListener | None = None,
        executor: ThreadPoolExecutor | None = None,
        opener: Callable[[str], object] | None = None,
    ) -> None:
        """Initialize orchestrator with configuration.

        Args:
            config: Application configuration
            usgs_client: USGS client (created if not provided)
            connectivity_check: Returns False when offline (probes USGS if not provided)
            listener: Called with every published FeedState
            executor: Worker pool for fetches (single worker created if not provided)
            opener: Opens a row's detail URL (webbrowser.open if not provided)
        """
        self.config = config
        self.usgs_client = usgs_client or USGSClient(
            base_url=config.base_url,
            timeout=config.timeout_seconds,
        )
        self.connectivity_check = connectivity_check or (
            lambda: has_connectivity(self.config.base_url)
        )
        self.listener = listener
        self.opener = opener or webbrowser.open
        self._executor = executor or ThreadPoolExecutor(
            max_workers=1,
            thread_name_prefix="quakefeed-loader",
        )
        self._lock = threading.RLock()
        self._generation = 0
        self._future: Future | None = None
        self._state = FeedState(status=LoadStatus.NOT_LOADED)

    @property
    def state(self) -> FeedState:
        with self._lock:
            return self._state

    @property
    def rows(self) -> list[EarthquakeRow]:
        return list(self.state.rows)

    def _publish(self, state: FeedState) -> None:
        # Caller holds the lock so listeners see states in publish order
        self._state = state
        if self.listener is not None:
            self.listener(state)

    def _supersede_locked(self) -> int:
        """Cancel the outstanding load and start a new generation."""
        if self._future is not None and not self._future.done():
            if self._future.cancel():
                logger.info("Cancelled pending load")
            else:
                logger.info("Outstanding load will be discarded")
        self._future = None
        self._generation += 1
        return self._generation

    def _to_state(self, result: FetchResult) -> FeedState:
        if result.status is FetchStatus.FAILED:
            return FeedState(status=LoadStatus.FAILED, error=result.error)
        if result.status is FetchStatus.EMPTY:
            return FeedState(status=LoadStatus.EMPTY)

        rows = to_rows(result.earthquakes, self.config.tz)
        return FeedState(status=LoadStatus.LOADED, rows=rows)

    def _run(self, generation: int, query: QueryFilter) -> FeedState:
        """Check connectivity, then fetch and format on the worker thread."""
        try:
            if not self.connectivity_check():
                logger.warning("No connectivity, not fetching earthquakes")
                state = FeedState(status=LoadStatus.NO_CONNECTION)
            else:
                state = self._to_state(self.usgs_client.fetch_earthquakes(query))
        except Exception as e:
            logger.exception("Unexpected error while loading earthquakes")
            state = FeedState(status=LoadStatus.FAILED, error=str(e))

        with self._lock:
            if generation != self._generation:
                logger.info("Discarding result of superseded load %d", generation)
                return state

            logger.info(
                "Load %d finished: %s (%d rows)",
                generation,
                state.status.value,
                len(state.rows),
            )
            self._publish(state)

        return state

    def load(self) -> Future:
        """Start loading the feed.

        Publishes LOADING right away. The worker checks connectivity
        before fetching; without it, NO_CONNECTION is published and no
        request is made.

        Returns:
            Future resolving to the terminal FeedState of this load
        """
        with self._lock:
            generation = self._supersede_locked()
            self._publish(FeedState(status=LoadStatus.LOADING))
            logger.info("Starting load %d", generation)
            self._future = self._executor.submit(
                self._run,
                generation,
                self.config.query,
            )
            return self._future

    def retry(self) -> Future:
        """User-initiated retry after a failure or missing connection."""
        return self.load()

    def restart(self) -> Future:
        """Clear the current rows and reload, superseding any outstanding load."""
        logger.info("Restarting load")
        return self.load()

    def on_setting_changed(self, key: str, value: str) -> Future | None:
        """Apply a changed setting, reloading if it affects the query.

        Args:
            key: Setting name (order_by, min_magnitude, max_magnitude,
                 start_time or end_time)
            value: New value

        Returns:
            Future of the new load, or None if nothing needed reloading
        """
        if not is_query_setting(key):
            logger.debug("Ignoring change to non-query setting %s", key)
            return None

        query = with_query_setting(self.config.query, key, value)
        if query == self.config.query:
            return None

        logger.info("Setting %s changed to %s", key, value)
        self.config.query = query
        return self.restart()

    def select(self, index: int) -> str:
        """Open the detail page of the row at index.

        Returns:
            The opened URL

        Raises:
            IndexError: If there is no row at index
        """
        url = self.state.rows[index].url
        logger.info("Opening %s", url)
        self.opener(url)
        return url

    def shutdown(self, wait: bool = True) -> None:
        """Cancel any pending load and stop the worker thread."""
        with self._lock:
            self._supersede_locked()
        self._executor.shutdown(wait=wait)
