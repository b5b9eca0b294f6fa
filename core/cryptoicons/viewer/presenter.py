"""View presenter -- owns the query state and derives what the shell renders.

The presenter is the single owner of mutable view state.  Every command
updates :class:`QueryState`, re-runs :func:`~cryptoicons.catalog.query.query`
explicitly, and notifies subscribers with a fresh :class:`ViewState`
snapshot.  All calls are expected on one thread (the UI event loop).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Literal, Sequence

from loguru import logger

from ..catalog.query import FilteredView, clamp_page, query
from ..models.icon import Catalog, IconRecord
from .debounce import DebounceController, Scheduler

LoadStatus = Literal["loading", "ready", "error"]

DEFAULT_PAGE_SIZE_OPTIONS: tuple[int, ...] = (12, 24, 48, 96)
DEFAULT_PAGE_SIZE = 24
DEFAULT_DEBOUNCE_SECONDS = 0.3


@dataclass
class QueryState:
    """User-controlled inputs to the query engine."""

    raw_query: str = ""
    effective_query: str = ""
    page_index: int = 1
    page_size: int = DEFAULT_PAGE_SIZE


@dataclass(frozen=True)
class ViewState:
    """Read-only snapshot handed to the rendering shell."""

    status: LoadStatus
    error: str | None
    page_items: tuple[IconRecord, ...]
    total_icons: int
    total_matches: int
    total_pages: int
    page_index: int
    page_size: int
    page_size_options: tuple[int, ...]
    raw_query: str
    effective_query: str
    is_filtered: bool
    has_previous: bool
    has_next: bool
    results_summary: str | None = None


def results_summary(query_text: str, total_matches: int) -> str | None:
    """Describe the current search results, or ``None`` when unfiltered."""
    text = query_text.strip()
    if not text:
        return None
    if total_matches == 0:
        return f'No icons found matching "{text}"'
    plural = "" if total_matches == 1 else "s"
    return f'Found {total_matches} icon{plural} matching "{text}"'


class ViewPresenter:
    """Derive paginated, filtered catalog views from user commands.

    Parameters
    ----------
    scheduler:
        Timer source for the search debounce (see
        :class:`~cryptoicons.viewer.debounce.Scheduler`).
    debounce_delay:
        Quiescence window in seconds before typed text is applied.
    page_size_options:
        Allowed page sizes; :meth:`set_page_size` rejects anything else.
    page_size:
        Initial page size, must be one of *page_size_options*.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        debounce_delay: float = DEFAULT_DEBOUNCE_SECONDS,
        page_size_options: Sequence[int] = DEFAULT_PAGE_SIZE_OPTIONS,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> None:
        options = tuple(page_size_options)
        if not options or any(n < 1 for n in options):
            raise ValueError(f"Invalid page size options: {options!r}")
        if page_size not in options:
            raise ValueError(f"Page size {page_size} is not one of {options!r}")

        self._page_size_options = options
        self._state = QueryState(page_size=page_size)
        self._catalog = Catalog()
        self._status: LoadStatus = "loading"
        self._error: str | None = None
        self._listeners: list[Callable[[ViewState], None]] = []
        self._debounce: DebounceController[str] = DebounceController(
            scheduler, debounce_delay, self._apply_effective_query
        )
        self._view: FilteredView = self._run_query()

    # ------------------------------------------------------------------
    # Read-only state
    # ------------------------------------------------------------------

    @property
    def query_state(self) -> QueryState:
        """A copy of the current query inputs."""
        return QueryState(**vars(self._state))

    @property
    def catalog(self) -> Catalog:
        return self._catalog

    @property
    def view(self) -> FilteredView:
        return self._view

    @property
    def state(self) -> ViewState:
        view = self._view
        return ViewState(
            status=self._status,
            error=self._error,
            page_items=view.page_items,
            total_icons=len(self._catalog),
            total_matches=view.total_matches,
            total_pages=view.total_pages,
            page_index=self._state.page_index,
            page_size=self._state.page_size,
            page_size_options=self._page_size_options,
            raw_query=self._state.raw_query,
            effective_query=self._state.effective_query,
            is_filtered=self._state.raw_query.strip() != "",
            has_previous=self._state.page_index > 1,
            has_next=self._state.page_index < view.total_pages,
            results_summary=results_summary(
                self._state.effective_query, view.total_matches
            ),
        )

    def get_icon(self, icon_id: str) -> IconRecord | None:
        return self._catalog.get(icon_id)

    def subscribe(self, listener: Callable[[ViewState], None]) -> Callable[[], None]:
        """Call *listener* with a new :class:`ViewState` after each change.

        Returns a function that removes the listener again.
        """
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            try:
                self._listeners.remove(listener)
            except ValueError:
                pass

        return _unsubscribe

    # ------------------------------------------------------------------
    # Catalog lifecycle
    # ------------------------------------------------------------------

    def begin_loading(self) -> None:
        self._status = "loading"
        self._error = None
        self._notify()

    def set_catalog(self, catalog: Catalog) -> None:
        """Install a freshly built catalog and go back to page 1."""
        self._catalog = catalog
        self._status = "ready"
        self._error = None
        self._state.page_index = 1
        self._refresh()
        logger.debug(f"Presenter received catalog of {len(catalog)} icon(s)")

    def set_load_error(self, message: str) -> None:
        """Record a terminal load failure for this session."""
        self._status = "error"
        self._error = message
        logger.error(f"Icon catalog failed to load: {message}")
        self._notify()

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def set_query(self, text: str) -> None:
        """Echo *text* immediately and apply it after the debounce window."""
        self._state.raw_query = text
        self._notify()
        self._debounce.push(text)

    def apply_query_now(self) -> None:
        """Skip the remaining debounce delay (e.g. Enter in the search box)."""
        self._debounce.flush()

    def set_page_size(self, page_size: int) -> None:
        if page_size not in self._page_size_options:
            raise ValueError(
                f"Page size {page_size} is not one of {self._page_size_options!r}"
            )
        self._state.page_size = page_size
        self._state.page_index = 1
        self._refresh()

    def go_to_page(self, page_index: int) -> None:
        """Jump to *page_index*, clamped into ``[1, total_pages]``."""
        self._state.page_index = clamp_page(page_index, self._view.total_pages)
        self._refresh()

    def next_page(self) -> None:
        self.go_to_page(self._state.page_index + 1)

    def prev_page(self) -> None:
        self.go_to_page(self._state.page_index - 1)

    def close(self) -> None:
        """Tear down: cancel the pending debounce and drop subscribers."""
        self._debounce.close()
        self._listeners.clear()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _apply_effective_query(self, text: str) -> None:
        self._state.effective_query = text
        self._state.page_index = 1
        self._refresh()

    def _run_query(self) -> FilteredView:
        return query(
            self._catalog,
            self._state.effective_query,
            self._state.page_index,
            self._state.page_size,
        )

    def _refresh(self) -> None:
        self._view = self._run_query()
        self._state.page_index = self._view.page_index
        self._notify()

    def _notify(self) -> None:
        if not self._listeners:
            return
        snapshot = self.state
        for listener in list(self._listeners):
            listener(snapshot)
