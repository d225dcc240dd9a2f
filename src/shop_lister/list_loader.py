"""
PaginatedListLoader module: incremental, de-duplicating loading of a paged collection

The loader owns the accumulated items of one query and drives the
fetch/merge/advance cycle. It is generic over the item type: callers supply
a coroutine that fetches one page and a function that extracts an item's
identity.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import (
    Awaitable, Callable, Generic, Hashable, List, Optional, Sequence, Set, Tuple, TypeVar
)

from shop_lister.config_loader import DEFAULT_PAGE_SIZE
from shop_lister.credential_provider import NotConfiguredError
from shop_lister.http_client import FetchError, GENERIC_ERROR_MESSAGE
from shop_lister.pagination_strategy import PageBasedPagination, PageRequest


T = TypeVar('T')

PageFetcher = Callable[[PageRequest], Awaitable[Sequence[T]]]
IdExtractor = Callable[[T], Hashable]

logger = logging.getLogger(__name__)


@dataclass
class LoaderState(Generic[T]):
    """Mutable state of one loading session (one query)"""
    session: int = 0
    filter: Optional[str] = None
    items: List[T] = field(default_factory=list)
    seen_ids: Set[Hashable] = field(default_factory=set, repr=False)
    current_page: int = 1
    loading: bool = False
    error: Optional[str] = None
    has_more: bool = True


@dataclass(frozen=True)
class LoaderSnapshot(Generic[T]):
    """Read-only view handed to the presentation layer"""
    items: Tuple[T, ...]
    loading: bool
    error: Optional[str]
    has_more: bool
    current_page: int
    filter: Optional[str]


class PaginatedListLoader(Generic[T]):
    """
    Forward-only paginated list with append-only, id-unique accumulation

    Only one request is in flight per loader. ``reset`` starts a new session;
    a response belonging to an older session (or arriving after ``close``)
    is dropped without touching state. Failures never raise out of the
    loader, they are stored as ``error`` text.
    """

    def __init__(self, fetch_page: PageFetcher, id_of: IdExtractor,
                 page_size: int = DEFAULT_PAGE_SIZE, name: str = "items"):
        if page_size < 1:
            raise ValueError(f"page_size must be >= 1, got {page_size}")
        self._fetch_page = fetch_page
        self._id_of = id_of
        self.page_size = page_size
        self.name = name
        self._sessions = 0
        self._closed = False
        self._state: LoaderState[T] = LoaderState()

    @property
    def state(self) -> LoaderSnapshot[T]:
        state = self._state
        return LoaderSnapshot(
            items=tuple(state.items),
            loading=state.loading,
            error=state.error,
            has_more=state.has_more,
            current_page=state.current_page,
            filter=state.filter
        )

    @property
    def closed(self) -> bool:
        return self._closed

    async def initialize(self) -> None:
        """Start the first session with no filter and load page 1"""
        await self.reset(None)

    async def reset(self, filter: Optional[str] = None) -> None:
        """
        Discard accumulated items and load page 1 of a (possibly new) query

        Args:
            filter: Filter value for the query; an empty string means no filter
        """
        if self._closed:
            logger.debug(f"{self.name}: reset ignored, loader is closed")
            return

        self._sessions += 1
        self._state = LoaderState(session=self._sessions, filter=filter or None)
        logger.info(f"{self.name}: new session {self._sessions} (filter={self._state.filter!r})")

        await self.trigger_fetch(1)

    async def load_more(self) -> bool:
        """
        Advance to the next page and fetch it

        Returns:
            True if a fetch was started, False when there is nothing more to load
            or a request is already in flight
        """
        state = self._state
        if self._closed or state.loading or not state.has_more:
            return False

        state.current_page += 1
        return await self.trigger_fetch(state.current_page)

    async def retry(self) -> bool:
        """
        Re-request the current page after a failure

        Returns:
            True if a fetch was started
        """
        state = self._state
        if self._closed or state.loading or state.error is None:
            return False

        return await self.trigger_fetch(state.current_page)

    async def trigger_fetch(self, for_page: int) -> bool:
        """
        Fetch one page of the current session and merge it into state

        Only ``current_page`` can be fetched, and a session whose last fetch
        ended the list is not fetched again unless that fetch failed.

        Args:
            for_page: Page number to request

        Returns:
            True if a fetch was started, False otherwise
        """
        state = self._state
        if self._closed:
            logger.debug(f"{self.name}: fetch for page {for_page} skipped, loader is closed")
            return False
        if state.loading:
            logger.debug(f"{self.name}: fetch for page {for_page} skipped, request in flight")
            return False
        if for_page != state.current_page:
            logger.debug(f"{self.name}: fetch for page {for_page} refused, current page is {state.current_page}")
            return False
        if not state.has_more and state.error is None:
            logger.debug(f"{self.name}: fetch for page {for_page} refused, end of list reached")
            return False

        session = state.session
        state.loading = True
        state.error = None

        page_request = PageRequest(page_number=for_page, page_size=self.page_size, filter=state.filter)

        try:
            page = await self._fetch_page(page_request)
        except (NotConfiguredError, FetchError) as e:
            self._apply_failure(session, str(e))
        except asyncio.CancelledError:
            if self._is_current(session):
                self._state.loading = False
            raise
        except Exception:
            logger.exception(f"{self.name}: unexpected error fetching page {for_page}")
            self._apply_failure(session, GENERIC_ERROR_MESSAGE)
        else:
            self._apply_page(session, page)

        return True

    def close(self) -> None:
        """Unmount the loader; in-flight responses will be ignored"""
        self._closed = True
        self._sessions += 1
        logger.debug(f"{self.name}: closed")

    def _is_current(self, session: int) -> bool:
        return not self._closed and session == self._state.session

    def _apply_page(self, session: int, page: Sequence[T]) -> None:
        if not self._is_current(session):
            logger.info(f"{self.name}: dropping response from superseded session {session}")
            return

        state = self._state
        added = 0
        for item in page:
            item_id = self._id_of(item)
            if item_id in state.seen_ids:
                continue
            state.seen_ids.add(item_id)
            state.items.append(item)
            added += 1

        # End of data is judged on the raw page length, not on what was new
        state.has_more = PageBasedPagination.has_more_pages(len(page), self.page_size)
        state.loading = False

        logger.info(
            f"{self.name}: page {state.current_page} returned {len(page)} items, "
            f"{added} new, {len(state.items)} total, has_more={state.has_more}"
        )

    def _apply_failure(self, session: int, message: str) -> None:
        if not self._is_current(session):
            logger.info(f"{self.name}: dropping failure from superseded session {session}: {message}")
            return

        state = self._state
        state.error = message or GENERIC_ERROR_MESSAGE
        state.loading = False
        logger.warning(f"{self.name}: page {state.current_page} failed: {state.error}")
