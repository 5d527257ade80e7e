"""
Pagination module turning the service's cursor-paged collections into lazy lists
"""

import logging
import threading
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Tuple, TYPE_CHECKING
from urllib.parse import parse_qsl, urlsplit

from .exceptions import DeezerIndexOutOfBounds

if TYPE_CHECKING:
    from .client import DeezerClient


Cursor = Tuple[str, Dict[str, str]]


@dataclass(frozen=True)
class PageEnvelope:
    """One page of a collection as returned by the service"""
    data: List[Any] = field(default_factory=list)
    total: Optional[int] = None
    next: Optional[str] = None
    prev: Optional[str] = None

    def next_cursor(self) -> Optional[Cursor]:
        """Relative path and parameters of the next page, None on the last page"""
        return CursorPagination.parse_next_url(self.next)


class CursorPagination:
    """Cursor-based pagination where each page links to the next one by absolute URL"""

    @staticmethod
    def parse_next_url(next_url: Optional[str]) -> Optional[Cursor]:
        """
        Decompose a next-page URL into a relative path and query parameters

        Args:
            next_url: Absolute URL from the page's 'next' field

        Returns:
            Tuple of (path without leading '/', parameters), or None if there is no next page
        """
        if not next_url:
            return None
        parts = urlsplit(next_url)
        path = parts.path[1:] if parts.path.startswith('/') else parts.path
        return path, dict(parse_qsl(parts.query, keep_blank_values=True))


class SequenceState(Enum):
    """Where an iteration position stands relative to what has been fetched"""
    HAS_CACHE_REMAINING = "has_cache_remaining"
    NEEDS_NEXT_PAGE = "needs_next_page"
    EXHAUSTED = "exhausted"


class PaginatedList:
    """
    A collection fetched lazily from the service one page at a time

    Fetched items are cached in service order, so iterating again, slicing
    or indexing never requests a page twice. Pages are requested strictly in
    cursor order. Once the last page has been read the list is exhausted
    and further iteration is served from the cache alone.
    """

    def __init__(self, client: "DeezerClient", base_path: str,
                 parent: Optional[Any] = None, params: Optional[Dict[str, Any]] = None):
        self.client = client
        self.base_path = base_path
        self.parent = parent
        self.params: Dict[str, Any] = dict(params or {})

        self._elements: List[Any] = []
        self._next_path: Optional[str] = base_path
        self._next_params: Dict[str, Any] = dict(self.params)
        self._total: Optional[int] = None
        self._total_known = False
        self._lock = threading.Lock()
        self.logger = logging.getLogger(__name__)

    def __repr__(self) -> str:
        return f"<PaginatedList: {self.base_path} ({len(self._elements)} cached)>"

    def __iter__(self) -> Iterator[Any]:
        position = 0
        while True:
            state = self.state_at(position)
            if state is SequenceState.HAS_CACHE_REMAINING:
                yield self._elements[position]
                position += 1
            elif state is SequenceState.NEEDS_NEXT_PAGE:
                self._grow(position)
            else:
                return

    def __getitem__(self, key):
        if isinstance(key, slice):
            if key.step not in (None, 1):
                raise ValueError("PaginatedList slices do not support a step")
            return self.slice(key.start or 0, key.stop)
        return self.get(key)

    @property
    def exhausted(self) -> bool:
        """True once the last page has been fetched"""
        return self._next_path is None

    def state_at(self, position: int) -> SequenceState:
        """
        Classify an iteration position against the cache and cursor

        Args:
            position: Zero-based index of the next item an iterator wants

        Returns:
            The SequenceState for that position
        """
        if position < len(self._elements):
            return SequenceState.HAS_CACHE_REMAINING
        if self._next_path is not None:
            return SequenceState.NEEDS_NEXT_PAGE
        return SequenceState.EXHAUSTED

    def total(self, refresh: bool = False) -> Optional[int]:
        """
        The total number of items in the collection, as reported by the service

        Args:
            refresh: Force a fresh count even if a total is already known

        Returns:
            Total item count, or None if the service does not report one
        """
        if refresh or not self._total_known:
            params = {**self.params, 'limit': 1}
            envelope = self.client.request(
                "GET", self.base_path, paginate_list=True, parent=self.parent, params=params
            )
            self._set_total(envelope.total)
        return self._total

    def slice(self, start: int = 0, end: Optional[int] = None) -> List[Any]:
        """
        Items whose position falls in [start, end)

        Pages are fetched only as far as needed to reach end.

        Args:
            start: Zero-based index of the first item
            end: Index one past the last item, None to read to exhaustion

        Returns:
            List of items in service order
        """
        if start < 0 or (end is not None and end < 0):
            raise ValueError("PaginatedList does not support negative indices")
        if end is not None and end <= start:
            return []

        results = []
        for position, item in enumerate(self):
            if position >= start:
                results.append(item)
            if end is not None and position + 1 >= end:
                break
        return results

    def get(self, index: int) -> Any:
        """
        The item at the given position

        Raises:
            DeezerIndexOutOfBounds: If the collection has no item at index
        """
        if index < 0:
            raise DeezerIndexOutOfBounds(index)
        items = self.slice(index, index + 1)
        if not items:
            raise DeezerIndexOutOfBounds(index)
        return items[0]

    def to_list(self) -> List[Any]:
        """
        Every item of the collection, fetching all remaining pages

        Not recommended for large collections.
        """
        return list(self)

    def _grow(self, known_size: int) -> None:
        """
        Fetch the next page and append it to the cache

        Args:
            known_size: Cache size the caller observed before asking for more
        """
        with self._lock:
            if len(self._elements) > known_size or self._next_path is None:
                # Another consumer already fetched past this point
                return

            path, params = self._next_path, self._next_params
            self.logger.debug(f"Fetching page {path} params={params}")
            envelope = self.client.request(
                "GET", path, paginate_list=True, parent=self.parent, params=params
            )

            self._elements.extend(envelope.data)
            self._set_total(envelope.total)

            cursor = envelope.next_cursor()
            if cursor is None:
                self._next_path, self._next_params = None, {}
            else:
                self._next_path, self._next_params = cursor

    def _set_total(self, total: Optional[int]) -> None:
        self._total = total
        self._total_known = True
