"""A subscribed RSS channel: fetch state, metadata and its items."""

import logging
from collections.abc import Iterator
from datetime import datetime

from rsschannel.dates import sort_key
from rsschannel.feed_parser import parse_document
from rsschannel.hashing import source_hash
from rsschannel.models import Item
from rsschannel.xml_stream import XmlError

logger = logging.getLogger(__name__)


class Channel:
    """One feed source and the items ingested from it.

    The fetch cycle is driven from outside: the caller checks ``can_fetch()``,
    calls ``start_fetching()``, and the transport reports back with
    ``fetching_succeeded()`` or ``fetching_failed()``. ``parse()`` then turns
    the retained bytes into items. Bytes identical to the last parsed source
    are dropped on arrival, so ``parse()`` has nothing to do for them.

    All methods must be called from a single thread.
    """

    def __init__(self, feed_link: str = ""):
        self.feed_link = feed_link
        self.link = ""
        self.title = ""
        self.description = ""
        self.language = ""
        self.copyright = ""
        self.editor_email = ""
        self.webmaster_email = ""
        self.categories: list[str] = []
        self.publish_date: datetime | None = None
        self.last_build_date: datetime | None = None
        self.skip_hours = ""
        self.skip_days = ""
        self.image: str | None = None

        self._is_fetching = False
        self._is_failed = False
        self._last_source_hash = b""
        self._source = b""
        self._last_parse_error: XmlError | None = None
        self._items: list[Item] = []
        self._items_by_key: dict[str, Item] = {}

    def __repr__(self) -> str:
        return f"Channel({self.feed_link!r}, items={len(self._items)})"

    # --- Fetch state ---

    @property
    def is_fetching(self) -> bool:
        return self._is_fetching

    @property
    def is_failed(self) -> bool:
        return self._is_failed

    @property
    def last_source_hash(self) -> bytes:
        """Digest of the last parsed source, empty before the first parse."""
        return self._last_source_hash

    @property
    def has_pending_source(self) -> bool:
        """True while fetched bytes are waiting for ``parse()``."""
        return bool(self._source)

    @property
    def last_parse_error(self) -> XmlError | None:
        """Reader error from the most recent parse attempt, if any."""
        return self._last_parse_error

    def can_fetch(self) -> bool:
        return not self._is_fetching

    def start_fetching(self) -> None:
        self._is_fetching = True

    def fetching_succeeded(self, source: bytes) -> None:
        """Record a completed fetch, keeping the bytes only if they changed."""
        logger.debug("Fetching succeeded for %s", self.feed_link)

        if source_hash(source) != self._last_source_hash:
            self._source = source
        else:
            logger.debug("Source of %s is unchanged", self.feed_link)
            self._source = b""

        self._is_fetching = False
        self._is_failed = False

    def fetching_failed(self) -> None:
        logger.debug("Fetching failed for %s", self.feed_link)
        self._source = b""
        self._is_fetching = False
        self._is_failed = True

    # --- Parsing ---

    def parse(self) -> bool:
        """Parse the retained source into channel metadata and items.

        Returns:
            False if there was nothing to parse, True once a parse was
            attempted, whether or not the document was well formed.
        """
        if not self._source:
            return False

        logger.debug("Parsing %s", self.feed_link)
        self.categories = []
        try:
            self._last_parse_error = parse_document(self, self._source)
        finally:
            # The source is consumed even if parsing blew up
            self._last_source_hash = source_hash(self._source)
            self._source = b""
            self.sort_items(self._items)
        return True

    # --- Items ---

    @staticmethod
    def sort_items(items: list[Item]) -> None:
        """Sort items in place, newest first; ties keep their order."""
        items.sort(key=lambda item: sort_key(item.published_at), reverse=True)

    def merge(self, item: Item) -> None:
        """Add a parsed item to the channel.

        An item with the same guid (or link, without a guid) as one already
        held updates that item in place, so its read flag and any outside
        references to it survive a refetch. Items without either are
        appended as they are.
        """
        key = item.key
        if key is not None:
            existing = self._items_by_key.get(key)
            if existing is not None:
                existing.update_from(item)
                return
            self._items_by_key[key] = item
        self._items.append(item)

    def count(self) -> int:
        return len(self._items)

    def count_unread(self) -> int:
        return sum(1 for item in self._items if not item.is_read)

    def item_at(self, index: int) -> Item:
        """Return the item at ``index``; negative indexes are not allowed."""
        if index < 0 or index >= len(self._items):
            raise IndexError(f"Unable to get item at wrong index {index}")
        return self._items[index]

    def all_items(self) -> tuple[Item, ...]:
        return tuple(self._items)

    def all_unread_items(self) -> list[Item]:
        return [item for item in self._items if not item.is_read]

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Item]:
        return iter(self._items)
