"""Shared page view-state behaviour."""

import logging
from typing import Callable, Optional, TypeVar

from farmledger.domain.errors import StoreError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class PageView:
    """Base for page view-state objects.

    A page owns its snapshot of fetched rows; nothing is shared between
    pages. Every successful mutation is followed by a full refetch.
    """

    title = ""

    def __init__(self):
        self.loading = False
        self.loaded = False
        self.error: Optional[str] = None

    def load(self) -> None:
        """Fetch everything the page shows (the on-mount fetch)."""
        self.loading = True
        try:
            self.error = None
            self._fetch()
            self.loaded = True
        except StoreError as e:
            logger.warning("%s: could not load data: %s", self.title, e)
            self.error = str(e)
        finally:
            self.loading = False

    def refresh(self) -> None:
        self.load()

    def _fetch(self) -> None:
        raise NotImplementedError

    def _mutate(self, action: Callable[[], T]) -> T:
        """Run a write, then refetch. Store failures are logged and re-raised."""
        try:
            result = action()
        except StoreError as e:
            logger.warning("%s: write failed: %s", self.title, e)
            self.error = str(e)
            raise
        self.refresh()
        return result
