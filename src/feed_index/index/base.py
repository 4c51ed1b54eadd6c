"""
Shared load/save behavior for JSON index files.
"""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import Any

from feed_index.index.hooks import PersistObserver
from feed_index.storage import FeedFile

logger = logging.getLogger(__name__)


class IndexFileBase(ABC):
    """
    Base class for index documents stored as a single JSON feed file.
    """

    def __init__(
        self,
        feed_file: FeedFile,
        persist_when_empty: bool = False,
        observers: Iterable[PersistObserver] = (),
    ):
        """
        Args:
            feed_file: Storage for the document
            persist_when_empty: Write the document even when it holds nothing.
                When False an empty document is deleted instead.
            observers: Notified around every persist step
        """
        self.file = feed_file
        self.persist_when_empty = persist_when_empty
        self.observers = list(observers)

    @abstractmethod
    def _get_json_template(self) -> dict[str, Any]:
        """Document returned when the file does not exist yet."""

    @abstractmethod
    async def is_empty(self) -> bool:
        """True if the persisted document holds no entries."""

    async def get_json_or_template(self) -> Any:
        """Fetch the persisted document, or the template if it does not exist."""
        if await self.file.exists():
            return await self.file.fetch_json()

        logger.debug("%s does not exist, using template", self.file.name)
        return self._get_json_template()

    async def save(self, json: dict[str, Any], is_empty: bool) -> None:
        """
        Persist the document, honoring the persist-when-empty policy.

        Args:
            json: Document to write
            is_empty: Whether the document holds no entries
        """
        for observer in self.observers:
            observer.before_persist(self.file.name, is_empty)

        start = time.perf_counter()
        if is_empty and not self.persist_when_empty:
            if await self.file.exists():
                logger.info("Deleting empty index %s", self.file.name)
                await self.file.delete()
        else:
            logger.info("Writing index %s", self.file.name)
            await self.file.write_json(json)
        elapsed = time.perf_counter() - start

        for observer in self.observers:
            observer.after_persist(self.file.name, is_empty, elapsed)
