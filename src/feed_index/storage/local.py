"""
Local filesystem implementation of FeedFile.
"""

from __future__ import annotations

import asyncio
import json
import logging
import os
from pathlib import Path
from typing import Any

import aiofiles

from feed_index.errors import IndexFormatError
from feed_index.storage.base import FeedFile

logger = logging.getLogger(__name__)


class LocalFeedFile(FeedFile):
    """JSON feed file stored on the local disk."""

    def __init__(self, path: Path):
        """
        Args:
            path: Location of the file; parent directories are created on write
        """
        self.path = Path(path)

    @property
    def name(self) -> str:
        return str(self.path)

    async def exists(self) -> bool:
        return await asyncio.to_thread(self.path.is_file)

    async def fetch_json(self) -> Any:
        try:
            async with aiofiles.open(self.path, "r", encoding="utf-8") as f:
                text = await f.read()
        except UnicodeDecodeError as exc:
            raise IndexFormatError(f"Failed to decode {self.path} as UTF-8: {exc.reason}") from exc

        logger.debug("Read %d characters from %s", len(text), self.path)
        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            raise IndexFormatError(f"Failed to parse {self.path}: {exc.msg}") from exc

    async def write_json(self, payload: Any) -> None:
        """Write atomically through a temporary sibling file."""
        text = json.dumps(payload, indent=2, ensure_ascii=False) + "\n"

        await asyncio.to_thread(self.path.parent.mkdir, parents=True, exist_ok=True)
        temp_path = self.path.with_name(self.path.name + ".tmp")

        try:
            async with aiofiles.open(temp_path, "w", encoding="utf-8") as f:
                await f.write(text)
            await asyncio.to_thread(os.replace, temp_path, self.path)
        except BaseException:
            logger.warning("Write of %s failed, removing %s", self.path, temp_path)
            await asyncio.to_thread(temp_path.unlink, missing_ok=True)
            raise

        logger.debug("Wrote %d characters to %s", len(text), self.path)

    async def delete(self) -> None:
        await asyncio.to_thread(self.path.unlink, missing_ok=True)

    def __repr__(self) -> str:
        return f"LocalFeedFile({str(self.path)!r})"
