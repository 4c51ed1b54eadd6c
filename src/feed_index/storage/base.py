"""
Storage abstraction for feed files.
"""

from abc import ABC, abstractmethod
from typing import Any


class FeedFile(ABC):
    """
    A single JSON file in a feed.

    All methods are coroutines; they are the only points where index
    operations suspend or observe cancellation.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Display name of the file, used in logs and error messages."""
        pass

    @abstractmethod
    async def exists(self) -> bool:
        """Return True if the file is present in the feed."""
        pass

    @abstractmethod
    async def fetch_json(self) -> Any:
        """
        Read and decode the file.

        Raises:
            FileNotFoundError: If the file does not exist
            IndexFormatError: If the contents are not valid JSON
        """
        pass

    @abstractmethod
    async def write_json(self, payload: Any) -> None:
        """Replace the file contents with the encoded payload."""
        pass

    @abstractmethod
    async def delete(self) -> None:
        """Remove the file if present."""
        pass
