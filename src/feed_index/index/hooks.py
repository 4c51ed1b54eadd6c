"""
Observers invoked around index document writes.
"""

import logging

logger = logging.getLogger(__name__)


class PersistObserver:
    """
    Receives notifications around each persist step of an index file.

    Subclasses override the callbacks they care about.
    """

    def before_persist(self, name: str, is_empty: bool) -> None:
        pass

    def after_persist(self, name: str, is_empty: bool, elapsed: float) -> None:
        pass


class TimingObserver(PersistObserver):
    """Logs how long each index write took."""

    def __init__(self, slow_threshold: float = 1.0):
        """
        Args:
            slow_threshold: Seconds after which a write is logged as a warning
        """
        self.slow_threshold = slow_threshold

    def after_persist(self, name: str, is_empty: bool, elapsed: float) -> None:
        if elapsed >= self.slow_threshold:
            logger.warning("Slow write of %s: %.3fs (empty=%s)", name, elapsed, is_empty)
        else:
            logger.debug("Persisted %s in %.3fs (empty=%s)", name, elapsed, is_empty)
