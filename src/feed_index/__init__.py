"""
feed-index: persisted index of the packages published to a static feed.
"""

__version__ = "0.1.0"
