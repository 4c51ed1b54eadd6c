"""Shared fixtures for feed index tests."""

import json

import pytest

from feed_index.config import reset_config
from feed_index.index import PackageIndexFile, PersistObserver
from feed_index.storage import LocalFeedFile


class CountingObserver(PersistObserver):
    """Counts persist steps for assertions on write gating."""

    def __init__(self):
        self.writes = 0
        self.empty_flags = []

    def after_persist(self, name, is_empty, elapsed):
        self.writes += 1
        self.empty_flags.append(is_empty)


@pytest.fixture(autouse=True)
def fresh_config(monkeypatch):
    """Keep tests independent of the environment and the global config."""
    for var in ("STORAGE_BASE_PATH", "STORAGE_INDEX_FILE_NAME", "INDEX_PERSIST_WHEN_EMPTY"):
        monkeypatch.delenv(var, raising=False)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def index_path(tmp_path):
    return tmp_path / "feed" / "packageindex.json"


@pytest.fixture
def observer():
    return CountingObserver()


@pytest.fixture
def index_file(index_path, observer):
    return PackageIndexFile(LocalFeedFile(index_path), observers=[observer])


@pytest.fixture
def write_document(index_path):
    """Write a raw JSON document to the index path."""

    def _write(document):
        index_path.parent.mkdir(parents=True, exist_ok=True)
        index_path.write_text(json.dumps(document), encoding="utf-8")
        return index_path

    return _write
