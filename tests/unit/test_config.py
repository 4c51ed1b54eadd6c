"""Unit tests for configuration and index construction from config."""

from pathlib import Path

from feed_index.config import Config, get_config, reset_config
from feed_index.index import PackageIndexFile, TimingObserver
from feed_index.storage import LocalFeedFile


def test_defaults():
    config = Config()

    assert config.storage.base_path == Path("./feed")
    assert config.storage.index_file_name == "packageindex.json"
    assert config.index.persist_when_empty is False
    assert config.index_path == Path("./feed") / "packageindex.json"


def test_environment_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("STORAGE_BASE_PATH", str(tmp_path))
    monkeypatch.setenv("INDEX_PERSIST_WHEN_EMPTY", "true")

    config = Config()

    assert config.storage.base_path == tmp_path
    assert config.index.persist_when_empty is True


def test_get_config_is_cached():
    assert get_config() is get_config()

    first = get_config()
    reset_config()

    assert get_config() is not first


def test_index_from_config(tmp_path):
    config = Config()
    config.storage.base_path = tmp_path
    config.index.persist_when_empty = True
    config.index.slow_write_threshold = 0.5

    index = PackageIndexFile.from_config(config)

    assert isinstance(index.file, LocalFeedFile)
    assert index.file.path == tmp_path / "packageindex.json"
    assert index.persist_when_empty is True
    assert len(index.observers) == 1
    assert isinstance(index.observers[0], TimingObserver)
    assert index.observers[0].slow_threshold == 0.5


def test_index_from_config_custom_observers(tmp_path):
    config = Config()
    config.storage.base_path = tmp_path

    index = PackageIndexFile.from_config(config, observers=[])

    assert index.observers == []
