import pytest

from caterer.config import Config
from caterer.errors import ConfigError


def test_defaults(monkeypatch):
    for name in ("CATERER_DB", "CATERER_WORKERS", "CATERER_LIMIT", "CATERER_DATA_DIR"):
        monkeypatch.delenv(name, raising=False)
    assert Config.from_env() == Config()


def test_from_env(monkeypatch):
    monkeypatch.setenv("CATERER_DB", "/tmp/other.db")
    monkeypatch.setenv("CATERER_WORKERS", "12")
    monkeypatch.setenv("CATERER_LIMIT", "25")
    monkeypatch.setenv("CATERER_DATA_DIR", "/data")
    assert Config.from_env() == Config(
        db_path="/tmp/other.db", workers=12, limit=25, data_dir="/data"
    )


@pytest.mark.parametrize("value", ["many", "0"])
def test_invalid_workers(monkeypatch, value):
    monkeypatch.setenv("CATERER_WORKERS", value)
    with pytest.raises(ConfigError):
        Config.from_env()
