# ==============================================
# Tests for configuration loading
# ==============================================

import pytest

from datatransform import config as config_module
from datatransform.config import get_config, reset_config


@pytest.fixture(autouse=True)
def fresh_config(monkeypatch):
    # keep a developer's .env out of the way
    monkeypatch.setattr(config_module, "load_dotenv", lambda **kwargs: False)
    for name in (
        "INGEST_MAX_CONCURRENT_READS", "INGEST_ENCODING", "EXPORT_DEFAULT_FORMAT",
        "EXPORT_JSON_INDENT", "EXPORT_CSV_BOM", "EXPORT_DEDUPLICATE_NAMES",
        "EXPORT_OUTPUT_DIR", "CLEAR_AFTER_TRANSFORM", "LOG_LEVEL", "LOG_DIR",
    ):
        monkeypatch.delenv(name, raising=False)
    reset_config()
    yield
    reset_config()


class TestGetConfig:
    def test_defaults(self):
        config = get_config()
        assert config.ingest.max_concurrent_reads == 0
        assert config.ingest.encoding == "utf-8-sig"
        assert config.export.default_format == "json"
        assert config.export.json_indent == 2
        assert config.export.csv_bom is True
        assert config.export.deduplicate_names is False
        assert config.clear_after_transform is True
        assert config.log_level == "INFO"

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("INGEST_MAX_CONCURRENT_READS", "4")
        monkeypatch.setenv("EXPORT_DEFAULT_FORMAT", "CSV")
        monkeypatch.setenv("EXPORT_CSV_BOM", "false")
        monkeypatch.setenv("EXPORT_DEDUPLICATE_NAMES", "yes")
        monkeypatch.setenv("CLEAR_AFTER_TRANSFORM", "0")
        monkeypatch.setenv("LOG_LEVEL", "debug")

        config = get_config()
        assert config.ingest.max_concurrent_reads == 4
        assert config.export.default_format == "csv"
        assert config.export.csv_bom is False
        assert config.export.deduplicate_names is True
        assert config.clear_after_transform is False
        assert config.log_level == "DEBUG"

    def test_singleton(self, monkeypatch):
        first = get_config()
        monkeypatch.setenv("EXPORT_JSON_INDENT", "4")
        assert get_config() is first
        reset_config()
        assert get_config().export.json_indent == 4
