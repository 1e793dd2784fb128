"""Environment configuration unit tests."""

import pytest

from supplr.config import EngineConfig
from supplr.models.inventory import Settings

ENV_VARS = [
    "SUPPLR_EXPIRATION_WARNING_DAYS",
    "SUPPLR_LOW_STOCK_THRESHOLD",
    "SUPPLR_WASTE_WINDOW_DAYS",
    "SUPPLR_DEMO_EMAIL",
    "SUPPLR_APP_URL",
    "SUPPLR_REPORT_BUCKET",
    "AWS_DEFAULT_REGION",
]


@pytest.fixture
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestEngineConfig:
    def test_defaults(self, clean_env):
        config = EngineConfig.from_env()
        assert config.expiration_warning_days == 30
        assert config.low_stock_threshold == 5
        assert config.waste_window_days == 30
        assert config.region_name == "us-east-1"

    def test_reads_environment(self, clean_env):
        clean_env.setenv("SUPPLR_EXPIRATION_WARNING_DAYS", "14")
        clean_env.setenv("SUPPLR_REPORT_BUCKET", "supplr-reports")
        clean_env.setenv("AWS_DEFAULT_REGION", "us-west-2")
        config = EngineConfig.from_env()
        assert config.expiration_warning_days == 14
        assert config.report_bucket == "supplr-reports"
        assert config.region_name == "us-west-2"

    def test_blank_value_uses_default(self, clean_env):
        clean_env.setenv("SUPPLR_LOW_STOCK_THRESHOLD", " ")
        assert EngineConfig.from_env().low_stock_threshold == 5

    def test_malformed_integer_names_variable(self, clean_env):
        clean_env.setenv("SUPPLR_WASTE_WINDOW_DAYS", "a month")
        with pytest.raises(ValueError, match="SUPPLR_WASTE_WINDOW_DAYS"):
            EngineConfig.from_env()

    def test_default_settings(self):
        config = EngineConfig(expiration_warning_days=21, low_stock_threshold=8)
        assert config.default_settings() == Settings(expiration_warning_days=21, low_stock_threshold=8)
