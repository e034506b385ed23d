import pytest
from pydantic import ValidationError

from halal_deal.adapters.config import AppConfig


def test_defaults(monkeypatch):
    monkeypatch.delenv("HALAL_DEAL_SAVINGS_ACCOUNT_RETURN", raising=False)
    monkeypatch.delenv("HALAL_DEAL_ANALYTICS_PATH", raising=False)

    cfg = AppConfig()

    assert cfg.SAVINGS_ACCOUNT_RETURN == 2.0
    assert cfg.ANALYTICS_PATH is None
    assert cfg.CURRENCY_SYMBOL == "£"


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("HALAL_DEAL_SAVINGS_ACCOUNT_RETURN", "3.5%")
    monkeypatch.setenv("HALAL_DEAL_ANALYTICS_PATH", "/tmp/analytics.json")
    monkeypatch.setenv("halal_deal_log_level", "DEBUG")

    cfg = AppConfig()

    assert cfg.SAVINGS_ACCOUNT_RETURN == 3.5
    assert cfg.ANALYTICS_PATH == "/tmp/analytics.json"
    assert cfg.LOG_LEVEL == "DEBUG"


def test_blank_analytics_path_means_memory(monkeypatch):
    monkeypatch.setenv("HALAL_DEAL_ANALYTICS_PATH", "  ")

    assert AppConfig().ANALYTICS_PATH is None


@pytest.mark.parametrize("value", ["-1", "lots"])
def test_bad_savings_rate(monkeypatch, value):
    monkeypatch.setenv("HALAL_DEAL_SAVINGS_ACCOUNT_RETURN", value)

    with pytest.raises(ValidationError):
        AppConfig()
