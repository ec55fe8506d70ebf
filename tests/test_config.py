from decimal import Decimal

from config import get_settings_module
from src.toil_system.toil_system.core.policy import ToilPolicy


def test_settings_module_by_env(monkeypatch):
    monkeypatch.setenv("APP_ENV", "prod")
    assert get_settings_module() == "config.production"
    monkeypatch.setenv("APP_ENV", "Testing")
    assert get_settings_module() == "config.testing"
    monkeypatch.delenv("APP_ENV")
    assert get_settings_module() == "config.development"


def test_policy_from_settings_parses_env_strings():
    policy = ToilPolicy.from_settings(
        {
            "standard_hours": "7.5",
            "expiry_days": "30",
            "weekend_days": "4, 5",
            "require_weekend_approval": True,
        }
    )

    assert policy.standard_hours == Decimal("7.5")
    assert policy.expiry_days == 30
    assert policy.weekend_days == (4, 5)
    assert policy.require_weekend_approval is True
    assert policy.warning_horizon_days == 7


def test_policy_defaults():
    assert ToilPolicy.from_settings(None) == ToilPolicy()
