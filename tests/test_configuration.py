"""Mini README: Tests for environment-driven settings."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from budgetbuddy.configuration import BudgetBuddySettings, get_settings


def test_environment_overrides_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("BUDGETBUDDY_DEFAULT_MONTHLY_BUDGET", "1200")
    monkeypatch.setenv("BUDGETBUDDY_LOG_LEVEL", "debug")

    settings = BudgetBuddySettings()

    assert settings.default_monthly_budget == pytest.approx(1200.0)
    assert settings.log_level == "DEBUG"


def test_unknown_log_level_is_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("BUDGETBUDDY_LOG_LEVEL", "chatty")

    with pytest.raises(ValidationError):
        BudgetBuddySettings()


def test_get_settings_is_cached() -> None:
    assert get_settings() is get_settings()
