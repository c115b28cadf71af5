"""Tests for feature flags."""

import pytest

from transformer.config import settings
from transformer.config.settings import get_all_flags, is_enabled, set_flag


def test_defaults_enabled():
    assert get_all_flags() == {
        "resolve_operation_links": True,
        "stop_on_error": True,
        "strict_parameters": True,
    }


def test_set_flag():
    set_flag("stop_on_error", False)
    assert is_enabled("stop_on_error") is False


def test_get_all_flags_is_a_copy():
    flags = get_all_flags()
    flags["stop_on_error"] = False
    assert is_enabled("stop_on_error") is True


def test_unknown_flag():
    with pytest.raises(KeyError, match="Unknown feature flag"):
        is_enabled("time_travel")
    with pytest.raises(KeyError):
        set_flag("time_travel", True)


@pytest.mark.parametrize("raw, expected", [
    ("true", True),
    ("TRUE", True),
    ("false", False),
    ("yes", False),
])
def test_env_flag(monkeypatch, raw, expected):
    monkeypatch.setenv("TRANSFORMER_TEST_FLAG", raw)
    assert settings._env_flag("TRANSFORMER_TEST_FLAG", "true") is expected


def test_env_flag_default(monkeypatch):
    monkeypatch.delenv("TRANSFORMER_TEST_FLAG", raising=False)
    assert settings._env_flag("TRANSFORMER_TEST_FLAG", "false") is False
