from __future__ import annotations

import pytest

from httop import config


@pytest.mark.parametrize(
    "raw, expected",
    [
        (None, 100),
        ("", 100),
        ("abc", 100),
        ("250", 250),
        ("1", 1),
        ("0", 100),
        ("-1", 100),
    ],
)
def test_env_int_falls_back_below_minimum(monkeypatch: pytest.MonkeyPatch, raw, expected: int) -> None:
    if raw is None:
        monkeypatch.delenv("HTTOP_TEST_VALUE", raising=False)
    else:
        monkeypatch.setenv("HTTOP_TEST_VALUE", raw)
    assert config._env_int("HTTOP_TEST_VALUE", 100, minimum=1) == expected


def test_defaults_are_in_range() -> None:
    assert config.TICK_MS >= 1
    assert config.RECENT_MAX >= 1
    assert config.DISPLAY_LIMIT >= config.LIMIT_FLOOR
