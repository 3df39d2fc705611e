import pytest

from morse.config import PlaybackConfig


def test_defaults():
    cfg = PlaybackConfig()
    assert cfg.unit == 0.1 and cfg.tone_hz == 600.0 and cfg.volume == 0.5


def test_from_wpm():
    cfg = PlaybackConfig.from_wpm(20, tone_hz=700)
    assert cfg.unit == pytest.approx(0.06)
    assert cfg.wpm == pytest.approx(20)
    assert cfg.tone_hz == 700


def test_values_are_clamped():
    cfg = PlaybackConfig(unit=5.0, tone_hz=50, volume=3)
    assert (cfg.unit, cfg.tone_hz, cfg.volume) == (1.2, 200.0, 1.0)
    assert PlaybackConfig(unit=0.001).unit == 0.02


def test_with_():
    cfg = PlaybackConfig().with_(volume=0.2)
    assert cfg.volume == 0.2 and cfg.unit == 0.1
