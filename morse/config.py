# morse/config.py
from dataclasses import dataclass, replace

UNIT_S       = 0.100     # ~12 WPM
TONE_HZ      = 600.0
VOLUME       = 0.5       # oscillator gain while the tone is on
SAMPLERATE   = 48000
ATTACK_S     = 0.003
RELEASE_S    = 0.006

UNIT_RANGE   = (0.020, 1.200)
TONE_RANGE   = (200.0, 1400.0)


def _clamp(v, lo, hi):
    return max(lo, min(hi, v))


@dataclass(frozen=True)
class PlaybackConfig:
    """Playback defaults; values are clamped, never rejected."""
    unit: float = UNIT_S
    tone_hz: float = TONE_HZ
    volume: float = VOLUME
    samplerate: int = SAMPLERATE
    attack: float = ATTACK_S
    release: float = RELEASE_S

    def __post_init__(self):
        # frozen: go through object.__setattr__
        object.__setattr__(self, "unit", _clamp(float(self.unit), *UNIT_RANGE))
        object.__setattr__(self, "tone_hz", _clamp(float(self.tone_hz), *TONE_RANGE))
        object.__setattr__(self, "volume", _clamp(float(self.volume), 0.0, 1.0))
        object.__setattr__(self, "samplerate", int(self.samplerate))

    @classmethod
    def from_wpm(cls, wpm: float, **kw) -> "PlaybackConfig":
        # PARIS = 50 units per word -> unit = 60 / (50 * wpm)
        return cls(unit=1.2 / max(1e-6, float(wpm)), **kw)

    @property
    def wpm(self) -> float:
        return 1.2 / self.unit

    def with_(self, **kw) -> "PlaybackConfig":
        return replace(self, **kw)
