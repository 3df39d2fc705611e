# morse/scheduler.py
"""
Morse string -> timeline of tone transitions (no audio, no clock).

  schedule(".-", 0.1) -> (0.0, on) (0.1, off) (0.2, on) (0.5, off)

Timing 1:3:1:3:7 (dot : dash : intra-gap : char-gap : word-gap). Every symbol
leaves a pending 1u silence; a char/word gap stretches that silence to 3u/7u
(the larger one wins, they never add up). Trailing silence emits nothing, so
the last timestamp is the playback length.
"""
import re
from typing import Iterator, NamedTuple

from morse.alphabet import (
    SYMBOL_UNITS, INTRA_GAP_UNITS, CHAR_GAP_UNITS, WORD_GAP_UNITS,
)

_TOKENS = re.compile(r"[.\-]|/|\s+")


class ToneEvent(NamedTuple):
    time: float
    tone_on: bool


def tokens(morse: str):
    """Yield ".", "-", "char" or "word"; anything else is ignored."""
    for m in _TOKENS.finditer(morse or ""):
        tok = m.group()
        if tok in SYMBOL_UNITS:
            yield tok
        elif tok == "/" or len(tok) >= 3:
            yield "word"
        else:
            yield "char"


def _check_unit(unit):
    if not unit > 0:
        raise ValueError(f"unit must be > 0, got {unit!r}")


def _walk(morse: str, unit: float):
    t = 0.0
    pending = 0.0
    for tok in tokens(morse):
        if tok == "char":
            pending = max(pending, CHAR_GAP_UNITS * unit)
        elif tok == "word":
            pending = max(pending, WORD_GAP_UNITS * unit)
        else:
            t += pending
            yield ToneEvent(t, True)
            t += SYMBOL_UNITS[tok] * unit
            yield ToneEvent(t, False)
            pending = INTRA_GAP_UNITS * unit
    return t, pending


def schedule(morse: str, unit: float) -> Iterator[ToneEvent]:
    """Lazy; call again for a fresh identical sequence."""
    _check_unit(unit)
    return _walk(morse, unit)


def total_duration(morse: str, unit: float) -> float:
    """
    Last event time; for gap-only input the silence the gaps stand for.
    Zero only for input with neither tones nor gaps.
    """
    _check_unit(unit)
    walker = _walk(morse, unit)
    while True:
        try:
            next(walker)
        except StopIteration as stop:
            end, trailing = stop.value
            return end if end > 0 else trailing
