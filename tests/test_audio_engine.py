import sys
import wave

import numpy as np
import pytest

from morse.audio_engine import (
    AudioEngine, gate_spans, render_gate, render_wave, tail_frames, write_wav,
)
from morse.config import PlaybackConfig
from morse.errors import CapabilityUnavailable
from morse.scheduler import schedule


class FakeStream:
    def __init__(self, **kw):
        self.kw = kw
        self.started = self.aborted = self.closed = False

    def start(self): self.started = True
    def abort(self): self.aborted = True
    def close(self): self.closed = True


class FakeSounddevice:
    class CallbackStop(Exception):
        pass

    def __init__(self, fail=None):
        self.fail = fail
        self.streams = []

    def OutputStream(self, **kw):
        if self.fail:
            raise self.fail
        s = FakeStream(**kw)
        self.streams.append(s)
        return s


CFG = PlaybackConfig(unit=0.02, samplerate=8000)


def drain(engine, blocksize=256):
    """Run the stream callback until the engine stops it."""
    blocks = []
    for _ in range(10000):
        out = np.zeros((blocksize, 1), dtype=np.float32)
        try:
            engine._callback(out, blocksize, None, None)
        except FakeSounddevice.CallbackStop:
            blocks.append(out)
            return np.concatenate(blocks)[:, 0]
        blocks.append(out)
    raise AssertionError("stream never stopped")


def test_gate_spans():
    assert gate_spans(schedule(".-", 0.1), 1000) == [(0, 100), (200, 500)]
    assert gate_spans([], 1000) == []


def test_render_gate_window():
    gate = render_gate([(0, 100), (200, 500)], 50, 200)
    assert gate[:50].tolist() == [1.0] * 50
    assert gate[50:150].tolist() == [0.0] * 100
    assert gate[150:].tolist() == [1.0] * 50


def test_play_opens_one_stream():
    sd = FakeSounddevice()
    engine = AudioEngine(CFG, backend=sd)
    assert engine.play(schedule("...", CFG.unit)) is True
    assert engine.is_playing
    (stream,) = sd.streams
    assert stream.started
    assert stream.kw["samplerate"] == 8000 and stream.kw["channels"] == 1


def test_play_without_tones_does_nothing():
    sd = FakeSounddevice()
    engine = AudioEngine(CFG, backend=sd)
    assert engine.play(schedule("   ", CFG.unit)) is False
    assert sd.streams == [] and not engine.is_playing


def test_new_playback_cancels_previous():
    sd = FakeSounddevice()
    engine = AudioEngine(CFG, backend=sd)
    done = []
    engine.play(schedule(".", CFG.unit), on_finished=lambda: done.append(1))
    engine.play(schedule("-", CFG.unit))
    first, second = sd.streams
    assert first.aborted and first.closed
    assert second.started and not second.aborted
    # the first stream's late finish notification is ignored
    first.kw["finished_callback"]()
    assert done == [] and engine.is_playing


def test_stop_cancels():
    sd = FakeSounddevice()
    engine = AudioEngine(CFG, backend=sd)
    done = []
    engine.play(schedule("-", CFG.unit), on_finished=lambda: done.append(1))
    assert engine.stop() is True
    assert sd.streams[0].aborted and sd.streams[0].closed
    assert not engine.is_playing
    sd.streams[0].kw["finished_callback"]()
    assert done == []
    assert engine.stop() is False


def test_plays_to_the_end():
    sd = FakeSounddevice()
    engine = AudioEngine(CFG, backend=sd)
    done = []
    engine.play(schedule(".", CFG.unit), on_finished=lambda: done.append(1))
    samples = drain(engine)
    tone_frames = int(round(CFG.unit * CFG.samplerate))
    assert len(samples) >= tone_frames + tail_frames(CFG)
    assert np.abs(samples[:tone_frames]).max() > 0.1
    assert np.abs(samples).max() <= CFG.volume + 1e-6
    sd.streams[0].kw["finished_callback"]()
    assert done == [1] and not engine.is_playing


def test_device_failure_is_capability_error():
    engine = AudioEngine(CFG, backend=FakeSounddevice(fail=RuntimeError("no device")))
    with pytest.raises(CapabilityUnavailable) as exc:
        engine.play(schedule(".", CFG.unit))
    assert exc.value.capability == "audio output"
    assert not engine.is_playing


def test_missing_sounddevice(monkeypatch):
    monkeypatch.setitem(sys.modules, "sounddevice", None)
    engine = AudioEngine(CFG)
    assert not engine.enabled
    with pytest.raises(CapabilityUnavailable):
        engine.play(schedule(".", CFG.unit))


def test_render_wave_silent_between_tones():
    cfg = PlaybackConfig(unit=0.05, samplerate=8000)
    samples = render_wave(schedule(".   .", cfg.unit), cfg)
    sr = cfg.samplerate
    assert len(samples) == int(round(0.45 * sr)) + tail_frames(cfg)
    # middle of the word gap
    gap = samples[int(0.2 * sr):int(0.35 * sr)]
    assert np.abs(gap).max() < 1e-3
    assert np.abs(samples).max() <= cfg.volume + 1e-6


def test_render_wave_empty():
    assert len(render_wave(schedule("", 0.1), CFG)) == 0


def test_write_wav(tmp_path):
    path = tmp_path / "sos.wav"
    n = write_wav(path, schedule("... --- ...", CFG.unit), CFG)
    with wave.open(str(path), "rb") as w:
        assert w.getnchannels() == 1
        assert w.getsampwidth() == 2
        assert w.getframerate() == CFG.samplerate
        assert w.getnframes() == n > 0


def test_setters_clamp():
    engine = AudioEngine(CFG, backend=FakeSounddevice())
    engine.set_volume(5)
    assert engine._vol == 1.0
    engine.set_volume(-1)
    assert engine._vol == 0.0
    engine.set_tone_hz(50)
    assert engine._tone == 200.0
    engine.set_tone_hz(5000)
    assert engine._tone == 1400.0


def test_volume_scales_output():
    engine = AudioEngine(CFG, backend=FakeSounddevice())
    engine.set_volume(0.0)
    engine.play(schedule("-", CFG.unit))
    assert np.abs(drain(engine)).max() == 0.0

    engine.set_volume(0.25)
    engine.play(schedule("-", CFG.unit))
    peak = np.abs(drain(engine)).max()
    assert 0.1 < peak <= 0.25 + 1e-6
