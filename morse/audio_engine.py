# morse/audio_engine.py
"""
Tone player for scheduled Morse timelines (sine + soft attack/release).

  engine = AudioEngine(PlaybackConfig(tone_hz=600))
  engine.play(schedule(morse, engine.config.unit), on_finished=cb)
  engine.stop()       # cancel: silence now, release the device

One playback at a time: play() cancels the previous one first. on_finished is
called from the audio thread, and only when a playback runs to its end.
"""
import logging
import math
import threading
import wave
from functools import partial

import numpy as np

from morse.config import PlaybackConfig, TONE_RANGE
from morse.errors import CapabilityUnavailable

logger = logging.getLogger(__name__)

AUDIO_OUTPUT = "audio output"


def gate_spans(events, samplerate: float):
    """ToneEvent timeline -> [(first_frame, end_frame)] of tone-on regions."""
    spans = []
    on_at = None
    for ev in events:
        if ev.tone_on:
            on_at = ev.time
        elif on_at is not None:
            a = int(round(on_at * samplerate))
            b = int(round(ev.time * samplerate))
            if b > a:
                spans.append((a, b))
            on_at = None
    return spans


def render_gate(spans, start: int, frames: int) -> np.ndarray:
    """0/1 gate for frames [start, start+frames)."""
    gate = np.zeros(frames, dtype=np.float32)
    stop = start + frames
    for a, b in spans:
        if b <= start:
            continue
        if a >= stop:
            break
        gate[max(a, start) - start:min(b, stop) - start] = 1.0
    return gate


def envelope(gate: np.ndarray, env: float, att_k: float, rel_k: float):
    """One-pole attack/release follower; returns (curve, last value)."""
    out = np.empty(len(gate), dtype=np.float32)
    for i, tgt in enumerate(gate):
        env += (tgt - env) * (att_k if tgt > env else rel_k)
        out[i] = env
    return out, float(env)


def coef(tau_s: float, samplerate: float) -> float:
    tau_s = max(1e-4, float(tau_s))
    return 1.0 - math.exp(-1.0 / (tau_s * samplerate))


def tail_frames(config: PlaybackConfig) -> int:
    # let the release settle after the last tone-off
    return int(5 * config.release * config.samplerate)


def render_wave(events, config: PlaybackConfig = None) -> np.ndarray:
    """Whole timeline as float32 samples (offline rendering)."""
    config = config or PlaybackConfig()
    sr = config.samplerate
    spans = gate_spans(events, sr)
    if not spans:
        return np.zeros(0, dtype=np.float32)
    frames = spans[-1][1] + tail_frames(config)
    env, _ = envelope(render_gate(spans, 0, frames), 0.0,
                      coef(config.attack, sr), coef(config.release, sr))
    t = np.arange(frames, dtype=np.float64) / sr
    wave_ = np.sin(2.0 * math.pi * config.tone_hz * t).astype(np.float32)
    return (config.volume * env * wave_).astype(np.float32)


def write_wav(path, events, config: PlaybackConfig = None):
    """16-bit mono WAV of the timeline; returns the number of frames."""
    config = config or PlaybackConfig()
    samples = render_wave(events, config)
    pcm = (np.clip(samples, -1.0, 1.0) * 32767).astype("<i2")
    with wave.open(str(path), "wb") as w:
        w.setnchannels(1)
        w.setsampwidth(2)
        w.setframerate(config.samplerate)
        w.writeframes(pcm.tobytes())
    return len(pcm)


class AudioEngine:
    def __init__(self, config: PlaybackConfig = None, backend=None):
        self.config = config or PlaybackConfig()
        self._sr = float(self.config.samplerate)
        self._tone = self.config.tone_hz
        self._vol = self.config.volume

        self._phase = 0.0
        self._twopi = 2.0 * math.pi
        self._env = 0.0
        self._att_k = coef(self.config.attack, self._sr)
        self._rel_k = coef(self.config.release, self._sr)

        self._lock = threading.Lock()
        self._stream = None
        self._active = False
        self._spans = []
        self._pos = 0
        self._end = 0
        self._gen = 0
        self._on_finished = None

        self._reason = ""
        self._sd = backend
        if self._sd is None:
            try:
                import sounddevice as sd
                self._sd = sd
            except (ImportError, OSError) as e:  # OSError: PortAudio library missing
                logger.warning("sounddevice unavailable: %s", e)
                self._reason = str(e)

    @property
    def enabled(self) -> bool:
        return self._sd is not None

    @property
    def is_playing(self) -> bool:
        return self._active

    def play(self, events, on_finished=None) -> bool:
        """Start a timeline; False (and no callback) if it holds no tone."""
        if not self.enabled:
            raise CapabilityUnavailable(AUDIO_OUTPUT, self._reason)
        self.stop()

        spans = gate_spans(events, self._sr)
        if not spans:
            return False
        with self._lock:
            self._gen += 1
            gen = self._gen
            self._spans = spans
            self._pos = 0
            self._end = spans[-1][1] + tail_frames(self.config)
            self._env = 0.0
            self._phase = 0.0
            self._on_finished = on_finished
            self._active = True

        try:
            stream = self._sd.OutputStream(
                samplerate=int(self._sr),
                channels=1, dtype="float32",
                blocksize=256, latency="low",
                callback=self._callback,
                finished_callback=partial(self._finished, gen),
            )
            self._stream = stream
            stream.start()
        except Exception as e:  # PortAudioError, no output device...
            self._release()
            logger.warning("cannot open audio output: %s", e)
            raise CapabilityUnavailable(AUDIO_OUTPUT, str(e)) from e

        logger.info("playback started: %d tones, %.2f s", len(spans), self._end / self._sr)
        return True

    def stop(self) -> bool:
        """Cancel the active playback (if any) and release the device."""
        was_active = self._active
        self._release()
        if was_active:
            logger.info("playback cancelled")
        return was_active

    def set_volume(self, vol: float):
        self._vol = max(0.0, min(1.0, float(vol)))

    def set_tone_hz(self, f: float):
        self._tone = float(max(TONE_RANGE[0], min(TONE_RANGE[1], f)))

    # ───────── internals
    def _release(self):
        with self._lock:
            stream, self._stream = self._stream, None
            self._gen += 1        # a late finished_callback belongs to nobody
            self._on_finished = None
            self._spans = []
            self._active = False
        if stream is None:
            return
        try:
            stream.abort()
        finally:
            stream.close()

    def _callback(self, outdata, frames, time_info, status):
        if status:
            logger.debug("audio status: %s", status)
        with self._lock:
            spans, pos, end = self._spans, self._pos, self._end
            self._pos = pos + frames

        gate = render_gate(spans, pos, frames)
        env, self._env = envelope(gate, self._env, self._att_k, self._rel_k)

        idx = np.arange(frames, dtype=np.float32)
        t = self._phase + self._twopi * self._tone * (idx / self._sr)
        self._phase = float((self._phase + self._twopi * self._tone * frames / self._sr) % self._twopi)

        outdata[:, 0] = self._vol * env * np.sin(t, dtype=np.float32)
        if pos + frames >= end:
            raise self._sd.CallbackStop

    def _finished(self, gen):
        # audio thread: the stream itself is closed by the next play()/stop()
        with self._lock:
            if gen != self._gen:
                return
            cb, self._on_finished = self._on_finished, None
            self._active = False
        logger.info("playback finished")
        if cb:
            cb()
