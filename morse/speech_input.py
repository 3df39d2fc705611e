# morse/speech_input.py
"""
Voice typing: one utterance -> text, on a background thread.

  cap = SpeechCapture()
  cap.start(on_result=lambda text: ..., on_error=lambda err: ...)
  cap.cancel()        # a late result is discarded

start() raises CapabilityUnavailable when speech_recognition or a microphone
is missing; recognition problems arrive as CaptureFailed via on_error.
Callbacks run on the capture thread.
"""
import logging
import threading

from morse.errors import CapabilityUnavailable, CaptureFailed

logger = logging.getLogger(__name__)

SPEECH = "speech recognition"


def append_transcript(current: str, transcript: str) -> str:
    transcript = (transcript or "").strip()
    if not transcript:
        return current
    return current + (" " if current else "") + transcript


class SpeechCapture:
    def __init__(self, language: str = "en-US", timeout: float = 5.0,
                 phrase_time_limit: float = 10.0, backend=None):
        self.language = language
        self.timeout = timeout
        self.phrase_time_limit = phrase_time_limit
        self._sr = backend
        self._lock = threading.Lock()
        self._thread = None
        self._cancel = None
        self._listening = False

    @property
    def listening(self) -> bool:
        return self._listening

    def start(self, on_result, on_error=None) -> bool:
        """Begin one capture; False if a session is already running."""
        with self._lock:
            # a cancelled session keeps the mic until listen() returns
            if self._listening or (self._thread is not None and self._thread.is_alive()):
                return False
            sr = self._backend()
            try:
                mic = sr.Microphone()
            except (AttributeError, OSError) as e:  # AttributeError: PyAudio missing
                logger.warning("no microphone: %s", e)
                raise CapabilityUnavailable(SPEECH, str(e)) from e

            self._cancel = threading.Event()
            self._listening = True
            self._thread = threading.Thread(
                target=self._run, args=(sr, mic, self._cancel, on_result, on_error),
                daemon=True)
            self._thread.start()
        logger.info("listening (%s)", self.language)
        return True

    def cancel(self):
        with self._lock:
            if self._cancel is not None:
                self._cancel.set()
            self._listening = False

    def join(self, timeout=None):
        if self._thread:
            self._thread.join(timeout)

    # ───────── internals
    def _backend(self):
        if self._sr is None:
            try:
                import speech_recognition
            except ImportError as e:
                raise CapabilityUnavailable(SPEECH, str(e)) from e
            self._sr = speech_recognition
        return self._sr

    def _run(self, sr, mic, cancel, on_result, on_error):
        text, err = None, None
        try:
            recognizer = sr.Recognizer()
            with mic as source:
                audio = recognizer.listen(source, timeout=self.timeout,
                                          phrase_time_limit=self.phrase_time_limit)
            text = recognizer.recognize_google(audio, language=self.language)
        except sr.WaitTimeoutError:
            err = CaptureFailed("no speech detected")
        except sr.UnknownValueError:
            err = CaptureFailed("speech was not understood")
        except (sr.RequestError, OSError) as e:
            err = CaptureFailed(str(e))
        except Exception as e:
            logger.exception("speech backend error")
            err = CaptureFailed(str(e) or type(e).__name__)
        finally:
            with self._lock:
                if self._cancel is cancel:
                    self._listening = False

        if cancel.is_set():
            logger.info("capture cancelled, result discarded")
            return
        if err is not None:
            logger.warning("%s", err)
            if on_error:
                on_error(err)
            return
        logger.info("recognized %d chars", len(text))
        on_result(text)
