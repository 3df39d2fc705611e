# morse_app/main_app.py
import argparse
import logging
import os
import sys

from PyQt5.QtWidgets import QApplication, QMainWindow, QWidget
from PyQt5.QtCore import QObject, pyqtSignal

from morse.audio_engine import AudioEngine
from morse.config import PlaybackConfig, UNIT_S, TONE_HZ, VOLUME
from morse.errors import CapabilityUnavailable
from morse.scheduler import schedule
from morse.speech_input import SpeechCapture, append_transcript
from morse_app.converter import (
    ConverterState, ENCODE, TITLE, MODE_LABELS, PLACEHOLDERS,
    MSG_COPIED, MSG_CLEARED, MSG_LISTENING, MSG_NO_SPEECH, MSG_SPEECH_FAIL, MSG_NO_AUDIO,
)
from morse_app.ui_layout import build_ui, WINDOW_SIZE

logger = logging.getLogger(__name__)


class UiBus(QObject):
    # audio / capture threads -> UI thread
    playback_finished = pyqtSignal()
    transcript        = pyqtSignal(str)
    capture_error     = pyqtSignal(str)


class MainWindow(QMainWindow):
    def __init__(self, app, config: PlaybackConfig = None):
        super().__init__()
        self.setWindowTitle(TITLE); self.setFixedSize(*WINDOW_SIZE)
        self.app = app
        self.config = config or PlaybackConfig()

        central = QWidget(); self.setCentralWidget(central)
        self.ui, self.coords = build_ui(central)
        self.toast = self.ui["toast"]

        self.state = ConverterState(ENCODE)
        self.audio = AudioEngine(self.config)
        self.speech = SpeechCapture()

        self._bus = UiBus()
        self._bus.playback_finished.connect(self._on_playback_finished)
        self._bus.transcript.connect(self._on_transcript)
        self._bus.capture_error.connect(self._on_capture_error)

        self._wire_ui()
        self._refresh()

    # ─────────────────────────── helpers
    def _wire_ui(self):
        self.ui["input_box"].textChanged.connect(self._on_input_changed)
        self.ui["btn_mode"].clicked.connect(self._on_toggle_mode)
        self.ui["btn_clear"].clicked.connect(self._on_clear)
        self.ui["btn_copy"].clicked.connect(self._on_copy)
        self.ui["btn_play"].clicked.connect(self._on_play)
        self.ui["btn_mic"].clicked.connect(self._on_mic)

    def _set_input_text(self, text: str):
        box = self.ui["input_box"]
        box.blockSignals(True); box.setPlainText(text); box.blockSignals(False)
        self._on_input_changed()

    def _refresh(self):
        st = self.state
        self.ui["output_box"].setPlainText(st.output_text)
        self.ui["mode_label"].setText(MODE_LABELS[st.mode])
        self.ui["input_box"].setPlaceholderText(PLACEHOLDERS[st.mode])

        encoding = st.mode == ENCODE
        self.ui["btn_play"].setVisible(encoding)
        self.ui["btn_play"].setEnabled(st.can_play)
        self.ui["btn_play"].setText(st.play_label)
        self.ui["btn_mic"].setVisible(encoding)
        self.ui["btn_mic"].setEnabled(st.can_listen)
        self.ui["btn_mic"].setText("..." if st.listening else "Mic")

    # ─────────────────────────── conversion
    def _on_input_changed(self):
        self.state.set_input(self.ui["input_box"].toPlainText())
        if self.state.dropped:
            logger.debug("%d items dropped in %s mode", len(self.state.dropped), self.state.mode)
        self._refresh()

    def _on_clear(self):
        self.state.clear()
        self._set_input_text("")
        self.toast.info(MSG_CLEARED)

    def _on_toggle_mode(self):
        self._stop_playback()
        self._stop_capture()
        self.state.toggle_mode()
        logger.info("mode: %s", self.state.mode)
        self._on_clear()

    def _on_copy(self):
        self.app.clipboard().setText(self.state.output_text)
        self.toast.success(MSG_COPIED)

    # ─────────────────────────── playback
    def _on_play(self):
        if not self.state.can_play:
            return
        events = schedule(self.state.output_text, self.config.unit)
        try:
            started = self.audio.play(events, on_finished=self._bus.playback_finished.emit)
        except CapabilityUnavailable as e:
            logger.warning("%s", e)
            self.toast.error(MSG_NO_AUDIO)
            return
        self.state.playing = started
        self._refresh()

    def _on_playback_finished(self):
        self.state.playing = False
        self._refresh()

    def _stop_playback(self):
        self.audio.stop()
        self.state.playing = False

    # ─────────────────────────── voice typing
    def _on_mic(self):
        if not self.state.can_listen:
            return
        try:
            started = self.speech.start(
                on_result=self._bus.transcript.emit,
                on_error=lambda err: self._bus.capture_error.emit(str(err)))
        except CapabilityUnavailable as e:
            logger.warning("%s", e)
            self.toast.error(MSG_NO_SPEECH)
            return
        if started:
            self.state.listening = True
            self.toast.info(MSG_LISTENING)
        self._refresh()

    def _on_transcript(self, text: str):
        self.state.listening = False
        self._set_input_text(append_transcript(self.state.input_text, text))

    def _on_capture_error(self, reason: str):
        logger.warning("speech capture: %s", reason)
        self.state.listening = False
        self.toast.error(MSG_SPEECH_FAIL)
        self._refresh()

    def _stop_capture(self):
        self.speech.cancel()
        self.state.listening = False

    def closeEvent(self, e):
        self._stop_playback()
        self._stop_capture()
        super().closeEvent(e)


def parse_args(argv=None):
    pa = argparse.ArgumentParser(description="Text <-> Morse converter with tone playback")
    pa.add_argument("--unit", type=float, default=UNIT_S, help="dot length in seconds")
    pa.add_argument("--wpm", type=float, help="speed in words per minute (overrides --unit)")
    pa.add_argument("--tone", type=float, default=TONE_HZ, help="tone frequency Hz")
    pa.add_argument("--volume", type=float, default=VOLUME, help="gain 0..1")
    return pa.parse_args(argv)


def config_from_args(args) -> PlaybackConfig:
    if args.wpm:
        return PlaybackConfig.from_wpm(args.wpm, tone_hz=args.tone, volume=args.volume)
    return PlaybackConfig(unit=args.unit, tone_hz=args.tone, volume=args.volume)


def main(argv=None):
    logging.basicConfig(
        level=os.environ.get("MORSE_LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    args = parse_args(argv)
    app = QApplication(sys.argv[:1])
    w = MainWindow(app, config_from_args(args)); w.show()
    return app.exec_()


if __name__ == "__main__":
    sys.exit(main())
