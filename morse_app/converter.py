# morse_app/converter.py
"""
Converter state behind the window, Qt-free.

Every input change calls set_input(), which recomputes the output with the
pure codec; nothing subscribes to anything.
"""
from morse.codec import encode, decode

ENCODE = "encode"
DECODE = "decode"

TITLE = "Morse Code Converter"
MODE_LABELS = {ENCODE: "Text → Morse", DECODE: "Morse → Text"}
PLACEHOLDERS = {
    ENCODE: "Type your text here...",
    DECODE: "Enter Morse code (use dots and dashes)...",
}
OUTPUT_PLACEHOLDER = "Output will appear here..."

# notifications
MSG_COPIED       = "Output copied to clipboard"
MSG_CLEARED      = "Input cleared"
MSG_LISTENING    = "Listening..."
MSG_NO_SPEECH    = "Speech recognition is not supported on this system"
MSG_SPEECH_FAIL  = "Failed to recognize speech"
MSG_NO_AUDIO     = "Audio output is not available"


def convert(text: str, mode: str, on_error=None) -> str:
    if mode == ENCODE:
        return encode(text, on_error)
    if mode == DECODE:
        return decode(text, on_error)
    raise ValueError(f"unknown mode {mode!r}")


class ConverterState:
    def __init__(self, mode: str = ENCODE):
        if mode not in MODE_LABELS:
            raise ValueError(f"unknown mode {mode!r}")
        self.mode = mode
        self.input_text = ""
        self.output_text = ""
        self.dropped = []           # errors reported by the last conversion
        self.playing = False
        self.listening = False

    def set_input(self, text: str) -> str:
        self.input_text = text or ""
        self.dropped = []
        self.output_text = convert(self.input_text, self.mode, self.dropped.append)
        return self.output_text

    def clear(self):
        self.input_text = ""
        self.output_text = ""
        self.dropped = []

    def toggle_mode(self) -> str:
        self.mode = DECODE if self.mode == ENCODE else ENCODE
        self.clear()
        return self.mode

    # encode-only actions
    @property
    def can_play(self) -> bool:
        return self.mode == ENCODE and not self.playing and bool(self.output_text)

    @property
    def can_listen(self) -> bool:
        return self.mode == ENCODE and not self.listening

    @property
    def play_label(self) -> str:
        return "Playing..." if self.playing else "Play Sound"
