# morse/codec.py
"""
Text <-> Morse, tolerant on both sides.

  encode("SOS Help")          -> "... --- ...   .... . .-.. .--."
  decode("... --- ...")       -> "SOS"

Nothing here raises on bad input: unsupported characters and unknown codes
are dropped and reported through the optional `on_error(err)` callback
(UnsupportedCharacter / UnknownCode instances), so live keystrokes always get
a best-effort result.
"""
import logging
import re

from morse.alphabet import CHAR_GAP, WORD_GAP, code_for, char_for, is_code
from morse.errors import UnsupportedCharacter, UnknownCode

logger = logging.getLogger(__name__)

# three or more blanks, or a standalone "/", split words
_WORD_SPLIT = re.compile(r"\s*/\s*|\s{3,}")

# dot/dash lookalikes pasted from other sources
_LOOKALIKES = str.maketrans({"·": ".", "•": ".", "∙": ".",
                             "−": "-", "–": "-", "—": "-"})


def encode(text: str, on_error=None) -> str:
    if not text:
        return ""
    words = []
    for word in text.split():
        codes = []
        for ch in word:
            code = code_for(ch)
            if code is None:
                _report(on_error, UnsupportedCharacter(ch))
                continue
            codes.append(code)
        if codes:  # a word made only of unsupported chars leaves no gap behind
            words.append(CHAR_GAP.join(codes))
    return WORD_GAP.join(words)


def decode(morse: str, on_error=None) -> str:
    if not morse:
        return ""
    words = []
    for group in _WORD_SPLIT.split(morse.translate(_LOOKALIKES).strip()):
        chars = []
        for token in group.split():
            ch = char_for(token) if is_code(token) else None
            if ch is None:
                _report(on_error, UnknownCode(token))
                continue
            chars.append(ch)
        if chars:
            words.append("".join(chars))
    return " ".join(words)


def _report(on_error, err):
    logger.debug("dropped: %s", err)
    if on_error:
        on_error(err)
