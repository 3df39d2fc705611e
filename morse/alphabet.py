# morse/alphabet.py
"""
Alphabet table ITU: char <-> code, built once at import and never mutated.

  ALPHABET["S"]       -> "..."
  CODE_TO_CHAR["..."] -> "S"

Lookups are case-insensitive through `code_for()`.
"""
from enum import Enum
from types import MappingProxyType

from morse.errors import AlphabetError


class Symbol(str, Enum):
    DOT = "."
    DASH = "-"


# Wire tokens
CHAR_GAP = " "
WORD_GAP = "   "

# Timing multiples of the unit (1:3:1:3:7)
DOT_UNITS = 1
DASH_UNITS = 3
INTRA_GAP_UNITS = 1
CHAR_GAP_UNITS = 3
WORD_GAP_UNITS = 7

SYMBOL_UNITS = {Symbol.DOT.value: DOT_UNITS, Symbol.DASH.value: DASH_UNITS}

ITU_TABLE = (
    ("A", ".-"),   ("B", "-..."), ("C", "-.-."), ("D", "-.."),  ("E", "."),
    ("F", "..-."), ("G", "--."),  ("H", "...."), ("I", ".."),   ("J", ".---"),
    ("K", "-.-"),  ("L", ".-.."), ("M", "--"),   ("N", "-."),   ("O", "---"),
    ("P", ".--."), ("Q", "--.-"), ("R", ".-."),  ("S", "..."),  ("T", "-"),
    ("U", "..-"),  ("V", "...-"), ("W", ".--"),  ("X", "-..-"), ("Y", "-.--"),
    ("Z", "--.."),
    ("0", "-----"), ("1", ".----"), ("2", "..---"), ("3", "...--"), ("4", "....-"),
    ("5", "....."), ("6", "-...."), ("7", "--..."), ("8", "---.."), ("9", "----."),
    (".", ".-.-.-"), (",", "--..--"), ("?", "..--.."), ("'", ".----."), ("!", "-.-.--"),
    ("/", "-..-."),  ("(", "-.--."),  (")", "-.--.-"), ("&", ".-..."),  (":", "---..."),
    (";", "-.-.-."), ("=", "-...-"),  ("+", ".-.-."),  ("-", "-....-"), ("_", "..--.-"),
    ('"', ".-..-."), ("$", "...-..-"), ("@", ".--.-."),
)


def is_code(token: str) -> bool:
    return bool(token) and all(c in SYMBOL_UNITS for c in token)


def build_alphabet(pairs):
    """
    Build the (char -> code, code -> char) tables from (char, code) pairs.
    Raises AlphabetError for a malformed code, a repeated char or a code
    shared by two chars: decoding must stay unambiguous.
    """
    forward, reverse = {}, {}
    for char, code in pairs:
        if len(char) != 1 or char.isspace():
            raise AlphabetError(f"invalid character {char!r}")
        if not is_code(code):
            raise AlphabetError(f"invalid code {code!r} for {char!r}")
        key = char.upper()
        if key in forward:
            raise AlphabetError(f"character {char!r} defined twice")
        if code in reverse:
            raise AlphabetError(f"code {code!r} shared by {reverse[code]!r} and {key!r}")
        forward[key] = code
        reverse[code] = key
    return MappingProxyType(forward), MappingProxyType(reverse)


ALPHABET, CODE_TO_CHAR = build_alphabet(ITU_TABLE)


def code_for(char: str):
    """Code for one character (any case), None if outside the table."""
    return ALPHABET.get(char.upper())


def char_for(code: str):
    return CODE_TO_CHAR.get(code)
