import pytest

from morse.codec import encode, decode
from morse.errors import UnsupportedCharacter, UnknownCode


def test_empty():
    assert encode("") == ""
    assert decode("") == ""


def test_encode_words():
    assert encode("SOS") == "... --- ..."
    assert encode("sos help") == "... --- ...   .... . .-.. .--."


def test_encode_collapses_whitespace():
    assert encode("  a \t\n b  ") == ".-   -..."


def test_encode_drops_unsupported():
    errors = []
    assert encode("a#b", errors.append) == ".- -..."
    assert len(errors) == 1
    assert isinstance(errors[0], UnsupportedCharacter)
    assert errors[0].char == "#"


def test_encode_word_of_unsupported_leaves_no_gap():
    assert encode("a ### b") == ".-   -..."
    assert encode("# %") == ""


def test_decode():
    assert decode("... --- ...") == "SOS"
    assert decode("...   ---") == "S O"
    assert decode("... / ---") == "S O"


def test_decode_skips_unknown_and_continues():
    errors = []
    assert decode(".- .-.-.-.- -...   ...", errors.append) == "AB S"
    assert [e.token for e in errors] == [".-.-.-.-"]
    assert isinstance(errors[0], UnknownCode)


def test_decode_garbage_tokens():
    errors = []
    assert decode("abc ... x", errors.append) == "S"
    assert [e.token for e in errors] == ["abc", "x"]


def test_decode_lookalike_symbols():
    assert decode("·− −···") == "AB"


@pytest.mark.parametrize("text", ["SOS", "HELLO WORLD", "the quick brown fox 123", "A.B,C? (OK)"])
def test_decode_encode(text):
    assert decode(encode(text)) == text.upper()


@pytest.mark.parametrize("morse", ["... --- ...", "-.-. --.-   -.. .   .-- .----"])
def test_encode_decode(morse):
    assert encode(decode(morse)) == morse
