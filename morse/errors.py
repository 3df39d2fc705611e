# morse/errors.py


class MorseError(Exception):
    """Base for every error raised or reported by the morse package."""


class AlphabetError(MorseError, ValueError):
    pass


class UnsupportedCharacter(MorseError):
    """encode(): a character outside the alphabet (dropped)."""
    def __init__(self, char: str):
        super().__init__(f"unsupported character {char!r}")
        self.char = char


class UnknownCode(MorseError):
    """decode(): a code with no match in the alphabet (skipped)."""
    def __init__(self, token: str):
        super().__init__(f"unknown code {token!r}")
        self.token = token


class CapabilityUnavailable(MorseError):
    def __init__(self, capability: str, reason: str = ""):
        msg = f"{capability} is not available"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)
        self.capability = capability
        self.reason = reason


class CaptureFailed(MorseError):
    def __init__(self, reason: str):
        super().__init__(f"speech capture failed: {reason}")
        self.reason = reason
