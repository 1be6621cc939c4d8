"""
Decoder Errors
==============

Exception hierarchy for the PRT-7 decoder.

    DecoderError
    ├── DeviceError          serial device could not be opened/configured
    ├── FrameParseError      a line violates the frame grammar
    └── UnexpectedEOFError   line source closed before the end marker

Only DeviceError (and UnexpectedEOFError when the strict EOF policy is
selected) escape the interpreter. Parse errors are absorbed and reported.
"""


class DecoderError(Exception):
    """Base class for all decoder errors."""
    pass


class DeviceError(DecoderError):
    """Raised when the serial device cannot be opened or configured."""
    
    def __init__(self, port: str, reason: str) -> None:
        self.port = port
        self.reason = reason
        super().__init__(f"Cannot open serial device {port}: {reason}")


class FrameParseError(DecoderError, ValueError):
    """Raised when a line does not match the frame grammar."""
    
    def __init__(self, line: str, reason: str) -> None:
        self.line = line
        self.reason = reason
        super().__init__(f"Malformed frame {line!r}: {reason}")


class UnexpectedEOFError(DecoderError):
    """Raised when the line source ends before the end-of-transmission marker."""
    
    def __init__(self, partial_message: str) -> None:
        self.partial_message = partial_message
        super().__init__(
            f"Stream closed before end marker "
            f"({len(partial_message)} characters decoded)"
        )
