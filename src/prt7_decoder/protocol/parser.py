"""
Frame Parser
============

Converts one protocol line into a typed Frame.

Grammar (after terminator stripping):
    line := 'L' ',' ANYCHAR
          | 'M' ',' ['-'] DIGIT+

Rules:
    - Lines shorter than 3 characters are rejected
    - Position 1 must be a comma
    - The rotation integer must contain at least one ASCII digit and
      nothing may follow it
    - The rotation must fit in a signed 32-bit integer
    - In strict mode (default) nothing may follow the load character;
      lenient mode reads line[2] and ignores the rest

Design Rules:
    - Pure function of the line (no state, no I/O)
    - FrameParseError is the ONLY exception raised
"""

from prt7_decoder.errors import FrameParseError
from prt7_decoder.models.frame import Frame, LoadFrame, RotateFrame


LOAD_TAG = "L"
ROTATE_TAG = "M"
SEPARATOR = ","
MIN_FRAME_LENGTH = 3

INT32_MIN = -(2 ** 31)
INT32_MAX = 2 ** 31 - 1

_DIGITS = "0123456789"


def parse_frame(line: str, strict_load: bool = True) -> Frame:
    """
    Parse a single line into a LoadFrame or RotateFrame.
    
    Args:
        line: Line body without terminators
        strict_load: Reject trailing characters after the load character
        
    Returns:
        Parsed frame
        
    Raises:
        FrameParseError: If the line does not match the grammar
    """
    if not isinstance(line, str):
        raise FrameParseError(repr(line), "line is not text")
    
    if len(line) < MIN_FRAME_LENGTH:
        raise FrameParseError(line, f"shorter than {MIN_FRAME_LENGTH} characters")
    
    if line[1] != SEPARATOR:
        raise FrameParseError(line, "missing ',' after frame type")
    
    tag = line[0]
    
    if tag == LOAD_TAG:
        if strict_load and len(line) != MIN_FRAME_LENGTH:
            raise FrameParseError(line, "trailing characters after load character")
        return LoadFrame(char=line[2])
    
    if tag == ROTATE_TAG:
        return RotateFrame(steps=_parse_rotation(line))
    
    raise FrameParseError(line, f"unknown frame type {tag!r}")


def _parse_rotation(line: str) -> int:
    """Parse the signed decimal that follows 'M,'."""
    index = 2
    sign = 1
    
    if line[index] == "-":
        sign = -1
        index += 1
    
    start = index
    while index < len(line) and line[index] in _DIGITS:
        index += 1
    
    if index == start:
        raise FrameParseError(line, "rotation has no digits")
    
    if index != len(line):
        raise FrameParseError(line, "trailing characters after rotation")
    
    steps = sign * int(line[start:index])
    
    if not INT32_MIN <= steps <= INT32_MAX:
        raise FrameParseError(line, "rotation out of 32-bit range")
    
    return steps
