"""
Protocol Module
===============

Wire-format handling for the PRT-7 serial protocol.

    - parse_frame: Line -> LoadFrame | RotateFrame (or FrameParseError)
    - format_frame / encode_transmission: Sender-side line generation
"""

from prt7_decoder.protocol.parser import parse_frame
from prt7_decoder.protocol.encoder import (
    END_MARKER,
    START_MARKER,
    encode_frames,
    encode_transmission,
    format_frame,
)


__all__ = [
    "parse_frame",
    "format_frame",
    "encode_frames",
    "encode_transmission",
    "START_MARKER",
    "END_MARKER",
]
