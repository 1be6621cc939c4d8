"""
Data Models
===========

Frame and session models for the PRT-7 decoder.

Models:
    Frames:
        - LoadFrame: Decode one ciphertext character
        - RotateFrame: Rotate the rotor by a signed step count
        - Frame: Union of the two
    
    Session:
        - SessionPhase: Enum of interpreter phases
        - SessionResult: Outcome of one session
"""

from prt7_decoder.models.frame import Frame, LoadFrame, RotateFrame
from prt7_decoder.models.session import SessionPhase, SessionResult

__all__ = [
    # Frames
    "Frame",
    "LoadFrame",
    "RotateFrame",
    # Session
    "SessionPhase",
    "SessionResult",
]
