"""
Frame Data Model
================

Typed frame representation for the PRT-7 serial protocol.

A frame is one line-terminated command received from the microcontroller.
Only two command frames exist, so they are modelled as a closed sum type:

    L,<char>      -> LoadFrame(char)
    M,<int>       -> RotateFrame(steps)

Control markers ("I" and "FIN") are handled by the interpreter before
parsing and never become Frame values.

Design Rules:
    - Frames are immutable (frozen) and consumed immediately
    - LoadFrame stores the raw character (no case folding)
    - RotateFrame stores the signed rotation as received
"""

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True, slots=True)
class LoadFrame:
    """
    Request to decode one ciphertext character.
    
    Attributes:
        char: Raw ciphertext character as received on the wire
    """
    
    char: str


@dataclass(frozen=True, slots=True)
class RotateFrame:
    """
    Request to rotate the rotor.
    
    Attributes:
        steps: Signed number of positions (0 is a no-op)
    """
    
    steps: int


Frame = Union[LoadFrame, RotateFrame]
