"""
Transmission Encoder
====================

Builds the frame lines a PRT-7 sender transmits for a plaintext message.

This is the inverse of the interpreter: for every uppercase letter p sent
while the rotor sits at offset k, the wire character is (p - k) mod 26, so
that the receiving rotor maps it back to p. Spaces and characters outside
A..Z are sent verbatim because the rotor passes them through.

Example:
    lines = encode_transmission("HOLA", rotations={0: 3, 2: -1})
    # ["I", "M,3", "L,E", "L,L", "M,-1", "L,J", "L,Y", "FIN"]
"""

from typing import Dict, List, Optional

from prt7_decoder.cipher.rotor import ALPHABET, ROTOR_SIZE
from prt7_decoder.models.frame import Frame, LoadFrame, RotateFrame
from prt7_decoder.protocol.parser import LOAD_TAG, ROTATE_TAG, SEPARATOR


START_MARKER = "I"
END_MARKER = "FIN"
LINE_TERMINATORS = ("\r", "\n")


def format_frame(frame: Frame) -> str:
    """
    Render a frame as its wire line (without terminator).
    
    Args:
        frame: LoadFrame or RotateFrame
        
    Returns:
        Line body, e.g. "L,A" or "M,-3"
    """
    if isinstance(frame, LoadFrame):
        return f"{LOAD_TAG}{SEPARATOR}{frame.char}"
    if isinstance(frame, RotateFrame):
        return f"{ROTATE_TAG}{SEPARATOR}{frame.steps}"
    raise TypeError(f"Unsupported frame type: {type(frame).__name__}")


def encode_char(char: str, offset: int) -> str:
    """Return the ciphertext character that decodes to `char` at `offset`."""
    if len(char) == 1 and "A" <= char <= "Z":
        return ALPHABET[(ord(char) - ord("A") - offset) % ROTOR_SIZE]
    return char


def encode_frames(
    plaintext: str,
    rotations: Optional[Dict[int, int]] = None,
) -> List[Frame]:
    """
    Encode a plaintext into a sequence of frames.
    
    Args:
        plaintext: Message to transmit. Lowercase letters are not folded;
            they are sent verbatim and decode to themselves.
        rotations: Maps a character index to the rotation sent just before
            that character
            
    Returns:
        Frames in transmission order
        
    Raises:
        ValueError: If the plaintext contains a line terminator, which
            cannot be carried inside a frame
    """
    for index, char in enumerate(plaintext):
        if char in LINE_TERMINATORS:
            raise ValueError(
                f"Cannot transmit line terminator {char!r} at index {index}"
            )
    
    rotations = rotations or {}
    frames: List[Frame] = []
    offset = 0
    
    for index, char in enumerate(plaintext):
        steps = rotations.get(index, 0)
        if steps:
            frames.append(RotateFrame(steps=steps))
            offset = (offset + steps) % ROTOR_SIZE
        frames.append(LoadFrame(char=encode_char(char, offset)))
    
    return frames


def encode_transmission(
    plaintext: str,
    rotations: Optional[Dict[int, int]] = None,
) -> List[str]:
    """
    Encode a plaintext into a complete transmission.
    
    Args:
        plaintext: Message to transmit
        rotations: Maps a character index to the rotation sent before it
        
    Returns:
        Wire lines including start and end markers
    """
    body = [format_frame(frame) for frame in encode_frames(plaintext, rotations)]
    return [START_MARKER, *body, END_MARKER]
