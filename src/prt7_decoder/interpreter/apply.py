"""
Frame Application
=================

Applies a parsed frame to the rotor and message buffer.

    LoadFrame(c)    -> d = rotor.map(c); buffer.append(d)
    RotateFrame(n)  -> rotor.rotate(n)

Each application returns the trace text shown after "Trama: [...] -> ".
"""

from prt7_decoder.cipher.buffer import MessageBuffer
from prt7_decoder.cipher.rotor import Rotor
from prt7_decoder.models.frame import Frame, LoadFrame, RotateFrame


def format_load_trace(char: str, decoded: str) -> str:
    return f"Fragmento '{char}' decodificado como '{decoded}'."


def format_rotate_trace(steps: int) -> str:
    # Non-positive values already carry their own sign
    if steps > 0:
        return f"ROTANDO ROTOR +{steps}"
    return f"ROTANDO ROTOR {steps}"


def apply_frame(frame: Frame, rotor: Rotor, buffer: MessageBuffer) -> str:
    """
    Apply one frame to the session state.
    
    Args:
        frame: Parsed LoadFrame or RotateFrame
        rotor: Session rotor (mutated by RotateFrame)
        buffer: Session message buffer (mutated by LoadFrame)
        
    Returns:
        Trace text describing the effect of the frame
    """
    if isinstance(frame, LoadFrame):
        decoded = rotor.map(frame.char)
        buffer.append(decoded)
        return format_load_trace(frame.char, decoded)
    
    if isinstance(frame, RotateFrame):
        rotor.rotate(frame.steps)
        return format_rotate_trace(frame.steps)
    
    raise TypeError(f"Unsupported frame type: {type(frame).__name__}")
