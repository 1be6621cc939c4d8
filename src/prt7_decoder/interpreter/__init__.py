"""
Interpreter Module
==================

Frame interpreter for PRT-7 transmissions.

    - Interpreter: Session loop over a line source
    - apply_frame: Applies one frame to rotor and buffer
    - SessionMetrics: Per-session counters
"""

from prt7_decoder.interpreter.apply import apply_frame
from prt7_decoder.interpreter.session import (
    EOF_POLICIES,
    Interpreter,
    SessionMetrics,
)


__all__ = [
    "Interpreter",
    "SessionMetrics",
    "apply_frame",
    "EOF_POLICIES",
]
