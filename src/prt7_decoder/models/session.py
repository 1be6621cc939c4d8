"""
Session Models
==============

Session phase and result models for the frame interpreter.

Phases:
    AWAITING_START -> RUNNING -> FINISHED

The start marker is advisory: frames received while AWAITING_START are
still applied. The end marker always moves the session to FINISHED.

Result Contract:
    {
        "message": "HOLA MUNDO",
        "phase": "FINISHED",
        "ended_by_eof": false,
        "offset": 3,
        "lines_received": 14,
        "load_frames": 10,
        "rotate_frames": 2,
        "parse_errors": 0,
        "start_markers": 1
    }
"""

from enum import Enum

from pydantic import BaseModel, Field


class SessionPhase(str, Enum):
    """
    Interpreter session phase.
    
    Attributes:
        AWAITING_START: No start marker seen yet
        RUNNING: Start marker seen, frames being applied
        FINISHED: End marker (or end of stream) reached
    """
    
    AWAITING_START = "AWAITING_START"
    RUNNING = "RUNNING"
    FINISHED = "FINISHED"


class SessionResult(BaseModel):
    """
    Outcome of one interpreter session.
    
    Attributes:
        message: Rendered decoded message
        phase: Phase the session ended in
        ended_by_eof: True if the stream closed before the end marker
        offset: Final rotor offset
        lines_received: Non-empty lines consumed from the source
        load_frames: Load frames applied
        rotate_frames: Rotate frames applied
        parse_errors: Malformed frames skipped
        start_markers: Start markers seen
    """
    
    message: str = Field(..., description="Decoded message")
    
    phase: SessionPhase = Field(
        default=SessionPhase.FINISHED,
        description="Phase the session ended in",
    )
    
    ended_by_eof: bool = Field(
        default=False,
        description="Whether the stream closed before the end marker",
    )
    
    offset: int = Field(
        default=0,
        ge=0,
        lt=26,
        description="Final rotor offset",
    )
    
    lines_received: int = Field(default=0, ge=0)
    load_frames: int = Field(default=0, ge=0)
    rotate_frames: int = Field(default=0, ge=0)
    parse_errors: int = Field(default=0, ge=0)
    start_markers: int = Field(default=0, ge=0)
