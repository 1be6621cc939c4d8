"""
Output Sinks
============

Destinations for the human-readable protocol trace.

The interpreter writes one line at a time to an OutputSink. Diagnostics for
operators go through logging; the sink carries only the transmission trace
and the final message.
"""

import sys
from typing import List, Optional, Protocol, TextIO


class OutputSink(Protocol):
    """Protocol for trace destinations."""
    
    def emit(self, text: str) -> None:
        """Write one line of trace output."""
        ...


class ConsoleSink:
    """Writes trace lines to a text stream (stdout by default)."""
    
    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self._stream = stream
    
    def emit(self, text: str) -> None:
        stream = self._stream if self._stream is not None else sys.stdout
        stream.write(text + "\n")
        stream.flush()


class RecordingSink:
    """Keeps trace lines in memory."""
    
    def __init__(self) -> None:
        self.lines: List[str] = []
    
    def emit(self, text: str) -> None:
        self.lines.append(text)
    
    @property
    def text(self) -> str:
        """All recorded lines joined with newlines."""
        return "\n".join(self.lines)
