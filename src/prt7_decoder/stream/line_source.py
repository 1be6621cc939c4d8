"""
Line Source
===========

Blocking line iterator over a byte stream.

This module provides the LineSource class, which turns any binary stream
with a `read(n)` method (a pyserial port, an open capture file, a BytesIO)
into successive protocol lines.

Framing Rules:
    - A line ends at '\\r' or '\\n' (either or both)
    - Terminators are stripped; empty lines are discarded
    - Other whitespace is preserved ("L, " carries a space)
    - A line reaching max_line_length - 1 bytes is yielded early
    - An empty read marks end of stream; a pending partial line is yielded

Also provides ReplayLineSource for decoding captured transmissions offline.
"""

import logging
from pathlib import Path
from typing import BinaryIO, Iterator, Optional, Union

from prt7_decoder.errors import DeviceError


logger = logging.getLogger(__name__)


DEFAULT_MAX_LINE_LENGTH = 100
# Smallest buffer that still holds a complete three-character frame
MIN_LINE_BUFFER = 4
DEFAULT_ENCODING = "latin-1"

_TERMINATORS = (b"\r", b"\n")


class LineSource:
    """
    Iterator of protocol lines read byte-by-byte from a stream.
    
    Reading one byte at a time keeps the source responsive on serial ports:
    a line is yielded as soon as its terminator arrives.
    
    Attributes:
        max_line_length: Size of the line buffer (lines are cut at size - 1)
        encoding: Text encoding used to decode each line
        bytes_read: Total bytes consumed
        lines_read: Total lines yielded
        
    Example:
        source = LineSource(io.BytesIO(b"I\\nL,A\\r\\nFIN\\n"))
        list(source)   # ["I", "L,A", "FIN"]
    """
    
    def __init__(
        self,
        stream: BinaryIO,
        encoding: str = DEFAULT_ENCODING,
        max_line_length: int = DEFAULT_MAX_LINE_LENGTH,
    ) -> None:
        """
        Initialize line source.
        
        Args:
            stream: Binary stream to read from
            encoding: Line text encoding (latin-1 maps every byte to one char)
            max_line_length: Line buffer size. Must be >= MIN_LINE_BUFFER.
        """
        if max_line_length < MIN_LINE_BUFFER:
            raise ValueError(f"max_line_length must be >= {MIN_LINE_BUFFER}")
        
        self._stream = stream
        self.encoding = encoding
        self.max_line_length = max_line_length
        self.bytes_read: int = 0
        self.lines_read: int = 0
    
    def __iter__(self) -> Iterator[str]:
        pending = bytearray()
        
        while True:
            byte = self._stream.read(1)
            
            if not byte:
                break
            
            self.bytes_read += 1
            
            if byte in _TERMINATORS:
                if pending:
                    yield self._emit(pending)
                    pending = bytearray()
                continue
            
            pending += byte
            
            if len(pending) >= self.max_line_length - 1:
                logger.warning(
                    f"Line reached buffer limit ({self.max_line_length - 1} bytes), "
                    f"yielding without terminator"
                )
                yield self._emit(pending)
                pending = bytearray()
        
        if pending:
            logger.debug("Stream ended inside a line, yielding partial line")
            yield self._emit(pending)
        
        logger.debug(
            f"Line source exhausted: {self.lines_read} lines, {self.bytes_read} bytes"
        )
    
    def _emit(self, raw: bytearray) -> str:
        self.lines_read += 1
        return raw.decode(self.encoding, errors="replace")


class ReplayLineSource:
    """
    Line source over a captured transmission file.
    
    Used to decode a recorded session without hardware. Behaves like
    SerialLineSource: a context manager that yields lines while open.
    
    Example:
        with ReplayLineSource("capture.txt") as source:
            for line in source:
                ...
    """
    
    def __init__(
        self,
        path: Union[str, Path],
        encoding: str = DEFAULT_ENCODING,
        max_line_length: int = DEFAULT_MAX_LINE_LENGTH,
    ) -> None:
        self.path = Path(path)
        self.encoding = encoding
        self.max_line_length = max_line_length
        self._file: Optional[BinaryIO] = None
    
    def open(self) -> None:
        """
        Open the capture file for reading.
        
        Raises:
            DeviceError: If the file cannot be opened
        """
        logger.info(f"Replaying transmission from {self.path}")
        try:
            self._file = open(self.path, "rb")
        except OSError as e:
            raise DeviceError(str(self.path), str(e)) from e
    
    def close(self) -> None:
        """Close the capture file."""
        if self._file is not None:
            self._file.close()
            self._file = None
    
    def __iter__(self) -> Iterator[str]:
        if self._file is None:
            raise RuntimeError("ReplayLineSource is not open")
        return iter(LineSource(self._file, self.encoding, self.max_line_length))
    
    def __enter__(self) -> "ReplayLineSource":
        self.open()
        return self
    
    def __exit__(self, *args) -> None:
        self.close()
