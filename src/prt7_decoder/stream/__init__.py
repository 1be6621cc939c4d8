"""
Stream Module
=============

Line ingestion and trace output for the PRT-7 decoder.

This module provides the I/O edges of the interpreter:
    - LineSource: Byte stream -> protocol lines
    - SerialLineSource: pyserial-backed source (context manager)
    - ReplayLineSource: Source over a captured transmission file
    - ConsoleSink / RecordingSink: Trace destinations

Example:
    from prt7_decoder.stream import SerialLineSource, ConsoleSink
    
    with SerialLineSource("/dev/ttyUSB0") as source:
        for line in source:
            ...
"""

from prt7_decoder.stream.line_source import LineSource, ReplayLineSource
from prt7_decoder.stream.serial_source import SerialLineSource
from prt7_decoder.stream.sink import ConsoleSink, OutputSink, RecordingSink


__all__ = [
    "LineSource",
    "ReplayLineSource",
    "SerialLineSource",
    "OutputSink",
    "ConsoleSink",
    "RecordingSink",
]
