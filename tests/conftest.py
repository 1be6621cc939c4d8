"""
Test Configuration
==================

Pytest fixtures and test configuration for the PRT-7 decoder.
"""

import io

import pytest


@pytest.fixture
def sink():
    """Provide a RecordingSink for capturing trace output."""
    from prt7_decoder.stream.sink import RecordingSink
    
    return RecordingSink()


@pytest.fixture
def interpreter(sink):
    """Provide a fresh Interpreter writing to the recording sink."""
    from prt7_decoder.interpreter import Interpreter
    
    return Interpreter(sink)


@pytest.fixture
def wire_lines():
    """Split a raw wire transmission into lines the way the serial source does."""
    from prt7_decoder.stream.line_source import LineSource
    
    def _split(raw: str):
        return list(LineSource(io.BytesIO(raw.encode("latin-1"))))
    
    return _split


@pytest.fixture
def capture_file(tmp_path):
    """Write a raw transmission to a capture file and return its path."""
    
    def _write(raw: str, name: str = "capture.txt"):
        path = tmp_path / name
        path.write_bytes(raw.encode("latin-1"))
        return path
    
    return _write
