"""
Stream Tests
============

Line framing, replay files, and the pyserial-backed source.
"""

import io

import pytest
import serial

from prt7_decoder.errors import DeviceError
from prt7_decoder.stream.line_source import MIN_LINE_BUFFER
from prt7_decoder.stream import (
    ConsoleSink,
    LineSource,
    RecordingSink,
    ReplayLineSource,
    SerialLineSource,
)


class TestLineSource:
    """Tests for byte-stream line framing."""
    
    @pytest.mark.parametrize(
        "raw, expected",
        [
            (b"I\nFIN\n", ["I", "FIN"]),
            (b"I\r\nFIN\r\n", ["I", "FIN"]),
            (b"I\rFIN\r", ["I", "FIN"]),
            (b"\n\r\n\rL,A\n\n\n", ["L,A"]),
            (b"L, \n", ["L, "]),
            (b"L,A", ["L,A"]),
            (b"", []),
        ],
    )
    def test_framing(self, raw, expected):
        """Terminators are stripped, empty lines dropped, spaces kept."""
        assert list(LineSource(io.BytesIO(raw))) == expected
    
    def test_long_line_split_at_buffer_limit(self):
        """A line reaching the buffer limit is yielded early."""
        source = LineSource(io.BytesIO(b"ABCDEFG\n"), max_line_length=4)
        assert list(source) == ["ABC", "DEF", "G"]
    
    def test_every_byte_is_one_character(self):
        """High bytes decode to exactly one character."""
        lines = list(LineSource(io.BytesIO(b"L,\xe9\n")))
        assert lines == ["L,\xe9"]
        assert len(lines[0]) == 3
    
    def test_counters(self):
        """Bytes and lines are counted."""
        source = LineSource(io.BytesIO(b"I\nL,A\n"))
        list(source)
        assert source.bytes_read == 6
        assert source.lines_read == 2
    
    @pytest.mark.parametrize("size", [1, 2, 3])
    def test_invalid_buffer_size(self, size):
        """Buffer size must hold a complete three-character frame."""
        with pytest.raises(ValueError):
            LineSource(io.BytesIO(b""), max_line_length=size)
    
    def test_smallest_buffer_keeps_frames_whole(self):
        """At the minimum size a three-character frame is not split."""
        source = LineSource(io.BytesIO(b"L,A\nM,1\n"), max_line_length=MIN_LINE_BUFFER)
        assert list(source) == ["L,A", "M,1"]


class TestReplayLineSource:
    """Tests for decoding from a capture file."""
    
    def test_replay_lines(self, capture_file):
        """Lines are read from the capture file."""
        path = capture_file("I\r\nL,A\r\nFIN\r\n")
        with ReplayLineSource(path) as source:
            assert list(source) == ["I", "L,A", "FIN"]
    
    def test_missing_file(self, tmp_path):
        """A missing capture file is reported as a device error."""
        with pytest.raises(DeviceError):
            with ReplayLineSource(tmp_path / "missing.txt"):
                pass
    
    def test_iterate_closed_source(self, capture_file):
        """Iterating before open is an error."""
        with pytest.raises(RuntimeError):
            iter(ReplayLineSource(capture_file("I\n")))


class FakeSerial:
    """Stand-in for serial.Serial backed by a byte buffer."""
    
    instances = []
    
    def __init__(self, data: bytes = b"", **kwargs) -> None:
        self.kwargs = kwargs
        self._data = io.BytesIO(data)
        self.is_open = True
        self.flushed = False
        FakeSerial.instances.append(self)
    
    def read(self, size: int = 1) -> bytes:
        return self._data.read(size)
    
    def reset_input_buffer(self) -> None:
        self.flushed = True
    
    def close(self) -> None:
        self.is_open = False


@pytest.fixture
def fake_serial(monkeypatch):
    """Replace serial.Serial with a FakeSerial factory."""
    FakeSerial.instances = []
    
    def install(data: bytes = b""):
        monkeypatch.setattr(
            serial, "Serial", lambda **kwargs: FakeSerial(data, **kwargs)
        )
    
    return install


class TestSerialLineSource:
    """Tests for the pyserial-backed source."""
    
    def test_port_configuration(self, fake_serial):
        """The port is opened at 9600 8N1 without flow control."""
        fake_serial(b"I\nFIN\n")
        
        with SerialLineSource("/dev/ttyUSB0", settle_delay_sec=0) as source:
            assert source.is_open
            assert list(source) == ["I", "FIN"]
        
        kwargs = FakeSerial.instances[0].kwargs
        assert kwargs["port"] == "/dev/ttyUSB0"
        assert kwargs["baudrate"] == 9600
        assert kwargs["bytesize"] == serial.EIGHTBITS
        assert kwargs["parity"] == serial.PARITY_NONE
        assert kwargs["stopbits"] == serial.STOPBITS_ONE
        assert kwargs["rtscts"] is False
        assert kwargs["xonxoff"] is False
        assert kwargs["timeout"] is None
    
    def test_port_released_on_exit(self, fake_serial):
        """The port is closed when the context exits."""
        fake_serial(b"")
        
        source = SerialLineSource("/dev/ttyUSB0", settle_delay_sec=0)
        with source:
            pass
        
        assert not FakeSerial.instances[0].is_open
        assert not source.is_open
    
    def test_port_released_on_interrupt(self, fake_serial):
        """The port is closed when the session is interrupted."""
        fake_serial(b"I\n")
        
        with pytest.raises(KeyboardInterrupt):
            with SerialLineSource("/dev/ttyUSB0", settle_delay_sec=0):
                raise KeyboardInterrupt
        
        assert not FakeSerial.instances[0].is_open
    
    def test_flush_on_open(self, fake_serial):
        """Stale input is discarded when requested."""
        fake_serial(b"")
        
        with SerialLineSource("/dev/ttyUSB0", settle_delay_sec=0, flush_on_open=True):
            assert FakeSerial.instances[0].flushed
    
    def test_configure_failure_closes_port(self, monkeypatch):
        """A failure after opening closes the port and raises DeviceError."""
        class BrokenFlushSerial(FakeSerial):
            def reset_input_buffer(self) -> None:
                raise serial.SerialException("device reports readiness to read but returned no data")
        
        FakeSerial.instances = []
        monkeypatch.setattr(serial, "Serial", lambda **kwargs: BrokenFlushSerial(**kwargs))

        source = SerialLineSource("/dev/ttyUSB0", settle_delay_sec=0, flush_on_open=True)
        with pytest.raises(DeviceError):
            with source:
                pass
        
        assert not FakeSerial.instances[0].is_open
        assert not source.is_open
    
    def test_interrupt_during_settle_closes_port(self, fake_serial, monkeypatch):
        """Ctrl-C during the settle delay still releases the port."""
        fake_serial(b"I\n")
        
        def interrupted_sleep(seconds):
            raise KeyboardInterrupt
        
        monkeypatch.setattr("prt7_decoder.stream.serial_source.time.sleep", interrupted_sleep)
        
        with pytest.raises(KeyboardInterrupt):
            with SerialLineSource("/dev/ttyUSB0", settle_delay_sec=0.1):
                pass
        
        assert not FakeSerial.instances[0].is_open
    
    def test_open_failure_raises_device_error(self, monkeypatch):
        """pyserial failures are reported as DeviceError."""
        def refuse(**kwargs):
            raise serial.SerialException("could not open port")
        
        monkeypatch.setattr(serial, "Serial", refuse)
        
        with pytest.raises(DeviceError) as exc_info:
            with SerialLineSource("/dev/ttyNOPE", settle_delay_sec=0):
                pass
        
        assert exc_info.value.port == "/dev/ttyNOPE"


class TestSinks:
    """Tests for trace sinks."""
    
    def test_console_sink_writes_lines(self):
        """ConsoleSink writes one line per emit."""
        stream = io.StringIO()
        sink = ConsoleSink(stream)
        sink.emit("ROTANDO ROTOR +1")
        sink.emit("")
        assert stream.getvalue() == "ROTANDO ROTOR +1\n\n"
    
    def test_recording_sink(self):
        """RecordingSink keeps lines in order."""
        sink = RecordingSink()
        sink.emit("a")
        sink.emit("b")
        assert sink.lines == ["a", "b"]
        assert sink.text == "a\nb"
