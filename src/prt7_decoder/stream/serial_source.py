"""
Serial Line Source
==================

PRT-7 serial link access via pyserial.

This module:
    - Opens the serial device at 9600 baud, 8N1, no flow control
    - Waits a short settle delay for the microcontroller to reset
    - Yields protocol lines through LineSource
    - Releases the port on every exit path (context manager)

Design Rules:
    - Raw mode: bytes are not canonicalised by the driver
    - Any failure to open the device is reported as DeviceError
    - read_timeout_sec=None blocks forever on reads; with a timeout, a read
      that returns nothing is treated as end of stream
"""

import logging
import time
from typing import Iterator, Optional

import serial

from prt7_decoder.errors import DeviceError
from prt7_decoder.stream.line_source import (
    DEFAULT_ENCODING,
    DEFAULT_MAX_LINE_LENGTH,
    LineSource,
)


logger = logging.getLogger(__name__)


DEFAULT_BAUDRATE = 9600
DEFAULT_SETTLE_DELAY_SEC = 0.1


class SerialLineSource:
    """
    Context-managed line source over a serial device.
    
    Attributes:
        port: Device path (e.g. /dev/ttyUSB0)
        baudrate: Line speed
        read_timeout_sec: Per-read timeout (None = block forever)
        is_open: Whether the device is currently open
        
    Example:
        with SerialLineSource("/dev/ttyUSB0") as source:
            for line in source:
                print(line)
    """
    
    def __init__(
        self,
        port: str,
        baudrate: int = DEFAULT_BAUDRATE,
        read_timeout_sec: Optional[float] = None,
        settle_delay_sec: float = DEFAULT_SETTLE_DELAY_SEC,
        flush_on_open: bool = False,
        encoding: str = DEFAULT_ENCODING,
        max_line_length: int = DEFAULT_MAX_LINE_LENGTH,
    ) -> None:
        """
        Initialize serial line source.
        
        Args:
            port: Device path
            baudrate: Line speed in baud
            read_timeout_sec: Per-read timeout, None to block forever
            settle_delay_sec: Delay after opening before reading
            flush_on_open: Discard bytes buffered before the session starts
            encoding: Line text encoding
            max_line_length: Line buffer size
        """
        self.port = port
        self.baudrate = baudrate
        self.read_timeout_sec = read_timeout_sec
        self.settle_delay_sec = settle_delay_sec
        self.flush_on_open = flush_on_open
        self.encoding = encoding
        self.max_line_length = max_line_length
        
        self._serial: Optional[serial.Serial] = None
    
    @property
    def is_open(self) -> bool:
        """Whether the serial device is open."""
        return self._serial is not None and self._serial.is_open
    
    def open(self) -> None:
        """
        Open and configure the serial device.
        
        Raises:
            DeviceError: If the device cannot be opened or configured
        """
        logger.info(f"Opening serial device {self.port} at {self.baudrate} baud")
        
        try:
            self._serial = serial.Serial(
                port=self.port,
                baudrate=self.baudrate,
                bytesize=serial.EIGHTBITS,
                parity=serial.PARITY_NONE,
                stopbits=serial.STOPBITS_ONE,
                timeout=self.read_timeout_sec,
                xonxoff=False,
                rtscts=False,
                dsrdtr=False,
            )
        except (serial.SerialException, ValueError, OSError) as e:
            logger.error(f"Failed to open {self.port}: {e}")
            raise DeviceError(self.port, str(e)) from e
        
        # __exit__ never runs when __enter__ raises, so close here
        try:
            if self.settle_delay_sec > 0:
                time.sleep(self.settle_delay_sec)
            
            if self.flush_on_open:
                self._serial.reset_input_buffer()
        except (serial.SerialException, OSError) as e:
            logger.error(f"Failed to configure {self.port}: {e}")
            self.close()
            raise DeviceError(self.port, str(e)) from e
        except BaseException:
            self.close()
            raise
        
        logger.info(f"Serial device {self.port} open")
    
    def close(self) -> None:
        """Close the serial device if open."""
        if self._serial is not None:
            try:
                self._serial.close()
            finally:
                self._serial = None
            logger.info(f"Serial device {self.port} closed")
    
    def __iter__(self) -> Iterator[str]:
        if self._serial is None:
            raise RuntimeError("SerialLineSource is not open")
        return iter(LineSource(self._serial, self.encoding, self.max_line_length))
    
    def __enter__(self) -> "SerialLineSource":
        self.open()
        return self
    
    def __exit__(self, *args) -> None:
        self.close()
