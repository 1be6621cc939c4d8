#!/usr/bin/env python3
"""
Transmission Sender
===================

Standalone script that plays the microcontroller side of the PRT-7 link.

This script:
    1. Encodes a plaintext message into I / M / L / FIN frame lines
    2. Writes them to a serial port (pyserial) or to a capture file
    3. Optionally paces the frames like the firmware does

The capture file can be decoded offline with:
    prt7-decoder --replay capture.txt

Usage:
    python scripts/send_transmission.py "HOLA MUNDO" --output capture.txt
    python scripts/send_transmission.py "HOLA MUNDO" --rotate 0:3 --rotate 5:-7 \\
        --port /dev/ttyUSB1 --delay 0.2
"""

import argparse
import logging
import os
import sys
import time
from typing import Dict, List

import serial

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from prt7_decoder.protocol import encode_transmission


# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%S",
)
logger = logging.getLogger(__name__)


def parse_rotation(value: str) -> tuple:
    """Parse an INDEX:STEPS rotation argument."""
    try:
        index, steps = value.split(":", 1)
        return int(index), int(steps)
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"Rotation must be INDEX:STEPS, got {value!r}"
        )


def send_lines(
    lines: List[str],
    port: str,
    baudrate: int,
    delay: float,
    terminator: bytes,
) -> None:
    """Write lines to a serial port, pacing them by `delay` seconds."""
    with serial.Serial(port, baudrate, timeout=1) as link:
        # Give the receiver time to open its side
        time.sleep(2.0)
        for line in lines:
            link.write(line.encode("latin-1") + terminator)
            link.flush()
            logger.info(f"Sent: {line}")
            if delay > 0:
                time.sleep(delay)


def main():
    parser = argparse.ArgumentParser(
        description="Encode a message and send it as a PRT-7 transmission"
    )
    parser.add_argument("message", help="Plaintext to transmit")
    parser.add_argument(
        "--rotate",
        type=parse_rotation,
        action="append",
        default=[],
        metavar="INDEX:STEPS",
        help="Rotate the rotor before the character at INDEX (repeatable)",
    )
    target = parser.add_mutually_exclusive_group(required=True)
    target.add_argument("--port", help="Serial device to write to")
    target.add_argument("--output", help="Capture file to write to")
    parser.add_argument(
        "--baudrate",
        type=int,
        default=9600,
        help="Line speed (default: 9600)",
    )
    parser.add_argument(
        "--delay",
        type=float,
        default=0.0,
        help="Seconds between frames (default: 0)",
    )
    parser.add_argument(
        "--crlf",
        action="store_true",
        help="Terminate lines with CRLF instead of LF",
    )
    
    args = parser.parse_args()
    
    rotations: Dict[int, int] = {}
    for index, steps in args.rotate:
        rotations[index] = rotations.get(index, 0) + steps
    
    try:
        lines = encode_transmission(args.message, rotations)
    except ValueError as e:
        logger.error(str(e))
        sys.exit(1)
    
    terminator = b"\r\n" if args.crlf else b"\n"
    logger.info(f"Encoded {len(args.message)} characters into {len(lines)} lines")
    
    if args.output:
        with open(args.output, "wb") as f:
            for line in lines:
                f.write(line.encode("latin-1") + terminator)
        logger.info(f"Transmission written to {args.output}")
    else:
        try:
            send_lines(lines, args.port, args.baudrate, args.delay, terminator)
        except serial.SerialException as e:
            logger.error(f"Serial error: {e}")
            sys.exit(1)
    
    sys.exit(0)


if __name__ == "__main__":
    main()
