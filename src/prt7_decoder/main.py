"""
PRT-7 Decoder Main Application
==============================

Command-line entry point for the PRT-7 serial decoder.

Flow:
    1. Load configuration (YAML + environment) and set up logging
    2. Ask the operator for the serial device (unless --port/--replay)
    3. Open the line source; exit 1 if the device cannot be opened
    4. Run the interpreter until "FIN" (or end of stream)
    5. Print the decoded message and exit 0

Exit Codes:
    0   - Transmission decoded
    1   - Device (or replay file) could not be opened
    2   - Stream ended before "FIN" with eof_policy=error
    130 - Interrupted by the operator (partial message is printed)

Usage:
    prt7-decoder
    prt7-decoder --port /dev/ttyACM0
    prt7-decoder --replay capture.txt --eof-policy error
"""

import argparse
import logging
import sys
from typing import List, Optional, Union

from prt7_decoder import __version__
from prt7_decoder.config import Settings, load_config, settings, setup_logging
from prt7_decoder.errors import DeviceError, UnexpectedEOFError
from prt7_decoder.interpreter import EOF_POLICIES, Interpreter
from prt7_decoder.stream import (
    ConsoleSink,
    OutputSink,
    ReplayLineSource,
    SerialLineSource,
)


logger = logging.getLogger(__name__)


TITLE = "  DECODIFICADOR PRT-7"
SHUTDOWN_MESSAGE = "Sistema apagado correctamente."

EXIT_OK = 0
EXIT_DEVICE_ERROR = 1
EXIT_UNEXPECTED_EOF = 2
EXIT_INTERRUPTED = 130


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="prt7-decoder",
        description="Decode a PRT-7 rotor-cipher transmission from a serial port",
    )
    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "--port",
        help="Serial device path (prompted for when omitted)",
    )
    source.add_argument(
        "--replay",
        metavar="FILE",
        help="Decode a captured transmission file instead of a serial port",
    )
    parser.add_argument(
        "--config",
        metavar="FILE",
        help="Path to config.yaml",
    )
    parser.add_argument(
        "--lenient-load",
        action="store_true",
        help="Accept trailing characters after a load character",
    )
    parser.add_argument(
        "--eof-policy",
        choices=EOF_POLICIES,
        help="What to do if the stream ends before FIN",
    )
    parser.add_argument(
        "--log-level",
        help="Override the configured log level",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser.parse_args(argv)


def prompt_for_port(sink: OutputSink, default_port: str) -> str:
    """
    Ask the operator for the serial device path.
    
    An empty answer (or closed stdin) selects the configured default.
    """
    sink.emit("Ingrese el puerto serial del Arduino:")
    sink.emit(f"(Puerto: {default_port})")
    
    try:
        port = input().strip()
    except EOFError:
        port = ""
    
    return port or default_port


def build_source(
    args: argparse.Namespace,
    config: Settings,
    sink: OutputSink,
) -> Union[SerialLineSource, ReplayLineSource]:
    """Create the line source selected on the command line."""
    if args.replay:
        return ReplayLineSource(
            args.replay,
            encoding=config.serial.encoding,
            max_line_length=config.serial.max_line_length,
        )
    
    port = args.port or prompt_for_port(sink, config.serial.port)
    return SerialLineSource(
        port,
        baudrate=config.serial.baudrate,
        read_timeout_sec=config.serial.read_timeout_sec,
        settle_delay_sec=config.serial.settle_delay_sec,
        flush_on_open=config.serial.flush_on_open,
        encoding=config.serial.encoding,
        max_line_length=config.serial.max_line_length,
    )


def main(argv: Optional[List[str]] = None, sink: Optional[OutputSink] = None) -> int:
    """
    Run one decoding session.
    
    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])
        sink: Trace destination (defaults to stdout)
        
    Returns:
        Process exit code
    """
    args = parse_args(argv)
    
    config = load_config(args.config) if args.config else settings.model_copy(deep=True)
    if args.log_level:
        config.logging.level = args.log_level
    setup_logging(config)
    
    if sink is None:
        sink = ConsoleSink()
    
    sink.emit(TITLE)
    
    source = build_source(args, config, sink)
    target = args.replay or source.port
    
    interpreter = Interpreter(
        sink,
        strict_load=config.decoder.strict_load and not args.lenient_load,
        eof_policy=args.eof_policy or config.decoder.eof_policy,
    )
    
    sink.emit("")
    sink.emit(f"Conectando al puerto {target}...")
    
    try:
        with source:
            sink.emit("Conexion establecida!")
            interpreter.run(source)
    except DeviceError as e:
        logger.error(str(e))
        sink.emit("")
        sink.emit(f"ERROR: No se pudo abrir el puerto {target}")
        return EXIT_DEVICE_ERROR
    except UnexpectedEOFError as e:
        logger.error(str(e))
        sink.emit("")
        sink.emit("ERROR: Transmision interrumpida antes de FIN")
        return EXIT_UNEXPECTED_EOF
    except KeyboardInterrupt:
        logger.warning("Interrupted by operator, emitting partial message")
        sink.emit("")
        interpreter.emit_message()
        return EXIT_INTERRUPTED
    
    sink.emit("")
    sink.emit(SHUTDOWN_MESSAGE)
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
