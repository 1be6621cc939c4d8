"""
Frame Interpreter
=================

Top-level read-process-write loop for one PRT-7 transmission.

For every non-empty line, in arrival order:
    1. "I..."   -> start banner, phase RUNNING (advisory only)
    2. "FIN..." -> end banner, phase FINISHED, loop exits
    3. else     -> parse; apply to rotor/buffer; trace the result
                   malformed frames are traced and skipped

When the session finishes the decoded message is written to the sink.

End of Stream:
    If the line source ends without "FIN", the eof_policy decides:
        "flush": log a warning and emit the partial message (default)
        "error": raise UnexpectedEOFError carrying the partial message

Design Rules:
    - Single-threaded and synchronous
    - The interpreter exclusively owns its Rotor and MessageBuffer
    - Malformed frames never change rotor or buffer state
"""

import logging
from typing import Iterable

from prt7_decoder.cipher.buffer import MessageBuffer
from prt7_decoder.cipher.rotor import Rotor
from prt7_decoder.errors import FrameParseError, UnexpectedEOFError
from prt7_decoder.interpreter.apply import apply_frame
from prt7_decoder.models.frame import LoadFrame
from prt7_decoder.models.session import SessionPhase, SessionResult
from prt7_decoder.protocol.encoder import END_MARKER, START_MARKER
from prt7_decoder.protocol.parser import parse_frame
from prt7_decoder.stream.sink import OutputSink


logger = logging.getLogger(__name__)


START_BANNER = "--- Inicio de transmision ---"
END_BANNER = "--- Fin de transmision ---"
MESSAGE_HEADER = "  --- Mensaje Decodificado ---:"
MALFORMED_TRACE = "ERROR: Trama mal formada"

EOF_POLICY_FLUSH = "flush"
EOF_POLICY_ERROR = "error"
EOF_POLICIES = (EOF_POLICY_FLUSH, EOF_POLICY_ERROR)


class SessionMetrics:
    """Counters for one interpreter session."""
    
    __slots__ = (
        "lines_received",
        "load_frames",
        "rotate_frames",
        "parse_errors",
        "start_markers",
    )
    
    def __init__(self) -> None:
        self.lines_received: int = 0
        self.load_frames: int = 0
        self.rotate_frames: int = 0
        self.parse_errors: int = 0
        self.start_markers: int = 0
    
    def to_dict(self) -> dict:
        """Export metrics as dict."""
        return {
            "lines_received": self.lines_received,
            "load_frames": self.load_frames,
            "rotate_frames": self.rotate_frames,
            "parse_errors": self.parse_errors,
            "start_markers": self.start_markers,
        }


class Interpreter:
    """
    Frame interpreter for a single decoding session.
    
    Attributes:
        rotor: Session rotor (offset starts at 0)
        buffer: Decoded message accumulator
        metrics: Session counters
        phase: Current session phase
        
    Example:
        sink = ConsoleSink()
        interpreter = Interpreter(sink)
        
        with SerialLineSource("/dev/ttyUSB0") as source:
            result = interpreter.run(source)
        
        print(result.message)
    """
    
    def __init__(
        self,
        sink: OutputSink,
        strict_load: bool = True,
        eof_policy: str = EOF_POLICY_FLUSH,
    ) -> None:
        """
        Initialize interpreter.
        
        Args:
            sink: Destination for trace lines and the final message
            strict_load: Reject trailing characters after a load character
            eof_policy: "flush" or "error" (see module docstring)
        """
        if eof_policy not in EOF_POLICIES:
            raise ValueError(f"Unknown eof_policy: {eof_policy!r}")
        
        self.sink = sink
        self.strict_load = strict_load
        self.eof_policy = eof_policy
        
        self.rotor = Rotor()
        self.buffer = MessageBuffer()
        self.metrics = SessionMetrics()
        
        self._phase = SessionPhase.AWAITING_START
        self._ended_by_eof: bool = False
    
    @property
    def phase(self) -> SessionPhase:
        """Current session phase."""
        return self._phase
    
    @property
    def finished(self) -> bool:
        """Whether the session has reached FINISHED."""
        return self._phase is SessionPhase.FINISHED
    
    def run(self, lines: Iterable[str]) -> SessionResult:
        """
        Consume lines until the end marker or end of stream.
        
        Args:
            lines: Iterable of protocol lines (terminators stripped)
            
        Returns:
            SessionResult with the decoded message and counters
            
        Raises:
            UnexpectedEOFError: Stream ended before "FIN" and
                eof_policy is "error"
        """
        logger.info("Decoding session started")
        
        for line in lines:
            if self.feed(line):
                break
        else:
            self._handle_eof()
        
        self.emit_message()
        
        result = self.result()
        logger.info(
            f"Decoding session finished: {len(self.buffer)} characters, "
            f"{self.metrics.parse_errors} malformed frames, "
            f"offset={self.rotor.offset}"
        )
        return result
    
    def feed(self, line: str) -> bool:
        """
        Process one line.
        
        Args:
            line: Protocol line without terminators
            
        Returns:
            True once the end marker has been received
        """
        if self.finished:
            raise RuntimeError("Session already finished")
        
        if not line:
            return False
        
        self.metrics.lines_received += 1
        
        if line[0] == START_MARKER:
            self._handle_start()
            return False
        
        if line.startswith(END_MARKER):
            self._handle_end()
            return True
        
        try:
            frame = parse_frame(line, strict_load=self.strict_load)
        except FrameParseError as e:
            self.metrics.parse_errors += 1
            logger.warning(f"Skipping malformed frame: {e.reason} ({line!r})")
            self.sink.emit(self._frame_trace(line, MALFORMED_TRACE))
            return False
        
        trace = apply_frame(frame, self.rotor, self.buffer)
        
        if isinstance(frame, LoadFrame):
            self.metrics.load_frames += 1
        else:
            self.metrics.rotate_frames += 1
        
        self.sink.emit(self._frame_trace(line, trace))
        self.sink.emit("")
        return False
    
    def result(self) -> SessionResult:
        """Snapshot of the session outcome."""
        return SessionResult(
            message=self.buffer.render(),
            phase=self._phase,
            ended_by_eof=self._ended_by_eof,
            offset=self.rotor.offset,
            **self.metrics.to_dict(),
        )
    
    def _handle_start(self) -> None:
        self.metrics.start_markers += 1
        if self._phase is SessionPhase.RUNNING:
            logger.debug("Repeated start marker while running")
        
        self._phase = SessionPhase.RUNNING
        self.sink.emit(START_BANNER)
        self.sink.emit("")
    
    def _handle_end(self) -> None:
        self._phase = SessionPhase.FINISHED
        self.sink.emit("")
        self.sink.emit(END_BANNER)
    
    def _handle_eof(self) -> None:
        self._ended_by_eof = True
        logger.warning(
            f"Line source ended before {END_MARKER!r} marker "
            f"({len(self.buffer)} characters decoded)"
        )
        
        if self.eof_policy == EOF_POLICY_ERROR:
            raise UnexpectedEOFError(self.buffer.render())
        
        self._phase = SessionPhase.FINISHED
    
    def emit_message(self) -> None:
        """Write the message header and the decoded message to the sink."""
        self.sink.emit(MESSAGE_HEADER)
        self.sink.emit(self.buffer.render())
    
    @staticmethod
    def _frame_trace(line: str, message: str) -> str:
        return f"Trama: [{line}] -> {message}"
