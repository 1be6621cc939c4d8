"""
PRT-7 Decoder
=============

Host-side decoder for the PRT-7 serial rotor-cipher protocol.

A microcontroller streams line-framed commands over a serial link:

    I          start of transmission
    L,<char>   decode one ciphertext character
    M,<int>    rotate the rotor by a signed number of positions
    FIN        end of transmission

The decoder keeps a single Caesar-shift rotor, decodes each load frame at
the current offset, and prints the reconstructed message at the end.

Components:
    - protocol: Frame parser and sender-side encoder
    - cipher: Rotor and message buffer
    - interpreter: Session loop applying frames in arrival order
    - stream: Serial/replay line sources and trace sinks

Example:
    from prt7_decoder.interpreter import Interpreter
    from prt7_decoder.stream import RecordingSink
    
    result = Interpreter(RecordingSink()).run(["I", "M,1", "L,A", "FIN"])
    result.message   # "B"
"""

__version__ = "0.1.0"
__author__ = "PRT-7 Project"

__all__ = [
    "__version__",
]
