"""
Cipher Module
=============

Rotor cipher state and decoded-message accumulator.

    - Rotor: Caesar-shift rotor over A..Z (integer offset)
    - MessageBuffer: Append-only decoded character sequence
"""

from prt7_decoder.cipher.rotor import ALPHABET, ROTOR_SIZE, Rotor
from prt7_decoder.cipher.buffer import MessageBuffer


__all__ = [
    "ALPHABET",
    "ROTOR_SIZE",
    "Rotor",
    "MessageBuffer",
]
