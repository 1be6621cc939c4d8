"""
Mapping Rotor
=============

Single-rotor Caesar cipher state used to decode load frames.

The rotor is conceptually the 26 uppercase letters A..Z arranged in a
circle. A rotation moves the head of the circle; the letters themselves are
never permuted. Because of that, the only observable state is the head
position (the offset k), and the mapping can be derived arithmetically:

    map(c) = ((c - 'A' + k) mod 26) + 'A'      for c in A..Z
    map(c) = c                                  otherwise

Design Rules:
    - Offset is always normalized to [0, 26)
    - Space and any character outside A..Z pass through unchanged
    - No I/O, no failure modes
"""

import logging


logger = logging.getLogger(__name__)


ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
ROTOR_SIZE = len(ALPHABET)


class Rotor:
    """
    Caesar-shift rotor over the uppercase alphabet.
    
    Attributes:
        offset: Current head position k in [0, 26)
        
    Example:
        rotor = Rotor()
        rotor.rotate(3)
        rotor.map("A")   # -> "D"
        rotor.map("!")   # -> "!"
    """
    
    __slots__ = ("_offset",)
    
    def __init__(self) -> None:
        self._offset: int = 0
    
    @property
    def offset(self) -> int:
        """Current head position in [0, 26)."""
        return self._offset
    
    def rotate(self, steps: int) -> None:
        """
        Rotate the rotor by `steps` positions.
        
        Positive values advance the head, negative values move it back.
        Python's modulo already yields a non-negative representative, so
        arbitrarily large magnitudes reduce in a single step.
        
        Args:
            steps: Number of positions to rotate (may be negative)
        """
        if steps == 0:
            return
        
        self._offset = (self._offset + steps) % ROTOR_SIZE
        logger.debug(f"Rotor rotated by {steps}, offset now {self._offset}")
    
    def map(self, char: str) -> str:
        """
        Decode a single character at the current offset.
        
        Args:
            char: Ciphertext character
            
        Returns:
            Decoded character. Space and non A..Z characters are returned
            unchanged.
        """
        if char == " ":
            return " "
        
        if len(char) != 1 or not ("A" <= char <= "Z"):
            return char
        
        position = ord(char) - ord("A")
        return ALPHABET[(self._offset + position) % ROTOR_SIZE]
    
    def __repr__(self) -> str:
        return f"Rotor(offset={self._offset})"
