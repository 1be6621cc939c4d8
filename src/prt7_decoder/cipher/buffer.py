"""
Message Buffer
==============

Append-only accumulator for decoded characters.

Each load frame contributes exactly one character. The buffer is rendered
once when the session ends.
"""

from typing import List


class MessageBuffer:
    """
    Ordered, append-only sequence of decoded characters.
    
    The i-th appended character is the i-th character of `render()`.
    """
    
    __slots__ = ("_chars",)
    
    def __init__(self) -> None:
        self._chars: List[str] = []
    
    def append(self, char: str) -> None:
        """Append one decoded character to the end of the message."""
        self._chars.append(char)
    
    def render(self) -> str:
        """Return all characters in insertion order as a single string."""
        return "".join(self._chars)
    
    def __len__(self) -> int:
        return len(self._chars)
    
    def __repr__(self) -> str:
        return f"MessageBuffer(length={len(self._chars)})"
