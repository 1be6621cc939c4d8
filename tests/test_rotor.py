"""
Rotor and Message Buffer Tests
==============================

Rotation arithmetic, character mapping laws, and append ordering.
"""

import string

import pytest

from prt7_decoder.cipher import ALPHABET, MessageBuffer, Rotor


class TestRotation:
    """Tests for rotor offset arithmetic."""
    
    def test_initial_offset_is_zero(self):
        """A new rotor starts at offset 0."""
        assert Rotor().offset == 0
    
    @pytest.mark.parametrize(
        "steps",
        [
            [1],
            [-1],
            [3, -3],
            [25, 1],
            [27],
            [-27],
            [1000, -999, 5],
            [2 ** 31 - 1],
            [-(2 ** 31)],
            [13, 13, 13, -40],
        ],
    )
    def test_rotation_closure(self, steps):
        """Offset equals the non-negative sum of all rotations mod 26."""
        rotor = Rotor()
        for n in steps:
            rotor.rotate(n)
        assert rotor.offset == sum(steps) % 26
        assert 0 <= rotor.offset < 26
    
    @pytest.mark.parametrize("steps", [0, 26, -26, 52, -260])
    def test_rotation_identity(self, steps):
        """Multiples of 26 leave the offset unchanged."""
        rotor = Rotor()
        rotor.rotate(7)
        rotor.rotate(steps)
        assert rotor.offset == 7
    
    @pytest.mark.parametrize("steps", [1, 5, 25, 26, 100, -3, -77])
    def test_rotation_inverse(self, steps):
        """rotate(n) followed by rotate(-n) restores the offset."""
        rotor = Rotor()
        rotor.rotate(11)
        rotor.rotate(steps)
        rotor.rotate(-steps)
        assert rotor.offset == 11
    
    def test_negative_rotation_wraps(self):
        """Rotating back from 0 lands on 25."""
        rotor = Rotor()
        rotor.rotate(-1)
        assert rotor.offset == 25


class TestMapping:
    """Tests for character decoding."""
    
    def test_identity_at_zero(self):
        """At offset 0 every letter maps to itself."""
        rotor = Rotor()
        assert "".join(rotor.map(c) for c in ALPHABET) == ALPHABET
    
    def test_shift_by_one(self):
        """Offset 1 shifts letters forward and wraps Z to A."""
        rotor = Rotor()
        rotor.rotate(1)
        assert rotor.map("A") == "B"
        assert rotor.map("B") == "C"
        assert rotor.map("Z") == "A"
    
    @pytest.mark.parametrize("offset", range(26))
    def test_bijection_at_fixed_offset(self, offset):
        """Mapping A..Z is a permutation of A..Z at every offset."""
        rotor = Rotor()
        rotor.rotate(offset)
        mapped = [rotor.map(c) for c in ALPHABET]
        assert sorted(mapped) == list(ALPHABET)
        assert rotor.map("A") == ALPHABET[offset]
    
    @pytest.mark.parametrize("offset", [0, 1, 13, 25])
    def test_non_letters_pass_through(self, offset):
        """Space, lowercase, digits and punctuation are returned unchanged."""
        rotor = Rotor()
        rotor.rotate(offset)
        passthrough = [chr(b) for b in range(256) if chr(b) not in string.ascii_uppercase]
        for char in passthrough:
            assert rotor.map(char) == char
    
    def test_space_passes_through(self):
        """Space is never encrypted."""
        rotor = Rotor()
        rotor.rotate(5)
        assert rotor.map(" ") == " "
    
    def test_multi_character_input_unchanged(self):
        """Only single characters are mapped."""
        rotor = Rotor()
        rotor.rotate(2)
        assert rotor.map("AB") == "AB"


class TestMessageBuffer:
    """Tests for the decoded message accumulator."""
    
    def test_empty_render(self):
        """A new buffer renders as the empty string."""
        buffer = MessageBuffer()
        assert buffer.render() == ""
        assert len(buffer) == 0
    
    def test_append_order_preserved(self):
        """Characters render in insertion order."""
        buffer = MessageBuffer()
        for char in "HOLA !":
            buffer.append(char)
        assert buffer.render() == "HOLA !"
        assert len(buffer) == 6
