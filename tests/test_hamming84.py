# file: tests/test_hamming84.py

"""
Unit tests for the Extended Hamming(8,4) codec.

Test coverage:
    - Codeword layout and padding
    - Zero-error round trip
    - Single-bit correction at every position
    - Double-bit detection
    - Partial trailing blocks and absolute error positions
"""

import itertools

import numpy as np
import pytest

from pulsar_fec.errors import ECCDecodingError, ECCEncodingError
from pulsar_fec.hamming84 import decode_hamming84, encode_hamming84

ALL_NIBBLES = [list(n) for n in itertools.product([0, 1], repeat=4)]


class TestEncode:
    """Test Hamming(8,4) encoding."""

    def test_known_codeword(self):
        """[1,0,1,1] -> [p1,p2,d1,p3,d2,d3,d4,p4] = [0,1,1,0,0,1,1,0]."""
        encoded = encode_hamming84([1, 0, 1, 1])
        assert encoded.tolist() == [0, 1, 1, 0, 0, 1, 1, 0]

    def test_zero_nibble(self):
        """The zero nibble encodes to the zero codeword."""
        assert encode_hamming84([0, 0, 0, 0]).tolist() == [0] * 8

    def test_codewords_have_even_parity(self):
        """p4 makes every codeword even weight."""
        for nibble in ALL_NIBBLES:
            assert int(encode_hamming84(nibble).sum()) % 2 == 0

    def test_data_bits_at_positions_2_4_5_6(self):
        """d1..d4 sit at positions 2, 4, 5, 6."""
        for nibble in ALL_NIBBLES:
            encoded = encode_hamming84(nibble)
            assert encoded[[2, 4, 5, 6]].tolist() == nibble

    def test_minimum_distance_is_four(self):
        """Any two distinct codewords differ in at least 4 bits."""
        words = [encode_hamming84(n) for n in ALL_NIBBLES]
        for a, b in itertools.combinations(words, 2):
            assert int(np.count_nonzero(a != b)) >= 4

    def test_pads_to_multiple_of_four(self):
        """A partial nibble is zero-padded before encoding."""
        encoded = encode_hamming84([1, 1, 1, 1, 1])
        assert len(encoded) == 16
        # second nibble is [1, 0, 0, 0]
        assert encoded[8:].tolist() == encode_hamming84([1, 0, 0, 0]).tolist()

    def test_empty_input(self):
        """Empty input encodes to an empty stream."""
        assert len(encode_hamming84([])) == 0

    def test_output_dtype(self):
        """Bits come back as uint8."""
        assert encode_hamming84([1, 0, 1, 0]).dtype == np.uint8

    def test_rejects_non_binary(self):
        """Values other than 0/1 are an encoding error."""
        with pytest.raises(ECCEncodingError, match="0/1"):
            encode_hamming84([0, 2, 1, 0])


class TestDecode:
    """Test Hamming(8,4) decoding and correction."""

    def test_roundtrip_no_errors(self):
        """A clean stream decodes to the original data."""
        data = [1, 0, 1, 1, 0, 0, 1, 0, 1, 1, 1, 1]
        result = decode_hamming84(encode_hamming84(data))
        assert result.bits.tolist() == data
        assert not result.corrected
        assert not result.uncorrectable
        assert result.error_positions == []

    def test_example_flip_bit_two(self):
        """Flipping d1 of [1,0,1,1] is corrected at position 2."""
        encoded = encode_hamming84([1, 0, 1, 1])
        encoded[2] ^= 1
        result = decode_hamming84(encoded)
        assert result.bits.tolist() == [1, 0, 1, 1]
        assert result.corrected
        assert result.error_positions == [2]

    @pytest.mark.parametrize("position", range(8))
    def test_single_bit_correction_every_position(self, position):
        """Any single flip in any codeword is corrected."""
        for nibble in ALL_NIBBLES:
            encoded = encode_hamming84(nibble)
            original = encoded.copy()
            encoded[position] ^= 1

            result = decode_hamming84(encoded)

            assert result.bits.tolist() == nibble
            assert result.corrected
            assert not result.uncorrectable
            assert result.error_positions == [position]
            assert result.corrected_bits.tolist() == original.tolist()

    @pytest.mark.parametrize("pair", list(itertools.combinations(range(8), 2)))
    def test_double_bit_error_detected(self, pair):
        """Every pair of flips is detected, never corrected."""
        for nibble in ALL_NIBBLES:
            encoded = encode_hamming84(nibble)
            for p in pair:
                encoded[p] ^= 1

            result = decode_hamming84(encoded)

            assert result.uncorrectable
            assert not result.corrected
            assert result.uncorrectable_blocks == [0]

    def test_error_positions_are_absolute(self):
        """Positions index the whole encoded stream."""
        data = [1, 0, 1, 1] * 4
        encoded = encode_hamming84(data)
        encoded[3] ^= 1      # block 0
        encoded[8 + 7] ^= 1  # block 1, overall parity bit
        encoded[24 + 5] ^= 1  # block 3

        result = decode_hamming84(encoded)

        assert result.bits.tolist() == data
        assert result.error_positions == [3, 15, 29]

    def test_mixed_correctable_and_uncorrectable(self):
        """Blocks are classified independently."""
        data = [0, 1, 1, 0] * 3
        encoded = encode_hamming84(data)
        encoded[0] ^= 1                   # single error, block 0
        encoded[9] ^= 1                   # double error, block 1
        encoded[12] ^= 1

        result = decode_hamming84(encoded)

        assert result.corrected
        assert result.uncorrectable
        assert result.uncorrectable_blocks == [1]
        assert result.bits[:4].tolist() == [0, 1, 1, 0]
        assert result.bits[8:].tolist() == [0, 1, 1, 0]

    def test_trailing_partial_block_ignored(self):
        """Bits after the last full block are not decoded."""
        encoded = np.concatenate([encode_hamming84([1, 1, 0, 1]), [1, 0, 1]])
        result = decode_hamming84(encoded)
        assert result.bits.tolist() == [1, 1, 0, 1]
        assert len(result.corrected_bits) == 11

    def test_input_not_mutated(self):
        """Correction works on a copy."""
        encoded = encode_hamming84([1, 0, 0, 1])
        encoded[4] ^= 1
        snapshot = encoded.copy()
        decode_hamming84(encoded)
        assert encoded.tolist() == snapshot.tolist()

    def test_accepts_plain_list(self):
        """Lists are accepted as well as arrays."""
        result = decode_hamming84([0, 1, 1, 0, 0, 1, 1, 0])
        assert result.bits.tolist() == [1, 0, 1, 1]

    def test_empty_input(self):
        """Empty input decodes to nothing, with no errors."""
        result = decode_hamming84([])
        assert len(result.bits) == 0
        assert not result.corrected
        assert not result.uncorrectable

    def test_rejects_non_binary(self):
        """Values other than 0/1 are a decoding error."""
        with pytest.raises(ECCDecodingError):
            decode_hamming84([0, 1, 3, 0, 0, 0, 0, 0])
