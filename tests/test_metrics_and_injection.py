# file: tests/test_metrics_and_injection.py

"""
Tests for ECC metrics and error injection utilities.
"""

import numpy as np
import pytest

from pulsar_fec.bits import bits_to_bytes, bytes_to_bits
from pulsar_fec.metrics import compute_ber, compute_code_rate, compute_redundancy_overhead
from pulsar_fec.testing_utils import corrupt_bytes, inject_bit_errors, inject_errors


class TestMetrics:
    """Test metrics computation functions."""

    def test_compute_ber_no_errors(self):
        """Identical sequences have BER 0."""
        bits = [1, 0, 1, 1, 0]
        assert compute_ber(bits, bits) == 0.0

    def test_compute_ber_single_bit(self):
        """One flip in 8 bits is BER 1/8."""
        assert compute_ber([0] * 8, [1] + [0] * 7) == 1.0 / 8

    def test_compute_ber_all_bits(self):
        """All bits flipped is BER 1."""
        assert compute_ber([0, 0, 0, 0], [1, 1, 1, 1]) == 1.0

    def test_compute_ber_empty(self):
        """Empty sequences have BER 0."""
        assert compute_ber([], []) == 0.0

    def test_compute_ber_length_mismatch(self):
        """Sequences must have equal length."""
        with pytest.raises(ValueError, match="Length mismatch"):
            compute_ber([0, 1], [0, 1, 1])

    def test_compute_redundancy_overhead(self):
        """160 encoded bits for 128 data bits is 25% overhead."""
        assert compute_redundancy_overhead(128, 160) == pytest.approx(25.0)

    def test_compute_redundancy_overhead_invalid(self):
        """Zero data or shrinking encodings are rejected."""
        with pytest.raises(ValueError):
            compute_redundancy_overhead(0, 100)

        with pytest.raises(ValueError):
            compute_redundancy_overhead(100, 50)

    def test_compute_code_rate(self):
        """Code rate is data length over encoded length."""
        assert compute_code_rate(4, 8) == 0.5

    def test_compute_code_rate_invalid(self):
        """Encoded length must be positive."""
        with pytest.raises(ValueError):
            compute_code_rate(4, 0)


class TestBitConversion:
    """Test MSB-first packing."""

    def test_bits_to_bytes_msb_first(self):
        """The first bit is the most significant."""
        assert bits_to_bytes([1, 0, 0, 0, 0, 0, 0, 1]) == b'\x81'

    def test_bits_to_bytes_pads_right(self):
        """A partial byte is padded with zeros on the right."""
        assert bits_to_bytes([1, 1]) == b'\xc0'

    def test_bytes_to_bits(self):
        """Bytes unpack MSB-first."""
        assert bytes_to_bits(b'\xa5').tolist() == [1, 0, 1, 0, 0, 1, 0, 1]

    def test_empty(self):
        """Empty input round-trips to empty output."""
        assert bits_to_bytes([]) == b''
        assert len(bytes_to_bits(b'')) == 0


class TestErrorInjection:
    """Test error injection utilities."""

    def test_inject_errors_deterministic(self):
        """The same seed gives the same corruption."""
        bits = [0] * 100
        first = inject_errors(bits, count=4, burst_length=3, seed=42)
        second = inject_errors(bits, count=4, burst_length=3, seed=42)
        assert first[0].tolist() == second[0].tolist()
        assert first[1] == second[1]

    @pytest.mark.parametrize("seed", range(20))
    def test_inject_errors_non_overlapping_bursts(self, seed):
        """Bursts never overlap and flip exactly count * burst_length bits."""
        bits = np.zeros(64, dtype=np.uint8)
        corrupted, positions = inject_errors(bits, count=5, burst_length=4, seed=seed)

        assert len(positions) == 20
        assert len(set(positions)) == 20
        assert positions == sorted(positions)
        assert int(corrupted.sum()) == 20
        # sorted positions split into runs of exactly burst_length
        for i in range(0, 20, 4):
            run = positions[i:i + 4]
            assert run == list(range(run[0], run[0] + 4))

    def test_inject_errors_fills_sequence(self):
        """Bursts may tile the whole sequence."""
        corrupted, positions = inject_errors([0] * 12, count=3, burst_length=4, seed=1)
        assert corrupted.tolist() == [1] * 12
        assert positions == list(range(12))

    def test_inject_errors_does_not_mutate_input(self):
        """The input array is left unchanged."""
        bits = np.zeros(16, dtype=np.uint8)
        inject_errors(bits, count=2, burst_length=2, seed=3)
        assert int(bits.sum()) == 0

    def test_inject_errors_zero_count(self):
        """count=0 returns an unchanged copy."""
        corrupted, positions = inject_errors([1, 0, 1], count=0)
        assert corrupted.tolist() == [1, 0, 1]
        assert positions == []

    def test_inject_errors_too_many(self):
        """Bursts that cannot fit raise ValueError."""
        with pytest.raises(ValueError, match="exceed"):
            inject_errors([0] * 10, count=3, burst_length=4)

    def test_inject_bit_errors_rate(self):
        """The error rate fixes the number of flipped bits."""
        bits = [0] * 1000
        corrupted, positions = inject_bit_errors(bits, error_rate=0.05, seed=999)
        assert len(positions) == 50
        assert compute_ber(bits, corrupted) == pytest.approx(0.05)

    def test_inject_bit_errors_invalid_rate(self):
        """Rates outside [0, 1] are rejected."""
        with pytest.raises(ValueError):
            inject_bit_errors([0, 1], error_rate=1.5)

    def test_corrupt_bytes(self):
        """Every bit of each listed byte is flipped."""
        corrupted = corrupt_bytes([0] * 24, [1])
        assert corrupted.tolist() == [0] * 8 + [1] * 8 + [0] * 8
