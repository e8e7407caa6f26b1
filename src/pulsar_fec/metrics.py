# file: src/pulsar_fec/metrics.py

"""
ECC performance metrics.

Provides utilities to compute Bit Error Rate (BER), redundancy overhead and
code rate for evaluating ECC performance on bit streams.
"""

import numpy as np

from .bits import BitsLike


def compute_ber(original: BitsLike, received: BitsLike) -> float:
    """
    Compute Bit Error Rate (BER) between two bit sequences.

    BER = (number of bit errors) / (total number of bits)

    Args:
        original: Original transmitted bits
        received: Received (possibly corrupted) bits

    Returns:
        BER as a float in [0.0, 1.0]

    Raises:
        ValueError: If inputs have different lengths

    Example:
        >>> compute_ber([0, 0, 0, 0], [0, 1, 0, 0])
        0.25
    """
    original = np.asarray(original, dtype=np.uint8)
    received = np.asarray(received, dtype=np.uint8)

    if len(original) != len(received):
        raise ValueError(
            f"Length mismatch: original={len(original)}, received={len(received)}"
        )

    if len(original) == 0:
        return 0.0

    return float(np.count_nonzero(original != received)) / len(original)


def compute_redundancy_overhead(original_length: int, encoded_length: int) -> float:
    """
    Compute redundancy overhead as a percentage.

    Overhead = ((encoded_length - original_length) / original_length) * 100

    Example:
        >>> compute_redundancy_overhead(8, 16)  # Hamming(8,4)
        100.0
    """
    if original_length <= 0:
        raise ValueError(f"original_length must be > 0, got {original_length}")

    if encoded_length < original_length:
        raise ValueError(
            f"encoded_length {encoded_length} < original_length {original_length}"
        )

    return ((encoded_length - original_length) / original_length) * 100.0


def compute_code_rate(original_length: int, encoded_length: int) -> float:
    """Code rate: data length / encoded length."""
    if encoded_length <= 0:
        raise ValueError(f"encoded_length must be > 0, got {encoded_length}")
    return original_length / encoded_length
