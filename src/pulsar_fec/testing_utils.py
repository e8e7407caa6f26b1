# file: src/pulsar_fec/testing_utils.py

"""
Testing utilities for the FEC codec.

Provides error injection for validation and robustness testing.
Used only in test/evaluation contexts.
"""

from typing import Iterable, List, Optional, Tuple

import numpy as np

from .bits import BitsLike, as_bits


def inject_errors(
    bits: BitsLike,
    count: int,
    burst_length: int = 1,
    seed: Optional[int] = None
) -> Tuple[np.ndarray, List[int]]:
    """
    Flip `count` non-overlapping bursts of `burst_length` consecutive bits.

    Burst start offsets are drawn from the slots of a random partition, so
    bursts never overlap and every burst flips exactly `burst_length` bits.

    Args:
        bits: Original bits
        count: Number of bursts
        burst_length: Length of each burst in bits
        seed: Random seed for reproducibility

    Returns:
        (corrupted bits, sorted list of flipped indices)

    Raises:
        ValueError: If the bursts cannot fit into the sequence

    Example:
        >>> corrupted, flipped = inject_errors([0] * 16, count=2, burst_length=3, seed=1)
        >>> len(flipped)
        6
    """
    corrupted = as_bits(bits, ValueError)
    if count < 0 or burst_length < 1:
        raise ValueError(f"Need count >= 0 and burst_length >= 1, got {count}, {burst_length}")
    if count * burst_length > len(corrupted):
        raise ValueError("Total burst bits exceed data length")
    if count == 0:
        return corrupted, []

    rng = np.random.default_rng(seed)

    # Place `count` bursts among `slack` free bits: choose gap boundaries
    # in the compressed sequence, then expand each chosen slot by the
    # lengths of the bursts before it.
    slack = len(corrupted) - count * burst_length
    slots = np.sort(rng.choice(slack + count, size=count, replace=False))
    starts = slots + np.arange(count) * (burst_length - 1)

    positions = []
    for start in starts:
        for offset in range(burst_length):
            positions.append(int(start) + offset)

    corrupted[positions] ^= 1
    return corrupted, sorted(positions)


def inject_bit_errors(
    bits: BitsLike,
    error_rate: float,
    seed: Optional[int] = None
) -> Tuple[np.ndarray, List[int]]:
    """
    Flip a random `error_rate` fraction of bits (distinct positions).

    Returns:
        (corrupted bits, sorted list of flipped indices)
    """
    if not 0.0 <= error_rate <= 1.0:
        raise ValueError(f"error_rate must be in [0, 1], got {error_rate}")

    corrupted = as_bits(bits, ValueError)
    num_errors = int(len(corrupted) * error_rate)

    rng = np.random.default_rng(seed)
    positions = np.sort(rng.choice(len(corrupted), size=num_errors, replace=False))
    corrupted[positions] ^= 1
    return corrupted, [int(p) for p in positions]


def corrupt_bytes(bits: BitsLike, byte_positions: Iterable[int]) -> np.ndarray:
    """Invert all 8 bits of each listed byte (one RS symbol error per byte)."""
    corrupted = as_bits(bits, ValueError)
    for pos in byte_positions:
        corrupted[pos * 8:(pos + 1) * 8] ^= 1
    return corrupted
