# file: src/pulsar_fec/hamming84.py

"""
Extended Hamming(8,4) codec.

Encodes 4 data bits into 8 bits (3 Hamming parity bits + 1 overall parity
bit). Corrects any single-bit error per codeword and detects, without
correcting, any double-bit error.

Codeword layout (0-indexed): [p1, p2, d1, p3, d2, d3, d4, p4]
"""

import logging
from dataclasses import dataclass, field
from typing import List

import numpy as np

from .bits import BitsLike, as_bits, pad_bits
from .errors import ECCDecodingError, ECCEncodingError

logger = logging.getLogger(__name__)

DATA_BITS = 4
CODEWORD_BITS = 8
DATA_POSITIONS = [2, 4, 5, 6]


@dataclass
class HammingDecodeResult:
    """Outcome of decoding a Hamming(8,4) stream."""
    bits: np.ndarray
    corrected: bool
    uncorrectable: bool
    error_positions: List[int] = field(default_factory=list)  # absolute, in the encoded stream
    corrected_bits: np.ndarray = None  # encoded stream after correction
    uncorrectable_blocks: List[int] = field(default_factory=list)


def encode_hamming84(data_bits: BitsLike) -> np.ndarray:
    """
    Encode a bit sequence with Extended Hamming(8,4).

    The input is zero-padded to a multiple of 4 bits, then every nibble
    (d1, d2, d3, d4) becomes one 8-bit codeword.

    Args:
        data_bits: Sequence of 0/1 values

    Returns:
        Encoded bits, 2x the padded input length
    """
    bits = pad_bits(as_bits(data_bits, ECCEncodingError), DATA_BITS)
    if len(bits) == 0:
        return bits

    nibbles = bits.reshape(-1, DATA_BITS)
    d1, d2, d3, d4 = nibbles.T

    p1 = d1 ^ d2 ^ d4       # covers positions 1,3,5,7
    p2 = d1 ^ d3 ^ d4       # covers positions 2,3,6,7
    p3 = d2 ^ d3 ^ d4       # covers positions 4,5,6,7

    block = np.stack([p1, p2, d1, p3, d2, d3, d4], axis=1)
    p4 = np.bitwise_xor.reduce(block, axis=1)

    return np.column_stack([block, p4]).astype(np.uint8).ravel()


def _syndromes(blocks: np.ndarray) -> np.ndarray:
    s1 = blocks[:, 0] ^ blocks[:, 2] ^ blocks[:, 4] ^ blocks[:, 6]
    s2 = blocks[:, 1] ^ blocks[:, 2] ^ blocks[:, 5] ^ blocks[:, 6]
    s3 = blocks[:, 3] ^ blocks[:, 4] ^ blocks[:, 5] ^ blocks[:, 6]
    return s1.astype(np.int64) + 2 * s2 + 4 * s3


def decode_hamming84(encoded_bits: BitsLike) -> HammingDecodeResult:
    """
    Decode an Extended Hamming(8,4) stream with error correction.

    Each complete 8-bit block is classified from its syndrome and overall
    parity:

        syndrome == 0, parity == 0  -> no error
        syndrome != 0, parity == 1  -> single error at block[syndrome - 1], flipped
        syndrome == 0, parity == 1  -> error in the overall parity bit, flipped
        syndrome != 0, parity == 0  -> double error, detected but not corrected

    A trailing partial block is ignored. Three or more errors in a block may
    be miscorrected silently; that is a property of the code.

    Args:
        encoded_bits: Encoded stream from encode_hamming84()

    Returns:
        HammingDecodeResult with data bits (4 per block), correction flags,
        flipped stream positions and the corrected encoded stream
    """
    received = as_bits(encoded_bits, ECCDecodingError)
    num_blocks = len(received) // CODEWORD_BITS

    corrected_bits = received.copy()
    blocks = corrected_bits[:num_blocks * CODEWORD_BITS].reshape(-1, CODEWORD_BITS)

    syndrome = _syndromes(blocks)
    parity = np.bitwise_xor.reduce(blocks, axis=1) if num_blocks else np.zeros(0, dtype=np.uint8)

    single = np.flatnonzero((syndrome != 0) & (parity == 1))
    parity_only = np.flatnonzero((syndrome == 0) & (parity == 1))
    double = np.flatnonzero((syndrome != 0) & (parity == 0))

    # blocks is a view, so flips land in corrected_bits too
    blocks[single, syndrome[single] - 1] ^= 1
    blocks[parity_only, CODEWORD_BITS - 1] ^= 1

    positions = np.concatenate([
        single * CODEWORD_BITS + (syndrome[single] - 1),
        parity_only * CODEWORD_BITS + (CODEWORD_BITS - 1),
    ])
    error_positions = sorted(int(p) for p in positions)

    if len(double):
        logger.warning(
            "Hamming(8,4): %d of %d blocks have uncorrectable double-bit errors",
            len(double), num_blocks
        )

    return HammingDecodeResult(
        bits=blocks[:, DATA_POSITIONS].ravel().copy(),
        corrected=bool(error_positions),
        uncorrectable=bool(len(double)),
        error_positions=error_positions,
        corrected_bits=corrected_bits,
        uncorrectable_blocks=[int(b) for b in double],
    )
