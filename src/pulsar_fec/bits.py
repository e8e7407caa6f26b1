# file: src/pulsar_fec/bits.py

"""
Bit/byte conversion utilities.

Bit sequences are 1-D numpy arrays of dtype uint8 holding 0/1, one element
per bit, so interleaving and error reporting stay bit-addressable.
Bytes are packed MSB-first.
"""

from typing import Iterable, Type, Union

import numpy as np

from .errors import ECCError

BitsLike = Union[np.ndarray, Iterable[int]]


def as_bits(bits: BitsLike, error_cls: Type[ECCError] = ECCError) -> np.ndarray:
    """
    Normalize any 0/1 sequence into a fresh uint8 bit array.

    Args:
        bits: List, tuple or array of 0/1 integers
        error_cls: Exception type raised for malformed input

    Returns:
        1-D uint8 array (always a copy, never a view of the input)

    Raises:
        error_cls: If input is not one-dimensional or holds values other than 0/1
    """
    try:
        arr = np.array(list(bits) if not isinstance(bits, np.ndarray) else bits, dtype=np.int64)
    except (TypeError, ValueError) as e:
        raise error_cls(f"Bit sequence must contain integers, got {type(bits)}") from e

    if arr.size == 0:
        return np.zeros(0, dtype=np.uint8)
    if arr.ndim != 1:
        raise error_cls(f"Bit sequence must be 1-D, got shape {arr.shape}")
    if np.any((arr != 0) & (arr != 1)):
        raise error_cls("Bit sequence must contain only 0/1 values")

    return arr.astype(np.uint8)


def pad_bits(bits: np.ndarray, multiple: int) -> np.ndarray:
    """Zero-pad bits on the right to a multiple of `multiple`."""
    remainder = len(bits) % multiple
    if remainder == 0:
        return bits
    return np.concatenate([bits, np.zeros(multiple - remainder, dtype=np.uint8)])


def bits_to_bytes(bits: BitsLike) -> bytes:
    """
    Pack bits into bytes (big-endian: MSB first).

    If the number of bits is not a multiple of 8, the last byte is padded
    with zeros on the right.
    """
    bits = np.asarray(bits, dtype=np.uint8) & 1
    if len(bits) == 0:
        return b''
    return np.packbits(bits, bitorder='big').tobytes()


def bytes_to_bits(data: Union[bytes, bytearray, Iterable[int]]) -> np.ndarray:
    """Unpack bytes into a uint8 bit array, MSB first."""
    buf = np.frombuffer(bytes(data), dtype=np.uint8)
    if len(buf) == 0:
        return np.zeros(0, dtype=np.uint8)
    return np.unpackbits(buf, bitorder='big')
