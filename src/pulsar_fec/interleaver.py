# file: src/pulsar_fec/interleaver.py

"""
Bit-level block interleaver.

Bits are written row-wise into a rows x cols matrix (zero-padded to fill
it) and read out column-wise. A contiguous burst in the channel therefore
lands in up to `rows` different codewords, each of which only has to
correct a small slice of it.

interleave/deinterleave are exact inverses on the padded matrix.
"""

import logging
import math
from typing import Any, Dict, Optional

import numpy as np

from .bits import BitsLike, as_bits
from .errors import ECCConfigurationError
from .results import ECCMode, InterleavingConfig
from .rs_codec import encoded_bytes_for

logger = logging.getLogger(__name__)


def _check_config(config: InterleavingConfig, length: int) -> None:
    if config.rows < 1 or config.cols < 1:
        raise ECCConfigurationError(
            f"Interleaver dimensions must be positive, got {config.rows}x{config.cols}"
        )
    if length > config.size:
        raise ECCConfigurationError(
            f"{length} bits do not fit a {config.rows}x{config.cols} interleaver"
        )


def interleave(bits: BitsLike, config: InterleavingConfig) -> np.ndarray:
    """
    Write row-major, read column-major.

    Args:
        bits: Bit sequence, at most rows * cols long
        config: Matrix shape

    Returns:
        Interleaved bits, exactly rows * cols long
    """
    bits = as_bits(bits, ECCConfigurationError)
    _check_config(config, len(bits))

    padded = np.zeros(config.size, dtype=np.uint8)
    padded[:len(bits)] = bits
    return padded.reshape(config.rows, config.cols).T.ravel()


def deinterleave(bits: BitsLike, config: InterleavingConfig) -> np.ndarray:
    """
    Write column-major, read row-major. Inverse of interleave().

    Input shorter than rows * cols is zero-filled; the output is always
    rows * cols long, padding included.
    """
    bits = as_bits(bits, ECCConfigurationError)
    _check_config(config, len(bits))

    padded = np.zeros(config.size, dtype=np.uint8)
    padded[:len(bits)] = bits
    return padded.reshape(config.cols, config.rows).T.ravel()


def calculate_interleaving_config(
    data_length: int,
    mode: ECCMode,
    config: Optional[Dict[str, Any]] = None
) -> InterleavingConfig:
    """
    Interleaver shape for `data_length` data bits protected with `mode`.

    hamming84:     one row per 8-bit codeword
    reed-solomon:  clamp(min_rows, max_rows, byte_count) rows, cols sized to
                   hold every codeword and rounded up to whole bytes
    none:          a single row
    """
    mode = ECCMode(mode)
    ecc_config = (config or {}).get('ecc', {})

    if mode is ECCMode.HAMMING84:
        rows = max(1, math.ceil(data_length / 4))
        return InterleavingConfig(rows=rows, cols=8)

    if mode is ECCMode.REED_SOLOMON:
        il_config = ecc_config.get('interleaving', {})
        min_rows = il_config.get('min_rows', 4)
        max_rows = il_config.get('max_rows', 16)

        byte_count = math.ceil(data_length / 8)
        encoded_bytes = encoded_bytes_for(byte_count, ecc_config.get('reed_solomon'))
        encoded_bits = encoded_bytes * 8

        rows = min(max_rows, max(min_rows, byte_count))
        cols = math.ceil(encoded_bits / rows)
        cols += (-cols) % 8
        logger.debug("RS interleaver for %d data bytes, %d encoded: %dx%d", byte_count, encoded_bytes, rows, cols)
        return InterleavingConfig(rows=rows, cols=cols)

    return InterleavingConfig(rows=1, cols=max(1, data_length))
