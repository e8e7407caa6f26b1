# file: src/pulsar_fec/results.py

"""
Value objects returned by the ECC facade.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

import numpy as np


class ECCMode(str, Enum):
    """Error correction scheme applied to a bit stream."""
    NONE = "none"
    HAMMING84 = "hamming84"
    REED_SOLOMON = "reed-solomon"


@dataclass(frozen=True)
class InterleavingConfig:
    """Interleaver matrix shape."""
    rows: int   # number of codewords spread across
    cols: int   # bits per row
    payload_length: Optional[int] = None  # meaningful bits before matrix padding

    @property
    def size(self) -> int:
        return self.rows * self.cols


@dataclass
class EncodeResult:
    """Result of apply_ecc()."""
    encoded_bits: np.ndarray
    overhead_bit_count: int  # encoded length - data length
    description: str
    interleaving_config: Optional[InterleavingConfig] = None


@dataclass
class DecodeResult:
    """
    Result of decode_ecc().

    error_positions are in the code's native unit (bit indices for Hamming,
    byte indices for Reed-Solomon); corrected_positions are always bit
    indices into the (deinterleaved) encoded stream.
    """
    data_bits: np.ndarray
    corrected: bool
    error_count: int
    uncorrectable: bool
    error_positions: List[int] = field(default_factory=list)
    corrected_positions: List[int] = field(default_factory=list)
    corrected_bits: Optional[np.ndarray] = None
