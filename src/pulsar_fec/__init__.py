# file: src/pulsar_fec/__init__.py

"""
Pulsar FEC: forward error correction for the pulsar transceiver.

Protects ordered bit streams with Extended Hamming(8,4) or Reed-Solomon over
GF(2^8), with optional bit interleaving against burst errors.

Public API:
    - apply_ecc(data_bits, mode, use_interleaving=False) -> EncodeResult
    - decode_ecc(encoded_bits, mode, original_data_length=None,
                 interleaving_config=None) -> DecodeResult
    - compute_ber(original, received) -> float
    - compute_redundancy_overhead(original_length, encoded_length) -> float
"""

from .bits import bits_to_bytes, bytes_to_bits
from .config import load_config
from .decoder import decode_ecc
from .encoder import apply_ecc
from .errors import (
    ECCError,
    ECCEncodingError,
    ECCDecodingError,
    ECCCorrectionError,
    ECCConfigurationError,
    GaloisFieldError,
)
from .galois import GaloisField, get_field
from .hamming84 import decode_hamming84, encode_hamming84
from .interleaver import calculate_interleaving_config, deinterleave, interleave
from .metrics import compute_ber, compute_code_rate, compute_redundancy_overhead
from .results import DecodeResult, ECCMode, EncodeResult, InterleavingConfig
from .rs_codec import ReedSolomonCodec, encoded_bytes_for, parity_symbols_for

__version__ = "1.0.0"

__all__ = [
    "apply_ecc",
    "decode_ecc",
    "ECCMode",
    "EncodeResult",
    "DecodeResult",
    "InterleavingConfig",
    "encode_hamming84",
    "decode_hamming84",
    "ReedSolomonCodec",
    "parity_symbols_for",
    "encoded_bytes_for",
    "interleave",
    "deinterleave",
    "calculate_interleaving_config",
    "GaloisField",
    "get_field",
    "bits_to_bytes",
    "bytes_to_bits",
    "load_config",
    "compute_ber",
    "compute_code_rate",
    "compute_redundancy_overhead",
    "ECCError",
    "ECCEncodingError",
    "ECCDecodingError",
    "ECCCorrectionError",
    "ECCConfigurationError",
    "GaloisFieldError",
]
