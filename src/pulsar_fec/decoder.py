# file: src/pulsar_fec/decoder.py

"""
ECC decoding entry point.

Provides decode_ecc() which undoes interleaving, dispatches to the matching
decoder and reports corrections in a uniform, bit-addressable form.
"""

import logging
import math
from typing import Any, Dict, Optional, Union

import numpy as np

from .bits import BitsLike, as_bits, bits_to_bytes, bytes_to_bits
from .config import resolve_config
from .encoder import resolve_mode
from .errors import ECCCorrectionError, ECCDecodingError
from .hamming84 import decode_hamming84
from .interleaver import deinterleave
from .results import DecodeResult, ECCMode, InterleavingConfig
from .rs_codec import (
    MAX_CODEWORD_BYTES,
    ReedSolomonCodec,
    block_sizes,
    data_bytes_for,
    encoded_bytes_for,
    parity_symbols_for,
)

logger = logging.getLogger(__name__)


def decode_ecc(
    encoded_bits: BitsLike,
    mode: Union[ECCMode, str],
    original_data_length: Optional[int] = None,
    interleaving_config: Optional[InterleavingConfig] = None,
    config: Optional[Dict[str, Any]] = None,
    strict: bool = False
) -> DecodeResult:
    """
    Decode an ECC-protected bit stream with error correction.

    Args:
        encoded_bits: Received stream, as produced by apply_ecc() plus channel errors
        mode: 'none', 'hamming84' or 'reed-solomon'
        original_data_length: Number of data bits to return; also fixes the
                              Reed-Solomon parity length
        interleaving_config: Interleaver shape from EncodeResult, if one was used
        config: Optional (partial) configuration dict, merged over defaults
        strict: Raise ECCCorrectionError instead of returning an
                uncorrectable result

    Returns:
        DecodeResult. Uncorrectable streams still carry best-effort data.

    Raises:
        ECCDecodingError: If the stream is malformed (non-binary values,
                          partial RS bytes, too short for its parity)
        ECCCorrectionError: Only with strict=True, if errors exceed capability
        ECCConfigurationError: If mode or configuration is invalid

    Error Handling:
        - Correctable errors: corrected=True with exact positions
        - Detected uncorrectable errors: uncorrectable=True, no exception
        - Errors beyond capacity that mimic a valid codeword are miscorrected
          silently; neither code can detect this
    """
    mode = resolve_mode(mode)
    config = resolve_config(config)
    bits = as_bits(encoded_bits, ECCDecodingError)

    if mode is ECCMode.NONE:
        return DecodeResult(
            data_bits=bits,
            corrected=False,
            error_count=0,
            uncorrectable=False,
            corrected_bits=bits.copy(),
        )

    if interleaving_config is not None:
        bits = deinterleave(bits, interleaving_config)
        if interleaving_config.payload_length is not None:
            bits = bits[:interleaving_config.payload_length]

    if mode is ECCMode.HAMMING84:
        result, num_errors, max_correctable = _decode_hamming84(bits, original_data_length)
    else:
        result, num_errors, max_correctable = _decode_reed_solomon(bits, original_data_length, config)

    if strict and result.uncorrectable:
        raise ECCCorrectionError(
            f"{mode.value} decoding failed: {num_errors} errors detected, "
            f"at most {max_correctable} correctable per codeword",
            num_errors=num_errors,
            max_correctable=max_correctable,
        )

    return result


def _truncate(bits: np.ndarray, original_data_length: Optional[int]) -> np.ndarray:
    if original_data_length is None:
        return bits
    return bits[:original_data_length]


def _decode_hamming84(bits: np.ndarray, original_data_length: Optional[int]):
    """
    Returns:
        (DecodeResult, detected bit errors, max correctable per codeword)
    """
    result = decode_hamming84(bits)
    decoded = DecodeResult(
        data_bits=_truncate(result.bits, original_data_length),
        corrected=result.corrected,
        error_count=len(result.error_positions),
        uncorrectable=result.uncorrectable,
        error_positions=list(result.error_positions),
        corrected_positions=list(result.error_positions),
        corrected_bits=result.corrected_bits,
    )
    # a double-error block holds at least two flipped bits
    detected = len(result.error_positions) + 2 * len(result.uncorrectable_blocks)
    return decoded, detected, 1


def _decode_reed_solomon(
    bits: np.ndarray,
    original_data_length: Optional[int],
    config: Dict[str, Any]
):
    """
    Decode the RS codewords of one message.

    Returns:
        (DecodeResult, detected byte errors, max correctable per codeword)
    """
    rs_config = config['ecc']['reed_solomon']

    if len(bits) % 8 != 0:
        raise ECCDecodingError(f"Reed-Solomon stream of {len(bits)} bits is not a whole number of bytes")
    stream = bits_to_bytes(bits)

    if original_data_length is not None:
        k = math.ceil(original_data_length / 8)
        nsym = parity_symbols_for(k, rs_config)
        expected = encoded_bytes_for(k, rs_config)
        if len(stream) < expected:
            raise ECCDecodingError(
                f"Reed-Solomon stream of {len(stream)} bytes is shorter than the "
                f"{expected} bytes encoding {k} data bytes"
            )
        # anything past the last codeword is interleaver padding
        stream = stream[:expected]
    else:
        k = data_bytes_for(len(stream), rs_config)
        nsym = parity_symbols_for(k, rs_config)
        if len(block_sizes(k, nsym)) == 1 and len(stream) <= MAX_CODEWORD_BYTES:
            # leftover bytes of a single shortened codeword count as parity
            nsym = len(stream) - k
        else:
            stream = stream[:encoded_bytes_for(k, rs_config)]
        if nsym < 2:
            raise ECCDecodingError(f"Reed-Solomon stream of {len(stream)} bytes is too short")

    codec = ReedSolomonCodec(nsym)
    result = codec.decode_blocks(stream, k)

    # byte position p covers bits 8p .. 8p+7 of the stream
    bit_positions = [p * 8 + i for p in result.error_positions for i in range(8)]

    decoded = DecodeResult(
        data_bits=_truncate(bytes_to_bits(result.data), original_data_length),
        corrected=result.corrected,
        error_count=result.error_count,
        uncorrectable=result.uncorrectable,
        error_positions=list(result.error_positions),
        corrected_positions=bit_positions,
        corrected_bits=bytes_to_bits(result.codeword),
    )
    return decoded, result.detected_errors, codec.max_correctable_errors
