# file: src/pulsar_fec/encoder.py

"""
ECC encoding entry point.

Provides apply_ecc() which dispatches a bit stream to the configured code
and optionally interleaves the result.
"""

import dataclasses
import logging
from typing import Any, Dict, Optional, Type, Union

import numpy as np

from .bits import BitsLike, as_bits, bits_to_bytes, bytes_to_bits, pad_bits
from .config import resolve_config
from .errors import ECCConfigurationError, ECCError, ECCEncodingError
from .hamming84 import encode_hamming84
from .interleaver import calculate_interleaving_config, interleave
from .results import ECCMode, EncodeResult
from .rs_codec import ReedSolomonCodec, block_sizes, parity_symbols_for

logger = logging.getLogger(__name__)


def resolve_mode(mode: Union[ECCMode, str], error_cls: Type[ECCError] = ECCConfigurationError) -> ECCMode:
    """Accept an ECCMode or its string value ('none', 'hamming84', 'reed-solomon')."""
    try:
        return ECCMode(mode)
    except ValueError as e:
        raise error_cls(f"Unknown ECC mode: {mode!r}") from e


def apply_ecc(
    data_bits: BitsLike,
    mode: Union[ECCMode, str],
    use_interleaving: bool = False,
    config: Optional[Dict[str, Any]] = None
) -> EncodeResult:
    """
    Protect a bit stream with forward error correction.

    Args:
        data_bits: Sequence of 0/1 values
        mode: 'none', 'hamming84' or 'reed-solomon'
        use_interleaving: Spread codewords with a block interleaver sized
                          from the original data length
        config: Optional (partial) configuration dict, merged over defaults

    Returns:
        EncodeResult with the encoded stream, overhead in bits, a
        human-readable description and the interleaver shape if used

    Raises:
        ECCEncodingError: If input is not a 0/1 sequence
        ECCConfigurationError: If mode or configuration is invalid

    Example:
        >>> result = apply_ecc([1, 0, 1, 1], 'hamming84')
        >>> len(result.encoded_bits)
        8
    """
    mode = resolve_mode(mode)
    config = resolve_config(config)
    bits = as_bits(data_bits, ECCEncodingError)

    if mode is ECCMode.NONE:
        return EncodeResult(encoded_bits=bits, overhead_bit_count=0, description="No ECC applied")

    if mode is ECCMode.HAMMING84:
        encoded = encode_hamming84(bits)
        code_name = "Hamming(8,4)"
        capability = "corrects 1-bit errors"
    else:
        encoded, n, k, nsym, blocks = _encode_reed_solomon(bits, config)
        code_name = f"RS({n},{k})"
        if blocks == 1:
            capability = f"corrects {nsym // 2} byte errors"
        else:
            capability = f"{blocks} codewords, corrects {nsym // 2} byte errors each"

    if not use_interleaving:
        if mode is ECCMode.HAMMING84:
            capability = "100% overhead, " + capability
        return EncodeResult(
            encoded_bits=encoded,
            overhead_bit_count=len(encoded) - len(bits),
            description=f"{code_name}: {len(bits)} → {len(encoded)} bits ({capability})",
        )

    il_config = calculate_interleaving_config(len(bits), mode, config)
    il_config = dataclasses.replace(il_config, payload_length=len(encoded))
    interleaved = interleave(encoded, il_config)
    logger.debug("Interleaved %d encoded bits into %dx%d matrix", len(encoded), il_config.rows, il_config.cols)

    return EncodeResult(
        encoded_bits=interleaved,
        overhead_bit_count=len(interleaved) - len(bits),
        description=(
            f"{code_name}+Interleave: {len(bits)} → {len(interleaved)} bits "
            f"(burst resistant, {capability})"
        ),
        interleaving_config=il_config,
    )


def _encode_reed_solomon(bits: np.ndarray, config: Dict[str, Any]):
    """
    Pad to a byte boundary, pack MSB-first and RS-encode, one codeword per
    255 - nsym data bytes.

    Returns:
        (encoded bits, total bytes n, data bytes k, nsym, codeword count)
    """
    data = bits_to_bytes(pad_bits(bits, 8))
    nsym = parity_symbols_for(len(data), config['ecc']['reed_solomon'])
    codec = ReedSolomonCodec(nsym)
    encoded = codec.encode_blocks(data)
    blocks = len(block_sizes(len(data), nsym))
    logger.debug("RS(%d,%d) with %d parity bytes per codeword, %d codewords",
                 len(encoded), len(data), nsym, blocks)
    return bytes_to_bits(encoded), len(encoded), len(data), nsym, blocks
