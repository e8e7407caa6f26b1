# file: src/pulsar_fec/rs_codec.py

"""
Reed-Solomon codec over GF(2^8).

Field: p(x) = x^8 + x^4 + x^3 + x^2 + 1 (0x11D), alpha = 2
Generator: g(x) = prod_{i=0}^{nsym-1} (x - alpha^i)   (first consecutive root = 0)
Systematic codeword: [data (k bytes)] || [parity (nsym bytes)], n = k + nsym <= 255

Decoding: syndromes -> Berlekamp-Massey -> Chien search -> Forney.
Corrects up to nsym // 2 byte errors per codeword.

Messages longer than 255 - nsym bytes are split into consecutive shortened
codewords that share one nsym; the last one carries the remainder.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from .errors import ECCConfigurationError, ECCDecodingError, ECCEncodingError
from .galois import FIELD_ORDER, GaloisField, get_field

logger = logging.getLogger(__name__)

MAX_CODEWORD_BYTES = 255


def parity_symbols_for(byte_count: int, rs_config: Optional[Dict[str, Any]] = None) -> int:
    """
    Number of parity bytes for a message of `byte_count` bytes.

    nsym = clamp(min_parity, max_parity, ceil(parity_ratio * byte_count))
    """
    rs_config = rs_config or {}
    ratio = rs_config.get('parity_ratio', 0.25)
    min_parity = rs_config.get('min_parity', 4)
    max_parity = rs_config.get('max_parity', 16)
    return min(max_parity, max(min_parity, math.ceil(byte_count * ratio)))


def block_sizes(byte_count: int, nsym: int) -> List[int]:
    """
    Data bytes per codeword when `byte_count` bytes are protected with `nsym`
    parity bytes each. An empty message still yields one parity-only codeword.
    """
    max_data = MAX_CODEWORD_BYTES - nsym
    full, rest = divmod(byte_count, max_data)
    sizes = [max_data] * full
    if rest or not sizes:
        sizes.append(rest)
    return sizes


def encoded_bytes_for(byte_count: int, rs_config: Optional[Dict[str, Any]] = None) -> int:
    """Total encoded length in bytes of a `byte_count`-byte message."""
    nsym = parity_symbols_for(byte_count, rs_config)
    return byte_count + nsym * len(block_sizes(byte_count, nsym))


def data_bytes_for(encoded_length: int, rs_config: Optional[Dict[str, Any]] = None) -> int:
    """
    Invert encoded_bytes_for(): data byte count k of an n-byte encoded stream.

    encoded_bytes_for() is strictly increasing in k, so an exact match is
    unique. When no k fits exactly the largest k whose encoding fits in n
    bytes is returned.
    """
    best = 0
    for k in range(encoded_length + 1):
        n = encoded_bytes_for(k, rs_config)
        if n == encoded_length:
            return k
        if n > encoded_length:
            break
        best = k
    return best


@dataclass
class RSDecodeResult:
    """Outcome of decoding one Reed-Solomon codeword or a run of them."""
    data: bytes
    corrected: bool
    uncorrectable: bool
    error_count: int = 0  # byte errors corrected
    error_positions: List[int] = field(default_factory=list)  # byte indices in the codeword
    codeword: bytes = b''  # corrected codeword (received codeword if uncorrectable)
    detected_errors: int = 0  # error locator degree, also set when correction fails


class ReedSolomonCodec:
    """
    Reed-Solomon codec for shortened codewords with a fixed parity length.

    encode/decode handle one codeword; encode_blocks/decode_blocks split
    longer messages across several.

    Parameters:
        nsym (int): Number of parity bytes
        gf (GaloisField): Field tables; defaults to the shared GF(2^8) instance

    Invariants:
        - 2 <= nsym < 255
        - len(data) + nsym <= 255
        - Corrects up to nsym // 2 byte errors
    """

    def __init__(self, nsym: int, gf: Optional[GaloisField] = None):
        if not 2 <= nsym < MAX_CODEWORD_BYTES:
            raise ECCConfigurationError(f"nsym={nsym} must be in [2, {MAX_CODEWORD_BYTES - 1}]")

        self.nsym = nsym
        self.gf = gf if gf is not None else get_field()
        self.max_correctable_errors = nsym // 2
        self.generator = self._generator_poly()

    def _generator_poly(self) -> List[int]:
        # (x - alpha^i) == (x + alpha^i) -> [1, alpha^i], highest degree first
        g = [1]
        for i in range(self.nsym):
            g = self.gf.poly_multiply(g, [1, self.gf.power(2, i)])
        return g

    def encode(self, data: bytes) -> bytes:
        """
        Systematic encoding: parity is the remainder of data(x) * x^nsym mod g(x).

        Args:
            data: Message bytes, at most 255 - nsym long

        Returns:
            data || parity

        Raises:
            ECCEncodingError: If the codeword would exceed 255 bytes
        """
        if len(data) + self.nsym > MAX_CODEWORD_BYTES:
            raise ECCEncodingError(
                f"RS codeword of {len(data)} + {self.nsym} bytes exceeds GF(256) limit of {MAX_CODEWORD_BYTES}"
            )

        gen = self.generator
        remainder = list(data) + [0] * self.nsym
        for i in range(len(data)):
            coef = remainder[i]
            if coef == 0:
                continue
            for j in range(1, len(gen)):
                remainder[i + j] ^= self.gf.multiply(gen[j], coef)

        return bytes(data) + bytes(remainder[len(data):])

    def syndromes(self, codeword: Sequence[int]) -> List[int]:
        """S_i = c(alpha^i) for i = 0..nsym-1; codeword[0] is the highest-degree term."""
        return [self.gf.poly_eval(list(codeword), self.gf.power(2, i)) for i in range(self.nsym)]

    def berlekamp_massey(self, synd: Sequence[int]) -> List[int]:
        """
        Error locator Lambda(x) = prod (1 - X_j x), lowest degree first.

        The returned list has length L + 1 where L is the linear complexity
        of the syndrome sequence (the number of errors, if within capacity).
        """
        gf = self.gf
        err_loc = [1]
        prev_loc = [1]
        length = 0
        shift = 1
        prev_delta = 1

        for r in range(len(synd)):
            delta = synd[r]
            for i in range(1, min(length, len(err_loc) - 1) + 1):
                delta ^= gf.multiply(err_loc[i], synd[r - i])

            if delta == 0:
                shift += 1
                continue

            scale = gf.divide(delta, prev_delta)
            update = [0] * shift + gf.poly_scale(prev_loc, scale)
            new_loc = err_loc + [0] * max(0, len(update) - len(err_loc))
            for i, c in enumerate(update):
                new_loc[i] ^= c

            if 2 * length <= r:
                prev_loc = err_loc
                length = r + 1 - length
                prev_delta = delta
                shift = 1
            else:
                shift += 1
            err_loc = new_loc

        err_loc = err_loc + [0] * max(0, length + 1 - len(err_loc))
        return err_loc[:length + 1]

    def chien_search(self, err_loc: Sequence[int], msg_len: int) -> List[int]:
        """
        Byte positions j whose locator X_j = alpha^(msg_len - 1 - j) is a root
        of Lambda(X_j^-1). Returned in ascending position order.
        """
        highest_first = list(reversed(err_loc))
        positions = []
        for j in range(msg_len):
            x_inv = self.gf.exp[(FIELD_ORDER - (msg_len - 1 - j)) % FIELD_ORDER]
            if self.gf.poly_eval(highest_first, x_inv) == 0:
                positions.append(j)
        return positions

    def forney(
        self,
        synd: Sequence[int],
        err_loc: Sequence[int],
        err_pos: Sequence[int],
        msg_len: int
    ) -> Optional[List[int]]:
        """
        Error magnitudes from the error evaluator Omega(x) = S(x) Lambda(x) mod x^nsym.

        With first consecutive root 0:
            e_j = X_j * Omega(X_j^-1) / Lambda'(X_j^-1)

        Returns:
            Magnitudes aligned with err_pos, or None if Lambda' vanishes at a root
        """
        gf = self.gf

        # lowest degree first throughout
        omega = [0] * self.nsym
        for i, s in enumerate(synd):
            if s == 0:
                continue
            for j, c in enumerate(err_loc):
                if i + j < self.nsym:
                    omega[i + j] ^= gf.multiply(s, c)

        # formal derivative: odd-power terms survive in characteristic 2
        derivative = [err_loc[k] if k % 2 == 1 else 0 for k in range(1, len(err_loc))]

        magnitudes = []
        for pos in err_pos:
            x = gf.exp[(msg_len - 1 - pos) % FIELD_ORDER]
            x_inv = gf.inverse(x)
            denom = gf.poly_eval(list(reversed(derivative)), x_inv)
            if denom == 0:
                return None
            numer = gf.multiply(x, gf.poly_eval(list(reversed(omega)), x_inv))
            magnitudes.append(gf.divide(numer, denom))
        return magnitudes

    def decode(self, codeword: bytes) -> RSDecodeResult:
        """
        Decode one codeword, correcting up to nsym // 2 byte errors.

        Uncorrectable patterns are reported, not raised: the result then
        carries the uncorrected data so callers can decide how to react.
        Patterns beyond capacity that happen to look like a valid codeword
        are miscorrected silently.

        Raises:
            ECCDecodingError: If the codeword length is outside [nsym, 255]
        """
        n = len(codeword)
        if n > MAX_CODEWORD_BYTES:
            raise ECCDecodingError(f"RS codeword length {n} exceeds GF(256) limit of {MAX_CODEWORD_BYTES}")
        if n < self.nsym:
            raise ECCDecodingError(f"RS codeword length {n} shorter than parity length {self.nsym}")

        k = n - self.nsym
        msg = list(codeword)
        synd = self.syndromes(msg)

        if not any(synd):
            return RSDecodeResult(data=bytes(msg[:k]), corrected=False, uncorrectable=False,
                                  codeword=bytes(msg))

        err_loc = self.berlekamp_massey(synd)
        num_errors = len(err_loc) - 1
        failed = RSDecodeResult(data=bytes(msg[:k]), corrected=False, uncorrectable=True,
                                codeword=bytes(msg), detected_errors=num_errors)

        if num_errors == 0 or num_errors > self.max_correctable_errors:
            logger.warning("RS(%d,%d): %d errors exceed capacity of %d",
                           n, k, num_errors, self.max_correctable_errors)
            return failed

        err_pos = self.chien_search(err_loc, n)
        if len(err_pos) != num_errors:
            logger.warning("RS(%d,%d): Chien search found %d roots for locator of degree %d",
                           n, k, len(err_pos), num_errors)
            return failed

        magnitudes = self.forney(synd, err_loc, err_pos, n)
        if magnitudes is None:
            logger.warning("RS(%d,%d): error locator derivative vanished at a root", n, k)
            return failed

        for pos, mag in zip(err_pos, magnitudes):
            msg[pos] ^= mag

        if any(self.syndromes(msg)):
            logger.warning("RS(%d,%d): residual syndromes after correction", n, k)
            return failed

        logger.debug("RS(%d,%d): corrected %d byte errors at %s", n, k, num_errors, err_pos)
        return RSDecodeResult(
            data=bytes(msg[:k]),
            corrected=True,
            uncorrectable=False,
            error_count=num_errors,
            error_positions=err_pos,
            codeword=bytes(msg),
            detected_errors=num_errors,
        )

    def encode_blocks(self, data: bytes) -> bytes:
        """
        Encode a message of any length as consecutive codewords.

        The message is cut into chunks of at most 255 - nsym bytes (see
        block_sizes()) and each chunk is encoded on its own.

        Returns:
            chunk_0 || parity_0 || chunk_1 || parity_1 || ...
        """
        encoded = []
        offset = 0
        for size in block_sizes(len(data), self.nsym):
            encoded.append(self.encode(data[offset:offset + size]))
            offset += size
        return b''.join(encoded)

    def decode_blocks(self, stream: bytes, data_length: int) -> RSDecodeResult:
        """
        Decode the output of encode_blocks() for a `data_length`-byte message.

        Each codeword is decoded independently. The combined result is
        uncorrectable if any codeword is; error positions are byte offsets
        into `stream`.

        Raises:
            ECCDecodingError: If `stream` does not have the expected length
        """
        sizes = block_sizes(data_length, self.nsym)
        expected = data_length + self.nsym * len(sizes)
        if len(stream) != expected:
            raise ECCDecodingError(
                f"RS stream of {len(stream)} bytes does not match {len(sizes)} codewords "
                f"for {data_length} data bytes ({expected} bytes)"
            )

        blocks = []
        offset = 0
        for size in sizes:
            block_len = size + self.nsym
            result = self.decode(stream[offset:offset + block_len])
            blocks.append((offset, result))
            offset += block_len

        return RSDecodeResult(
            data=b''.join(r.data for _, r in blocks),
            corrected=any(r.corrected for _, r in blocks),
            uncorrectable=any(r.uncorrectable for _, r in blocks),
            error_count=sum(r.error_count for _, r in blocks),
            error_positions=[start + p for start, r in blocks for p in r.error_positions],
            codeword=b''.join(r.codeword for _, r in blocks),
            detected_errors=sum(r.detected_errors for _, r in blocks),
        )
