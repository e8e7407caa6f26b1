# file: src/pulsar_fec/galois.py

"""
GF(2^8) arithmetic engine.

Field: p(x) = x^8 + x^4 + x^3 + x^2 + 1 -> 0x11D, generator alpha = 2.
Exponent/log tables are built once per process by get_field() and stored as
tuples, so a GaloisField can be shared freely between codecs and threads.
"""

import threading
from typing import Dict, List, Sequence, Tuple

from .errors import GaloisFieldError

PRIM_POLY = 0x11D       # x^8 + x^4 + x^3 + x^2 + 1
GENERATOR = 0x02        # primitive element alpha
FIELD_SIZE = 256
FIELD_ORDER = 255       # size of the multiplicative group


def _build_tables(prim_poly: int) -> Tuple[Tuple[int, ...], Tuple[int, ...]]:
    # exp table is doubled so log[a] + log[b] never needs a mod 255
    exp = [0] * (2 * FIELD_SIZE)
    log = [0] * FIELD_SIZE
    x = 1
    for i in range(FIELD_ORDER):
        exp[i] = x
        log[x] = i
        x <<= 1
        if x & FIELD_SIZE:
            # degree 8 term appeared, reduce mod p(x)
            x ^= prim_poly
    for i in range(FIELD_ORDER, 2 * FIELD_SIZE):
        exp[i] = exp[i - FIELD_ORDER]
    return tuple(exp), tuple(log)


class GaloisField:
    """
    Arithmetic over GF(2^8) backed by precomputed exp/log tables.

    Addition and subtraction are XOR. log[0] is undefined and left as 0;
    every operation guards the zero operand before touching the log table.
    """

    __slots__ = ("prim_poly", "exp", "log")

    def __init__(self, prim_poly: int = PRIM_POLY):
        self.prim_poly = prim_poly
        self.exp, self.log = _build_tables(prim_poly)

    def multiply(self, a: int, b: int) -> int:
        if a == 0 or b == 0:
            return 0
        return self.exp[self.log[a] + self.log[b]]

    def divide(self, a: int, b: int) -> int:
        if b == 0:
            raise GaloisFieldError("Division by zero in GF(2^8)")
        if a == 0:
            return 0
        return self.exp[(self.log[a] - self.log[b] + FIELD_ORDER) % FIELD_ORDER]

    def power(self, x: int, n: int) -> int:
        if x == 0:
            return 1 if n == 0 else 0
        return self.exp[(self.log[x] * n) % FIELD_ORDER]

    def inverse(self, x: int) -> int:
        if x == 0:
            raise GaloisFieldError("Zero has no multiplicative inverse in GF(2^8)")
        return self.exp[FIELD_ORDER - self.log[x]]

    # Polynomials are coefficient lists, highest degree first.

    def poly_multiply(self, p: Sequence[int], q: Sequence[int]) -> List[int]:
        out = [0] * (len(p) + len(q) - 1)
        for i, a in enumerate(p):
            if a == 0:
                continue
            for j, b in enumerate(q):
                out[i + j] ^= self.multiply(a, b)
        return out

    def poly_scale(self, p: Sequence[int], k: int) -> List[int]:
        return [self.multiply(c, k) for c in p]

    def poly_eval(self, p: Sequence[int], x: int) -> int:
        # Horner's scheme
        y = p[0] if p else 0
        for c in p[1:]:
            y = self.multiply(y, x) ^ c
        return y

    def __repr__(self) -> str:
        return f"GaloisField(prim_poly=0x{self.prim_poly:X})"


_FIELDS: Dict[int, GaloisField] = {}
_FIELDS_LOCK = threading.Lock()


def get_field(prim_poly: int = PRIM_POLY) -> GaloisField:
    """Return the process-wide field instance, building its tables on first use."""
    # Double-checked locking: concurrent first calls build the tables once
    field = _FIELDS.get(prim_poly)
    if field is not None:
        return field

    with _FIELDS_LOCK:
        field = _FIELDS.get(prim_poly)
        if field is None:
            field = GaloisField(prim_poly)
            _FIELDS[prim_poly] = field
    return field
