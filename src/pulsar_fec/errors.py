# file: src/pulsar_fec/errors.py

"""
FEC-specific exception hierarchy.

All exceptions inherit from ECCError for unified handling. Ordinary decode
outcomes (corrected, uncorrectable) are reported through DecodeResult and
only become exceptions when the caller asks for strict decoding.
"""


class ECCError(Exception):
    """Base exception for all ECC-related errors."""
    pass


class ECCEncodingError(ECCError):
    """Raised when encoding fails."""
    pass


class ECCDecodingError(ECCError):
    """Raised when decoding fails."""
    pass


class ECCCorrectionError(ECCDecodingError):
    """Raised by strict decoding when error correction capability is exceeded."""

    def __init__(self, message: str, num_errors: int = None, max_correctable: int = None):
        super().__init__(message)
        self.num_errors = num_errors
        self.max_correctable = max_correctable


class ECCConfigurationError(ECCError):
    """Raised when ECC configuration is invalid."""
    pass


class GaloisFieldError(ECCError, ZeroDivisionError):
    """Raised on an invalid GF(2^8) operation (division by zero, inverse of zero)."""
    pass
