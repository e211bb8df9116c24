from ipfe.errors import (
    IPFEError,
    InvalidParameters,
    InvalidVectorLength,
    KeyVectorMismatch,
    NonInvertibleElement,
    RangeViolation,
    UninitializedParameters,
)
from ipfe.params import GroupParameters, initialize_parameters, validate_params
from ipfe.elgamal import KeyPair, Ciphertext
from ipfe.inner_product import (
    FECiphertext,
    FESecretKey,
    InnerProductFE,
    SchemeState,
    decrypt,
    derive_key,
    encrypt,
    setup,
)
from ipfe.logging_config import setup_logging

__all__ = [
    "IPFEError",
    "InvalidParameters",
    "InvalidVectorLength",
    "KeyVectorMismatch",
    "NonInvertibleElement",
    "RangeViolation",
    "UninitializedParameters",
    "GroupParameters",
    "initialize_parameters",
    "validate_params",
    "KeyPair",
    "Ciphertext",
    "FECiphertext",
    "FESecretKey",
    "InnerProductFE",
    "SchemeState",
    "decrypt",
    "derive_key",
    "encrypt",
    "setup",
    "setup_logging",
]
