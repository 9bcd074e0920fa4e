"""
Text Signing Core for rcli

Supports:
- BLAKE3 keyed hash - Symmetric shared-secret signatures (32 bytes)
- Ed25519 - Public-key signatures (64 bytes)
"""

from .signer import (
    TextSignFormat,
    TextSigner,
    TextVerifier,
    Blake3,
    Ed25519Signer,
    Ed25519Verifier,
    TextSignError,
    FormatParseError,
    KeyFormatError,
    SignatureFormatError,
    EntropySourceError,
)
from .keys import (
    KEY_LENGTH,
    get_signer,
    get_verifier,
    process_text_key_generate,
)
from .text import process_text_sign, process_text_verify

__all__ = [
    "TextSignFormat",
    "TextSigner",
    "TextVerifier",
    "Blake3",
    "Ed25519Signer",
    "Ed25519Verifier",
    "TextSignError",
    "FormatParseError",
    "KeyFormatError",
    "SignatureFormatError",
    "EntropySourceError",
    "KEY_LENGTH",
    "get_signer",
    "get_verifier",
    "process_text_key_generate",
    "process_text_sign",
    "process_text_verify",
]
