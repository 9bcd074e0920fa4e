"""
Key Material for Text Signing

Turns raw key bytes into signer/verifier objects and generates fresh key
material for either scheme. Nothing here touches the filesystem; callers
persist generated bundles themselves.
"""

import secrets
from typing import Dict

from cryptography.hazmat.primitives.asymmetric import ed25519

from process.genpass import process_genpass

from .signer import (
    Blake3,
    Ed25519Signer,
    Ed25519Verifier,
    EntropySourceError,
    KeyFormatError,
    TextSigner,
    TextSignFormat,
    TextVerifier,
)

KEY_LENGTH = 32

BLAKE3_KEY_FILE = "blake3.txt"
ED25519_SIGNING_KEY_FILE = "ed25519.sk"
ED25519_VERIFYING_KEY_FILE = "ed25519.pk"

# Edwards25519 field prime and curve constant (RFC 8032 section 5.1)
_P = 2 ** 255 - 19
_D = (-121665 * pow(121666, _P - 2, _P)) % _P
_SQRT_M1 = pow(2, (_P - 1) // 4, _P)


def _take_key(key: bytes) -> bytes:
    """Return the first 32 bytes of the key material."""
    if len(key) < KEY_LENGTH:
        raise KeyFormatError(
            f"Key must be at least {KEY_LENGTH} bytes, got {len(key)}"
        )
    return bytes(key[:KEY_LENGTH])


def is_valid_point_encoding(data: bytes) -> bool:
    """
    Check that 32 bytes decode to a point on edwards25519.

    Follows the decoding steps of RFC 8032 section 5.1.3: the y coordinate
    must be below p, x^2 = (y^2 - 1) / (d*y^2 + 1) must have a square root,
    and x = 0 may not carry a set sign bit.
    """
    if len(data) != KEY_LENGTH:
        return False
    value = int.from_bytes(data, "little")
    sign = value >> 255
    y = value & ((1 << 255) - 1)
    if y >= _P:
        return False

    u = (y * y - 1) % _P
    v = (_D * y * y + 1) % _P
    x = (u * pow(v, 3, _P) * pow(u * pow(v, 7, _P), (_P - 5) // 8, _P)) % _P

    vx2 = (v * x * x) % _P
    if vx2 == u:
        pass
    elif vx2 == (-u) % _P:
        x = (x * _SQRT_M1) % _P
    else:
        return False

    if x == 0 and sign == 1:
        return False
    return True


def load_verifying_key(key: bytes) -> ed25519.Ed25519PublicKey:
    """Parse a raw Ed25519 public key, rejecting illegal point encodings."""
    public_bytes = _take_key(key)
    if not is_valid_point_encoding(public_bytes):
        raise KeyFormatError("Ed25519 public key is not a valid curve point")
    try:
        return ed25519.Ed25519PublicKey.from_public_bytes(public_bytes)
    except ValueError as e:
        raise KeyFormatError(f"Ed25519 public key rejected: {e}") from e


def get_signer(format: TextSignFormat, key: bytes) -> TextSigner:
    """
    Build the signer for a scheme from raw key material.

    Args:
        format: Which scheme to use
        key: At least 32 bytes; anything past the first 32 is ignored

    Returns:
        TextSigner instance
    """
    key = _take_key(key)

    if format == TextSignFormat.BLAKE3:
        return Blake3(key)

    elif format == TextSignFormat.ED25519:
        return Ed25519Signer.from_seed(key)

    else:
        raise ValueError(f"Unknown format: {format}")


def get_verifier(format: TextSignFormat, key: bytes) -> TextVerifier:
    """
    Build the verifier for a scheme from raw key material.

    For BLAKE3 the key is the shared secret, for Ed25519 the public key.
    """
    if format == TextSignFormat.BLAKE3:
        return Blake3(_take_key(key))

    elif format == TextSignFormat.ED25519:
        return Ed25519Verifier(load_verifying_key(key))

    else:
        raise ValueError(f"Unknown format: {format}")


def _random_seed() -> bytes:
    try:
        return secrets.token_bytes(KEY_LENGTH)
    except (OSError, NotImplementedError) as e:
        raise EntropySourceError(f"System random source unavailable: {e}") from e


def process_text_key_generate(format: TextSignFormat) -> Dict[str, bytes]:
    """
    Generate key material for a scheme.

    Returns a mapping of output file name to raw key bytes:
    - BLAKE3: {"blake3.txt": key}
    - Ed25519: {"ed25519.sk": seed, "ed25519.pk": public key}
    """
    if format == TextSignFormat.BLAKE3:
        # Password characters keep the key file printable
        password = process_genpass(KEY_LENGTH, True, True, True, True)
        return {BLAKE3_KEY_FILE: password.encode("ascii")}

    elif format == TextSignFormat.ED25519:
        seed = _random_seed()
        public_key = Ed25519Signer.from_seed(seed).get_public_key()
        return {
            ED25519_SIGNING_KEY_FILE: seed,
            ED25519_VERIFYING_KEY_FILE: public_key,
        }

    else:
        raise ValueError(f"Unknown format: {format}")
