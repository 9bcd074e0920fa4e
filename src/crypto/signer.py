"""
Text Signing Schemes

Supports:
- BLAKE3 keyed hash - Symmetric, shared 32-byte secret
- Ed25519 - Asymmetric, 32-byte seed signs, 32-byte public key verifies

Both schemes read the whole message from a binary stream before computing
anything and exchange raw signature bytes only.
"""

import hmac
from abc import ABC, abstractmethod
from enum import Enum
from typing import BinaryIO

import blake3
from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ed25519


BLAKE3_SIGNATURE_LENGTH = 32
ED25519_SIGNATURE_LENGTH = 64


class TextSignError(Exception):
    """Base class for signing engine errors."""
    pass


class FormatParseError(TextSignError, ValueError):
    """Raised when a scheme tag is not recognised."""
    pass


class KeyFormatError(TextSignError):
    """Raised when key material is too short or not a legal key encoding."""
    pass


class SignatureFormatError(TextSignError):
    """Raised when a signature has the wrong length for its scheme."""
    pass


class EntropySourceError(TextSignError):
    """Raised when the system random source cannot be read."""
    pass


class TextSignFormat(Enum):
    """Supported text signing schemes."""
    BLAKE3 = "blake3"
    ED25519 = "ed25519"

    @classmethod
    def parse(cls, text: str) -> "TextSignFormat":
        """Parse the canonical lowercase tag. Matching is exact."""
        for member in cls:
            if member.value == text:
                return member
        raise FormatParseError(f"Invalid format {text}")

    def __str__(self) -> str:
        return self.value


class TextSigner(ABC):
    """Anything that can produce a signature over a byte stream."""

    @property
    @abstractmethod
    def format(self) -> TextSignFormat:
        pass

    @abstractmethod
    def sign(self, reader: BinaryIO) -> bytes:
        """Drain the reader and return the raw signature bytes."""
        pass


class TextVerifier(ABC):
    """
    Anything that can check a signature over a byte stream.

    Signature length policy differs per scheme:
    - BLAKE3: a signature that is not 32 bytes verifies as False.
    - Ed25519: a signature that is not 64 bytes raises SignatureFormatError.
    A correctly sized signature that does not match always returns False.
    """

    @property
    @abstractmethod
    def format(self) -> TextSignFormat:
        pass

    @abstractmethod
    def verify(self, reader: BinaryIO, signature: bytes) -> bool:
        """Drain the reader and check the signature against it."""
        pass


class Blake3(TextSigner, TextVerifier):
    """
    BLAKE3 keyed hash. The same key signs and verifies.

    Expects exactly 32 key bytes; get_signer and get_verifier do the trimming.
    """

    def __init__(self, key: bytes):
        self._key = bytes(key)

    @property
    def format(self) -> TextSignFormat:
        return TextSignFormat.BLAKE3

    def _digest(self, reader: BinaryIO) -> bytes:
        buf = reader.read()
        return blake3.blake3(buf, key=self._key).digest()

    def sign(self, reader: BinaryIO) -> bytes:
        return self._digest(reader)

    def verify(self, reader: BinaryIO, signature: bytes) -> bool:
        expected = self._digest(reader)
        if len(signature) != BLAKE3_SIGNATURE_LENGTH:
            return False
        return hmac.compare_digest(expected, bytes(signature))


class Ed25519Signer(TextSigner):
    """Ed25519 signing with a private key expanded from a 32-byte seed."""

    def __init__(self, key: ed25519.Ed25519PrivateKey):
        self._private_key = key

    @classmethod
    def from_seed(cls, seed: bytes) -> "Ed25519Signer":
        return cls(ed25519.Ed25519PrivateKey.from_private_bytes(bytes(seed)))

    @property
    def format(self) -> TextSignFormat:
        return TextSignFormat.ED25519

    def sign(self, reader: BinaryIO) -> bytes:
        buf = reader.read()
        return self._private_key.sign(buf)

    def get_public_key(self) -> bytes:
        """Raw 32-byte public key matching this seed."""
        return self._private_key.public_key().public_bytes(
            encoding=serialization.Encoding.Raw,
            format=serialization.PublicFormat.Raw,
        )


class Ed25519Verifier(TextVerifier):
    """Ed25519 verification. Only ever holds the public key."""

    def __init__(self, key: ed25519.Ed25519PublicKey):
        self._public_key = key

    @property
    def format(self) -> TextSignFormat:
        return TextSignFormat.ED25519

    def verify(self, reader: BinaryIO, signature: bytes) -> bool:
        buf = reader.read()
        if len(signature) != ED25519_SIGNATURE_LENGTH:
            raise SignatureFormatError(
                f"Ed25519 signature must be {ED25519_SIGNATURE_LENGTH} bytes, "
                f"got {len(signature)}"
            )
        try:
            self._public_key.verify(bytes(signature), buf)
        except InvalidSignature:
            return False
        return True
