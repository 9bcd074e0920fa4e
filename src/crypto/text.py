"""Scheme-agnostic entry points for signing and verifying text."""

from typing import BinaryIO

from .keys import get_signer, get_verifier
from .signer import TextSignFormat


def process_text_sign(reader: BinaryIO, key: bytes, format: TextSignFormat) -> bytes:
    """Sign everything the reader yields and return the raw signature."""
    signer = get_signer(format, key)
    return signer.sign(reader)


def process_text_verify(
    reader: BinaryIO,
    key: bytes,
    signature: bytes,
    format: TextSignFormat,
) -> bool:
    """Verify a raw signature over everything the reader yields."""
    verifier = get_verifier(format, key)
    return verifier.verify(reader, signature)
