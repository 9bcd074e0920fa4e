"""
Base64 Encoding

Standard alphabet with padding, or URL-safe alphabet without padding. The
URL-safe form is also how signatures travel between the signing core and
its callers.
"""

import base64
import binascii
from enum import Enum
from typing import BinaryIO


class Base64Format(Enum):
    STANDARD = "standard"
    URLSAFE = "urlsafe"

    @classmethod
    def parse(cls, text: str) -> "Base64Format":
        for member in cls:
            if member.value == text:
                return member
        raise ValueError("invalid format for base64")

    def __str__(self) -> str:
        return self.value


_URLSAFE_TO_STANDARD = str.maketrans("-_", "+/")


def urlsafe_encode(data: bytes) -> str:
    """URL-safe base64 with the trailing padding removed."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def urlsafe_decode(text: str) -> bytes:
    """Decode unpadded URL-safe base64. Anything outside the alphabet raises binascii.Error."""
    text = text.strip()
    if any(c in "+/=" for c in text):
        raise binascii.Error("Invalid character in URL-safe base64 input")
    translated = text.translate(_URLSAFE_TO_STANDARD)
    padding = "=" * (-len(translated) % 4)
    return base64.b64decode(translated + padding, validate=True)


def process_encode(reader: BinaryIO, format: Base64Format) -> str:
    data = reader.read().strip()
    if format == Base64Format.URLSAFE:
        return urlsafe_encode(data)
    return base64.b64encode(data).decode("ascii")


def process_decode(reader: BinaryIO, format: Base64Format) -> bytes:
    text = reader.read().decode("ascii").strip()
    if format == Base64Format.URLSAFE:
        return urlsafe_decode(text)
    return base64.b64decode(text, validate=True)
