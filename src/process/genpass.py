"""
Random Password Generation

Builds passwords from character classes with visually ambiguous glyphs
(0/O and l/I) left out. Every enabled class contributes at least one
character.
"""

import secrets
import structlog

logger = structlog.get_logger()

UPPER = "ABCDEFGHJKLMNPQRSTUVWXYZ"
LOWER = "abcdefghijkmnopqrstuvwxyz"
NUMBER = "123456789"
SYMBOL = "!@#$%^&*_"


class PasswordGenerationError(ValueError):
    """Raised when the requested length and classes cannot be satisfied."""
    pass


def process_genpass(
    length: int,
    upper: bool,
    lower: bool,
    number: bool,
    symbol: bool,
) -> str:
    """
    Generate a random password.

    Args:
        length: Total number of characters
        upper, lower, number, symbol: Which character classes to draw from

    Returns:
        The password as a string
    """
    rng = secrets.SystemRandom()
    password = []
    chars = ""

    for enabled, charset in ((upper, UPPER), (lower, LOWER), (number, NUMBER), (symbol, SYMBOL)):
        if enabled:
            chars += charset
            password.append(rng.choice(charset))

    if not chars:
        raise PasswordGenerationError(
            "must specify at least one type of [uppercase lowercase number symbol]"
        )

    if len(password) > length:
        raise PasswordGenerationError("password length is too short")

    password.extend(rng.choice(chars) for _ in range(length - len(password)))
    rng.shuffle(password)

    logger.debug("password_generated", length=length, classes=sum((upper, lower, number, symbol)))
    return "".join(password)
