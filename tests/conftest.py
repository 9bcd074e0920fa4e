"""
Pytest Configuration and Fixtures
"""

import io
import os
import sys
import pytest

# Add src to path
sys.path.insert(0, os.path.join(os.path.dirname(os.path.dirname(__file__)), 'src'))

# Set test environment
os.environ["API_KEY"] = "test-key-12345"
os.environ["RCLI_LOG_LEVEL"] = "CRITICAL"


@pytest.fixture
def zero_key():
    """32 zero bytes."""
    return bytes(32)


@pytest.fixture
def rfc8032_seed():
    """Ed25519 secret key from RFC 8032 section 7.1, TEST 1."""
    return bytes.fromhex(
        "9d61b19deffd5a60ba844af492ec2cc44449c5697b326919703bac031cae7f60"
    )


@pytest.fixture
def rfc8032_public_key():
    """Ed25519 public key from RFC 8032 section 7.1, TEST 1."""
    return bytes.fromhex(
        "d75a980182b10ab7d54bfed3c964073a0ee172f3daa62325af021a68f707511a"
    )


@pytest.fixture
def stream():
    """Factory for single-use message streams."""
    def _make(data: bytes):
        return io.BytesIO(data)
    return _make


@pytest.fixture
def sample_csv(tmp_path):
    """Small CSV file with a header row."""
    path = tmp_path / "players.csv"
    path.write_text(
        "Name,Position,Nationality\n"
        "Lionel Messi,Forward,Argentina\n"
        "Virgil van Dijk,Defender,Netherlands\n",
        encoding="utf-8",
    )
    return path
