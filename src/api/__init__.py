"""
RCLI - API Module

FastAPI server exposing:
- Text signing (BLAKE3 / Ed25519)
- Signature verification
- Key generation
"""

from .server import app, create_app

__all__ = ["app", "create_app"]
