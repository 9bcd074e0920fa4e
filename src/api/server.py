"""
RCLI - FastAPI Server

HTTP access to the text signing core.

Endpoints:
- GET /health - Liveness check
- POST /text/sign - Sign a message
- POST /text/verify - Verify a signature
- POST /text/generate - Generate key material

Keys and signatures travel as URL-safe base64 without padding.
"""

import binascii
import io
import os
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Dict, Optional

import structlog
from fastapi import Depends, FastAPI, Header, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from crypto.keys import process_text_key_generate
from crypto.signer import TextSignError, TextSignFormat
from crypto.text import process_text_sign, process_text_verify
from process.b64 import urlsafe_decode, urlsafe_encode

logger = structlog.get_logger()

VERSION = "0.1.0"


# ============================================================================
# Pydantic Models
# ============================================================================

class SignRequest(BaseModel):
    """Request to sign a message."""
    format: TextSignFormat = Field(default=TextSignFormat.BLAKE3, description="blake3 or ed25519")
    key: str = Field(..., description="Shared key or Ed25519 seed, URL-safe base64")
    message: str = Field(..., description="Message text, signed as UTF-8")


class SignResponse(BaseModel):
    format: TextSignFormat
    signature: str


class VerifyRequest(BaseModel):
    """Request to verify a signature."""
    format: TextSignFormat = Field(default=TextSignFormat.BLAKE3, description="blake3 or ed25519")
    key: str = Field(..., description="Shared key or Ed25519 public key, URL-safe base64")
    message: str = Field(..., description="Message text, verified as UTF-8")
    signature: str = Field(..., description="Signature, URL-safe base64")


class VerifyResponse(BaseModel):
    format: TextSignFormat
    valid: bool


class GenerateRequest(BaseModel):
    """Request to generate key material."""
    format: TextSignFormat = Field(default=TextSignFormat.BLAKE3)


class GenerateResponse(BaseModel):
    format: TextSignFormat
    keys: Dict[str, str]


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    version: str
    uptime_seconds: float


# ============================================================================
# Application Factory
# ============================================================================

start_time: Optional[datetime] = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    global start_time
    logger.info("rcli_api_starting", version=VERSION)
    start_time = datetime.now(timezone.utc)
    yield
    logger.info("rcli_api_stopping")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    application = FastAPI(
        title="RCLI",
        description="Sign and verify text with BLAKE3 keyed hashes or Ed25519 signatures.",
        version=VERSION,
        lifespan=lifespan,
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=os.environ.get("CORS_ORIGINS", "*").split(","),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    return application


app = create_app()


# ============================================================================
# Dependencies
# ============================================================================

def verify_api_key(x_api_key: str = Header(..., alias="X-API-Key")) -> str:
    """Verify API key."""
    expected = os.environ.get("API_KEY", "dev-key-change-in-production")
    if x_api_key != expected:
        raise HTTPException(status_code=401, detail="Invalid API key")
    return x_api_key


def _decode_field(name: str, value: str) -> bytes:
    try:
        return urlsafe_decode(value)
    except (binascii.Error, ValueError):
        raise HTTPException(status_code=400, detail=f"Invalid base64 in {name}")


# ============================================================================
# Endpoints
# ============================================================================

@app.get("/health", response_model=HealthResponse, tags=["System"])
async def health_check():
    """Health check endpoint."""
    started = start_time or datetime.now(timezone.utc)
    uptime = (datetime.now(timezone.utc) - started).total_seconds()
    return HealthResponse(status="healthy", version=VERSION, uptime_seconds=uptime)


@app.post("/text/sign", response_model=SignResponse, tags=["Text"])
async def sign_text(
    request: SignRequest,
    api_key: str = Depends(verify_api_key),
):
    """Sign a message and return the URL-safe base64 signature."""
    key = _decode_field("key", request.key)
    reader = io.BytesIO(request.message.encode("utf-8"))

    try:
        signature = process_text_sign(reader, key, request.format)
    except TextSignError as e:
        logger.warning("text_sign_rejected", format=request.format.value, error=str(e))
        raise HTTPException(status_code=400, detail=str(e))

    logger.info("text_signed", format=request.format.value)
    return SignResponse(format=request.format, signature=urlsafe_encode(signature))


@app.post("/text/verify", response_model=VerifyResponse, tags=["Text"])
async def verify_text(
    request: VerifyRequest,
    api_key: str = Depends(verify_api_key),
):
    """
    Verify a signature over a message.

    A well-formed but wrong signature is a 200 with valid=false. Malformed
    keys, and Ed25519 signatures of the wrong length, are a 400.
    """
    key = _decode_field("key", request.key)
    signature = _decode_field("signature", request.signature)
    reader = io.BytesIO(request.message.encode("utf-8"))

    try:
        valid = process_text_verify(reader, key, signature, request.format)
    except TextSignError as e:
        logger.warning("text_verify_rejected", format=request.format.value, error=str(e))
        raise HTTPException(status_code=400, detail=str(e))

    logger.info("text_verified", format=request.format.value, valid=valid)
    return VerifyResponse(format=request.format, valid=valid)


@app.post("/text/generate", response_model=GenerateResponse, tags=["Text"])
async def generate_keys(
    request: GenerateRequest,
    api_key: str = Depends(verify_api_key),
):
    """Generate key material. Each entry is keyed by its file name."""
    try:
        bundle = process_text_key_generate(request.format)
    except TextSignError as e:
        logger.error("key_generation_failed", format=request.format.value, error=str(e))
        raise HTTPException(status_code=500, detail=str(e))

    logger.info("keys_generated", format=request.format.value, files=sorted(bundle))
    return GenerateResponse(
        format=request.format,
        keys={name: urlsafe_encode(content) for name, content in bundle.items()},
    )


# ============================================================================
# Run
# ============================================================================

def run():
    """Run the server."""
    import uvicorn
    port = int(os.environ.get("PORT", 8000))
    uvicorn.run(
        "api.server:app",
        host=os.environ.get("HOST", "127.0.0.1"),
        port=port,
        reload=os.environ.get("DEBUG", "false").lower() == "true",
    )


if __name__ == "__main__":
    run()
