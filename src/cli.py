"""
RCLI - CSV conversion, passwords, base64 and text signing from the shell

Commands:
  csv       - Convert CSV to JSON or YAML
  genpass   - Generate a random password
  base64    - Encode/decode base64
  text      - Sign, verify and generate keys (blake3 / ed25519)
  serve     - Run the HTTP API
"""

import argparse
import logging
import os
import sys

import structlog
from zxcvbn import zxcvbn

from crypto.keys import process_text_key_generate
from crypto.signer import TextSignError, TextSignFormat
from crypto.text import process_text_sign, process_text_verify
from process.b64 import Base64Format, process_decode, process_encode, urlsafe_decode, urlsafe_encode
from process.csv_convert import OutputFormat, process_csv
from process.genpass import PasswordGenerationError, process_genpass
from process.io import get_content, open_reader, verify_file, verify_path


def configure_logging() -> None:
    """Send structured logs to stderr so stdout only carries command output."""
    level_name = os.environ.get("RCLI_LOG_LEVEL", "WARNING").upper()
    level = getattr(logging, level_name, logging.WARNING)
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(sys.stderr),
    )


logger = structlog.get_logger()


def cmd_csv(args):
    """Convert a CSV file."""
    output = args.output or f"output.{args.format}"
    process_csv(args.input, output, args.format, args.delimiter)


def cmd_genpass(args):
    """Generate a random password."""
    password = process_genpass(
        args.length,
        not args.no_upper_case,
        not args.no_lower_case,
        not args.no_number,
        not args.no_symbol,
    )
    print(password)

    estimate = zxcvbn(password)
    print(f"Password strength: {estimate['score']}", file=sys.stderr)


def cmd_base64_encode(args):
    """Encode input as base64."""
    with open_reader(args.input) as reader:
        print(process_encode(reader, args.format))


def cmd_base64_decode(args):
    """Decode base64 input."""
    with open_reader(args.input) as reader:
        decoded = process_decode(reader, args.format)
    print(decoded.decode("utf-8", errors="replace"))


def cmd_text_sign(args):
    """Sign a message with a private/shared key."""
    key = get_content(args.key)
    with open_reader(args.input) as reader:
        signature = process_text_sign(reader, key, args.format)
    logger.info("text_signed", format=args.format.value, signature_bytes=len(signature))
    print(urlsafe_encode(signature))


def cmd_text_verify(args):
    """Verify a signed message."""
    key = get_content(args.key)
    signature = urlsafe_decode(get_content(args.sig).decode("ascii").strip())
    with open_reader(args.input) as reader:
        verified = process_text_verify(reader, key, signature, args.format)
    logger.info("text_verified", format=args.format.value, valid=verified)
    if verified:
        print("✓ Signature verified")
    else:
        print("⚠ Signature not verified")


def cmd_text_generate(args):
    """Generate key material and write it into the output directory."""
    bundle = process_text_key_generate(args.format)
    for name, content in bundle.items():
        path = args.output_path / name
        path.write_bytes(content)
        logger.info("key_written", format=args.format.value, path=str(path))
        print(f"Wrote {path}")


def cmd_serve(args):
    """Run the HTTP API."""
    import uvicorn

    port = args.port or int(os.environ.get("PORT", 8000))
    host = args.host or os.environ.get("HOST", "127.0.0.1")

    logger.info("rcli_serve", host=host, port=port)

    uvicorn.run(
        "api.server:app",
        host=host,
        port=port,
        reload=args.reload,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rcli",
        description="RCLI - CSV, password, base64 and text signing tools",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # csv
    csv_parser = subparsers.add_parser("csv", help="Show csv, or convert CSV to other formats")
    csv_parser.add_argument("-i", "--input", required=True, type=verify_file)
    csv_parser.add_argument("-o", "--output")
    csv_parser.add_argument("--format", type=OutputFormat.parse, default="json")
    csv_parser.add_argument("-d", "--delimiter", default=",")
    csv_parser.set_defaults(func=cmd_csv)

    # genpass
    genpass_parser = subparsers.add_parser("genpass", help="Generate a random password")
    genpass_parser.add_argument("-l", "--length", type=int, default=16)
    genpass_parser.add_argument("--no-upper-case", action="store_true")
    genpass_parser.add_argument("--no-lower-case", action="store_true")
    genpass_parser.add_argument("--no-number", action="store_true")
    genpass_parser.add_argument("--no-symbol", action="store_true")
    genpass_parser.set_defaults(func=cmd_genpass)

    # base64
    b64_parser = subparsers.add_parser("base64", help="Base64 encode/decode")
    b64_sub = b64_parser.add_subparsers(dest="base64_command")
    for name, func, help_text in (
        ("encode", cmd_base64_encode, "Encode a string to base64"),
        ("decode", cmd_base64_decode, "Decode a base64 string"),
    ):
        p = b64_sub.add_parser(name, help=help_text)
        p.add_argument("-i", "--input", type=verify_file, default="-")
        p.add_argument("--format", type=Base64Format.parse, default="standard")
        p.set_defaults(func=func)

    # text
    text_parser = subparsers.add_parser("text", help="Text sign/verify")
    text_sub = text_parser.add_subparsers(dest="text_command")

    sign_parser = text_sub.add_parser("sign", help="Sign a message with a private/shared key")
    sign_parser.add_argument("-i", "--input", type=verify_file, default="-")
    sign_parser.add_argument("-k", "--key", required=True, type=verify_file)
    sign_parser.add_argument("--format", type=TextSignFormat.parse, default="blake3")
    sign_parser.set_defaults(func=cmd_text_sign)

    verify_parser = text_sub.add_parser("verify", help="Verify a signed message")
    verify_parser.add_argument("-i", "--input", type=verify_file, default="-")
    verify_parser.add_argument("-k", "--key", required=True, type=verify_file)
    verify_parser.add_argument("--format", type=TextSignFormat.parse, default="blake3")
    verify_parser.add_argument(
        "-s", "--sig", required=True, type=verify_file,
        help="File holding the URL-safe base64 signature",
    )
    verify_parser.set_defaults(func=cmd_text_verify)

    generate_parser = text_sub.add_parser("generate", help="Generate a new key")
    generate_parser.add_argument("--format", type=TextSignFormat.parse, default="blake3")
    generate_parser.add_argument("-o", "--output-path", type=verify_path, default=".")
    generate_parser.set_defaults(func=cmd_text_generate)

    # serve
    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host")
    serve_parser.add_argument("--port", type=int)
    serve_parser.add_argument("--reload", action="store_true")
    serve_parser.set_defaults(func=cmd_serve)

    return parser


def main(argv=None) -> int:
    configure_logging()
    parser = build_parser()
    args = parser.parse_args(argv)

    func = getattr(args, "func", None)
    if func is None:
        parser.print_help()
        return 1

    try:
        func(args)
    except (TextSignError, PasswordGenerationError, OSError, ValueError) as e:
        logger.error("command_failed", command=args.command, error=str(e))
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
