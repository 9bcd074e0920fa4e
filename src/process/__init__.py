"""
RCLI - Process Module

Plain I/O and formatting helpers around the signing core:
- Password generation
- Base64 encode/decode
- CSV to JSON/YAML conversion
- File and stdin readers
"""

from .genpass import process_genpass, PasswordGenerationError
from .b64 import Base64Format, process_encode, process_decode, urlsafe_encode, urlsafe_decode
from .csv_convert import OutputFormat, process_csv
from .io import get_reader, open_reader, get_content, verify_file, verify_path

__all__ = [
    "process_genpass",
    "PasswordGenerationError",
    "Base64Format",
    "process_encode",
    "process_decode",
    "urlsafe_encode",
    "urlsafe_decode",
    "OutputFormat",
    "process_csv",
    "get_reader",
    "open_reader",
    "get_content",
    "verify_file",
    "verify_path",
]
