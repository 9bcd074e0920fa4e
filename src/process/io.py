"""Input helpers shared by the command line."""

import argparse
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO, Iterator


def get_reader(input: str) -> BinaryIO:
    """Open the named file for binary reading; "-" means standard input."""
    if input == "-":
        return sys.stdin.buffer
    return open(input, "rb")


@contextmanager
def open_reader(input: str) -> Iterator[BinaryIO]:
    """Like get_reader, but closes the file afterwards. Standard input stays open."""
    if input == "-":
        yield sys.stdin.buffer
        return
    with open(input, "rb") as f:
        yield f


def get_content(input: str) -> bytes:
    """Read the full contents of a file or standard input."""
    with open_reader(input) as reader:
        return reader.read()


def verify_file(filename: str) -> str:
    """argparse type: accept "-" or an existing file."""
    if filename == "-" or Path(filename).is_file():
        return filename
    raise argparse.ArgumentTypeError("File does not exist")


def verify_path(path: str) -> Path:
    """argparse type: accept an existing directory."""
    p = Path(path)
    if p.is_dir():
        return p
    raise argparse.ArgumentTypeError("Path does not exist or is not a directory")
