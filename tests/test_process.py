"""
Tests for the Process Helpers

Password generation, base64, CSV conversion and input readers.
"""

import argparse
import binascii
import io
import json

import pytest
import yaml

from process.b64 import (
    Base64Format,
    process_decode,
    process_encode,
    urlsafe_decode,
    urlsafe_encode,
)
from process.csv_convert import OutputFormat, process_csv, read_records
from process.genpass import (
    LOWER,
    NUMBER,
    SYMBOL,
    UPPER,
    PasswordGenerationError,
    process_genpass,
)
from process.io import get_content, get_reader, verify_file, verify_path


class TestGenPass:
    """Test the password generator."""

    def test_length(self):
        """Password has exactly the requested length."""
        assert len(process_genpass(16, True, True, True, True)) == 16
        assert len(process_genpass(64, True, True, True, True)) == 64

    def test_every_enabled_class_present(self):
        """Each enabled class contributes at least one character."""
        for _ in range(20):
            password = process_genpass(4, True, True, True, True)
            assert any(c in UPPER for c in password)
            assert any(c in LOWER for c in password)
            assert any(c in NUMBER for c in password)
            assert any(c in SYMBOL for c in password)

    def test_disabled_classes_absent(self):
        """Only enabled classes are drawn from."""
        password = process_genpass(50, False, False, True, False)

        assert set(password) <= set(NUMBER)

    def test_ambiguous_characters_excluded(self):
        """0, O, l and I never appear."""
        password = process_genpass(200, True, True, True, True)

        assert not set(password) & set("0OlI")

    def test_no_classes_rejected(self):
        """At least one class must be enabled."""
        with pytest.raises(PasswordGenerationError):
            process_genpass(16, False, False, False, False)

    def test_too_short_rejected(self):
        """Length below the number of enabled classes is impossible."""
        with pytest.raises(PasswordGenerationError):
            process_genpass(3, True, True, True, True)

    def test_error_is_value_error(self):
        """Callers can treat generation failures as ValueError."""
        with pytest.raises(ValueError):
            process_genpass(0, True, False, False, False)


class TestBase64:
    """Test base64 encode/decode."""

    def test_standard_encode(self):
        """Standard alphabet keeps padding."""
        assert process_encode(io.BytesIO(b"hello"), Base64Format.STANDARD) == "aGVsbG8="

    def test_urlsafe_encode_drops_padding(self):
        """URL-safe output has no padding."""
        assert process_encode(io.BytesIO(b"hello"), Base64Format.URLSAFE) == "aGVsbG8"

    def test_urlsafe_alphabet(self):
        """URL-safe output uses - and _ instead of + and /."""
        assert urlsafe_encode(b"\xfb\xff") == "-_8"
        assert urlsafe_decode("-_8") == b"\xfb\xff"

    def test_encode_strips_whitespace(self):
        """Trailing newline from a file is not encoded."""
        assert process_encode(io.BytesIO(b"hello\n"), Base64Format.STANDARD) == "aGVsbG8="

    def test_decode(self):
        """Both formats decode."""
        assert process_decode(io.BytesIO(b"aGVsbG8=\n"), Base64Format.STANDARD) == b"hello"
        assert process_decode(io.BytesIO(b"aGVsbG8"), Base64Format.URLSAFE) == b"hello"

    def test_invalid_standard_input(self):
        """Characters outside the alphabet are rejected."""
        with pytest.raises(ValueError):
            process_decode(io.BytesIO(b"not*base64"), Base64Format.STANDARD)

    def test_urlsafe_rejects_foreign_characters(self):
        """Punctuation outside the alphabet is an error, not silently dropped."""
        with pytest.raises(binascii.Error):
            urlsafe_decode("AA!!AA")

    def test_urlsafe_rejects_standard_alphabet(self):
        """+ and / belong to the standard alphabet only."""
        with pytest.raises(binascii.Error):
            urlsafe_decode("A+/A")

    def test_urlsafe_rejects_padding(self):
        """The URL-safe form is unpadded."""
        with pytest.raises(binascii.Error):
            urlsafe_decode("aGVsbG8=")

    def test_urlsafe_decode_through_reader(self):
        """process_decode applies the same rules."""
        with pytest.raises(ValueError):
            process_decode(io.BytesIO(b"AA!!AA"), Base64Format.URLSAFE)

    def test_signature_sized_values(self):
        """64-byte values survive the unpadded URL-safe form."""
        data = bytes(range(64))
        encoded = urlsafe_encode(data)

        assert "=" not in encoded
        assert urlsafe_decode(encoded) == data

    def test_format_parse(self):
        """Format names parse exactly."""
        assert Base64Format.parse("standard") == Base64Format.STANDARD
        assert Base64Format.parse("urlsafe") == Base64Format.URLSAFE
        with pytest.raises(ValueError):
            Base64Format.parse("url")


class TestCsvConvert:
    """Test CSV conversion."""

    def test_read_records(self, sample_csv):
        """Rows become header-keyed mappings."""
        records = read_records(str(sample_csv))

        assert records == [
            {"Name": "Lionel Messi", "Position": "Forward", "Nationality": "Argentina"},
            {"Name": "Virgil van Dijk", "Position": "Defender", "Nationality": "Netherlands"},
        ]

    def test_json_output(self, sample_csv, tmp_path):
        """JSON output holds the records."""
        output = tmp_path / "out.json"

        process_csv(str(sample_csv), str(output), OutputFormat.JSON)

        data = json.loads(output.read_text(encoding="utf-8"))
        assert data[0]["Name"] == "Lionel Messi"
        assert len(data) == 2

    def test_yaml_output(self, sample_csv, tmp_path):
        """YAML output holds the records."""
        output = tmp_path / "out.yaml"

        process_csv(str(sample_csv), str(output), OutputFormat.YAML)

        data = yaml.safe_load(output.read_text(encoding="utf-8"))
        assert data[1]["Position"] == "Defender"

    def test_custom_delimiter(self, tmp_path):
        """Delimiter is configurable."""
        path = tmp_path / "semi.csv"
        path.write_text("a;b\n1;2\n", encoding="utf-8")

        assert read_records(str(path), delimiter=";") == [{"a": "1", "b": "2"}]

    def test_format_parse_case_insensitive(self):
        """Output format names ignore case."""
        assert OutputFormat.parse("JSON") == OutputFormat.JSON
        assert OutputFormat.parse("Yaml") == OutputFormat.YAML
        with pytest.raises(ValueError):
            OutputFormat.parse("toml")


class TestInputHelpers:
    """Test file and stdin helpers."""

    def test_get_content_file(self, tmp_path):
        """Reads whole file as bytes."""
        path = tmp_path / "key"
        path.write_bytes(b"\x00\x01\x02")

        assert get_content(str(path)) == b"\x00\x01\x02"

    def test_get_content_stdin(self, monkeypatch):
        """"-" reads standard input."""
        fake_stdin = io.TextIOWrapper(io.BytesIO(b"from stdin"))
        monkeypatch.setattr("sys.stdin", fake_stdin)

        assert get_content("-") == b"from stdin"

    def test_get_reader_file(self, tmp_path):
        """Opens files in binary mode."""
        path = tmp_path / "msg"
        path.write_bytes(b"data")

        with get_reader(str(path)) as reader:
            assert reader.read() == b"data"

    def test_verify_file(self, tmp_path):
        """Existing files and "-" are accepted."""
        path = tmp_path / "exists"
        path.write_bytes(b"")

        assert verify_file(str(path)) == str(path)
        assert verify_file("-") == "-"
        with pytest.raises(argparse.ArgumentTypeError):
            verify_file(str(tmp_path / "missing"))

    def test_verify_path(self, tmp_path):
        """Only existing directories are accepted."""
        assert verify_path(str(tmp_path)) == tmp_path
        with pytest.raises(argparse.ArgumentTypeError):
            verify_path(str(tmp_path / "missing"))
