"""
CSV Conversion

Reads a CSV file with a header row and writes its records as JSON or YAML.
"""

import csv
import json
from enum import Enum
from typing import Any, Dict, List

import structlog
import yaml

logger = structlog.get_logger()


class OutputFormat(Enum):
    JSON = "json"
    YAML = "yaml"

    @classmethod
    def parse(cls, text: str) -> "OutputFormat":
        """Case-insensitive parse of "json" / "yaml"."""
        try:
            return cls(text.lower())
        except ValueError:
            raise ValueError(f"Unsupported format {text}") from None

    def __str__(self) -> str:
        return self.value


def read_records(input_path: str, delimiter: str = ",") -> List[Dict[str, Any]]:
    """Load every row as a mapping of header name to cell value."""
    with open(input_path, newline="", encoding="utf-8") as f:
        return [dict(row) for row in csv.DictReader(f, delimiter=delimiter)]


def process_csv(
    input_path: str,
    output_path: str,
    format: OutputFormat,
    delimiter: str = ",",
) -> None:
    records = read_records(input_path, delimiter)

    if format == OutputFormat.JSON:
        content = json.dumps(records, indent=2, ensure_ascii=False)
    else:
        content = yaml.safe_dump(records, allow_unicode=True, sort_keys=False)

    with open(output_path, "w", encoding="utf-8") as f:
        f.write(content)

    logger.info("csv_converted", input=input_path, output=output_path,
                format=format.value, records=len(records))
