import logging
import re
from pathlib import Path
from typing import List, Union

from .errors import EmptyInputError
from .logging_setup import get_logger
from .models import REQUIRED_COLUMNS, LoadResult, Record

logger = get_logger(__name__)

_LINE_SPLIT = re.compile(r"\r?\n")


def _log(diagnostics: List[str], level: int, msg: str) -> None:
    """Collect a diagnostic for the caller and forward it to the package logger."""
    diagnostics.append(msg)
    logger.log(level, msg)


class CsvLoader:
    """
    Plain comma-split CSV reader for transaction exports.

    Order:
      1) split lines, header from the first one
      2) skip fully blank rows
      3) skip rows whose field count differs from the header
      4) zip header -> trimmed values
    Quoted fields are not supported: a comma always separates fields.
    """

    def __init__(self, delimiter: str = ","):
        self.delimiter = delimiter

    def load(self, raw_text: str) -> LoadResult:
        if raw_text is None:
            raise EmptyInputError()

        text = raw_text.lstrip("\ufeff").strip()
        lines = _LINE_SPLIT.split(text) if text else []
        if len(lines) < 2:
            raise EmptyInputError()

        header = [h.strip() for h in lines[0].split(self.delimiter)]
        diagnostics: List[str] = []
        missing = [c for c in REQUIRED_COLUMNS if c not in header]
        if missing:
            _log(diagnostics, logging.WARNING, f"Header is missing expected column(s): {', '.join(missing)}")

        records: List[Record] = []
        skipped_blank = skipped_malformed = skipped_empty = 0

        for line_no, line in enumerate(lines[1:], start=2):
            row = line.split(self.delimiter)

            if "".join(row).strip() == "":
                skipped_blank += 1
                _log(diagnostics, logging.DEBUG, f"Skipping empty row at line {line_no}")
                continue

            if len(row) != len(header):
                skipped_malformed += 1
                _log(
                    diagnostics,
                    logging.WARNING,
                    f"Row {line_no} has {len(row)} fields, expected {len(header)}. Row data: {row}",
                )
                continue

            values = [v.strip() for v in row]
            if not any(values):
                skipped_empty += 1
                _log(diagnostics, logging.WARNING, f"Row {line_no} is empty or contains only empty fields. Row data: {row}")
                continue

            records.append(Record(data=dict(zip(header, values))))

        _log(
            diagnostics,
            logging.INFO,
            f"Parsed {len(records)} valid transactions out of {len(lines) - 1} data rows",
        )
        if not records:
            raise EmptyInputError()

        return LoadResult(
            header=header,
            records=records,
            skipped_blank=skipped_blank,
            skipped_malformed=skipped_malformed,
            skipped_empty=skipped_empty,
            diagnostics=diagnostics,
        )


loader = CsvLoader()


def load(raw_text: str) -> LoadResult:
    """Convenience wrapper around CsvLoader.load."""
    return loader.load(raw_text)


def decode_bytes(payload: bytes, encoding: str = "utf-8-sig") -> str:
    return payload.decode(encoding)


def read_text_file(path: Union[str, Path]) -> str:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(path)
    if path.suffix.lower() != ".csv":
        raise ValueError("Unsupported file type. Use .csv")
    return decode_bytes(path.read_bytes())


def read_uploaded_text(uploaded) -> str:
    """
    Read an uploaded file (Streamlit UploadedFile or any object with
    ``getvalue``/``read``) into text.
    """
    if uploaded is None:
        raise ValueError("No file was uploaded")
    if hasattr(uploaded, "getvalue"):
        payload = uploaded.getvalue()
    else:
        payload = uploaded.read()
    if isinstance(payload, str):
        return payload
    return decode_bytes(payload)
