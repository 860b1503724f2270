"""
CSV reading: bytes in, header plus dict rows out.

Responsibilities:
- encoding detection + decoding
- newline normalization
- header-keyed row parsing (blank lines are kept as rows)
"""

from __future__ import annotations

import csv
import io
import logging
from typing import Dict, List, Optional, Tuple

from charset_normalizer import from_bytes

from .errors import CsvReadError
from .rules import CSV_DELIMITER, SOURCE_ENCODING_FALLBACK

logger = logging.getLogger(__name__)

RawRow = Dict[str, Optional[str]]


def decode_csv_bytes(raw: bytes) -> str:
    """
    Decode upload bytes to text.

    Rules:
    - Detect encoding best-effort via charset-normalizer.
    - A UTF-8 BOM is stripped rather than kept as part of the first header.
    - If the detected encoding cannot decode the bytes, try UTF-8 once more.
    - CRLF/CR newlines become LF.
    """
    if not raw:
        return ""

    match = from_bytes(raw).best()
    decode_used = match.encoding if match is not None else SOURCE_ENCODING_FALLBACK
    if raw.startswith(b"\xef\xbb\xbf") and decode_used.lower().replace("-", "_") in ("utf_8", "utf8"):
        decode_used = "utf-8-sig"

    try:
        text = raw.decode(decode_used)
    except (UnicodeDecodeError, LookupError) as first_exc:
        try:
            text = raw.decode("utf-8-sig")
        except UnicodeDecodeError:
            raise CsvReadError(f"Failed to parse CSV: {first_exc}") from first_exc
        decode_used = "utf-8-sig"

    logger.debug("Decoded %d bytes as %s", len(raw), decode_used)
    return text.replace("\r\n", "\n").replace("\r", "\n")


def read_csv_rows(raw: bytes) -> Tuple[Optional[List[str]], List[RawRow]]:
    """
    Parse CSV bytes into (fieldnames, rows).

    The first record is the header. Each following record becomes a dict
    keyed by header; missing cells are None and surplus cells are dropped.
    Blank lines become rows of None. A single trailing newline does not
    produce an extra row. Returns (None, []) for empty input.
    """
    text = decode_csv_bytes(raw)
    if text.endswith("\n"):
        text = text[:-1]
    if not text.strip():
        return None, []

    try:
        records = list(csv.reader(io.StringIO(text, newline=""), delimiter=CSV_DELIMITER))
    except csv.Error as exc:
        raise CsvReadError(f"Failed to parse CSV: {exc}") from exc

    header = [name.strip() for name in records[0]]
    rows: List[RawRow] = []
    for record in records[1:]:
        rows.append({
            name: (record[i] if i < len(record) else None)
            for i, name in enumerate(header)
        })

    logger.debug("Read %d data rows with header %s", len(rows), header)
    return header, rows
