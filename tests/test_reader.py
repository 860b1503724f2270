import pytest

from ratechart import reader
from ratechart.errors import CsvReadError
from ratechart.reader import decode_csv_bytes, read_csv_rows


def test_header_and_rows():
    fieldnames, rows = read_csv_rows(b"Date,Rate\n2023-01-01,0.9234\n2023-01-02,0.9256\n")

    assert fieldnames == ["Date", "Rate"]
    assert rows == [
        {"Date": "2023-01-01", "Rate": "0.9234"},
        {"Date": "2023-01-02", "Rate": "0.9256"},
    ]


def test_empty_input():
    assert read_csv_rows(b"") == (None, [])


def test_header_only():
    fieldnames, rows = read_csv_rows(b"observation_date,DEXUSEU")

    assert fieldnames == ["observation_date", "DEXUSEU"]
    assert rows == []


def test_blank_lines_are_kept_as_rows():
    _, rows = read_csv_rows(b"Date,Rate\n2023-01-01,1.0\n\n2023-01-02,1.1\n")

    assert len(rows) == 3
    assert rows[1] == {"Date": None, "Rate": None}


def test_short_and_long_records():
    _, rows = read_csv_rows(b"Date,Rate\n2023-01-01\n2023-01-02,0,9256\n")

    assert rows[0] == {"Date": "2023-01-01", "Rate": None}
    # an unquoted comma decimal splits the cell; the surplus is dropped
    assert rows[1] == {"Date": "2023-01-02", "Rate": "0"}


def test_quoted_comma_decimal():
    _, rows = read_csv_rows(b'Date,Rate\n2023-01-01,"0,9234"\n')
    assert rows[0]["Rate"] == "0,9234"


def test_bom_and_crlf_are_normalized():
    text = decode_csv_bytes(b"\xef\xbb\xbfDate,Rate\r\n2023-01-01,1.0\r\n")
    assert text == "Date,Rate\n2023-01-01,1.0\n"


def test_undecodable_bytes_raise(monkeypatch):
    class _NoMatch:
        def best(self):
            return None

    monkeypatch.setattr(reader, "from_bytes", lambda raw: _NoMatch())

    with pytest.raises(CsvReadError, match="Failed to parse CSV"):
        read_csv_rows(b"\xff\xfe\xfa\xfb")
