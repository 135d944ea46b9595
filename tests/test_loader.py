import io

import pytest

from spendview.aggregator import aggregate
from spendview.errors import EmptyInputError
from spendview.loader import CsvLoader, load, read_text_file, read_uploaded_text

HEADER = "Date,Description,Amount,Category"


def test_rows_become_records_in_input_order():
    text = f"{HEADER}\n2024-01-01, Coffee ,4.50,Food\n2024-01-02,Bus,2.00,Transit\n"

    result = load(text)

    assert result.header == ["Date", "Description", "Amount", "Category"]
    assert [r["Description"] for r in result.records] == ["Coffee", "Bus"]
    # all records share the header key set
    assert all(list(r.keys()) == result.header for r in result.records)
    assert result.skipped == 0


def test_header_only_or_empty_text_is_rejected():
    with pytest.raises(EmptyInputError):
        load("")
    with pytest.raises(EmptyInputError):
        load(HEADER + "\n")
    with pytest.raises(EmptyInputError):
        load("\n\n")


def test_ragged_row_is_skipped_with_diagnostic():
    text = f"{HEADER}\n2024-01-01,Coffee,4.50,Food\n2024-01-02,Bus,2.00\n2024-01-03,Tea,3.00,Food"

    result = load(text)

    assert len(result.records) == 2
    assert result.skipped_malformed == 1
    assert any("Row 3 has 3 fields, expected 4" in msg for msg in result.diagnostics)


def test_trailing_comma_counts_as_ragged():
    text = f"{HEADER}\n2024-01-01,Coffee,4.50,Food,\n2024-01-02,Bus,2.00,Transit"

    result = load(text)

    assert [r["Description"] for r in result.records] == ["Bus"]
    assert result.skipped_malformed == 1


def test_blank_rows_are_benign_skips():
    text = f"{HEADER}\n2024-01-01,Coffee,4.50,Food\n,,,\n   \n2024-01-02,Bus,2.00,Transit"

    result = load(text)

    assert len(result.records) == 2
    assert result.skipped_blank == 2
    assert result.skipped_malformed == 0


def test_crlf_and_bom_are_tolerated():
    text = "\ufeff" + HEADER + "\r\n2024-01-01,Coffee,4.50,Food\r\n"

    result = load(text)

    assert result.header[0] == "Date"
    assert result.records[0]["Category"] == "Food"


def test_extra_columns_are_kept():
    text = "Date,Description,Amount,Category,Account\n2024-01-01,Coffee,4.50,Food,Visa"

    result = load(text)

    assert result.records[0]["Account"] == "Visa"


def test_missing_required_column_is_reported_not_fatal():
    text = "Date,Amount,Category\n2024-01-01,4.50,Food"

    result = load(text)

    assert len(result.records) == 1
    assert result.records[0].get("Description") == ""
    assert any("Description" in msg for msg in result.diagnostics)


def test_every_row_skipped_means_no_transactions():
    with pytest.raises(EmptyInputError):
        load(f"{HEADER}\n1,2\n,,,")


def test_ragged_row_matches_row_removed():
    with_ragged = f"{HEADER}\n2024-01-01,Coffee,4.50,Food\n2024-01-05,oops,1.00\n2024-01-02,Bus,2.00,Transit"
    without = f"{HEADER}\n2024-01-01,Coffee,4.50,Food\n2024-01-02,Bus,2.00,Transit"

    assert aggregate(load(with_ragged).records) == aggregate(load(without).records)


def test_blank_row_matches_row_removed():
    with_blank = f"{HEADER}\n2024-01-01,Coffee,4.50,Food\n , , , \n2024-01-02,Bus,2.00,Transit"
    without = f"{HEADER}\n2024-01-01,Coffee,4.50,Food\n2024-01-02,Bus,2.00,Transit"

    assert aggregate(load(with_blank).records) == aggregate(load(without).records)


def test_custom_delimiter():
    result = CsvLoader(delimiter=";").load("Date;Description;Amount;Category\n2024-01-01;Coffee;4.50;Food")

    assert result.records[0]["Amount"] == "4.50"


def test_read_uploaded_text_decodes_bytes():
    uploaded = io.BytesIO(("\ufeff" + HEADER + "\n2024-01-01,Coffee,4.50,Food").encode("utf-8"))

    text = read_uploaded_text(uploaded)

    assert text.startswith("Date,")


def test_read_text_file(tmp_path):
    path = tmp_path / "tx.csv"
    path.write_text(f"{HEADER}\n2024-01-01,Coffee,4.50,Food\n", encoding="utf-8")

    assert "Coffee" in read_text_file(path)

    with pytest.raises(FileNotFoundError):
        read_text_file(tmp_path / "missing.csv")

    other = tmp_path / "tx.xlsx"
    other.write_bytes(b"")
    with pytest.raises(ValueError):
        read_text_file(other)
