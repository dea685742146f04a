from __future__ import annotations

from datetime import date
from decimal import Decimal

import pandas as pd
import pytest

from sales_reader import SalesParseError, SalesReader, SalesSourceNotFoundError, Status
from sales_reader.clean import apply_aliases, clean, parse_value, standardise_columns
from sales_reader.ingest import DATA_DIR, resolve_source


def test_loads_rows_in_file_order(write_csv):
    path = write_csv(
        "A;M1;Toys;PIX;COMPLETED;01/01/2023;100.00",
        "B;M2;Books;BOLETO;CANCELLED;15/06/2023;30.5",
    )
    reader = SalesReader(path)
    first, second = reader.sales
    assert first.seller == "A"
    assert first.manager == "M1"
    assert first.department == "Toys"
    assert first.payment_method == "PIX"
    assert first.status is Status.COMPLETED
    assert first.sale_date == date(2023, 1, 1)
    assert first.value == Decimal("100.00")
    assert second.sale_date == date(2023, 6, 15)
    assert second.value == Decimal("30.5")


def test_sales_are_read_only(write_csv):
    reader = SalesReader(write_csv("A;M1;Toys;PIX;COMPLETED;01/01/2023;1"))
    assert isinstance(reader.sales, tuple)
    with pytest.raises(AttributeError):
        reader.sales[0].value = Decimal("2")


def test_header_only_file_loads_empty(write_csv):
    reader = SalesReader(write_csv())
    assert len(reader) == 0
    assert reader.total_of_completed_sales() == Decimal("0")


def test_portuguese_headers_and_whitespace(write_csv):
    path = write_csv(
        " Ana ; Rui ;Casa; PIX ; completed ;02/02/2022; 1.234,56 ",
        header="Vendedor;Gerente;Departamento;Forma de Pagamento;Status;Data Venda;Valor",
    )
    (sale,) = SalesReader(path).sales
    assert sale.seller == "Ana"
    assert sale.manager == "Rui"
    assert sale.payment_method == "PIX"
    assert sale.status is Status.COMPLETED
    assert sale.value == Decimal("1234.56")


def test_extra_columns_are_ignored_with_warning(write_csv):
    path = write_csv(
        "A;M1;Toys;PIX;COMPLETED;01/01/2023;10;north",
        header="seller;manager;department;paymentMethod;status;saleDate;value;region",
    )
    reader = SalesReader(path)
    assert len(reader) == 1
    assert reader.warnings == ["Ignored column(s): region"]


def test_custom_aliases(write_csv):
    path = write_csv(
        "A;M1;Toys;PIX;COMPLETED;01/01/2023;10",
        header="rep;boss;seller_dept;pay;state;when;amount_brl",
    )
    aliases = {
        "rep": "seller",
        "boss": "manager",
        "seller_dept": "department",
        "pay": "payment_method",
        "state": "status",
        "when": "sale_date",
        "amount_brl": "value",
    }
    (sale,) = SalesReader(path, aliases=aliases).sales
    assert sale.department == "Toys"
    assert sale.value == Decimal("10")


def test_other_delimiter(write_csv):
    path = write_csv(
        "A,M1,Toys,PIX,COMPLETED,01/01/2023,10.00",
        header="seller,manager,department,paymentMethod,status,saleDate,value",
    )
    assert len(SalesReader(path, delimiter=",")) == 1


# --- source errors ---

def test_missing_file(tmp_path):
    with pytest.raises(SalesSourceNotFoundError):
        SalesReader(tmp_path / "nope.csv")


def test_missing_file_is_a_file_not_found_error(tmp_path):
    with pytest.raises(FileNotFoundError):
        SalesReader(tmp_path / "nope.csv")


def test_empty_file(tmp_path):
    path = tmp_path / "empty.csv"
    path.write_text("", encoding="utf-8")
    with pytest.raises(SalesSourceNotFoundError):
        SalesReader(path)


def test_whitespace_only_file(tmp_path):
    path = tmp_path / "blank.csv"
    path.write_text("\n\n", encoding="utf-8")
    with pytest.raises(SalesSourceNotFoundError):
        SalesReader(path)


def test_bundled_resource_lookup(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert resolve_source("sales.csv") == DATA_DIR / "sales.csv"


def test_working_directory_wins_over_bundled(tmp_path, monkeypatch, write_csv):
    write_csv("A;M1;Toys;PIX;COMPLETED;01/01/2023;1")
    monkeypatch.chdir(tmp_path)
    assert resolve_source("sales.csv").resolve() == (tmp_path / "sales.csv").resolve()


# --- parse errors (all-or-nothing) ---

def test_bad_date_fails_whole_load(write_csv):
    path = write_csv(
        "A;M1;Toys;PIX;COMPLETED;01/01/2023;10",
        "B;M1;Toys;PIX;COMPLETED;2023-01-02;10",
    )
    with pytest.raises(SalesParseError) as exc:
        SalesReader(path)
    assert exc.value.row == 2
    assert "dd/mm/yyyy" in str(exc.value)


def test_impossible_date(write_csv):
    with pytest.raises(SalesParseError):
        SalesReader(write_csv("A;M1;Toys;PIX;COMPLETED;31/02/2023;10"))


def test_unknown_status(write_csv):
    with pytest.raises(SalesParseError) as exc:
        SalesReader(write_csv("A;M1;Toys;PIX;REFUNDED;01/01/2023;10"))
    assert exc.value.row == 1


def test_bad_value(write_csv):
    with pytest.raises(SalesParseError):
        SalesReader(write_csv("A;M1;Toys;PIX;COMPLETED;01/01/2023;ten"))


def test_missing_column(write_csv):
    path = write_csv(
        "A;M1;Toys;PIX;COMPLETED;01/01/2023",
        header="seller;manager;department;paymentMethod;status;saleDate",
    )
    with pytest.raises(SalesParseError, match="value"):
        SalesReader(path)


def test_empty_field(write_csv):
    with pytest.raises(SalesParseError) as exc:
        SalesReader(write_csv("A;M1;Toys;PIX;COMPLETED;01/01/2023;10", "B;;Toys;PIX;COMPLETED;01/01/2023;10"))
    assert exc.value.row == 2
    assert "manager" in str(exc.value)


def test_short_row(write_csv):
    with pytest.raises(SalesParseError):
        SalesReader(write_csv("A;M1;Toys;PIX;COMPLETED"))


def test_row_with_too_many_fields(write_csv):
    path = write_csv(
        "A;M1;Toys;PIX;COMPLETED;01/01/2023;10",
        "B;M1;Toys;PIX;COMPLETED;01/01/2023;10;x;y",
    )
    with pytest.raises(SalesParseError):
        SalesReader(path)


def test_ambiguous_columns():
    df = pd.DataFrame(columns=["date", "sale_date"])
    with pytest.raises(SalesParseError, match="sale_date"):
        apply_aliases(df)


# --- converters ---

@pytest.mark.parametrize(
    "raw, expected",
    [
        ("100", Decimal("100")),
        ("100.50", Decimal("100.50")),
        ("100,50", Decimal("100.50")),
        ("1.234,56", Decimal("1234.56")),
        ("1,234.56", Decimal("1234.56")),
        ("-7.25", Decimal("-7.25")),
        (" 42 ", Decimal("42")),
    ],
)
def test_parse_value(raw, expected):
    assert parse_value(raw) == expected


@pytest.mark.parametrize("raw", ["", "abc", "NaN", "Infinity", "1e5", "1.2.3"])
def test_parse_value_rejects(raw):
    with pytest.raises(ValueError):
        parse_value(raw)


def test_standardise_columns():
    df = pd.DataFrame(columns=["paymentMethod", " Sale Date ", "Valor"])
    assert list(standardise_columns(df).columns) == ["paymentmethod", "sale_date", "valor"]


def test_clean_returns_sales_and_warnings():
    df = pd.DataFrame(
        {
            "seller": ["A"],
            "manager": ["M"],
            "department": ["D"],
            "paymentMethod": ["PIX"],
            "status": ["CANCELLED"],
            "saleDate": ["09/10/2021"],
            "value": ["5"],
            "source_row": [1],
        }
    )
    result = clean(df)
    assert result.warnings == []
    (sale,) = result.sales
    assert sale.is_cancelled
    assert sale.sale_date == date(2021, 10, 9)
