from __future__ import annotations

from datetime import date
from decimal import Decimal
from pathlib import Path

import pytest

from sales_reader import Sale, SalesReader, Status


HEADER = "seller;manager;department;paymentMethod;status;saleDate;value"


def make_sale(
    seller: str = "A",
    status: Status = Status.COMPLETED,
    sale_date: date = date(2023, 1, 1),
    value: str = "100.00",
    *,
    manager: str = "M1",
    department: str = "Sales",
    payment_method: str = "PIX",
) -> Sale:
    return Sale(
        seller=seller,
        manager=manager,
        department=department,
        payment_method=payment_method,
        status=status,
        sale_date=sale_date,
        value=Decimal(value),
    )


@pytest.fixture
def scenario_sales() -> list[Sale]:
    return [
        make_sale("A", Status.COMPLETED, date(2023, 1, 1), "100.00", department="Toys"),
        make_sale("A", Status.COMPLETED, date(2023, 6, 15), "50.00", department="Books"),
        make_sale("B", Status.CANCELLED, date(2023, 3, 1), "30.00", department="Toys"),
    ]


@pytest.fixture
def scenario(scenario_sales) -> SalesReader:
    return SalesReader.from_sales(scenario_sales)


@pytest.fixture
def sample() -> SalesReader:
    # bundled sales_reader/data/sales.csv
    return SalesReader("sales.csv")


@pytest.fixture
def write_csv(tmp_path):
    def _write(*rows: str, header: str = HEADER, name: str = "sales.csv", encoding: str = "utf-8") -> Path:
        path = tmp_path / name
        path.write_text("\n".join([header, *rows]) + "\n", encoding=encoding)
        return path

    return _write
